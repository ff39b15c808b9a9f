"""
Tests for quest characters.

Tests cover:
- Name substitution in texts
- Partial and final deliveries
- Payment after the thank-you is dismissed
- Unwanted items and the terminal SOLVED state
"""

import pytest

from adventure.entities import Behaviour, Character, CharacterState, Pickable

FLASK, CELL, SPANNER, KEY = 21, 22, 23, 27
FARMER = 90


def make_farmer(room, **overrides):
    behaviour = dict(
        desired_items=[FLASK, CELL],
        unsolved_text="Bring me %1 and I'll give you %2.",
        solved_text="All done.",
        thankyou_text="Thanks, take %2.",
        bringmore_text="Now I need %1.",
        notneeded_text="I don't need that.",
        payment_item=KEY,
    )
    behaviour.update(overrides)
    return Character(room, FARMER, 4, 3, Behaviour(**behaviour)).enter_room()


class TestBehaviour:

    def test_single_item_wrapped_in_list(self):
        assert Behaviour(desired_items=FLASK).desired_items == [FLASK]

    def test_duplicates_dropped_in_order(self):
        assert Behaviour(desired_items=[CELL, FLASK, CELL]).desired_items == [CELL, FLASK]


class TestSubstitution:

    def test_unsolved_bump_names_items_and_payment(self, room, ctx):
        farmer = make_farmer(room)
        farmer.on_bump()
        assert ctx.dialogue.last_text == "Bring me Water Flask and Power Cell and I'll give you Red Key Card."

    def test_single_item(self, room):
        farmer = make_farmer(room, desired_items=[FLASK])
        assert farmer.subst_names("%1") == "Water Flask"

    def test_three_items_repeat_second_name(self, room):
        farmer = make_farmer(room, desired_items=[FLASK, CELL, SPANNER])
        assert farmer.subst_names("%1") == "Water Flask, Power Cell and Power Cell"

    def test_no_payment_gives_empty_name(self, room):
        farmer = make_farmer(room, payment_item=None)
        assert farmer.subst_names("[%2]") == "[]"

    def test_no_text_no_speech(self, room, ctx):
        farmer = make_farmer(room, unsolved_text=None)
        farmer.on_bump()
        assert ctx.dialogue.history == []


class TestDelivery:

    def test_partial_delivery(self, room, ctx):
        farmer = make_farmer(room)
        assert farmer.on_item(FLASK) is True
        assert farmer.behaviour.desired_items == [CELL]
        assert farmer.state == CharacterState.UNSOLVED
        assert ctx.dialogue.last_text == "Now I need Power Cell."
        assert not room.quest.solved

    def test_final_delivery_solves_quest(self, room, ctx):
        farmer = make_farmer(room)
        farmer.on_item(FLASK)
        assert farmer.on_item(CELL) is True
        assert farmer.behaviour.desired_items == []
        assert farmer.state == CharacterState.SOLVED
        assert room.quest.solved
        assert ctx.dialogue.last_text == "Thanks, take Red Key Card."

    def test_payment_waits_for_dismissal(self, room, ctx, player):
        farmer = make_farmer(room)
        farmer.on_item(FLASK)
        farmer.on_item(CELL)
        assert not any(isinstance(obj, Pickable) for obj in room.objects)

        ctx.dialogue.dismiss_all()
        payment = room.objects[0]
        assert isinstance(payment, Pickable)
        assert payment.item_id == KEY
        assert payment.cell == farmer.cell
        assert payment.is_blinking
        assert player.pickup_target is payment

    def test_on_solve_after_payment(self, room, ctx):
        solved = []
        farmer = make_farmer(room, desired_items=[FLASK], on_solve=solved.append)
        farmer.on_item(FLASK)
        assert solved == []
        ctx.dialogue.dismiss_all()
        assert solved == [FLASK]

    def test_no_thankyou_pays_immediately(self, room):
        solved = []
        farmer = make_farmer(room, desired_items=[FLASK], thankyou_text=None,
                             on_solve=solved.append)
        farmer.on_item(FLASK)
        assert isinstance(room.objects[0], Pickable)
        assert solved == [FLASK]

    def test_on_bringmore_after_dismissal(self, room, ctx):
        calls = []
        farmer = make_farmer(room, on_bringmore=calls.append)
        farmer.on_item(CELL)
        assert calls == []
        ctx.dialogue.dismiss()
        assert calls == [CELL]

    def test_on_bringmore_without_text_runs_at_once(self, room):
        calls = []
        farmer = make_farmer(room, bringmore_text=None, on_bringmore=calls.append)
        farmer.on_item(FLASK)
        assert calls == [FLASK]

    def test_solved_bump_text(self, room, ctx):
        farmer = make_farmer(room, desired_items=[FLASK])
        farmer.on_item(FLASK)
        farmer.on_bump()
        assert ctx.dialogue.last_text == "All done."


class TestUnwantedItems:

    def test_unwanted_item_refused(self, room, ctx):
        farmer = make_farmer(room)
        assert farmer.on_item(SPANNER) is False
        assert farmer.behaviour.desired_items == [FLASK, CELL]
        assert ctx.dialogue.last_text == "I don't need that."

    def test_unwanted_without_text_is_silent(self, room, ctx):
        farmer = make_farmer(room, notneeded_text=None)
        assert farmer.on_item(SPANNER) is False
        assert ctx.dialogue.history == []

    @pytest.mark.parametrize('item', [FLASK, CELL, SPANNER])
    def test_solved_is_terminal(self, room, ctx, item):
        farmer = make_farmer(room, desired_items=[FLASK, CELL])
        farmer.on_item(FLASK)
        farmer.on_item(CELL)
        ctx.dialogue.dismiss_all()

        assert farmer.on_item(item) is False
        assert farmer.state == CharacterState.SOLVED
        assert farmer.solved

    def test_given_item_via_player(self, room, player):
        farmer = make_farmer(room, desired_items=[FLASK])
        player.go_absolute(3, 3)
        player.inventory.append(FLASK)
        assert player.give(FLASK, 1, 0) is True
        assert player.inventory == []
        assert farmer.solved
