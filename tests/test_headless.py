"""
Tests for the headless collaborators.

Tests cover:
- HeadlessRenderer visuals, overlap order and drawing
- ScriptedInput and QueuedDialogue
- SimplePlayer walking and giving
- MapWorld lookups
"""

import pygame
import pytest

from adventure.collaborators import Action
from adventure.entities import Entity
from adventure.headless import HeadlessRenderer, MapWorld, QueuedDialogue, ScriptedInput
from adventure.room import Room


class TestHeadlessRenderer:

    def test_create_and_remove(self):
        renderer = HeadlessRenderer()
        visual = renderer.create(5, (32, 64), 1)
        assert visual.position == (32, 64)
        assert visual.rect.size == (renderer.tile_size, renderer.tile_size)
        renderer.remove(visual)
        assert not visual.alive
        assert renderer.visuals == []

    def test_overlap_in_candidate_order(self):
        renderer = HeadlessRenderer()
        shot = renderer.create(1, (40, 0), 1000)
        a = renderer.create(2, (32, 0), 1)
        b = renderer.create(3, (64, 0), 1)
        far = renderer.create(4, (200, 0), 1)
        assert renderer.overlap(shot, [b, far, a]) == [b, a]

    def test_overlap_skips_dead_visuals(self):
        renderer = HeadlessRenderer()
        shot = renderer.create(1, (0, 0), 1000)
        a = renderer.create(2, (0, 0), 1)
        renderer.remove(a)
        assert renderer.overlap(shot, [a, None]) == []

    def test_screen_position_uses_camera(self):
        renderer = HeadlessRenderer()
        visual = renderer.create(1, (96, 64), 1)
        renderer.camera = (32, 32)
        assert renderer.screen_position(visual) == (64, 32)

    def test_draw_flat_tiles(self):
        renderer = HeadlessRenderer()
        renderer.create(5, (32, 0), 1)
        renderer.create(0, (0, 0), 1)
        surface = pygame.Surface((96, 96))
        renderer.draw(surface)
        assert tuple(surface.get_at((40, 8)))[:3] == renderer.tile_color(5)
        assert tuple(surface.get_at((8, 8)))[:3] == (0, 0, 0)

    def test_draw_respects_camera(self):
        renderer = HeadlessRenderer()
        renderer.create(5, (32, 0), 1)
        renderer.camera = (32, 0)
        surface = pygame.Surface((96, 96))
        renderer.draw(surface)
        assert tuple(surface.get_at((8, 8)))[:3] == renderer.tile_color(5)

    def test_visuals_at(self):
        renderer = HeadlessRenderer()
        visual = renderer.create(5, (32, 0), 1)
        assert renderer.visuals_at(40, 8) == [visual]
        assert renderer.visuals_at(8, 8) == []


class TestScriptedInput:

    def test_press_and_release(self):
        source = ScriptedInput()
        assert not source.is_action_pressed(Action.PICKUP)
        source.press()
        assert source.is_action_pressed(Action.PICKUP)
        source.release(Action.PICKUP)
        assert not source.is_action_pressed(Action.PICKUP)


class TestQueuedDialogue:

    def test_callbacks_wait_for_dismissal(self):
        dialogue = QueuedDialogue()
        calls = []
        dialogue.show_speech('farmer', "first", lambda: calls.append(1))
        dialogue.show_speech('farmer', "second", lambda: calls.append(2))
        assert calls == []
        assert dialogue.dismiss().text == "first"
        assert calls == [1]
        dialogue.dismiss_all()
        assert calls == [1, 2]
        assert dialogue.dismiss() is None

    def test_auto_dismiss(self):
        dialogue = QueuedDialogue(auto_dismiss=True)
        calls = []
        dialogue.show_speech('farmer', "hello", lambda: calls.append(1))
        assert calls == [1]
        assert dialogue.pending == []
        assert dialogue.last_text == "hello"

    def test_notices(self):
        dialogue = QueuedDialogue()
        dialogue.explain("Locked.")
        assert dialogue.notices == ["Locked."]
        assert dialogue.last_text is None


class TestSimplePlayer:

    def test_walks_into_free_cell(self, room, player):
        assert player.step(1, 0) is None
        assert (player.cx, player.cy) == (1, 0)
        assert player.visual.position == (32, 0)

    def test_stays_inside_grid(self, room, player):
        assert player.step(-1, 0) is None
        assert (player.cx, player.cy) == (0, 0)

    def test_blocked_by_obstacle(self, room, player):
        wall = Entity(room, 9, 1, 0)
        assert player.step(1, 0) is wall
        assert (player.cx, player.cy) == (0, 0)

    def test_give_requires_inventory(self, room, player):
        assert player.give(21, 1, 0) is False

    def test_give_to_non_interactive(self, room, player):
        Entity(room, 9, 1, 0)
        player.inventory.append(21)
        assert player.give(21, 1, 0) is False
        assert player.inventory == [21]


class TestMapWorld:

    def test_add_and_lookup(self, ctx):
        world = MapWorld()
        cave = Room(ctx, name='cave')
        world.add_room(2, 3, cave)
        assert world.room_at(2, 3) is cave
        assert cave.map_coords == (2, 3)

    def test_unknown_coordinate(self):
        with pytest.raises(KeyError):
            MapWorld().room_at(9, 9)
