"""
Tests for wandering and shooting monsters.

Tests cover:
- Walk timer jitter and blocked neighbours
- Biting the player instead of stepping into them
- Damage, death and loot
- Line of sight, firing and cooldown
"""

import pytest

from adventure.entities import Entity, Pickable, ShootingMonster, WanderingMonster
from adventure.entities.monsters import VISION_DISTANCE
from adventure.room import Room


@pytest.fixture
def tusken(content):
    return content.monster_set('tusken')


@pytest.fixture
def trooper(content):
    return content.monster_set('scouttrooper')


def wall_in(room, cx, cy, leave_open=None):
    """Block the four neighbours of (cx, cy) except `leave_open`."""
    for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        cell = (cx + dx, cy + dy)
        if cell != leave_open:
            Entity(room, 9, *cell)


class TestWandering:

    def test_initial_state(self, room, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        assert monster.direction == 'down'
        assert monster.visual.tile == tusken.down
        assert monster.walk_timer == 8
        assert monster.alive

    def test_waits_for_walk_timer(self, room, ctx, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        for _ in range(7):
            ctx.tick()
        assert monster.cell == (5, 5)
        assert monster.walk_timer == 1

    def test_fully_blocked_stays_and_rearms(self, room, ctx, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        wall_in(room, 5, 5)
        for _ in range(50):
            monster.walk_timer = 1
            ctx.tick()
            assert monster.cell == (5, 5)
            assert 7 <= monster.walk_timer <= 9

    def test_grid_edge_counts_as_blocked(self, room, ctx, tusken):
        monster = WanderingMonster(room, tusken, 14, 14, walk_delay=8, hp=3, hit=1).enter_room()
        Entity(room, 9, 13, 14)
        Entity(room, 9, 14, 13)
        monster.walk_timer = 1
        ctx.tick()
        assert monster.cell == (14, 14)

    def test_steps_into_only_free_cell_and_turns(self, room, ctx, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        wall_in(room, 5, 5, leave_open=(6, 5))
        monster.walk_timer = 1
        ctx.tick()
        assert monster.cell == (6, 5)
        assert monster.direction == 'right'
        assert monster.visual.tile == tusken.right

    def test_bites_player_instead_of_moving(self, room, ctx, player, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=2).enter_room()
        wall_in(room, 5, 5, leave_open=(6, 5))
        player.go_absolute(6, 5)
        monster.walk_timer = 1
        ctx.tick()
        assert player.hp == 8
        assert monster.cell == (5, 5)
        assert monster.direction == 'down'

    def test_player_bump_gets_bitten(self, room, player, tusken):
        WanderingMonster(room, tusken, 1, 0, walk_delay=8, hp=3, hit=3).enter_room()
        player.step(1, 0)
        assert player.hp == 7


class TestDamage:

    def test_survives_partial_damage(self, room, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        monster.on_hit(2)
        assert monster.hp == 1
        assert monster in room

    def test_death_drops_loot_in_front(self, room, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=3, hit=1,
                                   loot=22).enter_room()
        monster.on_hit(3)
        assert not monster.alive
        assert monster not in room
        assert monster.visual is None
        loot = room.objects[0]
        assert isinstance(loot, Pickable)
        assert loot.item_id == 22
        assert loot.cell == (5, 5)
        assert loot.visual is not None

    def test_loot_chance_zero_drops_nothing(self, room, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=1, hit=1,
                                   loot=22, loot_chance=0.0).enter_room()
        monster.on_hit(1)
        assert room.objects == []

    def test_hits_after_death_ignored(self, room, tusken):
        monster = WanderingMonster(room, tusken, 5, 5, walk_delay=8, hp=1, hit=1,
                                   loot=22).enter_room()
        monster.on_hit(1)
        monster.on_hit(1)
        assert len(room.objects) == 1


class TestShooting:

    def test_fire_delay_defaults_to_difficulty(self, room, ctx, trooper):
        monster = ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1)
        assert monster.fire_delay == ctx.difficulty.fire_delay

    def test_fires_when_player_in_line(self, room, ctx, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        player.go_absolute(5, 6)
        monster.walk_timer = 1
        ctx.tick()

        assert monster.sees_player
        assert len(ctx.projectiles.active) == 1
        shot = ctx.projectiles.active[0]
        assert shot.direction == 'down'
        assert shot.shooter is monster
        assert monster.fire_timer == monster.fire_delay - 1
        assert monster.cell == (5, 2)
        assert monster.walk_timer == 1

    def test_cooldown_between_shots(self, room, ctx, player, trooper):
        ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1,
                        fire_delay=3).enter_room()
        player.go_absolute(5, 6)
        counts = []
        for _ in range(4):
            ctx.tick()
            counts.append(len(ctx.projectiles.active))
        assert counts == [1, 1, 1, 2]

    def test_shot_reaches_player(self, room, ctx, player, trooper):
        ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        player.go_absolute(5, 6)
        for _ in range(6):
            ctx.tick()
        assert player.hp == 10
        ctx.tick()
        assert player.hp == 10 - ctx.difficulty.projectile_damage
        assert len(ctx.renderer.effects) == 1

    def test_obstacle_blocks_sight(self, room, ctx, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        Entity(room, 9, 5, 4)
        player.go_absolute(5, 6)
        ctx.tick()
        assert not monster.sees_player
        assert ctx.projectiles.active == []

    def test_player_behind_not_seen(self, room, ctx, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        player.go_absolute(5, 1)
        assert not monster.look_for_player()

    def test_player_off_axis_not_seen(self, room, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        player.go_absolute(6, 6)
        assert not monster.look_for_player()

    def test_vision_distance(self, room, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 0, walk_delay=8, hp=2, hit=1).enter_room()
        player.go_absolute(5, VISION_DISTANCE)
        assert monster.look_for_player()
        player.go_absolute(5, VISION_DISTANCE + 1)
        assert not monster.look_for_player()

    def test_wanders_when_player_unseen(self, room, ctx, player, trooper):
        monster = ShootingMonster(room, trooper, 5, 5, walk_delay=8, hp=2, hit=1).enter_room()
        wall_in(room, 5, 5, leave_open=(4, 5))
        player.go_absolute(12, 12)
        monster.walk_timer = 1
        ctx.tick()
        assert monster.cell == (4, 5)
        assert monster.direction == 'left'


class TestWithoutPlayer:
    """A room may tick before a player is attached."""

    @pytest.fixture
    def empty_room(self, ctx):
        assert ctx.player is None
        room = Room(ctx, name='lair')
        room.enter()
        return room

    def test_wanderer_keeps_walking(self, empty_room, ctx, tusken):
        monster = WanderingMonster(empty_room, tusken, 5, 5, walk_delay=8, hp=3, hit=1).enter_room()
        wall_in(empty_room, 5, 5, leave_open=(6, 5))
        monster.walk_timer = 1
        ctx.tick()
        assert monster.cell == (6, 5)

    def test_bump_without_player_is_harmless(self, empty_room, tusken):
        monster = WanderingMonster(empty_room, tusken, 5, 5, walk_delay=8, hp=3, hit=1)
        monster.on_bump()
        assert monster.alive

    def test_shooter_sees_nothing(self, empty_room, ctx, trooper):
        monster = ShootingMonster(empty_room, trooper, 5, 2, walk_delay=8, hp=2, hit=1).enter_room()
        for _ in range(3):
            ctx.tick()
        assert not monster.sees_player
        assert ctx.projectiles.active == []
