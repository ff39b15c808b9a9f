"""Monsters: random walkers that bite, and shooters with line of sight."""

import math
from typing import TYPE_CHECKING, List, Optional, Tuple

from adventure.config import DIRECTIONS, VIEWPORT_SIDE, WALK_JITTER, WALK_ORDER
from adventure.entities.base import ActiveEntity
from adventure.entities.pickable import Pickable
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.models import MonsterSet
    from adventure.room import Room

log = get_logger('monsters')

VISION_DISTANCE = VIEWPORT_SIDE


class WanderingMonster(ActiveEntity):
    """Wanders randomly around the room, biting the player on contact."""

    def __init__(
        self,
        room: 'Room',
        monster_set: 'MonsterSet',
        cx: int,
        cy: int,
        walk_delay: int,
        hp: int,
        hit: int,
        loot: Optional[int] = None,
        loot_chance: float = 1.0,
    ):
        """Initialize monster.

        Args:
            room: Room to place the monster in
            monster_set: Directional tiles
            cx: Grid column
            cy: Grid row
            walk_delay: Frames between steps (jittered by 12.5% each way)
            hp: Starting health
            hit: Damage dealt to the player per bite
            loot: Item id dropped on death, if any
            loot_chance: Probability that the loot drops
        """
        self.monster_set = monster_set
        self.direction = 'down'
        super().__init__(room, cx, cy, tile_index=monster_set.tile_for(self.direction))
        self.walk_delay = walk_delay
        self.walk_timer = walk_delay
        self.hp = hp
        self.max_hp = hp
        self.hit = hit
        self.loot = loot
        self.loot_chance = loot_chance

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def on_bump(self) -> None:
        if self.ctx.player is not None:
            self.ctx.player.on_hit(self.hit)

    def on_hit(self, damage: int) -> None:
        if self.room is None:
            return
        self.hp -= damage
        log.debug("%r took %d damage, %d hp left", self, damage, self.hp)
        if self.hp > 0:
            return

        if self.loot is not None and self.ctx.rng.random() < self.loot_chance:
            Pickable(self.room, self.loot, self.cx, self.cy).enter_room().bring_to_front()
        log.event('monster_killed', cx=self.cx, cy=self.cy, loot=self.loot)
        self.remove()

    def rearm_walk_timer(self) -> None:
        delay = self.walk_delay
        jitter = self.ctx.rng.random() * (delay * 2 * WALK_JITTER) - delay * WALK_JITTER
        self.walk_timer = delay + math.floor(jitter)

    def walk_candidates(self) -> List[Tuple[int, int, str]]:
        """Neighbour cells (x, y, direction) the monster may step into."""
        room = self.room
        candidates = []
        for direction in WALK_ORDER:
            dx, dy = DIRECTIONS[direction]
            nx, ny = self.cx + dx, self.cy + dy
            if not room.in_bounds(nx, ny):
                continue
            if room.get_obstacle(nx, ny, include_player=False):
                continue
            candidates.append((nx, ny, direction))
        return candidates

    def on_frame(self) -> None:
        self.walk_timer -= 1
        if self.walk_timer > 0:
            return

        candidates = self.walk_candidates()
        if candidates:
            nx, ny, direction = self.ctx.rng.choice(candidates)
            player = self.ctx.player
            if player is not None and player.cx == nx and player.cy == ny:
                self.on_bump()
            else:
                if direction != self.direction:
                    self.direction = direction
                    self.update_tile(self.monster_set.tile_for(direction))
                self.update_position(nx, ny)
        self.rearm_walk_timer()


class ShootingMonster(WanderingMonster):
    """Wanders like its parent, but fires at the player on sight.

    While the player is in sight the monster stands still.
    """

    def __init__(
        self,
        room: 'Room',
        monster_set: 'MonsterSet',
        cx: int,
        cy: int,
        walk_delay: int,
        hp: int,
        hit: int,
        loot: Optional[int] = None,
        loot_chance: float = 1.0,
        fire_delay: Optional[int] = None,
        projectile: str = 'red',
    ):
        super().__init__(room, monster_set, cx, cy, walk_delay, hp, hit, loot, loot_chance)
        preset = self.ctx.difficulty
        self.fire_delay = fire_delay or preset.fire_delay
        self.fire_timer = 0
        self.projectile = projectile
        self.sees_player = False

    def look_for_player(self) -> bool:
        """Trace along the facing direction until an obstacle or the player."""
        player = self.ctx.player
        if player is None:
            return False
        if player.cx != self.cx and player.cy != self.cy:
            return False

        dx, dy = DIRECTIONS[self.direction]
        x, y = self.cx, self.cy
        for _ in range(VISION_DISTANCE):
            x += dx
            y += dy
            if self.room.get_obstacle(x, y, include_player=False):
                return False
            if player.cx == x and player.cy == y:
                return True
        return False

    def on_frame(self) -> None:
        self.sees_player = self.look_for_player()
        if self.sees_player and self.fire_timer <= 0:
            self.fire_timer = self.fire_delay
            preset = self.ctx.difficulty
            self.ctx.projectiles.factory(
                self.projectile, self.direction,
                preset.projectile_speed, preset.projectile_damage, self)
            log.debug("%r fired %s", self, self.direction)
        if self.fire_timer > 0:
            self.fire_timer -= 1

        if not self.sees_player:
            super().on_frame()
