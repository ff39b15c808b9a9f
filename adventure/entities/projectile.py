"""Projectiles: transient moving visuals that resolve one hit each.

Projectiles are not room members. They live in the ProjectileSystem,
which advances them once per tick after the room's frame pass.
"""

from typing import TYPE_CHECKING, Any, List, Optional

from adventure.config import (
    DIRECTIONS,
    EFFECT_DURATION_MS,
    EFFECT_EXPLOSION,
    VIEWPORT_SIDE_PX,
    Z_PROJECTILE,
)
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.collaborators import Visual
    from adventure.context import GameContext

log = get_logger('projectile')


class Projectile:
    """A shot travelling in a straight line.

    Attributes:
        visual: Handle moved every frame
        direction: 'up', 'down', 'left' or 'right'
        speed: Pixels per frame
        damage: Passed to the victim's on_hit
        shooter: Player or entity that fired it; never hit by it
    """

    def __init__(self, ctx: 'GameContext', visual: 'Visual', direction: str,
                 speed: int, damage: int, shooter: Any):
        self.ctx = ctx
        self.visual = visual
        self.direction = direction
        self.speed = speed
        self.damage = damage
        self.shooter = shooter
        self.alive = True

    def __repr__(self) -> str:
        return f"Projectile({self.direction}, at={self.visual.position}, damage={self.damage})"

    def remove(self) -> None:
        if self.alive:
            self.alive = False
            self.ctx.renderer.remove(self.visual)

    def _outside_viewport(self) -> bool:
        x, y = self.ctx.renderer.screen_position(self.visual)
        return not (0 <= x < VIEWPORT_SIDE_PX and 0 <= y < VIEWPORT_SIDE_PX)

    def _candidates(self) -> List['Visual']:
        candidates = []
        player = self.ctx.player
        if player is not None and player.visual is not None:
            candidates.append(player.visual)
        room = self.ctx.current_room
        if room is not None:
            for obj in room.objects:
                if obj.obstacle and obj.visual is not None:
                    candidates.append(obj.visual)
        return candidates

    def on_frame(self) -> None:
        # position from the previous frame decides whether the shot is gone
        if self._outside_viewport():
            self.remove()
            return

        dx, dy = DIRECTIONS[self.direction]
        renderer = self.ctx.renderer
        renderer.set_position(
            self.visual,
            self.visual.left + dx * self.speed,
            self.visual.top + dy * self.speed,
        )

        for victim in renderer.overlap(self.visual, self._candidates()):
            if victim.owner is self.shooter:
                continue
            renderer.play_effect(EFFECT_EXPLOSION, victim.position, EFFECT_DURATION_MS)
            target = victim.owner
            on_hit = getattr(target, 'on_hit', None)
            log.event('projectile_hit', target=repr(target), damage=self.damage)
            if on_hit is not None:
                on_hit(self.damage)
            self.remove()
            return


class ProjectileSystem:
    """Spawns projectiles and advances them each tick."""

    def __init__(self, ctx: 'GameContext'):
        self.ctx = ctx
        self._active: List[Projectile] = []

    @property
    def active(self) -> List[Projectile]:
        return [p for p in self._active if p.alive]

    def factory(self, name: str, direction: str, speed: int, damage: int,
                shooter: Any) -> Optional[Projectile]:
        """Fire a projectile from the shooter's visual.

        Args:
            name: Projectile family (e.g. 'red'); tile is '<name>_<direction>'
            direction: 'up', 'down', 'left' or 'right'
            speed: Pixels per frame
            damage: Passed to the victim's on_hit
            shooter: Player or entity firing
        """
        origin = getattr(shooter, 'visual', None)
        if origin is None:
            log.warning("%r has no visual; shot not fired", shooter)
            return None

        tile = self.ctx.content.projectile_tile(name, direction)
        visual = self.ctx.renderer.create(tile, origin.position, Z_PROJECTILE)
        projectile = Projectile(self.ctx, visual, direction, speed, damage, shooter)
        self._active.append(projectile)
        return projectile

    def update(self) -> None:
        """Advance every projectile that existed when the pass started."""
        for projectile in list(self._active):
            if projectile.alive:
                projectile.on_frame()
        self._active = [p for p in self._active if p.alive]

    def clear(self) -> None:
        """Drop every projectile (e.g. on room change)."""
        for projectile in self._active:
            projectile.remove()
        self._active.clear()
