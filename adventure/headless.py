"""
Headless collaborators.

Working in-process implementations of the collaborator interfaces, used
for simulation runs and tests:

    HeadlessRenderer - keeps visuals as pygame.Rect records; can draw
                       them as flat coloured tiles onto a Surface
    ScriptedInput    - actions pressed/released by code
    QueuedDialogue   - speech waits in a queue until dismissed
    SimplePlayer     - cell, health, inventory, pickup mode, teleport
    MapWorld         - rooms keyed by world map coordinate
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set, Tuple

import pygame

from adventure.collaborators import (
    Action,
    Dialogue,
    InputSource,
    Player,
    Renderer,
    Visual,
    World,
)
from adventure.config import TILE_SIZE, Z_OBJECT, cell_to_pixels
from adventure.entities.base import can_bump, is_interactive
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.context import GameContext
    from adventure.room import Room

log = get_logger('headless')


@dataclass
class Effect:
    """A transient effect that was played."""
    kind: str
    position: Tuple[int, int]
    duration_ms: int


class HeadlessRenderer(Renderer):
    """Renderer that only tracks visuals."""

    def __init__(self, tile_size: int = TILE_SIZE):
        super().__init__(tile_size)
        self.visuals: List[Visual] = []
        self.effects: List[Effect] = []

    def create(self, tile: int, position: Tuple[int, int], z: int, owner: Any = None) -> Visual:
        rect = pygame.Rect(position[0], position[1], self.tile_size, self.tile_size)
        visual = Visual(tile=tile, rect=rect, z=z, owner=owner)
        self.visuals.append(visual)
        return visual

    def remove(self, visual: Visual) -> None:
        visual.alive = False
        self.visuals = [v for v in self.visuals if v is not visual]

    def play_effect(self, kind: str, position: Tuple[int, int], duration_ms: int) -> None:
        self.effects.append(Effect(kind, position, duration_ms))

    def visuals_at(self, x: int, y: int) -> List[Visual]:
        """Visuals whose rectangle contains pixel (x, y)."""
        return [v for v in self.visuals if v.rect.collidepoint(x, y)]

    @staticmethod
    def tile_color(tile: int) -> Tuple[int, int, int]:
        """Stable flat colour for a tile index."""
        return ((tile * 97) % 200 + 55, (tile * 57) % 200 + 55, (tile * 31) % 200 + 55)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw every visual as a flat tile, lowest z first."""
        for visual in sorted(self.visuals, key=lambda v: v.z):
            if visual.tile == 0:
                continue
            rect = visual.rect.move(-self.camera[0], -self.camera[1])
            pygame.draw.rect(surface, self.tile_color(visual.tile), rect)


class ScriptedInput(InputSource):
    """Input whose pressed actions are set by code."""

    def __init__(self):
        self._pressed: Set[Action] = set()

    def press(self, action: Action = Action.PICKUP) -> None:
        self._pressed.add(action)

    def release(self, action: Action = Action.PICKUP) -> None:
        self._pressed.discard(action)

    def is_action_pressed(self, action: Action) -> bool:
        return action in self._pressed


@dataclass
class Speech:
    speaker: Any
    text: str
    on_complete: Optional[Callable[[], None]] = None


class QueuedDialogue(Dialogue):
    """Speech waits until dismiss() is called; notices are just recorded.

    Args:
        auto_dismiss: Dismiss every speech as soon as it is shown
    """

    def __init__(self, auto_dismiss: bool = False):
        self.auto_dismiss = auto_dismiss
        self.pending: List[Speech] = []
        self.history: List[Speech] = []
        self.notices: List[str] = []

    def show_speech(self, speaker: Any, text: str,
                    on_complete: Optional[Callable[[], None]] = None) -> None:
        speech = Speech(speaker, text, on_complete)
        self.history.append(speech)
        log.info("%s says: %s", getattr(speaker, 'name', speaker), text)
        if self.auto_dismiss:
            if on_complete:
                on_complete()
        else:
            self.pending.append(speech)

    def explain(self, message: str) -> None:
        self.notices.append(message)
        log.info("Notice: %s", message)

    def dismiss(self) -> Optional[Speech]:
        """Dismiss the oldest pending speech and run its callback."""
        if not self.pending:
            return None
        speech = self.pending.pop(0)
        if speech.on_complete:
            speech.on_complete()
        return speech

    def dismiss_all(self) -> None:
        while self.pending:
            self.dismiss()

    @property
    def last_text(self) -> Optional[str]:
        return self.history[-1].text if self.history else None


class SimplePlayer(Player):
    """A minimal player: walks, bumps, gives items, takes pickups."""

    def __init__(self, ctx: 'GameContext', cx: int = 0, cy: int = 0, hp: int = 10,
                 tile_index: int = 1):
        self.ctx = ctx
        self.cx = cx
        self.cy = cy
        self.hp = hp
        self.tile_index = tile_index
        self.visual: Optional[Visual] = None
        self.inventory: List[int] = []
        self.pickup_target: Any = None
        self.teleports: List[Tuple[Any, Optional[int], Optional[int], Any]] = []

    def __repr__(self) -> str:
        return f"SimplePlayer(cell=({self.cx}, {self.cy}), hp={self.hp})"

    def spawn(self) -> 'SimplePlayer':
        """Create the player's visual in the current room."""
        if self.visual is None:
            self.visual = self.ctx.renderer.create(
                self.tile_index, cell_to_pixels(self.cx, self.cy), Z_OBJECT, owner=self)
        return self

    def go_absolute(self, cx: int, cy: int) -> None:
        self.cx, self.cy = cx, cy
        if self.visual is not None:
            self.ctx.renderer.set_position(self.visual, *cell_to_pixels(cx, cy))

    # =========================================================================
    # Player collaborator
    # =========================================================================

    def on_hit(self, damage: int) -> None:
        self.hp -= damage
        log.info("Player hit for %d, %d hp left", damage, self.hp)

    def enter_pickup_mode(self, entity: Any) -> None:
        self.pickup_target = entity

    def exit_pickup_mode(self) -> None:
        """Move the offered item into the inventory."""
        item = self.pickup_target
        self.pickup_target = None
        if item is None:
            return
        if item.item_id is not None:
            self.inventory.append(item.item_id)
        item.remove()

    def teleport_to_room(self, room: 'Room', x: Optional[int] = None, y: Optional[int] = None,
                         inroom_coords: Optional[Tuple[int, int]] = None) -> None:
        self.teleports.append((room, x, y, inroom_coords))
        current = self.ctx.current_room
        if current is not None and current is not room:
            current.leave()
        if current is not room:
            room.enter()
        if inroom_coords is not None:
            self.go_absolute(*inroom_coords)

    # =========================================================================
    # Actions
    # =========================================================================

    def step(self, dx: int, dy: int) -> Any:
        """Walk one cell, bumping whatever blocks the way.

        Returns:
            The obstacle that was bumped, or None if the player moved
        """
        room = self.ctx.current_room
        nx, ny = self.cx + dx, self.cy + dy
        if room is None or not room.in_bounds(nx, ny):
            return None
        obstacle = room.get_obstacle(nx, ny, include_player=False)
        if obstacle is None:
            self.go_absolute(nx, ny)
            return None
        if can_bump(obstacle):
            obstacle.on_bump()
        return obstacle

    def give(self, item_id: int, dx: int, dy: int) -> bool:
        """Offer an inventory item to the entity in the adjacent cell."""
        room = self.ctx.current_room
        if room is None or item_id not in self.inventory:
            return False
        target = room.get_obstacle(self.cx + dx, self.cy + dy, include_player=False)
        if not is_interactive(target):
            return False
        consumed = target.on_item(item_id)
        if consumed:
            self.inventory.remove(item_id)
        return consumed


class MapWorld(World):
    """Rooms keyed by world map coordinate."""

    def __init__(self, rooms: Optional[Dict[Tuple[int, int], 'Room']] = None):
        self.rooms: Dict[Tuple[int, int], 'Room'] = dict(rooms or {})

    def add_room(self, x: int, y: int, room: 'Room') -> None:
        self.rooms[(x, y)] = room
        room.map_coords = (x, y)

    def room_at(self, x: int, y: int) -> 'Room':
        return self.rooms[(x, y)]
