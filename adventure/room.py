"""Room registry: membership, priority order and obstacle queries.

A room keeps two views of its members:

- ``objects``: priority order. Front is checked first by obstacle and
  collision scans. Changes only by append, removal and bring_to_front().
- a frame arena: insertion order, append-only during a tick. Removed
  members leave a tombstone that is compacted between ticks, so a frame
  pass never skips or revisits a member when others spawn or die.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from adventure.config import GRID_HEIGHT, GRID_WIDTH
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.context import GameContext
    from adventure.entities.base import Entity

log = get_logger('room')


@dataclass
class Quest:
    """A room's quest; characters mark it solved."""
    name: str = ""
    solved: bool = False


class Room:
    """A bounded grid of cells holding entities."""

    def __init__(
        self,
        ctx: 'GameContext',
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        quest: Optional[Quest] = None,
        name: str = "",
        map_coords: Optional[Tuple[int, int]] = None,
    ):
        """Initialize room.

        Args:
            ctx: Game context shared by all rooms
            width: Grid width in cells
            height: Grid height in cells
            quest: Optional quest solved by a character in this room
            name: Label used in logs
            map_coords: Position on the world map, if any
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Room size must be positive, got {width}x{height}")

        self.ctx = ctx
        self.width = width
        self.height = height
        self.quest = quest
        self.name = name
        self.map_coords = map_coords

        self.objects: List['Entity'] = []
        self._slots: List[Optional['Entity']] = []

    def __repr__(self) -> str:
        return f"Room({self.name!r}, {self.width}x{self.height}, {len(self.objects)} objects)"

    @property
    def is_current(self) -> bool:
        return self.ctx.current_room is self

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # =========================================================================
    # Membership
    # =========================================================================

    def require_in_bounds(self, obj: 'Entity', x: int, y: int) -> None:
        """Raise ValueError if `obj` may not occupy cell (x, y)."""
        if not self.in_bounds(x, y):
            log.error("Refusing %r at (%d, %d) outside %dx%d room %r",
                      obj, x, y, self.width, self.height, self.name)
            raise ValueError(
                f"{type(obj).__name__} at ({x}, {y}) is outside "
                f"room {self.name!r} ({self.width}x{self.height})"
            )

    def add_obj(self, obj: 'Entity') -> None:
        """Append an entity at the lowest priority.

        Raises:
            ValueError: If the entity's cell lies outside the grid
        """
        self.require_in_bounds(obj, obj.cx, obj.cy)
        self.objects.append(obj)
        self._slots.append(obj)

    def remove_obj(self, obj: 'Entity') -> None:
        """Remove an entity by identity."""
        for i, member in enumerate(self.objects):
            if member is obj:
                del self.objects[i]
                break
        for i, member in enumerate(self._slots):
            if member is obj:
                self._slots[i] = None
                break

    def bring_to_front(self, obj: 'Entity') -> None:
        """Give an entity first refusal in every ordered scan."""
        self.remove_from_order(obj)
        self.objects.insert(0, obj)

    def remove_from_order(self, obj: 'Entity') -> None:
        for i, member in enumerate(self.objects):
            if member is obj:
                del self.objects[i]
                return

    def __contains__(self, obj: object) -> bool:
        return any(member is obj for member in self.objects)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_obstacle(self, x: int, y: int, include_player: bool = True):
        """First obstacle occupying cell (x, y), or None.

        Args:
            x: Cell column
            y: Cell row
            include_player: Also report the player when standing there.
                Monster AI and line of sight pass False so the player's
                cell stays reachable.
        """
        player = self.ctx.player
        if include_player and player is not None and player.cx == x and player.cy == y:
            return player
        for obj in self.objects:
            if obj.obstacle and obj.cx == x and obj.cy == y:
                return obj
        return None

    def obstacles(self) -> List['Entity']:
        """Obstacle members in priority order."""
        return [obj for obj in self.objects if obj.obstacle]

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def enter(self) -> None:
        """Make this the current room and materialise every member."""
        self.ctx.bind_room(self)
        for obj in list(self.objects):
            if obj.room is self:
                obj.enter_room()
        log.debug("Entered %r", self)

    def leave(self) -> None:
        """Tear down every member's visual and release the current room."""
        for obj in list(self.objects):
            if obj.visual is not None:
                obj.leave_room()
        self.ctx.release_room(self)
        log.debug("Left %r", self)

    def update(self) -> None:
        """Run one frame pass in stable insertion order.

        Members spawned during the pass wait for the next one.
        """
        count = len(self._slots)
        for i in range(count):
            obj = self._slots[i]
            if obj is None or obj.room is not self or obj.visual is None:
                continue
            obj.on_frame()

    def compact(self) -> None:
        """Drop tombstones left by removals. Call between ticks only."""
        self._slots = [obj for obj in self._slots if obj is not None]

    @property
    def frame_order(self) -> List['Entity']:
        """Live members in frame-pass order."""
        return [obj for obj in self._slots if obj is not None]
