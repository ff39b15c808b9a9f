"""Doors: open on bump or with a key, optionally teleport the player."""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from adventure.config import Z_OVERLAY
from adventure.entities.base import ActiveEntity
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.collaborators import Visual
    from adventure.models import DoorSet
    from adventure.room import Room

log = get_logger('door')

TeleportTarget = Union['Room', Tuple[int, int]]


class DoorState(Enum):
    CLOSED = "closed"
    OPEN = "open"


class Door(ActiveEntity):
    """A door, possibly locked, possibly a teleporter.

    - Plain door: opens on bump and stops being an obstacle.
    - Keyed door: opens only when its key is used on it.
    - Teleporter: once open, bumping it moves the player to its target.
      It stays an obstacle; traversal is by teleport. A keyless teleporter
      closes again after each use, a keyed one stays open.
    """

    def __init__(
        self,
        room: 'Room',
        door_set: 'DoorSet',
        cx: int,
        cy: int,
        teleport_target: Optional[TeleportTarget] = None,
        required_key: Optional[int] = None,
        inroom_coords: Optional[Tuple[int, int]] = None,
    ):
        """Initialize door.

        Args:
            room: Room to place the door in
            door_set: Closed/open/overlay tiles
            cx: Grid column
            cy: Grid row
            teleport_target: World map (x, y) or a Room to teleport into
            required_key: Item id that unlocks the door
            inroom_coords: Cell the player arrives at in the target room
        """
        super().__init__(room, cx, cy, tile_index=door_set.closed)
        self.door_set = door_set
        self.teleport_target = teleport_target
        self.required_key = required_key
        self.inroom_coords = inroom_coords
        self.state = DoorState.CLOSED
        self.oversprite: Optional['Visual'] = None

    @property
    def opened(self) -> bool:
        return self.state == DoorState.OPEN

    def _key_name(self) -> str:
        return self.ctx.content.item_name(self.required_key)

    def _open(self) -> None:
        self.state = DoorState.OPEN
        self.update_tile(self.door_set.open)
        if self.teleport_target is None:
            self.obstacle = False
        log.event('door_opened', cx=self.cx, cy=self.cy, teleporter=self.teleport_target is not None)

    def _close(self) -> None:
        self.state = DoorState.CLOSED
        self.update_tile(self.door_set.closed)
        self.obstacle = True

    def _teleport(self) -> None:
        player = self.ctx.player
        target = self.teleport_target
        if isinstance(target, tuple):
            x, y = target
            if self.ctx.world is None:
                log.error("Door at (%d, %d) targets map (%d, %d) but no world is attached",
                          self.cx, self.cy, x, y)
                raise RuntimeError(
                    f"Door at ({self.cx}, {self.cy}) teleports to map coordinate "
                    f"({x}, {y}) but the game context has no world"
                )
            room = self.ctx.world.room_at(x, y)
            player.teleport_to_room(room, x, y, self.inroom_coords)
        else:
            player.teleport_to_room(target, None, None, self.inroom_coords)

    def on_bump(self) -> None:
        if self.opened and self.teleport_target is not None:
            self._teleport()
            if self.required_key is None:
                self._close()
        elif not self.opened and self.required_key is None:
            self._open()
        elif not self.opened:
            self.ctx.dialogue.explain(f"You need {self._key_name()} to open this door.")

    def on_item(self, item_id: int) -> bool:
        if not self.opened and item_id == self.required_key:
            self._open()
            self.ctx.dialogue.explain(
                f"You have used {self.ctx.content.item_name(item_id)} to open the door.")
            return True
        if self.required_key is not None:
            self.ctx.dialogue.explain(f"Wrong key, you need {self._key_name()}.")
        else:
            self.ctx.dialogue.explain("This door does not need a key.")
        return False

    # =========================================================================
    # Overlay
    # =========================================================================

    def enter_room(self) -> 'Door':
        super().enter_room()
        if self.door_set.overlay is not None and self.oversprite is None:
            self.oversprite = self.ctx.renderer.create(
                self.door_set.overlay, self.visual.position, Z_OVERLAY)
        return self

    def leave_room(self) -> None:
        super().leave_room()
        if self.oversprite is not None:
            self.ctx.renderer.remove(self.oversprite)
            self.oversprite = None

    def update_position(self, nx: Optional[int] = None, ny: Optional[int] = None) -> None:
        super().update_position(nx, ny)
        if self.oversprite is not None and self.visual is not None:
            self.ctx.renderer.set_position(self.oversprite, *self.visual.position)
