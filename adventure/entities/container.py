"""Containers: release their stored item the first time they are bumped."""

from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from adventure.entities.base import ActiveEntity
from adventure.entities.pickable import Pickable
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.models import ContainerSet
    from adventure.room import Room

log = get_logger('container')


class ContainerState(Enum):
    CLOSED = "closed"
    OPENED = "opened"


class Container(ActiveEntity):
    """A crate, chest or locker.

    Once it has released its item the container becomes a passive
    obstacle. An empty container keeps handling bumps; each one just
    repeats the (now idle) open transition.
    """

    def __init__(self, room: 'Room', container_set: 'ContainerSet', cx: int, cy: int,
                 stored_item: Optional[int] = None):
        """Initialize container.

        Args:
            room: Room to place the container in
            container_set: Closed/open tiles
            cx: Grid column
            cy: Grid row
            stored_item: Item id released on first bump, if any
        """
        super().__init__(room, cx, cy, tile_index=container_set.closed)
        self.container_set = container_set
        self.stored_item = stored_item
        self.state = ContainerState.CLOSED
        self.on_open: Optional[Callable[['Container'], None]] = None

    @property
    def opened(self) -> bool:
        return self.state == ContainerState.OPENED

    def on_bump(self) -> None:
        if not self.bump_enabled or self.opened:
            return

        self.state = ContainerState.OPENED
        self.update_tile(self.container_set.open)
        if self.stored_item is None:
            return

        item = Pickable(self.room, self.stored_item, self.cx, self.cy)
        item.enter_room().bring_to_front()
        item.on_bump()
        self.bump_enabled = False
        log.event('container_opened', item=self.stored_item, cx=self.cx, cy=self.cy)
        if self.on_open:
            self.on_open(self)
