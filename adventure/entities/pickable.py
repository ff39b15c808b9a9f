"""Pickable items: blink when bumped, taken on confirm."""

from enum import Enum
from typing import TYPE_CHECKING

from adventure.collaborators import Action
from adventure.config import BLINK_DELAY, TAKE_DELAY
from adventure.entities.base import ActiveEntity
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.room import Room

log = get_logger('pickable')


class PickableState(Enum):
    """Pickable lifecycle states. BLINKING ends with removal."""

    IDLE = "idle"
    BLINKING = "blinking"


class Pickable(ActiveEntity):
    """An item lying in a room.

    Bumping it puts the player in pickup mode: the item blinks and,
    after a short grace period, the pickup action takes it.
    """

    def __init__(self, room: 'Room', item_id: int, cx: int, cy: int):
        super().__init__(room, cx, cy, item_id=item_id)
        self.state = PickableState.IDLE
        self.blink_tiles = [self.ctx.content.empty_tile, self.tile_index]
        self.blink_delay = 0
        self.take_delay = 0

    @property
    def is_blinking(self) -> bool:
        return self.state == PickableState.BLINKING

    def on_pickup(self) -> None:
        """Called when the player takes the item. Item kinds override this."""
        pass

    def on_bump(self) -> None:
        self.state = PickableState.BLINKING
        self.take_delay = TAKE_DELAY
        if self.ctx.player is not None:
            self.ctx.player.enter_pickup_mode(self)
        log.debug("Offering %s at (%d, %d)", self.name, self.cx, self.cy)

    def on_frame(self) -> None:
        if self.state != PickableState.BLINKING:
            return

        self.blink_delay -= 1
        if self.blink_delay <= 0:
            tile = self.blink_tiles.pop(0)
            if self.visual is not None:
                self.ctx.renderer.set_tile(self.visual, tile)
            self.blink_tiles.append(tile)
            self.blink_delay = BLINK_DELAY

        if self.take_delay > 0:
            self.take_delay -= 1

        if self.ctx.player is None:
            return
        if self.take_delay <= 0 and self.ctx.input.is_action_pressed(Action.PICKUP):
            self.on_pickup()
            self.ctx.player.exit_pickup_mode()
            log.event('item_picked', item=self.item_id, cx=self.cx, cy=self.cy)
