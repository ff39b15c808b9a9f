"""Base entity and capability mixins.

Every in-room thing is an Entity. Capabilities are orthogonal mixins:

- Movable: the player can push/pull it (on_move)
- Interactive: the player can bump it, give it items, hit it
  (on_bump / on_item / on_hit)
- frames: every entity may override on_frame(), called once per tick
  while it is entered in the current room

Absent capabilities default to no-ops.
"""

from typing import TYPE_CHECKING, Any, Optional

from adventure.config import Z_OBJECT, cell_to_pixels
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.collaborators import Visual
    from adventure.context import GameContext
    from adventure.room import Room

log = get_logger('entities')


class Entity:
    """Something occupying a cell of a room.

    Constructing an entity registers it at the back of its room. Its
    visual exists only while it is entered in the room.
    """

    def __init__(self, room: 'Room', tile_index: int, cx: int, cy: int):
        """Initialize entity.

        Args:
            room: Room the entity belongs to
            tile_index: Tile shown for the entity
            cx: Grid column
            cy: Grid row
        """
        self.tile_index = tile_index
        self.cx = cx
        self.cy = cy
        self.obstacle = True
        self.visual: Optional['Visual'] = None
        self.ctx: 'GameContext' = room.ctx
        self.room: Optional['Room'] = room
        room.add_obj(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tile={self.tile_index}, cell=({self.cx}, {self.cy}))"

    @property
    def cell(self):
        return (self.cx, self.cy)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def enter_room(self) -> 'Entity':
        """Create the visual at this entity's cell."""
        if self.visual is None:
            self.visual = self.ctx.renderer.create(
                self.tile_index, cell_to_pixels(self.cx, self.cy), Z_OBJECT, owner=self)
        return self

    def leave_room(self) -> None:
        """Destroy the visual; logical state is kept."""
        if self.visual is not None:
            self.visual.owner = None
            self.ctx.renderer.remove(self.visual)
            self.visual = None

    def remove(self, keep_visual: bool = False) -> None:
        """Detach from the room for good.

        Args:
            keep_visual: Leave the visual alone because another owner
                (e.g. the inventory) takes it over
        """
        if self.visual is not None and not keep_visual:
            self.leave_room()
        if self.room is not None:
            self.room.remove_obj(self)
        self.room = None

    def bring_to_front(self) -> 'Entity':
        """Give this entity highest priority for collision checks."""
        if self.room is not None:
            self.room.bring_to_front(self)
        return self

    # =========================================================================
    # Appearance
    # =========================================================================

    def update_tile(self, tile_index: int) -> None:
        self.tile_index = tile_index
        if self.visual is not None:
            self.ctx.renderer.set_tile(self.visual, tile_index)

    def update_position(self, nx: Optional[int] = None, ny: Optional[int] = None) -> None:
        """Move to (nx, ny); omitted coordinates keep their current value.

        Raises:
            ValueError: If the target cell lies outside the room
        """
        nx = nx if nx is not None else self.cx
        ny = ny if ny is not None else self.cy
        if self.room is not None:
            self.room.require_in_bounds(self, nx, ny)
        self.cx, self.cy = nx, ny
        if self.visual is not None:
            x, y = cell_to_pixels(self.cx, self.cy)
            self.ctx.renderer.set_position(self.visual, x, y)

    def on_frame(self) -> None:
        """Called once per tick while entered in the current room."""
        pass


class Movable:
    """Capability: the player can push and pull this entity."""

    movable = True
    moved = False

    def on_move(self, nx: int, ny: int) -> None:
        self.update_position(nx, ny)
        self.moved = True


class MovableEntity(Movable, Entity):
    """Scenery the player can push around."""
    pass


class HidingMovableEntity(MovableEntity):
    """Movable scenery with an item hidden underneath.

    The item is revealed where the entity stood the first time it moves.
    """

    def __init__(self, room: 'Room', tile_index: int, cx: int, cy: int,
                 hidden_item: Optional[int] = None):
        super().__init__(room, tile_index, cx, cy)
        self.hidden_item = hidden_item

    def on_move(self, nx: int, ny: int) -> None:
        if self.room is not None:
            self.room.require_in_bounds(self, nx, ny)
        if not self.moved and self.hidden_item is not None:
            from adventure.entities.pickable import Pickable

            Pickable(self.room, self.hidden_item, self.cx, self.cy).enter_room().bring_to_front()
            log.event('item_revealed', item=self.hidden_item, cx=self.cx, cy=self.cy)
        super().on_move(nx, ny)


class Interactive:
    """Capability: bump, receive items, take damage.

    Each hook is optional; concrete kinds override only what they need.
    """

    bump_enabled = True

    @property
    def can_bump(self) -> bool:
        """False once bump handling is switched off (passive obstacle)."""
        return self.bump_enabled

    def on_bump(self) -> None:
        """The player walked into this entity."""
        pass

    def on_item(self, item_id: int) -> bool:
        """The player offers an item.

        Returns:
            True if the item is consumed (removed from the inventory)
        """
        return False

    def on_hit(self, damage: int) -> None:
        """A projectile or attack connected."""
        pass


class ActiveEntity(Interactive, Entity):
    """Interactive entity, shown either as an item or as a raw tile.

    Pass `item_id` to take the tile (and display name) from the item
    table, or `tile_index` for plain tiles.
    """

    def __init__(self, room: 'Room', cx: int, cy: int,
                 item_id: Optional[int] = None, tile_index: Optional[int] = None):
        if item_id is not None:
            tile_index = room.ctx.content.item_tile(item_id)
        elif tile_index is None:
            raise ValueError("ActiveEntity needs an item_id or a tile_index")
        self.item_id = item_id
        super().__init__(room, tile_index, cx, cy)

    @property
    def name(self) -> str:
        if self.item_id is None:
            return type(self).__name__
        return self.ctx.content.item_name(self.item_id)


def is_interactive(obj: Any) -> bool:
    """Whether `obj` exposes the bump/item/hit hooks."""
    return isinstance(obj, Interactive)


def can_bump(obj: Any) -> bool:
    """Whether bumping into `obj` should reach its on_bump hook."""
    return is_interactive(obj) and obj.can_bump
