"""
Static content models for the encounter layer.

Read-only tables describing items and the appearance sets of doors,
containers and monsters. Loaded once at setup and never mutated by
entities.

Usage:
    >>> from adventure.models import ItemDef, DoorSet
    >>> key = ItemDef(name="Red Key Card", tile_index=27)
    >>> door = DoorSet(closed=40, open=41, overlay=42)
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from adventure.config import DIRECTIONS, EMPTY_TILE


class ItemDef(BaseModel):
    """An item that can lie in a room, be carried or be asked for.

    Attributes:
        name: Display name used in speech and notices
        tile_index: Tile drawn for the item
    """
    name: str = Field(..., min_length=1)
    tile_index: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class DoorSet(BaseModel):
    """Tiles for a door: closed, open and an optional overlay.

    The overlay is drawn above everything else at the door's cell
    (e.g. a lintel the player walks under).
    """
    closed: int = Field(..., ge=0)
    open: int = Field(..., ge=0)
    overlay: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)


class ContainerSet(BaseModel):
    """Tiles for a container: closed and opened."""
    closed: int = Field(..., ge=0)
    open: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class MonsterSet(BaseModel):
    """Directional tiles for a monster."""
    up: int = Field(..., ge=0)
    down: int = Field(..., ge=0)
    left: int = Field(..., ge=0)
    right: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    def tile_for(self, direction: str) -> int:
        """Tile facing the given direction."""
        return getattr(self, direction)


class ContentTables(BaseModel):
    """All static content the encounter layer reads.

    Attributes:
        empty_tile: Tile shown when a blinking item is off
        items: Item id -> definition
        door_sets: Name -> door tiles
        container_sets: Name -> container tiles
        monster_sets: Name -> monster tiles
        projectiles: '<family>_<direction>' -> tile
    """
    empty_tile: int = Field(default=EMPTY_TILE, ge=0)
    items: Dict[int, ItemDef] = Field(default_factory=dict)
    door_sets: Dict[str, DoorSet] = Field(default_factory=dict)
    container_sets: Dict[str, ContainerSet] = Field(default_factory=dict)
    monster_sets: Dict[str, MonsterSet] = Field(default_factory=dict)
    projectiles: Dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator('projectiles')
    @classmethod
    def validate_projectile_keys(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Projectile keys must end with a known direction."""
        for key in v:
            _, _, direction = key.rpartition('_')
            if direction not in DIRECTIONS:
                raise ValueError(
                    f"Projectile tile '{key}' must be named <family>_<direction>, "
                    f"direction one of {sorted(DIRECTIONS)}"
                )
        return v

    @model_validator(mode='after')
    def validate_projectile_families(self) -> 'ContentTables':
        """Every projectile family must define all four directions."""
        families = {key.rpartition('_')[0] for key in self.projectiles}
        for family in families:
            missing = [d for d in DIRECTIONS if f"{family}_{d}" not in self.projectiles]
            if missing:
                raise ValueError(f"Projectile family '{family}' missing directions: {missing}")
        return self
