"""
Loading of static content tables.

Content lives in a YAML file validated against the models in
adventure.models. Missing or malformed tables fail fast here, at setup
time, instead of surfacing mid-game.

Example content file:
    empty_tile: 0
    items:
      27:
        name: "Red Key Card"
        tile_index: 27
    door_sets:
      blast_door: {closed: 40, open: 41, overlay: 42}
    container_sets:
      crate: {closed: 50, open: 51}
    monster_sets:
      scout: {up: 60, down: 61, left: 62, right: 63}
    projectiles:
      red_up: 70
      red_down: 71
      red_left: 72
      red_right: 73
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from adventure.logging import get_logger
from adventure.models import (
    ContainerSet,
    ContentTables,
    DoorSet,
    ItemDef,
    MonsterSet,
)

log = get_logger('content')

DEFAULT_CONTENT_PATH = Path(__file__).parent / 'data' / 'content.yaml'


class ContentError(Exception):
    """Raised when content tables are missing, malformed or incomplete."""
    pass


def _load_data_file(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from disk."""
    if not path.exists():
        raise ContentError(f"No content file found: {path}")

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ContentError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ContentError(f"Content file {path} must contain a mapping, got {type(data).__name__}")
    return data


def parse_content(data: Dict[str, Any], source: Optional[Path] = None) -> 'Content':
    """Validate raw content data.

    Args:
        data: Parsed YAML/JSON mapping
        source: Optional path for error messages

    Raises:
        ContentError: If the data does not match the content models
    """
    try:
        tables = ContentTables.model_validate(data)
    except ValidationError as e:
        where = f" in {source}" if source else ""
        log.error("Content validation failed%s: %s", where, e)
        raise ContentError(f"Content validation error{where}: {e}") from e
    return Content(tables)


def load_content(path: Optional[Union[str, Path]] = None) -> 'Content':
    """Load content tables from YAML.

    Args:
        path: Content file (default: bundled data/content.yaml)

    Raises:
        ContentError: If the file is missing or invalid
    """
    path = Path(path) if path else DEFAULT_CONTENT_PATH
    content = parse_content(_load_data_file(path), source=path)
    log.info("Loaded %d items from %s", len(content.tables.items), path)
    return content


class Content:
    """Lookups over validated content tables.

    Unknown ids raise ContentError: a room referencing content that does
    not exist is a setup error.
    """

    def __init__(self, tables: ContentTables):
        self._tables = tables

    @property
    def tables(self) -> ContentTables:
        return self._tables

    @property
    def empty_tile(self) -> int:
        return self._tables.empty_tile

    def item(self, item_id: int) -> ItemDef:
        try:
            return self._tables.items[item_id]
        except KeyError:
            raise ContentError(f"Unknown item id: {item_id}") from None

    def item_name(self, item_id: int) -> str:
        return self.item(item_id).name

    def item_tile(self, item_id: int) -> int:
        return self.item(item_id).tile_index

    def door_set(self, name: str) -> DoorSet:
        return self._lookup(self._tables.door_sets, name, 'door set')

    def container_set(self, name: str) -> ContainerSet:
        return self._lookup(self._tables.container_sets, name, 'container set')

    def monster_set(self, name: str) -> MonsterSet:
        return self._lookup(self._tables.monster_sets, name, 'monster set')

    def projectile_tile(self, family: str, direction: str) -> int:
        return self._lookup(self._tables.projectiles, f"{family}_{direction}", 'projectile tile')

    @staticmethod
    def _lookup(table: Dict[str, Any], name: str, kind: str) -> Any:
        try:
            return table[name]
        except KeyError:
            raise ContentError(f"Unknown {kind}: {name!r}") from None
