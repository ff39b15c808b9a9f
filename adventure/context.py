"""Explicit game context shared by rooms and entities.

Holds the collaborators, the content tables, the seeded random source
and the current room. The current room is bound by Room.enter() and
released by Room.leave().
"""

import random
from typing import TYPE_CHECKING, Optional

from adventure.config import DifficultyPreset, get_difficulty_preset
from adventure.content import Content, load_content
from adventure.entities.projectile import ProjectileSystem
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.collaborators import Dialogue, InputSource, Player, Renderer, World
    from adventure.room import Room

log = get_logger('context')


class GameContext:
    """Everything an entity may reach besides its own room."""

    def __init__(
        self,
        renderer: 'Renderer',
        input_source: 'InputSource',
        dialogue: 'Dialogue',
        player: Optional['Player'] = None,
        world: Optional['World'] = None,
        content: Optional[Content] = None,
        seed: Optional[int] = None,
        difficulty: str = 'normal',
    ):
        """Initialize context.

        Args:
            renderer: Visual collaborator
            input_source: Input collaborator
            dialogue: Dialogue/UI collaborator
            player: Player collaborator (may be attached later)
            world: World map collaborator, needed by map-coordinate teleports
            content: Content tables (default: bundled content file)
            seed: Seed for the random source driving monster AI
            difficulty: Difficulty preset name
        """
        self.renderer = renderer
        self.input = input_source
        self.dialogue = dialogue
        self.player = player
        self.world = world
        self.content = content if content is not None else load_content()
        self.rng = random.Random(seed)
        self.difficulty: DifficultyPreset = get_difficulty_preset(difficulty)
        self.projectiles = ProjectileSystem(self)
        self.current_room: Optional['Room'] = None
        self.frame = 0

    def bind_room(self, room: 'Room') -> None:
        if self.current_room is not None and self.current_room is not room:
            log.warning("Binding %r while %r is still current", room, self.current_room)
        self.current_room = room

    def release_room(self, room: 'Room') -> None:
        if self.current_room is room:
            self.current_room = None
            self.projectiles.clear()

    def tick(self) -> None:
        """Run one frame: room pass, projectile pass, then compaction."""
        self.frame += 1
        room = self.current_room
        if room is not None:
            room.update()
        self.projectiles.update()
        if room is not None:
            room.compact()
