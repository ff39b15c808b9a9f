"""
Room encounter layer for a grid adventure game.

Entities living in a room (scenery, doors, containers, pickups,
characters, monsters, projectiles), how they react to the player and how
they advance each frame.

Usage:
    >>> from adventure import GameContext, Room
    >>> from adventure.headless import HeadlessRenderer, ScriptedInput, QueuedDialogue, SimplePlayer
    >>> ctx = GameContext(HeadlessRenderer(), ScriptedInput(), QueuedDialogue(), seed=1)
    >>> room = Room(ctx, name="cantina")
"""

from .collaborators import Action, Dialogue, InputSource, Player, Renderer, Visual, World
from .content import Content, ContentError, load_content
from .context import GameContext
from .room import Quest, Room

__version__ = "1.0.0"

__all__ = [
    'Action', 'Dialogue', 'InputSource', 'Player', 'Renderer', 'Visual', 'World',
    'Content', 'ContentError', 'load_content',
    'GameContext',
    'Quest', 'Room',
]
