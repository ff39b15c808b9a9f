"""Shared fixtures: a seeded context wired to headless collaborators."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

import pytest

from adventure.content import load_content
from adventure.context import GameContext
from adventure.headless import HeadlessRenderer, MapWorld, QueuedDialogue, ScriptedInput, SimplePlayer
from adventure.room import Quest, Room


@pytest.fixture(scope='session')
def content():
    """Bundled content tables."""
    return load_content()


@pytest.fixture
def ctx(content):
    return GameContext(
        HeadlessRenderer(),
        ScriptedInput(),
        QueuedDialogue(),
        world=MapWorld(),
        content=content,
        seed=1234,
    )


@pytest.fixture
def player(ctx):
    player = SimplePlayer(ctx, 0, 0)
    ctx.player = player
    return player


@pytest.fixture
def room(ctx, player):
    """Current room with the player standing at (0, 0)."""
    room = Room(ctx, quest=Quest('test'), name='test')
    room.enter()
    player.spawn()
    return room
