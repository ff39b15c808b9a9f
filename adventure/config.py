"""Configuration for the room encounter layer.

Contains grid and viewport dimensions, frame timings, direction vectors
and difficulty presets.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

# Room grid (cells)
GRID_WIDTH: int = 15
GRID_HEIGHT: int = 15
TILE_SIZE: int = 32  # pixels per cell side

# Visible window onto the room (cells / pixels)
VIEWPORT_SIDE: int = 9
VIEWPORT_SIDE_PX: int = VIEWPORT_SIDE * TILE_SIZE

# Tile shown when a blinking item is "off"
EMPTY_TILE: int = 0

# Frame timings
BLINK_DELAY: int = 3     # frames between blink on/off
TAKE_DELAY: int = 6      # frames of ignored input after a pickup starts

# Drawing order of visual handles
Z_OBJECT: int = 1
Z_PROJECTILE: int = 1000
Z_OVERLAY: int = 5000

EFFECT_EXPLOSION: str = "explosion"
EFFECT_DURATION_MS: int = 1000

# Direction name -> (dx, dy)
DIRECTIONS: Dict[str, Tuple[int, int]] = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}

# Order in which a wandering monster considers its neighbours
WALK_ORDER: List[str] = ['left', 'right', 'down', 'up']

# Walk timer jitter (fraction of walk_delay on each side)
WALK_JITTER: float = 0.125


@dataclass
class DifficultyPreset:
    """Combat tuning for ranged monsters.

    - easy: slow, weak shots
    - normal: reference tuning
    - hard: rapid fire
    """

    name: str
    fire_delay: int          # frames between shots
    projectile_speed: int    # pixels per frame
    projectile_damage: int   # passed to the victim's on_hit


DIFFICULTY_PRESETS: Dict[str, DifficultyPreset] = {
    'easy': DifficultyPreset(
        name='easy',
        fire_delay=20,
        projectile_speed=8,
        projectile_damage=1,
    ),
    'normal': DifficultyPreset(
        name='normal',
        fire_delay=10,
        projectile_speed=16,
        projectile_damage=2,
    ),
    'hard': DifficultyPreset(
        name='hard',
        fire_delay=5,
        projectile_speed=16,
        projectile_damage=3,
    ),
}


def get_difficulty_preset(name: str) -> DifficultyPreset:
    """Get difficulty preset by name.

    Args:
        name: Preset name (easy, normal, hard)

    Returns:
        DifficultyPreset for the given name, or 'normal' if not found
    """
    return DIFFICULTY_PRESETS.get(name, DIFFICULTY_PRESETS['normal'])


def get_difficulty_names() -> List[str]:
    """Get list of available difficulty preset names."""
    return list(DIFFICULTY_PRESETS.keys())


def cell_to_pixels(cx: int, cy: int) -> Tuple[int, int]:
    """Top-left pixel offset of a grid cell."""
    return (cx * TILE_SIZE, cy * TILE_SIZE)
