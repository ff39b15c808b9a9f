"""In-room entities."""

from .base import (
    ActiveEntity,
    Entity,
    HidingMovableEntity,
    Interactive,
    Movable,
    MovableEntity,
    can_bump,
    is_interactive,
)
from .character import Behaviour, Character, CharacterState
from .container import Container, ContainerState
from .door import Door, DoorState
from .monsters import ShootingMonster, WanderingMonster
from .pickable import Pickable, PickableState
from .projectile import Projectile, ProjectileSystem

__all__ = [
    'Entity', 'Movable', 'MovableEntity', 'HidingMovableEntity',
    'Interactive', 'ActiveEntity', 'is_interactive', 'can_bump',
    'Behaviour', 'Character', 'CharacterState',
    'Container', 'ContainerState',
    'Door', 'DoorState',
    'Pickable', 'PickableState',
    'WanderingMonster', 'ShootingMonster',
    'Projectile', 'ProjectileSystem',
]
