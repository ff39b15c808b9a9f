"""
Boundary interfaces for the encounter layer's collaborators.

The encounter layer never draws, polls devices, moves the player or lays
out dialogue itself. It talks to these collaborators instead:

    Renderer  - visual handles (create/set_tile/set_position/remove),
                overlap tests and transient effects
    InputSource - per-frame action polling
    Player    - the player character (cell, visual, damage, pickup mode,
                teleport)
    Dialogue  - speech bubbles with completion callbacks, one-shot notices
    World     - room lookup by map coordinate

adventure.headless provides working implementations of all of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple

import pygame

if TYPE_CHECKING:
    from adventure.room import Room


class Action(Enum):
    """Input actions the encounter layer polls."""
    PICKUP = "pickup"   # confirm taking a blinking item (space / enter)


@dataclass(eq=False)
class Visual:
    """Handle to something the renderer draws.

    Attributes:
        tile: Tile index currently shown
        rect: Pixel rectangle in room coordinates
        z: Draw priority (higher is drawn later)
        owner: Entity or player this visual stands for, if any
    """
    tile: int
    rect: pygame.Rect
    z: int
    owner: Any = None
    alive: bool = True

    @property
    def left(self) -> int:
        return self.rect.left

    @property
    def top(self) -> int:
        return self.rect.top

    @property
    def position(self) -> Tuple[int, int]:
        return self.rect.topleft


class Renderer(ABC):
    """Visual collaborator.

    Subclasses must implement:
        - create(): Materialise a visual handle
        - remove(): Destroy a visual handle
        - play_effect(): Show a transient effect
    """

    def __init__(self, tile_size: int):
        self.tile_size = tile_size
        self.camera: Tuple[int, int] = (0, 0)  # room pixel shown at viewport (0, 0)

    @abstractmethod
    def create(
        self,
        tile: int,
        position: Tuple[int, int],
        z: int,
        owner: Any = None,
    ) -> Visual:
        """Create a visual showing `tile` with its top-left at `position`."""
        pass

    @abstractmethod
    def remove(self, visual: Visual) -> None:
        """Destroy a visual handle."""
        pass

    @abstractmethod
    def play_effect(self, kind: str, position: Tuple[int, int], duration_ms: int) -> None:
        """Play a transient effect (e.g. explosion) at a pixel position."""
        pass

    def set_tile(self, visual: Visual, tile: int) -> None:
        visual.tile = tile

    def set_position(self, visual: Visual, x: int, y: int) -> None:
        visual.rect.topleft = (x, y)

    def overlap(self, visual: Visual, candidates: Sequence[Visual]) -> List[Visual]:
        """Candidates whose rectangles overlap `visual`, in candidate order."""
        live = [c for c in candidates if c is not None and c.alive]
        indices = visual.rect.collidelistall([c.rect for c in live])
        return [live[i] for i in indices]

    def screen_position(self, visual: Visual) -> Tuple[int, int]:
        """Position of a visual relative to the viewport."""
        return (visual.rect.left - self.camera[0], visual.rect.top - self.camera[1])


class InputSource(ABC):
    """Input collaborator, polled once per frame."""

    @abstractmethod
    def is_action_pressed(self, action: Action) -> bool:
        """Whether `action` is currently asserted."""
        pass


class Player(ABC):
    """Player collaborator.

    Attributes:
        cx, cy: Current cell
        visual: The player's visual handle (owner is the player)
    """

    cx: int
    cy: int
    visual: Optional[Visual]

    @abstractmethod
    def on_hit(self, damage: int) -> None:
        """The player was hit by a monster or projectile."""
        pass

    @abstractmethod
    def enter_pickup_mode(self, entity: Any) -> None:
        """Start offering `entity` for pickup."""
        pass

    @abstractmethod
    def exit_pickup_mode(self) -> None:
        """The offered item was taken."""
        pass

    @abstractmethod
    def teleport_to_room(
        self,
        room: 'Room',
        x: Optional[int] = None,
        y: Optional[int] = None,
        inroom_coords: Optional[Tuple[int, int]] = None,
    ) -> None:
        """Move the player into another room."""
        pass


class Dialogue(ABC):
    """Dialogue/UI collaborator.

    Completion callbacks must fire before any later player input is
    accepted.
    """

    @abstractmethod
    def show_speech(
        self,
        speaker: Any,
        text: str,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        """Show `text` spoken by `speaker`; call `on_complete` once dismissed."""
        pass

    @abstractmethod
    def explain(self, message: str) -> None:
        """Show a one-shot transient notice."""
        pass


class World(ABC):
    """World/quest collaborator."""

    @abstractmethod
    def room_at(self, x: int, y: int) -> 'Room':
        """Room at a world map coordinate."""
        pass
