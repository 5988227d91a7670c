"""Basic geometry and the positioned game objects built on it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import MAX_TILE, TILE_HEIGHT, TILE_WIDTH


@dataclass
class Rect:
    """An axis-aligned rectangle with integer corner and size."""

    x: int
    y: int
    w: int
    h: int

    def right(self) -> int:
        return self.x + self.w

    def bottom(self) -> int:
        return self.y + self.h


class Flip(Enum):
    """How a sprite is mirrored when drawn."""

    NONE = 0
    HORIZONTAL = 1


class Entity:
    """Something with a position, a sprite frame size and a facing."""

    def __init__(self, x: float, y: float, width: int, height: int) -> None:
        self.x = float(x)
        self.y = float(y)
        self.frame = Rect(0, 0, int(width), int(height))
        self.flip = Flip.NONE


class Tile(Entity):
    """One cell of a level grid."""

    def __init__(self, x: float, y: float, tile_type: int) -> None:
        super().__init__(x, y, TILE_WIDTH, TILE_HEIGHT)
        self.tile_type = tile_type
        self._collision = Rect(int(x), int(y), TILE_WIDTH, TILE_HEIGHT)

    def collision(self) -> Rect:
        """Return a copy of the tile's collision box."""
        box = self._collision
        return Rect(box.x, box.y, box.w, box.h)

    def move_to(self, x: float) -> None:
        """Move the tile horizontally, keeping its collision box aligned."""
        self.x = float(int(x))
        self._collision.x = int(x)

    def is_solid(self) -> bool:
        return 0 <= self.tile_type <= MAX_TILE