"""A level section: a grid of tiles loaded from a map file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from .config import (
    COLUMNS,
    LEVEL_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TOTAL_TILE_SPRITES,
    TOTAL_TILES,
    MonsterPositions,
)
from .entity import Tile


class MapFormatError(ValueError):
    """A map file or tile list is malformed."""


def _validated(tile_types: Iterable[int]) -> list[int]:
    types = list(tile_types)
    if len(types) != TOTAL_TILES:
        raise MapFormatError(f"expected {TOTAL_TILES} tiles, got {len(types)}")
    for index, tile_type in enumerate(types):
        if not 0 <= tile_type < TOTAL_TILE_SPRITES:
            raise MapFormatError(f"invalid tile type at {index}: {tile_type}")
    return types


def read_tile_types(path: Union[str, Path]) -> list[int]:
    """Read the tile types of one level from a whitespace-separated map file."""
    tokens = Path(path).read_text(encoding="utf-8").split()
    types = []
    for index, token in enumerate(tokens[:TOTAL_TILES]):
        try:
            types.append(int(token))
        except ValueError:
            raise MapFormatError(f"unreadable tile at {index}: {token!r}") from None
    if len(types) < TOTAL_TILES:
        raise MapFormatError(f"unexpected end of file after {len(types)} tiles")
    return _validated(types)


class Level:
    """A LEVEL_WIDTH-wide block of tiles placed at (x, y)."""

    def __init__(self, x: float, y: float, tile_types: Iterable[int]) -> None:
        self.x = int(x)
        self.y = int(y)
        self.monster_positions: MonsterPositions = ()
        self.tiles = []
        for index, tile_type in enumerate(_validated(tile_types)):
            row, col = divmod(index, COLUMNS)
            self.tiles.append(
                Tile(self.x + col * TILE_WIDTH, self.y + row * TILE_HEIGHT, tile_type)
            )

    @classmethod
    def from_file(cls, x: float, y: float, path: Union[str, Path]) -> "Level":
        return cls(x, y, read_tile_types(path))

    def place_at(self, x: float) -> None:
        """Move the level so that its left edge is at ``x``."""
        self.x = int(x)
        for index, tile in enumerate(self.tiles):
            tile.move_to(self.x + (index % COLUMNS) * TILE_WIDTH)

    def place_after(self, other: "Level") -> None:
        """Move the level to start where ``other`` ends."""
        self.place_at(other.x + LEVEL_WIDTH)

    def set_tile_types(self, tile_types: Iterable[int]) -> None:
        """Replace every tile's type, leaving positions as they are."""
        for tile, tile_type in zip(self.tiles, _validated(tile_types)):
            tile.tile_type = tile_type