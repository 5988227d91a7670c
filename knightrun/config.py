"""Game-wide constants and the built-in list of level maps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

WINDOW_TITLE = "Knight Run"

GRAVITY = 0.3
MAX_GRAVITY = 15.0

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720

LEVEL_WIDTH = 1344
LEVEL_HEIGHT = 1024

TILE_WIDTH = 64
TILE_HEIGHT = 64

TOTAL_LEVEL_PART = 3
TOTAL_MAP = 5
TOTAL_TILES = 336
TOTAL_TILE_SPRITES = 256
MAX_TILE = 48

COLUMNS = LEVEL_WIDTH // TILE_WIDTH
ROWS = LEVEL_HEIGHT // TILE_HEIGHT

MonsterPositions = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class MapSpec:
    """A map file and the (column, row) tiles where its monsters start."""

    path: Path
    monster_positions: MonsterPositions = ()


_MAPS: Tuple[Tuple[str, MonsterPositions], ...] = (
    ("map.map", ()),
    ("map1.map", ((8, 10), (13, 12))),
    ("map2.map", ((6, 10),)),
    ("map3.map", ((3, 12),)),
    ("map4.map", ((17, 12), (8, 10))),
)


def default_maps(base_dir: Union[str, Path] = ".") -> list[MapSpec]:
    """Return the built-in maps, with paths under ``base_dir/texture``."""
    root = Path(base_dir) / "texture"
    return [MapSpec(root / name, positions) for name, positions in _MAPS]