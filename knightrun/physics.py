"""Collision tests between boxes and level tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import COLUMNS, LEVEL_HEIGHT, LEVEL_WIDTH, TILE_HEIGHT, TILE_WIDTH
from .entity import Rect, Tile
from .level import Level


@dataclass(frozen=True)
class GroundProbe:
    """Result of probing a box against the levels below and around it."""

    hit: bool
    grounded: bool
    ground_index: int
    level_index: int


def check_collision(a: Rect, b: Rect) -> bool:
    """True when the rectangles overlap; touching edges do not count."""
    return not (
        a.bottom() <= b.y
        or a.y >= b.bottom()
        or a.right() <= b.x
        or a.x >= b.right()
    )


def _trunc_div(value: float, step: int) -> int:
    return int(value / step)


def _corner_indices(box: Rect, level: Level) -> tuple[int, int, int, int]:
    """Tile indices: upper-right, lower-right, upper-left, lower-left."""
    col_left = _trunc_div(box.x - level.x, TILE_WIDTH)
    row_up = _trunc_div(box.y, TILE_HEIGHT)
    col_right = col_left + 1
    row_down = row_up + 1
    return (
        row_up * COLUMNS + col_right,
        row_down * COLUMNS + col_right,
        row_up * COLUMNS + col_left,
        row_down * COLUMNS + col_left,
    )


def _tile(level: Level, index: int) -> Optional[Tile]:
    if 0 <= index < len(level.tiles):
        return level.tiles[index]
    return None


def _solid(tile: Optional[Tile]) -> bool:
    return tile is not None and tile.is_solid()


def _hits_solid(box: Rect, tile: Optional[Tile]) -> bool:
    return _solid(tile) and check_collision(box, tile.collision())


def _within_rows(box: Rect) -> bool:
    return 0 <= box.y < LEVEL_HEIGHT - TILE_HEIGHT


def touches_wall(box: Rect, levels: Sequence[Level]) -> bool:
    """True when the box overlaps a solid tile of a level it lies inside."""
    for level in levels:
        inside = box.x > level.x and box.right() < level.x + LEVEL_WIDTH
        if inside and _within_rows(box):
            if any(_hits_solid(box, _tile(level, i)) for i in _corner_indices(box, level)):
                return True
    return False


def probe_ground(
    box: Rect,
    levels: Sequence[Level],
    grounded: bool,
    ground_index: int,
    level_index: int,
) -> GroundProbe:
    """Check the box against solid tiles and work out whether it stands on ground.

    The given ``grounded``, ``ground_index`` and ``level_index`` are carried
    over unchanged unless a level touching the box updates them.
    """
    hit = False
    for number, level in enumerate(levels):
        left = level.x
        right = level.x + LEVEL_WIDTH
        if not (box.right() >= left and box.x <= right and _within_rows(box)):
            continue
        corners = _corner_indices(box, level)
        straddles = (box.x <= left and box.right() >= left) or (
            box.x <= right and box.right() >= right
        )
        if straddles:
            grounded = False
        else:
            if any(_hits_solid(box, _tile(level, i)) for i in corners):
                hit = True
            below_right = _tile(level, corners[1])
            below_left = _tile(level, corners[3])
            if not _solid(below_right) and not _solid(below_left):
                grounded = False
            if (
                not _solid(below_left)
                and _solid(below_right)
                and box.right() <= below_right.x
            ):
                grounded = False
        ground_index = corners[3]
        level_index = number
    return GroundProbe(hit, grounded, ground_index, level_index)