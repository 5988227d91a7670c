import pytest

from knightrun.config import (
    COLUMNS,
    LEVEL_HEIGHT,
    LEVEL_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TOTAL_TILE_SPRITES,
    TOTAL_TILES,
)
from knightrun.level import Level, MapFormatError, read_tile_types


def _types(value=0):
    return [value] * TOTAL_TILES


def _write_map(path, tokens):
    path.write_text("\n".join(" ".join(tokens[i:i + COLUMNS]) for i in range(0, len(tokens), COLUMNS)))
    return path


def test_read_tile_types_round_trip(tmp_path):
    values = [i % TOTAL_TILE_SPRITES for i in range(TOTAL_TILES)]
    path = _write_map(tmp_path / "m.map", [str(v) for v in values])
    assert read_tile_types(path) == values


def test_read_ignores_extra_tokens(tmp_path):
    values = _types(3)
    path = _write_map(tmp_path / "m.map", [str(v) for v in values] + ["7", "7"])
    assert read_tile_types(path) == values


def test_read_short_file_raises(tmp_path):
    path = _write_map(tmp_path / "m.map", ["0"] * (TOTAL_TILES - 1))
    with pytest.raises(MapFormatError):
        read_tile_types(path)


@pytest.mark.parametrize("bad", [str(TOTAL_TILE_SPRITES), "-1", "x"])
def test_read_invalid_token_raises(tmp_path, bad):
    tokens = ["0"] * TOTAL_TILES
    tokens[10] = bad
    path = _write_map(tmp_path / "m.map", tokens)
    with pytest.raises(MapFormatError):
        read_tile_types(path)


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_tile_types(tmp_path / "absent.map")


def test_level_grid_layout():
    level = Level(LEVEL_WIDTH, 0, _types())
    assert len(level.tiles) == TOTAL_TILES
    assert (level.tiles[0].x, level.tiles[0].y) == (level.x, level.y)
    assert level.tiles[1].x - level.tiles[0].x == TILE_WIDTH
    assert (level.tiles[COLUMNS].x, level.tiles[COLUMNS].y) == (level.x, TILE_HEIGHT)
    assert level.tiles[-1].x == level.x + LEVEL_WIDTH - TILE_WIDTH
    assert level.tiles[-1].y == LEVEL_HEIGHT - TILE_HEIGHT


def test_level_rejects_wrong_length():
    with pytest.raises(MapFormatError):
        Level(0, 0, [0] * 10)


def test_level_rejects_bad_type():
    types = _types()
    types[5] = TOTAL_TILE_SPRITES
    with pytest.raises(MapFormatError):
        Level(0, 0, types)


def test_from_file(tmp_path):
    values = _types(12)
    path = _write_map(tmp_path / "m.map", [str(v) for v in values])
    level = Level.from_file(0, 0, path)
    assert [tile.tile_type for tile in level.tiles] == values


def test_place_after_shifts_uniformly():
    first = Level(0, 0, _types())
    second = Level(0, 0, _types())
    before = [tile.x for tile in second.tiles]
    second.place_after(first)
    assert second.x == first.x + LEVEL_WIDTH
    assert all(tile.x - old == LEVEL_WIDTH for tile, old in zip(second.tiles, before))
    assert all(tile.collision().x == tile.x for tile in second.tiles)


def test_place_at_keeps_rows():
    level = Level(LEVEL_WIDTH * 2, 0, _types())
    ys = [tile.y for tile in level.tiles]
    level.place_at(0)
    assert level.x == 0
    assert [tile.y for tile in level.tiles] == ys
    assert level.tiles[0].x == 0


def test_set_tile_types_round_trip():
    level = Level(0, 0, _types())
    values = [i % 50 for i in range(TOTAL_TILES)]
    level.set_tile_types(values)
    assert [tile.tile_type for tile in level.tiles] == values


def test_set_tile_types_invalid_leaves_level_unchanged():
    level = Level(0, 0, _types(4))
    bad = _types(1)
    bad[-1] = -3
    with pytest.raises(MapFormatError):
        level.set_tile_types(bad)
    assert all(tile.tile_type == 4 for tile in level.tiles)


def test_monster_positions_default_empty():
    level = Level(0, 0, _types())
    assert level.monster_positions == ()