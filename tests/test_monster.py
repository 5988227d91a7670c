from types import SimpleNamespace

from knightrun.config import (
    COLUMNS,
    GRAVITY,
    LEVEL_HEIGHT,
    LEVEL_WIDTH,
    MAX_GRAVITY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TOTAL_TILES,
)
from knightrun.entity import Flip, Rect
from knightrun.level import Level
from knightrun.monster import (
    MONSTER_HEIGHT,
    MONSTER_VEL,
    MONSTER_WIDTH,
    PATROL_VEL,
    Monster,
)

FLOOR_ROW = 13


def _level(x=0, floor_columns=None):
    def solid(i):
        row, col = divmod(i, COLUMNS)
        return row >= FLOOR_ROW and (floor_columns is None or col in floor_columns)

    return Level(x, 0, [1 if solid(i) else 100 for i in range(TOTAL_TILES)])


def _monster(x=5 * TILE_WIDTH, y=(FLOOR_ROW - 1) * TILE_HEIGHT):
    return Monster(x, y, 256, 192)


def _camera():
    return Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)


def _player(x, y, falling=False):
    return SimpleNamespace(x=x, y=y, falling=falling, collision=Rect(int(x), int(y), 64, 64))


def _on_floor(monster, column=5):
    monster.level_index = 0
    monster.ground_index = FLOOR_ROW * COLUMNS + column


def test_collision_box_sits_at_sprite_feet():
    monster = _monster()
    assert monster.collision == Rect(int(monster.x), int(monster.y), MONSTER_WIDTH, MONSTER_HEIGHT)
    big = Monster(100, 200, 320, 240)
    assert big.collision.bottom() == 200 + 80
    assert big.collision.x * 2 + MONSTER_WIDTH == 2 * 100 + 80


def test_gravity_is_capped_and_reset_on_ground():
    monster = _monster()
    monster.grounded = False
    for _ in range(100):
        monster.gravity()
    assert monster.y_vel == MAX_GRAVITY
    monster.grounded = True
    monster.gravity()
    assert monster.y_vel == GRAVITY


def test_stomp_kills_monster():
    monster = _monster()
    calls = []
    player = _player(monster.x, monster.y, falling=True)
    monster.check_hit(player, lambda: calls.append(1), _camera())
    assert monster.dead is True
    assert monster.being_hit is False
    assert calls == [1]


def test_touch_without_falling_leaves_monster_alive():
    monster = _monster()
    calls = []
    monster.check_hit(_player(monster.x, monster.y), lambda: calls.append(1), _camera())
    assert monster.dead is False
    assert calls == []


def test_falling_out_of_level_kills_monster():
    monster = _monster(y=LEVEL_HEIGHT)
    monster.check_hit(_player(0, 0), lambda: None, _camera())
    assert monster.dead is True


def test_behind_camera_kills_monster():
    monster = _monster()
    camera = _camera()
    camera.x = int(monster.x) + 1
    monster.check_hit(_player(5000, 0), lambda: None, camera)
    assert monster.dead is True


def test_patrol_follows_facing_on_flat_floor():
    levels = [_level()]
    monster = _monster()
    _on_floor(monster)
    monster.auto_move(levels)
    assert monster.x_vel == PATROL_VEL
    monster.flip = Flip.HORIZONTAL
    monster.auto_move(levels)
    assert monster.x_vel == -PATROL_VEL


def test_patrol_stops_on_single_tile():
    levels = [_level(floor_columns={5})]
    monster = _monster()
    _on_floor(monster)
    monster.auto_move(levels)
    assert monster.x_vel == 0


def test_patrol_turns_at_edge():
    levels = [_level(floor_columns={3, 4, 5})]
    monster = _monster()
    _on_floor(monster)
    monster.x_vel = PATROL_VEL
    monster.auto_move(levels)
    assert monster.x_vel == -PATROL_VEL


def test_chase_runs_towards_close_player():
    levels = [_level()]
    monster = _monster()
    _on_floor(monster)
    monster.chase(_player(monster.x - 2 * TILE_WIDTH, monster.y), levels)
    assert monster.x_vel == -MONSTER_VEL
    assert monster.distance_to_player == 2 * TILE_WIDTH
    monster.chase(_player(monster.x + 2 * TILE_WIDTH, monster.y), levels)
    assert monster.x_vel == MONSTER_VEL


def test_chase_ignores_distant_or_stunned():
    levels = [_level()]
    monster = _monster()
    _on_floor(monster)
    monster.chase(_player(monster.x + 20 * TILE_WIDTH, monster.y), levels)
    assert monster.x_vel == 0
    monster.being_hit = True
    monster.chase(_player(monster.x + TILE_WIDTH, monster.y), levels)
    assert monster.x_vel == 0


def test_update_walks_along_floor():
    levels = [_level(), _level(LEVEL_WIDTH)]
    monster = _monster()
    start = monster.x
    far = _player(3 * LEVEL_WIDTH, 0)
    for _ in range(10):
        monster.update(far, levels, lambda: None, _camera())
    assert monster.x > start
    assert monster.dead is False
    assert monster.walking is True
    assert monster.collision.bottom() == FLOOR_ROW * TILE_HEIGHT


def test_being_hit_animation_uses_third_row():
    monster = _monster()
    monster.idling = False
    monster.being_hit = True
    clips = monster.frames()
    assert clips == [monster.being_hit_clips[0]]
    assert clips[0].y == 2 * monster.idling_clips[0].h