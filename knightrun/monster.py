"""Monsters that patrol platforms, chase the knight and die when stomped."""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from .config import GRAVITY, LEVEL_HEIGHT, MAX_GRAVITY, MAX_TILE, TILE_WIDTH
from .entity import Entity, Flip, Rect, Tile
from .level import Level
from .physics import check_collision, probe_ground, touches_wall

MONSTER_WIDTH = 64
MONSTER_HEIGHT = 64
MONSTER_VEL = 4
PATROL_VEL = MONSTER_VEL * 0.5
CHASE_RANGE = 7 * TILE_WIDTH

WALKING_FRAMES = 4
IDLING_FRAMES = 4
FALLING_FRAMES = 4
BEING_HIT_FRAMES = 4

_SHEET_COLUMNS = 4
_SHEET_ROWS = 3


def _row(count: int, row: int, width: int, height: int) -> list[Rect]:
    return [Rect(col * width, row * height, width, height) for col in range(count)]


def _tile_at(levels: Sequence[Level], level_index: int, index: int) -> Optional[Tile]:
    if 0 <= level_index < len(levels):
        tiles = levels[level_index].tiles
        if 0 <= index < len(tiles):
            return tiles[index]
    return None


class Monster(Entity):
    """An enemy standing on a level's ground."""

    def __init__(self, x: float, y: float, sheet_width: int, sheet_height: int) -> None:
        super().__init__(x, y, sheet_width, sheet_height)
        self._clip_w = self.frame.w // _SHEET_COLUMNS
        self._clip_h = self.frame.h // _SHEET_ROWS
        w, h = self._clip_w, self._clip_h
        self.walking_clips = _row(WALKING_FRAMES, 1, w, h)
        self.idling_clips = _row(IDLING_FRAMES, 0, w, h)
        self.falling_clips = _row(FALLING_FRAMES, 0, w, h)
        self.being_hit_clips = _row(BEING_HIT_FRAMES, 2, w, h)

        self._offset_x = int((w - MONSTER_WIDTH) / 2)
        self._offset_y = h - MONSTER_HEIGHT

        self.grounded = True
        self.walking = False
        self.falling = False
        self.idling = True
        self.being_hit = False
        self.dead = False
        self.x_vel = 0.0
        self.y_vel = 0.0
        self.ground_index = 1
        self.level_index = 1
        self.distance_to_player = 0.0
        self.collision = Rect(
            int(self.x + self._offset_x),
            int(self.y + self._offset_y),
            MONSTER_WIDTH,
            MONSTER_HEIGHT,
        )

        self._idle_counter = 0
        self._falling_counter = 0
        self._walk_counter = 0
        self._being_hit_counter = 0

    def _sync_x(self) -> None:
        self.collision.x = int(self.x + self._offset_x)

    def _sync_y(self) -> None:
        self.collision.y = int(self.y + self._offset_y)

    def _gap(self, levels: Sequence[Level], step: int) -> bool:
        tile = _tile_at(levels, self.level_index, self.ground_index + step)
        return tile is None or tile.tile_type > MAX_TILE

    def update(self, player, levels: Sequence[Level], play_sound: Callable[[], None], camera: Rect) -> None:
        """Advance the monster by one frame."""
        if not self.being_hit:
            if self.x_vel < 0:
                self.flip = Flip.HORIZONTAL
            if self.x_vel > 0:
                self.flip = Flip.NONE
        self.gravity()
        self.check_hit(player, play_sound, camera)
        self.auto_move(levels)
        self.chase(player, levels)

        active = not self.dead and not self.being_hit
        self.idling = self.x_vel == 0 and self.grounded and active
        self.walking = self.x_vel != 0 and self.grounded and active
        self.falling = self.y_vel > 0 and not self.grounded and active

        self.x += self.x_vel
        self._sync_x()
        if self.x + self._offset_x < 0:
            self.x = float(-self._offset_x)
            self._sync_x()
            self.x_vel *= -1
        if touches_wall(self.collision, levels):
            self.x -= self.x_vel
            self._sync_x()
            self.x_vel *= -1

        self.y += self.y_vel
        self._sync_y()
        if self.y + self._offset_y < 0:
            self.y = float(-self._offset_y)
            self._sync_y()

        probe = probe_ground(
            self.collision, levels, self.grounded, self.ground_index, self.level_index
        )
        self.grounded = probe.grounded
        self.ground_index = probe.ground_index
        self.level_index = probe.level_index
        if probe.hit:
            if self.y_vel > 0:
                ground = _tile_at(levels, self.level_index, self.ground_index)
                if ground is not None:
                    self.y = ground.y - self._clip_h
                if self.falling:
                    self.grounded = True
            elif self.y_vel < 0:
                self.y -= self.y_vel
                self.y_vel = 0.0
            self._sync_y()

    def gravity(self) -> None:
        if not self.grounded:
            self.y_vel = min(self.y_vel + GRAVITY, MAX_GRAVITY)
        else:
            self.y_vel = GRAVITY

    def auto_move(self, levels: Sequence[Level]) -> None:
        """Patrol the platform, turning back at its edges."""
        if self.being_hit:
            return
        right_gap = self._gap(levels, 1)
        left_gap = self._gap(levels, -1)
        if right_gap and left_gap:
            self.x_vel = 0.0
        elif right_gap and self.x_vel > 0:
            self.x_vel = -PATROL_VEL
        elif left_gap and self.x_vel < 0:
            self.x_vel = PATROL_VEL
        elif self.flip is Flip.NONE:
            self.x_vel = PATROL_VEL
        elif self.flip is Flip.HORIZONTAL:
            self.x_vel = -PATROL_VEL

    def chase(self, player, levels: Sequence[Level]) -> None:
        """Run at the player when close, without stepping off the platform."""
        self.distance_to_player = math.hypot(player.x - self.x, player.y - self.y)
        if self.being_hit or self.distance_to_player > CHASE_RANGE:
            return
        if player.x - self.x < 0:
            self.x_vel = 0.0 if self._gap(levels, -1) else float(-MONSTER_VEL)
        else:
            self.x_vel = 0.0 if self._gap(levels, 1) else float(MONSTER_VEL)

    def check_hit(self, player, play_sound: Callable[[], None], camera: Rect) -> None:
        """Die when stomped, when fallen out of the level, or when behind the camera."""
        stomped = False
        if check_collision(player.collision, self.collision) and player.falling:
            stomped = True
            self.being_hit = True
        if self._being_hit_counter // 7 >= BEING_HIT_FRAMES:
            self.being_hit = False
            self._being_hit_counter = 0
        if (
            stomped
            or self.y + MONSTER_HEIGHT / 2 > LEVEL_HEIGHT
            or self.x - camera.x < 0
        ):
            self.dead = True
            self.being_hit = False
            play_sound()

    def frames(self) -> list[Rect]:
        """Return the sprite clips to draw this frame and advance the animations."""
        clips = []
        if self.walking:
            clips.append(self.walking_clips[self._walk_counter // 4])
            self._walk_counter += 1
            if self._walk_counter // 4 >= WALKING_FRAMES:
                self._walk_counter = 0

        if self.idling:
            clips.append(self.idling_clips[self._idle_counter // 6])
            self._idle_counter += 1
            if self._idle_counter // 6 >= IDLING_FRAMES:
                self._idle_counter = 0
        else:
            self._idle_counter = 0

        if self.falling:
            clips.append(self.falling_clips[self._falling_counter // 4])
            self._falling_counter += 1
            if self._falling_counter // 4 >= FALLING_FRAMES:
                self._falling_counter = 0
        else:
            self._falling_counter = 0

        if self.being_hit:
            index = min(self._being_hit_counter // 7, BEING_HIT_FRAMES - 1)
            clips.append(self.being_hit_clips[index])
            self._being_hit_counter += 1
        else:
            self._being_hit_counter = 0
        return clips