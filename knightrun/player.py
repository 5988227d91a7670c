"""The knight: input handling, physics, camera following and animation."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Optional, Sequence

from .config import (
    GRAVITY,
    LEVEL_HEIGHT,
    MAX_GRAVITY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from .entity import Entity, Flip, Rect, Tile
from .level import Level
from .physics import check_collision, probe_ground, touches_wall

PLAYER_WIDTH = 64
PLAYER_HEIGHT = 64
PLAYER_VEL = 6
JUMP_SPEED = 10
START_X = TILE_WIDTH * 4
START_Y = TILE_HEIGHT * 12

WALKING_FRAMES = 16
IDLING_FRAMES = 4
JUMPING_FRAMES = 4
FALLING_FRAMES = 4
DEATH_FRAMES = 4

_SHEET_COLUMNS = 4
_SHEET_ROWS = 9
_FOOT_OFFSET = 20


class Control(Enum):
    """A player control that can be pressed and released."""

    LEFT = auto()
    RIGHT = auto()
    JUMP = auto()


class PlayerSound(Enum):
    """Sound effects the player triggers."""

    HIT = 0
    JUMP = 1
    LAND = 2


SoundPlayer = Callable[[PlayerSound], None]


def _row(count: int, row: int, width: int, height: int) -> list[Rect]:
    return [Rect(col * width, row * height, width, height) for col in range(count)]


def _tile_at(levels: Sequence[Level], level_index: int, index: int) -> Optional[Tile]:
    if 0 <= level_index < len(levels):
        tiles = levels[level_index].tiles
        if 0 <= index < len(tiles):
            return tiles[index]
    return None


class Player(Entity):
    """The running knight controlled by the user."""

    def __init__(self, x: float, y: float, sheet_width: int, sheet_height: int) -> None:
        super().__init__(x, y, sheet_width, sheet_height)
        w = self.frame.w // _SHEET_COLUMNS
        h = self.frame.h // _SHEET_ROWS
        self.idling_clips = _row(IDLING_FRAMES, 0, w, h)
        self.walking_clips = [
            Rect((i % _SHEET_COLUMNS) * w, (i // _SHEET_COLUMNS + 1) * h, w, h)
            for i in range(WALKING_FRAMES)
        ]
        self.jumping_clips = _row(JUMPING_FRAMES, 5, w, h)
        self.falling_clips = _row(FALLING_FRAMES, 6, w, h)
        self.death_clips = _row(DEATH_FRAMES, 8, w, h)

        self.x_vel = 0.0
        self.y_vel = 0.0
        self.grounded = False
        self.running = False
        self.idling = True
        self.jumping = False
        self.falling = True
        self.dead = False
        self.being_hit = False
        self.ground_index = 1
        self.level_index = 1
        self.collision = Rect(
            int(self.x + PLAYER_WIDTH // 2),
            int(self.y + PLAYER_HEIGHT - _FOOT_OFFSET),
            PLAYER_WIDTH,
            PLAYER_HEIGHT,
        )

        self._idle_counter = 0
        self._walk_counter = 0
        self._jump_counter = 0
        self._falling_counter = 0
        self._death_counter = 0

    def _sync_x(self) -> None:
        self.collision.x = int(self.x + PLAYER_WIDTH // 2)

    def _sync_y(self) -> None:
        self.collision.y = int(self.y + PLAYER_HEIGHT - _FOOT_OFFSET)

    def press(self, control: Control, play_sound: SoundPlayer) -> None:
        """React to a control being pressed (not a key repeat)."""
        if self.dead:
            return
        if control is Control.RIGHT:
            self.x_vel += PLAYER_VEL
        elif control is Control.LEFT:
            self.x_vel -= PLAYER_VEL
        elif control is Control.JUMP and self.grounded:
            self.jump()
            play_sound(PlayerSound.JUMP)

    def release(self, control: Control) -> None:
        """React to a control being released; a short jump press cuts the jump."""
        if self.dead:
            return
        if control is Control.RIGHT:
            self.x_vel -= PLAYER_VEL
        elif control is Control.LEFT:
            self.x_vel += PLAYER_VEL
        elif control is Control.JUMP and not self.grounded and self.jumping:
            self.y_vel *= 0.5

    def jump(self) -> None:
        if self.grounded:
            self.y_vel -= JUMP_SPEED
            self.grounded = False

    def gravity(self) -> None:
        if not self.grounded:
            self.y_vel = min(self.y_vel + GRAVITY, MAX_GRAVITY)
        else:
            self.y_vel = GRAVITY

    def check_hit(self, monsters, play_sound: SoundPlayer, camera: Rect) -> None:
        """Die on touching a live monster, falling out, or dropping behind the camera."""
        for monster in monsters:
            if monster is None:
                continue
            if check_collision(self.collision, monster.collision) and not monster.dead:
                play_sound(PlayerSound.HIT)
                self.dead = True
        if self.y + PLAYER_HEIGHT >= LEVEL_HEIGHT or self.x - camera.x <= 0:
            self.dead = True

    def update(
        self,
        levels: Sequence[Level],
        monsters,
        play_sound: SoundPlayer,
        camera: Rect,
    ) -> None:
        """Advance the player by one frame."""
        self.gravity()
        if not self.dead:
            self.check_hit(monsters, play_sound, camera)

        alive = not self.dead
        self.idling = self.x_vel == 0 and self.grounded and alive
        self.running = self.x_vel != 0 and self.grounded and alive
        self.falling = self.y_vel > 0 and not self.grounded and alive
        self.jumping = self.y_vel <= 0 and not self.grounded and alive

        if not self.being_hit:
            if self.x_vel < 0:
                self.flip = Flip.HORIZONTAL
            if self.x_vel > 0:
                self.flip = Flip.NONE

        if alive:
            self.x += self.x_vel
            self._sync_x()
            if self.x + PLAYER_WIDTH < 0:
                self.x = float(-PLAYER_WIDTH)
                self._sync_x()
            if touches_wall(self.collision, levels):
                self.x -= self.x_vel
                self._sync_x()

        self.y += self.y_vel
        self._sync_y()
        if self.y + PLAYER_HEIGHT < 0:
            self.y = float(-PLAYER_HEIGHT)
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
                    self.y = ground.y - PLAYER_HEIGHT * 2 + _FOOT_OFFSET
                if self.falling:
                    self.grounded = True
                    play_sound(PlayerSound.LAND)
            elif self.y_vel < 0:
                self.y -= self.y_vel
                self.y_vel = 0.0
            self._sync_y()

    def follow_camera(self, camera: Rect, cam_vel: float) -> float:
        """Scroll the camera and keep the player in view; return the new camera speed."""
        if not self.dead:
            camera.x = int(camera.x + cam_vel)
        accel = 0.001
        if cam_vel > 4:
            accel = 0.0003
        if cam_vel > 5:
            accel = 0.00001
        cam_vel += accel

        centre_x = self.x + PLAYER_WIDTH // 2
        lead = SCREEN_WIDTH * 2 // 3
        if centre_x - camera.x >= lead:
            camera.x = int(centre_x - lead)
        camera.y = int(self.y + PLAYER_HEIGHT // 2 - SCREEN_HEIGHT // 2)
        camera.x = max(camera.x, 0)
        camera.y = max(camera.y, 0)
        camera.y = min(camera.y, LEVEL_HEIGHT - camera.h)
        return cam_vel

    def frames(self) -> list[Rect]:
        """Return the sprite clips to draw this frame and advance the animations."""
        clips = []
        if self.running:
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

        if self.jumping:
            clips.append(self.jumping_clips[self._jump_counter // 5])
            self._jump_counter += 1
            if self._jump_counter // 5 >= JUMPING_FRAMES:
                self._jump_counter = 0
        else:
            self._jump_counter = 0

        if self.falling:
            clips.append(self.falling_clips[self._falling_counter // 4])
            self._falling_counter += 1
            if self._falling_counter // 4 >= FALLING_FRAMES:
                self._falling_counter = 0
        else:
            self._falling_counter = 0

        if self.dead:
            clips.append(self.death_clips[self._death_counter // 5])
            if self._death_counter // 5 < DEATH_FRAMES - 1:
                self._death_counter += 1
        else:
            self._death_counter = 0
        return clips

    def reset(self) -> None:
        """Put the player back at the start, alive and standing still."""
        self.x = float(START_X)
        self.y = float(START_Y)
        self.x_vel = 0.0
        self.y_vel = 0.0
        self.dead = False
        self.flip = Flip.NONE