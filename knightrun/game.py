"""Game state, the per-frame update and the program entry point."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import pygame

from .config import (
    LEVEL_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TOTAL_LEVEL_PART,
    WINDOW_TITLE,
    MapSpec,
    default_maps,
)
from .entity import Flip, Rect
from .level import Level, MapFormatError, read_tile_types
from .menu import EventKind, InputEvent, Menu
from .monster import Monster
from .player import START_X, START_Y, Control, Player, PlayerSound
from .render import Renderer, tile_clips
from .timer import Timer

INITIAL_CAM_VEL = 1.5
KILL_SCORE = 20
MAX_VOLUME = 128
UNMUTED_VOLUME = 50
FPS_LIMIT = 2_000_000
DEFAULT_PLAYER_SHEET = (512, 1152)
DEFAULT_MONSTER_SHEET = (512, 384)

WHITE = (255, 255, 255)
YELLOW = (252, 226, 5)

SoundCallback = Callable[[str], None]


def load_high_score(path: Union[str, Path]) -> int:
    """Read the saved high score; 0 when the file is missing or unreadable."""
    try:
        tokens = Path(path).read_text(encoding="utf-8").split()
    except OSError:
        return 0
    if not tokens:
        return 0
    try:
        return int(tokens[0])
    except ValueError:
        return 0


def save_high_score(path: Union[str, Path], score: int) -> None:
    Path(path).write_text(str(score), encoding="utf-8")


def _player_sounds(play_sound: SoundCallback) -> Callable[[PlayerSound], None]:
    return lambda sound: play_sound(sound.name.lower())


class Game:
    """Levels, player, monsters, menu and score of one running game."""

    def __init__(
        self,
        maps: Sequence[MapSpec],
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
        high_score_path: Union[str, Path] = "highscore.txt",
    ) -> None:
        self.maps = list(maps)
        if len(self.maps) < 2:
            raise ValueError("at least two maps are needed: a start map and one more")
        self.rng = rng or random.Random()
        self.high_score_path = Path(high_score_path)
        self.running = True
        self.camera = Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)
        self.cam_vel = INITIAL_CAM_VEL
        self.fps_timer = Timer(clock)
        self.counted_frames = 0
        self.fps = 0
        self.score = 0
        self.kill_score = 0
        self.distance_score = 0
        self.high_score = load_high_score(self.high_score_path)
        self.is_muted = False
        self.volume = MAX_VOLUME
        self.levels: list[Level] = []
        self.monsters: list[Monster] = []
        self.menu = Menu()
        self.player_sheet = DEFAULT_PLAYER_SHEET
        self.monster_sheet = DEFAULT_MONSTER_SHEET
        self.player = Player(START_X, START_Y, *self.player_sheet)
        self._tile_cache: dict[Path, list[int]] = {}

    def _use_sheets(self, player_sheet: tuple[int, int], monster_sheet: tuple[int, int]) -> None:
        self.player_sheet = player_sheet
        self.monster_sheet = monster_sheet
        self.player = Player(START_X, START_Y, *player_sheet)

    def _tile_types(self, spec: MapSpec) -> list[int]:
        path = Path(spec.path)
        if path not in self._tile_cache:
            self._tile_cache[path] = read_tile_types(path)
        return self._tile_cache[path]

    def _random_map(self) -> MapSpec:
        return self.maps[self.rng.randrange(1, len(self.maps))]

    def create_levels(self) -> None:
        """Lay out the level sections, the first from the start map, and spawn their monsters."""
        self.levels = []
        for part in range(TOTAL_LEVEL_PART):
            spec = self.maps[0] if part == 0 else self._random_map()
            level = Level(part * LEVEL_WIDTH, 0, self._tile_types(spec))
            level.monster_positions = spec.monster_positions
            self.levels.append(level)
        self.monsters = []
        for level in self.levels:
            self.spawn_monsters(level)

    def spawn_monsters(self, level: Level) -> list[Monster]:
        """Create the monsters of ``level`` at its monster tiles."""
        spawned = [
            Monster(
                col * TILE_WIDTH + level.x,
                row * TILE_HEIGHT + level.y,
                *self.monster_sheet,
            )
            for col, row in level.monster_positions
        ]
        self.monsters.extend(spawned)
        return spawned

    def recycle_levels(self) -> bool:
        """Move the section the camera has left behind to the far end with a new map."""
        if not self.levels:
            return False
        first = self.levels[0]
        if self.camera.x < first.x + LEVEL_WIDTH:
            return False
        spec = self._random_map()
        first.set_tile_types(self._tile_types(spec))
        first.place_after(self.levels[-1])
        first.monster_positions = spec.monster_positions
        self.spawn_monsters(first)
        self.levels.append(self.levels.pop(0))
        return True

    def update_monsters(self, play_sound: SoundCallback) -> None:
        """Advance live monsters; remove dead ones and score them."""
        survivors = []
        for monster in self.monsters:
            if monster.dead:
                self.kill_score += KILL_SCORE
                continue
            monster.update(self.player, self.levels, lambda: play_sound("monster"), self.camera)
            survivors.append(monster)
        self.monsters = survivors

    def update_score(self) -> int:
        """Recompute the score from the furthest distance reached and kills."""
        distance = self.player.x / TILE_WIDTH
        if self.distance_score < distance:
            self.distance_score = int(distance)
        self.score = self.distance_score + self.kill_score
        return self.score

    def toggle_mute(self) -> int:
        """Switch muting on or off; return the new volume."""
        self.is_muted = not self.is_muted
        self.volume = 0 if self.is_muted else UNMUTED_VOLUME
        return self.volume

    def reset(self) -> None:
        """Start a new run after the player died."""
        self.player.reset()
        self.camera.x = 0
        self.camera.y = 0
        self.cam_vel = INITIAL_CAM_VEL
        self.volume = 0 if self.is_muted else MAX_VOLUME
        self.monsters = []
        previous: Optional[Level] = None
        for level in self.levels:
            if previous is None:
                spec = self.maps[0]
                level.place_at(0)
            else:
                spec = self._random_map()
                level.place_after(previous)
            level.set_tile_types(self._tile_types(spec))
            level.monster_positions = spec.monster_positions
            previous = level
        for level in self.levels:
            self.spawn_monsters(level)
        self.menu.needs_reset = False
        self.fps_timer.stop()
        self.fps_timer.start()
        self.counted_frames = 0
        self.score = 0

    def _average_fps(self) -> int:
        seconds = self.fps_timer.ticks() / 1000
        if seconds <= 0:
            return 0
        fps = int(self.counted_frames / seconds)
        return 0 if fps > FPS_LIMIT else fps

    def step(self, play_sound: SoundCallback) -> None:
        """Advance the whole game by one frame."""
        self.fps_timer.start()
        self.recycle_levels()
        self.player.update(self.levels, self.monsters, _player_sounds(play_sound), self.camera)
        self.cam_vel = self.player.follow_camera(self.camera, self.cam_vel)
        self.update_monsters(play_sound)
        self.fps = self._average_fps()
        self.counted_frames += 1
        self.update_score()
        if self.player.dead:
            self.high_score = max(self.high_score, self.score)
            save_high_score(self.high_score_path, self.high_score)
        self.fps_timer.unpause()
        if self.menu.needs_reset:
            self.reset()


_CONTROLS = {"left": Control.LEFT, "right": Control.RIGHT, "space": Control.JUMP}
_SOUND_FILES = {
    "hit": "Hit.wav",
    "jump": "Jump.wav",
    "land": "Landing.wav",
    "monster": "Monster.wav",
}


@dataclass
class _Assets:
    font: object
    knight: pygame.Surface
    monster: pygame.Surface
    tiles: pygame.Surface
    background: pygame.Surface
    button: pygame.Surface


class _Audio:
    """Background music and sound effects."""

    def __init__(self, music: Path, sounds: dict[str, pygame.mixer.Sound]) -> None:
        pygame.mixer.music.load(str(music))
        self._sounds = sounds
        self._paused = False

    def play(self, name: str) -> None:
        self._sounds[name].play()

    def set_volume(self, volume: int) -> None:
        level = volume / MAX_VOLUME
        for sound in self._sounds.values():
            sound.set_volume(level)
        pygame.mixer.music.set_volume(level)

    def update_music(self, player_dead: bool) -> None:
        playing = pygame.mixer.music.get_busy() or self._paused
        if not playing:
            pygame.mixer.music.play(-1, fade_ms=1000)
            pygame.mixer.music.set_volume(UNMUTED_VOLUME / MAX_VOLUME)
        elif self._paused:
            pygame.mixer.music.unpause()
            self._paused = False
        elif player_dead:
            pygame.mixer.music.stop()

    def pause_music(self) -> None:
        if pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()
            self._paused = True


def _load_assets(base: Path) -> tuple[_Assets, _Audio]:
    texture = base / "texture"
    sfx = base / "sfx"
    font = pygame.font.Font(str(base / "font" / "Pixel-UniCode.ttf"), 28)
    background = pygame.image.load(str(texture / "bg.jpg")).convert()
    assets = _Assets(
        font=font,
        knight=pygame.image.load(str(texture / "knight2.png")).convert_alpha(),
        monster=pygame.image.load(str(texture / "monster.png")).convert_alpha(),
        tiles=pygame.image.load(str(texture / "tile2.png")).convert_alpha(),
        background=pygame.transform.scale(background, (SCREEN_WIDTH, SCREEN_HEIGHT)),
        button=pygame.image.load(str(texture / "button.png")).convert_alpha(),
    )
    sounds = {name: pygame.mixer.Sound(str(sfx / file)) for name, file in _SOUND_FILES.items()}
    audio = _Audio(sfx / "MusicBackGround.mp3", sounds)
    return assets, audio


def _to_input_event(raw: pygame.event.Event) -> Optional[InputEvent]:
    if raw.type == pygame.QUIT:
        return InputEvent(EventKind.QUIT)
    if raw.type == pygame.KEYDOWN:
        return InputEvent(EventKind.KEY_DOWN, key=pygame.key.name(raw.key))
    if raw.type == pygame.KEYUP:
        return InputEvent(EventKind.KEY_UP, key=pygame.key.name(raw.key))
    if raw.type == pygame.MOUSEBUTTONDOWN:
        return InputEvent(EventKind.MOUSE_DOWN, pos=raw.pos, button=raw.button)
    if raw.type == pygame.MOUSEBUTTONUP:
        return InputEvent(EventKind.MOUSE_UP, pos=raw.pos, button=raw.button)
    if raw.type == pygame.MOUSEMOTION:
        return InputEvent(EventKind.MOUSE_MOTION, pos=raw.pos)
    return None


def _handle_event(game: Game, event: InputEvent, play_sound: SoundCallback) -> None:
    if event.kind is EventKind.QUIT:
        game.running = False
    if event.kind is EventKind.KEY_DOWN and event.key == "m":
        game.toggle_mute()
    if game.menu.handle(event, game.player.dead):
        game.running = False
    if game.menu.in_menu or game.menu.paused or event.repeat:
        return
    control = _CONTROLS.get(event.key or "")
    if control is None:
        return
    if event.kind is EventKind.KEY_DOWN:
        game.player.press(control, _player_sounds(play_sound))
    elif event.kind is EventKind.KEY_UP:
        game.player.release(control)


def _draw_game(game: Game, renderer: Renderer, assets: _Assets, clips: list[Rect]) -> None:
    renderer.clear()
    for level in game.levels:
        for tile in level.tiles:
            renderer.draw_tile(assets.tiles, tile, clips[tile.tile_type], game.camera)
    player = game.player
    for clip in player.frames():
        renderer.draw_image(assets.knight, player.x, player.y, clip, game.camera, player.flip)
    for monster in game.monsters:
        if not monster.dead:
            for clip in monster.frames():
                renderer.draw_image(assets.monster, monster.x, monster.y, clip, game.camera, monster.flip)
    renderer.draw_text(f"FPS: {game.fps}", WHITE, 64, 0)
    renderer.draw_text(f"Score: {game.score}m", YELLOW, 1100, 30)
    renderer.draw_text(f"High Score: {game.high_score}m", WHITE, 1100, 0)
    if player.dead:
        for (x, y), clip in game.menu.retry_menu_clips():
            renderer.draw_image(assets.button, x, y, clip, None, Flip.NONE)


def _draw_menu(game: Game, renderer: Renderer, assets: _Assets) -> None:
    renderer.clear()
    renderer.draw_image(assets.background, 0, 0, None, None, Flip.NONE)
    for (x, y), clip in game.menu.main_menu_clips():
        renderer.draw_image(assets.button, x, y, clip, None, Flip.NONE)


def _run(game: Game, screen: pygame.Surface, assets: _Assets, audio: _Audio) -> None:
    renderer = Renderer(screen, assets.font)
    clips = tile_clips()
    ticker = pygame.time.Clock()
    volume = game.volume
    while game.running:
        for raw in pygame.event.get():
            event = _to_input_event(raw)
            if event is not None:
                _handle_event(game, event, audio.play)
        if game.volume != volume:
            volume = game.volume
            audio.set_volume(volume)
        if game.menu.in_menu:
            _draw_menu(game, renderer, assets)
            pygame.display.flip()
        elif game.menu.paused:
            audio.pause_music()
            game.fps_timer.pause()
        else:
            audio.update_music(game.player.dead)
            game.step(audio.play)
            _draw_game(game, renderer, assets, clips)
            pygame.display.flip()
        ticker.tick(60)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game; return the process exit status."""
    parser = argparse.ArgumentParser(prog="knightrun", description="Play Knight Run.")
    parser.add_argument(
        "--data-dir",
        default=".",
        help="directory holding the font, texture and sfx folders",
    )
    args = parser.parse_args(argv)
    base = Path(args.data_dir)

    try:
        pygame.mixer.pre_init(44100, -16, 2, 2048)
        pygame.init()
        pygame.font.init()
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        assets, audio = _load_assets(base)
    except (pygame.error, OSError, FileNotFoundError) as exc:
        print(f"Failed to load media: {exc}", file=sys.stderr)
        pygame.quit()
        return 1

    try:
        game = Game(default_maps(base), random.Random(), None, base / "highscore.txt")
        game._use_sheets(assets.knight.get_size(), assets.monster.get_size())
        game.create_levels()
    except (OSError, MapFormatError, ValueError) as exc:
        print(f"Failed to create game elements: {exc}", file=sys.stderr)
        pygame.quit()
        return 1

    try:
        _run(game, screen, assets, audio)
    finally:
        pygame.quit()
    return 0