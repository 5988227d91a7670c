"""Main menu, pause toggle and retry screen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from .config import SCREEN_HEIGHT, SCREEN_WIDTH
from .entity import Rect

BUTTON_WIDTH = 80
BUTTON_HEIGHT = 83
BUTTON_GAP = 32
LEFT_BUTTON = 1
ESCAPE = "escape"

_TYPES_OF_BUTTON = 2

Point = Tuple[int, int]


class EventKind(Enum):
    """Kinds of input event the game reacts to."""

    QUIT = auto()
    KEY_DOWN = auto()
    KEY_UP = auto()
    MOUSE_DOWN = auto()
    MOUSE_UP = auto()
    MOUSE_MOTION = auto()


@dataclass(frozen=True)
class InputEvent:
    """One input event; ``key`` is a lower-case key name such as ``"escape"``."""

    kind: EventKind
    key: Optional[str] = None
    pos: Point = (0, 0)
    button: int = LEFT_BUTTON
    repeat: bool = False


def _clips(row: int) -> list[Rect]:
    return [
        Rect(i * BUTTON_WIDTH, row * BUTTON_HEIGHT, BUTTON_WIDTH, BUTTON_HEIGHT)
        for i in range(_TYPES_OF_BUTTON)
    ]


class Menu:
    """Tracks menu, pause and retry state from mouse and keyboard input."""

    def __init__(self) -> None:
        self.play_clips = _clips(0)
        self.exit_clips = _clips(1)
        self.retry_clips = _clips(2)
        self.button1: Point = (SCREEN_WIDTH // 2 - BUTTON_WIDTH // 2, SCREEN_HEIGHT // 2)
        self.button2: Point = (
            SCREEN_WIDTH // 2 - BUTTON_WIDTH // 2,
            SCREEN_HEIGHT // 2 + BUTTON_HEIGHT + BUTTON_GAP,
        )
        self.in_menu = True
        self.paused = False
        self.needs_reset = False
        self.selected = [False] * 4
        self.pressed = [False] * 4

    def hover(self, button: Point, point: Point) -> bool:
        """True when ``point`` lies on the button whose top-left is ``button``."""
        bx, by = button
        x, y = point
        return bx <= x <= bx + BUTTON_WIDTH and by <= y <= by + BUTTON_HEIGHT

    def handle(self, event: InputEvent, player_dead: bool) -> bool:
        """Update menu state from ``event``; return True when the game should quit."""
        quit_requested = False
        if event.kind is EventKind.MOUSE_DOWN:
            if event.button == LEFT_BUTTON:
                on_first = self.hover(self.button1, event.pos)
                on_second = self.hover(self.button2, event.pos)
                if self.in_menu:
                    if on_first:
                        self.pressed[0] = True
                        self.in_menu = False
                    if on_second:
                        self.pressed[1] = True
                        quit_requested = True
                if player_dead:
                    if on_first:
                        self.pressed[2] = True
                        self.needs_reset = True
                    if on_second:
                        self.pressed[3] = True
                        quit_requested = True
        elif event.kind is EventKind.MOUSE_UP:
            self.pressed = [False] * 4
        elif event.kind is EventKind.MOUSE_MOTION:
            on_first = self.hover(self.button1, event.pos)
            on_second = self.hover(self.button2, event.pos)
            if self.in_menu:
                self.selected[0] = on_first and not self.pressed[0]
                self.selected[1] = on_second and not self.pressed[1]
            if player_dead:
                self.selected[2] = on_first and not self.pressed[2]
                self.selected[3] = on_second and not self.pressed[3]
        elif event.kind is EventKind.KEY_DOWN:
            if not event.repeat and event.key == ESCAPE:
                self.paused = not self.paused
        return quit_requested

    def main_menu_clips(self) -> list[tuple[Point, Rect]]:
        """Button positions and sprite clips for the main menu; empty once left."""
        if not self.in_menu:
            return []
        return [
            (self.button1, self.play_clips[int(self.selected[0])]),
            (self.button2, self.exit_clips[int(self.selected[1])]),
        ]

    def retry_menu_clips(self) -> list[tuple[Point, Rect]]:
        """Button positions and sprite clips for the game-over screen."""
        return [
            (self.button1, self.retry_clips[int(self.selected[2])]),
            (self.button2, self.exit_clips[int(self.selected[3])]),
        ]