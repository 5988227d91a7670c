"""A pausable millisecond stopwatch."""

from __future__ import annotations

import time
from typing import Callable, Optional


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Stopwatch that can be started, stopped, paused and resumed.

    ``clock`` returns the current time in milliseconds.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._start_ticks = 0
        self._paused_ticks = 0
        self._paused = False
        self._started = False

    def start(self) -> None:
        if not self._started:
            self._started = True
            self._paused = False
            self._start_ticks = self._clock()
            self._paused_ticks = 0

    def stop(self) -> None:
        self._started = False
        self._paused = False
        self._start_ticks = 0
        self._paused_ticks = 0

    def pause(self) -> None:
        if self._started and not self._paused:
            self._paused = True
            self._paused_ticks = self._clock() - self._start_ticks
            self._start_ticks = 0

    def unpause(self) -> None:
        if self._started and self._paused:
            self._paused = False
            self._start_ticks = self._clock() - self._paused_ticks
            self._paused_ticks = 0

    def ticks(self) -> int:
        """Milliseconds counted so far; 0 when the timer is not started."""
        if not self._started:
            return 0
        if self._paused:
            return self._paused_ticks
        return self._clock() - self._start_ticks

    def is_started(self) -> bool:
        return self._started

    def is_paused(self) -> bool:
        return self._paused and self._started