"""Seekable, variable-speed playback over an already-fetched location history."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from onigokko.errors import InvalidInputError

T = TypeVar('T')

DEFAULT_BASE_PERIOD_MS = 1000


class ReplayCursor(Generic[T]):
    """Playback state over a fixed sequence of frames.

    Seeking always pauses. Autoplay stops on the last frame and does not loop.
    """

    def __init__(
        self,
        frames: Sequence[T],
        *,
        speed_multiplier: float = 1,
        base_period_ms: int = DEFAULT_BASE_PERIOD_MS,
    ) -> None:
        if not frames:
            raise InvalidInputError('Cannot replay an empty history.')
        if base_period_ms <= 0:
            raise InvalidInputError(f'Base period must be positive, got {base_period_ms}.')
        self.frames = frames
        self.base_period_ms = base_period_ms
        self.index = 0
        self.playing = False
        self.speed_multiplier = 1.0
        self.set_speed(speed_multiplier)

    @property
    def last_index(self) -> int:
        return len(self.frames) - 1

    @property
    def current(self) -> T:
        return self.frames[self.index]

    @property
    def progress(self) -> float:
        """Fraction of the sequence played, in [0, 1]."""
        if self.last_index == 0:
            return 0.0
        return self.index / self.last_index

    @property
    def period_ms(self) -> float:
        return self.base_period_ms / self.speed_multiplier

    def set_speed(self, multiplier: float) -> None:
        if multiplier <= 0:
            raise InvalidInputError(f'Speed multiplier must be positive, got {multiplier}.')
        self.speed_multiplier = multiplier

    def play(self) -> None:
        if self.index == self.last_index:
            self.index = 0
        # A single frame has nothing to advance to.
        self.playing = self.last_index > 0

    def pause(self) -> None:
        self.playing = False

    def reset(self) -> None:
        self.playing = False
        self.index = 0

    def seek(self, index: int) -> None:
        self.index = min(max(index, 0), self.last_index)
        self.playing = False

    def tick(self) -> bool:
        """Advance one frame if playing. Returns True if the index moved."""
        if not self.playing:
            return False
        if self.index >= self.last_index:
            self.playing = False
            return False
        self.index += 1
        if self.index == self.last_index:
            self.playing = False
        return True


class ReplayPlayer(Generic[T]):
    """Drives a ReplayCursor's autoplay timer on the running event loop.

    Every manual transition cancels the pending timer task before touching the
    cursor, so a tick can never land between a transition and its effect.
    """

    def __init__(
        self,
        cursor: ReplayCursor[T],
        on_frame: Callable[[int, T], None] | None = None,
    ) -> None:
        self.cursor = cursor
        self._on_frame = on_frame
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def play(self) -> None:
        self._cancel_timer()
        self.cursor.play()
        self._start_timer()

    def pause(self) -> None:
        self._cancel_timer()
        self.cursor.pause()

    def reset(self) -> None:
        self._cancel_timer()
        self.cursor.reset()

    def seek(self, index: int) -> None:
        self._cancel_timer()
        self.cursor.seek(index)

    def set_speed(self, multiplier: float) -> None:
        self._cancel_timer()
        self.cursor.set_speed(multiplier)
        if self.cursor.playing:
            self._start_timer()

    def stop(self) -> None:
        """Stop the timer without changing the cursor (e.g. when the viewer closes)."""
        self._cancel_timer()

    async def wait(self) -> None:
        """Wait until autoplay reaches the last frame or is stopped."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    def _start_timer(self) -> None:
        if self.cursor.playing:
            self._task = asyncio.get_running_loop().create_task(self._run())

    def _cancel_timer(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while self.cursor.playing:
            await asyncio.sleep(self.cursor.period_ms / 1000)
            if self.cursor.tick() and self._on_frame is not None:
                self._on_frame(self.cursor.index, self.cursor.current)
