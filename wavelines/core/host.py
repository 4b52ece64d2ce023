from __future__ import annotations

import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class VirtualHost:
    """Single-threaded stand-in for a browser event loop.

    Frames requested during a refresh run on the next one, like
    requestAnimationFrame. Timeouts fire in due order before the frames of the
    refresh in which they become due.
    """

    def __init__(self, frame_interval: float = 1 / 60, start: float = 0.0):
        self.frame_interval = float(frame_interval)
        self.now = float(start)
        self._ids = itertools.count(1)
        self._frames: dict[int, Callable[[], None]] = {}
        self._timers: dict[int, tuple[float, Callable[[], None]]] = {}

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    @property
    def pending_timeouts(self) -> int:
        return len(self._timers)

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._frames[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._frames.pop(handle, None)

    def set_timeout(self, delay: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._timers[handle] = (self.now + max(0.0, float(delay)), callback)
        return handle

    def clear_timeout(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def _fire_timers(self) -> None:
        while True:
            due = [(when, h) for h, (when, _) in self._timers.items() if when <= self.now + 1e-12]
            if not due:
                return
            _, handle = min(due)
            _, callback = self._timers.pop(handle)
            callback()

    def step(self) -> int:
        """Advance one display refresh; return how many frame callbacks ran."""
        self.now += self.frame_interval
        self._fire_timers()
        frames, self._frames = self._frames, {}
        for callback in frames.values():
            callback()
        return len(frames)

    def run(self, steps: int) -> int:
        return sum(self.step() for _ in range(max(0, int(steps))))

    def advance_to(self, when: float, max_steps: int = 240) -> int:
        """Catch up to wall-clock ``when``, dropping refreshes beyond ``max_steps``."""
        ran = 0
        steps = 0
        while self.now + self.frame_interval <= when:
            if steps >= max_steps:
                logger.debug("host fell behind by %.3fs, skipping ahead", when - self.now)
                self.now = when - self.frame_interval
            ran += self.step()
            steps += 1
        return ran
