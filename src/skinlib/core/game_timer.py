"""
Game Timer

Frame clock producing the per-tick delta fed to animation instances.
"""

import time
from typing import Callable, Optional


class GameTimer:
    """
    Measures frame deltas and total running time.

    Time spent stopped is excluded from ``total_time``, and a stopped timer
    reports a zero delta.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        """
        Initialize timer.

        Args:
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self._clock = clock
        self._base_time = 0.0
        self._paused_time = 0.0
        self._stop_time: Optional[float] = None
        self._prev_time = 0.0
        self._curr_time = 0.0
        self._delta_time = -1.0

    @property
    def stopped(self) -> bool:
        return self._stop_time is not None

    @property
    def delta_time(self) -> float:
        return self._delta_time

    @property
    def total_time(self) -> float:
        """Seconds since reset(), not counting time spent stopped."""
        end = self._stop_time if self.stopped else self._curr_time
        return (end - self._paused_time) - self._base_time

    def reset(self):
        """Restart the timer (call before the message loop)."""
        now = self._clock()
        self._base_time = now
        self._prev_time = now
        self._curr_time = now
        self._paused_time = 0.0
        self._stop_time = None

    def start(self):
        """Resume after stop(), accumulating the paused interval."""
        if self.stopped:
            now = self._clock()
            self._paused_time += now - self._stop_time
            self._prev_time = now
            self._stop_time = None

    def stop(self):
        if not self.stopped:
            self._stop_time = self._clock()

    def tick(self) -> float:
        """
        Advance to the next frame.

        Returns:
            Seconds elapsed since the previous tick (0 while stopped)
        """
        if self.stopped:
            self._delta_time = 0.0
            return self._delta_time

        self._curr_time = self._clock()
        self._delta_time = self._curr_time - self._prev_time
        self._prev_time = self._curr_time

        # Clock can step backwards on some hardware
        if self._delta_time < 0.0:
            self._delta_time = 0.0
        return self._delta_time

    def __repr__(self):
        return f"GameTimer(total={self.total_time:.2f}s, dt={self._delta_time:.4f}s, stopped={self.stopped})"
