"""Tick-driven timers owned by the quiz-taking machine."""

from __future__ import annotations


class CountdownTimer:
    """Counts whole seconds down to zero once started."""

    def __init__(self) -> None:
        self._seconds_left = 0
        self._running = False
        self._expired = False

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    @property
    def running(self) -> bool:
        return self._running

    @property
    def expired(self) -> bool:
        return self._expired

    def start(self, seconds: int) -> None:
        if seconds <= 0:
            raise ValueError("Countdown must start from a positive number of seconds.")
        self._seconds_left = seconds
        self._running = True
        self._expired = False

    def stop(self) -> None:
        self._running = False

    def clear(self) -> None:
        """Stop and forget the remaining time (used for untimed questions)."""
        self._running = False
        self._expired = False
        self._seconds_left = 0

    def tick(self) -> bool:
        """Advance one second; return True on the tick that reaches zero."""
        if not self._running:
            return False
        self._seconds_left -= 1
        if self._seconds_left <= 0:
            self._seconds_left = 0
            self._running = False
            self._expired = True
            return True
        return False


class ElapsedTimer:
    """Counts whole seconds up from the start of a session."""

    def __init__(self) -> None:
        self._elapsed = 0
        self._running = False

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._elapsed = 0
        self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self) -> None:
        if self._running:
            self._elapsed += 1
