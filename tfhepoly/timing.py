"""Millisecond timers for measuring how long work takes."""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

from tfhepoly import log

Clock = Callable[[], float]


class ChronoTimer:
    """A restartable timer reporting whole milliseconds since it was started."""

    __slots__ = ("_clock", "_start")

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock if clock is not None else time.monotonic
        self._start: Optional[float] = None

    def clear(self) -> None:
        """Stop the timer."""
        self._start = None

    def start(self) -> None:
        """Start, or restart, the timer."""
        self._start = self._clock()

    def is_started(self) -> bool:
        """Whether the timer is running."""
        return self._start is not None

    def elapsed_ms(self) -> int:
        """Milliseconds since start; raises LogError if the timer is not running."""
        if self._start is None:
            log.error("ChronoTimer is not started")
            raise AssertionError("unreachable")
        return int((self._clock() - self._start) * 1000)


class StopWatch:
    """A named timer that reports its start, stop and lap times to a stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        activity: str = "StopWatch",
        start: bool = False,
    ) -> None:
        self._stream = stream
        self.activity = activity
        self._timer = ChronoTimer()
        self._lap = 0
        if start:
            self._timer.start()

    @property
    def stream(self) -> TextIO:
        """The stream that start and stop messages go to."""
        return self._stream if self._stream is not None else sys.stdout

    def is_started(self) -> bool:
        """Whether the stopwatch is running."""
        return self._timer.is_started()

    def start(self, message: Optional[str] = None) -> None:
        """Start timing, announcing the message first if one is given."""
        if message is not None:
            self.stream.write(f"{self.activity} {message}\n")
            self.stream.flush()
        self._timer.start()

    def lap(self) -> int:
        """Milliseconds since the previous lap (or since the start)."""
        current = self._timer.elapsed_ms()
        lap_time = current - self._lap
        self._lap = current
        return lap_time

    def show(self, message: str) -> None:
        """Print the elapsed time to standard output."""
        ms = self._timer.elapsed_ms()
        print(f"{self.activity}{message}{ms}ms", flush=True)

    def stop(self, event: str = "stop") -> int:
        """Report and return the elapsed milliseconds, then stop the timer."""
        ms = self._timer.elapsed_ms()
        self.stream.write(f"{self.activity} {event} {ms}ms\n")
        self.stream.flush()
        self._timer.clear()
        return ms