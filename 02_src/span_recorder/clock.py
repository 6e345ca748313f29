"""Clock primitives used for span timing."""

import time
from typing import Protocol


class IClock(Protocol):
    """Wall-clock and monotonic time sources."""

    def now(self) -> int:
        """Wall-clock time in microseconds since epoch."""
        ...

    def tick(self) -> int:
        """Monotonic tick in nanoseconds. Only differences are meaningful."""
        ...

    def now_since(self, start_timestamp: int, start_tick: int) -> int:
        """start_timestamp advanced by the monotonic time elapsed since start_tick."""
        ...


class SystemClock:
    """Clock backed by the system time sources."""

    def now(self) -> int:
        return time.time_ns() // 1000

    def tick(self) -> int:
        return time.monotonic_ns()

    def now_since(self, start_timestamp: int, start_tick: int) -> int:
        return start_timestamp + (self.tick() - start_tick) // 1000
