"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Clock whose wall-clock and monotonic sources move under test control."""

    def __init__(self, now: int = 1_700_000_000_000_000, tick: int = 0):
        self._now = now
        self._tick = tick

    def now(self) -> int:
        return self._now

    def tick(self) -> int:
        return self._tick

    def now_since(self, start_timestamp: int, start_tick: int) -> int:
        return start_timestamp + (self._tick - start_tick) // 1000

    def advance(self, micros: int) -> None:
        """Move both sources forward by the same real elapsed time."""
        self._now += micros
        self._tick += micros * 1000

    def skew(self, micros: int) -> None:
        """Adjust only the wall clock, like an NTP step."""
        self._now += micros


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def span_logger():
    """Create an in-memory span logger."""
    from span_recorder.span_logger import CollectingSpanLogger

    return CollectingSpanLogger()


@pytest.fixture
def recorder(span_logger, clock):
    """Create BatchRecorder outside any event loop (no background sweep)."""
    from span_recorder.recorder import BatchRecorder

    return BatchRecorder(span_logger=span_logger, timeout=1_000_000, clock=clock)


@pytest.fixture
def trace_id():
    """Create a TraceId."""
    from span_recorder.models import TraceId

    return TraceId(trace_id="a" * 16, span_id="b" * 16, parent_span_id="c" * 16)


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from span_recorder.storage import SpanStorage

    st = SpanStorage(":memory:")
    await st.init()
    yield st
    await st.close()
