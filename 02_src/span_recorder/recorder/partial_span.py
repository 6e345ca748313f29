"""Per-span accumulation state."""

from typing import Any, Mapping

from ..clock import IClock
from ..models import Endpoint, Span, TraceId


class PartialSpan:
    """A span under construction from annotation events."""

    def __init__(self, trace_id: TraceId, clock: IClock):
        self.trace_id = trace_id
        self._clock = clock
        self.start_timestamp = clock.now()
        self.start_tick = clock.tick()
        self.end_timestamp: int | None = None
        self.delegate = Span.from_trace_id(trace_id)
        self.local_endpoint = Endpoint()

    @classmethod
    def create(
        cls,
        trace_id: TraceId,
        default_tags: Mapping[str, Any] | None,
        clock: IClock,
    ) -> "PartialSpan":
        """Allocate a partial span carrying the given default tags."""
        span = cls(trace_id, clock)
        for key, value in (default_tags or {}).items():
            span.delegate.put_tag(key, value)
        return span

    def finish(self) -> None:
        """Set end_timestamp from the monotonic clock. Idempotent."""
        if self.end_timestamp is not None:
            return
        self.end_timestamp = self._clock.now_since(self.start_timestamp, self.start_tick)

    def is_finished(self) -> bool:
        return self.end_timestamp is not None

    def age(self) -> int:
        """Wall-clock microseconds since creation."""
        return self._clock.now() - self.start_timestamp
