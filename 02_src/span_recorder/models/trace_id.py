"""Trace identity model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TraceId:
    """Identity of one span instance.

    Equality and hashing are value based so that two events for the same
    span map to the same partial span even when they carry distinct
    TraceId objects. ``sampled`` and ``debug`` travel with the id but are
    not part of its identity.
    """

    trace_id: str
    span_id: str
    parent_span_id: str | None = None
    shared: bool = False
    sampled: bool | None = field(default=None, compare=False)
    debug: bool = field(default=False, compare=False)

    def is_shared(self) -> bool:
        """Whether the span is reused across a client/server boundary."""
        return self.shared

    def is_debug(self) -> bool:
        return self.debug

    def __str__(self) -> str:
        return (
            f"TraceId(traceId={self.trace_id}, parentSpanId={self.parent_span_id}, "
            f"spanId={self.span_id}, shared={self.shared})"
        )
