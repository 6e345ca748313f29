"""Span model handed to span loggers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .endpoint import Endpoint
from .trace_id import TraceId


class Kind(str, Enum):
    """Span kinds."""

    CLIENT = "CLIENT"
    SERVER = "SERVER"
    PRODUCER = "PRODUCER"
    CONSUMER = "CONSUMER"


@dataclass
class SpanAnnotation:
    """A timestamped event inside a span."""

    timestamp: int  # microseconds since epoch
    value: str


@dataclass
class Span:
    """The span being constructed from annotation events."""

    trace_id: str
    id: str
    parent_id: str | None = None
    name: str | None = None
    kind: Kind | None = None
    timestamp: int | None = None  # microseconds since epoch
    duration: int | None = None  # microseconds
    local_endpoint: Endpoint | None = None
    remote_endpoint: Endpoint | None = None
    annotations: list[SpanAnnotation] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    debug: bool = False
    shared: bool = False

    @classmethod
    def from_trace_id(cls, trace_id: TraceId) -> "Span":
        """Start an empty span for the given identity."""
        return cls(
            trace_id=trace_id.trace_id,
            id=trace_id.span_id,
            parent_id=trace_id.parent_span_id,
            debug=trace_id.is_debug(),
        )

    def set_name(self, name: str | None) -> None:
        self.name = name

    def set_kind(self, kind: Kind) -> None:
        self.kind = kind

    def set_timestamp(self, timestamp: int) -> None:
        self.timestamp = timestamp

    def set_duration(self, duration: int) -> None:
        # Zipkin rounds sub-microsecond durations up so they are never zero
        self.duration = max(duration, 1)

    def set_local_endpoint(self, endpoint: Endpoint) -> None:
        self.local_endpoint = endpoint

    def set_remote_endpoint(self, endpoint: Endpoint) -> None:
        self.remote_endpoint = endpoint

    def set_shared(self, shared: bool) -> None:
        self.shared = shared

    def add_annotation(self, timestamp: int, value: str) -> None:
        self.annotations.append(SpanAnnotation(timestamp=timestamp, value=value))

    def put_tag(self, key: str, value: Any) -> None:
        """Set a tag. Values are stored as strings; last write wins."""
        self.tags[key] = _tag_value(value)


def _tag_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
