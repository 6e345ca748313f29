"""Record model consumed by the recorder."""

from dataclasses import dataclass

from .annotations import Annotation
from .trace_id import TraceId


@dataclass(frozen=True)
class Record:
    """One annotation observed for one span."""

    trace_id: TraceId
    timestamp: int  # microseconds since epoch, used by Message
    annotation: Annotation
