"""Span recorder: assembles spans from annotation records."""

from .app import Application, IApplication
from .clock import IClock, SystemClock
from .models import (
    Endpoint,
    InetAddress,
    Kind,
    Record,
    Span,
    SpanAnnotation,
    TraceId,
    annotation_from_dict,
)
from .recorder import BatchRecorder, IRecorder, PartialSpan
from .span_logger import (
    BatchingSpanLogger,
    CollectingSpanLogger,
    FanOutSpanLogger,
    HttpSpanLogger,
    ISpanLogger,
    StorageSpanLogger,
)
from .storage import ISpanStorage, SpanStorage

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Clock
    "IClock",
    "SystemClock",
    # Models
    "TraceId",
    "Endpoint",
    "InetAddress",
    "Kind",
    "Span",
    "SpanAnnotation",
    "Record",
    "annotation_from_dict",
    # Components
    "IRecorder",
    "BatchRecorder",
    "PartialSpan",
    "ISpanLogger",
    "CollectingSpanLogger",
    "FanOutSpanLogger",
    "BatchingSpanLogger",
    "HttpSpanLogger",
    "StorageSpanLogger",
    "ISpanStorage",
    "SpanStorage",
]
