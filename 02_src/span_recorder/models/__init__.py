"""Data models for the span recorder."""

from . import annotations
from .annotations import Annotation, UnrecognizedAnnotation, annotation_from_dict
from .endpoint import Endpoint, InetAddress
from .record import Record
from .span import Kind, Span, SpanAnnotation
from .trace_id import TraceId

__all__ = [
    # Identity
    "TraceId",
    # Endpoints
    "Endpoint",
    "InetAddress",
    # Spans
    "Kind",
    "Span",
    "SpanAnnotation",
    # Records
    "Record",
    "Annotation",
    "UnrecognizedAnnotation",
    "annotation_from_dict",
    "annotations",
]
