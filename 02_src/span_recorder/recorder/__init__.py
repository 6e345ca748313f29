"""Recorder module."""

from .batch_recorder import TRANSITIONS, BatchRecorder, IRecorder
from .partial_span import PartialSpan

__all__ = ["BatchRecorder", "IRecorder", "PartialSpan", "TRANSITIONS"]
