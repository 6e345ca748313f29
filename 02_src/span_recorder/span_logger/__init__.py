"""Span logger module."""

from .batching import BatchingSpanLogger
from .http_logger import HttpSpanLogger
from .interface import CollectingSpanLogger, FanOutSpanLogger, ISpanLogger
from .storage_logger import StorageSpanLogger

__all__ = [
    "ISpanLogger",
    "CollectingSpanLogger",
    "FanOutSpanLogger",
    "BatchingSpanLogger",
    "HttpSpanLogger",
    "StorageSpanLogger",
]
