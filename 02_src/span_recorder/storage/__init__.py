"""Storage module."""

from .storage import ISpanStorage, SpanStorage

__all__ = ["ISpanStorage", "SpanStorage"]
