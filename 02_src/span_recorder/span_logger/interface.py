"""Span logger contract and simple in-process loggers."""

from typing import Iterable, Protocol

from ..logging_config import get_logger
from ..models import Span

logger = get_logger(__name__)


class ISpanLogger(Protocol):
    """Receives finished spans from the recorder."""

    def log_span(self, span: Span) -> None:
        """Accept one span. Fire-and-forget; must not block."""
        ...


class CollectingSpanLogger:
    """Keeps reported spans in memory."""

    def __init__(self):
        self.spans: list[Span] = []

    def log_span(self, span: Span) -> None:
        self.spans.append(span)

    def clear(self) -> None:
        self.spans.clear()


class FanOutSpanLogger:
    """Hands every span to each wrapped logger.

    A failing logger does not stop the others from receiving the span.
    """

    def __init__(self, loggers: Iterable[ISpanLogger]):
        self._loggers = list(loggers)

    def log_span(self, span: Span) -> None:
        for i, span_logger in enumerate(self._loggers):
            try:
                span_logger.log_span(span)
            except Exception as e:
                logger.error("Error in span logger %s: %s", i, e)
