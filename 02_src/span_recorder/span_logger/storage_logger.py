"""Writes spans to SpanStorage."""

from ..config import DEFAULT_FLUSH_INTERVAL_SECONDS, DEFAULT_MAX_QUEUE_SIZE
from ..models import Span
from ..storage import ISpanStorage
from .batching import BatchingSpanLogger


class StorageSpanLogger(BatchingSpanLogger):
    """Persists span batches to storage."""

    def __init__(
        self,
        storage: ISpanStorage,
        flush_interval: float = DEFAULT_FLUSH_INTERVAL_SECONDS,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ):
        super().__init__(flush_interval=flush_interval, max_queue_size=max_queue_size)
        self._storage = storage

    async def _send(self, spans: list[Span]) -> None:
        await self._storage.save_spans(spans)
