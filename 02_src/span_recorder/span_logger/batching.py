"""Base class for loggers that ship spans in batches."""

import asyncio

from ..config import DEFAULT_FLUSH_INTERVAL_SECONDS, DEFAULT_MAX_QUEUE_SIZE
from ..logging_config import get_logger
from ..models import Span

logger = get_logger(__name__)


class BatchingSpanLogger:
    """Queues spans in log_span() and sends them from a background task.

    Subclasses implement ``_send``. A failed batch is logged and dropped;
    there is no retry.
    """

    def __init__(
        self,
        flush_interval: float = DEFAULT_FLUSH_INTERVAL_SECONDS,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ):
        self._flush_interval = flush_interval
        self._max_queue_size = max_queue_size
        self._queue: list[Span] = []
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def queued(self) -> int:
        return len(self._queue)

    def log_span(self, span: Span) -> None:
        """Queue a span for the next flush."""
        if len(self._queue) >= self._max_queue_size:
            logger.warning("Span queue full (%d), dropping span %s", self._max_queue_size, span.id)
            return
        self._queue.append(span)

    async def start(self) -> None:
        """Start the periodic flush."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._flush_loop())

    async def stop(self) -> None:
        """Stop the periodic flush and send whatever is still queued."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.flush()

    async def flush(self) -> int:
        """Send all queued spans as one batch. Returns the batch size."""
        if not self._queue:
            return 0

        batch, self._queue = self._queue, []
        try:
            await self._send(batch)
        except asyncio.CancelledError:
            # Interrupted by stop(); put the batch back for the final flush
            self._queue[:0] = batch
            raise
        except Exception:
            logger.exception("Failed to send %d spans", len(batch))
        return len(batch)

    async def _flush_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._flush_interval)
            await self.flush()

    async def _send(self, spans: list[Span]) -> None:
        raise NotImplementedError
