"""Ships spans to a Zipkin-compatible collector over HTTP."""

import httpx

from ..config import DEFAULT_FLUSH_INTERVAL_SECONDS, DEFAULT_MAX_QUEUE_SIZE
from ..encoding import encode_spans
from ..logging_config import get_logger
from ..models import Span
from .batching import BatchingSpanLogger

logger = get_logger(__name__)


class HttpSpanLogger(BatchingSpanLogger):
    """POSTs JSON v2 span batches to ``endpoint`` (e.g. .../api/v2/spans)."""

    def __init__(
        self,
        endpoint: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        flush_interval: float = DEFAULT_FLUSH_INTERVAL_SECONDS,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ):
        super().__init__(flush_interval=flush_interval, max_queue_size=max_queue_size)
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def stop(self) -> None:
        await super().stop()
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, spans: list[Span]) -> None:
        try:
            response = await self._client.post(
                self._endpoint,
                content=encode_spans(spans),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error("Error sending %d spans to %s: %s", len(spans), self._endpoint, e)
            return

        if response.is_error:
            logger.error(
                "Collector %s rejected %d spans: %s %s",
                self._endpoint,
                len(spans),
                response.status_code,
                response.text[:200],
            )
            return

        logger.debug("Sent %d spans to %s", len(spans), self._endpoint)
