"""Tests for span loggers."""

import asyncio
import json

import httpx

from span_recorder.encoding import encode_span
from span_recorder.models import Span
from span_recorder.span_logger import (
    BatchingSpanLogger,
    CollectingSpanLogger,
    FanOutSpanLogger,
    HttpSpanLogger,
    StorageSpanLogger,
)

ENDPOINT = "http://zipkin:9411/api/v2/spans"


def make_span(span_id: str = "s1") -> Span:
    return Span(trace_id="t1", id=span_id, name="op")


class RecordingLogger(BatchingSpanLogger):
    """BatchingSpanLogger that keeps sent batches."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.batches: list[list[Span]] = []

    async def _send(self, spans):
        self.batches.append(spans)


class TestCollectingSpanLogger:
    """Tests for CollectingSpanLogger."""

    def test_collects_and_clears(self):
        """Test that spans are kept until cleared."""
        collecting = CollectingSpanLogger()
        collecting.log_span(make_span())
        assert len(collecting.spans) == 1
        collecting.clear()
        assert collecting.spans == []


class TestFanOutSpanLogger:
    """Tests for FanOutSpanLogger."""

    def test_error_in_one_logger_does_not_affect_others(self):
        """Test that every logger receives the span even if one fails."""

        class FailingLogger:
            def log_span(self, span):
                raise RuntimeError("Test error")

        collecting = CollectingSpanLogger()
        fan_out = FanOutSpanLogger([FailingLogger(), collecting])

        fan_out.log_span(make_span())
        assert len(collecting.spans) == 1


class TestBatchingSpanLogger:
    """Tests for BatchingSpanLogger."""

    async def test_flush_sends_one_batch(self):
        """Test that queued spans go out together."""
        batching = RecordingLogger()
        batching.log_span(make_span("a"))
        batching.log_span(make_span("b"))

        assert await batching.flush() == 2
        assert [[s.id for s in b] for b in batching.batches] == [["a", "b"]]
        assert batching.queued == 0

    async def test_flush_empty_sends_nothing(self):
        """Test that an empty queue produces no batch."""
        batching = RecordingLogger()
        assert await batching.flush() == 0
        assert batching.batches == []

    async def test_queue_full_drops(self):
        """Test that spans beyond max_queue_size are dropped."""
        batching = RecordingLogger(max_queue_size=2)
        for i in range(5):
            batching.log_span(make_span(str(i)))
        assert batching.queued == 2

    async def test_background_flush(self):
        """Test that the running task flushes periodically."""
        batching = RecordingLogger(flush_interval=0.01)
        await batching.start()
        batching.log_span(make_span())
        await asyncio.sleep(0.1)
        assert len(batching.batches) == 1
        await batching.stop()

    async def test_stop_flushes_remaining(self):
        """Test that stop() sends what is still queued."""
        batching = RecordingLogger(flush_interval=60)
        await batching.start()
        batching.log_span(make_span())
        await batching.stop()
        assert len(batching.batches) == 1

    async def test_send_error_drops_batch(self):
        """Test that a failing send is logged, not raised, and not retried."""

        class FailingBatchLogger(BatchingSpanLogger):
            calls = 0

            async def _send(self, spans):
                FailingBatchLogger.calls += 1
                raise RuntimeError("down")

        batching = FailingBatchLogger()
        batching.log_span(make_span())
        await batching.flush()
        await batching.flush()
        assert FailingBatchLogger.calls == 1
        assert batching.queued == 0


    async def test_stop_keeps_batch_in_flight(self):
        """Test that stop() during a slow send still delivers the batch."""

        class SlowLogger(RecordingLogger):
            async def _send(self, spans):
                await asyncio.sleep(0.2)
                self.batches.append(spans)

        batching = SlowLogger(flush_interval=0.01)
        await batching.start()
        batching.log_span(make_span("s"))
        await asyncio.sleep(0.05)
        await batching.stop()

        assert [[s.id for s in b] for b in batching.batches] == [["s"]]
        assert batching.queued == 0


class TestHttpSpanLogger:
    """Tests for HttpSpanLogger."""

    async def test_posts_json_v2(self):
        """Test that a batch is POSTed as a JSON array."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_logger = HttpSpanLogger(ENDPOINT, client=client)

        span = make_span()
        http_logger.log_span(span)
        await http_logger.flush()

        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == ENDPOINT
        assert requests[0].headers["content-type"] == "application/json"
        assert json.loads(requests[0].content) == [encode_span(span)]

        await http_logger.stop()
        await client.aclose()

    async def test_error_status_is_not_raised(self):
        """Test that collector errors are logged only."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="boom")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_logger = HttpSpanLogger(ENDPOINT, client=client)

        http_logger.log_span(make_span())
        await http_logger.flush()
        await http_logger.flush()

        assert len(calls) == 1
        assert http_logger.queued == 0
        await client.aclose()

    async def test_connection_error_is_not_raised(self):
        """Test that transport errors are logged only."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_logger = HttpSpanLogger(ENDPOINT, client=client)

        http_logger.log_span(make_span())
        assert await http_logger.flush() == 1
        await client.aclose()


class TestStorageSpanLogger:
    """Tests for StorageSpanLogger."""

    async def test_flush_saves_to_storage(self, storage):
        """Test that flushed spans are persisted."""
        storage_logger = StorageSpanLogger(storage)
        storage_logger.log_span(make_span("a"))
        storage_logger.log_span(make_span("b"))
        await storage_logger.flush()

        assert await storage.count() == 2
