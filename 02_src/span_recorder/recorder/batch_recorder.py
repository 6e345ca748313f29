"""BatchRecorder: assembles spans from annotation records."""

import asyncio
from typing import Any, Callable, Mapping, Protocol

from ..clock import IClock, SystemClock
from ..config import DEFAULT_TIMEOUT_US, SWEEP_INTERVAL_SECONDS
from ..logging_config import get_logger
from ..models import Endpoint, Kind, Record, TraceId
from ..models.annotations import Annotation
from ..span_logger import ISpanLogger
from .partial_span import PartialSpan

logger = get_logger(__name__)


class IRecorder(Protocol):
    """Turns annotation records into finished spans."""

    def record(self, rec: Record) -> None:
        """Apply one record to the span it belongs to."""
        ...

    def set_default_tags(self, tags: Mapping[str, Any]) -> None:
        """Replace the tags applied to spans created from now on."""
        ...

    async def start(self) -> None:
        """Start the timeout sweep."""
        ...

    async def stop(self) -> None:
        """Stop the timeout sweep."""
        ...


Transition = Callable[[PartialSpan, Record], None]


def _remote_endpoint(annotation: Annotation) -> Endpoint:
    host = annotation.host
    return Endpoint(
        service_name=annotation.service_name,
        ipv4=host.ipv4() if host else None,
        port=annotation.port,
    )


def _client_send(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.CLIENT)


def _client_recv(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.CLIENT)
    span.finish()


def _server_send(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.SERVER)
    span.finish()


def _server_recv(span: PartialSpan, rec: Record) -> None:
    # Reported from the shared client-originated span, hence CLIENT
    span.delegate.set_shared(rec.trace_id.is_shared())
    span.delegate.set_kind(Kind.CLIENT)


def _producer_start(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.PRODUCER)


def _producer_stop(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.PRODUCER)
    span.finish()


def _consumer_start(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.CONSUMER)


def _consumer_stop(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.CONSUMER)
    span.finish()


def _message_addr(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_remote_endpoint(_remote_endpoint(rec.annotation))


def _set_name(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_name(rec.annotation.name)


def _local_operation_stop(span: PartialSpan, rec: Record) -> None:
    span.finish()


def _message(span: PartialSpan, rec: Record) -> None:
    span.delegate.add_annotation(rec.timestamp, rec.annotation.message)


def _service_name(span: PartialSpan, rec: Record) -> None:
    span.local_endpoint.set_service_name(rec.annotation.service_name)


def _binary_annotation(span: PartialSpan, rec: Record) -> None:
    span.delegate.put_tag(rec.annotation.key, rec.annotation.value)


def _local_addr(span: PartialSpan, rec: Record) -> None:
    host = rec.annotation.host
    span.local_endpoint.set_ipv4(host.ipv4() if host else None)
    span.local_endpoint.set_port(rec.annotation.port)


def _server_addr(span: PartialSpan, rec: Record) -> None:
    span.delegate.set_kind(Kind.CLIENT)
    span.delegate.set_remote_endpoint(_remote_endpoint(rec.annotation))


TRANSITIONS: dict[str, Transition] = {
    "ClientSend": _client_send,
    "ClientRecv": _client_recv,
    "ServerSend": _server_send,
    "ServerRecv": _server_recv,
    "ProducerStart": _producer_start,
    "ProducerStop": _producer_stop,
    "ConsumerStart": _consumer_start,
    "ConsumerStop": _consumer_stop,
    "MessageAddr": _message_addr,
    "LocalOperationStart": _set_name,
    "LocalOperationStop": _local_operation_stop,
    "Message": _message,
    "Rpc": _set_name,
    "ServiceName": _service_name,
    "BinaryAnnotation": _binary_annotation,
    "LocalAddr": _local_addr,
    "ServerAddr": _server_addr,
}


class BatchRecorder:
    """Collects annotation records into spans and reports them to a span logger.

    A span is reported as soon as a terminating annotation arrives. Spans
    that never finish are reported, without timestamp or duration, once
    they are older than ``timeout`` microseconds. The sweep that finds
    them runs every ``sweep_interval`` seconds on the running event loop.

    All state is touched only from the event loop thread; no locking.
    """

    def __init__(
        self,
        span_logger: ISpanLogger,
        timeout: int = DEFAULT_TIMEOUT_US,
        clock: IClock | None = None,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ):
        self._span_logger = span_logger
        self._timeout = timeout
        self._clock = clock or SystemClock()
        self._sweep_interval = sweep_interval
        self._partial_spans: dict[TraceId, PartialSpan] = {}
        self._default_tags: dict[str, Any] = {}
        self._sweep_task: asyncio.Task | None = None
        self._stopped = False

        # Spawn right away when constructed inside a running loop,
        # otherwise on start() or the first record() made from a loop.
        self._ensure_sweeper()

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def pending(self) -> int:
        """Number of spans still being accumulated."""
        return len(self._partial_spans)

    async def start(self) -> None:
        """Start the timeout sweep."""
        self._stopped = False
        self._ensure_sweeper()

    async def stop(self) -> None:
        """Stop the timeout sweep. Pending spans stay in memory."""
        self._stopped = True
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def record(self, rec: Record) -> None:
        """Apply one record to its partial span, reporting it if finished."""
        self._ensure_sweeper()
        self._update_span_map(rec.trace_id, lambda span: self._apply(span, rec))

    def set_default_tags(self, tags: Mapping[str, Any]) -> None:
        """Replace the tags applied to spans created after this call."""
        self._default_tags = dict(tags)

    def flush_all(self) -> None:
        """Report every pending span now, finished or not."""
        for trace_id in list(self._partial_spans):
            self._write_span(trace_id)

    def _apply(self, span: PartialSpan, rec: Record) -> None:
        transition = TRANSITIONS.get(rec.annotation.annotation_type)
        if transition is None:
            logger.debug("Ignoring annotation type %s", rec.annotation.annotation_type)
            return
        transition(span, rec)

    def _update_span_map(
        self, trace_id: TraceId, updater: Callable[[PartialSpan], None]
    ) -> None:
        span = self._partial_spans.get(trace_id)
        if span is None:
            span = PartialSpan.create(trace_id, self._default_tags, self._clock)
        updater(span)
        self._partial_spans[trace_id] = span
        if span.is_finished():
            self._write_span(trace_id)

    def _write_span(self, trace_id: TraceId) -> None:
        span = self._partial_spans.pop(trace_id, None)
        if span is None:
            # Already reported, e.g. expired by the sweep
            return

        span_to_write = span.delegate
        span_to_write.set_local_endpoint(span.local_endpoint)
        if span.end_timestamp is not None:
            span_to_write.set_timestamp(span.start_timestamp)
            span_to_write.set_duration(span.end_timestamp - span.start_timestamp)

        logger.debug("Reporting span %s", trace_id)
        try:
            self._span_logger.log_span(span_to_write)
        except Exception:
            logger.exception("Span logger failed for %s", trace_id)

    def _timed_out(self, span: PartialSpan) -> bool:
        return span.age() > self._timeout

    def _sweep(self) -> int:
        """Report spans older than the timeout. Returns how many were reported."""
        expired = [
            trace_id
            for trace_id, span in self._partial_spans.items()
            if self._timed_out(span)
        ]
        for trace_id in expired:
            self._write_span(trace_id)
        if expired:
            logger.info("Reported %d timed-out spans", len(expired))
        return len(expired)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self._sweep()
            except Exception:
                logger.exception("Timeout sweep failed")

    def _ensure_sweeper(self) -> None:
        if self._stopped or self._sweep_task is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._sweep_task = loop.create_task(self._sweep_loop())

    def __repr__(self) -> str:
        return "BatchRecorder()"
