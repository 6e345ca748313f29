"""Application bootstrap and lifecycle management."""

import os
from typing import Any, Mapping, Protocol

from .clock import IClock, SystemClock
from .config import parse_default_tags, resolve_db_path, resolve_timeout
from .logging_config import get_logger
from .recorder import BatchRecorder
from .span_logger import (
    BatchingSpanLogger,
    FanOutSpanLogger,
    HttpSpanLogger,
    ISpanLogger,
    StorageSpanLogger,
)
from .storage import ISpanStorage, SpanStorage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop stored spans."""
        ...

    async def flush(self) -> None:
        """Push queued spans through every span logger now."""
        ...

    @property
    def recorder(self) -> BatchRecorder: ...

    @property
    def storage(self) -> ISpanStorage: ...

    @property
    def clock(self) -> IClock: ...


class Application:
    """Wires storage, span loggers and the recorder together."""

    def __init__(
        self,
        db_path: str | None = None,
        zipkin_url: str | None = None,
        timeout: int | None = None,
        default_tags: Mapping[str, Any] | None = None,
        clock: IClock | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._zipkin_url = os.getenv("ZIPKIN_URL") if zipkin_url is None else zipkin_url
        self._timeout = resolve_timeout() if timeout is None else timeout
        self._default_tags = (
            parse_default_tags() if default_tags is None else dict(default_tags)
        )
        self._clock = clock or SystemClock()

        # Components (will be initialized in start())
        self._storage: ISpanStorage | None = None
        self._loggers: list[BatchingSpanLogger] = []
        self._recorder: BatchRecorder | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = SpanStorage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Span loggers (storage, optionally a remote collector)
        self._loggers = [StorageSpanLogger(self._storage)]
        if self._zipkin_url:
            self._loggers.append(HttpSpanLogger(self._zipkin_url))
            logger.info("Forwarding spans to %s", self._zipkin_url)
        for span_logger in self._loggers:
            await span_logger.start()

        span_sink: ISpanLogger = (
            self._loggers[0] if len(self._loggers) == 1 else FanOutSpanLogger(self._loggers)
        )

        # 3. Recorder (depends on span loggers)
        self._recorder = BatchRecorder(
            span_logger=span_sink, timeout=self._timeout, clock=self._clock
        )
        self._recorder.set_default_tags(self._default_tags)
        await self._recorder.start()
        logger.info("Recorder started (timeout=%dus)", self._timeout)

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._recorder:
            await self._recorder.stop()
            # Report what is left rather than lose it
            self._recorder.flush_all()
        for span_logger in self._loggers:
            await span_logger.stop()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Drop stored spans."""
        for span_logger in self._loggers:
            await span_logger.flush()
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    async def flush(self) -> None:
        """Push queued spans through every span logger now."""
        for span_logger in self._loggers:
            await span_logger.flush()

    @property
    def storage(self) -> ISpanStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def recorder(self) -> BatchRecorder:
        """Get recorder instance."""
        if not self._recorder:
            raise RuntimeError("Application not started")
        return self._recorder

    @property
    def clock(self) -> IClock:
        return self._clock
