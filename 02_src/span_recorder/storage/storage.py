"""SQLite span storage."""

import json
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..encoding import decode_span, encode_span
from ..models import Span


class ISpanStorage(Protocol):
    """Persistent storage for finished spans (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def save_spans(self, spans: list[Span]) -> None:
        """Save a batch of spans."""
        ...

    async def get_spans(
        self,
        trace_id: str | None = None,
        service_name: str | None = None,
        limit: int = 100,
    ) -> list[Span]:
        """Get spans with optional filters (newest first)."""
        ...

    async def get_trace(self, trace_id: str) -> list[Span]:
        """Get all spans of a trace in the order they were stored."""
        ...

    async def count(self) -> int:
        """Number of stored spans."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


class SpanStorage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def save_spans(self, spans: list[Span]) -> None:
        """Save a batch of spans."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.executemany(
            """
            INSERT INTO spans
            (trace_id, span_id, parent_id, name, kind, service_name, timestamp, duration, data)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    span.trace_id,
                    span.id,
                    span.parent_id,
                    span.name,
                    span.kind.value if span.kind else None,
                    span.local_endpoint.service_name if span.local_endpoint else None,
                    span.timestamp,
                    span.duration,
                    json.dumps(encode_span(span)),
                )
                for span in spans
            ],
        )
        await self._conn.commit()

    async def get_spans(
        self,
        trace_id: str | None = None,
        service_name: str | None = None,
        limit: int = 100,
    ) -> list[Span]:
        """Get spans with optional filters (newest first)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        conditions = []
        params: list = []

        if trace_id:
            conditions.append("trace_id = ?")
            params.append(trace_id)
        if service_name:
            conditions.append("service_name = ?")
            params.append(service_name)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT data
            FROM spans
            {where_clause}
            ORDER BY row_id DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        return [decode_span(json.loads(row[0])) for row in rows]

    async def get_trace(self, trace_id: str) -> list[Span]:
        """Get all spans of a trace in the order they were stored."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT data
            FROM spans
            WHERE trace_id = ?
            ORDER BY row_id ASC
            """,
            (trace_id,),
        )
        rows = await cursor.fetchall()

        return [decode_span(json.loads(row[0])) for row in rows]

    async def count(self) -> int:
        """Number of stored spans."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute("SELECT COUNT(*) FROM spans")
        row = await cursor.fetchone()
        return row[0]

    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute("DELETE FROM spans")
        await self._conn.commit()
