"""Span query API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...encoding import encode_span


class RecorderStatusResponse(BaseModel):
    """Response model for recorder status."""

    pending: int
    stored: int


def create_spans_router(app: IApplication) -> APIRouter:
    """Create span query router."""
    router = APIRouter(prefix="/api", tags=["spans"])

    @router.get("/spans")
    async def get_spans(
        trace_id: str | None = Query(None, alias="traceId"),
        service_name: str | None = Query(None, alias="serviceName"),
        limit: int = Query(100, ge=1, le=1000),
    ) -> list[dict[str, Any]]:
        """Get stored spans, newest first."""
        try:
            await app.flush()
            spans = await app.storage.get_spans(
                trace_id=trace_id, service_name=service_name, limit=limit
            )
            return [encode_span(s) for s in spans]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/traces/{trace_id}")
    async def get_trace(trace_id: str) -> list[dict[str, Any]]:
        """Get every stored span of one trace."""
        try:
            await app.flush()
            spans = await app.storage.get_trace(trace_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not spans:
            raise HTTPException(status_code=404, detail=f"Trace {trace_id} not found")
        return [encode_span(s) for s in spans]

    @router.get("/status", response_model=RecorderStatusResponse)
    async def get_status() -> dict:
        """Pending partial spans and stored span count."""
        await app.flush()
        return {
            "pending": app.recorder.pending,
            "stored": await app.storage.count(),
        }

    return router
