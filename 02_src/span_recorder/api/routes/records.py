"""Record ingestion API routes."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...logging_config import get_logger
from ...models import Record, TraceId, annotation_from_dict

logger = get_logger(__name__)


class TraceIdRequest(BaseModel):
    """Span identity as sent by instrumentation."""

    model_config = ConfigDict(populate_by_name=True)

    trace_id: str = Field(alias="traceId")
    span_id: str = Field(alias="spanId")
    parent_id: str | None = Field(default=None, alias="parentId")
    sampled: bool | None = None
    debug: bool = False
    shared: bool = False

    def to_trace_id(self) -> TraceId:
        return TraceId(
            trace_id=self.trace_id,
            span_id=self.span_id,
            parent_span_id=self.parent_id,
            shared=self.shared,
            sampled=self.sampled,
            debug=self.debug,
        )


class RecordRequest(BaseModel):
    """Request model for one annotation record."""

    model_config = ConfigDict(populate_by_name=True)

    trace_id: TraceIdRequest = Field(alias="traceId")
    timestamp: int | None = None  # microseconds since epoch
    annotation: dict[str, Any]


class DefaultTagsRequest(BaseModel):
    """Request model for replacing default tags."""

    tags: dict[str, Any]


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_records_router(app: IApplication) -> APIRouter:
    """Create record ingestion router."""
    router = APIRouter(prefix="/api", tags=["records"])

    @router.post("/records", response_model=StatusResponse)
    async def post_record(request: RecordRequest) -> dict:
        """Apply one annotation record to the recorder."""
        try:
            annotation = annotation_from_dict(request.annotation)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        timestamp = request.timestamp
        if timestamp is None:
            timestamp = app.clock.now()

        try:
            app.recorder.record(
                Record(
                    trace_id=request.trace_id.to_trace_id(),
                    timestamp=timestamp,
                    annotation=annotation,
                )
            )
        except Exception as e:
            logger.exception("Failed to record annotation")
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    @router.put("/default-tags", response_model=StatusResponse)
    async def put_default_tags(request: DefaultTagsRequest) -> dict:
        """Replace tags applied to spans created from now on."""
        app.recorder.set_default_tags(request.tags)
        return {"status": "ok"}

    return router
