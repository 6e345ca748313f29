"""API routes."""

from .records import create_records_router
from .spans import create_spans_router

__all__ = ["create_records_router", "create_spans_router"]
