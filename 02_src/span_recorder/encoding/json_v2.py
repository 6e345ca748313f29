"""Zipkin JSON v2 span encoding."""

import json
from typing import Any, Iterable

from ..models import Endpoint, Kind, Span, SpanAnnotation


def _encode_endpoint(endpoint: Endpoint | None) -> dict[str, Any] | None:
    if endpoint is None or endpoint.is_empty():
        return None
    data: dict[str, Any] = {}
    if endpoint.service_name is not None:
        data["serviceName"] = endpoint.service_name
    if endpoint.ipv4 is not None:
        data["ipv4"] = endpoint.ipv4
    if endpoint.port is not None:
        data["port"] = endpoint.port
    return data


def encode_span(span: Span) -> dict[str, Any]:
    """Convert a span to its JSON v2 mapping, omitting unset fields."""
    data: dict[str, Any] = {"traceId": span.trace_id}
    if span.parent_id:
        data["parentId"] = span.parent_id
    data["id"] = span.id
    if span.kind is not None:
        data["kind"] = span.kind.value
    if span.name is not None:
        data["name"] = span.name
    if span.timestamp is not None:
        data["timestamp"] = span.timestamp
    if span.duration is not None:
        data["duration"] = span.duration

    local_endpoint = _encode_endpoint(span.local_endpoint)
    if local_endpoint:
        data["localEndpoint"] = local_endpoint
    remote_endpoint = _encode_endpoint(span.remote_endpoint)
    if remote_endpoint:
        data["remoteEndpoint"] = remote_endpoint

    if span.annotations:
        data["annotations"] = [
            {"timestamp": a.timestamp, "value": a.value} for a in span.annotations
        ]
    if span.tags:
        data["tags"] = dict(span.tags)
    if span.debug:
        data["debug"] = True
    if span.shared:
        data["shared"] = True
    return data


def encode_spans(spans: Iterable[Span]) -> str:
    """Encode spans as a compact JSON array, the collector's POST body."""
    return json.dumps([encode_span(s) for s in spans], separators=(",", ":"))


def _decode_endpoint(data: dict[str, Any] | None) -> Endpoint | None:
    if not data:
        return None
    return Endpoint(
        service_name=data.get("serviceName"),
        ipv4=data.get("ipv4"),
        port=data.get("port"),
    )


def decode_span(data: dict[str, Any]) -> Span:
    """Rebuild a span from its JSON v2 mapping."""
    return Span(
        trace_id=data["traceId"],
        id=data["id"],
        parent_id=data.get("parentId"),
        name=data.get("name"),
        kind=Kind(data["kind"]) if data.get("kind") else None,
        timestamp=data.get("timestamp"),
        duration=data.get("duration"),
        local_endpoint=_decode_endpoint(data.get("localEndpoint")),
        remote_endpoint=_decode_endpoint(data.get("remoteEndpoint")),
        annotations=[
            SpanAnnotation(timestamp=a["timestamp"], value=a["value"])
            for a in data.get("annotations", [])
        ],
        tags=dict(data.get("tags", {})),
        debug=bool(data.get("debug", False)),
        shared=bool(data.get("shared", False)),
    )
