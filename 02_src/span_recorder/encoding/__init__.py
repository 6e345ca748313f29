"""Span encoding module."""

from .json_v2 import decode_span, encode_span, encode_spans

__all__ = ["decode_span", "encode_span", "encode_spans"]
