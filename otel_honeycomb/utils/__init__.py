"""Utility helpers."""

from otel_honeycomb.utils.helpers import (
    duration_ms,
    encode_trace_id,
    format_span_id,
    is_zero_id,
    ns_to_datetime,
    timestamp_to_ns,
)

__all__ = [
    "duration_ms",
    "encode_trace_id",
    "format_span_id",
    "is_zero_id",
    "ns_to_datetime",
    "timestamp_to_ns",
]
