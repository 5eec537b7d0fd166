"""Span model shared by the decoder and the exporter."""

from otel_honeycomb.tracer.span import Attribute, Event, Link, SpanSnapshot, attributes_from_mapping
from otel_honeycomb.tracer.span_context import INVALID_SPAN_ID, INVALID_TRACE_ID, SpanContext, SpanKind

__all__ = [
    "Attribute",
    "Event",
    "Link",
    "SpanSnapshot",
    "SpanContext",
    "SpanKind",
    "INVALID_SPAN_ID",
    "INVALID_TRACE_ID",
    "attributes_from_mapping",
]
