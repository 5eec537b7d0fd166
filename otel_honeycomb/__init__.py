"""OpenTelemetry span exporter for Honeycomb."""

from otel_honeycomb.exporter import (
    ExporterConfig,
    FieldSet,
    HoneycombSpanExporter,
    SpanEncoder,
    emit,
    load_config,
    register,
)
from otel_honeycomb.errors import (
    ConfigError,
    HoneycombExporterError,
    TransmissionError,
    ValidationError,
)
from otel_honeycomb.tracer import Attribute, Event, Link, SpanContext, SpanKind, SpanSnapshot
from otel_honeycomb.translator import decode_span, decode_spans
from otel_honeycomb.utils import encode_trace_id
from otel_honeycomb.version import __version__

__all__ = [
    "Attribute",
    "ConfigError",
    "Event",
    "ExporterConfig",
    "FieldSet",
    "HoneycombExporterError",
    "HoneycombSpanExporter",
    "Link",
    "SpanContext",
    "SpanEncoder",
    "SpanKind",
    "SpanSnapshot",
    "TransmissionError",
    "ValidationError",
    "__version__",
    "decode_span",
    "decode_spans",
    "emit",
    "encode_trace_id",
    "load_config",
    "register",
]
