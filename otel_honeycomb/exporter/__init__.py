"""Exporters for delivering spans to Honeycomb."""

from otel_honeycomb.exporter.config import ExporterConfig, load_config
from otel_honeycomb.exporter.encoder import HoneycombRecord, RefType, SpanEncoder
from otel_honeycomb.exporter.fields import FieldSet
from otel_honeycomb.exporter.honeycomb_exporter import HoneycombSpanExporter, emit, register
from otel_honeycomb.exporter.response_logger import ResponseErrorLogger, log_error

__all__ = [
    "ExporterConfig",
    "FieldSet",
    "HoneycombRecord",
    "HoneycombSpanExporter",
    "RefType",
    "ResponseErrorLogger",
    "SpanEncoder",
    "emit",
    "load_config",
    "log_error",
    "register",
]
