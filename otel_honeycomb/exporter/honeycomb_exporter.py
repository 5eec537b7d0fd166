"""OpenTelemetry span exporter that sends spans to Honeycomb via libhoney."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional, Sequence, TYPE_CHECKING

import libhoney
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SimpleSpanProcessor,
    SpanExporter,
    SpanExportResult,
)

from otel_honeycomb.errors import ConfigError, TransmissionError, ValidationError
from otel_honeycomb.exporter.config import ExporterConfig, load_config
from otel_honeycomb.exporter.encoder import SpanEncoder
from otel_honeycomb.exporter.response_logger import ErrorHook, ResponseErrorLogger, log_error
from otel_honeycomb.tracer.span import SpanSnapshot
from otel_honeycomb.utils.helpers import encode_trace_id, ns_to_datetime
from otel_honeycomb.version import __version__

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan, TracerProvider

logger = logging.getLogger("otel_honeycomb.exporter")

USER_AGENT = f"otel-honeycomb-exporter/{__version__}"


def user_agent(addition: str = "") -> str:
    if addition:
        return f"{USER_AGENT} {addition}"
    return USER_AGENT


def emit(
    snapshot: SpanSnapshot,
    encoder: SpanEncoder,
    client: Any,
    on_error: Optional[ErrorHook] = None,
    *,
    debug: bool = False,
) -> None:
    """
    Encode a snapshot and hand every resulting event to the client.

    A record that fails to build (a raising dynamic field) or to send is
    reported to on_error and does not stop the remaining events.

    Args:
        snapshot: finished span
        encoder: SpanEncoder holding exporter fields and service name
        client: libhoney Client (or anything with a compatible new_event())
        on_error: error hook, defaults to logging

    Raises:
        ValidationError: if the snapshot or the client is missing
    """
    if client is None:
        raise ValidationError("expected a libhoney client")
    on_error = on_error or log_error

    for build in encoder.record_builders(snapshot):
        try:
            record = build()
        except Exception as e:
            err = ValidationError(
                f"failed to build event: {e}",
                details={"name": snapshot.name, "trace.trace_id": encode_trace_id(snapshot.context.trace_id)},
            )
            err.__cause__ = e
            on_error(err)
            continue
        if debug:
            logger.debug("sending event %s", record.fields)
        try:
            event = client.new_event()
            # Zero timestamps keep libhoney's default (now).
            if record.timestamp:
                event.created_at = ns_to_datetime(record.timestamp)
            event.add(record.fields)
            event.send_presampled()
        except Exception as e:
            err = TransmissionError(
                f"failed to send event: {e}",
                details={"name": record.fields.get("name"), "trace.trace_id": record.fields.get("trace.trace_id")},
            )
            err.__cause__ = e
            on_error(err)


class HoneycombSpanExporter(SpanExporter):
    """
    Exports finished spans to a Honeycomb dataset.

    Each exporter owns its libhoney client; exporters never share
    transmission state.
    """

    def __init__(
        self,
        config: Optional[ExporterConfig] = None,
        *,
        transmission_impl: Any = None,
        **overrides: Any,
    ) -> None:
        """
        Initialize the exporter.

        Args:
            config: ExporterConfig; loaded from the environment when omitted
            transmission_impl: libhoney transmission to use instead of the
                default threaded HTTP transmission
            **overrides: ExporterConfig options that take precedence

        Raises:
            ValidationError: if a mandatory option (API key, dataset) is empty
            ConfigError: if an override names an unknown option
        """
        if config is None:
            config = load_config(overrides)
        elif overrides:
            try:
                config = dataclasses.replace(config, **overrides)
            except TypeError as e:
                raise ConfigError("unknown exporter option", details={"error": str(e)}) from e
        config.validate()

        self.config = config
        self.on_error = config.on_error
        self.encoder = SpanEncoder(config.fields, service_name=config.service_name)
        self.client = libhoney.Client(
            writekey=config.api_key,
            dataset=config.dataset,
            api_host=config.api_host,
            transmission_impl=transmission_impl,
            user_agent_addition=user_agent(config.user_agent_addition),
            debug=config.debug,
        )
        self._response_logger = ResponseErrorLogger(self.client.responses(), self.on_error).start()
        self._shutdown = False

    def export(self, spans: Sequence["ReadableSpan"]) -> SpanExportResult:
        """
        Export a batch of finished spans, in order.

        Send failures go to the error hook; the batch still reports success.
        """
        if self._shutdown:
            logger.warning("exporter already shut down, dropping %d spans", len(spans))
            return SpanExportResult.FAILURE

        for span in spans:
            try:
                snapshot = SpanSnapshot.from_readable_span(span)
            except Exception as e:
                err = ValidationError(
                    f"could not convert span: {e}", details={"name": getattr(span, "name", None)}
                )
                err.__cause__ = e
                self.on_error(err)
                continue
            self.export_snapshot(snapshot)
        return SpanExportResult.SUCCESS

    def export_snapshot(self, snapshot: SpanSnapshot) -> None:
        """Send a snapshot that did not come from the SDK (e.g. a decoded proto span)."""
        emit(snapshot, self.encoder, self.client, self.on_error, debug=self.config.debug)

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        if self._shutdown:
            return True
        self.client.flush()
        return True

    def shutdown(self) -> None:
        """Wait for in-flight events and stop the client. Safe to call twice."""
        if self._shutdown:
            return
        self._shutdown = True
        self.client.close()
        self._response_logger.stop(timeout=self._response_logger.poll_interval * 2)


def register(
    provider: "TracerProvider",
    exporter: HoneycombSpanExporter,
    *,
    batch: bool = True,
) -> None:
    """Attach the exporter to an SDK TracerProvider."""
    processor = BatchSpanProcessor(exporter) if batch else SimpleSpanProcessor(exporter)
    provider.add_span_processor(processor)
