"""Decode legacy OpenCensus proto spans into span snapshots.

Only the subset of the wire format the exporter needs is translated:
attribute values outside the four scalar variants and time events other
than annotations are dropped without error.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from opencensus.proto.trace.v1 import trace_pb2
from opentelemetry.trace import StatusCode

from otel_honeycomb.errors import ValidationError
from otel_honeycomb.tracer.span import Attribute, Event, Link, SpanSnapshot
from otel_honeycomb.tracer.span_context import (
    INVALID_SPAN_ID,
    INVALID_TRACE_ID,
    SpanContext,
    SpanKind,
)
from otel_honeycomb.utils.helpers import timestamp_to_ns

logger = logging.getLogger("otel_honeycomb.translator")

# SpanKind INTERNAL, PRODUCER and CONSUMER have no OpenCensus equivalent.
_KINDS = {
    trace_pb2.Span.SPAN_KIND_UNSPECIFIED: SpanKind.UNSPECIFIED,
    trace_pb2.Span.SERVER: SpanKind.SERVER,
    trace_pb2.Span.CLIENT: SpanKind.CLIENT,
}

# Wire status codes use the OpenTelemetry Go numbering, where ERROR precedes OK.
_STATUS_CODES = {
    0: StatusCode.UNSET,
    1: StatusCode.ERROR,
    2: StatusCode.OK,
}

# Message given to spans that carry no status at all.
DEFAULT_STATUS_MESSAGE = "Ok"


def decode_span(span: Optional[trace_pb2.Span]) -> SpanSnapshot:
    """
    Convert an OpenCensus proto span to a SpanSnapshot.

    Args:
        span: opencensus.proto.trace.v1.Span message

    Returns:
        SpanSnapshot carrying the span's raw identifiers

    Raises:
        ValidationError: if span is None
    """
    if span is None:
        raise ValidationError("expected a non-nil span")

    status_code, status_message = _status(span)
    links = span.links if span.HasField("links") else None

    return SpanSnapshot(
        context=_span_context(span.trace_id, span.span_id),
        parent_span_id=span.parent_span_id or INVALID_SPAN_ID,
        name=span.name.value if span.HasField("name") else "",
        kind=_KINDS.get(span.kind, SpanKind.UNSPECIFIED),
        start_time=_timestamp(span, "start_time"),
        end_time=_timestamp(span, "end_time"),
        attributes=_attributes(span.attributes) if span.HasField("attributes") else (),
        links=_links(links) if links is not None else (),
        message_events=_annotations(span.time_events) if span.HasField("time_events") else (),
        status_code=status_code,
        status_message=status_message,
        has_remote_parent=(
            not span.same_process_as_parent_span.value
            if span.HasField("same_process_as_parent_span")
            else False
        ),
        dropped_link_count=links.dropped_links_count if links is not None else 0,
        child_span_count=span.child_span_count.value if span.HasField("child_span_count") else 0,
        resource=_resource(span),
    )


def decode_spans(
    spans: Iterable[Optional[trace_pb2.Span]],
    on_error: Optional[Callable[[Exception], None]] = None,
) -> List[SpanSnapshot]:
    """Decode a batch; a span that fails to decode is reported and skipped."""
    snapshots = []
    for span in spans:
        try:
            snapshots.append(decode_span(span))
        except ValidationError as e:
            if on_error is not None:
                on_error(e)
            else:
                logger.warning("skipping undecodable span: %s", e)
    return snapshots


def _span_context(trace_id: bytes, span_id: bytes) -> SpanContext:
    # OpenCensus has no equivalent of trace flags. Non-empty ids are kept at
    # their wire length, so ids that are not 16 and 8 bytes stay non-canonical.
    return SpanContext(
        trace_id=bytes(trace_id) or INVALID_TRACE_ID,
        span_id=bytes(span_id) or INVALID_SPAN_ID,
    )


def _timestamp(message, field_name: str) -> int:
    if not message.HasField(field_name):
        return 0
    ts = getattr(message, field_name)
    return timestamp_to_ns(ts.seconds, ts.nanos)


def _attributes(attributes: trace_pb2.Span.Attributes) -> Tuple[Attribute, ...]:
    decoded = []
    for key, attribute_value in attributes.attribute_map.items():
        kind = attribute_value.WhichOneof("value")
        if kind == "string_value":
            value = attribute_value.string_value.value
        elif kind == "bool_value":
            value = attribute_value.bool_value
        elif kind == "int_value":
            value = attribute_value.int_value
        elif kind == "double_value":
            value = attribute_value.double_value
        else:
            logger.debug("dropping attribute %r with no recognized value", key)
            continue
        decoded.append(Attribute(key=key, value=value))
    return tuple(decoded)


def _links(links: trace_pb2.Span.Links) -> Tuple[Link, ...]:
    return tuple(
        Link(
            context=_span_context(link.trace_id, link.span_id),
            attributes=_attributes(link.attributes) if link.HasField("attributes") else (),
        )
        for link in links.link
    )


def _annotations(time_events: trace_pb2.Span.TimeEvents) -> Tuple[Event, ...]:
    events = []
    for time_event in time_events.time_event:
        if time_event.WhichOneof("value") != "annotation":
            logger.debug("dropping non-annotation time event")
            continue
        annotation = time_event.annotation
        events.append(
            Event(
                name=annotation.description.value if annotation.HasField("description") else "",
                time=_timestamp(time_event, "time"),
                attributes=_attributes(annotation.attributes) if annotation.HasField("attributes") else (),
            )
        )
    return tuple(events)


def _status(span: trace_pb2.Span) -> Tuple[StatusCode, str]:
    if not span.HasField("status"):
        return StatusCode.OK, DEFAULT_STATUS_MESSAGE
    code = _STATUS_CODES.get(span.status.code, StatusCode.ERROR)
    return code, span.status.message


def _resource(span: trace_pb2.Span) -> Optional[Tuple[Attribute, ...]]:
    if not span.HasField("resource"):
        return None
    return tuple(Attribute(key=k, value=v) for k, v in span.resource.labels.items())
