"""Finished-span snapshot consumed by the Honeycomb encoder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple, Union, TYPE_CHECKING

from opentelemetry.trace import SpanKind as OTelSpanKind, StatusCode

from otel_honeycomb.tracer.span_context import (
    INVALID_SPAN_ID,
    SpanContext,
    SpanKind,
)

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan

logger = logging.getLogger("otel_honeycomb.tracer")

AttributeValue = Union[str, bool, int, float]

_SUPPORTED_VALUE_TYPES = (str, bool, int, float)

_OTEL_KINDS = {
    OTelSpanKind.SERVER: SpanKind.SERVER,
    OTelSpanKind.CLIENT: SpanKind.CLIENT,
}


@dataclass(frozen=True)
class Attribute:
    key: str
    value: AttributeValue

    @classmethod
    def from_value(cls, key: str, value: Any) -> Optional["Attribute"]:
        """
        Build an attribute from a Python value.

        Only str, bool, int and float are representable. Anything else
        returns None so the caller drops it instead of guessing a coercion.
        """
        if not isinstance(value, _SUPPORTED_VALUE_TYPES):
            return None
        return cls(key=key, value=value)


def attributes_from_mapping(mapping: Optional[Mapping[str, Any]]) -> Tuple[Attribute, ...]:
    """Convert an attribute mapping, dropping unsupported values."""
    if not mapping:
        return ()
    attributes = []
    for key, value in mapping.items():
        attribute = Attribute.from_value(key, value)
        if attribute is None:
            logger.debug("dropping attribute %r with unsupported type %s", key, type(value).__name__)
            continue
        attributes.append(attribute)
    return tuple(attributes)


@dataclass(frozen=True)
class Link:
    context: SpanContext
    attributes: Tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class Event:
    name: str
    time: int = 0
    attributes: Tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class SpanSnapshot:
    """
    Immutable representation of a finished span.

    Timestamps are nanoseconds since the epoch; 0 is the zero timestamp.
    ``resource`` is None when the producer carried no resource at all,
    which is not the same thing as an empty resource.
    """

    context: SpanContext
    name: str = ""
    parent_span_id: bytes = INVALID_SPAN_ID
    kind: SpanKind = SpanKind.UNSPECIFIED
    start_time: int = 0
    end_time: int = 0
    attributes: Tuple[Attribute, ...] = ()
    links: Tuple[Link, ...] = ()
    message_events: Tuple[Event, ...] = ()
    status_code: StatusCode = StatusCode.UNSET
    status_message: str = ""
    has_remote_parent: bool = False
    dropped_link_count: int = 0
    child_span_count: int = 0
    resource: Optional[Tuple[Attribute, ...]] = field(default=None)

    @classmethod
    def from_readable_span(cls, span: "ReadableSpan") -> "SpanSnapshot":
        """
        Adapt a finished OpenTelemetry SDK span.

        Args:
            span: ReadableSpan handed to a SpanExporter

        Returns:
            SpanSnapshot with byte identifiers and scalar-only attributes
        """
        otel_context = span.context
        parent = span.parent
        resource = getattr(span, "resource", None)

        status = span.status
        return cls(
            context=_context_from_otel(otel_context),
            name=span.name or "",
            parent_span_id=_span_id_bytes(parent.span_id) if parent is not None else INVALID_SPAN_ID,
            kind=_OTEL_KINDS.get(span.kind, SpanKind.UNSPECIFIED),
            start_time=span.start_time or 0,
            end_time=span.end_time or 0,
            attributes=attributes_from_mapping(span.attributes),
            links=tuple(
                Link(
                    context=_context_from_otel(link.context),
                    attributes=attributes_from_mapping(link.attributes),
                )
                for link in _iter(span.links)
            ),
            message_events=tuple(
                Event(
                    name=event.name,
                    time=event.timestamp or 0,
                    attributes=attributes_from_mapping(event.attributes),
                )
                for event in _iter(span.events)
            ),
            status_code=status.status_code,
            status_message=status.description or "",
            has_remote_parent=bool(parent is not None and parent.is_remote),
            dropped_link_count=getattr(span, "dropped_links", 0) or 0,
            resource=attributes_from_mapping(resource.attributes) if resource is not None else None,
        )


def _iter(items: Optional[Iterable[Any]]) -> Iterable[Any]:
    return items if items is not None else ()


def _span_id_bytes(span_id: int) -> bytes:
    return span_id.to_bytes(8, "big")


def _context_from_otel(otel_context) -> SpanContext:
    return SpanContext(
        trace_id=otel_context.trace_id.to_bytes(16, "big"),
        span_id=_span_id_bytes(otel_context.span_id),
    )
