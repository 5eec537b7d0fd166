"""Translate span snapshots into Honeycomb events.

Every snapshot becomes one span event, followed by a zero-duration event
for each message event and each link. Fields are layered from lowest to
highest precedence; later layers overwrite earlier ones:

    exporter fields < resource < service_name < span/event/link fields
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, List, Optional

from opentelemetry.trace import StatusCode

from otel_honeycomb.errors import ValidationError
from otel_honeycomb.exporter.fields import FieldSet
from otel_honeycomb.tracer.span import Attribute, Event, Link, SpanSnapshot
from otel_honeycomb.utils.helpers import (
    duration_ms,
    encode_trace_id,
    format_span_id,
    is_zero_id,
)

SPAN_EVENT_ANNOTATION = "span_event"
LINK_ANNOTATION = "link"


class RefType(IntEnum):
    CHILD_OF = 0
    # Reserved; no snapshot field selects it.
    FOLLOWS_FROM = 1


@dataclass
class HoneycombRecord:
    """One outbound event: a timestamp (epoch ns) and a flat field bag."""

    timestamp: int
    fields: Dict[str, Any] = field(default_factory=dict)


class SpanEncoder:
    """Builds the Honeycomb events for a snapshot."""

    def __init__(self, field_set: Optional[FieldSet] = None, service_name: str = "") -> None:
        self._fields = field_set.copy() if field_set is not None else FieldSet()
        self.service_name = service_name

    def encode(self, snapshot: SpanSnapshot) -> List[HoneycombRecord]:
        return [build() for build in self.record_builders(snapshot)]

    def record_builders(self, snapshot: SpanSnapshot) -> List[Callable[[], HoneycombRecord]]:
        """
        One deferred builder per record, in emission order.

        Building a record resolves the dynamic exporter fields, so a failing
        field function surfaces from the builder call rather than from here.
        """
        if snapshot is None:
            raise ValidationError("expected a non-nil span snapshot")
        builders = [partial(self._span_record, snapshot)]
        builders.extend(partial(self._event_record, snapshot, event) for event in snapshot.message_events)
        builders.extend(partial(self._link_record, snapshot, link) for link in snapshot.links)
        return builders

    def _base_fields(self, snapshot: SpanSnapshot) -> Dict[str, Any]:
        # Dynamic fields are resolved here so each record gets a fresh value.
        fields = self._fields.resolve()
        if snapshot.resource is not None:
            _add_attributes(fields, snapshot.resource)
        if self.service_name:
            fields["service_name"] = self.service_name
        return fields

    def _span_record(self, snapshot: SpanSnapshot) -> HoneycombRecord:
        context = snapshot.context
        fields = self._base_fields(snapshot)
        fields["trace.trace_id"] = encode_trace_id(context.trace_id)
        fields["trace.span_id"] = format_span_id(context.span_id)
        fields["name"] = snapshot.name
        fields["duration_ms"] = duration_ms(snapshot.start_time, snapshot.end_time)
        # A root span may carry its own id as parent.
        if not is_zero_id(snapshot.parent_span_id) and snapshot.parent_span_id != context.span_id:
            fields["trace.parent_id"] = format_span_id(snapshot.parent_span_id)
        fields["has_remote_parent"] = snapshot.has_remote_parent
        if snapshot.status_code == StatusCode.ERROR:
            fields["error"] = True
        _add_attributes(fields, snapshot.attributes)
        fields["status.code"] = int(snapshot.status_code.value)
        fields["status.message"] = snapshot.status_message
        return HoneycombRecord(timestamp=snapshot.start_time, fields=fields)

    def _event_record(self, snapshot: SpanSnapshot, event: Event) -> HoneycombRecord:
        fields = self._base_fields(snapshot)
        _add_attributes(fields, event.attributes)
        fields["name"] = event.name
        fields["trace.trace_id"] = encode_trace_id(snapshot.context.trace_id)
        fields["trace.parent_id"] = format_span_id(snapshot.context.span_id)
        fields["trace.parent_name"] = snapshot.name
        fields["meta.annotation_type"] = SPAN_EVENT_ANNOTATION
        return HoneycombRecord(timestamp=event.time, fields=fields)

    def _link_record(self, snapshot: SpanSnapshot, link: Link) -> HoneycombRecord:
        fields = self._base_fields(snapshot)
        _add_attributes(fields, link.attributes)
        fields["trace.trace_id"] = encode_trace_id(snapshot.context.trace_id)
        fields["trace.parent_id"] = format_span_id(snapshot.context.span_id)
        fields["trace.link.trace_id"] = encode_trace_id(link.context.trace_id)
        fields["trace.link.span_id"] = format_span_id(link.context.span_id)
        fields["meta.annotation_type"] = LINK_ANNOTATION
        fields["ref_type"] = int(RefType.CHILD_OF)
        return HoneycombRecord(timestamp=snapshot.start_time, fields=fields)


def _add_attributes(fields: Dict[str, Any], attributes: Iterable[Attribute]) -> None:
    for attribute in attributes:
        fields[attribute.key] = _native(attribute.value)


def _native(value: Any) -> Any:
    # bool is an int subclass, check it first.
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    return str(value)
