"""Shared test doubles and builders."""

from __future__ import annotations

import queue
from typing import Any, Callable, List, Optional

from opentelemetry.trace import StatusCode

from otel_honeycomb.tracer import SpanContext, SpanSnapshot

TRACE_ID = bytes.fromhex("0102030405060708090a0b0c0d0e0f10")
SPAN_ID = bytes.fromhex("0102030405060708")
START_NS = 1_600_000_000_000_000_000


class CapturingTransmission:
    """libhoney transmission stand-in that records events instead of sending them."""

    def __init__(self, fail: Optional[Callable[[Any], bool]] = None) -> None:
        self.events: List[Any] = []
        self.attempts = 0
        self.closed = False
        self.flushed = 0
        self._fail = fail
        self._responses: "queue.Queue" = queue.Queue()

    def start(self) -> None:
        pass

    def send(self, ev) -> None:
        self.attempts += 1
        if self._fail is not None and self._fail(ev):
            raise RuntimeError("transmission refused event")
        self.events.append(ev)

    def flush(self) -> None:
        self.flushed += 1

    def close(self) -> None:
        self.closed = True
        self._responses.put(None)

    def get_response_queue(self) -> "queue.Queue":
        return self._responses

    def fields(self) -> List[dict]:
        return [ev.fields() for ev in self.events]


def make_snapshot(**overrides) -> SpanSnapshot:
    values = dict(
        context=SpanContext(trace_id=TRACE_ID, span_id=SPAN_ID),
        name="/foo",
        start_time=START_NS,
        end_time=START_NS,
        status_code=StatusCode.OK,
    )
    values.update(overrides)
    return SpanSnapshot(**values)
