"""Immutable trace metadata."""

from dataclasses import dataclass
from enum import Enum

INVALID_TRACE_ID = bytes(16)
INVALID_SPAN_ID = bytes(8)


class SpanKind(Enum):
    # The legacy wire format only knows these three kinds.
    UNSPECIFIED = 0
    SERVER = 1
    CLIENT = 2


@dataclass(frozen=True)
class SpanContext:
    trace_id: bytes = INVALID_TRACE_ID
    span_id: bytes = INVALID_SPAN_ID

    def is_valid(self) -> bool:
        return any(self.trace_id) and any(self.span_id)
