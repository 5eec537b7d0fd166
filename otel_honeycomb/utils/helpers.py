"""Identifier and timestamp helpers shared by the decoder and encoder."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MILLI = 1_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def encode_trace_id(raw: bytes) -> str:
    """
    Format a trace id the way Honeycomb expects it.

    A 128-bit id whose high half is zero collapses to its low 64 bits so
    that consumers which only know 64-bit ids keep matching.

    Args:
        raw: 8 or 16 byte trace id (other lengths are tolerated)

    Returns:
        16 or 32 character lowercase hex string; raw hex for inputs
        shorter than 8 bytes
    """
    if len(raw) < 8:
        return raw.hex()
    if len(raw) == 16:
        high = int.from_bytes(raw[:8], "big")
        low = int.from_bytes(raw[8:], "big")
        if high:
            return f"{high:016x}{low:016x}"
        return f"{low:016x}"
    return format(int.from_bytes(raw[:8], "big"), "016x")


def format_span_id(raw: bytes) -> str:
    """
    Format a span id as lowercase hex.

    Args:
        raw: span id bytes

    Returns:
        Hex string (16 characters for a canonical 8 byte id)
    """
    return raw.hex()


def is_zero_id(raw: bytes) -> bool:
    return not any(raw)


def timestamp_to_ns(seconds: int, nanos: int) -> int:
    return seconds * _NANOS_PER_SECOND + nanos


def ns_to_datetime(ns: int) -> datetime:
    """Convert epoch nanoseconds to an aware UTC datetime (microsecond precision)."""
    seconds, remainder = divmod(ns, _NANOS_PER_SECOND)
    return _EPOCH + timedelta(seconds=seconds, microseconds=remainder // 1000)


def duration_ms(start_ns: int, end_ns: int) -> float:
    """
    Milliseconds between two epoch-nanosecond timestamps.

    Returns 0 when either timestamp is the zero value, and never a
    negative duration.
    """
    if not start_ns or not end_ns:
        return 0.0
    return max(end_ns - start_ns, 0) / _NANOS_PER_MILLI
