"""Tests for identifier and timestamp helpers."""

from datetime import datetime, timezone

import pytest

from otel_honeycomb.utils.helpers import (
    duration_ms,
    encode_trace_id,
    format_span_id,
    is_zero_id,
    ns_to_datetime,
    timestamp_to_ns,
)


class TestEncodeTraceId:
    def test_128_bit_id_with_nonzero_high_half(self):
        raw = bytes.fromhex("0102030405060708090a0b0c0d0e0f10")
        encoded = encode_trace_id(raw)

        assert encoded == "0102030405060708090a0b0c0d0e0f10"
        assert len(encoded) == 32
        assert bytes.fromhex(encoded[:16]) + bytes.fromhex(encoded[16:]) == raw

    def test_high_half_keeps_leading_zeros(self):
        raw = bytes.fromhex("00000000000000ff0000000000000001")
        assert encode_trace_id(raw) == "00000000000000ff0000000000000001"

    def test_zero_padded_128_bit_id_collapses_to_low_half(self):
        low = bytes.fromhex("090a0b0c0d0e0f10")
        encoded = encode_trace_id(bytes(8) + low)

        assert encoded == "090a0b0c0d0e0f10"
        assert len(encoded) == 16

    def test_low_half_is_zero_padded(self):
        assert encode_trace_id(bytes(15) + b"\x01") == "0000000000000001"

    def test_64_bit_id(self):
        assert encode_trace_id(bytes.fromhex("0102030405060708")) == "0102030405060708"

    def test_zero_padded_and_legacy_forms_agree(self):
        legacy = bytes.fromhex("1234567890abcdef")
        assert encode_trace_id(bytes(8) + legacy) == encode_trace_id(legacy)

    @pytest.mark.parametrize("raw", [b"", b"\x02", b"\x00\x01", bytes.fromhex("deadbeefcafe01")])
    def test_short_input_is_raw_hex(self, raw):
        encoded = encode_trace_id(raw)
        assert encoded == raw.hex()
        assert len(encoded) == 2 * len(raw)

    def test_other_lengths_read_first_eight_bytes(self):
        raw = bytes.fromhex("0102030405060708aabbccdd")
        assert encode_trace_id(raw) == "0102030405060708"


def test_format_span_id():
    assert format_span_id(bytes.fromhex("0102030405060708")) == "0102030405060708"
    assert format_span_id(bytes(8)) == "0000000000000000"


def test_is_zero_id():
    assert is_zero_id(bytes(8))
    assert is_zero_id(b"")
    assert not is_zero_id(b"\x00\x01")


class TestDuration:
    def test_equal_timestamps(self):
        assert duration_ms(1_000, 1_000) == 0

    def test_one_day(self):
        start = 1_600_000_000_000_000_000
        assert duration_ms(start, start + 24 * 3600 * 1_000_000_000) == 86400000

    def test_fractional_milliseconds(self):
        assert duration_ms(1_000_000, 1_500_000) == 0.5

    def test_zero_timestamp_gives_zero(self):
        assert duration_ms(0, 5_000_000) == 0
        assert duration_ms(5_000_000, 0) == 0

    def test_never_negative(self):
        assert duration_ms(5_000_000, 1_000_000) == 0


def test_timestamp_to_ns():
    assert timestamp_to_ns(2, 5) == 2_000_000_005


def test_ns_to_datetime():
    ns = timestamp_to_ns(1_600_000_000, 123_456_789)
    assert ns_to_datetime(ns) == datetime(2020, 9, 13, 12, 26, 40, 123456, tzinfo=timezone.utc)
