"""Pytest configuration and fixtures for the exporter tests."""

from __future__ import annotations

import pytest

from otel_honeycomb.exporter import HoneycombSpanExporter
from otel_honeycomb.tests.support import CapturingTransmission


@pytest.fixture
def transmission() -> CapturingTransmission:
    return CapturingTransmission()


@pytest.fixture
def make_exporter(transmission):
    """Build exporters wired to the capturing transmission; shut down after the test."""
    created = []

    def _make(**options) -> HoneycombSpanExporter:
        options.setdefault("api_key", "test")
        options.setdefault("dataset", "test")
        options.setdefault("transmission_impl", transmission)
        exporter = HoneycombSpanExporter(**options)
        created.append(exporter)
        return exporter

    yield _make
    for exporter in created:
        exporter.shutdown()
