"""Translators from foreign wire formats into span snapshots."""

from otel_honeycomb.translator.opencensus import decode_span, decode_spans

__all__ = ["decode_span", "decode_spans"]
