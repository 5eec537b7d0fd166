"""Exporter error hierarchy and exceptions."""

from __future__ import annotations


class HoneycombExporterError(Exception):
    """Base exception for all exporter errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(HoneycombExporterError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(HoneycombExporterError):
    """Raised when a required structure or configuration field is missing."""
    pass


class TransmissionError(HoneycombExporterError):
    """Reported to the error hook when an event could not be delivered."""
    pass
