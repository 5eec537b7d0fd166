"""Exporter configuration and environment loading.

Priority, highest first: explicit overrides, environment variables,
defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields as dataclass_fields
from typing import Any, Callable, Dict, Mapping, Optional

from otel_honeycomb.errors import ConfigError, ValidationError
from otel_honeycomb.exporter.fields import FieldSet
from otel_honeycomb.exporter.response_logger import ErrorHook, log_error

DEFAULT_API_HOST = "https://api.honeycomb.io"
DEFAULT_DATASET = "opentelemetry"

ENV_API_KEY = "HONEYCOMB_API_KEY"
ENV_DATASET = "HONEYCOMB_DATASET"
ENV_API_HOST = "HONEYCOMB_API_HOST"
ENV_SERVICE_NAME = "HONEYCOMB_SERVICE_NAME"
ENV_OTEL_SERVICE_NAME = "OTEL_SERVICE_NAME"
ENV_DEBUG = "HONEYCOMB_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ExporterConfig:
    api_key: str = ""
    dataset: str = DEFAULT_DATASET
    # Added to every event as `service_name` when set.
    service_name: str = ""
    api_host: str = DEFAULT_API_HOST
    user_agent_addition: str = ""
    debug: bool = False
    fields: FieldSet = field(default_factory=FieldSet)
    on_error: ErrorHook = log_error

    def add_field(self, name: str, value: Any) -> "ExporterConfig":
        self.fields.add_field(name, value)
        return self

    def add_dynamic_field(self, name: str, fn: Callable[[], Any]) -> "ExporterConfig":
        self.fields.add_dynamic_field(name, fn)
        return self

    def validate(self) -> None:
        if not self.api_key:
            raise ValidationError("missing Honeycomb API key")
        if not self.dataset:
            raise ValidationError("missing Honeycomb dataset")
        if not self.api_host:
            raise ValidationError("missing Honeycomb API host")
        if self.on_error is None or not callable(self.on_error):
            raise ValidationError("error hook must be callable")


_OPTION_NAMES = {f.name for f in dataclass_fields(ExporterConfig)}


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read exporter options from environment variables."""
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    if env.get(ENV_API_KEY):
        values["api_key"] = env[ENV_API_KEY]
    if env.get(ENV_DATASET):
        values["dataset"] = env[ENV_DATASET]
    if env.get(ENV_API_HOST):
        values["api_host"] = env[ENV_API_HOST]
    service_name = env.get(ENV_SERVICE_NAME) or env.get(ENV_OTEL_SERVICE_NAME)
    if service_name:
        values["service_name"] = service_name
    if env.get(ENV_DEBUG):
        values["debug"] = env[ENV_DEBUG].strip().lower() in _TRUTHY
    return values


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExporterConfig:
    """
    Build an ExporterConfig from defaults, the environment and overrides.

    Args:
        overrides: explicit options; None values are ignored
        environ: environment mapping (defaults to os.environ)

    Raises:
        ConfigError: if an override names an unknown option
    """
    merged = config_from_env(environ)
    for key, value in (overrides or {}).items():
        if key not in _OPTION_NAMES:
            raise ConfigError("unknown exporter option", details={"option": key})
        if value is not None:
            merged[key] = value
    return ExporterConfig(**merged)
