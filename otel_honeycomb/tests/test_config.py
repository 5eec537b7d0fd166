"""Tests for exporter configuration loading and priority."""

import unittest

from otel_honeycomb.errors import ConfigError, ValidationError
from otel_honeycomb.exporter.config import (
    DEFAULT_API_HOST,
    DEFAULT_DATASET,
    ExporterConfig,
    config_from_env,
    load_config,
)
from otel_honeycomb.exporter.response_logger import log_error


class TestConfigFromEnv(unittest.TestCase):
    def test_reads_all_variables(self):
        values = config_from_env(
            {
                "HONEYCOMB_API_KEY": "env-key",
                "HONEYCOMB_DATASET": "env-dataset",
                "HONEYCOMB_API_HOST": "https://example.test",
                "HONEYCOMB_SERVICE_NAME": "env-svc",
                "HONEYCOMB_DEBUG": "true",
            }
        )
        self.assertEqual(
            values,
            {
                "api_key": "env-key",
                "dataset": "env-dataset",
                "api_host": "https://example.test",
                "service_name": "env-svc",
                "debug": True,
            },
        )

    def test_otel_service_name_fallback(self):
        self.assertEqual(config_from_env({"OTEL_SERVICE_NAME": "otel-svc"}), {"service_name": "otel-svc"})
        values = config_from_env({"OTEL_SERVICE_NAME": "otel-svc", "HONEYCOMB_SERVICE_NAME": "hc"})
        self.assertEqual(values["service_name"], "hc")

    def test_debug_false_values(self):
        self.assertFalse(config_from_env({"HONEYCOMB_DEBUG": "0"})["debug"])
        self.assertFalse(config_from_env({"HONEYCOMB_DEBUG": "off"})["debug"])

    def test_empty_environment(self):
        self.assertEqual(config_from_env({}), {})


class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        config = load_config(environ={})
        self.assertEqual(config.api_key, "")
        self.assertEqual(config.dataset, DEFAULT_DATASET)
        self.assertEqual(config.api_host, DEFAULT_API_HOST)
        self.assertEqual(config.service_name, "")
        self.assertFalse(config.debug)
        self.assertIs(config.on_error, log_error)
        self.assertEqual(len(config.fields), 0)

    def test_explicit_params_override_env(self):
        config = load_config(
            overrides={"api_key": "explicit-key"},
            environ={"HONEYCOMB_API_KEY": "env-key", "HONEYCOMB_DATASET": "env-dataset"},
        )
        self.assertEqual(config.api_key, "explicit-key")
        self.assertEqual(config.dataset, "env-dataset")

    def test_none_override_is_ignored(self):
        config = load_config(overrides={"api_key": None}, environ={"HONEYCOMB_API_KEY": "env-key"})
        self.assertEqual(config.api_key, "env-key")

    def test_unknown_override(self):
        with self.assertRaises(ConfigError):
            load_config(overrides={"writekey": "x"}, environ={})


class TestValidate(unittest.TestCase):
    def test_valid(self):
        ExporterConfig(api_key="key").validate()

    def test_empty_api_key(self):
        with self.assertRaises(ValidationError):
            ExporterConfig().validate()

    def test_empty_dataset(self):
        with self.assertRaises(ValidationError):
            ExporterConfig(api_key="key", dataset="").validate()

    def test_empty_api_host(self):
        with self.assertRaises(ValidationError):
            ExporterConfig(api_key="key", api_host="").validate()

    def test_error_hook_must_be_callable(self):
        with self.assertRaises(ValidationError):
            ExporterConfig(api_key="key", on_error=None).validate()

    def test_fields_are_per_instance(self):
        a, b = ExporterConfig(), ExporterConfig()
        a.add_field("x", 1)
        self.assertNotIn("x", b.fields)


if __name__ == "__main__":
    unittest.main()
