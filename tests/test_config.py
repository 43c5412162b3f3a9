"""Tests for configuration loading and validation."""

from __future__ import annotations

import tempfile
from pathlib import Path
import unittest
from unittest.mock import patch

from notifybus.config import DEFAULT_CONFIG, ConfigValidationError, load_config


class ConfigTests(unittest.TestCase):
    """Validate config merge and fallback behavior."""

    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)
            self.assertEqual(config["bus"]["error_policy"], "raise")
            self.assertEqual(config["logging"]["level"], "INFO")
            self.assertTrue(config["logging"]["structured"])

    def test_partial_config_overrides_selected_values(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[bus]
error_policy = " Collect "

[logging]
level = "debug"
                """.strip(),
                encoding="utf-8",
            )
            config = load_config(config_path=config_path)
            self.assertEqual(config["bus"]["error_policy"], "collect")
            self.assertEqual(config["logging"]["level"], "DEBUG")
            self.assertEqual(
                config["logging"]["log_file_path"],
                DEFAULT_CONFIG["logging"]["log_file_path"],
            )

    def test_invalid_values_fallback_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[bus]
error_policy = "swallow"

[logging]
level = "LOUD"
                """.strip(),
                encoding="utf-8",
            )
            with self.assertLogs("notifybus.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)

    def test_unparseable_toml_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[bus\nerror_policy = ", encoding="utf-8")
            with self.assertLogs("notifybus.config", level="WARNING") as logs:
                config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)
            self.assertTrue(any("Failed to parse config" in line for line in logs.output))

    def test_default_config_is_not_mutated_by_callers(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = load_config(config_path=Path(temp_dir) / "config.toml")
            config["bus"]["error_policy"] = "collect"
            self.assertEqual(DEFAULT_CONFIG["bus"]["error_policy"], "raise")

    def test_unexpected_validation_failure_raises_domain_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch("notifybus.config.Config") as config_cls:
                config_cls.model_validate.side_effect = RuntimeError("broken model")
                with self.assertRaises(ConfigValidationError):
                    load_config(config_path=Path(temp_dir) / "config.toml")


if __name__ == "__main__":
    unittest.main()
