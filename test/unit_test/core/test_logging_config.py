"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from uxperiment.core import logging_config
from uxperiment.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_format,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    return next(
        h
        for h in logging.getLogger().handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    )


def _file_handler():
    return next((h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)), None)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    handler = _file_handler()
    if handler is not None:
        handler.close()
    setup_logging(enable_file=False)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("debug", logging.DEBUG),
        ],
    )
    def test_console_handler_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_root_logger_captures_everything(self):
        """Filtering happens at handler level."""
        setup_logging(log_level="WARNING", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(log_level="INFO", enable_file=False)
        setup_logging(log_level="WARNING", enable_file=False)

        assert len(logging.getLogger().handlers) == 1
        assert _console_handler().level == logging.WARNING


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
        ],
    )
    def test_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected_format
        assert _console_handler().formatter.datefmt == "%Y-%m-%d %H:%M:%S"

    def test_unknown_format_falls_back_to_detailed(self):
        assert get_format("xml") == DETAILED_FORMAT


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_file_handler_when_enabled(self, tmp_path: Path):
        log_dir = tmp_path / "logs"

        with (
            patch("uxperiment.core.logging_config.LOG_FILE_DIR", str(log_dir)),
            patch("uxperiment.core.logging_config.ENABLE_FILE_LOGGING", True),
        ):
            setup_logging(log_level="ERROR", enable_file=True)

        handler = _file_handler()
        assert handler is not None
        assert handler.level == logging.DEBUG
        assert (log_dir / "uxperiment.log").exists()

    def test_setting_disables_file_logging(self, tmp_path: Path):
        with (
            patch("uxperiment.core.logging_config.LOG_FILE_DIR", str(tmp_path)),
            patch("uxperiment.core.logging_config.ENABLE_FILE_LOGGING", False),
        ):
            setup_logging(enable_file=True)

        assert _file_handler() is None

    def test_argument_disables_file_logging(self):
        setup_logging(enable_file=False)

        assert _file_handler() is None


class TestModuleSpecificLevels:
    """Test module-specific log level configuration."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("uxperiment.server", logging.INFO),
            ("uxperiment.server.api", logging.DEBUG),
            ("uxperiment.server.services", logging.DEBUG),
            ("uxperiment.core.database", logging.INFO),
            ("sqlalchemy.engine", logging.WARNING),
            ("passlib", logging.ERROR),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)

        assert get_logger(module_name).level == expected_level

    def test_all_module_log_levels_configured(self):
        setup_logging(enable_file=False)

        for module_name, expected_level_str in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == getattr(logging, expected_level_str)


class TestGetLogger:
    def test_same_name_same_instance(self):
        assert get_logger("uxperiment.server.services.favorites") is get_logger(
            "uxperiment.server.services.favorites"
        )

    def test_name_is_kept(self):
        assert get_logger("module.with-special_chars.123").name == "module.with-special_chars.123"


class TestLoggingConfigSource:
    def test_reads_application_settings(self):
        with patch("uxperiment.server.core.config.settings") as mock_settings:
            mock_settings.log_level = "warning"
            mock_settings.log_format = "json"
            mock_settings.log_file_dir = "/tmp/uxperiment"
            mock_settings.enable_file_logging = True

            config = logging_config._get_logging_config()

        assert config == {
            "log_level": "WARNING",
            "log_format": "json",
            "log_file_dir": "/tmp/uxperiment",
            "enable_file_logging": True,
        }
