"""Tests for taskspine.core.logging."""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from taskspine.core.config import get_settings
from taskspine.core.exceptions import ConfigurationError
from taskspine.core.logging import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


class TestSetupLogging:
    """Root logger configuration."""

    def test_console_format_uses_rich(self, restore_root_logger: logging.Logger) -> None:
        setup_logging(get_settings(log_format="console", log_level="DEBUG"))
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], RichHandler)

    def test_json_format(self, restore_root_logger: logging.Logger) -> None:
        setup_logging(get_settings(log_format="json", log_level="warning"))
        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_repeated_setup_does_not_duplicate(self, restore_root_logger: logging.Logger) -> None:
        settings = get_settings(log_format="json")
        setup_logging(settings)
        setup_logging(settings)
        assert len(restore_root_logger.handlers) == 1

    def test_unknown_format(self, restore_root_logger: logging.Logger) -> None:
        with pytest.raises(ConfigurationError, match="format"):
            setup_logging(get_settings(log_format="xml"))

    def test_unknown_level(self, restore_root_logger: logging.Logger) -> None:
        with pytest.raises(ConfigurationError, match="level"):
            setup_logging(get_settings(log_level="LOUD"))


class TestJsonFormatter:
    def test_fields(self) -> None:
        record = logging.LogRecord(
            name="runtime::task_executor",
            level=logging.DEBUG,
            pathname=__file__,
            lineno=1,
            msg="executed %s",
            args=("a single pass",),
            exc_info=None,
        )
        payload = json.loads(JsonFormatter().format(record))
        assert payload["logger"] == "runtime::task_executor"
        assert payload["level"] == "DEBUG"
        assert payload["message"] == "executed a single pass"
        assert "timestamp" in payload
