# tests/unit/logging/test_logger.py - v1
"""Tests for logging/logger.py - logger factory and formatters."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

from settingscache.config.settings import Settings
from settingscache.logging.context import cache_context, set_request_context
from settingscache.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("17", "textDocument/formatting")
        with cache_context("document_configuration", "file:///a.rb"):
            parsed = json.loads(JsonFormatter().format(_record("miss")))
        assert parsed["context"] == {
            "request_id": "17",
            "method": "textDocument/formatting",
            "cache": "document_configuration",
            "key": "file:///a.rb",
        }

    def test_format_exception(self):
        try:
            raise RuntimeError("bad")
        except RuntimeError:
            import sys

            record = _record("failed", logging.ERROR)
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: bad" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_request_context("3", "textDocument/didOpen")
        with cache_context("workspace_ruby_environment", "file:///w"):
            output = TextFormatter().format(_record("fetching"))
        assert "[textDocument/didOpen#3]" in output
        assert "(workspace_ruby_environment:file:///w)" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "settingscache.test_module"


class TestSetupLogging:
    def teardown_method(self):
        root = logging.getLogger("settingscache")
        for h in root.handlers:
            h.close()
        root.handlers.clear()
        root.setLevel(logging.NOTSET)

    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("settingscache")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("settingscache")
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_no_duplicates(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("settingscache").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "cache.log"
        setup_logging(log_file=str(log_file), rotation="1MB", retention=2)
        root = logging.getLogger("settingscache")
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert log_file.parent.is_dir()

    def test_from_settings(self):
        setup_logging_from_settings(Settings(_env_file=None, log_level="WARNING"))
        assert logging.getLogger("settingscache").level == logging.WARNING
