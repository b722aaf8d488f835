"""Tests for logger.py: setup_logging() and JsonFormatter.

Strategy: mock logging.basicConfig to verify setup_logging passes the right
arguments, since pytest's log capture interferes with real basicConfig
calls.
"""

import json
import logging
import sys
from unittest.mock import patch

from playground_share.logger import DEFAULT_LOG_FILE, JsonFormatter, setup_logging


class TestSetupLogging:
    @patch("playground_share.logger.logging.basicConfig")
    def test_cli_mode_logs_to_stderr(self, mock_basic):
        setup_logging(mode="cli")

        handlers = mock_basic.call_args[1]["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    @patch("playground_share.logger.logging.basicConfig")
    def test_cli_mode_with_log_file(self, mock_basic, tmp_path):
        setup_logging(mode="cli", log_file=str(tmp_path / "cli.log"))

        handlers = mock_basic.call_args[1]["handlers"]
        assert len(handlers) == 2
        assert isinstance(handlers[1], logging.FileHandler)
        for handler in handlers:
            handler.close()

    @patch("playground_share.logger.logging.basicConfig")
    def test_mcp_mode_logs_to_file(self, mock_basic, tmp_path):
        log_file = str(tmp_path / "mcp.log")
        setup_logging(mode="mcp", log_file=log_file)

        kwargs = mock_basic.call_args[1]
        assert kwargs["filename"] == log_file
        assert kwargs["level"] == logging.WARNING

    @patch("playground_share.logger.logging.basicConfig")
    def test_mcp_mode_default_file(self, mock_basic, monkeypatch):
        monkeypatch.delenv("LOG_FILE", raising=False)
        setup_logging(mode="mcp")

        assert mock_basic.call_args[1]["filename"] == DEFAULT_LOG_FILE

    @patch("playground_share.logger.logging.basicConfig")
    def test_debug_overrides_env_level(self, mock_basic, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        setup_logging(mode="cli", debug=True)

        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("playground_share.logger.logging.basicConfig")
    def test_env_level(self, mock_basic, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        setup_logging(mode="cli")

        assert mock_basic.call_args[1]["level"] == logging.ERROR

    @patch("playground_share.logger.logging.basicConfig")
    def test_silences_http_loggers(self, mock_basic, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging(mode="cli")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("requests").level == logging.WARNING


class TestJsonFormatter:
    def test_format(self):
        record = logging.LogRecord(
            name="playground_share.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Resolved gist %s",
            args=("abc",),
            exc_info=None,
        )

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "playground_share.test"
        assert entry["msg"] == "Resolved gist abc"
        assert "exc" not in entry

    def test_format_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "failed", (), exc_info
        )

        entry = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in entry["exc"]
