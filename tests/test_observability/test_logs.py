"""Tests for logging configuration."""

import logging

import pytest
import structlog

from dingtalk_webhook.observability import configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore structlog defaults and root handlers after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_root_level(self):
        """Test the stdlib root level follows the argument."""
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_console_renderer_by_default(self):
        """Test console output is the default."""
        configure_logging("INFO")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        """Test JSON output can be selected."""
        configure_logging("INFO", json_output=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_json_output_written(self, capsys):
        """Test events are rendered as JSON lines."""
        configure_logging("INFO", json_output=True)

        structlog.get_logger("test").info("webhook_sent", msgtype="text")

        captured = capsys.readouterr()
        assert '"event": "webhook_sent"' in captured.err
        assert '"msgtype": "text"' in captured.err

    def test_unknown_level(self):
        """Test unknown level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")
