"""
Tests for the colored logging helpers.
"""

import logging

from logging_config import ColorFormatter, log_intent, log_message_out, log_tool


class TestColorFormatter:
    """Test record formatting."""

    def test_format_contains_level_and_message(self):
        """Formatted lines carry the short level name and the message."""
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "disk %s", ("full",), None)
        line = ColorFormatter().format(record)
        assert "WARN" in line
        assert "disk full" in line


class TestHelpers:
    """Test the event helpers."""

    def test_log_intent(self, caplog):
        """Intent lines show source, tools and confidence."""
        logger = logging.getLogger("test.logging")
        with caplog.at_level(logging.INFO, logger="test.logging"):
            log_intent(logger, "model", ["search", "expense"], 0.9)
        assert "source=model tools=[search, expense] confidence=0.90" in caplog.text

    def test_log_message_out_fallback(self, caplog):
        """Fallback responses are flagged."""
        logger = logging.getLogger("test.logging")
        with caplog.at_level(logging.INFO, logger="test.logging"):
            log_message_out(logger, ["conversation"], 0.25, fallback=True)
        assert "tools=[conversation] time=0.250s fallback=true" in caplog.text

    def test_log_tool_context(self, caplog):
        """Tool lines include the extra context."""
        logger = logging.getLogger("test.logging")
        with caplog.at_level(logging.INFO, logger="test.logging"):
            log_tool(logger, "search", "end", status="error")
        assert "search status=error" in caplog.text
