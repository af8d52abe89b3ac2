"""
Switchboard Logging - Color-coded pipeline event logs.

Every module logs through logging.getLogger(__name__). This module adds:
- ColorFormatter: compact "HH:MM:SS [LEVL] message" lines, ANSI colors on a TTY
- setup_logging(): install the formatter on the root logger
- Event helpers, one color per pipeline event:
    log_message_in / log_message_out  message entering / leaving handle()
    log_intent                        routing decision
    log_tool                          handler start / end
    log_llm                           completion call start / end

Usage:
    from logging_config import setup_logging, log_intent
    setup_logging(logging.DEBUG)
    log_intent(logger, "keyword", ["expense"], 1.0)
"""

import logging
import sys
from typing import Iterable, Optional

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

# One color per pipeline event
EVENT_COLORS = {
    "MESSAGE": "\033[96m",  # Cyan
    "RESPONSE": "\033[92m",  # Green
    "INTENT": "\033[95m",  # Magenta
    "TOOL": "\033[93m",  # Yellow
    "LLM": "\033[94m",  # Blue
}

LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: RESET,
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[91m" + BOLD,
}

PREVIEW_CHARS = 80


class ColorFormatter(logging.Formatter):
    """Formatter with per-level colors; plain text when use_color is False."""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_color else text

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%H:%M:%S")
        level = self._paint(record.levelname[:4], LEVEL_COLORS.get(record.levelno, RESET))

        formatted = f"{self._paint(timestamp, DIM)} [{level}] {record.getMessage()}"
        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)
        return formatted


def setup_logging(level: int = logging.INFO, stream=None) -> None:
    """Configure colored logging for the application (colors only on a TTY)."""
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(use_color=hasattr(stream, "isatty") and stream.isatty()))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    # Quiet noisy libraries
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


# =============================================================================
# PIPELINE EVENT HELPERS
# =============================================================================


def _event(logger: logging.Logger, event: str, arrow: str, text: str) -> None:
    tag = f"{EVENT_COLORS.get(event, '')}{arrow} {event}{RESET}"
    logger.info(f"{tag} {text}".rstrip())


def _kv(context: dict) -> str:
    return " ".join(f"{k}={v}" for k, v in context.items())


def log_message_in(logger: logging.Logger, message: str, **context) -> None:
    """Log a message entering the pipeline (preview plus context like mode=)."""
    preview = message if len(message) <= PREVIEW_CHARS else message[:PREVIEW_CHARS] + "..."
    _event(logger, "MESSAGE", ">>>", f"{preview} [{_kv(context)}]")


def log_message_out(
    logger: logging.Logger,
    tools_used: Optional[Iterable[str]] = None,
    duration: float = 0,
    fallback: bool = False,
) -> None:
    """Log the envelope leaving the pipeline.

    Args:
        logger: Logger instance
        tools_used: Tool identifiers that produced the response
        duration: Pipeline duration in seconds
        fallback: Whether the fallback chain produced the response
    """
    tools = ", ".join(tools_used or []) or "none"
    suffix = " fallback=true" if fallback else ""
    _event(logger, "RESPONSE", "<<<", f"tools=[{tools}] time={duration:.3f}s{suffix}")


def log_intent(logger: logging.Logger, source: str, tools: Iterable[str], confidence: float = 1.0) -> None:
    """Log a routing decision (source is keyword, model or default)."""
    _event(logger, "INTENT", "...", f"source={source} tools=[{', '.join(tools)}] confidence={confidence:.2f}")


def log_tool(logger: logging.Logger, tool_name: str, state: str, **context) -> None:
    """Log handler execution; state is 'start' or 'end'."""
    arrow = ">>>" if state == "start" else "<<<"
    _event(logger, "TOOL", arrow, f"{tool_name} {_kv(context)}")


def log_llm(logger: logging.Logger, state: str, model: str = "", duration: float = 0) -> None:
    """Log a completion call; duration is only shown for state 'end'."""
    if state == "start":
        _event(logger, "LLM", ">>>", f"calling {model}")
    else:
        _event(logger, "LLM", "<<<", f"{model} completed in {duration:.1f}s")
