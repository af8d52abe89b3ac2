"""
Error logging utilities for Switchboard.
"""

import logging
from typing import Optional

from .exceptions import SwitchboardError


def log_error(
    logger: logging.Logger,
    error: Exception,
    context: Optional[str] = None,
    include_traceback: bool = True,
    level: int = logging.ERROR,
) -> None:
    """Log an error with consistent formatting.

    Args:
        logger: Logger instance to use
        error: The exception to log
        context: Optional context string to prefix the message
        include_traceback: Whether to include the full stack trace
        level: Log level (recovered errors are usually logged at WARNING)

    Example:
        >>> log_error(logger, err, context="executor")
        # Logs: "[executor] HANDLER_EXECUTION_FAILED: Failed to execute search: timeout"
    """
    if isinstance(error, SwitchboardError):
        message = f"{error.code.value}: {error.message}"
    else:
        message = str(error)

    if context:
        message = f"[{context}] {message}"

    logger.log(level, message, exc_info=include_traceback)
