"""
Progress notifications through the caller-supplied context callback.
"""

import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

PROGRESS_CALLBACK_KEY = "progress_callback"


def emit_progress(text: str, context: Mapping[str, Any]) -> None:
    """
    Send a status line to context["progress_callback"] if one is present.

    A missing or non-callable callback is a no-op. A callback that raises is
    logged and ignored so observers can never break a routing call.
    """
    callback = context.get(PROGRESS_CALLBACK_KEY) if context else None
    if not callable(callback):
        return

    try:
        callback(text)
    except Exception as e:
        logger.warning(f"Progress callback failed on '{text}': {e}")
