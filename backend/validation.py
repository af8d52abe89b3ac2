"""
Switchboard Input Validation - Message cleaning before routing

Callers run clean_message() before handing a message to the Orchestrator.
Empty input is rejected here so the pipeline only ever sees real text.

Usage:
    from validation import clean_message
    message = clean_message(raw_text)
"""

import re
import logging

from errors import InputError, ErrorCode

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_message(message) -> str:
    """
    Validate and normalize a raw user message.

    Trims, strips HTML tags and collapses whitespace runs to single spaces.

    Raises:
        InputError: message is missing, not a string, or blank after cleaning
    """
    if message is None:
        raise InputError("Message cannot be empty")

    if not isinstance(message, str):
        raise InputError(
            "Message must be text",
            code=ErrorCode.INPUT_INVALID_TYPE,
            received=type(message).__name__,
        )

    cleaned = _TAG_RE.sub("", message.strip())
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    if not cleaned:
        raise InputError("Message cannot be empty")

    if cleaned != message:
        logger.debug(f"Cleaned message ({len(message)} -> {len(cleaned)} chars)")

    return cleaned
