"""
JSON extraction from LLM replies.

Models wrap their JSON in prose or markdown fences. extract_json_text()
locates the JSON payload; parse_json_object() decodes it. Nothing here repairs
malformed output: a reply that does not decode is an error for the caller.

Strategies (in order):
1. A ``` / ```json fenced block that wraps a { ... } object
2. First brace-balanced { ... } span (string-aware)
3. The raw text itself
"""

import json
import logging
import re
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Only fences around an object count; other fences (```text reasoning) are skipped
_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(\{.*?\})\s*```", re.DOTALL)


def _first_balanced_object(text: str) -> Optional[str]:
    """Return the first top-level {...} span, ignoring braces inside strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            c = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif c == "\\":
                    escaped = True
                elif c == '"':
                    in_string = False
                continue
            if c == '"':
                in_string = True
            elif c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        # Unbalanced from this brace; try the next one
        start = text.find("{", start + 1)
    return None


def extract_json_text(text: str) -> str:
    """
    Locate the JSON payload inside an LLM reply.

    Args:
        text: Raw LLM response text

    Returns:
        The fenced object, else the first balanced object, else the
        stripped raw text
    """
    if not text:
        return ""

    fence = _FENCE_RE.search(text)
    if fence:
        return fence.group(1).strip()

    span = _first_balanced_object(text)
    if span is not None:
        return span

    return text.strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Extract and decode a JSON object from an LLM reply.

    Raises:
        ValueError: payload is not valid JSON or not an object
                    (json.JSONDecodeError is a ValueError subclass)
    """
    payload = extract_json_text(text)
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
