"""
Standard response builders for Switchboard.

Provides the payload shapes used when something goes wrong: the CLI error
report, a failed handler's slot in the results, and the last-resort apology.
"""

from typing import Any, Dict, Optional
from .codes import ErrorCode
from .exceptions import SwitchboardError

APOLOGY_MESSAGE = (
    "I apologize, but I encountered an error processing your request. "
    "Please try again or contact support if the issue persists."
)


def error_response(error: SwitchboardError | Exception, tool: Optional[str] = None, include_context: bool = True) -> dict:
    """Wrap an exception as {"success": False, "error": {...}}.

    Non-Switchboard exceptions are reported as INTERNAL_UNEXPECTED with
    their str() as the message. include_context=False blanks the context
    dict for output that leaves the process.

    Example:
        >>> error_response(InputError("Message cannot be empty"))["error"]["code"]
        'INPUT_EMPTY_MESSAGE'
    """
    if isinstance(error, SwitchboardError):
        payload = error.to_dict()
        if not include_context:
            payload["context"] = None
    else:
        payload = {
            "code": ErrorCode.INTERNAL_UNEXPECTED.value,
            "message": str(error),
            "details": None,
            "recoverable": False,
            "context": None,
        }
    payload["tool"] = tool
    return {"success": False, "error": payload}


def handler_error_result(tool: str, error: Exception) -> Dict[str, Any]:
    """Result slot for a handler whose execute() raised.

    Example:
        >>> handler_error_result("search", RuntimeError("timeout"))
        {"error": "Failed to execute search: timeout"}
    """
    return {"error": f"Failed to execute {tool}: {error}"}


def apology_result() -> Dict[str, Any]:
    """Formatted result used when even the conversational fallback failed."""
    return {"type": "error", "response": APOLOGY_MESSAGE}
