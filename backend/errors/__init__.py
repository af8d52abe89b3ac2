"""
Switchboard Error Handling Module

Provides standardized error codes, exceptions, and response builders
for consistent error handling across the routing pipeline.

Usage:
    from errors import (
        # Error codes
        ErrorCode,

        # Exceptions
        SwitchboardError,
        InputError,
        ClassificationError,
        HandlerExecutionError,
        PipelineFailure,
        LLMError,
        ExternalServiceError,
        ConfigurationError,

        # Response builders
        error_response,
        handler_error_result,
        apology_result,

        # Logging
        log_error,
    )

Example:
    from errors import ClassificationError, log_error

    try:
        selection = classifier.classify(message, context)
    except ClassificationError as e:
        log_error(logger, e, context="router", include_traceback=False)
        selection = patterns.classify(message)
"""

from .codes import ErrorCode
from .exceptions import (
    SwitchboardError,
    InputError,
    ClassificationError,
    HandlerExecutionError,
    PipelineFailure,
    LLMError,
    ExternalServiceError,
    ConfigurationError,
)
from .response import (
    APOLOGY_MESSAGE,
    error_response,
    handler_error_result,
    apology_result,
)
from .handlers import log_error

__all__ = [
    # Error codes
    "ErrorCode",
    # Exceptions
    "SwitchboardError",
    "InputError",
    "ClassificationError",
    "HandlerExecutionError",
    "PipelineFailure",
    "LLMError",
    "ExternalServiceError",
    "ConfigurationError",
    # Response builders
    "APOLOGY_MESSAGE",
    "error_response",
    "handler_error_result",
    "apology_result",
    # Logging
    "log_error",
]
