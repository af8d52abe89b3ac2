"""
Error codes for Switchboard.

Provides a standardized taxonomy of error codes organized by category.
Use these codes consistently across all error responses and log lines.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for Switchboard.

    Categories:
    - INPUT_*: Message validation errors (raised upstream of the pipeline)
    - CLASSIFICATION_*: Model-based intent classification errors
    - SELECTION_*: Tool selection overrides made by the validator
    - HANDLER_*: Single tool handler failures
    - PIPELINE_*: Failures escaping a pipeline stage
    - LLM_*: Language model errors
    - EXTERNAL_*: External service errors
    - INTERNAL_*: Internal/unexpected errors
    """

    # Input errors (message checking)
    INPUT_EMPTY_MESSAGE = "INPUT_EMPTY_MESSAGE"
    INPUT_INVALID_TYPE = "INPUT_INVALID_TYPE"

    # Classification errors (model intent path)
    CLASSIFICATION_PROVIDER_FAILED = "CLASSIFICATION_PROVIDER_FAILED"
    CLASSIFICATION_PARSE_FAILED = "CLASSIFICATION_PARSE_FAILED"
    CLASSIFICATION_INVALID_SELECTION = "CLASSIFICATION_INVALID_SELECTION"

    # Selection overrides (validator)
    SELECTION_LOW_CONFIDENCE = "SELECTION_LOW_CONFIDENCE"
    SELECTION_UNKNOWN_TOOL = "SELECTION_UNKNOWN_TOOL"
    SELECTION_EMPTY = "SELECTION_EMPTY"

    # Handler errors
    HANDLER_EXECUTION_FAILED = "HANDLER_EXECUTION_FAILED"

    # Pipeline errors (caught by the fallback chain)
    PIPELINE_ROUTING_FAILED = "PIPELINE_ROUTING_FAILED"
    PIPELINE_EXECUTION_FAILED = "PIPELINE_EXECUTION_FAILED"
    PIPELINE_COMBINING_FAILED = "PIPELINE_COMBINING_FAILED"

    # LLM errors (model interactions)
    LLM_UNAVAILABLE = "LLM_UNAVAILABLE"
    LLM_TIMEOUT = "LLM_TIMEOUT"
    LLM_RESPONSE_INVALID = "LLM_RESPONSE_INVALID"

    # External service errors
    EXTERNAL_SEARXNG_FAILED = "EXTERNAL_SEARXNG_FAILED"
    EXTERNAL_LLM_FAILED = "EXTERNAL_LLM_FAILED"
    EXTERNAL_NETWORK_ERROR = "EXTERNAL_NETWORK_ERROR"

    # Internal errors (unexpected failures)
    INTERNAL_UNEXPECTED = "INTERNAL_UNEXPECTED"
    INTERNAL_CONFIG_ERROR = "INTERNAL_CONFIG_ERROR"
