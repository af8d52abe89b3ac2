"""
Exception hierarchy for Switchboard.

Every error derives from SwitchboardError and carries an ErrorCode, a
message, optional details, a recoverable flag and free-form context.
Subclasses that cover several failure kinds pick their code from a
``kind_codes`` table keyed by the ``error_type``/``stage``/``service``
argument they accept.
"""

from typing import Any, Dict, Optional
from .codes import ErrorCode


class SwitchboardError(Exception):
    """Base exception for all Switchboard errors."""

    code: ErrorCode = ErrorCode.INTERNAL_UNEXPECTED
    recoverable: bool = False
    kind_codes: Dict[str, ErrorCode] = {}

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        recoverable: Optional[bool] = None,
        **context: Any,
    ):
        self.message = message
        self.details = details
        # None-valued context keys are dropped
        context = {k: v for k, v in context.items() if v is not None}
        self.context = context or None

        if code is not None:
            self.code = code
        if recoverable is not None:
            self.recoverable = recoverable

        super().__init__(message)

    @classmethod
    def code_for(cls, kind: Optional[str]) -> ErrorCode:
        """Map a failure kind to its ErrorCode (class default when unknown)."""
        return cls.kind_codes.get(kind or "", cls.code)

    def __str__(self) -> str:
        return f"{self.message} - {self.details}" if self.details else self.message

    def to_dict(self) -> dict:
        """Plain-dict form used by error_response() and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "context": self.context,
        }


class InputError(SwitchboardError):
    """Empty or malformed user message, rejected before routing."""

    code = ErrorCode.INPUT_EMPTY_MESSAGE
    recoverable = True

    def __init__(self, message: str, details: Optional[str] = None, received: Optional[str] = None, **context: Any):
        super().__init__(message, details, received=received or None, **context)


class ClassificationError(SwitchboardError):
    """Model-based intent classification failed.

    Always recovered by the router's keyword path, never shown to the user.
    """

    code = ErrorCode.CLASSIFICATION_PROVIDER_FAILED
    recoverable = True
    kind_codes = {
        "parse": ErrorCode.CLASSIFICATION_PARSE_FAILED,
        "invalid": ErrorCode.CLASSIFICATION_INVALID_SELECTION,
    }

    def __init__(self, message: str, details: Optional[str] = None, error_type: Optional[str] = None, **context: Any):
        super().__init__(message, details, code=self.code_for(error_type), **context)


class HandlerExecutionError(SwitchboardError):
    """A single tool handler raised while executing."""

    code = ErrorCode.HANDLER_EXECUTION_FAILED
    recoverable = True

    def __init__(self, message: str, details: Optional[str] = None, tool: Optional[str] = None, **context: Any):
        super().__init__(message, details, tool=tool or None, **context)


class PipelineFailure(SwitchboardError):
    """An exception escaped a pipeline stage (routing, executing or combining)."""

    code = ErrorCode.PIPELINE_ROUTING_FAILED
    kind_codes = {
        "executing": ErrorCode.PIPELINE_EXECUTION_FAILED,
        "combining": ErrorCode.PIPELINE_COMBINING_FAILED,
    }

    def __init__(self, message: str, details: Optional[str] = None, stage: Optional[str] = None, **context: Any):
        super().__init__(message, details, code=self.code_for(stage), stage=stage or None, **context)


class LLMError(SwitchboardError):
    """A completion request failed, timed out or came back unusable."""

    code = ErrorCode.LLM_UNAVAILABLE
    kind_codes = {
        "timeout": ErrorCode.LLM_TIMEOUT,
        "invalid": ErrorCode.LLM_RESPONSE_INVALID,
    }

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        model: Optional[str] = None,
        error_type: Optional[str] = None,
        **context: Any,
    ):
        super().__init__(message, details, code=self.code_for(error_type), model=model or None, **context)


class ExternalServiceError(SwitchboardError):
    """A call to SearXNG or another HTTP dependency failed."""

    code = ErrorCode.EXTERNAL_NETWORK_ERROR
    recoverable = True
    kind_codes = {
        "searxng": ErrorCode.EXTERNAL_SEARXNG_FAILED,
        "llm": ErrorCode.EXTERNAL_LLM_FAILED,
    }

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any,
    ):
        super().__init__(
            message,
            details,
            code=self.code_for(service),
            service=service or None,
            status_code=status_code or None,
            **context,
        )


class ConfigurationError(SwitchboardError):
    """Invalid wiring detected while building the orchestrator."""

    code = ErrorCode.INTERNAL_CONFIG_ERROR
