"""
Tests for the Switchboard error handling module.
"""

import logging

from errors import (
    APOLOGY_MESSAGE,
    ErrorCode,
    SwitchboardError,
    InputError,
    ClassificationError,
    HandlerExecutionError,
    PipelineFailure,
    LLMError,
    ExternalServiceError,
    ConfigurationError,
    error_response,
    handler_error_result,
    apology_result,
    log_error,
)


class TestErrorCodes:
    """Test error code enum."""

    def test_error_codes_are_strings(self):
        """Error codes should be string values."""
        assert ErrorCode.INPUT_EMPTY_MESSAGE.value == "INPUT_EMPTY_MESSAGE"
        assert ErrorCode.CLASSIFICATION_PARSE_FAILED == "CLASSIFICATION_PARSE_FAILED"

    def test_error_codes_have_categories(self):
        """Error codes should follow category naming convention."""
        for prefix in ("INPUT_", "CLASSIFICATION_", "SELECTION_", "PIPELINE_", "LLM_", "EXTERNAL_"):
            assert any(c.value.startswith(prefix) for c in ErrorCode), prefix


class TestSwitchboardError:
    """Test base SwitchboardError exception."""

    def test_basic_creation(self):
        """Create basic error with message."""
        err = SwitchboardError("Test error")
        assert err.message == "Test error"
        assert err.details is None
        assert err.code == ErrorCode.INTERNAL_UNEXPECTED
        assert err.recoverable is False
        assert err.context is None

    def test_with_context(self):
        """Extra keyword arguments become context."""
        err = SwitchboardError("Test error", foo="bar", count=42)
        assert err.context == {"foo": "bar", "count": 42}

    def test_none_context_dropped(self):
        """Context keys with None values are left out."""
        err = SwitchboardError("Test error", foo=None, bar=1)
        assert err.context == {"bar": 1}

    def test_code_for_unknown_kind(self):
        """Unknown failure kinds fall back to the class code."""
        assert LLMError.code_for("timeout") == ErrorCode.LLM_TIMEOUT
        assert LLMError.code_for("weird") == ErrorCode.LLM_UNAVAILABLE
        assert ClassificationError.code_for(None) == ErrorCode.CLASSIFICATION_PROVIDER_FAILED

    def test_str_representation(self):
        """String representation includes message and details."""
        assert str(SwitchboardError("Test error", details="More info")) == "Test error - More info"
        assert str(SwitchboardError("Test error")) == "Test error"

    def test_to_dict(self):
        """Convert error to dictionary."""
        d = SwitchboardError("Test error", details="More info", key="value").to_dict()
        assert d == {
            "code": "INTERNAL_UNEXPECTED",
            "message": "Test error",
            "details": "More info",
            "recoverable": False,
            "context": {"key": "value"},
        }

    def test_override_code_and_recoverable(self):
        """Constructor can override class defaults."""
        err = SwitchboardError("x", code=ErrorCode.LLM_TIMEOUT, recoverable=True)
        assert err.code == ErrorCode.LLM_TIMEOUT
        assert err.recoverable is True


class TestSubclasses:
    """Test code selection in the exception subclasses."""

    def test_input_error(self):
        """InputError is recoverable and records what was received."""
        err = InputError("Message must be text", code=ErrorCode.INPUT_INVALID_TYPE, received="int")
        assert err.code == ErrorCode.INPUT_INVALID_TYPE
        assert err.recoverable is True
        assert err.context == {"received": "int"}
        assert InputError("empty").code == ErrorCode.INPUT_EMPTY_MESSAGE

    def test_classification_error_types(self):
        """error_type picks the classification code."""
        assert ClassificationError("x", error_type="parse").code == ErrorCode.CLASSIFICATION_PARSE_FAILED
        assert ClassificationError("x", error_type="invalid").code == ErrorCode.CLASSIFICATION_INVALID_SELECTION
        assert ClassificationError("x").code == ErrorCode.CLASSIFICATION_PROVIDER_FAILED

    def test_handler_execution_error(self):
        """Tool name goes into context."""
        err = HandlerExecutionError("Failed to execute search", tool="search")
        assert err.code == ErrorCode.HANDLER_EXECUTION_FAILED
        assert err.context == {"tool": "search"}

    def test_pipeline_failure_stages(self):
        """Stage picks the pipeline code and is kept in context."""
        assert PipelineFailure("x", stage="routing").code == ErrorCode.PIPELINE_ROUTING_FAILED
        assert PipelineFailure("x", stage="executing").code == ErrorCode.PIPELINE_EXECUTION_FAILED
        err = PipelineFailure("x", stage="combining")
        assert err.code == ErrorCode.PIPELINE_COMBINING_FAILED
        assert err.context == {"stage": "combining"}

    def test_llm_error_types(self):
        """LLM error codes by type."""
        assert LLMError("x", error_type="timeout").code == ErrorCode.LLM_TIMEOUT
        assert LLMError("x", error_type="invalid").code == ErrorCode.LLM_RESPONSE_INVALID
        err = LLMError("x", model="chat-model")
        assert err.code == ErrorCode.LLM_UNAVAILABLE
        assert err.context == {"model": "chat-model"}

    def test_external_service_error(self):
        """Service name picks the code; status code is kept."""
        err = ExternalServiceError("down", service="searxng", status_code=502)
        assert err.code == ErrorCode.EXTERNAL_SEARXNG_FAILED
        assert err.context == {"service": "searxng", "status_code": 502}
        assert ExternalServiceError("x").code == ErrorCode.EXTERNAL_NETWORK_ERROR

    def test_configuration_error(self):
        """ConfigurationError is not recoverable."""
        err = ConfigurationError("missing conversation")
        assert err.code == ErrorCode.INTERNAL_CONFIG_ERROR
        assert err.recoverable is False


class TestResponseBuilders:
    """Test response payload builders."""

    def test_error_response_switchboard_error(self):
        """Switchboard errors keep their code and context."""
        resp = error_response(InputError("Message cannot be empty"), tool="cli")
        assert resp["success"] is False
        assert resp["error"]["code"] == "INPUT_EMPTY_MESSAGE"
        assert resp["error"]["tool"] == "cli"
        assert resp["error"]["recoverable"] is True

    def test_error_response_hides_context(self):
        """include_context=False drops the context dict."""
        resp = error_response(LLMError("x", model="m"), include_context=False)
        assert resp["error"]["context"] is None

    def test_error_response_plain_exception(self):
        """Other exceptions map to INTERNAL_UNEXPECTED."""
        resp = error_response(RuntimeError("boom"))
        assert resp["error"]["code"] == "INTERNAL_UNEXPECTED"
        assert resp["error"]["message"] == "boom"

    def test_handler_error_result(self):
        """Failed handler slot names the tool and the reason."""
        assert handler_error_result("search", RuntimeError("timeout")) == {
            "error": "Failed to execute search: timeout"
        }

    def test_apology_result(self):
        """Apology payload is an error-typed response."""
        assert apology_result() == {"type": "error", "response": APOLOGY_MESSAGE}


class TestLogError:
    """Test log_error formatting."""

    def test_logs_code_and_context(self, caplog):
        """Switchboard errors are logged with their code."""
        logger = logging.getLogger("test.errors")
        with caplog.at_level(logging.WARNING, logger="test.errors"):
            log_error(logger, ClassificationError("bad json", error_type="parse"), context="intent",
                      include_traceback=False, level=logging.WARNING)
        assert "[intent] CLASSIFICATION_PARSE_FAILED: bad json" in caplog.text

    def test_logs_plain_exception(self, caplog):
        """Plain exceptions are logged by message."""
        logger = logging.getLogger("test.errors")
        with caplog.at_level(logging.ERROR, logger="test.errors"):
            log_error(logger, ValueError("nope"), include_traceback=False)
        assert "nope" in caplog.text
