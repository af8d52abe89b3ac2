"""
Tests for the OpenAI-compatible LLM client (SDK mocked).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import pytest
from openai import APIConnectionError, APITimeoutError

from errors import ErrorCode, LLMError
from services.llm_client import CompletionProvider, LLMClient, _extract_thinking


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def mock_openai():
    with patch("services.llm_client.OpenAI") as mock_cls:
        yield mock_cls


class TestExtractThinking:
    """Test <think> tag handling."""

    def test_strips_think_blocks(self):
        """Thinking is separated from content."""
        clean, thinking = _extract_thinking("<think>pick search</think>\n{\"tools\": []}")
        assert clean == '{"tools": []}'
        assert thinking == "pick search"

    def test_no_content(self):
        """Empty content yields empty strings."""
        assert _extract_thinking("") == ("", "")


class TestLLMClient:
    """Test completion calls."""

    def test_sdk_configuration(self, mock_openai):
        """The SDK points at <base_url>/v1."""
        LLMClient("http://llm.test/", model="m", api_key="k", timeout=12)
        mock_openai.assert_called_once_with(base_url="http://llm.test/v1", api_key="k", timeout=12)

    def test_complete(self, mock_openai):
        """complete() sends system + user messages and returns clean text."""
        sdk = mock_openai.return_value
        sdk.chat.completions.create.return_value = _completion("<think>hmm</think>Hello!")
        client = LLMClient("http://llm.test", model="chat-model", temperature=0.2, max_tokens=100)

        assert client.complete("be nice", "hi") == "Hello!"

        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "chat-model"
        assert kwargs["messages"] == [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "hi"},
        ]
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 100

    def test_empty_system_prompt_omitted(self, mock_openai):
        """No system message when the system prompt is empty."""
        sdk = mock_openai.return_value
        sdk.chat.completions.create.return_value = _completion("ok")
        LLMClient("http://llm.test", model="m").complete("", "hi")
        assert sdk.chat.completions.create.call_args.kwargs["messages"] == [{"role": "user", "content": "hi"}]

    def test_timeout(self, mock_openai):
        """SDK timeouts become LLM_TIMEOUT errors."""
        request = httpx.Request("POST", "http://llm.test/v1/chat/completions")
        mock_openai.return_value.chat.completions.create.side_effect = APITimeoutError(request=request)
        with pytest.raises(LLMError) as exc_info:
            LLMClient("http://llm.test", model="m").complete("s", "u")
        assert exc_info.value.code == ErrorCode.LLM_TIMEOUT

    def test_connection_error(self, mock_openai):
        """Other SDK errors become LLM_UNAVAILABLE errors."""
        request = httpx.Request("POST", "http://llm.test/v1/chat/completions")
        mock_openai.return_value.chat.completions.create.side_effect = APIConnectionError(request=request)
        with pytest.raises(LLMError) as exc_info:
            LLMClient("http://llm.test", model="m").complete("s", "u")
        assert exc_info.value.code == ErrorCode.LLM_UNAVAILABLE

    def test_no_choices(self, mock_openai):
        """An empty choices list is an invalid response."""
        mock_openai.return_value.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(LLMError) as exc_info:
            LLMClient("http://llm.test", model="m").complete("s", "u")
        assert exc_info.value.code == ErrorCode.LLM_RESPONSE_INVALID

    def test_is_healthy(self, mock_openai):
        """Health checks /health and treats errors as unhealthy."""
        client = LLMClient("http://llm.test", model="m")
        with patch("services.llm_client.httpx.get") as mock_get:
            mock_get.return_value = MagicMock(status_code=200)
            assert client.is_healthy() is True
            mock_get.assert_called_once_with("http://llm.test/health", timeout=3.0)

            mock_get.side_effect = httpx.ConnectError("refused")
            assert client.is_healthy() is False

    def test_from_config(self, mock_openai, config_factory):
        """from_config takes URL, key, timeout and sampling from RouterConfig."""
        cfg = config_factory(temperature=0.1, max_output_tokens=256, llm_timeout=30)
        client = LLMClient.from_config(cfg, model=cfg.model_intent)
        assert client.model == "intent-model"
        assert client.temperature == 0.1
        assert client.max_tokens == 256
        mock_openai.assert_called_once_with(base_url="http://llm.test/v1", api_key="test-key", timeout=30)

    def test_from_config_defaults_to_chat_model(self, mock_openai, config):
        """Without a model argument the chat model is used."""
        assert LLMClient.from_config(config).model == "chat-model"

    def test_is_completion_provider(self, mock_openai):
        """LLMClient satisfies the provider protocol."""
        assert isinstance(LLMClient("http://llm.test", model="m"), CompletionProvider)
