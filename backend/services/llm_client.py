"""
LLM Client - wraps the OpenAI SDK to talk to any OpenAI-compatible server.

The routing pipeline only needs one capability from a language model:
turn a system prompt plus a user prompt into text. CompletionProvider names
that seam; LLMClient is the production implementation.

Key translations:
- Thinking: <think>...</think> inline tags are stripped from the reply
- Options: temperature / max_tokens come from RouterConfig.get_llm_params()
- Errors: SDK timeouts → LLMError(error_type="timeout"), other SDK errors → LLMError
"""

import logging
import re
import time
from typing import Optional, Protocol, runtime_checkable

import httpx
from openai import APITimeoutError, OpenAI, OpenAIError

from errors import LLMError
from logging_config import log_llm

logger = logging.getLogger(__name__)

_THINK_RE = re.compile(r"<think>(.*?)</think>", re.DOTALL)


@runtime_checkable
class CompletionProvider(Protocol):
    """Anything that can turn (system_prompt, user_prompt) into reply text."""

    def complete(self, system_prompt: str, user_prompt: str) -> str: ...


def _extract_thinking(content: str) -> tuple:
    """Extract <think>...</think> tags from content.

    Reasoning models return thinking inline in content as <think> tags.

    Returns:
        (clean_content, thinking_text)
    """
    if not content:
        return "", ""

    thinking_parts = _THINK_RE.findall(content)
    thinking = "\n".join(thinking_parts).strip()

    clean = _THINK_RE.sub("", content).strip()
    return clean, thinking


class LLMClient:
    """Wraps OpenAI SDK pointing at an OpenAI-compatible chat endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str = "not-needed",
        timeout: float = 60.0,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        """
        Args:
            base_url: Server URL without the /v1 suffix (e.g., "http://localhost:8081")
            model: Model name sent with every request
            api_key: API key (local servers ignore it)
            timeout: Request timeout in seconds
            temperature: Sampling temperature
            max_tokens: Completion token limit
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._timeout = timeout
        self._openai = OpenAI(
            base_url=f"{self.base_url}/v1",
            api_key=api_key or "not-needed",
            timeout=timeout,
        )

    @classmethod
    def from_config(cls, config, model: Optional[str] = None) -> "LLMClient":
        """Build a client from RouterConfig (model defaults to the chat model)."""
        params = config.get_llm_params()
        return cls(
            base_url=config.llm_base_url,
            model=model or config.model_chat,
            api_key=config.llm_api_key,
            timeout=config.llm_timeout,
            temperature=params["temperature"],
            max_tokens=params["max_tokens"],
        )

    def is_healthy(self, timeout: float = 3.0) -> bool:
        """Sync health check against the server /health endpoint."""
        try:
            resp = httpx.get(f"{self.base_url}/health", timeout=timeout)
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Single-turn chat completion.

        Returns:
            Reply text with any <think> blocks removed

        Raises:
            LLMError: request timed out or the server/SDK reported an error
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        log_llm(logger, "start", model=self.model)
        start = time.perf_counter()

        try:
            response = self._openai.chat.completions.create(
                model=self.model or "default",
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                stream=False,
            )
        except APITimeoutError as e:
            raise LLMError(
                f"LLM request timed out after {self._timeout}s",
                details=str(e),
                model=self.model,
                error_type="timeout",
            ) from e
        except OpenAIError as e:
            raise LLMError("LLM request failed", details=str(e), model=self.model) from e

        log_llm(logger, "end", model=self.model, duration=time.perf_counter() - start)

        if not response.choices:
            raise LLMError("LLM returned no choices", model=self.model, error_type="invalid")

        raw_content = response.choices[0].message.content or ""
        content, thinking = _extract_thinking(raw_content)
        if thinking:
            logger.debug(f"Stripped {len(thinking)} chars of thinking from {self.model} reply")

        return content
