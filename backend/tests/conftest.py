"""
Shared pytest fixtures and fakes for the routing pipeline tests.
"""

import pytest

from config import RouterConfig
from orchestration.handlers import ToolHandler, ToolKind


class FakeHandler(ToolHandler):
    """Handler returning a fixed result (or raising) and recording its calls."""

    def __init__(self, kind, result=None, error=None, on_execute=None):
        self.kind = ToolKind(kind)
        self.result = result if result is not None else {"type": kind, "message": f"{kind} done"}
        self.error = error
        self.on_execute = on_execute
        self.calls = []

    def get_description(self):
        return f"Fake {self.kind.value} tool"

    def execute(self, message, context):
        self.calls.append((message, context))
        if self.on_execute:
            self.on_execute(message, context)
        if self.error:
            raise self.error
        return self.result


class FakeProvider:
    """CompletionProvider returning canned replies in order (or raising)."""

    def __init__(self, *replies, error=None):
        self.replies = list(replies)
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        if not self.replies:
            return ""
        return self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]


def make_config(**overrides):
    """RouterConfig with test defaults, independent of the environment."""
    values = {
        "use_model_intent": False,
        "intent_hybrid_mode": False,
        "intent_confidence_threshold": 0.5,
        "intent_log_decisions": False,
        "enabled_tools": "conversation,database,search,expense",
        "llm_base_url": "http://llm.test",
        "llm_api_key": "test-key",
        "model_intent": "intent-model",
        "model_chat": "chat-model",
        "searxng_url": "http://searx.test",
        "searxng_max_results": 3,
        "search_fetch_pages": 0,
    }
    values.update(overrides)
    return RouterConfig(**values)


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def fake_handler():
    """Factory: fake_handler("search", result={...}, error=RuntimeError())."""
    return FakeHandler


@pytest.fixture
def fake_provider():
    """Factory: fake_provider('{"tools": ["search"]}') or fake_provider(error=...)."""
    return FakeProvider


@pytest.fixture
def all_handlers():
    """One succeeding fake handler per tool kind, keyed by identifier."""
    return {kind.value: FakeHandler(kind.value) for kind in ToolKind}
