"""
Runtime Configuration for Switchboard.

Provides a RouterConfig dataclass whose values default from environment
variables. One instance is passed to the Orchestrator at construction; the
routing flags are read on every call, the enabled tool set only once.

Usage:
    from config import runtime_config
    threshold = runtime_config.intent_confidence_threshold
    runtime_config.update(intent_hybrid_mode=True)
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Any
from threading import Lock

logger = logging.getLogger(__name__)

DEFAULT_ENABLED_TOOLS = "conversation,database,search,expense"


def _env_bool(key: str, default: str) -> bool:
    return os.environ.get(key, default).strip().lower() in ("1", "true", "yes", "on")


def _first_env(*keys: str, default: str) -> str:
    """Return the first non-empty environment value from keys, else default."""
    for key in keys:
        value = os.environ.get(key, "").strip()
        if value:
            return value
    return default


@dataclass
class RouterConfig:
    """
    Configuration for the routing pipeline.

    All values have defaults from environment variables, but can be
    passed explicitly (tests) or changed at runtime via update().
    """

    # Intent classification
    use_model_intent: bool = field(default_factory=lambda: _env_bool("USE_MODEL_INTENT", "true"))
    intent_hybrid_mode: bool = field(
        default_factory=lambda: _env_bool("INTENT_HYBRID_MODE", "false")
    )  # Regex fast path for obvious messages, model for the rest
    intent_confidence_threshold: float = field(
        default_factory=lambda: float(os.environ.get("INTENT_CONFIDENCE_THRESHOLD", "0.5"))
    )
    intent_log_decisions: bool = field(
        default_factory=lambda: _env_bool("INTENT_LOG_DECISIONS", "false")
    )

    # Tool enablement (comma-separated identifiers)
    enabled_tools: str = field(
        default_factory=lambda: os.environ.get("ENABLED_TOOLS", DEFAULT_ENABLED_TOOLS)
    )

    # LLM provider (any OpenAI-compatible server)
    llm_base_url: str = field(
        default_factory=lambda: os.environ.get("LLM_BASE_URL", "http://localhost:8081").strip() or "http://localhost:8081"
    )
    llm_api_key: str = field(default_factory=lambda: os.environ.get("LLM_API_KEY", "not-needed"))
    model_intent: str = field(
        default_factory=lambda: _first_env(
            "LLM_INTENT_MODEL",
            "LLM_CHAT_MODEL",
            default="gpt-4o-mini",
        )
    )
    model_chat: str = field(default_factory=lambda: _first_env("LLM_CHAT_MODEL", default="gpt-4o-mini"))
    temperature: float = field(default_factory=lambda: float(os.environ.get("LLM_TEMPERATURE", "0.7")))
    max_output_tokens: int = field(default_factory=lambda: int(os.environ.get("LLM_MAX_OUTPUT", "2000")))
    llm_timeout: int = field(default_factory=lambda: int(os.environ.get("LLM_TIMEOUT", "60")))

    # Web search (SearXNG)
    searxng_url: str = field(
        default_factory=lambda: os.environ.get("SEARXNG_URL", "http://localhost:8080").strip() or "http://localhost:8080"
    )
    searxng_timeout_s: float = field(
        default_factory=lambda: float(os.environ.get("SEARXNG_TIMEOUT_S", "10"))
    )
    searxng_max_results: int = field(
        default_factory=lambda: int(os.environ.get("SEARXNG_MAX_RESULTS", "5"))
    )
    searxng_categories: str = field(
        default_factory=lambda: os.environ.get("SEARXNG_CATEGORIES", "general").strip() or "general"
    )

    # Result pages read before answering (0 = answer from snippets only)
    search_fetch_pages: int = field(
        default_factory=lambda: int(os.environ.get("SEARCH_FETCH_PAGES", "3"))
    )
    page_fetch_timeout_s: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_FETCH_TIMEOUT_S", "30"))
    )
    page_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("PAGE_MAX_CHARS", "10000"))
    )

    # Conversation handler
    message_history_limit: int = field(
        default_factory=lambda: int(os.environ.get("MESSAGE_HISTORY_LIMIT", "5"))
    )

    # Internal state
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)
    _update_count: int = field(default=0, repr=False)

    # Validation ranges for numeric config values
    _VALIDATION_RANGES: Dict[str, tuple] = field(default_factory=lambda: {
        "intent_confidence_threshold": (0.0, 1.0),
        "temperature": (0.0, 2.0),
        "max_output_tokens": (64, 32768),
        "llm_timeout": (1, 600),
        "searxng_timeout_s": (1.0, 60.0),
        "searxng_max_results": (1, 25),
        "search_fetch_pages": (0, 10),
        "page_fetch_timeout_s": (1.0, 120.0),
        "page_max_chars": (500, 100000),
        "message_history_limit": (0, 50),
    }, repr=False, compare=False)

    def update(self, **kwargs) -> Dict[str, Any]:
        """
        Update configuration values at runtime.

        Args:
            **kwargs: Key-value pairs to update (e.g., intent_hybrid_mode=True)

        Returns:
            Dict with 'updated' (changed keys) and 'ignored' (unknown keys)
        """
        updated = []
        ignored = []

        with self._lock:
            for key, value in kwargs.items():
                if key.startswith("_"):
                    ignored.append(key)
                    continue

                if not hasattr(self, key):
                    ignored.append(key)
                    logger.warning(f"Config ignored unknown key: {key}")
                    continue

                if key in {"llm_base_url", "searxng_url"} and isinstance(value, str):
                    cleaned = value.strip()
                    if not cleaned.startswith(("http://", "https://")):
                        ignored.append(key)
                        logger.warning(f"Config rejected invalid URL: {key}={value!r}")
                        continue
                    value = cleaned.rstrip("/")

                # Validate numeric ranges
                if key in self._VALIDATION_RANGES:
                    lo, hi = self._VALIDATION_RANGES[key]
                    if not (lo <= value <= hi):
                        ignored.append(key)
                        logger.warning(f"Config rejected {key}={value} (must be {lo}-{hi})")
                        continue

                old_value = getattr(self, key)
                setattr(self, key, value)
                updated.append(key)
                logger.info(f"Config updated: {key} = {value} (was {old_value})")

            self._update_count += 1

        return {"updated": updated, "ignored": ignored, "update_count": self._update_count}

    def get_enabled_tools(self) -> Dict[str, bool]:
        """Enablement flags keyed by tool identifier, in declaration order."""
        names = [t.strip().lower() for t in self.enabled_tools.split(",") if t.strip()] if self.enabled_tools else []
        return {name: True for name in names}

    def is_tool_enabled(self, name: str) -> bool:
        """Check if a specific tool is enabled."""
        return self.get_enabled_tools().get(name, False)

    def get_llm_params(self) -> Dict[str, Any]:
        """Get LLM parameters for OpenAI API calls."""
        return {
            "temperature": self.temperature,
            "max_tokens": self.max_output_tokens,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Export current config as dict (excludes internal fields and secrets)."""
        from dataclasses import fields as dataclass_fields

        result = {}
        for field_info in dataclass_fields(self):
            if field_info.name.startswith("_") or field_info.name == "llm_api_key":
                continue
            result[field_info.name] = getattr(self, field_info.name)
        return result


# Singleton instance
runtime_config = RouterConfig()
