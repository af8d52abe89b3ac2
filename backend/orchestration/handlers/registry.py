"""
Handler Registry - Immutable identifier → handler mapping.

Built once when the Orchestrator is constructed, from the enablement flags
(RouterConfig.get_enabled_tools()) and the handler instances available.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator

from errors import ConfigurationError

from .base import ToolHandler, ToolKind

logger = logging.getLogger(__name__)


class HandlerRegistry(Mapping):
    """
    Read-only mapping of enabled handler identifiers to handlers.

    Iteration order is the enablement order.
    """

    def __init__(self, handlers: Dict[str, ToolHandler]):
        self._handlers = MappingProxyType(dict(handlers))

    def __getitem__(self, name: str) -> ToolHandler:
        return self._handlers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry({list(self._handlers)})"

    def descriptions(self) -> Dict[str, str]:
        """Identifier → description, for prompts and the CLI."""
        return {name: handler.get_description() for name, handler in self._handlers.items()}


def build_registry(
    enabled_tools: Dict[str, bool],
    handlers: Iterable[ToolHandler],
) -> HandlerRegistry:
    """
    Build the registry from enablement flags and available handlers.

    Args:
        enabled_tools: identifier → enabled flag (from configuration)
        handlers: handler instances that can be registered

    Raises:
        ConfigurationError: two handlers share a kind, or the conversation
                            handler is not registered
    """
    available: Dict[str, ToolHandler] = {}
    for handler in handlers:
        if handler.name in available:
            raise ConfigurationError(
                f"Duplicate handler for '{handler.name}'",
                details=f"{type(available[handler.name]).__name__} and {type(handler).__name__}",
            )
        available[handler.name] = handler

    entries: Dict[str, ToolHandler] = {}
    for name, enabled in enabled_tools.items():
        if not enabled:
            continue

        try:
            kind = ToolKind.parse(name)
        except ValueError:
            logger.warning(f"Ignoring unknown tool in enabled_tools: '{name}'")
            continue

        handler = available.get(kind.value)
        if handler is None:
            logger.warning(f"Tool '{kind.value}' is enabled but no handler was supplied")
            continue

        entries[kind.value] = handler

    for name in available:
        if name not in entries:
            logger.debug(f"Handler '{name}' supplied but not enabled")

    if ToolKind.CONVERSATION.value not in entries:
        raise ConfigurationError(
            "Conversation handler is required",
            details="Enable 'conversation' and supply a conversation handler",
        )

    logger.info(f"Handler registry built with {len(entries)} tools: {', '.join(entries)}")
    return HandlerRegistry(entries)
