"""
Tool Handlers - The capabilities a message can be routed to.

Architecture:
    ToolKind is the closed set of identifiers. Each ToolHandler implements
    get_description() and execute(message, context). build_registry() turns
    the enabled flags plus handler instances into an immutable HandlerRegistry.

Built-in handlers:
    conversation - ConversationHandler (required)
    search       - SearchHandler (SearXNG + LLM answer)

The database and expense handlers belong to the host application and are
passed to the Orchestrator as ToolHandler instances.
"""

from .base import ToolHandler, ToolKind
from .registry import HandlerRegistry, build_registry
from .conversation import ConversationHandler, fallback_response
from .search import SearchHandler

__all__ = [
    "ToolHandler",
    "ToolKind",
    "HandlerRegistry",
    "build_registry",
    "ConversationHandler",
    "fallback_response",
    "SearchHandler",
]
