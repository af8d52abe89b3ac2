"""
Base Handler - Abstract base class for tool handlers.

Each handler knows how to:
1. Describe itself for the intent classification prompt (get_description)
2. Process a message and return a structured result (execute)

The set of handler kinds is closed (ToolKind). A registry maps each enabled
kind's identifier to exactly one handler instance.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Mapping


class ToolKind(str, Enum):
    """Every handler identifier the router knows about."""

    CONVERSATION = "conversation"
    DATABASE = "database"
    SEARCH = "search"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Display name used in progress messages ("Executing Search tool...")."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, name: str) -> "ToolKind":
        """Look up a kind by identifier (case-insensitive). Raises ValueError."""
        return cls((name or "").strip().lower())


class ToolHandler(ABC):
    """
    Abstract base class for tool handlers.

    Results are plain dicts. Handlers that want to show up in a multi-tool
    summary should set a "message" or "response" key.
    Raising from execute() is allowed; the executor isolates the failure.
    """

    kind: ToolKind

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def get_description(self) -> str:
        """One-line description shown to the intent classifier."""
        pass

    @abstractmethod
    def execute(self, message: str, context: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Process the message.

        Args:
            message: Cleaned user message
            context: Caller-supplied execution context (read-only)

        Returns:
            Structured result dict
        """
        pass
