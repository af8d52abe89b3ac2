"""
Conversation Handler - General chat, greetings, help requests.

Always registered: the router defaults to it and the fallback chain
re-runs it alone when the pipeline fails. When the model is unreachable it
answers with a canned reply instead of raising.
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional

from errors import log_error

from .base import ToolHandler, ToolKind

logger = logging.getLogger(__name__)

HISTORY_CONTENT_LIMIT = 200

SYSTEM_PROMPT = """You are a helpful AI assistant for a business application.
You are currently assisting {user_name}.

Your capabilities include:
- Answering general questions
- Providing guidance on using the application
- Helping with expense tracking
- Offering general business advice

Be friendly, professional, and concise in your responses.
If asked about specific data or actions, guide the user on how to perform those actions.
Always maintain a helpful and supportive tone."""

FALLBACK_RESPONSES = {
    "greeting": "Hello! I'm here to help you with your tasks and questions. What can I assist you with today?",
    "help": (
        "I can help you with:\n"
        "• Managing expenses\n"
        "• General questions about the application\n"
        "• Business advice and best practices\n\n"
        "What would you like to know more about?"
    ),
    "error": (
        "I apologize, but I'm having trouble processing your request at the moment. "
        "Please try again in a few moments."
    ),
    "default": "I understand you need help. Could you please provide more details about what you're looking for?",
}

# Checked in order, first match wins
_FALLBACK_PATTERNS = [
    ("greeting", re.compile(r"\b(hello|hi|hey|greet)\b", re.IGNORECASE)),
    ("help", re.compile(r"\b(help|how|what|guide)\b", re.IGNORECASE)),
    ("error", re.compile(r"\b(error|problem|issue|wrong)\b", re.IGNORECASE)),
]


def fallback_response(message: str) -> Dict[str, Any]:
    """Canned reply picked by keyword, used when the model call fails."""
    key = "default"
    for name, pattern in _FALLBACK_PATTERNS:
        if pattern.search(message or ""):
            key = name
            break

    return {
        "type": "conversation",
        "response": FALLBACK_RESPONSES[key],
        "confidence": 0.5,
        "fallback": True,
    }


class ConversationHandler(ToolHandler):
    """
    Chat replies through the completion provider.

    Context keys used:
        user_name: name to address (default "User")
        message_history: list of {"role", "content"} dicts, oldest first
    """

    kind = ToolKind.CONVERSATION

    def __init__(self, client, config=None, history_limit: Optional[int] = None):
        """
        Args:
            client: CompletionProvider (LLMClient in production)
            config: RouterConfig, used for message_history_limit
            history_limit: Explicit override for the history window
        """
        self.client = client
        if history_limit is None:
            history_limit = config.message_history_limit if config is not None else 5
        self.history_limit = history_limit

    def get_description(self) -> str:
        return (
            "General conversation and questions about the application, greetings, "
            "help requests, and general inquiries"
        )

    def build_system_prompt(self, context: Mapping[str, Any]) -> str:
        user_name = context.get("user_name") or "User"
        return SYSTEM_PROMPT.format(user_name=user_name)

    def build_user_prompt(self, message: str, context: Mapping[str, Any]) -> str:
        """Prefix the message with recent history when there is any."""
        history = context.get("message_history") or []
        if not history or self.history_limit <= 0:
            return message

        lines = ["Previous conversation:"]
        for entry in history[-self.history_limit:]:
            role = str(entry.get("role", "user")).capitalize()
            content = str(entry.get("content", ""))[:HISTORY_CONTENT_LIMIT]
            lines.append(f"{role}: {content}")

        return "\n".join(lines) + f"\n\nCurrent message: {message}"

    def execute(self, message: str, context: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            reply = self.client.complete(
                self.build_system_prompt(context),
                self.build_user_prompt(message, context),
            )
        except Exception as e:
            log_error(logger, e, context="conversation", include_traceback=False, level=logging.WARNING)
            return fallback_response(message)

        return {
            "type": "conversation",
            "response": reply,
            "confidence": 0.95,
        }
