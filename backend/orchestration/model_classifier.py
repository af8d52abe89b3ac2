"""
Model Classifier - LLM-based intent classification.

Builds a prompt listing every registered tool (description plus example
utterances), asks the completion provider which tools fit, and parses the
JSON reply into a ToolSelection. Any failure raises ClassificationError; the
IntentRouter recovers with the keyword path.

The prompt carries a fixed search bias: messages using any SEARCH_BIAS_TERMS
word must go to "search", never "conversation". Models otherwise tend to
answer search requests conversationally.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from errors import ClassificationError
from services.json_extract import parse_json_object

from .selection import SOURCE_MODEL, ToolSelection

logger = logging.getLogger(__name__)

# Words that always mean "search" in the classification prompt
SEARCH_BIAS_TERMS = ("search", "find", "look up", "latest", "news", "search for", "look for")

TOOL_EXAMPLES: Dict[str, List[str]] = {
    "expense": [
        "Add expense $15 for coffee",
        "I spent $50 on groceries",
        "Track my spending",
        "What did I purchase yesterday?",
        "Show me my expenses",
        "List all my expenses",
    ],
    "database": [
        "Show me all users",
        "Get all records",
        "List all settings",
    ],
    "search": [
        "Search for Laravel docs",
        "Find information about AI",
        "Look for expense policy",
    ],
    "conversation": [
        "Hello!",
        "What can you help with?",
        "How do I get started?",
        "Tell me about expense tracking",
    ],
}

SYSTEM_PROMPT = """You are an intelligent router that analyzes user messages and determines
which tools should be used to handle the request.

Analyze the intent carefully and select appropriate tools.
You can select multiple tools if needed.
Always answer with a single JSON object."""

INTENT_PROMPT = """You are an intelligent intent classifier for a chat system that HAS REAL INTERNET SEARCH CAPABILITY.

CRITICAL: This system HAS a working "search" tool that CAN search the internet. You MUST use it when users want to search for information.

Available Tools:
{tools_json}

User Message: "{message}"

IMPORTANT: Respond with ONLY a JSON object, no markdown formatting, no code blocks, just pure JSON:
{{
    "tools": ["tool1", "tool2"],
    "reasoning": "Why these tools were selected",
    "confidence": 0.95
}}

Guidelines:
1. For expense-related actions (adding, listing, tracking spending), use "expense"
2. For database queries (show users, display records, list settings), use "database"
3. For ANY search request (search, look up, find, latest news, etc), ALWAYS use "search" - DO NOT use "conversation"
4. For general conversation, greetings, or questions about the system itself, use "conversation"
5. You can select multiple tools if the request requires it
6. Confidence should be between 0 and 1

CRITICAL RULE FOR SEARCH:
- If the message contains ANY of these words: {bias_terms} → ALWAYS use "search" tool
- The "search" tool will perform REAL internet searches
- NEVER use "conversation" for search requests - ALWAYS use "search" tool

Examples:
- "Add expense $25 for lunch" → {{"tools": ["expense"], "reasoning": "Direct expense addition request", "confidence": 1.0}}
- "I need to track my spending" → {{"tools": ["expense"], "reasoning": "Intent to track expenses", "confidence": 0.95}}
- "What did I purchase yesterday?" → {{"tools": ["expense"], "reasoning": "Query about past expenses", "confidence": 0.90}}
- "Show me all users" → {{"tools": ["database"], "reasoning": "Database query for users", "confidence": 1.0}}
- "Search for Laravel documentation" → {{"tools": ["search"], "reasoning": "Explicit web search request", "confidence": 1.0}}
- "search fot the latest news on trump" → {{"tools": ["search"], "reasoning": "News search request", "confidence": 1.0}}
- "serch for the date today" → {{"tools": ["search"], "reasoning": "Search request despite typo", "confidence": 1.0}}
- "Search the internet for today's date" → {{"tools": ["search"], "reasoning": "Internet search requested", "confidence": 1.0}}
- "Look up Python tutorials" → {{"tools": ["search"], "reasoning": "Web search for information", "confidence": 1.0}}
- "Find information about AI" → {{"tools": ["search"], "reasoning": "Information search query", "confidence": 1.0}}
- "latest news about technology" → {{"tools": ["search"], "reasoning": "News search request", "confidence": 1.0}}
- "Hello!" → {{"tools": ["conversation"], "reasoning": "Greeting message", "confidence": 1.0}}
- "How do I get started?" → {{"tools": ["conversation"], "reasoning": "General question about the system", "confidence": 1.0}}
- "Tell me about expense tracking" → {{"tools": ["conversation"], "reasoning": "Asking for explanation, not web search", "confidence": 0.95}}

Now analyze the user's message and respond with ONLY the JSON object."""


class IntentReply(BaseModel):
    """Shape the model must answer with."""

    tools: List[str]
    reasoning: Optional[str] = ""
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator("confidence", mode="before")
    @classmethod
    def _null_confidence(cls, value):
        # "confidence": null counts as full confidence
        return 1.0 if value is None else value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning_text(cls, value):
        if value is None or isinstance(value, str):
            return value or ""
        return json.dumps(value, ensure_ascii=False) if isinstance(value, (dict, list)) else str(value)


class ModelClassifier:
    """
    Classifies intent with the completion provider.

    Usage:
        classifier = ModelClassifier(llm_client, registry)
        selection = classifier.classify("what's new with python?", {})
    """

    name = "model"

    def __init__(self, provider, registry: Mapping[str, Any]):
        """
        Args:
            provider: CompletionProvider (complete(system_prompt, user_prompt) -> str)
            registry: HandlerRegistry whose tools are offered to the model
        """
        self.provider = provider
        self.registry = registry

    def build_tool_descriptions(self) -> Dict[str, Dict[str, Any]]:
        descriptions = {}
        for name, handler in self.registry.items():
            descriptions[name] = {
                "name": name,
                "description": handler.get_description(),
                "examples": TOOL_EXAMPLES.get(name, []),
            }
        return descriptions

    def build_prompt(self, message: str) -> str:
        tools_json = json.dumps(self.build_tool_descriptions(), indent=4, ensure_ascii=False)
        bias_terms = ", ".join(f'"{term}"' for term in SEARCH_BIAS_TERMS)
        return INTENT_PROMPT.format(tools_json=tools_json, message=message, bias_terms=bias_terms)

    def parse_reply(self, raw: str) -> ToolSelection:
        """
        Turn the raw model text into a ToolSelection.

        Raises:
            ClassificationError: reply is not JSON, or not the expected shape
        """
        try:
            data = parse_json_object(raw)
        except ValueError as e:
            raise ClassificationError(
                "Invalid JSON response from intent model",
                details=str(e),
                error_type="parse",
            ) from e

        try:
            reply = IntentReply.model_validate(data)
        except ValidationError as e:
            raise ClassificationError(
                "Invalid tool selection format",
                details=f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}",
                error_type="invalid",
            ) from e

        return ToolSelection(
            reply.tools,
            confidence=reply.confidence,
            reasoning=reply.reasoning or None,
            source=SOURCE_MODEL,
        )

    def classify(self, message: str, context: Optional[Mapping[str, Any]] = None) -> ToolSelection:
        """
        Ask the model which tools should handle the message.

        Raises:
            ClassificationError: provider failure or unusable reply
        """
        prompt = self.build_prompt(message)

        try:
            raw = self.provider.complete(SYSTEM_PROMPT, prompt)
        except Exception as e:
            raise ClassificationError(
                "Intent model call failed",
                details=str(e),
                error_type="provider",
            ) from e

        selection = self.parse_reply(raw)
        logger.debug(f"Model proposed {list(selection.identifiers)} ({selection.confidence:.2f})")
        return selection
