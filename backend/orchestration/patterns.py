"""
Pattern Classifier - Deterministic keyword routing.

Two jobs:
1. looks_obvious(): cheap gate that lets hybrid mode skip the model for
   unambiguous messages ("$25 for lunch", "search for ...", "list all ...")
2. select_tools_with_keywords(): the keyword selection, used as the fast
   path and as the last resort whenever the model path fails

Never fails, never touches the network.
"""

import re
from typing import List

from .selection import CONVERSATION, SOURCE_KEYWORD, ToolSelection

# =============================================================================
# OBVIOUS-INTENT GATE
# =============================================================================

_OBVIOUS_PATTERNS = [
    re.compile(r"^[$€£]\s?\d+"),
    re.compile(r"^add expense", re.IGNORECASE),
    re.compile(r"^create expense", re.IGNORECASE),
    re.compile(r"\b(search|find|look up|latest news|search for|look for|serch|finde)\b", re.IGNORECASE),
    re.compile(r"^show (me )?all", re.IGNORECASE),
    re.compile(r"^list (all|my)", re.IGNORECASE),
]

# =============================================================================
# KEYWORD GROUPS (checked in this order, each appends one identifier)
# =============================================================================

_EXPENSE_WORDS = re.compile(
    r"\b(expenses?|spend(ing|s)?|spent|costs?|pay|paid|bills?|receipts?|dollars?)\b",
    re.IGNORECASE,
)
# Currency symbols sit next to digits, so no word boundary here
_CURRENCY = re.compile(r"[$€£]")

_DATABASE_WORDS = re.compile(
    r"\b(show\s+(me\s+)?all|list(\s+(all|my))?|display|users?|data|records?|get\s+(all|my))\b",
    re.IGNORECASE,
)

_SEARCH_WORDS = re.compile(
    r"\b(search|find|look\s+for|look\s+up|latest|news|serch|finde)\b",
    re.IGNORECASE,
)

# Communication requests are answered conversationally
_COMMUNICATION_WORDS = re.compile(r"\b(email|send|report|notify|message)\b", re.IGNORECASE)


def looks_obvious(message: str) -> bool:
    """True when the message is unambiguous enough to skip model classification."""
    text = (message or "").strip()
    return any(p.search(text) for p in _OBVIOUS_PATTERNS)


def select_tools_with_keywords(message: str) -> List[str]:
    """
    Keyword-based tool selection.

    Returns:
        Identifiers in group order (expense, database, search, conversation),
        or exactly ["conversation"] when no group matches
    """
    text = message or ""
    tools: List[str] = []

    if _EXPENSE_WORDS.search(text) or _CURRENCY.search(text):
        tools.append("expense")

    if _DATABASE_WORDS.search(text):
        tools.append("database")

    if _SEARCH_WORDS.search(text):
        tools.append("search")

    if _COMMUNICATION_WORDS.search(text) and CONVERSATION not in tools:
        tools.append(CONVERSATION)

    if not tools:
        tools.append(CONVERSATION)

    return tools


class PatternClassifier:
    """
    Keyword classifier exposed with the same classify() shape as ModelClassifier.

    Usage:
        patterns = PatternClassifier()
        if patterns.looks_obvious(message):
            selection = patterns.classify(message)
    """

    name = "keyword"

    def looks_obvious(self, message: str) -> bool:
        return looks_obvious(message)

    def select_tools(self, message: str) -> List[str]:
        return select_tools_with_keywords(message)

    def classify(self, message: str) -> ToolSelection:
        """Keyword selection at full confidence."""
        tools = select_tools_with_keywords(message)
        return ToolSelection(
            tools,
            confidence=1.0,
            reasoning="Keyword match",
            source=SOURCE_KEYWORD,
        )
