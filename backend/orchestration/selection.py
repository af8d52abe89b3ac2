"""
Tool Selection - The routing decision passed between classifiers and the executor.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

CONVERSATION = "conversation"

# Where a selection came from
SOURCE_KEYWORD = "keyword"
SOURCE_MODEL = "model"
SOURCE_DEFAULT = "default"


def _dedupe(identifiers: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for name in identifiers:
        if name not in seen:
            seen.append(name)
    return tuple(seen)


@dataclass(frozen=True)
class ToolSelection:
    """
    Ordered, duplicate-free handler identifiers plus decision metadata.

    A selection straight out of a classifier may name unknown handlers or be
    empty; ConfidenceValidator.validate() turns it into one the executor can run.
    """

    identifiers: Tuple[str, ...] = field(default_factory=tuple)
    confidence: float = 1.0
    reasoning: Optional[str] = None
    source: str = SOURCE_KEYWORD

    def __post_init__(self):
        # Accept any iterable (lists from JSON, generators) but store a tuple
        object.__setattr__(self, "identifiers", _dedupe(self.identifiers))

    def with_identifiers(self, identifiers: Iterable[str], source: Optional[str] = None) -> "ToolSelection":
        """Copy with new identifiers (and optionally a new source)."""
        return replace(self, identifiers=tuple(identifiers), source=source or self.source)

    def __iter__(self):
        return iter(self.identifiers)

    def __len__(self) -> int:
        return len(self.identifiers)

    def to_dict(self) -> dict:
        return {
            "tools": list(self.identifiers),
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "source": self.source,
        }
