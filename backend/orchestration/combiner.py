"""
Result Combiner - Merges handler results into the formatted result.
"""

from typing import Any, Dict


class ResultCombiner:
    """
    One result passes through untouched; several become a combined block:

        {"type": "combined", "results": {...}, "summary": "..."}
    """

    def combine(self, results: Dict[str, Any]) -> Dict[str, Any]:
        if len(results) == 1:
            return next(iter(results.values()))

        return {
            "type": "combined",
            "results": results,
            "summary": self.summarize(results),
        }

    def summarize(self, results: Dict[str, Any]) -> str:
        """Join each result's "message" (else "response") in order."""
        parts = []
        for result in results.values():
            if not isinstance(result, dict):
                continue
            if result.get("message") is not None:
                parts.append(str(result["message"]))
            elif result.get("response") is not None:
                parts.append(str(result["response"]))
        return " ".join(parts)
