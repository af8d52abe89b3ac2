"""
Intent Router - Chooses the tools for a message.

Paths (from RouterConfig, read on every call):
    use_model_intent=False                     → keyword path
    use_model_intent=True, hybrid mode on      → keyword path for obvious
                                                 messages, model for the rest
    use_model_intent=True, hybrid mode off     → model path

A ClassificationError on the model path falls back to the keyword path.
Every selection returned has been through ConfidenceValidator.
"""

import logging
from typing import Any, Mapping, Optional

from errors import ClassificationError, log_error
from logging_config import log_intent

from .patterns import PatternClassifier
from .selection import ToolSelection
from .validator import ConfidenceValidator

logger = logging.getLogger(__name__)


class IntentRouter:
    """
    Routes a message to validated tool identifiers.

    Usage:
        router = IntentRouter(config, registry, model_classifier)
        selection = router.route("Add expense $15 for coffee", {})
    """

    def __init__(
        self,
        config,
        registry: Mapping[str, Any],
        model_classifier=None,
        patterns: Optional[PatternClassifier] = None,
        validator: Optional[ConfidenceValidator] = None,
    ):
        self.config = config
        self.registry = registry
        self.model_classifier = model_classifier
        self.patterns = patterns or PatternClassifier()
        self.validator = validator or ConfidenceValidator()

    def route(self, message: str, context: Optional[Mapping[str, Any]] = None) -> ToolSelection:
        context = context or {}

        if not self.config.use_model_intent:
            return self.route_with_keywords(message)

        if self.model_classifier is None:
            logger.warning("Model intent enabled but no classifier configured, using keywords")
            return self.route_with_keywords(message)

        if self.config.intent_hybrid_mode and self.patterns.looks_obvious(message):
            logger.debug("Obvious intent, skipping model classification")
            return self.route_with_keywords(message)

        return self.route_with_model(message, context)

    def route_with_keywords(self, message: str) -> ToolSelection:
        selection = self._validate(self.patterns.classify(message))
        log_intent(logger, selection.source, selection.identifiers, selection.confidence)
        return selection

    def route_with_model(self, message: str, context: Mapping[str, Any]) -> ToolSelection:
        try:
            proposed = self.model_classifier.classify(message, context)
        except ClassificationError as e:
            log_error(
                logger,
                e,
                context="intent",
                include_traceback=False,
                level=logging.WARNING,
            )
            logger.warning("Model tool selection failed, using keyword fallback")
            return self.route_with_keywords(message)

        selection = self._validate(proposed)

        if self.config.intent_log_decisions:
            logger.info(
                f"Intent decision: message={message[:120]!r} "
                f"selected={list(proposed.identifiers)} "
                f"reasoning={proposed.reasoning or 'N/A'!r} "
                f"confidence={proposed.confidence} "
                f"validated={list(selection.identifiers)}"
            )

        log_intent(logger, selection.source, selection.identifiers, selection.confidence)
        return selection

    def _validate(self, selection: ToolSelection) -> ToolSelection:
        return self.validator.validate(
            selection,
            self.registry,
            self.config.intent_confidence_threshold,
        )
