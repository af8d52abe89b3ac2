"""
Confidence Validator - Single point of handler-identifier validation.

Every selection leaving the IntentRouter passes through validate(), so the
executor only ever sees a non-empty list of registered identifiers.
"""

import logging
from typing import Mapping

from errors import ErrorCode

from .selection import CONVERSATION, SOURCE_DEFAULT, ToolSelection

logger = logging.getLogger(__name__)


class ConfidenceValidator:
    """
    Normalizes proposed selections.

    - confidence below the threshold: replaced by ["conversation"]
    - unknown identifiers: dropped, order kept
    - nothing left: ["conversation"]
    """

    def validate(
        self,
        selection: ToolSelection,
        registry: Mapping[str, object],
        min_confidence: float,
    ) -> ToolSelection:
        if selection.confidence < min_confidence:
            logger.warning(
                f"{ErrorCode.SELECTION_LOW_CONFIDENCE.value}: confidence {selection.confidence:.2f} "
                f"below threshold {min_confidence:.2f}, ignoring {list(selection.identifiers)}"
            )
            return selection.with_identifiers((CONVERSATION,), source=SOURCE_DEFAULT)

        tools = []
        for name in selection.identifiers:
            if name in registry:
                tools.append(name)
            else:
                logger.warning(f"{ErrorCode.SELECTION_UNKNOWN_TOOL.value}: dropping non-existent tool '{name}'")

        if not tools:
            logger.info(f"{ErrorCode.SELECTION_EMPTY.value}: no valid tools, defaulting to {CONVERSATION}")
            return selection.with_identifiers((CONVERSATION,), source=SOURCE_DEFAULT)

        return selection.with_identifiers(tools)
