"""
Switchboard Orchestration - Intent classification and tool execution.

Pipeline:
    PatternClassifier / ModelClassifier → ConfidenceValidator (IntentRouter)
    → ToolExecutor → ResultCombiner → ResponseEnvelope

Orchestrator.handle() wraps the pipeline in the fallback chain and never raises.
"""

from .selection import ToolSelection, CONVERSATION
from .envelope import ResponseEnvelope, PipelineState, PipelineOutcome
from .patterns import PatternClassifier, looks_obvious, select_tools_with_keywords
from .validator import ConfidenceValidator
from .model_classifier import ModelClassifier, SEARCH_BIAS_TERMS, TOOL_EXAMPLES
from .intent_router import IntentRouter
from .executor import ToolExecutor
from .combiner import ResultCombiner
from .orchestrator import Orchestrator
from .progress import emit_progress

__all__ = [
    "ToolSelection",
    "CONVERSATION",
    "ResponseEnvelope",
    "PipelineState",
    "PipelineOutcome",
    "PatternClassifier",
    "looks_obvious",
    "select_tools_with_keywords",
    "ConfidenceValidator",
    "ModelClassifier",
    "SEARCH_BIAS_TERMS",
    "TOOL_EXAMPLES",
    "IntentRouter",
    "ToolExecutor",
    "ResultCombiner",
    "Orchestrator",
    "emit_progress",
]
