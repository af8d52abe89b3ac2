"""
Orchestrator - Public entry point of the routing pipeline.

handle(message, context) runs:

    ROUTING    IntentRouter.route()        → validated ToolSelection
    EXECUTING  ToolExecutor.execute()      → per-tool results
    COMBINING  ResultCombiner.combine()    → formatted result
    DONE       ResponseEnvelope

An exception in any stage moves the call to RECOVERING (the fallback chain):
the conversation handler runs alone; if that raises too, the envelope carries
the generic apology. handle() never raises.
"""

import logging
import time
from typing import Any, Dict, Iterable, Mapping, Optional

from config import RouterConfig, runtime_config
from errors import PipelineFailure, apology_result, log_error
from logging_config import log_message_in, log_message_out

from .combiner import ResultCombiner
from .envelope import PipelineOutcome, PipelineState, ResponseEnvelope
from .executor import ToolExecutor
from .handlers.base import ToolHandler, ToolKind
from .handlers.registry import build_registry
from .intent_router import IntentRouter
from .model_classifier import ModelClassifier
from .progress import emit_progress

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Routes one message to its tools and always returns a ResponseEnvelope.

    Usage:
        orchestrator = Orchestrator(config, handlers=[conversation, expenses], provider=llm)
        envelope = orchestrator.handle("Add expense $15 for coffee", {"progress_callback": print})
    """

    def __init__(
        self,
        config: Optional[RouterConfig] = None,
        handlers: Iterable[ToolHandler] = (),
        provider=None,
        model_classifier=None,
    ):
        """
        Args:
            config: Routing configuration (defaults to the runtime_config singleton)
            handlers: Available handler instances; enabled ones are registered
            provider: CompletionProvider for model intent classification
            model_classifier: Explicit classifier (overrides provider)

        Raises:
            ConfigurationError: no conversation handler is enabled
        """
        self.config = config or runtime_config
        self.registry = build_registry(self.config.get_enabled_tools(), handlers)

        if model_classifier is None and provider is not None:
            model_classifier = ModelClassifier(provider, self.registry)

        self.router = IntentRouter(self.config, self.registry, model_classifier)
        self.executor = ToolExecutor(self.registry)
        self.combiner = ResultCombiner()

    @classmethod
    def from_config(
        cls,
        config: Optional[RouterConfig] = None,
        extra_handlers: Iterable[ToolHandler] = (),
    ) -> "Orchestrator":
        """
        Build an orchestrator wired to LLMClient and the built-in handlers.

        Host applications pass their database / expense handlers in
        extra_handlers.
        """
        from services.llm_client import LLMClient
        from .handlers import ConversationHandler, SearchHandler

        config = config or runtime_config
        chat_client = LLMClient.from_config(config)
        intent_client = LLMClient.from_config(config, model=config.model_intent)

        handlers = [ConversationHandler(chat_client, config)]
        if config.is_tool_enabled(ToolKind.SEARCH.value):
            handlers.append(SearchHandler(chat_client, config))
        handlers.extend(extra_handlers)

        provider = intent_client if config.use_model_intent else None
        return cls(config, handlers=handlers, provider=provider)

    def handle(self, message: str, context: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        """
        Process one message. Never raises.

        Args:
            message: Cleaned, non-empty user message
            context: Caller context (progress_callback, user_name, message_history, ...)
        """
        context = dict(context or {})
        start = time.perf_counter()
        log_message_in(logger, str(message), mode=self._mode())

        outcome = self._run(message, context, start)
        if not outcome.succeeded:
            outcome = self._recover(message, context, outcome, start)
        envelope = outcome.envelope

        log_message_out(
            logger,
            envelope.tools_used,
            envelope.metadata.get("execution_time", 0),
            fallback=envelope.is_fallback or bool(envelope.error),
        )
        return envelope

    def _run(self, message: str, context: Dict[str, Any], start: float) -> PipelineOutcome:
        state = PipelineState.ROUTING
        try:
            emit_progress("Analyzing intent...", context)
            selection = self.router.route(message, context)
            emit_progress(f"Using tools: {', '.join(selection.identifiers)}", context)

            state = PipelineState.EXECUTING
            results = self.executor.execute(selection, message, context)
            emit_progress("Processing results...", context)

            state = PipelineState.COMBINING
            combined = self.combiner.combine(results)

            envelope = ResponseEnvelope(
                original_message=message,
                tools_used=list(results),
                raw_results=results,
                formatted_result=combined,
                context=context,
                metadata={
                    "execution_time": _elapsed(start),
                    "intent": {
                        "source": selection.source,
                        "confidence": selection.confidence,
                        "reasoning": selection.reasoning,
                    },
                },
            )
        except Exception as e:
            failure = PipelineFailure(str(e) or type(e).__name__, details=type(e).__name__, stage=state.value)
            failure.__cause__ = e
            log_error(logger, failure, context="orchestrator")
            return PipelineOutcome.failed(state, failure)

        return PipelineOutcome.success(envelope)

    def _recover(
        self,
        message: str,
        context: Dict[str, Any],
        outcome: PipelineOutcome,
        start: float,
    ) -> PipelineOutcome:
        """Fallback chain: conversation handler alone, then the apology."""
        failure = outcome.failure
        error = failure.message
        logger.warning(f"Recovering from {outcome.state.value} failure with conversation fallback")

        conversation = ToolKind.CONVERSATION.value
        try:
            result = self.registry[conversation].execute(message, context)
            tools_used, raw_results, formatted = [conversation], {conversation: result}, result
            metadata = {"fallback": True, "error": error}
        except Exception as e:
            log_error(logger, e, context="fallback")
            tools_used, raw_results, formatted = [], {}, apology_result()
            metadata = {"error": error}

        envelope = ResponseEnvelope(
            original_message=message,
            tools_used=tools_used,
            raw_results=raw_results,
            formatted_result=formatted,
            context=context,
            metadata={"execution_time": _elapsed(start), **metadata},
        )
        return PipelineOutcome.recovered(envelope, failure)

    def _mode(self) -> str:
        if not self.config.use_model_intent:
            return "keyword"
        return "hybrid" if self.config.intent_hybrid_mode else "model"


def _elapsed(start: float) -> float:
    return round(time.perf_counter() - start, 3)
