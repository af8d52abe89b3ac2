"""
Response Envelope - The single structured result of one routing call.

Also holds the pipeline state machine types used by the Orchestrator:
PipelineState names the stage a call is in. PipelineOutcome carries the
finished envelope, the stage that failed plus its PipelineFailure, or (state
RECOVERING) the fallback envelope together with the failure it replaced.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from errors import PipelineFailure


class PipelineState(str, Enum):
    """Stages of one Orchestrator.handle() call."""

    ROUTING = "routing"
    EXECUTING = "executing"
    COMBINING = "combining"
    RECOVERING = "recovering"
    DONE = "done"


@dataclass
class ResponseEnvelope:
    """
    Terminal output of the pipeline.

    metadata always carries execution_time; the fallback chain adds
    fallback / error, the happy path adds the intent block.
    """

    original_message: str
    tools_used: List[str] = field(default_factory=list)
    raw_results: Dict[str, Any] = field(default_factory=dict)
    formatted_result: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_fallback(self) -> bool:
        return bool(self.metadata.get("fallback"))

    @property
    def error(self) -> Optional[str]:
        return self.metadata.get("error")

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form. Callables in the context (progress callbacks) are left out."""
        return {
            "original_message": self.original_message,
            "tools_used": list(self.tools_used),
            "raw_results": dict(self.raw_results),
            "formatted_result": self.formatted_result,
            "context": {k: v for k, v in self.context.items() if not callable(v)},
            "metadata": dict(self.metadata),
        }


@dataclass
class PipelineOutcome:
    """Outcome of one handle() pass; state RECOVERING means the fallback chain produced the envelope."""

    state: PipelineState
    envelope: Optional[ResponseEnvelope] = None
    failure: Optional[PipelineFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.envelope is not None and self.failure is None

    @classmethod
    def success(cls, envelope: ResponseEnvelope) -> "PipelineOutcome":
        return cls(state=PipelineState.DONE, envelope=envelope)

    @classmethod
    def failed(cls, state: PipelineState, failure: PipelineFailure) -> "PipelineOutcome":
        return cls(state=state, failure=failure)

    @classmethod
    def recovered(cls, envelope: ResponseEnvelope, failure: PipelineFailure) -> "PipelineOutcome":
        return cls(state=PipelineState.RECOVERING, envelope=envelope, failure=failure)
