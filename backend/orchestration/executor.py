"""
Tool Executor - Runs the selected handlers in order.

One handler raising never stops the others: its slot becomes
{"error": "Failed to execute <tool>: <reason>"} and execution continues.
"""

import logging
import time
from typing import Any, Dict, Iterable, Mapping

from errors import HandlerExecutionError, handler_error_result, log_error
from logging_config import log_tool

from .handlers.base import ToolKind
from .progress import emit_progress

logger = logging.getLogger(__name__)


def _label(name: str) -> str:
    try:
        return ToolKind.parse(name).label
    except ValueError:
        return name.capitalize()


class ToolExecutor:
    """Sequential, failure-isolated handler execution."""

    def __init__(self, registry: Mapping[str, Any]):
        self.registry = registry

    def execute(
        self,
        selection: Iterable[str],
        message: str,
        context: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Execute each selected handler.

        Args:
            selection: Tool identifiers (a ToolSelection or any iterable)
            message: User message
            context: Execution context, passed through to every handler

        Returns:
            Dict of tool identifier → result, in selection order
        """
        results: Dict[str, Any] = {}

        for name in selection:
            handler = self.registry.get(name)
            if handler is None:
                logger.warning(f"Skipping unregistered tool '{name}'")
                continue

            emit_progress(f"Executing {_label(name)} tool...", context)
            log_tool(logger, name, "start")
            start = time.perf_counter()

            try:
                results[name] = handler.execute(message, context)
            except Exception as e:
                error = HandlerExecutionError(f"Failed to execute {name}", details=str(e), tool=name)
                log_error(logger, error, context="executor")
                results[name] = handler_error_result(name, e)
                log_tool(logger, name, "end", status="error")
                continue

            log_tool(logger, name, "end", status="ok", time=f"{time.perf_counter() - start:.2f}s")

        return results
