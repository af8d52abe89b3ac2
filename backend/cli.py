#!/usr/bin/env python3
"""
Switchboard command line.

Routes one message through the pipeline and prints the answer.

    switchboard "Search for Laravel documentation" --mode hybrid
    switchboard "Hello!" --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from config import RouterConfig
from errors import ConfigurationError, InputError, error_response
from logging_config import setup_logging
from orchestration import Orchestrator
from validation import clean_message

MODES = {
    "keyword": {"use_model_intent": False},
    "model": {"use_model_intent": True, "intent_hybrid_mode": False},
    "hybrid": {"use_model_intent": True, "intent_hybrid_mode": True},
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="switchboard", description="Route a message to the right tools")
    parser.add_argument("message", help="User message to route")
    parser.add_argument("--mode", choices=sorted(MODES), help="Override intent routing mode")
    parser.add_argument("--json", dest="json_output", action="store_true", help="Print the full response envelope")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def readable_answer(formatted_result: dict) -> str:
    """Pick the human-readable text out of a formatted result."""
    for key in ("response", "message", "summary", "answer", "error"):
        value = formatted_result.get(key)
        if value:
            return str(value)
    return json.dumps(formatted_result, indent=2, default=str)


def _progress(text: str) -> None:
    print(f"... {text}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        message = clean_message(args.message)
    except InputError as exc:
        print(json.dumps(error_response(exc), indent=2), file=sys.stderr)
        return 2

    config = RouterConfig()
    if args.mode:
        config.update(**MODES[args.mode])

    try:
        orchestrator = Orchestrator.from_config(config)
    except ConfigurationError as exc:
        print(json.dumps(error_response(exc), indent=2), file=sys.stderr)
        return 1

    envelope = orchestrator.handle(message, {"progress_callback": _progress})

    if args.json_output:
        print(json.dumps(envelope.to_dict(), indent=2, default=str))
    else:
        print(readable_answer(envelope.formatted_result))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
