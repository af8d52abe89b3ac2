"""
Switchboard Services - External collaborators of the routing pipeline.

- llm_client: OpenAI-compatible completion provider
- json_extract: JSON payload extraction from model replies
"""

from .llm_client import CompletionProvider, LLMClient
from .json_extract import extract_json_text, parse_json_object

__all__ = ["CompletionProvider", "LLMClient", "extract_json_text", "parse_json_object"]
