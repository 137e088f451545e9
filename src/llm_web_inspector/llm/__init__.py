"""
LLM Providers - Concrete implementations of the LLM interface.

Available pieces:
- OpenAIProvider: HTTP REST-based, any OpenAI-compatible endpoint
- create_ai_caller: binds a provider into the resolver's AI caller signature
"""

from llm_web_inspector.llm.openai_provider import OpenAIProvider
from llm_web_inspector.llm.service_caller import (
    AICaller,
    AICallResult,
    call_to_get_json_object,
    create_ai_caller,
    parse_json_content,
)

__all__ = [
    "OpenAIProvider",
    "AICaller",
    "AICallResult",
    "call_to_get_json_object",
    "create_ai_caller",
    "parse_json_content",
]
