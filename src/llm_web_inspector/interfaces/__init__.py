"""
Interfaces module - Abstract contracts for pluggable collaborators.
"""

from llm_web_inspector.interfaces.llm import (
    ILLMProvider,
    Message,
    MessageRole,
    ImageContent,
    LLMResponse,
    Usage,
)

__all__ = [
    "ILLMProvider",
    "Message",
    "MessageRole",
    "ImageContent",
    "LLMResponse",
    "Usage",
]
