"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout the LLM Web Inspector,
providing clear error types for different failure scenarios.
"""

from llm_web_inspector.exceptions.base import (
    WebInspectorError,
    ConfigurationError,
)
from llm_web_inspector.exceptions.llm import (
    LLMError,
    LLMConnectionError,
    LLMAuthenticationError,
    RateLimitError,
    InvalidResponseError,
    MalformedAIResponseError,
)
from llm_web_inspector.exceptions.inspect import (
    InspectError,
    InvalidInputError,
    ElementNotFoundError,
    DataExtractionError,
)

__all__ = [
    # Base exceptions
    "WebInspectorError",
    "ConfigurationError",
    # LLM exceptions
    "LLMError",
    "LLMConnectionError",
    "LLMAuthenticationError",
    "RateLimitError",
    "InvalidResponseError",
    "MalformedAIResponseError",
    # Inspection exceptions
    "InspectError",
    "InvalidInputError",
    "ElementNotFoundError",
    "DataExtractionError",
]
