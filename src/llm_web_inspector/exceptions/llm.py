"""
LLM-related exceptions.
"""

from llm_web_inspector.exceptions.base import WebInspectorError


class LLMError(WebInspectorError):
    """Base exception for LLM-related errors."""
    pass


class LLMConnectionError(LLMError):
    """
    Error connecting to the LLM provider.
    
    Raised when the connection to the LLM API fails.
    """
    pass


class LLMAuthenticationError(LLMError):
    """
    Authentication error with LLM provider.
    
    Raised when API key is invalid or missing.
    """
    pass


class RateLimitError(LLMError):
    """
    Rate limit exceeded.
    
    Raised when the LLM provider's rate limit is exceeded.
    
    Attributes:
        retry_after: Suggested wait time in seconds before retrying
    """
    
    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message, {"retry_after": retry_after})
        self.retry_after = retry_after


class InvalidResponseError(LLMError):
    """
    Invalid response from LLM.
    
    Raised when the LLM response cannot be parsed or is malformed.
    """
    
    def __init__(self, message: str, raw_response: str | None = None):
        super().__init__(message, {"raw_response": raw_response[:500] if raw_response else None})
        self.raw_response = raw_response


class MalformedAIResponseError(InvalidResponseError):
    """
    The model answered with a shape the request cannot use.
    
    For locate: neither a ``[x, y]`` pair nor an object with an ``elements``
    list. For assert: no boolean ``pass``.
    The caller decides whether the AI call is worth retrying.
    
    Attributes:
        target_description: What was asked for (element, data query or assertion)
        raw_response: The payload as returned by the model
    """
    
    def __init__(
        self,
        message: str,
        target_description: str | None = None,
        raw_response: str | None = None,
    ):
        super().__init__(message, raw_response)
        self.details["target_description"] = target_description
        self.target_description = target_description
