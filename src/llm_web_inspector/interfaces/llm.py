"""
LLM Provider Interface - Abstract base class for model integrations.

The element resolver only needs one capability from a model: answer a
system + user(image, text) exchange. Providers implement that contract.

Example:
    >>> from llm_web_inspector.llm import OpenAIProvider
    >>> provider = OpenAIProvider(base_url="https://api.openai.com", model="gpt-4o")
    >>> response = await provider.complete([Message.user("Hello")])
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class MessageRole(Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ImageContent:
    """
    Image content for vision-capable models.

    Attributes:
        data: Base64-encoded image data, a data URL, or an http(s) URL
        media_type: MIME type used when data is bare base64
        detail: Vision detail hint ('low', 'high', 'auto')
    """
    data: str
    media_type: str = "image/png"
    detail: str = "high"

    @property
    def url(self) -> str:
        """The image as something an ``image_url`` part accepts."""
        if self.data.startswith(("data:", "http://", "https://")):
            return self.data
        return f"data:{self.media_type};base64,{self.data}"


@dataclass
class Message:
    """
    A message in the LLM conversation.

    Attributes:
        role: The role of the message sender
        content: The text content of the message
        images: Optional images, sent before the text
    """
    role: MessageRole
    content: str
    images: Optional[List[ImageContent]] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str, images: Optional[List[ImageContent]] = None) -> "Message":
        """Create a user message."""
        return cls(role=MessageRole.USER, content=content, images=images)


@dataclass
class Usage:
    """
    Token usage information from an LLM response.

    Attributes:
        prompt_tokens: Number of tokens in the prompt
        completion_tokens: Number of tokens in the completion
        total_tokens: Total tokens used
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class LLMResponse:
    """
    Response from an LLM completion request.

    Attributes:
        content: The text content of the response
        model: The model that generated the response
        usage: Token usage information
        finish_reason: Reason the completion finished ('stop', 'length')
        raw_response: The original response body from the provider
    """
    content: str
    model: str
    usage: Usage
    finish_reason: str = "stop"
    raw_response: Any = None


class ILLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Implementations handle authentication, request formatting and response
    parsing for their specific API.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'openai')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when complete() gets none."""
        ...

    @property
    @abstractmethod
    def supports_vision(self) -> bool:
        """Whether image inputs are accepted."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Generate a completion for the given messages.

        Args:
            messages: List of messages in the conversation
            model: Model to use (defaults to provider's default model)
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the response
            **kwargs: Provider-specific request fields

        Returns:
            The LLM's response

        Raises:
            LLMError: If the request fails
            RateLimitError: If rate limited
        """
        ...

    async def close(self) -> None:
        """Release transport resources. No-op by default."""
        return None
