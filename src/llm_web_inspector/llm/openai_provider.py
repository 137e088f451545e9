"""
OpenAI-compatible LLM Provider.

Supports any OpenAI-compatible chat completions API:
- OpenAI
- Azure OpenAI behind a compatible gateway
- Local servers (LM Studio, Ollama, vLLM, etc.)
"""

import logging
import os
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import httpx

from llm_web_inspector.exceptions import (
    ConfigurationError,
    LLMAuthenticationError,
    LLMConnectionError,
    LLMError,
    RateLimitError,
)
from llm_web_inspector.interfaces.llm import (
    ILLMProvider,
    LLMResponse,
    Message,
    MessageRole,
    Usage,
)

if TYPE_CHECKING:
    from llm_web_inspector.config.settings import LLMSettings

logger = logging.getLogger(__name__)


def format_message(msg: Message) -> Dict[str, Any]:
    """Convert a Message to the chat completions wire format."""
    role = msg.role.value if isinstance(msg.role, MessageRole) else msg.role
    if not msg.images:
        return {"role": role, "content": msg.content}

    parts: List[Dict[str, Any]] = [
        {
            "type": "image_url",
            "image_url": {"url": image.url, "detail": image.detail},
        }
        for image in msg.images
    ]
    parts.append({"type": "text", "text": msg.content})
    return {"role": role, "content": parts}


class OpenAIProvider(ILLMProvider):
    """
    OpenAI-compatible LLM provider.

    Example:
        >>> provider = OpenAIProvider(
        ...     base_url="https://api.openai.com",
        ...     model="gpt-4o"
        ... )
        >>> response = await provider.complete([
        ...     Message.user("Hello!")
        ... ])
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: Optional[str] = None,
        timeout: float = 120.0,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None,
        supports_vision: bool = True,
    ):
        """
        Initialize the provider.

        Args:
            base_url: Base URL for the API (no /v1 suffix needed)
            model: Model to use for completions
            api_key: Optional API key (reads OPENAI_API_KEY if not set)
            timeout: Request timeout in seconds
            temperature: Default sampling temperature
            max_tokens: Default completion token cap
            supports_vision: Whether the model accepts image input
        """
        self._base_url = base_url.rstrip("/")
        if self._base_url.endswith("/v1"):
            self._base_url = self._base_url[:-3]
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY", "not-needed")
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._supports_vision = supports_vision

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: "LLMSettings") -> "OpenAIProvider":
        """
        Build a provider from an LLMSettings section.

        Raises:
            ConfigurationError: If model or base_url is missing
        """
        if not settings.model:
            raise ConfigurationError(
                "No model configured. Set LLM_WEB_INSPECTOR__LLM__MODEL or pass --model."
            )
        if not settings.base_url:
            raise ConfigurationError(
                "No API URL configured. Set LLM_WEB_INSPECTOR__LLM__BASE_URL or pass --api-url."
            )
        return cls(
            base_url=settings.base_url,
            model=settings.model,
            api_key=settings.api_key.get_secret_value() if settings.api_key else None,
            timeout=settings.timeout,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            supports_vision=settings.supports_vision,
        )

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    @property
    def supports_vision(self) -> bool:
        return self._supports_vision

    async def complete(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a completion."""
        model = model or self._model

        body: Dict[str, Any] = {
            "model": model,
            "messages": [format_message(msg) for msg in messages],
            "temperature": self._temperature if temperature is None else temperature,
        }

        max_tokens = max_tokens or self._max_tokens
        if max_tokens:
            body["max_tokens"] = max_tokens

        body.update(kwargs)

        logger.debug(f"Calling OpenAI API: {model}")

        try:
            response = await self._client.post("/v1/chat/completions", json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP error: {status} - {e.response.text[:300]}")
            if status in (401, 403):
                raise LLMAuthenticationError(f"Authentication failed ({status})") from e
            if status == 429:
                retry_after = e.response.headers.get("retry-after")
                raise RateLimitError(
                    "Rate limit exceeded",
                    retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                ) from e
            raise LLMError(f"LLM request failed with status {status}", {"body": e.response.text[:500]}) from e
        except httpx.RequestError as e:
            logger.error(f"Error calling OpenAI API: {e}")
            raise LLMConnectionError(f"Could not reach {self._base_url}: {e}") from e

        data = response.json()
        try:
            choice = data["choices"][0]
            message = choice["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("Unexpected completion payload", {"body": str(data)[:500]}) from e

        usage_data = data.get("usage") or {}
        usage = Usage(
            prompt_tokens=usage_data.get("prompt_tokens", 0),
            completion_tokens=usage_data.get("completion_tokens", 0),
            total_tokens=usage_data.get("total_tokens", 0),
        )

        return LLMResponse(
            content=message.get("content") or "",
            model=data.get("model", model),
            usage=usage,
            finish_reason=choice.get("finish_reason", "stop"),
            raw_response=data,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
