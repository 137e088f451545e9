"""
Service caller - ask a provider for a JSON answer.

The resolver never talks to a provider directly. It awaits an AI caller:
any async callable taking the message list and returning an AICallResult.
Tests pass a mock; production code binds a provider with create_ai_caller.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional

from llm_web_inspector.exceptions import ConfigurationError, InvalidResponseError
from llm_web_inspector.interfaces.llm import ILLMProvider, Message, Usage

logger = logging.getLogger(__name__)


@dataclass
class AICallResult:
    """Parsed model answer plus token usage."""
    content: Any
    usage: Optional[Usage] = None


AICaller = Callable[[List[Message]], Awaitable[AICallResult]]


def extract_json_text(text: str) -> str:
    """Strip a markdown code fence around a JSON answer, if present."""
    json_text = text.strip()
    if "```json" in json_text:
        start = json_text.find("```json") + 7
        end = json_text.find("```", start)
        json_text = json_text[start:end if end != -1 else None].strip()
    elif "```" in json_text:
        start = json_text.find("```") + 3
        end = json_text.find("```", start)
        json_text = json_text[start:end if end != -1 else None].strip()
    return json_text


def parse_json_content(text: str) -> Any:
    """
    Parse a model answer as JSON.

    Raises:
        InvalidResponseError: If the answer is empty or not JSON
    """
    if not text or not text.strip():
        raise InvalidResponseError("Empty response from model", raw_response=text)
    try:
        return json.loads(extract_json_text(text))
    except json.JSONDecodeError as e:
        raise InvalidResponseError(f"JSON parse error: {e}", raw_response=text) from e


async def call_to_get_json_object(
    messages: List[Message],
    provider: ILLMProvider,
) -> AICallResult:
    """
    Send messages and parse the answer as a JSON value.

    No retries happen here; a failed or unparseable call propagates.

    Raises:
        ConfigurationError: If a message carries images and the provider
            has no vision support
        InvalidResponseError: If the answer is not JSON
    """
    if not provider.supports_vision and any(msg.images for msg in messages):
        raise ConfigurationError(
            f"Model {provider.default_model} of provider {provider.name} cannot read screenshots"
        )

    start = time.time()
    response = await provider.complete(
        messages,
        response_format={"type": "json_object"},
    )
    logger.debug(
        f"{provider.name}/{provider.default_model} answered in {(time.time() - start) * 1000:.0f}ms "
        f"({response.usage.total_tokens} tokens)"
    )
    return AICallResult(content=parse_json_content(response.content), usage=response.usage)


def create_ai_caller(provider: ILLMProvider) -> AICaller:
    """Bind a provider into the AI caller signature the resolver awaits."""

    async def call(messages: List[Message]) -> AICallResult:
        return await call_to_get_json_object(messages, provider)

    return call
