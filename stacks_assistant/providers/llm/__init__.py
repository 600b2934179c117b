from typing import Optional

import httpx

from .base import (
    LLMMessage,
    LLMProvider,
    LLMProviderAPIError,
    LLMProviderAuthError,
    LLMProviderError,
    LLMProviderModelNotFoundError,
    LLMProviderRateLimitError,
    LLMProviderResponseError,
    LLMProviderTimeoutError,
    LLMResponse,
)
from .openrouter import OpenRouterProvider


def get_llm_provider(
    model: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    config=None,
) -> OpenRouterProvider:
    """Build the OpenRouter provider from settings.

    A missing API key is allowed; callers check ``provider.api_key`` and
    stay on the local responder.
    """

    from ...config import settings  # Local import to avoid circular dependency

    cfg = config or settings
    return OpenRouterProvider(
        api_key=cfg.openrouter_api_key,
        model=(model or cfg.openrouter_model or cfg.resolve_default_model()).strip(),
        base_url=cfg.openrouter_base_url,
        timeout=cfg.request_timeout_seconds,
        app_title=cfg.app_title,
        referer=cfg.app_referer or None,
        transport=transport,
    )


__all__ = [
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "LLMProviderError",
    "LLMProviderAPIError",
    "LLMProviderAuthError",
    "LLMProviderModelNotFoundError",
    "LLMProviderRateLimitError",
    "LLMProviderResponseError",
    "LLMProviderTimeoutError",
    "OpenRouterProvider",
    "get_llm_provider",
]
