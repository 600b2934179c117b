"""Async provider for the OpenRouter chat completion API."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, List, Optional

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

_MODEL_MISSING_MARKERS = ("model not found", "not a valid model", "no endpoints found", "model is unavailable")


class OpenRouterProvider(LLMProvider):
    """OpenRouter chat completion provider.

    ``timeout`` is a hard budget for a whole request: when it elapses the
    in-flight request is cancelled rather than left to settle.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        base_url: str | None = None,
        timeout: float = 30.0,
        app_title: str | None = None,
        referer: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self.base_url = (base_url or "https://openrouter.ai/api/v1").rstrip("/")
        self.timeout = timeout
        self.app_title = app_title
        self.referer = referer
        self._transport = transport
        self._chat_completions_path = "/chat/completions"
        self._models_path = "/models"
        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs: Any) -> None:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.app_title:
            headers["X-Title"] = self.app_title
        if self.referer:
            headers["HTTP-Referer"] = self.referer

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await asyncio.wait_for(
                self._client.request(method, path, **kwargs),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except asyncio.TimeoutError as exc:
            raise LLMProviderTimeoutError(f"OpenRouter request exceeded {self.timeout}s") from exc
        except httpx.TimeoutException as exc:
            raise LLMProviderTimeoutError(f"OpenRouter request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise self._status_error(exc.response) from exc
        except httpx.RequestError as exc:
            raise LLMProviderAPIError(f"OpenRouter request error: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise LLMProviderResponseError("OpenRouter returned a non-JSON body") from exc

    def _status_error(self, response: httpx.Response) -> LLMProviderError:
        status = response.status_code
        message = response.text
        if status in (401, 403):
            return LLMProviderAuthError(f"OpenRouter authentication failed: {message}")
        if status == 429:
            return LLMProviderRateLimitError("OpenRouter rate limit exceeded")
        lowered = message.lower()
        if status == 404 or any(marker in lowered for marker in _MODEL_MISSING_MARKERS):
            return LLMProviderModelNotFoundError(
                f"OpenRouter model unavailable ({status}): {message}",
                status_code=status,
            )
        return LLMProviderAPIError(f"OpenRouter API error ({status}): {message}", status_code=status)

    async def generate_response(
        self,
        messages: List[LLMMessage],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        start_time = time.time()
        resolved_model = model or self.model

        payload = self._build_payload(
            model=resolved_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            extra=kwargs,
        )

        data = await self._request("POST", self._chat_completions_path, json=payload)
        content, choice = self._extract_content(data)

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else {}
        return LLMResponse(
            content=content,
            model=resolved_model,
            tokens_used=usage.get("total_tokens"),
            finish_reason=choice.get("finish_reason"),
            response_time_ms=self._measure_time(start_time),
        )

    async def list_models(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", self._models_path)
        entries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise LLMProviderResponseError("OpenRouter models listing missing data array")
        return [entry for entry in entries if isinstance(entry, dict) and entry.get("id")]

    async def list_free_models(self, limit: int = 10) -> List[str]:
        free: List[str] = []
        for entry in await self.list_models():
            pricing = entry.get("pricing") or {}
            if pricing.get("prompt") == "0" or ":free" in entry["id"]:
                free.append(entry["id"])
        return free[:limit]

    async def health_check(self) -> Dict[str, Any]:
        if not self.api_key:
            return {"success": False, "error": "No API key provided"}
        try:
            await self.list_models()
            return {"success": True}
        except LLMProviderError as exc:
            return {"success": False, "error": str(exc)}

    async def __aenter__(self) -> "OpenRouterProvider":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._client.aclose()

    async def close(self) -> None:
        await self._client.aclose()

    def _build_payload(
        self,
        *,
        model: str,
        messages: List[LLMMessage],
        max_tokens: Optional[int],
        temperature: Optional[float],
        extra: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": msg.role, "content": msg.content}
                for msg in messages
            ],
        }

        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature

        if extra:
            for key, value in extra.items():
                if value is not None:
                    payload[key] = value

        return payload

    def _extract_content(self, data: Any) -> tuple[str, Dict[str, Any]]:
        """Return the reply text of a ``{choices: [{message: {content}}]}`` payload."""

        if not isinstance(data, dict):
            raise LLMProviderResponseError("OpenRouter response is not an object")

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise LLMProviderResponseError("OpenRouter response missing choices")

        choice = choices[0]
        if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
            raise LLMProviderResponseError("OpenRouter choice missing message")

        content = choice["message"].get("content")
        if not isinstance(content, str) or not content.strip():
            raise LLMProviderResponseError("OpenRouter message has no text content")

        return content, choice
