"""
Remote Model Caller

Tries candidate models one at a time, current model first. Each attempt is
reduced to a ``CandidateSuccess`` or ``CandidateFailure``; the first success
becomes the model tried first on later calls.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from ...providers.llm import (
    LLMMessage,
    LLMProvider,
    LLMProviderAPIError,
    LLMProviderAuthError,
    LLMProviderError,
    LLMProviderModelNotFoundError,
    LLMProviderRateLimitError,
    LLMProviderResponseError,
    LLMProviderTimeoutError,
)
from ...types import ConversationTurn
from .errors import AllModelsFailedError, CandidateFailure, FailureCategory
from .prompts import build_system_prompt


@dataclass(frozen=True)
class CandidateSuccess:
    model: str
    content: str


CandidateResult = Union[CandidateSuccess, CandidateFailure]


@dataclass
class CompletionSettings:
    temperature: float = 0.3
    max_tokens: int = 150
    top_p: float = 0.9
    history_window: int = 6


class RemoteModelCaller:
    def __init__(
        self,
        provider: LLMProvider,
        models: Sequence[str],
        current_model: Optional[str] = None,
        completion: Optional[CompletionSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.models: List[str] = list(dict.fromkeys(models))
        self.current_model = current_model or (self.models[0] if self.models else provider.model)
        self.completion = completion or CompletionSettings()
        self.logger = logger or logging.getLogger(__name__)

    def candidates(self) -> List[str]:
        return [self.current_model] + [m for m in self.models if m != self.current_model]

    def build_messages(
        self,
        user_message: str,
        history: Sequence[ConversationTurn],
        user_address: Optional[str] = None,
        balance: Optional[float] = None,
        network_name: Optional[str] = None,
    ) -> List[LLMMessage]:
        window = self.completion.history_window
        recent = list(history)[-window:] if window else []
        return [
            LLMMessage(role="system", content=build_system_prompt(user_address, balance, network_name)),
            *(LLMMessage(role=turn.role, content=turn.content) for turn in recent),
            LLMMessage(role="user", content=user_message),
        ]

    async def call(
        self,
        user_message: str,
        history: Sequence[ConversationTurn] = (),
        user_address: Optional[str] = None,
        balance: Optional[float] = None,
        network_name: Optional[str] = None,
    ) -> CandidateSuccess:
        """Return the first usable reply or raise ``AllModelsFailedError``."""

        messages = self.build_messages(user_message, history, user_address, balance, network_name)
        failures: List[CandidateFailure] = []

        for model in self.candidates():
            result = await self.attempt(model, messages)
            if isinstance(result, CandidateSuccess):
                if model != self.current_model:
                    self.logger.info("Switching to working model: %s", model)
                    self.current_model = model
                return result
            failures.append(result)

        self.logger.error("All %d candidate models failed", len(failures))
        raise AllModelsFailedError(failures)

    async def attempt(self, model: str, messages: List[LLMMessage]) -> CandidateResult:
        self.logger.info("Trying model: %s", model)
        try:
            response = await self.provider.generate_response(
                messages,
                model=model,
                max_tokens=self.completion.max_tokens,
                temperature=self.completion.temperature,
                top_p=self.completion.top_p,
            )
        except LLMProviderError as exc:
            failure = _classify(model, exc)
            self.logger.warning(
                "Model %s failed (%s): %s", model, failure.category.value, failure.detail
            )
            return failure
        return CandidateSuccess(model=model, content=response.content)


def _classify(model: str, exc: LLMProviderError) -> CandidateFailure:
    status = getattr(exc, "status_code", None)
    if isinstance(exc, LLMProviderTimeoutError):
        category = FailureCategory.TIMEOUT
    elif isinstance(exc, LLMProviderModelNotFoundError):
        category = FailureCategory.MODEL_NOT_FOUND
    elif isinstance(exc, LLMProviderRateLimitError):
        category = FailureCategory.RATE_LIMIT
        status = 429
    elif isinstance(exc, LLMProviderAuthError):
        category = FailureCategory.AUTHENTICATION
    elif isinstance(exc, LLMProviderResponseError):
        category = FailureCategory.INVALID_RESPONSE
    elif isinstance(exc, LLMProviderAPIError) and status is not None:
        category = FailureCategory.HTTP
    else:
        category = FailureCategory.NETWORK
    return CandidateFailure(model=model, category=category, detail=str(exc), status_code=status)
