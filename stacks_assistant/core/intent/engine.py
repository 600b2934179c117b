"""
Intent Engine

Turns one user message (plus a short history window) into an
``EngineResponse``: a reply and, when the message asks for one, a structured
action for the caller to confirm. The engine never executes anything itself.

Flow: quick response → context analysis → breaker check → remote models →
local responder. The action always comes from the user's own text, never
from the model's reply.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ...providers.llm import LLMProviderError, OpenRouterProvider
from ...types import ConversationTurn, EngineResponse
from .actions import DEFAULT_MEMO, extract_action, flag_network_mismatch
from .breaker import CircuitBreaker, CircuitState
from .context import ASSISTANT_SCAN_WINDOW, HISTORY_WINDOW, analyze_conversation_context
from .errors import AllModelsFailedError
from .fallback import LocalFallbackResponder
from .quick import get_quick_response
from .remote import RemoteModelCaller


class IntentEngine:
    def __init__(
        self,
        caller: RemoteModelCaller,
        breaker: Optional[CircuitBreaker] = None,
        fallback: Optional[LocalFallbackResponder] = None,
        memo: str = DEFAULT_MEMO,
        history_window: int = HISTORY_WINDOW,
        scan_window: int = ASSISTANT_SCAN_WINDOW,
        logger: Optional[logging.Logger] = None,
    ):
        self.caller = caller
        self._configured_models = list(caller.models)
        self.breaker = breaker or CircuitBreaker()
        self.fallback = fallback or LocalFallbackResponder(memo=memo)
        self.memo = memo
        self.history_window = history_window
        self.scan_window = scan_window
        self.logger = logger or logging.getLogger(__name__)

    @property
    def has_api_key(self) -> bool:
        return bool(self.caller.provider.api_key)

    @property
    def model(self) -> str:
        return self.caller.current_model

    @property
    def available_models(self) -> List[str]:
        return list(self.caller.models)

    def set_model(self, model: str) -> None:
        """Make ``model`` the first candidate.

        An id outside the configured catalog is kept as the single extra
        candidate and replaces any previously selected one.
        """

        model = model.strip()
        if not model:
            raise ValueError("model must not be empty")
        extra = [] if model in self._configured_models else [model]
        self.caller.models = self._configured_models + extra
        self.caller.current_model = model
        self.logger.info("Model changed to: %s", model)

    async def generate_response(
        self,
        user_message: str,
        history: Sequence[ConversationTurn] = (),
        user_address: Optional[str] = None,
        balance: Optional[float] = None,
        network_name: Optional[str] = None,
    ) -> EngineResponse:
        """Answer one user message.

        Raises:
            AllModelsFailedError: every candidate failed and the breaker has
                not reached its threshold yet. Callers should show a
                retryable error.
        """

        quick = get_quick_response(user_message)
        if quick is not None:
            self.logger.info("Using quick local response")
            return quick

        window = list(history)[-self.history_window:] if self.history_window else []
        context = analyze_conversation_context(
            window,
            user_message,
            history_window=self.history_window,
            scan_window=self.scan_window,
        )

        if not self.has_api_key:
            self.logger.info("No API key configured, using fallback response")
            return self.fallback.respond(user_message, context, network_name)

        if not await self.breaker.allow_request():
            self.logger.info("Circuit breaker open, using fallback response")
            return self.fallback.respond(user_message, context, network_name)

        try:
            reply = await self.caller.call(
                user_message,
                window,
                user_address=user_address,
                balance=balance,
                network_name=network_name,
            )
        except AllModelsFailedError:
            state = await self.breaker.record_failure()
            if state == CircuitState.OPEN:
                self.logger.warning("Too many failures, using fallback response")
                return self.fallback.respond(user_message, context, network_name)
            raise

        await self.breaker.record_success()
        response = EngineResponse(
            message=reply.content,
            action=extract_action(user_message, context, memo=self.memo),
            context=context,
        )
        return flag_network_mismatch(response, network_name)

    def respond_locally(
        self,
        user_message: str,
        history: Sequence[ConversationTurn] = (),
        network_name: Optional[str] = None,
    ) -> EngineResponse:
        """Run the quick path and the local responder only."""

        quick = get_quick_response(user_message)
        if quick is not None:
            return quick
        context = analyze_conversation_context(
            history, user_message, history_window=self.history_window, scan_window=self.scan_window
        )
        return self.fallback.respond(user_message, context, network_name)

    async def test_connection(self) -> Dict[str, Any]:
        return await self.caller.provider.health_check()

    async def available_free_models(self) -> List[str]:
        provider = self.caller.provider
        if not self.has_api_key or not isinstance(provider, OpenRouterProvider):
            return []
        try:
            return await provider.list_free_models()
        except LLMProviderError as exc:
            self.logger.warning("Error fetching models: %s", exc)
            return []

    def status(self) -> Dict[str, Any]:
        return {
            "has_api_key": self.has_api_key,
            "current_model": self.model,
            "breaker": self.breaker.snapshot(),
        }
