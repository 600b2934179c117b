"""
Conversational intent resolution for wallet commands.
"""

from typing import Optional

import httpx

from .actions import DEFAULT_MEMO, extract_action, flag_network_mismatch
from .breaker import CircuitBreaker, CircuitState
from .context import analyze_conversation_context
from .engine import IntentEngine
from .errors import AllModelsFailedError, CandidateFailure, FailureCategory, IntentEngineError
from .fallback import LocalFallbackResponder
from .quick import get_quick_response
from .remote import CandidateSuccess, CompletionSettings, RemoteModelCaller


def build_engine(settings=None, transport: Optional[httpx.AsyncBaseTransport] = None) -> IntentEngine:
    """Wire an engine from settings; ``transport`` lets tests replace the network."""

    from ...config import settings as default_settings
    from ...providers.llm import get_llm_provider

    cfg = settings or default_settings
    provider = get_llm_provider(transport=transport, config=cfg)

    caller = RemoteModelCaller(
        provider=provider,
        models=cfg.model_ids,
        current_model=provider.model,
        completion=CompletionSettings(
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
            top_p=cfg.top_p,
            history_window=cfg.history_window,
        ),
    )
    breaker = CircuitBreaker(
        max_failures=cfg.breaker_max_failures,
        cooldown_seconds=cfg.breaker_cooldown_seconds,
    )
    return IntentEngine(
        caller=caller,
        breaker=breaker,
        memo=cfg.transfer_memo,
        history_window=cfg.history_window,
        scan_window=cfg.context_scan_window,
    )


__all__ = [
    "DEFAULT_MEMO",
    "AllModelsFailedError",
    "CandidateFailure",
    "CandidateSuccess",
    "CircuitBreaker",
    "CircuitState",
    "CompletionSettings",
    "FailureCategory",
    "IntentEngine",
    "IntentEngineError",
    "LocalFallbackResponder",
    "RemoteModelCaller",
    "analyze_conversation_context",
    "build_engine",
    "extract_action",
    "flag_network_mismatch",
    "get_quick_response",
]
