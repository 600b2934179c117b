"""
Chat entry point shared by the HTTP API and the CLI.

One engine per process: its breaker and sticky model are meant to be shared
by every conversation.
"""

import logging
from typing import Optional

from ..config import settings
from ..services.address import normalize_network
from ..types import ChatRequest, ChatResponse
from .intent import IntentEngine, build_engine

_engine: Optional[IntentEngine] = None
_logger = logging.getLogger(__name__)


def get_engine() -> IntentEngine:
    global _engine
    if _engine is None:
        _engine = build_engine()
        _logger.info(
            "Intent engine initialized (model=%s, api_key=%s)",
            _engine.model,
            "set" if _engine.has_api_key else "missing",
        )
    return _engine


def reset_engine() -> None:
    global _engine
    _engine = None


async def run_chat(request: ChatRequest, engine: Optional[IntentEngine] = None) -> ChatResponse:
    """Resolve one chat message.

    ``AllModelsFailedError`` propagates so the caller can show a retryable
    error.
    """

    engine = engine or get_engine()
    result = await engine.generate_response(
        request.message,
        request.history,
        user_address=request.address,
        balance=request.balance,
        network_name=normalize_network(request.network, default=settings.default_network),
    )

    _logger.info(
        "Chat processed (model=%s) - action: %s",
        engine.model,
        result.action.type.value if result.action else None,
    )
    return ChatResponse(
        message=result.message,
        action=result.action,
        context=result.context,
        model=engine.model,
    )
