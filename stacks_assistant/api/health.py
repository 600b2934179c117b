from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.chat import get_engine
from ..core.intent import CircuitState, IntentEngine

router = APIRouter()


@router.get("/healthz")
async def health_check(engine: IntentEngine = Depends(get_engine)) -> Dict[str, Any]:
    """Liveness plus whether replies currently come from the remote model.

    Does not call the upstream API; use ``/llm/status`` for that.
    """

    breaker = engine.breaker.snapshot()
    remote_ready = engine.has_api_key and engine.breaker.state == CircuitState.CLOSED
    return {
        "status": "healthy" if remote_ready else "degraded",
        "mode": "remote" if remote_ready else "local",
        "model": engine.model,
        "breaker": breaker,
    }
