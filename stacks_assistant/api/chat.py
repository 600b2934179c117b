from fastapi import APIRouter, Depends, HTTPException

from ..core.chat import get_engine, run_chat
from ..core.intent import AllModelsFailedError, IntentEngine
from ..types import ChatRequest, ChatResponse

router = APIRouter()

RETRY_HINT = "The assistant could not reach any AI model. Please try again in a moment."


@router.post("/chat")
async def chat_endpoint(
    request: ChatRequest,
    engine: IntentEngine = Depends(get_engine),
) -> ChatResponse:
    """Turn a wallet command into a reply plus an optional action"""

    try:
        return await run_chat(request, engine)
    except AllModelsFailedError as e:
        raise HTTPException(
            status_code=503,
            detail={
                "message": RETRY_HINT,
                "retryable": True,
                "failures": [
                    {"model": f.model, "category": f.category.value}
                    for f in e.failures
                ],
            },
        )
