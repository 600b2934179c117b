from fastapi import APIRouter, Depends, HTTPException

from ..config import settings
from ..core.chat import get_engine
from ..core.intent import IntentEngine
from ..types import ModelOption, ModelSelectionRequest, ModelsResponse, StatusResponse

router = APIRouter(prefix="/llm")


def _models_payload(engine: IntentEngine) -> ModelsResponse:
    current = engine.model
    options = []
    for model_id in engine.available_models:
        meta = settings.describe_model(model_id) or {}
        options.append(ModelOption(id=model_id, label=meta.get("label"), active=model_id == current))
    return ModelsResponse(current_model=current, models=options)


@router.get("/models")
async def list_models(engine: IntentEngine = Depends(get_engine)) -> ModelsResponse:
    return _models_payload(engine)


@router.put("/model")
async def select_model(
    request: ModelSelectionRequest,
    engine: IntentEngine = Depends(get_engine),
) -> ModelsResponse:
    try:
        engine.set_model(request.model)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _models_payload(engine)


@router.get("/free-models")
async def list_free_models(engine: IntentEngine = Depends(get_engine)) -> dict:
    return {"models": await engine.available_free_models()}


@router.get("/status")
async def llm_status(engine: IntentEngine = Depends(get_engine)) -> StatusResponse:
    """Connection test plus circuit breaker snapshot"""

    status = engine.status()
    return StatusResponse(
        has_api_key=status["has_api_key"],
        connection=await engine.test_connection(),
        breaker=status["breaker"],
        current_model=status["current_model"],
    )
