from .actions import Action, ActionType, TransferParams
from .conversation import ConversationContext, ConversationTurn, LastAction, PendingTransfer
from .requests import ChatRequest, ModelSelectionRequest
from .responses import ChatResponse, EngineResponse, ModelOption, ModelsResponse, StatusResponse

__all__ = [
    "Action",
    "ActionType",
    "TransferParams",
    "ConversationContext",
    "ConversationTurn",
    "LastAction",
    "PendingTransfer",
    "ChatRequest",
    "ModelSelectionRequest",
    "ChatResponse",
    "EngineResponse",
    "ModelOption",
    "ModelsResponse",
    "StatusResponse",
]
