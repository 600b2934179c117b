from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .actions import Action
from .conversation import ConversationContext


class EngineResponse(BaseModel):
    """Sole output of the intent engine."""

    message: str = Field(description="Assistant reply text")
    action: Optional[Action] = Field(default=None, description="Structured action, absent for informational replies")
    context: Optional[ConversationContext] = Field(default=None, description="Context derived for this turn")


class ChatResponse(BaseModel):
    message: str = Field(description="Assistant reply text")
    action: Optional[Action] = Field(default=None, description="Structured action for the client to confirm")
    context: Optional[ConversationContext] = Field(default=None, description="Context the client may echo back")
    model: Optional[str] = Field(default=None, description="Model currently preferred by the engine")


class ModelOption(BaseModel):
    id: str
    label: Optional[str] = None
    active: bool = False


class ModelsResponse(BaseModel):
    current_model: str = Field(description="Model tried first on the next call")
    models: List[ModelOption] = Field(default_factory=list, description="Configured candidate models")


class StatusResponse(BaseModel):
    has_api_key: bool
    connection: Dict[str, Any] = Field(default_factory=dict, description="Result of the connection test")
    breaker: Dict[str, Any] = Field(default_factory=dict, description="Circuit breaker snapshot")
    current_model: str
