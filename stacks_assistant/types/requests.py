from typing import List, Optional

from pydantic import BaseModel, Field

from .conversation import ConversationTurn


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, description="New user message")
    history: List[ConversationTurn] = Field(default_factory=list, description="Prior turns, oldest first")
    address: Optional[str] = Field(default=None, description="Connected wallet address")
    balance: Optional[float] = Field(default=None, description="Current STX balance")
    network: Optional[str] = Field(default=None, description="Network the wallet is on")


class ModelSelectionRequest(BaseModel):
    model: str = Field(min_length=1, description="Model id to try first from now on")
