from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversationTurn(BaseModel):
    """One prior message supplied by the caller as history."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Message role: user or assistant")
    content: str = Field(description="Message content")


class LastAction(str, Enum):
    """The most recent question the assistant asked."""

    ASKED_FOR_AMOUNT = "asked_for_amount"
    ASKED_FOR_ADDRESS = "asked_for_address"
    READY_TO_SEND = "ready_to_send"


class PendingTransfer(BaseModel):
    """Transfer fragments collected across turns."""

    model_config = ConfigDict(frozen=True)

    amount: Optional[float] = Field(default=None, description="STX amount, if known")
    recipient: Optional[str] = Field(default=None, description="Format-valid recipient address, if known")
    recipient_name: Optional[str] = Field(default=None, description="Human name awaiting an address")


class ConversationContext(BaseModel):
    """Per-call snapshot rebuilt from history; never stored by the engine."""

    model_config = ConfigDict(frozen=True)

    pending_transfer: Optional[PendingTransfer] = None
    last_action: Optional[LastAction] = None
