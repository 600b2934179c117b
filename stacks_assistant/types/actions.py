from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..services.address import is_valid_stacks_address


class ActionType(str, Enum):
    TRANSFER = "transfer"
    BALANCE = "balance"
    ADDRESS = "address"
    HELP = "help"
    HISTORY = "history"


class TransferParams(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False, description="STX amount to send")
    recipient: str = Field(description="Recipient Stacks address")
    memo: str = Field(default="", description="Memo shown in the confirmation step")

    @model_validator(mode="after")
    def _recipient_must_be_address(self) -> "TransferParams":
        if not is_valid_stacks_address(self.recipient):
            raise ValueError(f"recipient is not a Stacks address: {self.recipient!r}")
        return self


class Action(BaseModel):
    """Structured request for the caller to act on.

    A transfer action is only ever a request to render a confirmation; the
    caller performs the real transfer.
    """

    type: ActionType
    params: Optional[TransferParams] = None

    @model_validator(mode="after")
    def _transfer_needs_params(self) -> "Action":
        if self.type == ActionType.TRANSFER and self.params is None:
            raise ValueError("transfer actions require amount and recipient")
        if self.type != ActionType.TRANSFER and self.params is not None:
            raise ValueError(f"{self.type.value} actions take no params")
        return self

    @classmethod
    def transfer(cls, amount: float, recipient: str, memo: str) -> "Action":
        return cls(
            type=ActionType.TRANSFER,
            params=TransferParams(amount=amount, recipient=recipient, memo=memo),
        )
