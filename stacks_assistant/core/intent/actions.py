"""Map raw text (plus optional context) to a structured action."""

import re
from typing import Optional, Tuple

from ...services.address import (
    KNOWN_NETWORKS,
    address_network,
    extract_address,
    extract_amount,
    is_valid_stacks_address,
    normalize_network,
    parse_amount,
)
from ...types import Action, ActionType, ConversationContext, EngineResponse
from . import messages

DEFAULT_MEMO = "Sent via Stacks Chat Assistant"

_AMOUNT = r"(\d+(?:\.\d+)?|\.\d+)"

_COMPLETE_TRANSFER_RE = re.compile(
    r"send\s+" + _AMOUNT + r"\s*(?:stx)?\s+to\s+((?-i:ST|SP)[a-zA-Z0-9]{39})",
    re.IGNORECASE,
)
_NAMED_TRANSFER_RE = re.compile(
    r"send\s+" + _AMOUNT + r"\s*(?:stx)?\s+to\s+([a-zA-Z]+)",
    re.IGNORECASE,
)

_KEYWORD_ACTIONS: Tuple[Tuple[Tuple[str, ...], ActionType], ...] = (
    (("balance",), ActionType.BALANCE),
    (("address",), ActionType.ADDRESS),
    (("help",), ActionType.HELP),
    (("history", "transactions"), ActionType.HISTORY),
)


def extract_action(
    user_message: str,
    context: Optional[ConversationContext] = None,
    memo: str = DEFAULT_MEMO,
) -> Optional[Action]:
    """Derive the action implied by ``user_message``.

    Returns None for informational messages, and for "send N to NAME" where
    NAME is not an address: the follow-up question has to collect a real one.
    """

    lowered = user_message.lower()
    for keywords, action_type in _KEYWORD_ACTIONS:
        if any(keyword in lowered for keyword in keywords):
            return Action(type=action_type)

    complete = _COMPLETE_TRANSFER_RE.search(user_message)
    if complete:
        amount = parse_amount(complete.group(1))
        if amount is not None and amount > 0:
            return Action.transfer(amount, complete.group(2), memo)

    if _NAMED_TRANSFER_RE.search(user_message):
        return None

    return complete_from_context(user_message, context, memo)


def complete_from_context(
    user_message: str,
    context: Optional[ConversationContext],
    memo: str = DEFAULT_MEMO,
) -> Optional[Action]:
    """Combine pending fragments with the message; message values win."""

    if context is None or context.pending_transfer is None:
        return None

    amount, recipient = resolve_transfer(user_message, context)
    if amount and recipient:
        return Action.transfer(amount, recipient, memo)
    return None


def resolve_transfer(
    user_message: str,
    context: ConversationContext,
) -> Tuple[Optional[float], Optional[str]]:
    pending = context.pending_transfer
    message_amount = extract_amount(user_message)
    message_recipient = extract_address(user_message)

    amount = message_amount if message_amount is not None else (pending.amount if pending else None)
    recipient = message_recipient or (pending.recipient if pending else None)

    if recipient is not None and not is_valid_stacks_address(recipient):
        recipient = None
    if amount is not None and amount <= 0:
        amount = None
    return amount, recipient


def flag_network_mismatch(response: EngineResponse, network_name: Optional[str]) -> EngineResponse:
    """Warn when a transfer's recipient lives on another network than the wallet."""

    action = response.action
    if action is None or action.params is None or not network_name:
        return response

    wallet_network = normalize_network(network_name)
    recipient_network = address_network(action.params.recipient)
    if wallet_network not in KNOWN_NETWORKS or recipient_network in (None, wallet_network):
        return response

    warning = messages.network_mismatch(action.params.recipient, recipient_network, wallet_network)
    return response.model_copy(update={"message": f"{response.message}\n\n{warning}"})
