"""Derive transfer fragments and the last question asked from recent turns."""

import re
from typing import Optional, Sequence

from ...services.address import extract_address, extract_amount
from ...types import ConversationContext, ConversationTurn, LastAction, PendingTransfer

HISTORY_WINDOW = 6
ASSISTANT_SCAN_WINDOW = 4

_AMOUNT_QUESTION_MARKERS = ("how much stx", "amount")
_ADDRESS_QUESTION_MARKERS = ("stx address", "recipient")

# "send ... to Bob": the word must end at a boundary so "to ST1PQ..." never yields "ST".
_SEND_TO_NAME_RE = re.compile(r"send.*\bto\s+([a-zA-Z]+)\b", re.IGNORECASE)


def analyze_conversation_context(
    history: Sequence[ConversationTurn],
    message: str,
    history_window: int = HISTORY_WINDOW,
    scan_window: int = ASSISTANT_SCAN_WINDOW,
) -> ConversationContext:
    """Build a fresh context for ``message``.

    Assistant turns are scanned oldest first and each hit overwrites the
    previous one, so the last question in the window wins even when an
    earlier one is still unanswered.
    """

    window = list(history)[-history_window:] if history_window else []
    assistant_turns = [turn for turn in window if turn.role == "assistant"]
    if scan_window:
        assistant_turns = assistant_turns[-scan_window:]
    else:
        assistant_turns = []

    last_action: Optional[LastAction] = None
    recipient_name: Optional[str] = None

    for turn in assistant_turns:
        lowered = turn.content.lower()
        if any(marker in lowered for marker in _AMOUNT_QUESTION_MARKERS):
            last_action = LastAction.ASKED_FOR_AMOUNT
        if any(marker in lowered for marker in _ADDRESS_QUESTION_MARKERS):
            last_action = LastAction.ASKED_FOR_ADDRESS
        name_match = _SEND_TO_NAME_RE.search(turn.content)
        if name_match:
            recipient_name = name_match.group(1)

    amount = extract_amount(message)
    recipient = extract_address(message)

    pending: Optional[PendingTransfer] = None
    if recipient_name is not None or amount is not None or recipient is not None:
        pending = PendingTransfer(
            amount=amount,
            recipient=recipient,
            recipient_name=recipient_name,
        )

    return ConversationContext(pending_transfer=pending, last_action=last_action)
