"""
Local Fallback Responder

Deterministic stand-in for the remote model. Rules run in a fixed order and
the first match wins:

1. context completion (pending fragments + message give a full transfer)
2. awaiting amount
3. awaiting address
4. balance / address / help / history keywords
5. troubleshooting questions about sending
6. send requests with missing pieces
7. a bare address or a bare amount
8. confusion markers
9. capability summary

Values parsed from the current message override values carried in context.
"""

import logging
import re
from typing import Callable, Optional, Tuple

from ...services.address import (
    extract_address,
    extract_amount,
    standalone_address,
    standalone_amount,
)
from ...types import (
    Action,
    ActionType,
    ConversationContext,
    EngineResponse,
    LastAction,
    PendingTransfer,
)
from . import messages
from .actions import DEFAULT_MEMO, flag_network_mismatch, resolve_transfer

_logger = logging.getLogger(__name__)

_TROUBLESHOOT_MARKERS = ("why", "how", "cant", "can't")
_QUESTION_MARKERS = ("why", "how", "can i", "cant", "can't", "?")
_SEND_OBJECT_MARKERS = ("money", "stx", "to")
_CONFUSION_MARKERS = ("don't understand", "dont understand", "confused", "help me")

_KEYWORD_REPLIES: Tuple[Tuple[Tuple[str, ...], ActionType, str], ...] = (
    (("balance",), ActionType.BALANCE, messages.BALANCE),
    (("address",), ActionType.ADDRESS, messages.ADDRESS),
    (("help", "what can you do"), ActionType.HELP, messages.HELP),
    (("history", "transactions"), ActionType.HISTORY, messages.HISTORY),
)

# "to Bob" / "to my friend Bob": the name must end at a word boundary, so the
# "ST" of an address is never taken for a name.
_RECIPIENT_NAME_RE = re.compile(r"\bto\s+(?:(?:my|the|a|our)\s+)?([a-zA-Z]+)\b", re.IGNORECASE)

Rule = Callable[[str, str, ConversationContext], Optional[EngineResponse]]


class LocalFallbackResponder:
    """Rule-based assistant used when the remote path is unavailable."""

    def __init__(self, memo: str = DEFAULT_MEMO):
        self.memo = memo
        self._rules: Tuple[Rule, ...] = (
            self._complete_from_context,
            self._awaiting_amount,
            self._awaiting_address,
            self._direct_intent,
            self._troubleshooting,
            self._send_request,
            self._standalone_answer,
            self._confusion,
        )

    def respond(
        self,
        user_message: str,
        context: Optional[ConversationContext] = None,
        network_name: Optional[str] = None,
    ) -> EngineResponse:
        """Answer from the first matching rule.

        ``network_name`` is the wallet's network; a transfer to an address
        from the other network gets a warning appended.
        """

        context = context or ConversationContext()
        lowered = user_message.lower()

        for rule in self._rules:
            response = rule(user_message, lowered, context)
            if response is not None:
                _logger.debug("Fallback rule %s matched", rule.__name__)
                return flag_network_mismatch(response, network_name)

        return EngineResponse(message=messages.CAPABILITIES)

    def _complete_from_context(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        if context.pending_transfer is None:
            return None

        amount, recipient = resolve_transfer(user_message, context)
        if not (amount and recipient):
            return None

        return EngineResponse(
            message=messages.transfer_ready(amount, recipient, from_context=True),
            action=Action.transfer(amount, recipient, self.memo),
            context=ConversationContext(
                pending_transfer=PendingTransfer(amount=amount, recipient=recipient),
                last_action=LastAction.READY_TO_SEND,
            ),
        )

    def _awaiting_amount(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        pending = context.pending_transfer
        if pending is None or context.last_action != LastAction.ASKED_FOR_AMOUNT:
            return None

        amount = extract_amount(user_message)
        if amount is None or pending.amount is not None:
            return None

        return EngineResponse(
            message=messages.amount_received(amount, pending.recipient_name),
            context=ConversationContext(
                pending_transfer=pending.model_copy(update={"amount": amount}),
                last_action=LastAction.ASKED_FOR_ADDRESS,
            ),
        )

    def _awaiting_address(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        pending = context.pending_transfer
        if pending is None or context.last_action != LastAction.ASKED_FOR_ADDRESS:
            return None

        recipient = extract_address(user_message)
        if recipient is None or pending.recipient is not None:
            return None

        next_action = LastAction.READY_TO_SEND if pending.amount else LastAction.ASKED_FOR_AMOUNT
        return EngineResponse(
            message=messages.address_received(recipient, pending.amount),
            context=ConversationContext(
                pending_transfer=pending.model_copy(update={"recipient": recipient}),
                last_action=next_action,
            ),
        )

    def _direct_intent(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        for keywords, action_type, reply in _KEYWORD_REPLIES:
            if any(keyword in lowered for keyword in keywords):
                return EngineResponse(message=reply, action=Action(type=action_type))
        return None

    def _troubleshooting(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        if "send" in lowered and any(marker in lowered for marker in _TROUBLESHOOT_MARKERS):
            return EngineResponse(message=messages.TROUBLESHOOTING)
        return None

    def _send_request(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        if any(marker in lowered for marker in _QUESTION_MARKERS):
            return None
        if "send" not in lowered or not any(marker in lowered for marker in _SEND_OBJECT_MARKERS):
            return None

        amount = extract_amount(user_message)
        recipient = extract_address(user_message)
        name = None if recipient else self._recipient_name(user_message)

        if amount and recipient:
            return EngineResponse(
                message=messages.transfer_ready(amount, recipient, from_context=False),
                action=Action.transfer(amount, recipient, self.memo),
            )
        if amount and name:
            return EngineResponse(message=messages.send_to_name(amount, name))
        if name:
            return EngineResponse(message=messages.send_to_name_without_amount(name))
        if recipient:
            return EngineResponse(message=messages.send_without_amount(recipient))
        if amount:
            return EngineResponse(message=messages.send_without_recipient(amount))
        return EngineResponse(message=messages.SEND_NEEDS_BOTH)

    def _standalone_answer(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        recipient = standalone_address(user_message)
        if recipient:
            return EngineResponse(message=messages.standalone_address(recipient))

        amount = standalone_amount(user_message)
        if amount is not None:
            return EngineResponse(message=messages.standalone_amount(amount))
        return None

    def _confusion(
        self, user_message: str, lowered: str, context: ConversationContext
    ) -> Optional[EngineResponse]:
        if any(marker in lowered for marker in _CONFUSION_MARKERS):
            return EngineResponse(message=messages.HOW_TO_SEND)
        return None

    @staticmethod
    def _recipient_name(user_message: str) -> Optional[str]:
        match = _RECIPIENT_NAME_RE.search(user_message)
        if not match:
            return None
        name = match.group(1)
        # "send money to" with nothing useful after it
        if name.lower() in {"send", "stx"}:
            return None
        return name
