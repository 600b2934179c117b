import pytest

from stacks_assistant.core.intent import LocalFallbackResponder
from stacks_assistant.core.intent import messages
from stacks_assistant.types import (
    ActionType,
    ConversationContext,
    LastAction,
    PendingTransfer,
)

ADDRESS = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


@pytest.fixture
def responder():
    return LocalFallbackResponder()


def pending(last_action=None, **fragments) -> ConversationContext:
    return ConversationContext(pending_transfer=PendingTransfer(**fragments), last_action=last_action)


class TestContextRules:
    def test_pending_amount_plus_address_completes_transfer(self, responder):
        response = responder.respond(ADDRESS, pending(LastAction.ASKED_FOR_ADDRESS, amount=5))

        assert response.action.type == ActionType.TRANSFER
        assert response.action.params.amount == 5
        assert response.action.params.recipient == ADDRESS
        assert response.action.params.memo == "Sent via Stacks Chat Assistant"
        assert response.message.startswith(f"Perfect! I'll help you send 5 STX to {ADDRESS}.")
        assert response.context.last_action == LastAction.READY_TO_SEND

    def test_message_amount_overrides_pending_amount(self, responder):
        response = responder.respond("make it 8", pending(amount=5, recipient=ADDRESS))

        assert response.action.params.amount == 8

    def test_amount_answer_asks_for_named_address(self, responder):
        context = pending(LastAction.ASKED_FOR_AMOUNT, recipient_name="Bob")

        response = responder.respond("2", context)

        assert response.action is None
        assert "Got it! 2 STX" in response.message
        assert "What's Bob's STX address?" in response.message
        assert response.context == pending(LastAction.ASKED_FOR_ADDRESS, amount=2, recipient_name="Bob")

    def test_amount_answer_ignored_when_amount_already_pending(self, responder):
        context = pending(LastAction.ASKED_FOR_AMOUNT, amount=3, recipient_name="Bob")

        response = responder.respond("4", context)

        assert response.message == messages.standalone_amount(4)

    def test_address_answer_asks_for_amount(self, responder):
        context = pending(LastAction.ASKED_FOR_ADDRESS, recipient_name="Bob")

        response = responder.respond(ADDRESS, context)

        assert response.action is None
        assert response.message.startswith(f"Great! I have the address: {ADDRESS}")
        assert "How much STX do you want to send?" in response.message
        assert response.context.last_action == LastAction.ASKED_FOR_AMOUNT
        assert response.context.pending_transfer.recipient == ADDRESS


class TestDirectIntents:
    @pytest.mark.parametrize(
        "text, action_type, reply",
        [
            ("what's my balance", ActionType.BALANCE, messages.BALANCE),
            ("what is my address", ActionType.ADDRESS, messages.ADDRESS),
            ("I need some help", ActionType.HELP, messages.HELP),
            ("show my transaction history", ActionType.HISTORY, messages.HISTORY),
        ],
    )
    def test_keyword_replies(self, responder, text, action_type, reply):
        response = responder.respond(text)

        assert response.action.type == action_type
        assert response.message == reply

    def test_balance_checked_before_history(self, responder):
        assert responder.respond("balance and history").action.type == ActionType.BALANCE


class TestSendRequests:
    def test_troubleshooting_question_is_not_a_transfer(self, responder):
        response = responder.respond(f"why can't I send 5 stx to {ADDRESS}?")

        assert response.message == messages.TROUBLESHOOTING
        assert response.action is None

    def test_amount_and_name_asks_for_address(self, responder):
        response = responder.respond("send 5 stx to Bob")

        assert response.action is None
        assert "send 5 STX to Bob" in response.message
        assert "Can you provide Bob's STX address?" in response.message

    def test_name_without_amount_asks_for_both(self, responder):
        response = responder.respond("send money to my friend")

        assert response.action is None
        assert response.message == messages.send_to_name_without_amount("friend")

    def test_amount_without_recipient(self, responder):
        response = responder.respond("send 2 stx")

        assert response.message == messages.send_without_recipient(2)

    def test_address_without_amount(self, responder):
        response = responder.respond(f"send stx to {ADDRESS}")

        assert response.action is None
        assert response.message == messages.send_without_amount(ADDRESS)

    def test_amount_and_address_transfer(self, responder):
        response = responder.respond(f"send 1.5 stx to {ADDRESS}")

        assert response.action.type == ActionType.TRANSFER
        assert response.action.params.amount == 1.5
        assert response.message.startswith(f"I'll help you send 1.5 STX to {ADDRESS}.")

    def test_bare_send_request(self, responder):
        assert responder.respond("send some stx").message == messages.SEND_NEEDS_BOTH


class TestStandaloneAndDefaults:
    def test_bare_address(self, responder):
        response = responder.respond(ADDRESS)

        assert response.message == messages.standalone_address(ADDRESS)
        assert response.action is None

    def test_bare_amount(self, responder):
        response = responder.respond("0.25 STX")

        assert response.message.startswith("Got the amount: 0.25 STX")

    @pytest.mark.parametrize("text", ["I'm confused", "I don't understand this"])
    def test_confusion(self, responder, text):
        assert responder.respond(text).message == messages.HOW_TO_SEND

    def test_default_capabilities(self, responder):
        response = responder.respond("tell me a joke")

        assert response.message == messages.CAPABILITIES
        assert response.action is None
        assert response.context is None


class TestUnusableAmounts:
    def test_overflowing_amount_asks_for_a_real_one(self, responder):
        response = responder.respond("send " + "9" * 400 + f" stx to {ADDRESS}")

        assert response.action is None
        assert response.message == messages.send_without_amount(ADDRESS)

    def test_overflowing_amount_does_not_complete_context(self, responder):
        response = responder.respond("9" * 400, pending(LastAction.ASKED_FOR_AMOUNT, recipient=ADDRESS))

        assert response.action is None
        assert response.context is None

    def test_fallback_transfer_serializes_a_number(self, responder):
        response = responder.respond(f"send 2.5 stx to {ADDRESS}")

        assert '"amount":2.5' in response.model_dump_json()


class TestNetworkWarning:
    def test_testnet_recipient_on_mainnet_wallet(self, responder):
        response = responder.respond(f"send 1 stx to {ADDRESS}", network_name="mainnet")

        assert response.action.params.recipient == ADDRESS
        assert response.message.endswith(messages.network_mismatch(ADDRESS, "testnet", "mainnet"))

    def test_matching_network_has_no_warning(self, responder):
        response = responder.respond(f"send 1 stx to {ADDRESS}", network_name="testnet")

        assert "Heads up" not in response.message
