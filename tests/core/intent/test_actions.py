import pytest
from pydantic import ValidationError

from stacks_assistant.core.intent import DEFAULT_MEMO, extract_action, flag_network_mismatch
from stacks_assistant.core.intent import messages
from stacks_assistant.types import (
    Action,
    ActionType,
    ConversationContext,
    EngineResponse,
    LastAction,
    PendingTransfer,
    TransferParams,
)

ADDRESS = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
MAINNET_ADDRESS = "SP1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


def test_complete_transfer():
    action = extract_action(f"send 0.01 stx to {ADDRESS}")

    assert action.model_dump(mode="json") == {
        "type": "transfer",
        "params": {"amount": 0.01, "recipient": ADDRESS, "memo": "Sent via Stacks Chat Assistant"},
    }


@pytest.mark.parametrize(
    "text, amount, recipient",
    [
        (f"Send 30 STX to {ADDRESS}", 30.0, ADDRESS),
        (f"please send 1.25 to {MAINNET_ADDRESS} now", 1.25, MAINNET_ADDRESS),
        (f"SEND 2stx to {ADDRESS}", 2.0, ADDRESS),
    ],
)
def test_transfer_variants(text, amount, recipient):
    action = extract_action(text)

    assert action.type == ActionType.TRANSFER
    assert action.params.amount == amount
    assert action.params.recipient == recipient
    assert action.params.memo == DEFAULT_MEMO


@pytest.mark.parametrize(
    "text",
    [
        "send 5 stx to Bob",
        "send 30 stx to my friend",
        f"send 5 stx to {ADDRESS.lower()}",
        f"send 0 stx to {ADDRESS}",
    ],
)
def test_transfer_to_non_address_yields_nothing(text):
    assert extract_action(text) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("what's my balance", ActionType.BALANCE),
        ("What is my address?", ActionType.ADDRESS),
        ("I need help", ActionType.HELP),
        ("show my transactions", ActionType.HISTORY),
        ("open history", ActionType.HISTORY),
    ],
)
def test_keyword_actions(text, expected):
    assert extract_action(text) == Action(type=expected)


def test_keywords_win_over_transfer_pattern():
    action = extract_action(f"send 5 stx to {ADDRESS} and show my balance")

    assert action.type == ActionType.BALANCE


def test_pending_amount_completed_by_address():
    context = ConversationContext(
        pending_transfer=PendingTransfer(amount=5),
        last_action=LastAction.ASKED_FOR_ADDRESS,
    )

    action = extract_action(ADDRESS, context)

    assert action == Action.transfer(5, ADDRESS, DEFAULT_MEMO)


def test_pending_address_completed_by_amount():
    context = ConversationContext(pending_transfer=PendingTransfer(recipient=ADDRESS))

    action = extract_action("2.5", context)

    assert action.params.amount == 2.5
    assert action.params.recipient == ADDRESS


def test_message_values_override_context():
    context = ConversationContext(pending_transfer=PendingTransfer(amount=5, recipient=ADDRESS))

    action = extract_action("actually make it 7", context)

    assert action.params.amount == 7.0


def test_incomplete_context_yields_nothing():
    context = ConversationContext(pending_transfer=PendingTransfer(amount=5, recipient_name="Bob"))

    assert extract_action("hmm", context) is None


def test_no_context_no_action():
    assert extract_action("tell me a joke") is None


def test_custom_memo():
    action = extract_action(f"send 1 stx to {ADDRESS}", memo="rent")

    assert action.params.memo == "rent"


def test_overflowing_amount_yields_no_transfer():
    action = extract_action("send " + "9" * 400 + f" stx to {ADDRESS}")

    assert action is None


def test_overflowing_pending_amount_is_ignored():
    context = ConversationContext(pending_transfer=PendingTransfer(recipient=ADDRESS))

    assert extract_action("9" * 400, context) is None


@pytest.mark.parametrize("amount", [float("inf"), float("nan"), 0, -1])
def test_transfer_params_reject_unusable_amounts(amount):
    with pytest.raises(ValidationError):
        TransferParams(amount=amount, recipient=ADDRESS)


class TestNetworkMismatch:
    def transfer_reply(self, recipient):
        return EngineResponse(message="Review it.", action=Action.transfer(1, recipient, DEFAULT_MEMO))

    def test_mainnet_recipient_on_testnet_wallet(self):
        response = flag_network_mismatch(self.transfer_reply(MAINNET_ADDRESS), "test")

        assert response.message == "Review it.\n\n" + messages.network_mismatch(MAINNET_ADDRESS, "mainnet", "testnet")
        assert response.action.params.recipient == MAINNET_ADDRESS

    @pytest.mark.parametrize(
        "recipient, network",
        [
            (ADDRESS, "testnet"),
            (MAINNET_ADDRESS, "stacks-mainnet"),
            (ADDRESS, None),
            (ADDRESS, "devnet"),
        ],
    )
    def test_no_warning(self, recipient, network):
        reply = self.transfer_reply(recipient)

        assert flag_network_mismatch(reply, network) is reply

    def test_non_transfer_actions_untouched(self):
        reply = EngineResponse(message="Balance coming up.", action=Action(type=ActionType.BALANCE))

        assert flag_network_mismatch(reply, "mainnet") is reply
