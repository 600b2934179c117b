"""Canned assistant copy shared by the quick-path and the local responder."""

from ...services.address import format_amount

GREETING = (
    "Hi there! I'm your Stacks blockchain assistant. I can help you:\n\n"
    "• Send STX to addresses\n"
    "• Check your balance\n"
    "• View your wallet address\n"
    "• Show transaction history\n\n"
    "What would you like to do?"
)

USAGE = (
    "I can help you with Stacks blockchain operations:\n\n"
    "• **Send STX**: \"Send 0.01 STX to [address]\"\n"
    "• **Check Balance**: \"What's my balance?\"\n"
    "• **View Address**: \"What's my address?\"\n"
    "• **Transaction History**: \"Show my transactions\"\n\n"
    "Just tell me what you'd like to do in plain English!"
)

BALANCE = "Let me check your current STX balance."
ADDRESS = "Here's your Stacks wallet address:"
HELP = "I can help you with Stacks blockchain operations!"
HISTORY = "Let me show you your transaction history."

ADDRESS_FORMAT_HINT = 'STX addresses start with "ST" (testnet) or "SP" (mainnet).'

TROUBLESHOOTING = (
    "I can help you troubleshoot sending issues! Common reasons you might not be able to send STX:\n\n"
    "• **Insufficient Balance**: Make sure you have enough STX plus fees (~0.0001 STX)\n"
    "• **Invalid Address**: STX addresses start with 'ST' (testnet) or 'SP' (mainnet)\n"
    "• **Network Mismatch**: Ensure your wallet and the app are on the same network\n"
    "• **Wallet Connection**: Try reconnecting your wallet\n\n"
    "What specific issue are you experiencing?"
)

SEND_NEEDS_BOTH = (
    "I can help you send STX! 💰\n\n"
    "I need two things:\n"
    "1. How much STX do you want to send?\n"
    "2. The recipient's STX address (starts with \"ST\" or \"SP\")\n\n"
    "Example: \"Send 0.01 STX to ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM\""
)

HOW_TO_SEND = (
    "No problem! I'm here to help. 😊\n\n"
    "To send STX, I need:\n"
    "1. **Amount**: How much STX to send (e.g., \"0.01\")\n"
    "2. **Recipient**: Their STX address (starts with \"ST\" or \"SP\")\n\n"
    "You can say something like:\n"
    "\"Send 0.01 STX to ST1ABC...\"\n\n"
    "Or I can guide you step by step. What would you like to do?"
)

CAPABILITIES = (
    "I can help you with Stacks blockchain operations! Try:\n\n"
    "• **Send STX**: \"Send 0.01 STX to [address]\"\n"
    "• **Check Balance**: \"What's my balance?\"\n"
    "• **Get Address**: \"What's my address?\"\n"
    "• **Transaction History**: \"Show my transactions\"\n"
    "• **Help**: \"What can you do?\"\n\n"
    "Just talk to me naturally - I understand conversational requests! 😊"
)


def transfer_ready(amount: float, recipient: str, *, from_context: bool) -> str:
    opener = "Perfect! I'll" if from_context else "I'll"
    return (
        f"{opener} help you send {format_amount(amount)} STX to {recipient}. "
        "Let me prepare the transaction for your review."
    )


def amount_received(amount: float, recipient_name: str | None) -> str:
    question = (
        f"What's {recipient_name}'s STX address?"
        if recipient_name
        else "What's the recipient's STX address?"
    )
    return f"Got it! {format_amount(amount)} STX ✅\n\nNow I need the recipient's STX address. {question}"


def address_received(recipient: str, pending_amount: float | None) -> str:
    follow_up = (
        f"I'll send {format_amount(pending_amount)} STX to this address."
        if pending_amount
        else "How much STX do you want to send?"
    )
    return f"Great! I have the address: {recipient} ✅\n\n{follow_up}"


def send_to_name(amount: float, name: str) -> str:
    return (
        f"I can help you send {format_amount(amount)} STX to {name}! 💰\n\n"
        f"I'll need {name}'s STX address to complete the transfer. {ADDRESS_FORMAT_HINT}\n\n"
        f"Can you provide {name}'s STX address?"
    )


def send_to_name_without_amount(name: str) -> str:
    return (
        f"I can help you send STX to {name}! 💰\n\n"
        "I need two things:\n"
        "1. How much STX do you want to send?\n"
        f"2. {name}'s STX address (starts with \"ST\" or \"SP\")\n\n"
        "Can you provide both details?"
    )


def send_without_recipient(amount: float) -> str:
    return (
        f"I can help you send {format_amount(amount)} STX! 💰\n\n"
        f"I just need the recipient's STX address. {ADDRESS_FORMAT_HINT}\n\n"
        "What's the recipient's address?"
    )


def send_without_amount(recipient: str) -> str:
    return (
        f"I can help you send STX to {recipient}! 💰\n\n"
        "How much STX do you want to send?\n\n"
        "Example: \"Send 0.01 STX\" or just \"0.01\""
    )


def standalone_address(recipient: str) -> str:
    return (
        f"Got the address: {recipient} ✅\n\n"
        "Now I need to know how much STX you want to send to this address.\n\n"
        "Example: \"Send 0.01 STX\" or just \"0.01\""
    )


def standalone_amount(amount: float) -> str:
    return (
        f"Got the amount: {format_amount(amount)} STX ✅\n\n"
        f"Now I need the recipient's STX address. {ADDRESS_FORMAT_HINT}\n\n"
        "What's the recipient's address?"
    )


def network_mismatch(recipient: str, recipient_network: str, wallet_network: str) -> str:
    return (
        f"⚠️ Heads up: {recipient} is a {recipient_network} address, "
        f"but your wallet is on {wallet_network}. "
        "Double-check the recipient before you confirm."
    )
