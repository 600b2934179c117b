#!/usr/bin/env python3
"""Simple CLI for trying the Stacks Chat Assistant locally"""

import argparse
import asyncio
from typing import List, Optional

from stacks_assistant.config import settings
from stacks_assistant.core.chat import get_engine, run_chat
from stacks_assistant.core.intent import AllModelsFailedError
from stacks_assistant.logging_config import setup_logging
from stacks_assistant.types import Action, ActionType, ChatRequest, ConversationTurn


def print_action(action: Optional[Action]) -> None:
    """Show what the wallet layer would be asked to do"""
    if action is None:
        return

    if action.type == ActionType.TRANSFER and action.params:
        print("\n📝 Transfer ready for confirmation")
        print("-" * 40)
        print(f"Amount:    {action.params.amount} STX")
        print(f"Recipient: {action.params.recipient}")
        print(f"Memo:      {action.params.memo}")
        print("(nothing is sent from the CLI)")
    else:
        print(f"\n⚙️  Action: {action.type.value}")


async def cli_chat(address: Optional[str], balance: Optional[float], network: str, offline: bool):
    """Interactive chat mode"""
    print("🤖 Stacks Chat Assistant")
    print("Type 'exit' to quit, 'clear' to reset the conversation")
    print("-" * 40)

    engine = get_engine()
    if not settings.has_openrouter_key and not offline:
        print("⚠️  No OpenRouter API key found, answers come from the local assistant.")

    history: List[ConversationTurn] = []

    while True:
        try:
            user_input = input("\n💬 You: ").strip()

            if user_input.lower() in ['exit', 'quit', 'q']:
                print("Goodbye! 👋")
                break

            elif user_input.lower() == 'clear':
                history = []
                print("Chat history cleared.")
                continue

            elif not user_input:
                continue

            print("🤖 Assistant: ", end="")

            if offline:
                response = engine.respond_locally(user_input, history, network)
                reply, action = response.message, response.action
            else:
                request = ChatRequest(
                    message=user_input,
                    history=history,
                    address=address,
                    balance=balance,
                    network=network,
                )
                response = await run_chat(request, engine)
                reply, action = response.message, response.action

            print(reply)
            print_action(action)

            history.append(ConversationTurn(role="user", content=user_input))
            history.append(ConversationTurn(role="assistant", content=reply))
            history = history[-settings.history_window:]

        except KeyboardInterrupt:
            print("\nGoodbye! 👋")
            break
        except AllModelsFailedError as e:
            print(f"❌ {e}\nPlease try again.")


async def cli_models():
    engine = get_engine()
    print(f"Current model: {engine.model}")
    for model_id in engine.available_models:
        marker = "*" if model_id == engine.model else " "
        print(f" {marker} {model_id}")

    free = await engine.available_free_models()
    if free:
        print("\nFree models on OpenRouter:")
        for model_id in free:
            print(f"   {model_id}")


async def cli_status():
    engine = get_engine()
    result = await engine.test_connection()
    if result.get("success"):
        print("✅ OpenRouter connection OK")
    else:
        print(f"❌ OpenRouter connection failed: {result.get('error')}")
    breaker = engine.breaker.snapshot()
    print(f"Circuit breaker: {breaker['state']} ({breaker['consecutive_failures']}/{breaker['max_failures']} failures)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stacks Chat Assistant CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--log-format", choices=["auto", "json", "console"], default=None, help="Override LOG_FORMAT")
    subparsers = parser.add_subparsers(dest="command")

    chat_parser = subparsers.add_parser("chat", help="Interactive chat mode")
    chat_parser.add_argument("--address", help="Wallet address to put in the prompt")
    chat_parser.add_argument("--balance", type=float, help="STX balance to put in the prompt")
    chat_parser.add_argument("--network", default=settings.default_network, help="testnet or mainnet")
    chat_parser.add_argument("--offline", action="store_true", help="Use only the local assistant")

    subparsers.add_parser("models", help="List candidate models")
    subparsers.add_parser("status", help="Test the OpenRouter connection")

    return parser


async def main():
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.log_level or "WARNING", args.log_format)

    if not args.command:
        parser.print_help()
        return

    if args.command == "chat":
        await cli_chat(args.address, args.balance, args.network, args.offline)

    elif args.command == "models":
        await cli_models()

    elif args.command == "status":
        await cli_status()


if __name__ == "__main__":
    asyncio.run(main())
