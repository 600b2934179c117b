"""Canned replies for small talk, answered without any model call."""

from typing import Optional

from ...types import Action, ActionType, EngineResponse
from . import messages

GREETINGS = frozenset({"hi", "hello", "hey", "hi!", "hello!", "hey!"})
HELP_REQUESTS = frozenset({"help", "help me", "what can you do"})


def get_quick_response(user_message: str) -> Optional[EngineResponse]:
    normalized = user_message.strip().lower()

    if normalized in GREETINGS:
        return EngineResponse(message=messages.GREETING)

    if normalized in HELP_REQUESTS:
        return EngineResponse(message=messages.USAGE, action=Action(type=ActionType.HELP))

    return None
