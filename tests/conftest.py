import asyncio
import json
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from stacks_assistant.core.intent import CircuitBreaker, IntentEngine, RemoteModelCaller
from stacks_assistant.providers.llm import OpenRouterProvider

MODELS = ["model/primary", "model/secondary", "model/tertiary"]

Outcome = Union[str, httpx.Response, Exception, Callable[[httpx.Request], Any]]


def completion(content: Any) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}]}


class FakeOpenRouter:
    """Stands in for the OpenRouter API behind ``httpx.MockTransport``.

    ``outcomes`` maps a model id to a reply string, an ``httpx.Response``,
    an exception to raise, or ``"hang"`` to never answer.
    """

    def __init__(self, default: Outcome = "Sure, let me help with that."):
        self.default = default
        self.outcomes: Dict[str, Outcome] = {}
        self.requests: List[httpx.Request] = []
        self.models_payload: Dict[str, Any] = {"data": [{"id": m} for m in MODELS]}

    @property
    def completion_calls(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.url.path.endswith("/chat/completions")]

    @property
    def models_tried(self) -> List[str]:
        return [body["model"] for body in self.completion_calls]

    def fail_all(self, status: int = 500) -> None:
        self.default = httpx.Response(status, text="upstream exploded")
        self.outcomes.clear()

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        if request.url.path.endswith("/models"):
            return httpx.Response(200, json=self.models_payload)

        model = json.loads(request.content)["model"]
        outcome = self.outcomes.get(model, self.default)
        if outcome == "hang":
            return self._hang()
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        if callable(outcome):
            return outcome(request)
        return httpx.Response(200, json=completion(outcome))

    async def _hang(self) -> httpx.Response:
        await asyncio.sleep(3600)
        raise AssertionError("unreachable")


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_api() -> FakeOpenRouter:
    return FakeOpenRouter()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_provider(fake_api):
    def _make(api_key: str = "test-key", timeout: float = 30.0, model: str = MODELS[0]) -> OpenRouterProvider:
        return OpenRouterProvider(
            api_key=api_key,
            model=model,
            base_url="https://openrouter.test/api/v1",
            timeout=timeout,
            app_title="Stacks Chat Assistant",
            transport=httpx.MockTransport(fake_api),
        )

    return _make


@pytest.fixture
def make_engine(make_provider, clock):
    def _make(api_key: str = "test-key", timeout: float = 30.0, models=None) -> IntentEngine:
        models = list(models or MODELS)
        provider = make_provider(api_key=api_key, timeout=timeout, model=models[0])
        caller = RemoteModelCaller(provider, models)
        breaker = CircuitBreaker(max_failures=5, cooldown_seconds=300, clock=clock)
        return IntentEngine(caller=caller, breaker=breaker)

    return _make
