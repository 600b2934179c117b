"""
Circuit Breaker

Gates the remote model path. The engine owns one instance; tests build their
own with a fake clock.

States:
- CLOSED: remote calls are attempted
- OPEN: ``max_failures`` exhausted calls, the latest within the cool-down;
  callers go straight to the local responder
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker:
    def __init__(
        self,
        max_failures: int = 5,
        cooldown_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self.max_failures = max_failures
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self.logger = logger or logging.getLogger(__name__)

        self.consecutive_failures = 0
        self.last_failure_at: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        if self.consecutive_failures >= self.max_failures and not self._cooldown_elapsed():
            return CircuitState.OPEN
        return CircuitState.CLOSED

    async def allow_request(self) -> bool:
        """Return False while open; clears the counter once the cool-down has passed."""

        async with self._lock:
            if self.state == CircuitState.OPEN:
                return False
            if self._cooldown_elapsed() and self.consecutive_failures:
                self.logger.info(
                    "Circuit breaker cool-down elapsed, clearing %d failures",
                    self.consecutive_failures,
                )
                self.consecutive_failures = 0
            return True

    async def record_success(self) -> None:
        async with self._lock:
            self.consecutive_failures = 0

    async def record_failure(self) -> CircuitState:
        async with self._lock:
            self.consecutive_failures += 1
            self.last_failure_at = self._clock()
            state = self.state
            if state == CircuitState.OPEN:
                self.logger.warning(
                    "Circuit breaker opened after %d consecutive failures",
                    self.consecutive_failures,
                )
            return state

    def reset(self) -> None:
        self.consecutive_failures = 0
        self.last_failure_at = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "consecutive_failures": self.consecutive_failures,
            "max_failures": self.max_failures,
            "cooldown_seconds": self.cooldown_seconds,
            "seconds_until_retry": self._time_until_recovery(),
        }

    def _cooldown_elapsed(self) -> bool:
        if self.last_failure_at is None:
            return True
        return (self._clock() - self.last_failure_at) >= self.cooldown_seconds

    def _time_until_recovery(self) -> float:
        if self.state != CircuitState.OPEN or self.last_failure_at is None:
            return 0.0
        elapsed = self._clock() - self.last_failure_at
        return max(0.0, self.cooldown_seconds - elapsed)
