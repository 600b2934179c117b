"""
Engine Errors

Only an exhausted candidate list ever reaches the caller. Per-candidate
problems are recorded as ``CandidateFailure`` values and never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence


class FailureCategory(str, Enum):
    """Why a single candidate model produced no usable reply."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    MODEL_NOT_FOUND = "model_not_found"
    RATE_LIMIT = "rate_limit"
    AUTHENTICATION = "authentication"
    HTTP = "http"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class CandidateFailure:
    model: str
    category: FailureCategory
    detail: str
    status_code: Optional[int] = None


class IntentEngineError(Exception):
    """Base class for errors surfaced by the intent engine."""


class AllModelsFailedError(IntentEngineError):
    """Every candidate model failed; the caller should offer a retry."""

    def __init__(self, failures: Sequence[CandidateFailure]):
        self.failures: List[CandidateFailure] = list(failures)
        tried = ", ".join(f"{f.model} ({f.category.value})" for f in self.failures) or "none"
        super().__init__(f"All AI models failed to respond. Tried: {tried}")
