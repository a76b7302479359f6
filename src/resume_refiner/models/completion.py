"""Completion attempt models for the backend orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FailureKind(str, Enum):
    TRANSIENT = "transient"
    RATE_LIMITED = "rate_limited"
    FATAL = "fatal"
    EMPTY_RESULT = "empty_result"


@dataclass(frozen=True)
class CompletionAttempt:
    """One call to one backend and what came of it."""

    backend_id: str
    attempt_number: int
    success: bool
    failure_kind: FailureKind | None = None
    cause: BaseException | None = field(default=None, compare=False)


@dataclass
class CompletionResult:
    """Successful completion with the attempt history that led to it."""

    text: str
    backend_id: str
    attempts: list[CompletionAttempt] = field(default_factory=list)
