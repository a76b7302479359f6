"""Completion orchestrator - ordered backend chain with retry and failover."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from functools import partial

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from resume_refiner.errors import (
    AllFailedError,
    CompletionCancelled,
    EmptyResultError,
    NoBackendsConfiguredError,
    classify,
)
from resume_refiner.models.completion import (
    CompletionAttempt,
    CompletionResult,
    FailureKind,
)

logger = logging.getLogger(__name__)

Invoke = Callable[[str, str], Awaitable[str]]
Sleep = Callable[[float], Awaitable[None]]


class FatalPolicy(str, Enum):
    """What to do when a backend fails with a Fatal error."""

    ABORT = "abort"  # stop the whole chain
    SKIP = "skip"  # give up on this backend only


class CancellationToken:
    """Cooperative cancellation flag, checked before each call and backoff."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CompletionCancelled("Completion run was cancelled")


def _is_transient(error: BaseException) -> bool:
    return classify(error) is FailureKind.TRANSIENT


class CompletionOrchestrator:
    """Tries each backend of a chain in order until one yields usable text.

    Transient failures are retried on the same backend with linear backoff
    (``attempt * backoff_seconds``) up to ``max_attempts`` calls. Rate-limited
    and empty results fail over to the next backend at once. Fatal failures
    abort the chain, or skip the backend under ``FatalPolicy.SKIP``.

    The orchestrator keeps no state between runs; the chain is passed to
    every call of :meth:`run`.
    """

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        fatal_policy: FatalPolicy = FatalPolicy.ABORT,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.fatal_policy = FatalPolicy(fatal_policy)
        self._sleep = sleep

    async def run(
        self,
        chain: Sequence[str],
        prompt: str,
        invoke: Invoke,
        *,
        cancel: CancellationToken | None = None,
    ) -> CompletionResult:
        """Return the first non-empty completion from ``chain``.

        Raises:
            NoBackendsConfiguredError: ``chain`` is empty.
            AllFailedError: every backend failed, or one failed fatally
                under the abort policy.
            CompletionCancelled: ``cancel`` was set at a suspension point.
        """
        chain = tuple(chain)
        if not chain:
            raise NoBackendsConfiguredError()

        attempts: list[CompletionAttempt] = []
        last_kind: FailureKind | None = None
        last_cause: BaseException | None = None

        for backend_id in chain:
            try:
                text = await self._run_backend(backend_id, prompt, invoke, attempts, cancel)
            except CompletionCancelled:
                raise
            except Exception as exc:
                last_kind, last_cause = classify(exc), exc
                if last_kind is FailureKind.FATAL and self.fatal_policy is FatalPolicy.ABORT:
                    logger.error(
                        "Fatal failure on backend %s, aborting chain: %s", backend_id, exc
                    )
                    raise AllFailedError(last_kind, exc, attempts) from exc
                logger.warning(
                    "Backend %s abandoned (%s), failing over", backend_id, last_kind.value
                )
                continue
            return CompletionResult(text=text, backend_id=backend_id, attempts=attempts)

        logger.error(
            "Backend chain exhausted after %d attempt(s); last failure: %s",
            len(attempts),
            last_kind.value if last_kind else "unknown",
        )
        raise AllFailedError(last_kind, last_cause, attempts) from last_cause

    async def _run_backend(
        self,
        backend_id: str,
        prompt: str,
        invoke: Invoke,
        attempts: list[CompletionAttempt],
        cancel: CancellationToken | None,
    ) -> str:
        """Call one backend, retrying transient failures on it."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_incrementing(start=self.backoff_seconds, increment=self.backoff_seconds),
            retry=retry_if_exception(_is_transient),
            sleep=partial(self._backoff, cancel),
            reraise=True,
        )
        text = ""
        async for attempt in retrying:
            with attempt:
                text = await self._attempt(
                    backend_id,
                    attempt.retry_state.attempt_number,
                    prompt,
                    invoke,
                    attempts,
                    cancel,
                )
        return text

    async def _attempt(
        self,
        backend_id: str,
        attempt_number: int,
        prompt: str,
        invoke: Invoke,
        attempts: list[CompletionAttempt],
        cancel: CancellationToken | None,
    ) -> str:
        if cancel is not None:
            cancel.raise_if_cancelled()

        try:
            text = await invoke(backend_id, prompt)
        except Exception as exc:
            kind = classify(exc)
            attempts.append(CompletionAttempt(backend_id, attempt_number, False, kind, exc))
            self._log_attempt(backend_id, attempt_number, kind.value, exc)
            raise

        if not text or not text.strip():
            empty = EmptyResultError(backend_id)
            attempts.append(
                CompletionAttempt(
                    backend_id, attempt_number, False, FailureKind.EMPTY_RESULT, empty
                )
            )
            self._log_attempt(backend_id, attempt_number, FailureKind.EMPTY_RESULT.value)
            raise empty

        attempts.append(CompletionAttempt(backend_id, attempt_number, True))
        self._log_attempt(backend_id, attempt_number, "success")
        return text

    async def _backoff(self, cancel: CancellationToken | None, seconds: float) -> None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        logger.debug("Backing off %.2fs before retrying", seconds)
        await self._sleep(seconds)

    @staticmethod
    def _log_attempt(
        backend_id: str,
        attempt_number: int,
        outcome: str,
        cause: BaseException | None = None,
    ) -> None:
        level = logging.INFO if outcome == "success" else logging.WARNING
        logger.log(
            level,
            "LLM attempt: backend=%s attempt=%d outcome=%s%s",
            backend_id,
            attempt_number,
            outcome,
            f" cause={cause}" if cause else "",
            extra={"backend": backend_id, "attempt": attempt_number, "outcome": outcome},
        )
