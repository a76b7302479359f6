"""Exception hierarchy and failure classification for completion backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_refiner.models.completion import FailureKind

if TYPE_CHECKING:
    from resume_refiner.models.completion import CompletionAttempt

TRANSIENT_STATUSES = frozenset({500, 503})
RATE_LIMITED_STATUS = 429


class ResumeRefinerError(Exception):
    """Base class for all errors raised by resume_refiner."""


class BackendError(ResumeRefinerError):
    """A failed backend call, with the HTTP-like status when one was received."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class EmptyResultError(BackendError):
    """The backend answered, but with no usable text."""

    def __init__(self, backend_id: str):
        super().__init__(f"Backend {backend_id!r} returned an empty response")
        self.backend_id = backend_id


class AllFailedError(ResumeRefinerError):
    """No usable completion could be obtained from the backend chain."""

    def __init__(
        self,
        kind: FailureKind | None,
        cause: BaseException | None,
        attempts: list[CompletionAttempt] | None = None,
        message: str | None = None,
    ):
        self.kind = kind
        self.cause = cause
        self.attempts = list(attempts or [])
        if message is None:
            message = (
                f"All backends failed after {len(self.attempts)} attempt(s); "
                f"last failure: {kind.value if kind else 'unknown'} ({cause})"
            )
        super().__init__(message)

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)


class NoBackendsConfiguredError(AllFailedError):
    """The backend chain was empty, so nothing was attempted."""

    def __init__(self) -> None:
        super().__init__(None, None, [], message="No backends configured")


class CompletionCancelled(ResumeRefinerError):
    """The caller cancelled the run at a suspension point."""


class TagNameError(ValueError):
    """A recognized tag name is not alphanumeric/underscore."""


def status_of(error: BaseException) -> int | None:
    """Return the numeric status carried by an error, if any.

    Looks at ``status`` first, then the SDK spellings ``status_code`` and
    ``code``. Non-integer values (e.g. gRPC status names) are ignored.
    """
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify(error: BaseException) -> FailureKind:
    """Map a failure from a completion attempt to a FailureKind.

    Unrecognized errors are Fatal.
    """
    if isinstance(error, EmptyResultError):
        return FailureKind.EMPTY_RESULT
    status = status_of(error)
    if status in TRANSIENT_STATUSES:
        return FailureKind.TRANSIENT
    if status == RATE_LIMITED_STATUS:
        return FailureKind.RATE_LIMITED
    return FailureKind.FATAL
