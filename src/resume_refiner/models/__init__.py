"""Data models for the resume refiner."""

from resume_refiner.models.completion import (
    CompletionAttempt,
    CompletionResult,
    FailureKind,
)
from resume_refiner.models.document import BlockKind, Entry, StyleBlock

__all__ = [
    "BlockKind",
    "CompletionAttempt",
    "CompletionResult",
    "Entry",
    "FailureKind",
    "StyleBlock",
]
