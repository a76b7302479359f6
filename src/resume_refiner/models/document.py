"""Pydantic models for parsed entries and renderer-agnostic style blocks."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Entry(BaseModel):
    """One repeating record inside a list-shaped section (e.g. one job)."""

    model_config = ConfigDict(frozen=True)

    header: str = ""
    details: list[str] = []


class BlockKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    ENTRY_HEADER = "entry_header"


class StyleBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str

    @classmethod
    def heading(cls, text: str) -> StyleBlock:
        return cls(kind=BlockKind.HEADING, text=text)

    @classmethod
    def paragraph(cls, text: str) -> StyleBlock:
        return cls(kind=BlockKind.PARAGRAPH, text=text)

    @classmethod
    def bullet(cls, text: str) -> StyleBlock:
        return cls(kind=BlockKind.BULLET, text=text)

    @classmethod
    def entry_header(cls, text: str) -> StyleBlock:
        return cls(kind=BlockKind.ENTRY_HEADER, text=text)
