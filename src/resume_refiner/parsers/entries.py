"""Split list-shaped sections into repeating entries."""

from __future__ import annotations

import re

from resume_refiner.models.document import Entry

BULLET_PREFIX = re.compile(r"^-+\s*")


def strip_bullet(line: str) -> str:
    """Trim a line and drop any leading run of ``-`` bullet markers."""
    return BULLET_PREFIX.sub("", line.strip())


def split_lines(text: str) -> list[str]:
    """Trimmed, non-blank lines of ``text``."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_entries(section_text: str, sentinel_prefix: str) -> list[Entry]:
    """Split a section into entries, one per line starting with ``sentinel_prefix``.

    The sentinel line becomes the entry header; the lines up to the next
    sentinel become its details, with blank lines dropped and bullet markers
    stripped. Lines before the first sentinel form an entry with an empty
    header. If no line matches, a non-blank section is one header-less entry,
    even when every line was a bare bullet marker and no details remain.
    """
    if not sentinel_prefix:
        raise ValueError("sentinel_prefix must not be empty")

    entries: list[Entry] = []
    header = ""
    details: list[str] = []

    def flush() -> None:
        if header or details:
            entries.append(Entry(header=header, details=list(details)))

    for raw in section_text.splitlines():
        line = raw.strip()
        if line.startswith(sentinel_prefix):
            flush()
            header, details = line, []
            continue
        detail = strip_bullet(line)
        if detail:
            details.append(detail)

    flush()
    if not entries and section_text.strip():
        entries.append(Entry())
    return entries
