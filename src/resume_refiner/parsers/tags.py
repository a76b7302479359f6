"""Bracketed section tag grammar.

A tagged document is plain text holding zero or more blocks of the form::

    [NAME]
    ...content, any number of lines...
    [/NAME]

Tag names are ASCII letters, digits and underscores and are matched
case-insensitively. Each recognized tag is looked up on its own: the first
``[NAME] ... [/NAME]`` pair (non-greedy) wins, later duplicates are ignored.
An open tag without its close tag means the section is absent.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from resume_refiner.errors import TagNameError

TAG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def validate_tag_name(name: str) -> str:
    """Return the canonical (upper-case) form of a tag name."""
    if not TAG_NAME_PATTERN.match(name):
        raise TagNameError(f"Invalid section tag name: {name!r}")
    return name.upper()


def _section_pattern(name: str) -> re.Pattern[str]:
    escaped = re.escape(name)
    return re.compile(rf"\[{escaped}\](.*?)\[/{escaped}\]", re.IGNORECASE | re.DOTALL)


def parse_sections(text: str, recognized_tags: Iterable[str]) -> dict[str, str]:
    """Extract the trimmed content of each recognized tag found in ``text``.

    Keys are the upper-cased tag names. Tags that are missing or unclosed
    are left out of the result rather than stored as empty strings.
    """
    sections: dict[str, str] = {}
    for tag in recognized_tags:
        name = validate_tag_name(tag)
        if name in sections:
            continue
        match = _section_pattern(name).search(text)
        if match:
            sections[name] = match.group(1).strip()
    return sections


def render_sections(sections: Mapping[str, str]) -> str:
    """Serialise a section mapping back into tagged text.

    ``parse_sections(render_sections(s), s)`` gives back ``s`` (trimmed) as
    long as no content contains a closing tag of its own name.
    """
    blocks = []
    for tag, content in sections.items():
        name = validate_tag_name(tag)
        blocks.append(f"[{name}]\n{content.strip()}\n[/{name}]")
    return "\n\n".join(blocks) + ("\n" if blocks else "")
