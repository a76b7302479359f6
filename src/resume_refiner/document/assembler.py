"""Turn parsed resume sections into an ordered sequence of style blocks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from resume_refiner.models.document import StyleBlock
from resume_refiner.parsers.entries import split_entries, split_lines, strip_bullet

DEFAULT_ENTRY_SENTINEL = "Company:"


class SectionLayout(str, Enum):
    PROSE = "prose"  # one paragraph per line
    BULLETS = "bullets"  # one bullet per line
    PIPE = "pipe"  # all lines joined into one " | " paragraph
    ENTRIES = "entries"  # entry header + bullets per sentinel-delimited entry


@dataclass(frozen=True)
class SectionRule:
    tag: str
    label: str
    layout: SectionLayout


CANONICAL_SECTIONS: tuple[SectionRule, ...] = (
    SectionRule("CONTACT", "CONTACT", SectionLayout.PROSE),
    SectionRule("SUMMARY", "EXECUTIVE SUMMARY", SectionLayout.PROSE),
    SectionRule("CORE_SKILLS", "CORE STRENGTHS", SectionLayout.PIPE),
    SectionRule("EXPERIENCE", "EXPERIENCE", SectionLayout.ENTRIES),
    SectionRule("ACHIEVEMENTS", "KEY ACHIEVEMENTS", SectionLayout.BULLETS),
    SectionRule("PROJECTS", "PORTFOLIO PROJECTS", SectionLayout.BULLETS),
    SectionRule("TECHNICAL_SKILLS", "TECHNICAL LEADERSHIP SKILLS", SectionLayout.PROSE),
    SectionRule("CERTIFICATIONS", "CERTIFICATIONS", SectionLayout.BULLETS),
    SectionRule("EDUCATION", "EDUCATION", SectionLayout.BULLETS),
)

SECTION_TAGS: tuple[str, ...] = tuple(rule.tag for rule in CANONICAL_SECTIONS)


def assemble(
    sections: Mapping[str, str],
    *,
    rules: Sequence[SectionRule] = CANONICAL_SECTIONS,
    entry_sentinel: str = DEFAULT_ENTRY_SENTINEL,
) -> list[StyleBlock]:
    """Build style blocks for every section present, in canonical order.

    Section keys are matched case-insensitively. Sections that are absent,
    blank or yield no content blocks produce nothing, not even a heading.
    """
    by_tag = {tag.upper(): text for tag, text in sections.items()}
    blocks: list[StyleBlock] = []
    for rule in rules:
        text = by_tag.get(rule.tag.upper(), "").strip()
        if not text:
            continue
        content = _section_blocks(text, rule.layout, entry_sentinel)
        if not content:
            continue
        blocks.append(StyleBlock.heading(rule.label))
        blocks.extend(content)
    return blocks


def _section_blocks(text: str, layout: SectionLayout, sentinel: str) -> list[StyleBlock]:
    if layout is SectionLayout.ENTRIES:
        blocks = []
        for entry in split_entries(text, sentinel):
            if entry.header:
                blocks.append(StyleBlock.entry_header(entry.header))
            blocks.extend(StyleBlock.bullet(d) for d in entry.details)
        return blocks

    lines = split_lines(text)
    if layout is SectionLayout.PIPE:
        return [StyleBlock.paragraph(" | ".join(lines))]
    if layout is SectionLayout.BULLETS:
        return [StyleBlock.bullet(b) for b in map(strip_bullet, lines) if b]
    return [StyleBlock.paragraph(line) for line in lines]
