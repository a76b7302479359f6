"""Prompt construction for the tailor and refine passes."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

SYSTEM_PROMPT_PATH = Path("templates") / "system_prompt.txt"

DEFAULT_SYSTEM_PROMPT = """\
You are an executive resume writer. Rewrite the candidate's resume for the
target job using only facts present in the base resume. Never invent
employers, dates, titles, metrics or certifications."""

TAGGED_FORMAT_INSTRUCTIONS = """\
Return the resume as plain text split into tagged sections. Wrap each section
as [NAME] ... [/NAME] on its own lines, using only these section names:
{tags}

Inside [EXPERIENCE] start every job with a line beginning "{sentinel}"
followed by its bullet lines, each starting with "- ".
Put one skill group per line in [CORE_SKILLS]. Do not use markdown."""


def load_system_prompt(path: str | Path | None = None) -> str:
    """Read the system prompt file, or fall back to the built-in prompt."""
    p = Path(path) if path is not None else SYSTEM_PROMPT_PATH
    if p.exists():
        return p.read_text(encoding="utf-8").strip()
    if path is not None:
        raise FileNotFoundError(f"System prompt not found: {p}")
    return DEFAULT_SYSTEM_PROMPT


def build_tailor_prompt(
    company: str,
    job_title: str,
    job_description: str,
    base_resume: str,
    extra: str = "",
    *,
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
) -> str:
    """Prompt for the markdown tailor pass."""
    return f"""{system_prompt}

COMPANY: {company}
TARGET JOB TITLE: {job_title}

JOB DESCRIPTION:
{job_description}

EXTRA INSTRUCTIONS FROM CANDIDATE (OPTIONAL):
{extra or "(none)"}

BASE RESUME:
{base_resume}""".strip()


def build_refine_prompt(
    job_description: str,
    base_resume: str,
    tags: Iterable[str],
    sentinel: str,
    *,
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
) -> str:
    """Prompt for the tagged refine pass."""
    format_rules = TAGGED_FORMAT_INSTRUCTIONS.format(
        tags=", ".join(tags),
        sentinel=sentinel,
    )
    return f"""{system_prompt}

{format_rules}

JOB_DESCRIPTION:
{job_description}

BASE_RESUME:
{base_resume}

OUTPUT ONLY THE TAGGED RESUME."""
