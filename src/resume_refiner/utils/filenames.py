"""Filesystem-safe names for generated resumes."""

from __future__ import annotations

import re


def safe_part(text: str, max_length: int = 30) -> str:
    """Reduce ``text`` to ``[A-Za-z0-9_]``, collapsing runs of underscores."""
    part = re.sub(r"[^A-Za-z0-9]", "_", text)
    part = re.sub(r"_+", "_", part)
    return part[:max_length].strip("_")


def refined_docx_name(jd_text: str) -> str:
    """Derive ``resume_<company>_<title>.docx`` from the first line of a JD.

    The first word of the first line is taken as the company, the rest of
    the line as the job title.
    """
    first_line = jd_text.strip().split("\n")[0] if jd_text.strip() else ""
    words = first_line.split(" ")
    company = safe_part(words[0], 25)
    title = safe_part(" ".join(words[1:]), 35)
    return "_".join(p for p in ("resume", company, title) if p) + ".docx"


def tailored_markdown_name(company: str, job_title: str) -> str:
    """``resume_<Company>_<Title>.md`` for the tailor pass."""
    safe_company = re.sub(r"[^a-z0-9]+", "_", company, flags=re.IGNORECASE)
    safe_title = re.sub(r"[^a-z0-9]+", "_", job_title, flags=re.IGNORECASE)
    return f"resume_{safe_company}_{safe_title}.md"


def job_folder_name(company: str, job_title: str) -> str:
    """``<company-slug>__<title-slug>`` for the two-pass pipeline's work folder."""
    safe_company = re.sub(r"[^a-z0-9]+", "-", company.lower())
    safe_title = re.sub(r"[^a-z0-9]+", "-", job_title.lower())
    return f"{safe_company}__{safe_title}"
