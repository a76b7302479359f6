"""Load job descriptions and base resumes from disk as clean plain text."""

from __future__ import annotations

import re
from pathlib import Path


def clean_text(text: str) -> str:
    """Normalize whitespace and bullet glyphs in pasted or exported text."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)

    # Normalize bullet points (●, •, ◦, ◆, ■, ▪, ★, ○ → -)
    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)

    lines = [re.sub(r"[ \t]{2,}", " ", line).rstrip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def load_job_description(file_path: str | Path) -> str:
    """Load a job description text file."""
    return clean_text(Path(file_path).read_text(encoding="utf-8"))


def load_resume(file_path: str | Path) -> str:
    """Load a resume (PDF, DOCX, TXT, MD) as plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return clean_text(_parse_pdf(path))
    if suffix in (".docx", ".doc"):
        return clean_text(_parse_docx(path))
    if suffix in (".txt", ".md", ""):
        return clean_text(path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported file format: {path.suffix}")


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    text = [page.get_text() for page in doc]
    doc.close()
    return "\n".join(text)


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
