"""DOCX output renderer for assembled style blocks."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from docx import Document
from docx.shared import Pt

from resume_refiner.config import CandidateConfig, DocumentConfig
from resume_refiner.models.document import BlockKind, StyleBlock


def render_docx(
    blocks: Sequence[StyleBlock],
    output_path: str | Path,
    *,
    style: DocumentConfig | None = None,
    candidate: CandidateConfig | None = None,
) -> Path:
    """Lay out ``blocks`` into a fresh .docx at ``output_path``."""
    style = style or DocumentConfig()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()

    # Set default font
    normal = doc.styles["Normal"]
    normal.font.name = style.font
    normal.font.size = Pt(style.body_size)

    if candidate is not None:
        _render_candidate_header(doc, candidate, style)

    for block in blocks:
        _render_block(doc, block, style)

    doc.save(str(output_path))
    return output_path


def _render_candidate_header(doc: Document, candidate: CandidateConfig, style: DocumentConfig) -> None:
    if candidate.name:
        p = doc.add_paragraph()
        run = p.add_run(candidate.name)
        run.bold = True
        run.font.name = style.font
        run.font.size = Pt(style.name_size)
        p.paragraph_format.space_after = Pt(2)
    for line in candidate.contact_lines:
        p = doc.add_paragraph()
        p.add_run(line).font.name = style.font
        p.paragraph_format.space_after = Pt(2)


def _render_block(doc: Document, block: StyleBlock, style: DocumentConfig) -> None:
    if block.kind is BlockKind.HEADING:
        p = doc.add_paragraph()
        run = p.add_run(block.text)
        run.bold = True
        run.font.all_caps = True
        run.font.name = style.font
        run.font.size = Pt(style.heading_size)
        p.paragraph_format.space_before = Pt(10)
        p.paragraph_format.space_after = Pt(5)
    elif block.kind is BlockKind.ENTRY_HEADER:
        p = doc.add_paragraph()
        run = p.add_run(block.text)
        run.bold = True
        run.font.name = style.font
        p.paragraph_format.space_before = Pt(6)
    elif block.kind is BlockKind.BULLET:
        p = doc.add_paragraph(style="List Bullet")
        p.add_run(block.text).font.name = style.font
        p.paragraph_format.space_after = Pt(3)
    else:
        p = doc.add_paragraph()
        p.add_run(block.text).font.name = style.font
        p.paragraph_format.space_after = Pt(4)
