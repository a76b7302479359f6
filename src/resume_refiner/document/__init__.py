"""Style-block assembly and DOCX rendering."""

from resume_refiner.document.assembler import (
    CANONICAL_SECTIONS,
    SectionLayout,
    SectionRule,
    assemble,
)

__all__ = ["CANONICAL_SECTIONS", "SectionLayout", "SectionRule", "assemble"]
