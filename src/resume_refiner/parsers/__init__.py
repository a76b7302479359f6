"""Tag-delimited section parsing."""

from resume_refiner.parsers.entries import split_entries, strip_bullet
from resume_refiner.parsers.tags import parse_sections, render_sections

__all__ = ["parse_sections", "render_sections", "split_entries", "strip_bullet"]
