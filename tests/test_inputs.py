"""Tests for job description and resume loading."""

from pathlib import Path

import pytest
from docx import Document

from resume_refiner.parsers.inputs import clean_text, load_job_description, load_resume


class TestCleanText:
    def test_collapses_whitespace(self):
        result = clean_text("  Hello   World  \n\n\n\nLine 2  ")
        assert "   " not in result
        assert "\n\n\n" not in result

    def test_normalizes_bullets(self):
        assert clean_text("● one\n• two") == "- one\n- two"

    def test_strips_invisible_characters(self):
        assert clean_text("\ufeffHel\u200blo") == "Hello"


class TestLoaders:
    def test_load_job_description(self, tmp_path):
        jd_file = tmp_path / "jd.txt"
        jd_file.write_text("Acme Platform Lead\n\nRequirements: Python", encoding="utf-8")
        result = load_job_description(jd_file)
        assert result.startswith("Acme Platform Lead")
        assert "Python" in result

    def test_load_md_resume(self, tmp_path):
        md_file = tmp_path / "resume.md"
        md_file.write_text("# Jane Doe\n## Experience", encoding="utf-8")
        assert "Jane Doe" in load_resume(md_file)

    def test_load_docx_resume(self, tmp_path):
        path = tmp_path / "resume.docx"
        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("")
        doc.add_paragraph("Company: Acme")
        doc.save(str(path))
        assert load_resume(path) == "Jane Doe\nCompany: Acme"

    def test_unsupported_format(self, tmp_path):
        bad_file = tmp_path / "resume.xyz"
        bad_file.write_text("test")
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_resume(Path(bad_file))
