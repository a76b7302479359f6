"""Tests for sentinel-based entry splitting."""

from __future__ import annotations

import pytest

from resume_refiner.models.document import Entry
from resume_refiner.parsers.entries import split_entries, strip_bullet


class TestSplitEntries:
    def test_two_entries(self):
        text = "Company: Acme\n- Did X\n\nCompany: Globex\n- Did Y\n- Did Z"
        assert split_entries(text, "Company:") == [
            Entry(header="Company: Acme", details=["Did X"]),
            Entry(header="Company: Globex", details=["Did Y", "Did Z"]),
        ]

    def test_no_sentinel_gives_single_headerless_entry(self):
        text = "Led platform team\n\n- Cut costs 30%\n-- Hired 12 engineers"
        assert split_entries(text, "Company:") == [
            Entry(header="", details=["Led platform team", "Cut costs 30%", "Hired 12 engineers"]),
        ]

    def test_sentinel_line_becomes_header_verbatim(self):
        entries = split_entries("  Company: Acme | CTO | 2020  \nDid things", "Company:")
        assert entries[0].header == "Company: Acme | CTO | 2020"

    def test_entry_with_no_details(self):
        entries = split_entries("Company: Acme\nCompany: Globex\n- Y", "Company:")
        assert entries == [
            Entry(header="Company: Acme", details=[]),
            Entry(header="Company: Globex", details=["Y"]),
        ]

    def test_preamble_before_first_sentinel(self):
        entries = split_entries("Selected roles:\nCompany: Acme\n- X", "Company:")
        assert entries == [
            Entry(header="", details=["Selected roles:"]),
            Entry(header="Company: Acme", details=["X"]),
        ]

    def test_blank_preamble_is_dropped(self):
        entries = split_entries("\n\n   \nCompany: Acme\n- X", "Company:")
        assert [e.header for e in entries] == ["Company: Acme"]

    def test_sentinel_is_case_sensitive(self):
        entries = split_entries("company: acme\n- X", "Company:")
        assert entries == [Entry(header="", details=["company: acme", "X"])]

    def test_empty_text(self):
        assert split_entries("", "Company:") == []

    def test_marker_only_section_gives_single_empty_entry(self):
        assert split_entries("---\n-", "Company:") == [Entry(header="", details=[])]

    def test_whitespace_only_text(self):
        assert split_entries("  \n\t\n", "Company:") == []

    def test_bare_dash_lines_dropped(self):
        entries = split_entries("Company: A\n-\n- kept", "Company:")
        assert entries[0].details == ["kept"]

    def test_empty_sentinel_rejected(self):
        with pytest.raises(ValueError):
            split_entries("x", "")


class TestStripBullet:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [("- item", "item"), ("--- item", "item"), ("  -item  ", "item"), ("plain", "plain"), ("-", "")],
    )
    def test_strip_bullet(self, line, expected):
        assert strip_bullet(line) == expected
