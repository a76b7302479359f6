"""Tests for style-block assembly."""

from __future__ import annotations

from resume_refiner.document.assembler import (
    CANONICAL_SECTIONS,
    SECTION_TAGS,
    SectionLayout,
    SectionRule,
    assemble,
)
from resume_refiner.models.document import BlockKind, StyleBlock
from resume_refiner.parsers.tags import parse_sections

H = StyleBlock.heading
P = StyleBlock.paragraph
B = StyleBlock.bullet
E = StyleBlock.entry_header


class TestAssemble:
    def test_empty_mapping(self):
        assert assemble({}) == []

    def test_summary_is_prose(self):
        blocks = assemble({"SUMMARY": "Line one\n\nLine two"})
        assert blocks == [H("EXECUTIVE SUMMARY"), P("Line one"), P("Line two")]

    def test_core_skills_joined_with_pipes(self):
        blocks = assemble({"CORE_SKILLS": "Cloud\n\nKubernetes\nFinOps"})
        assert blocks == [H("CORE STRENGTHS"), P("Cloud | Kubernetes | FinOps")]

    def test_experience_entries(self):
        text = "Company: Acme\n- Did X\n\nCompany: Globex\n- Did Y\n- Did Z"
        assert assemble({"EXPERIENCE": text}) == [
            H("EXPERIENCE"),
            E("Company: Acme"),
            B("Did X"),
            E("Company: Globex"),
            B("Did Y"),
            B("Did Z"),
        ]

    def test_experience_without_sentinel_still_renders(self):
        blocks = assemble({"EXPERIENCE": "Led a team\n- Shipped things"})
        assert blocks == [H("EXPERIENCE"), B("Led a team"), B("Shipped things")]

    def test_custom_sentinel(self):
        blocks = assemble({"EXPERIENCE": "Role: CTO\n- X"}, entry_sentinel="Role:")
        assert blocks == [H("EXPERIENCE"), E("Role: CTO"), B("X")]

    def test_bullet_sections_strip_markers(self):
        blocks = assemble({"CERTIFICATIONS": "- CKA\n-- AWS SA Pro\n\nPMP"})
        assert blocks == [H("CERTIFICATIONS"), B("CKA"), B("AWS SA Pro"), B("PMP")]

    def test_technical_skills_prose_keeps_dashes(self):
        blocks = assemble({"TECHNICAL_SKILLS": "- Terraform, Ansible"})
        assert blocks == [H("TECHNICAL LEADERSHIP SKILLS"), P("- Terraform, Ansible")]

    def test_canonical_order_not_source_order(self):
        blocks = assemble({"EDUCATION": "BSc", "SUMMARY": "Hi", "PROJECTS": "- Tool"})
        headings = [b.text for b in blocks if b.kind is BlockKind.HEADING]
        assert headings == ["EXECUTIVE SUMMARY", "PORTFOLIO PROJECTS", "EDUCATION"]

    def test_absent_and_blank_sections_have_no_heading(self):
        blocks = assemble({"SUMMARY": "   ", "EDUCATION": "BSc"})
        assert blocks == [H("EDUCATION"), B("BSc")]

    def test_marker_only_sections_have_no_heading(self):
        blocks = assemble({"EXPERIENCE": "---", "CERTIFICATIONS": "-", "EDUCATION": "BSc"})
        assert blocks == [H("EDUCATION"), B("BSc")]

    def test_no_heading_is_ever_followed_by_nothing(self):
        blocks = assemble({"PROJECTS": "- \n--", "SUMMARY": "Hi"})
        assert blocks == [H("EXECUTIVE SUMMARY"), P("Hi")]

    def test_lowercase_keys_accepted(self):
        assert assemble({"summary": "Hi"}) == [H("EXECUTIVE SUMMARY"), P("Hi")]

    def test_unknown_sections_ignored(self):
        assert assemble({"HOBBIES": "Chess"}) == []

    def test_no_blank_blocks(self, sample_tagged_text):
        blocks = assemble(parse_sections(sample_tagged_text, SECTION_TAGS))
        assert all(b.text.strip() for b in blocks)

    def test_full_document(self, sample_tagged_text):
        blocks = assemble(parse_sections(sample_tagged_text, SECTION_TAGS))
        assert blocks == [
            H("EXECUTIVE SUMMARY"),
            P("Platform engineering leader with 15 years in cloud infrastructure."),
            P("Built SRE practices across three business units."),
            H("CORE STRENGTHS"),
            P("Cloud Strategy | Kubernetes | FinOps"),
            H("EXPERIENCE"),
            E("Company: Acme Corp | Director of Platform | 2019 - Present"),
            B("Led 40-person platform organisation"),
            B("Cut cloud spend 30%"),
            E("Company: Globex | Senior SRE Manager | 2014 - 2019"),
            B("Introduced SLO-based alerting"),
            H("CERTIFICATIONS"),
            B("AWS Solutions Architect Professional"),
            B("CKA"),
            H("EDUCATION"),
            B("B.Tech Computer Science, IIT Delhi"),
        ]

    def test_idempotent(self, sample_tagged_text):
        sections = parse_sections(sample_tagged_text, SECTION_TAGS)
        assert assemble(sections) == assemble(sections)

    def test_custom_rules(self):
        rules = (SectionRule("ACHIEVEMENTS", "WINS", SectionLayout.PROSE),)
        assert assemble({"ACHIEVEMENTS": "Award"}, rules=rules) == [H("WINS"), P("Award")]


class TestCanonicalSections:
    def test_all_known_tags_have_rules(self):
        assert set(SECTION_TAGS) == {
            "SUMMARY",
            "CORE_SKILLS",
            "EXPERIENCE",
            "PROJECTS",
            "TECHNICAL_SKILLS",
            "CERTIFICATIONS",
            "EDUCATION",
            "CONTACT",
            "ACHIEVEMENTS",
        }

    def test_only_experience_uses_entries(self):
        entry_rules = [r.tag for r in CANONICAL_SECTIONS if r.layout is SectionLayout.ENTRIES]
        assert entry_rules == ["EXPERIENCE"]
