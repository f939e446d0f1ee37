"""Unit tests for the layout diagnostics hierarchy and feedback reports."""

import pytest

from folio.contexts.layout.blocks import Bullet, Name, SectionHeader
from folio.contexts.layout.renderer import DocumentRenderer
from folio.contexts.rendering.layout_diagnostics import (
    DocumentDiagnostics,
    IssueTemplates,
    PageDiagnostics,
    SectionDiagnostics,
    intended_section_pages,
)
from folio.contexts.rendering.validator import generate_feedback_report
from folio.utils.pdf_processing import cluster_by_y_tolerance, is_text_font


def _tree(*sections, actual_pages=1, intended_pages=1, name_found=True):
    page = PageDiagnostics(intended_page_number=1, name_found=name_found)
    page.components.extend(sections)
    return DocumentDiagnostics(
        components=[page],
        actual_page_count=actual_pages,
        intended_page_count=intended_pages,
    )


@pytest.mark.unit
class TestDiagnostics:
    """Tests for issue generation in the diagnostics tree."""

    def test_valid_tree(self):
        diagnostics = _tree(SectionDiagnostics(section_name="SKILLS", intended_page=1, actual_page=1))

        assert diagnostics.is_valid
        assert diagnostics.get_inherited_issues() == []

    def test_displaced_section(self):
        section = SectionDiagnostics(section_name="SKILLS", intended_page=1, actual_page=2)
        diagnostics = _tree(section, actual_pages=2, intended_pages=2)

        assert section.displacement == 1
        assert diagnostics.get_inherited_issues() == [
            IssueTemplates.SECTION_DISPLACED.format(section="SKILLS", actual=2, intended=1)
        ]

    def test_missing_section_and_name(self):
        section = SectionDiagnostics(section_name="EDUCATION", intended_page=1)
        diagnostics = _tree(section, name_found=False)

        assert not section.found
        assert diagnostics.get_inherited_issues() == [
            IssueTemplates.NAME_NOT_FOUND,
            IssueTemplates.SECTION_NOT_FOUND.format(section="EDUCATION", intended=1),
        ]

    def test_page_count_issue_first(self):
        diagnostics = _tree(actual_pages=3, intended_pages=2)
        assert diagnostics.get_inherited_issues()[0] == "Page count mismatch: 3 (expected 2)"

    def test_feedback_report(self):
        diagnostics = _tree(
            SectionDiagnostics(section_name="SKILLS", intended_page=1, actual_page=1),
            SectionDiagnostics(section_name="EDUCATION", intended_page=1),
            SectionDiagnostics(section_name="PROJECTS", intended_page=1, actual_page=2),
            actual_pages=2,
        )

        report = generate_feedback_report(diagnostics)

        assert "issue:section_missing::section:EDUCATION::page:1" in report
        assert "issue:section_displaced::section:PROJECTS::page:1::actual_page:2" in report
        assert "issue:page_count::actual:2::intended:1" in report
        assert "SKILLS" not in report
        assert "#3" in report


@pytest.mark.unit
class TestIntendedPages:
    """Tests for pairing section headers with laid-out pages."""

    def test_pages_from_rules(self, metric):
        blocks = [Name("Jane"), SectionHeader("SKILLS")]
        blocks += [Bullet(f"item {i}") for i in range(60)]
        blocks += [SectionHeader("EDUCATION")]
        document = DocumentRenderer(metric).render(blocks)

        assert intended_section_pages(blocks, document) == [("SKILLS", 1), ("EDUCATION", 2)]

    def test_mismatched_blocks(self, metric):
        document = DocumentRenderer(metric).render([SectionHeader("SKILLS")])

        with pytest.raises(ValueError):
            intended_section_pages([SectionHeader("SKILLS"), SectionHeader("EDUCATION")], document)


@pytest.mark.unit
class TestPdfProcessingHelpers:
    """Tests for PDF text helpers that do not need a PDF."""

    def test_is_text_font(self):
        assert is_text_font("ABCDEE+Helvetica-Bold", ["Helvetica"])
        assert not is_text_font("ZapfDingbats", ["Helvetica"])

    def test_cluster_by_y_tolerance(self):
        chars = [{"top": 10.0}, {"top": 11.5}, {"top": 30.0}]
        assert [len(line) for line in cluster_by_y_tolerance(chars, tolerance=3.0)] == [2, 1]
