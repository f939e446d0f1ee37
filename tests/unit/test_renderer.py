"""
Unit tests for the document renderer.

Uses a fixed-pitch metric (2mm per character) on default A4 geometry:
20mm margins, 170mm printable width.
"""

from collections import Counter

import pytest

from folio.contexts.layout.blocks import (
    Blank,
    Bullet,
    ContactLine,
    Headline,
    Name,
    Paragraph,
    SectionHeader,
    SubsectionHeader,
)
from folio.contexts.layout.document import HorizontalRule, LinkRegion, TextRun
from folio.contexts.layout.exceptions import MeasurementError
from folio.contexts.layout.inline_styles import strip_delimiters
from folio.contexts.layout.normalizer import normalize_resume
from folio.contexts.layout.renderer import DocumentRenderer, output_filename
from folio.contexts.layout.styles import LayoutSettings, points_to_mm
from folio.contexts.rendering.converter import convert_resume


def _runs(document, text):
    return [run for run in document.text_runs if run.text == text]


@pytest.fixture
def renderer(metric):
    return DocumentRenderer(metric)


@pytest.mark.unit
class TestOutputFilename:
    """Tests for output_filename()."""

    def test_derived_from_original(self):
        assert output_filename("jane_resume.docx") == "jane_resume_modified.pdf"
        assert output_filename("resume.v2.txt") == "resume.v2_modified.pdf"

    def test_default(self):
        assert output_filename(None) == "optimized-faang-resume.pdf"
        assert output_filename("") == "optimized-faang-resume.pdf"

    def test_document_carries_filename(self, renderer):
        document = renderer.render([Name("Jane")], filename="jane.pdf")
        assert document.filename == "jane_modified.pdf"


@pytest.mark.unit
class TestBlockPlacement:
    """Tests for per-block styling and positioning."""

    def test_name_centered_bold(self, renderer):
        document = renderer.render([Name("Jane")])

        (run,) = document.text_runs
        assert run.bold
        assert run.font_size == 22
        assert run.x == pytest.approx(20 + (170 - 8) / 2)
        assert run.y == pytest.approx(20 + 10 - points_to_mm(22) * 0.22)

    def test_headline_bold_centered(self, renderer):
        document = renderer.render([Name("Jane"), Headline("Data Analyst")])

        run = _runs(document, "Data Analyst")[0]
        assert run.bold
        assert run.font_size == 11
        assert run.x == pytest.approx(20 + (170 - 24) / 2)

    def test_section_header_rule(self, renderer):
        document = renderer.render([SectionHeader("SKILLS")])

        (run,) = document.text_runs
        (rule,) = document.rules
        assert run.bold and run.x == 20
        assert (rule.x_start, rule.x_end, rule.thickness) == (20, 190, 0.5)
        assert rule.y > run.y

    def test_subsection_right_aligned(self, renderer):
        document = renderer.render([SubsectionHeader("Engineer", "2020")])

        left = _runs(document, "Engineer")[0]
        right = _runs(document, "2020")[0]
        assert left.x == 20
        assert right.x == pytest.approx(190 - 8)
        assert right.y == left.y
        assert left.bold and right.bold

    def test_subsection_left_wraps_beside_right(self, renderer):
        """Left part wraps in the width left over by the right part."""
        left_text = " ".join(["word"] * 30)
        document = renderer.render([SubsectionHeader(left_text, "2019 - 2024")])

        right = _runs(document, "2019 - 2024")[0]
        left_runs = [run for run in document.text_runs if run is not right]
        first_line = [run for run in left_runs if run.y == right.y]
        assert max(run.x + run.width for run in first_line) <= right.x - 3
        assert len({run.y for run in left_runs}) > 1

    def test_bullet_glyph_and_indent(self, renderer):
        document = renderer.render([Bullet("SQL")])

        glyph = _runs(document, "•")[0]
        text = _runs(document, "SQL")[0]
        assert glyph.x == 20
        assert text.x == 25
        assert glyph.y == text.y
        assert text.font_size == 9.5

    def test_bold_paragraph(self, renderer):
        document = renderer.render([Paragraph("Key Results", bold=True)])
        assert all(run.bold for run in document.text_runs)

    def test_inline_bold(self, renderer):
        document = renderer.render([Paragraph("Built **FOLIO** fast")])

        assert _runs(document, "FOLIO")[0].bold
        assert not _runs(document, "Built ")[0].bold

    def test_blank_gap(self, renderer):
        document = renderer.render([Paragraph("one"), Blank(), Paragraph("two")])

        one = _runs(document, "one")[0]
        two = _runs(document, "two")[0]
        assert two.y - one.y == pytest.approx(5 + 2)


@pytest.mark.unit
class TestContactLine:
    """Tests for contact line parts and links."""

    def test_links(self, renderer):
        document = renderer.render([ContactLine("jane@x.com | linkedin.com/in/jane")])

        assert [link.url for link in document.links] == [
            "mailto:jane@x.com",
            "https://linkedin.com/in/jane",
        ]

    def test_centered_parts(self, renderer):
        document = renderer.render([ContactLine("jane@x.com | linkedin.com/in/jane")])

        email_link, profile_link = document.links
        # 20mm + 6mm separator + 40mm = 66mm row, centered in 170mm
        assert email_link.x == pytest.approx(20 + (170 - 66) / 2)
        assert email_link.width == 20
        assert profile_link.x == pytest.approx(email_link.x + 20 + 6)
        assert _runs(document, " | ")

    def test_wraps_onto_centered_lines(self, renderer):
        parts = [f"part{i}-" + "x" * 24 for i in range(3)]
        document = renderer.render([ContactLine(" | ".join(parts))])

        rows = sorted({run.y for run in document.text_runs})
        assert len(rows) == 2
        assert not document.links


@pytest.mark.unit
class TestPagination:
    """Tests for page breaks during rendering."""

    def test_long_document_paginates(self, renderer, long_resume):
        document = renderer.render(normalize_resume(long_resume).blocks)

        assert document.page_count >= 2
        assert [page.index for page in document.pages] == list(range(1, document.page_count + 1))
        for run in document.text_runs:
            assert run.y <= 297 - 20
            assert 1 <= run.page <= document.page_count

    def test_primitives_in_page_order(self, renderer, long_resume):
        document = renderer.render(normalize_resume(long_resume).blocks)

        pages = [primitive.page for primitive in document.primitives]
        assert pages == sorted(pages)

    def test_section_header_kept_with_next_line(self, renderer):
        """A header that would be stranded at the page bottom moves to the next page."""
        filler = [Paragraph(f"line {i}") for i in range(51)]
        document = renderer.render(filler + [SectionHeader("SKILLS"), Bullet("SQL")])

        assert _runs(document, "SKILLS")[0].page == 2
        assert document.rules[0].page == 2
        assert _runs(document, "SQL")[0].page == 2

    def test_settings_margin(self, metric):
        settings = LayoutSettings.from_dict({"geometry": {"margin": 15.0}})
        document = DocumentRenderer(metric, settings).render([Paragraph("hello")])

        assert document.text_runs[0].x == 15


@pytest.mark.unit
class TestErrors:
    """Tests for error propagation."""

    def test_measurement_error_propagates(self):
        def broken(text, bold, font_size):
            raise RuntimeError("font missing")

        with pytest.raises(MeasurementError):
            DocumentRenderer(broken).render([Paragraph("hello")])

    def test_unknown_block(self, renderer):
        with pytest.raises(TypeError):
            renderer.render([object()])

    def test_primitive_types(self, renderer, scenario_resume):
        document = renderer.render(normalize_resume(scenario_resume).blocks)
        assert {type(p) for p in document.primitives} == {TextRun, HorizontalRule, LinkRegion}


VARIED_RESUME = (
    "# Jane Doe\n"
    "Data Analyst\n"
    "jane@x.com | linkedin.com/in/jane | github.com/jane\n"
    "## Professional Summary\n"
    "Analyst who shipped **FOLIO** and other tools across three continents and many teams.\n"
    "## Experience\n"
    "### Senior Analyst | **2020 - 2024**\n"
    "- Built dashboards used by 40 teams, cutting report latency by half\n"
    "- Executive summary decks for the board\n"
    "**Key Achievements**\n"
    "Reduced cloud spend by 30%\n"
    "## LANGUAGES\n"
    "Spanish\n"
    "## Education\n"
    "### BSc Statistics | 2016"
)


def _visible_chars(text):
    return Counter(char for char in text if not char.isspace())


@pytest.mark.unit
class TestTextConservation:
    """Tests that the normalize -> render pipeline draws every kept character."""

    def test_empty_input_gives_one_blank_page(self, metric):
        result = convert_resume("", measure_fn=metric)

        assert result.blocks == []
        assert result.page_count == 1
        assert result.document.primitives == ()

    def test_all_block_text_is_drawn(self, metric):
        result = convert_resume(VARIED_RESUME, measure_fn=metric)
        settings = LayoutSettings()

        expected = Counter()
        for block in result.blocks:
            if isinstance(block, ContactLine):
                expected += _visible_chars("".join(block.parts))
            else:
                expected += _visible_chars(strip_delimiters(block.text_content))

        decorations = {settings.bullet_glyph, settings.contact_separator.strip()}
        drawn = Counter()
        for run in result.document.text_runs:
            if run.text.strip() not in decorations:
                drawn += _visible_chars(run.text)

        assert drawn == expected
        assert "Executive summary decks for the board" in [
            block.text_content for block in result.blocks
        ]
        assert "Spanish" not in "".join(run.text for run in result.document.text_runs)
