"""
Unit tests for the line classifier and section normalizer.

Tests rule ordering in folio.contexts.layout.classifier and the canonical
block sequence produced by folio.contexts.layout.normalizer.
"""

import pytest

from folio.contexts.layout.blocks import (
    Blank,
    Bullet,
    ClassifierState,
    ContactLine,
    Headline,
    Name,
    Paragraph,
    SectionHeader,
    SubsectionHeader,
)
from folio.contexts.layout.classifier import classify, matching_rule
from folio.contexts.layout.normalizer import (
    SectionNormalizer,
    bold_inline_labels,
    normalize_resume,
    normalize_unicode,
    strip_linkedin_label,
    to_markdown,
)
from folio.contexts.layout.section_patterns import detect_link, sanitize_contact_line

# State after the name line and the first section header
IN_BODY = ClassifierState(name_emitted=True, first_section_seen=True)
AFTER_NAME = ClassifierState(name_emitted=True)


@pytest.mark.unit
class TestScenario:
    """Tests for a complete short resume."""

    def test_block_sequence(self, scenario_resume):
        """Blocks come out in order with the LANGUAGES section removed."""
        blocks = normalize_resume(scenario_resume).blocks

        assert [type(b) for b in blocks] == [
            Name,
            Headline,
            ContactLine,
            SectionHeader,
            Paragraph,
            SectionHeader,
            Bullet,
            Bullet,
        ]
        assert blocks[0] == Name("Jane Doe")
        assert blocks[1] == Headline("Data Analyst")
        assert blocks[3] == SectionHeader("SUMMARY")
        assert blocks[4] == Paragraph("Result-driven analyst.")
        assert blocks[5] == SectionHeader("SKILLS")
        assert blocks[6:] == [Bullet("SQL"), Bullet("Python")]

    def test_contact_links(self, scenario_resume):
        """Contact line yields one mailto and one https link."""
        contact = normalize_resume(scenario_resume).blocks[2]

        links = [detect_link(part) for part in contact.parts]
        assert links == ["mailto:jane@x.com", "https://linkedin.com/in/jane"]

    def test_suppressed_section_has_no_content(self, scenario_resume):
        """Nothing from the LANGUAGES section survives, not even spacing."""
        result = normalize_resume(scenario_resume)

        assert all("Spanish" not in b.text_content for b in result.blocks)
        assert all("LANGUAGES" not in b.text_content for b in result.blocks)
        assert not any(isinstance(b, Blank) for b in result.blocks)
        assert result.discarded_lines == 2

    def test_idempotent(self, scenario_resume):
        """Normalizing the markdown form again yields the same blocks."""
        blocks = normalize_resume(scenario_resume).blocks
        again = normalize_resume(to_markdown(blocks)).blocks

        assert again == blocks


@pytest.mark.unit
class TestClassifyRules:
    """Tests for individual classification rules."""

    def test_bullet_without_space(self):
        """A missing space after the glyph is tolerated."""
        block, _ = classify("-Python", IN_BODY)
        assert block == Bullet("Python")

    @pytest.mark.parametrize("line", ["- SQL", "* SQL", "• SQL", "  -   SQL  "])
    def test_bullet_glyphs(self, line):
        """All bullet glyphs produce the same bullet."""
        block, _ = classify(line, IN_BODY)
        assert block == Bullet("SQL")

    def test_bold_line_is_not_bullet(self):
        """A line wrapped in ** becomes a bold paragraph, not a bullet."""
        block, _ = classify("**Key Achievements**", IN_BODY)
        assert block == Paragraph("Key Achievements", bold=True)

    def test_lone_dash_is_paragraph(self):
        block, _ = classify("-", IN_BODY)
        assert block == Paragraph("-")

    def test_contact_label_dropped(self):
        """'Contact Information' labels are discarded without changing state."""
        block, state = classify("CONTACT INFORMATION:", AFTER_NAME)
        assert block == Blank(gap=False)
        assert state == AFTER_NAME

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("PROFESSIONAL SUMMARY", "SUMMARY"),
            ("**Career Objective:**", "SUMMARY"),
            ("## profile summary", "SUMMARY"),
            ("Technical  Skills:", "TECHNICAL SKILLS"),
            ("## Volunteering", "VOLUNTEERING"),
            ("EDUCATION", "EDUCATION"),
        ],
    )
    def test_section_headers(self, line, expected):
        """Headers are cleaned, uppercased and synonyms mapped to SUMMARY."""
        block, state = classify(line, AFTER_NAME)
        assert block == SectionHeader(expected)
        assert state.first_section_seen

    def test_section_header_clears_skipping(self):
        skipping = ClassifierState(name_emitted=True, first_section_seen=True, skipping_section=True)

        block, state = classify("## Skills", skipping)

        assert block == SectionHeader("SKILLS")
        assert not state.skipping_section

    def test_lines_discarded_while_skipping(self):
        skipping = ClassifierState(name_emitted=True, first_section_seen=True, skipping_section=True)

        assert classify("Spanish (native)", skipping)[0] == Blank(gap=False)
        assert classify("", skipping)[0] == Blank(gap=False)
        assert classify("", IN_BODY)[0] == Blank()

    def test_summary_fallback(self):
        """Short stray lines mentioning SUMMARY become the SUMMARY header."""
        block, _ = classify("Summary of Qualifications", AFTER_NAME)
        assert block == SectionHeader("SUMMARY")

    @pytest.mark.parametrize(
        "line",
        [
            "Professional Summary Of Key Skills",
            "**Executive Summary**",
            "PROFESSIONAL SUMMARY:",
            "Summary for Hiring Managers",
        ],
    )
    def test_summary_fallback_accepts_headings(self, line):
        assert classify(line, IN_BODY)[0] == SectionHeader("SUMMARY")

    def test_summary_fallback_ignores_pipes_and_prose(self):
        assert classify("Summary | 2020", IN_BODY)[0] == Paragraph("Summary | 2020")
        prose = "Wrote a summary of all quarterly results"
        assert classify(prose, IN_BODY)[0] == Paragraph(prose)

    def test_summary_fallback_ignores_body_lines(self):
        """Bullets, subsections and punctuated lines keep their text."""
        assert classify("- Executive summary decks", IN_BODY)[0] == Bullet("Executive summary decks")
        assert classify("- Executive Summary", IN_BODY)[0] == Bullet("Executive Summary")
        assert classify("### Summary Analyst | 2020", IN_BODY)[0] == SubsectionHeader(
            "Summary Analyst", "2020"
        )
        assert classify("Summary statistics, SQL", IN_BODY)[0] == Paragraph(
            "Summary statistics, SQL"
        )
        assert classify("Objective Analysis Tools.", IN_BODY)[0] == Paragraph(
            "Objective Analysis Tools."
        )

    def test_summary_words_in_body_do_not_open_sections(self):
        """A body line mentioning summary stays inside its section."""
        experience = normalize_resume(
            "# Jane\n## Experience\n### Analyst | 2020\n- Executive summary decks\n- Built SQL"
        )
        assert experience.blocks == [
            Name("Jane"),
            SectionHeader("EXPERIENCE"),
            SubsectionHeader("Analyst", "2020"),
            Bullet("Executive summary decks"),
            Bullet("Built SQL"),
        ]

        skills = normalize_resume("# Jane\n## Skills\nSummary statistics, SQL\n## Education")
        assert skills.blocks == [
            Name("Jane"),
            SectionHeader("SKILLS"),
            Paragraph("Summary statistics, SQL"),
            SectionHeader("EDUCATION"),
        ]

    def test_first_line_is_name(self):
        """Leading hashes and bold markers are stripped from the name."""
        block, state = classify("# **Jane Doe**", ClassifierState())
        assert block == Name("Jane Doe")
        assert state.name_emitted

    def test_headline_only_before_first_section(self):
        assert classify("Data Analyst", AFTER_NAME)[0] == Headline("Data Analyst")
        assert classify("Data Analyst", IN_BODY)[0] == Paragraph("Data Analyst")

    def test_subsection_split_on_first_pipe(self):
        """Only the first pipe separates left from right; nothing is dropped."""
        block, _ = classify("### Engineer | Acme | 2020", IN_BODY)
        assert block == SubsectionHeader(left="Engineer", right="Acme | 2020")

    def test_subsection_without_pipe(self):
        block, _ = classify("### Engineer", IN_BODY)
        assert block == SubsectionHeader(left="Engineer")

    def test_long_contact_line_is_prose(self):
        line = "Reach me at jane@x.com " + "x" * 200
        block, _ = classify(line, IN_BODY)
        assert isinstance(block, Paragraph)

    def test_matching_rule(self):
        assert matching_rule("## Skills", AFTER_NAME) == "section_header"
        assert matching_rule("- SQL", IN_BODY) == "bullet"
        assert matching_rule("anything", ClassifierState()) == "name"


@pytest.mark.unit
class TestContactSanitizing:
    """Tests for contact line cleanup and link detection."""

    def test_separators_and_dashes(self):
        line = "jane@x.com • 555-1234 — NYC"
        assert sanitize_contact_line(line) == "jane@x.com | 555-1234 - NYC"

    def test_outer_pipes_removed(self):
        assert sanitize_contact_line("| jane@x.com |github.com/jane|") == (
            "jane@x.com | github.com/jane"
        )

    @pytest.mark.parametrize(
        "part,expected",
        [
            ("jane@x.com", "mailto:jane@x.com"),
            ("github.com/jane", "https://github.com/jane"),
            ("https://janedoe.dev", "https://janedoe.dev"),
            ("www.janedoe.dev", "https://www.janedoe.dev"),
            ("+1 555 1234", None),
        ],
    )
    def test_detect_link(self, part, expected):
        assert detect_link(part) == expected


@pytest.mark.unit
class TestPreprocessing:
    """Tests for per-line cleanup applied before classification."""

    def test_unicode_cleanup(self):
        assert normalize_unicode("Jane\u00a0Doe\u200b") == "Jane Doe"
        assert normalize_unicode("“quoted”") == '"quoted"'

    def test_linkedin_label_stripped(self):
        assert strip_linkedin_label("LinkedIn: linkedin.com/in/jane") == "linkedin.com/in/jane"

    def test_bare_linkedin_url_untouched(self):
        assert strip_linkedin_label("linkedin.com/in/jane") == "linkedin.com/in/jane"

    def test_inline_labels_bolded(self):
        assert bold_inline_labels("Soft Skills: Communication") == "**Soft Skills:** Communication"

    def test_inline_labels_not_bolded_twice(self):
        line = "**Soft Skills:** Communication"
        assert bold_inline_labels(line) == line

    def test_normalizer_counts_discarded_lines(self):
        normalizer = SectionNormalizer()

        assert normalizer.feed("Jane Doe") == Name("Jane Doe")
        assert normalizer.feed("Contact Information") is None
        assert normalizer.feed("") == Blank()
        assert normalizer.discarded_lines == 1

    def test_mixed_resume_idempotent(self):
        text = (
            "Jane Doe\n"
            "Contact Information:\n"
            "LinkedIn: linkedin.com/in/jane • jane@x.com\n"
            "\n"
            "Technical Skills\n"
            "Programming Languages: Python, SQL\n"
            "**Selected Work**\n"
            "### Analyst | Acme |\n"
            "*Built dashboards for **finance**\n"
        )
        blocks = normalize_resume(text).blocks

        assert ContactLine("linkedin.com/in/jane | jane@x.com") in blocks
        assert Paragraph("**Programming Languages:** Python, SQL") in blocks
        assert normalize_resume(to_markdown(blocks)).blocks == blocks
