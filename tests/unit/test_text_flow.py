"""
Unit tests for inline style tokenizing and text wrapping.

Uses a fixed-pitch metric (2mm per character) so expected widths are exact.
"""

import math

import pytest

from folio.contexts.layout.exceptions import MeasurementError
from folio.contexts.layout.inline_styles import StyledSegment, strip_delimiters, tokenize
from folio.contexts.layout.text_flow import wrap


def _pairs(segments):
    return [(s.text, s.bold) for s in segments]


@pytest.mark.unit
class TestTokenize:
    """Tests for tokenize()."""

    def test_bold_run(self):
        assert _pairs(tokenize("Led **3 teams**")) == [
            ("Led", False),
            (" ", False),
            ("3", True),
            (" ", True),
            ("teams", True),
        ]

    def test_unmatched_delimiter_is_literal(self):
        """A single ** has no partner and stays in the text."""
        segments = tokenize("a ** b")
        assert "".join(s.text for s in segments) == "a ** b"
        assert not any(s.bold for s in segments)

    def test_trailing_unmatched_after_pairs(self):
        segments = tokenize("**a** **b** c**")
        assert _pairs(segments) == [
            ("a", True),
            (" ", False),
            ("b", True),
            (" ", False),
            ("c**", False),
        ]

    def test_concatenation_drops_delimiters(self):
        text = "Built **FOLIO** in **Python**, shipped weekly"
        assert strip_delimiters(text) == "Built FOLIO in Python, shipped weekly"

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize("****") == []

    def test_whitespace_segments(self):
        segments = tokenize("a   b")
        assert segments[1] == StyledSegment("   ")
        assert segments[1].is_whitespace


@pytest.mark.unit
class TestWrap:
    """Tests for wrap()."""

    def test_greedy_fill(self, metric):
        """Words fill a line up to and including max_width."""
        lines = wrap(tokenize("aa bb cc"), max_width=10, font_size=10, measure_fn=metric)

        assert [line.text for line in lines] == ["aa bb", "cc"]
        assert [line.width for line in lines] == [10, 4]

    def test_overflowing_word_alone(self, metric):
        """An over-wide word sits alone on one line, unsplit, without raising."""
        lines = wrap(
            tokenize("a verylongword b"), max_width=10, font_size=10, measure_fn=metric
        )

        assert [line.text for line in lines] == ["a", "verylongword", "b"]
        assert sum("verylongword" in line.text for line in lines) == 1

    def test_width_bound(self, metric):
        """Every line except a lone overflowing word fits max_width."""
        text = " ".join(["lorem", "ipsum", "dolor", "sit", "amet"] * 20)
        lines = wrap(tokenize(text), max_width=37, font_size=10, measure_fn=metric)

        assert all(line.width <= 37 for line in lines)
        assert " ".join(line.text for line in lines) == text

    def test_spaces_dropped_at_breaks(self, metric):
        lines = wrap(tokenize("  aa    bb  "), max_width=5, font_size=10, measure_fn=metric)
        assert [line.text for line in lines] == ["aa", "bb"]

    def test_word_spanning_styles(self, metric):
        """'**Python**,' is one word; segments keep their weight and offsets."""
        lines = wrap(tokenize("**Python**, SQL"), max_width=100, font_size=10, measure_fn=metric)

        assert len(lines) == 1
        segments = lines[0].segments
        assert [(s.text, s.bold, s.x_offset, s.width) for s in segments] == [
            ("Python", True, 0, 12),
            (", SQL", False, 12, 10),
        ]

    def test_fixed_line_height(self, metric):
        lines = wrap(
            tokenize("aa bb cc"), max_width=4, font_size=10, measure_fn=metric, line_height=4.5
        )
        assert [line.height for line in lines] == [4.5, 4.5, 4.5]
        assert all(line.font_size == 10 for line in lines)

    def test_empty_input(self, metric):
        assert wrap([], max_width=10, font_size=10, measure_fn=metric) == []
        assert wrap(tokenize("   "), max_width=10, font_size=10, measure_fn=metric) == []


@pytest.mark.unit
class TestMeasurementErrors:
    """Tests for metric failures surfacing as MeasurementError."""

    def test_metric_raises(self):
        def broken(text, bold, font_size):
            raise KeyError("no such font")

        with pytest.raises(MeasurementError) as exc_info:
            wrap(tokenize("hello"), max_width=10, font_size=10, measure_fn=broken)

        assert isinstance(exc_info.value.original_error, KeyError)
        assert exc_info.value.text == "hello"

    @pytest.mark.parametrize("width", [-1.0, math.nan, math.inf, "wide", None])
    def test_invalid_widths(self, width):
        with pytest.raises(MeasurementError):
            wrap(tokenize("hello"), max_width=10, font_size=10, measure_fn=lambda *_: width)
