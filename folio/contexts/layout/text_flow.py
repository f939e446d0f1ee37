"""
Text flow engine.

Greedy, width-aware word wrapping of styled segments against an injected
font metric. Words are maximal runs of non-whitespace text; a word may span a
style change ("**Python**," is one word) and is never split. A word wider
than the line is placed alone and allowed to overflow.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

from folio.contexts.layout.exceptions import MeasurementError
from folio.contexts.layout.inline_styles import StyledSegment
from folio.contexts.layout.logger import log_overflowing_word

# measure_fn(text, bold, font_size) -> advance width in document units (mm)
MeasureFn = Callable[[str, bool, float], float]

# Tolerance for float accumulation when comparing against max_width
WIDTH_EPSILON = 1e-6


@dataclass(frozen=True)
class PlacedSegment:
    """A styled segment positioned relative to the start of its line."""

    text: str
    bold: bool
    x_offset: float
    width: float


@dataclass(frozen=True)
class WrappedLine:
    """
    One output line sharing a single baseline.

    Attributes:
        segments: Positioned segments, left to right
        font_size: Font size (pt) every segment is set in
        width: Total advance width (mm)
        height: Vertical space the line consumes (fixed line height, mm)
    """

    segments: Tuple[PlacedSegment, ...]
    font_size: float
    width: float
    height: float

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)


@dataclass
class _Word:
    spaces: List[StyledSegment] = field(default_factory=list)
    pieces: List[StyledSegment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(piece.text for piece in self.pieces)


class _Measurer:
    """Validating, memoizing wrapper around a measure function."""

    def __init__(self, measure_fn: MeasureFn, font_size: float):
        self.measure_fn = measure_fn
        self.font_size = font_size
        self._cache: Dict[Tuple[str, bool], float] = {}

    def __call__(self, segment: StyledSegment) -> float:
        key = (segment.text, segment.bold)
        if key not in self._cache:
            self._cache[key] = measure_with(
                self.measure_fn, segment.text, segment.bold, self.font_size
            )
        return self._cache[key]


def measure_with(measure_fn: MeasureFn, text: str, bold: bool, font_size: float) -> float:
    """
    Call the metric and check its answer.

    Raises:
        MeasurementError: If the metric raises or returns a negative/non-finite width
    """
    try:
        width = measure_fn(text, bold, font_size)
    except MeasurementError:
        raise
    except Exception as e:
        raise MeasurementError(
            "Font metric failed", text=text, font_size=font_size, bold=bold, original_error=e
        ) from e

    try:
        width = float(width)
    except (TypeError, ValueError) as e:
        raise MeasurementError(
            f"Font metric returned a non-numeric width: {width!r}",
            text=text,
            font_size=font_size,
            bold=bold,
            original_error=e,
        ) from e

    if not math.isfinite(width) or width < 0:
        raise MeasurementError(
            f"Font metric returned an invalid width: {width}",
            text=text,
            font_size=font_size,
            bold=bold,
        )
    return width


def _group_words(segments: Sequence[StyledSegment]) -> List[_Word]:
    """Group segments into words, remembering the whitespace in front of each."""
    words: List[_Word] = []
    pending_spaces: List[StyledSegment] = []
    previous_was_text = False

    for segment in segments:
        if segment.is_whitespace:
            pending_spaces.append(segment)
            previous_was_text = False
        elif previous_was_text:
            words[-1].pieces.append(segment)
        else:
            words.append(_Word(spaces=pending_spaces, pieces=[segment]))
            pending_spaces = []
            previous_was_text = True

    # Trailing whitespace has nothing to separate
    return words


def _merge_pieces(
    placed: List[Tuple[StyledSegment, float, float]],
) -> Tuple[PlacedSegment, ...]:
    """Merge neighbouring pieces of the same weight into one drawable segment."""
    merged: List[PlacedSegment] = []
    for segment, x_offset, width in placed:
        if merged and merged[-1].bold == segment.bold:
            last = merged[-1]
            merged[-1] = PlacedSegment(
                text=last.text + segment.text,
                bold=last.bold,
                x_offset=last.x_offset,
                width=last.width + width,
            )
        else:
            merged.append(PlacedSegment(segment.text, segment.bold, x_offset, width))
    return tuple(merged)


def wrap(
    segments: Sequence[StyledSegment],
    max_width: float,
    font_size: float,
    measure_fn: MeasureFn,
    line_height: float = 5.0,
) -> List[WrappedLine]:
    """
    Wrap styled segments into lines no wider than max_width.

    Greedy: words are appended while `current + spaces + word <= max_width`;
    on overflow the line is closed and the word starts the next one.
    Whitespace at a break is dropped. A word wider than max_width is placed
    alone on its own line (never split, never dropped).

    Args:
        segments: Styled segments, e.g. from inline_styles.tokenize()
        max_width: Available width (mm)
        font_size: Font size (pt) passed to measure_fn
        measure_fn: measure_fn(text, bold, font_size) -> width (mm)
        line_height: Fixed height of every produced line (mm)

    Returns:
        Wrapped lines in input order (empty list for empty/whitespace input)

    Raises:
        MeasurementError: If the metric fails
    """
    measure = _Measurer(measure_fn, font_size)

    lines: List[WrappedLine] = []
    placed: List[Tuple[StyledSegment, float, float]] = []
    cursor = 0.0

    def close_line() -> None:
        nonlocal placed, cursor
        lines.append(
            WrappedLine(
                segments=_merge_pieces(placed),
                font_size=font_size,
                width=cursor,
                height=line_height,
            )
        )
        placed = []
        cursor = 0.0

    for word in _group_words(segments):
        word_width = sum(measure(piece) for piece in word.pieces)
        space_width = sum(measure(space) for space in word.spaces)

        if placed and cursor + space_width + word_width > max_width + WIDTH_EPSILON:
            close_line()

        if placed:
            for space in word.spaces:
                placed.append((space, cursor, measure(space)))
                cursor += measure(space)

        if word_width > max_width + WIDTH_EPSILON:
            log_overflowing_word(word.text, word_width, max_width)

        for piece in word.pieces:
            placed.append((piece, cursor, measure(piece)))
            cursor += measure(piece)

    if placed:
        close_line()

    return lines
