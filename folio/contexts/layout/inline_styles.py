"""
Inline style tokenizer.

Splits a run of text on non-nested `**bold**` delimiters into styled
segments. Whitespace runs become their own segments so the text flow engine
can break on them.
"""

import re
from dataclasses import dataclass
from typing import List

BOLD_DELIMITER = "**"

_WHITESPACE_SPLIT = re.compile(r"(\s+)")


@dataclass(frozen=True)
class StyledSegment:
    """A contiguous span of text sharing one emphasis state."""

    text: str
    bold: bool = False

    @property
    def is_whitespace(self) -> bool:
        return not self.text.strip()


def _split_runs(text: str, bold: bool) -> List[StyledSegment]:
    return [StyledSegment(run, bold) for run in _WHITESPACE_SPLIT.split(text) if run]


def tokenize(text: str) -> List[StyledSegment]:
    """
    Split text into styled segments.

    Odd-positioned chunks between `**` delimiters are bold. When the number of
    delimiters is odd, the last `**` has no partner and is kept as literal
    text. Never raises.

    Concatenating the segment texts reproduces the input with the (matched)
    delimiters removed.

    Example:
        >>> [(s.text, s.bold) for s in tokenize("Led **3 teams**")]
        [('Led', False), (' ', False), ('3', True), (' ', True), ('teams', True)]
    """
    chunks = text.split(BOLD_DELIMITER)

    # Even chunk count means an odd number of delimiters: re-attach the last one
    if len(chunks) % 2 == 0:
        tail = chunks.pop()
        chunks[-1] = f"{chunks[-1]}{BOLD_DELIMITER}{tail}"

    segments: List[StyledSegment] = []
    for index, chunk in enumerate(chunks):
        segments.extend(_split_runs(chunk, bold=index % 2 == 1))
    return segments


def strip_delimiters(text: str) -> str:
    """Visible text of a styled run (matched delimiters removed)."""
    return "".join(segment.text for segment in tokenize(text))
