"""
Section normalizer for the Layout context.

Runs the line classifier over a whole document, threading ClassifierState
from one line to the next, and returns the canonical block sequence that
both renderers (PDF layout and screen preview) consume.

Each raw line is preprocessed before classification:
- Unicode cleanup (non-breaking spaces, zero-width characters, smart quotes)
- A leading "LinkedIn:" label is removed so the URL is recognized as contact info
- Known skill sub-labels are bolded inline (e.g. "Soft Skills:" -> "**Soft Skills:**")
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from folio.contexts.layout.blocks import Blank, Block, ClassifierState
from folio.contexts.layout.classifier import classify
from folio.contexts.layout.logger import log_normalization_result
from folio.contexts.layout.section_patterns import INLINE_LABELS_TO_BOLD, LinePatterns

# Unicode replacements: problematic char -> ASCII equivalent
# Bullets and dashes are left alone; the classifier relies on them.
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
}

_INLINE_LABEL_PATTERNS = [
    re.compile(rf"(?<!\*\*)({re.escape(label)})(?!\*\*)", re.IGNORECASE)
    for label in INLINE_LABELS_TO_BOLD
]


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause layout issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents.
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def strip_linkedin_label(line: str) -> str:
    """Remove a leading "LinkedIn:" label, keeping the URL that follows."""
    return LinePatterns.LINKEDIN_LABEL.sub("", line)


def bold_inline_labels(line: str) -> str:
    """Wrap known sub-labels in ** unless they are already bolded."""
    for pattern in _INLINE_LABEL_PATTERNS:
        line = pattern.sub(r"**\1**", line)
    return line


def preprocess_line(raw_line: str) -> str:
    """Clean one raw line before classification."""
    line = normalize_unicode(raw_line).strip()
    line = strip_linkedin_label(line)
    return bold_inline_labels(line)


@dataclass
class NormalizationResult:
    """
    Result of normalizing one document.

    Attributes:
        blocks: Canonical block sequence (discarded lines removed)
        discarded_lines: Number of input lines dropped (labels, suppressed sections)
        final_state: Classifier flags after the last line
    """

    blocks: List[Block] = field(default_factory=list)
    discarded_lines: int = 0
    final_state: ClassifierState = field(default_factory=ClassifierState)


class SectionNormalizer:
    """
    Stateful wrapper around the classifier for one document.

    Holds the running ClassifierState; create a new instance per conversion.

    Example:
        >>> normalizer = SectionNormalizer()
        >>> blocks = normalizer.normalize("# Jane Doe\\n## Skills\\n- SQL")
        >>> [type(b).__name__ for b in blocks]
        ['Name', 'SectionHeader', 'Bullet']
    """

    def __init__(self):
        self.state = ClassifierState()
        self.discarded_lines = 0

    def feed(self, raw_line: str) -> Optional[Block]:
        """Classify one line; returns None when the line is discarded."""
        block, self.state = classify(preprocess_line(raw_line), self.state)
        if isinstance(block, Blank) and not block.gap:
            self.discarded_lines += 1
            return None
        return block

    def feed_lines(self, lines: Iterable[str]) -> List[Block]:
        blocks = []
        for raw_line in lines:
            block = self.feed(raw_line)
            if block is not None:
                blocks.append(block)
        return blocks

    def normalize(self, text: str) -> List[Block]:
        """Classify a whole document (split on newlines)."""
        return self.feed_lines(text.splitlines())


def normalize_resume(text: str) -> NormalizationResult:
    """
    Classify a resume into its canonical block sequence.

    Main entry point of the normalizer; always starts from a fresh state.

    Args:
        text: Resume in the markdown-like dialect

    Returns:
        NormalizationResult with blocks and bookkeeping
    """
    normalizer = SectionNormalizer()
    blocks = normalizer.normalize(text)
    result = NormalizationResult(
        blocks=blocks,
        discarded_lines=normalizer.discarded_lines,
        final_state=normalizer.state,
    )
    log_normalization_result(result)
    return result


def to_markdown(blocks: Iterable[Block]) -> str:
    """
    Serialize blocks back to the markdown dialect.

    Normalizing the returned text again yields the same blocks.
    """
    return "\n".join(block.to_markdown() for block in blocks)
