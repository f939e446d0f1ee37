"""
Line classifier for resume text.

`classify(line, state)` is a pure function: it looks at one stripped line and
the running ClassifierState and returns the Block for that line together with
the next state. Rules live in an ordered table and are evaluated top to
bottom; the first rule that returns a result wins.
"""

from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from folio.contexts.layout.blocks import (
    Blank,
    Block,
    Bullet,
    ClassifierState,
    ContactLine,
    Headline,
    Name,
    Paragraph,
    SectionHeader,
    SubsectionHeader,
)
from folio.contexts.layout.section_patterns import (
    LinePatterns,
    canonical_section_name,
    clean_header_text,
    is_contact_line,
    is_known_section_header,
    is_summary_fallback,
    is_suppressed_section,
    sanitize_contact_line,
)

Classification = Tuple[Block, ClassifierState]
Rule = Callable[[str, ClassifierState], Optional[Classification]]

DISCARDED = Blank(gap=False)


# =============================================================================
# RULES
# =============================================================================


def _empty_line(line: str, state: ClassifierState) -> Optional[Classification]:
    if line:
        return None
    return (DISCARDED if state.skipping_section else Blank()), state


def _contact_label(line: str, state: ClassifierState) -> Optional[Classification]:
    if LinePatterns.CONTACT_LABEL.match(line):
        return DISCARDED, state
    return None


def _suppressed_section(line: str, state: ClassifierState) -> Optional[Classification]:
    if is_suppressed_section(line):
        return DISCARDED, replace(state, skipping_section=True)
    return None


def _section_header(line: str, state: ClassifierState) -> Optional[Classification]:
    if not (LinePatterns.SECTION_MARKER.match(line) or is_known_section_header(line)):
        return None

    name = canonical_section_name(clean_header_text(line))
    if not name:
        # "## " with nothing after it
        return None

    return SectionHeader(name=name), replace(
        state, skipping_section=False, first_section_seen=True
    )


def _summary_fallback(line: str, state: ClassifierState) -> Optional[Classification]:
    if not state.name_emitted or not is_summary_fallback(line):
        return None
    return SectionHeader(name="SUMMARY"), replace(
        state, skipping_section=False, first_section_seen=True
    )


def _skipped_line(line: str, state: ClassifierState) -> Optional[Classification]:
    if state.skipping_section:
        return DISCARDED, state
    return None


def _contact_line(line: str, state: ClassifierState) -> Optional[Classification]:
    if is_contact_line(line):
        return ContactLine(text=sanitize_contact_line(line)), state
    return None


def _name(line: str, state: ClassifierState) -> Optional[Classification]:
    if state.name_emitted:
        return None
    text = LinePatterns.NAME_MARKER.sub("", line).replace("**", "").strip()
    return Name(text=text), replace(state, name_emitted=True)


def _headline(line: str, state: ClassifierState) -> Optional[Classification]:
    if state.first_section_seen:
        return None
    return Headline(text=line), state


def _subsection_header(line: str, state: ClassifierState) -> Optional[Classification]:
    if not LinePatterns.SUBSECTION_MARKER.match(line):
        return None

    text = LinePatterns.SUBSECTION_MARKER.sub("", line)
    if "|" not in text:
        return SubsectionHeader(left=text.strip()), state

    left, right = text.split("|", 1)
    return SubsectionHeader(left=left.strip(), right=right.strip()), state


def _bullet(line: str, state: ClassifierState) -> Optional[Classification]:
    match = LinePatterns.BULLET.match(line)
    if match is None:
        return None
    return Bullet(text=match.group(1).strip()), state


def _bold_line(line: str, state: ClassifierState) -> Optional[Classification]:
    if not LinePatterns.BOLD_LINE.match(line):
        return None
    return Paragraph(text=line.replace("**", "").strip(), bold=True), state


def _paragraph(line: str, state: ClassifierState) -> Optional[Classification]:
    return Paragraph(text=line), state


# Evaluated top to bottom, first match wins
CLASSIFICATION_RULES: List[Tuple[str, Rule]] = [
    ("empty_line", _empty_line),
    ("contact_label", _contact_label),
    ("suppressed_section", _suppressed_section),
    ("section_header", _section_header),
    ("summary_fallback", _summary_fallback),
    ("skipped_line", _skipped_line),
    ("contact_line", _contact_line),
    ("name", _name),
    ("headline", _headline),
    ("subsection_header", _subsection_header),
    ("bullet", _bullet),
    ("bold_line", _bold_line),
    ("paragraph", _paragraph),
]


def classify(line: str, state: ClassifierState) -> Classification:
    """
    Classify one resume line.

    Args:
        line: Raw line (surrounding whitespace is stripped here)
        state: Running flags from the previous line

    Returns:
        (block, next_state)
    """
    line = line.strip()
    for _, rule in CLASSIFICATION_RULES:
        result = rule(line, state)
        if result is not None:
            return result

    # _paragraph always matches
    raise AssertionError(f"No classification rule matched: {line!r}")


def matching_rule(line: str, state: ClassifierState) -> str:
    """Name of the rule that classifies this line (for debugging output)."""
    line = line.strip()
    for rule_name, rule in CLASSIFICATION_RULES:
        if rule(line, state) is not None:
            return rule_name
    return "paragraph"
