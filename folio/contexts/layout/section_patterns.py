"""
Pattern tables for resume line classification.

New header synonyms, suppressed sections or inline labels are added here by
extending a table, not by branching in the classifier.

Pattern classes follow the same convention throughout the project:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# SECTION HEADER TABLES
# =============================================================================

# Header names recognized without a "## " marker (after cleaning)
CANONICAL_SECTION_HEADERS = (
    "EXPERIENCE",
    "PROFESSIONAL EXPERIENCE",
    "WORK EXPERIENCE",
    "SUMMARY",
    "PROFILE SUMMARY",
    "PROFESSIONAL SUMMARY",
    "OBJECTIVE",
    "CAREER OBJECTIVE",
    "PROJECTS",
    "SKILLS",
    "TECHNICAL SKILLS",
    "EDUCATION",
    "CERTIFICATIONS",
    "ACHIEVEMENTS",
)

# Synonym -> canonical header
SECTION_SYNONYMS = {
    "PROFESSIONAL SUMMARY": "SUMMARY",
    "PROFILE SUMMARY": "SUMMARY",
    "OBJECTIVE": "SUMMARY",
    "CAREER OBJECTIVE": "SUMMARY",
}

# Sections whose body is dropped from the output (compared letters-only)
SUPPRESSED_SECTIONS = ("LANGUAGES",)

# Keywords that turn a short heading-like line into the SUMMARY header
SUMMARY_FALLBACK_KEYWORDS = ("SUMMARY", "OBJECTIVE")
SUMMARY_FALLBACK_MAX_LENGTH = 50

# Lowercase words allowed inside an otherwise capitalized heading
HEADING_CONNECTORS = ("of", "and", "&", "the", "for", "in", "to", "at")

# Sub-labels inside the skills section that are bolded inline
INLINE_LABELS_TO_BOLD = (
    "Programming Languages:",
    "Frameworks and Libraries:",
    "Machine Learning & AI Techniques:",
    "Soft Skills:",
)

# Contact lines longer than this are treated as prose
CONTACT_LINE_MAX_LENGTH = 200


# =============================================================================
# LINE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LinePatterns:
    """
    Regex patterns matched against one stripped resume line.
    """

    # "Contact Information" / "CONTACT INFORMATION:" label lines
    CONTACT_LABEL: re.Pattern = re.compile(r"^Contact Information:*$", re.IGNORECASE)

    # "LinkedIn:" label in front of a profile URL (colon required so a bare
    # "linkedin.com/in/..." is left intact)
    LINKEDIN_LABEL: re.Pattern = re.compile(r"^LinkedIn\s*:+\s*", re.IGNORECASE)

    # "## Section"
    SECTION_MARKER: re.Pattern = re.compile(r"^##\s")

    # "### Title | Dates"
    SUBSECTION_MARKER: re.Pattern = re.compile(r"^###\s+")

    # "# Name" (any number of leading hashes)
    NAME_MARKER: re.Pattern = re.compile(r"^#+\s*")

    # "- item", "* item", "• item", "-item"; "**bold**" is not a bullet
    BULLET: re.Pattern = re.compile(r"^(?:[-•]|\*(?!\*))\s*(\S.*)$")

    # "**whole line bold**"
    BOLD_LINE: re.Pattern = re.compile(r"^\*\*.+\*\*$")

    # Punctuation that marks a line as prose rather than a heading
    SENTENCE_PUNCTUATION: re.Pattern = re.compile(r"[,.;!?]")

    # Characters stripped before comparing against header tables
    HEADER_NOISE: re.Pattern = re.compile(r"[*:#]")

    WHITESPACE: re.Pattern = re.compile(r"\s+")

    NON_LETTERS: re.Pattern = re.compile(r"[^A-Za-z]")


@dataclass(frozen=True)
class ContactPatterns:
    """
    Patterns for detecting and sanitizing contact lines.
    """

    CONTACT_MARKERS: tuple = ("@", "linkedin.com", "github.com")

    # Bullet-like separators become pipes
    SEPARATOR_GLYPHS: re.Pattern = re.compile(r"[•●▪·]")

    # En dash / em dash
    DASHES: re.Pattern = re.compile(r"[–—]")

    # Anything outside printable ASCII
    NON_ASCII: re.Pattern = re.compile(r"[^\x20-\x7E]+")

    PIPE: re.Pattern = re.compile(r"\s*\|\s*")
    LEADING_PIPE: re.Pattern = re.compile(r"^\|\s*")
    TRAILING_PIPE: re.Pattern = re.compile(r"\s*\|$")

    EMAIL: re.Pattern = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z0-9._-]+")
    URL: re.Pattern = re.compile(
        r"(https?://\S+)|(www\.\S+)|(linkedin\.com/\S+)|(github\.com/\S+)", re.IGNORECASE
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def clean_header_text(line: str) -> str:
    """Strip `*`, `:`, `#`, collapse whitespace and uppercase."""
    patterns = LinePatterns()
    text = patterns.HEADER_NOISE.sub("", line)
    return patterns.WHITESPACE.sub(" ", text).strip().upper()


def letters_only(line: str) -> str:
    """Uppercased letters of the line, everything else removed."""
    return LinePatterns.NON_LETTERS.sub("", line).upper()


def canonical_section_name(header_text: str) -> str:
    """Map a cleaned header to its canonical name (synonyms -> SUMMARY)."""
    return SECTION_SYNONYMS.get(header_text, header_text)


def is_suppressed_section(line: str) -> bool:
    return letters_only(line) in SUPPRESSED_SECTIONS


def is_known_section_header(line: str) -> bool:
    return clean_header_text(line) in CANONICAL_SECTION_HEADERS


def is_contact_line(line: str) -> bool:
    if len(line) >= CONTACT_LINE_MAX_LENGTH:
        return False
    lowered = line.lower()
    return any(marker in lowered for marker in ContactPatterns.CONTACT_MARKERS)


def _is_heading_word(word: str) -> bool:
    return word[0].isupper() or word[0].isdigit() or word in HEADING_CONNECTORS


def is_summary_fallback(line: str) -> bool:
    """
    Heading-like line that mentions SUMMARY or OBJECTIVE.

    A heading here is short, pipe-free, not a bullet or subsection line,
    carries no sentence punctuation and capitalizes every word except
    connectors ("Summary of Qualifications", "PROFESSIONAL SUMMARY:").
    Body lines that merely use the word ("Executive summary decks",
    "Summary statistics, SQL") do not qualify.
    """
    patterns = LinePatterns()
    if len(line) >= SUMMARY_FALLBACK_MAX_LENGTH or "|" in line:
        return False
    if patterns.BULLET.match(line) or patterns.SUBSECTION_MARKER.match(line):
        return False

    text = line.replace("**", "").strip().rstrip(":").strip()
    if not text or patterns.SENTENCE_PUNCTUATION.search(text):
        return False
    if not all(_is_heading_word(word) for word in text.split()):
        return False

    letters = letters_only(text)
    return any(keyword in letters for keyword in SUMMARY_FALLBACK_KEYWORDS)


def sanitize_contact_line(line: str) -> str:
    """Normalize separators in a contact line to ` | ` and strip non-ASCII noise."""
    patterns = ContactPatterns()
    text = patterns.SEPARATOR_GLYPHS.sub("|", line)
    text = patterns.DASHES.sub("-", text)
    text = patterns.NON_ASCII.sub(" ", text)
    text = LinePatterns.WHITESPACE.sub(" ", text)
    text = patterns.PIPE.sub(" | ", text).strip()
    text = patterns.LEADING_PIPE.sub("", text)
    text = patterns.TRAILING_PIPE.sub("", text)
    return text.strip()


def detect_link(part: str) -> Optional[str]:
    """
    Link target for one contact part.

    Emails become `mailto:` links; bare URLs get an `https://` prefix when no
    scheme is present. Returns None for plain text (phone numbers, cities).
    """
    email = ContactPatterns.EMAIL.search(part)
    if email:
        return f"mailto:{email.group(0).strip()}"

    url = ContactPatterns.URL.search(part)
    if url:
        target = url.group(0).strip()
        if not target.lower().startswith("http"):
            target = f"https://{target}"
        return target

    return None
