"""
Block data structures for classified resume lines.

A Block is one semantically classified unit of input. The classifier emits
one Block per raw line; the renderer selects a style profile by `kind`.
Every block can serialize itself back to the markdown dialect it was read
from, so a block sequence can be re-normalized (header canonicalization is
stable under a second pass).
"""

from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class ClassifierState:
    """
    Running flags threaded through the classifier, one line at a time.

    Created fresh per document conversion and discarded after the last line.
    """

    name_emitted: bool = False
    first_section_seen: bool = False
    skipping_section: bool = False


@dataclass(frozen=True)
class Block:
    """Base class for classified blocks."""

    kind: ClassVar[str] = "block"

    @property
    def text_content(self) -> str:
        """Visible text carried by the block (may still contain ** markers)."""
        return ""

    def to_markdown(self) -> str:
        return self.text_content


@dataclass(frozen=True)
class Name(Block):
    kind: ClassVar[str] = "name"
    text: str = ""

    @property
    def text_content(self) -> str:
        return self.text

    def to_markdown(self) -> str:
        return f"# {self.text}"


@dataclass(frozen=True)
class Headline(Block):
    """Line between the name and the first section (e.g. target job title)."""

    kind: ClassVar[str] = "headline"
    text: str = ""

    @property
    def text_content(self) -> str:
        return self.text


@dataclass(frozen=True)
class SectionHeader(Block):
    kind: ClassVar[str] = "section_header"
    name: str = ""

    @property
    def text_content(self) -> str:
        return self.name

    def to_markdown(self) -> str:
        return f"## {self.name}"


@dataclass(frozen=True)
class SubsectionHeader(Block):
    """Job title / school line, optionally with a right-aligned part (dates)."""

    kind: ClassVar[str] = "subsection_header"
    left: str = ""
    right: Optional[str] = None

    @property
    def text_content(self) -> str:
        return self.left if self.right is None else f"{self.left}{self.right}"

    def to_markdown(self) -> str:
        if self.right is None:
            return f"### {self.left}"
        return f"### {self.left} | {self.right}"


@dataclass(frozen=True)
class Bullet(Block):
    kind: ClassVar[str] = "bullet"
    text: str = ""

    @property
    def text_content(self) -> str:
        return self.text

    def to_markdown(self) -> str:
        return f"- {self.text}"


@dataclass(frozen=True)
class ContactLine(Block):
    """Email / profile links, already sanitized to `part | part | part`."""

    kind: ClassVar[str] = "contact_line"
    text: str = ""

    @property
    def text_content(self) -> str:
        return self.text

    @property
    def parts(self) -> list:
        return [part.strip() for part in self.text.split("|") if part.strip()]


@dataclass(frozen=True)
class Paragraph(Block):
    kind: ClassVar[str] = "paragraph"
    text: str = ""
    bold: bool = False

    @property
    def text_content(self) -> str:
        return self.text

    def to_markdown(self) -> str:
        return f"**{self.text}**" if self.bold else self.text


@dataclass(frozen=True)
class Blank(Block):
    """
    Empty line.

    gap=False marks a discarded line (dropped label, suppressed section body);
    it occupies no vertical space and is removed by the section normalizer.
    """

    kind: ClassVar[str] = "blank"
    gap: bool = True
