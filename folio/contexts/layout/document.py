"""
Laid-out document: pages plus ordered drawing primitives.

Coordinates are millimetres from the top-left corner of the page. A Document
is created once per conversion and never mutated afterwards; backends (PDF
writer, validators) only read it.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class TextRun:
    """
    Text drawn at a baseline.

    Attributes:
        page: 1-based page number
        x: Left edge (mm)
        y: Baseline (mm from top)
        text: Text to draw
        font_size: Size in points
        bold: Bold weight
        width: Advance width (mm) as measured during layout
    """

    page: int
    x: float
    y: float
    text: str
    font_size: float
    bold: bool = False
    width: float = 0.0


@dataclass(frozen=True)
class HorizontalRule:
    """Horizontal line from x_start to x_end at y."""

    page: int
    x_start: float
    x_end: float
    y: float
    thickness: float = 0.5


@dataclass(frozen=True)
class LinkRegion:
    """Clickable rectangle (top-left corner at x, y) pointing at url."""

    page: int
    x: float
    y: float
    width: float
    height: float
    url: str


Primitive = Union[TextRun, HorizontalRule, LinkRegion]


@dataclass(frozen=True)
class PageInfo:
    """Snapshot of a page after layout."""

    index: int
    cursor_y: float
    used_height: float


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page geometry (A4 portrait by default)."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 20.0

    @property
    def printable_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class Document:
    """
    Result of one conversion.

    Attributes:
        pages: Page snapshots in emission order (at least one)
        primitives: Drawing primitives in placement order
        geometry: Page geometry the layout was computed for
        filename: Suggested output filename
        font_family: Font family the metrics were taken from
    """

    pages: Tuple[PageInfo, ...]
    primitives: Tuple[Primitive, ...]
    geometry: PageGeometry
    filename: str
    font_family: str = "Helvetica"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def primitives_on(self, page: int) -> Iterator[Primitive]:
        return (p for p in self.primitives if p.page == page)

    @property
    def text_runs(self) -> Tuple[TextRun, ...]:
        return tuple(p for p in self.primitives if isinstance(p, TextRun))

    @property
    def links(self) -> Tuple[LinkRegion, ...]:
        return tuple(p for p in self.primitives if isinstance(p, LinkRegion))

    @property
    def rules(self) -> Tuple[HorizontalRule, ...]:
        return tuple(p for p in self.primitives if isinstance(p, HorizontalRule))
