"""
Default style table and page geometry for resume layout.

Provides the shared defaults used by:
- renderer.py (style profile per block kind)
- config_resolver.py (presets are merged over these values)

Sizes are points; distances are millimetres.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from folio.contexts.layout.document import PageGeometry

ALIGNMENTS = ("left", "center")

# Points per millimetre
PT_PER_MM = 72.0 / 25.4


@dataclass(frozen=True)
class StyleProfile:
    """
    Typography and spacing for one block kind.

    Attributes:
        font_size: Size in points
        bold: Whole block set in bold
        align: "left" or "center"
        line_height: Fixed height of every wrapped line (mm)
        space_before: Gap above the block (mm)
        space_after: Gap below the block (mm)
        keep_with_next: Free space required below the cursor before placing
                        the block, so headers are not stranded at a page bottom (mm)
    """

    font_size: float
    bold: bool = False
    align: str = "left"
    line_height: float = 5.0
    space_before: float = 0.0
    space_after: float = 0.0
    keep_with_next: float = 0.0

    def __post_init__(self):
        if self.align not in ALIGNMENTS:
            raise ValueError(f"align must be one of {ALIGNMENTS}, got: {self.align!r}")


DEFAULT_STYLES = {
    "name": StyleProfile(font_size=22, bold=True, align="center", line_height=10.0, keep_with_next=15.0),
    "headline": StyleProfile(font_size=11, bold=True, align="center", line_height=6.0),
    "contact_line": StyleProfile(font_size=10, align="center", line_height=5.0),
    "section_header": StyleProfile(
        font_size=11, bold=True, line_height=5.0, space_before=2.0, space_after=3.0, keep_with_next=15.0
    ),
    "subsection_header": StyleProfile(
        font_size=10.5, bold=True, line_height=5.0, space_before=2.0, keep_with_next=8.0
    ),
    "paragraph": StyleProfile(font_size=10, line_height=5.0),
    "bold_paragraph": StyleProfile(font_size=10, bold=True, line_height=5.0, keep_with_next=6.0),
    "bullet": StyleProfile(font_size=9.5, line_height=5.0),
}


@dataclass
class LayoutSettings:
    """
    Everything the renderer needs besides the font metric.

    Attributes:
        geometry: Page size and margins
        styles: Style profile per block kind (see DEFAULT_STYLES)
        font_family: Font family used for the whole document
        blank_gap: Vertical gap for an empty input line (mm)
        bullet_glyph: Glyph drawn in front of bullet text
        bullet_indent: Offset of bullet text from the glyph (mm)
        rule_gap: Space between a section header and its rule (mm)
        rule_thickness: Rule line width (mm)
        subsection_gutter: Minimum space between left and right subsection parts (mm)
        contact_separator: Separator drawn between contact parts
        descent_ratio: Descender depth as a fraction of the font size
    """

    geometry: PageGeometry = field(default_factory=PageGeometry)
    styles: Dict[str, StyleProfile] = field(default_factory=lambda: dict(DEFAULT_STYLES))
    font_family: str = "Helvetica"
    blank_gap: float = 2.0
    bullet_glyph: str = "•"
    bullet_indent: float = 5.0
    rule_gap: float = 1.5
    rule_thickness: float = 0.5
    subsection_gutter: float = 3.0
    contact_separator: str = " | "
    descent_ratio: float = 0.22

    def style_for(self, kind: str) -> StyleProfile:
        try:
            return self.styles[kind]
        except KeyError:
            raise ValueError(
                f"No style profile for block kind '{kind}'. Available: {sorted(self.styles)}"
            ) from None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutSettings":
        """Build settings from a (possibly partial) nested dict; missing keys keep defaults."""
        data = dict(data)
        geometry = PageGeometry(**data.pop("geometry", {}))

        styles = dict(DEFAULT_STYLES)
        for kind, profile in data.pop("styles", {}).items():
            base = asdict(styles[kind]) if kind in styles else {}
            styles[kind] = StyleProfile(**{**base, **profile})

        return cls(geometry=geometry, styles=styles, **data)


def points_to_mm(points: float) -> float:
    return points / PT_PER_MM
