"""
Font metrics backed by reportlab's standard Type 1 fonts.

The layout engine measures in millimetres; reportlab reports advance widths
in points, so every width is converted on the way out.
"""

import math
from functools import lru_cache
from typing import Dict, Tuple

from reportlab.pdfbase import pdfmetrics

from folio.contexts.layout.exceptions import MeasurementError
from folio.contexts.layout.styles import points_to_mm
from folio.contexts.layout.text_flow import MeasureFn

# Family -> (regular face, bold face) for the base-14 fonts every PDF viewer ships
STANDARD_FONT_FACES: Dict[str, Tuple[str, str]] = {
    "Helvetica": ("Helvetica", "Helvetica-Bold"),
    "Times": ("Times-Roman", "Times-Bold"),
    "Courier": ("Courier", "Courier-Bold"),
}


def font_face(font_family: str, bold: bool) -> str:
    """
    Resolve the reportlab face name for a family and weight.

    Raises:
        ValueError: If the family is not a standard font family
    """
    try:
        regular, bold_face = STANDARD_FONT_FACES[font_family]
    except KeyError:
        available = ", ".join(sorted(STANDARD_FONT_FACES))
        raise ValueError(f"Unknown font family: {font_family}. Available: {available}")
    return bold_face if bold else regular


@lru_cache(maxsize=4096)
def _string_width_mm(text: str, face: str, font_size: float) -> float:
    return points_to_mm(pdfmetrics.stringWidth(text, face, font_size))


def make_metrics(font_family: str = "Helvetica") -> MeasureFn:
    """
    Build a measure function for one font family.

    Returns:
        measure(text, bold, font_size) -> width in mm

    Example:
        >>> measure = make_metrics("Helvetica")
        >>> measure("Hello", False, 10.0) > 0
        True
    """
    faces = (font_face(font_family, False), font_face(font_family, True))

    def measure(text: str, bold: bool, font_size: float) -> float:
        if not isinstance(font_size, (int, float)) or not math.isfinite(font_size) or font_size <= 0:
            raise MeasurementError(
                f"Invalid font size: {font_size!r}", text=text, font_size=font_size, bold=bold
            )
        if not text:
            return 0.0
        return _string_width_mm(text, faces[1] if bold else faces[0], float(font_size))

    return measure


helvetica_metrics = make_metrics("Helvetica")
