"""Custom exceptions for the layout context."""

from typing import Optional


class FolioError(Exception):
    """Base class for errors raised by the layout engine."""


class MeasurementError(FolioError):
    """
    Exception raised when the font-metric function fails.

    A failing metric is a configuration defect (bad font size, unknown font),
    not a content defect, so it is never swallowed by the engine.

    Attributes:
        message: Error description
        text: The text being measured
        font_size: Font size passed to the metric
        bold: Weight passed to the metric
        original_error: The exception raised by the metric, if any
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        font_size: Optional[float] = None,
        bold: Optional[bool] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.text = text
        self.font_size = font_size
        self.bold = bold
        self.original_error = original_error

        parts = [message]

        if text is not None:
            # Truncate snippet if too long
            snippet = text[:60] + "..." if len(text) > 60 else text
            weight = "bold" if bold else "regular"
            parts.append(f"\nMeasuring: {snippet!r} ({font_size}pt {weight})")

        if original_error:
            parts.append(f"\nOriginal error: {original_error}")

        super().__init__("\n".join(parts))
