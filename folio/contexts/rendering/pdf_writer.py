"""
PDF backend.

Draws a laid-out Document with reportlab's canvas. The Document is in
millimetres from the top-left corner; the canvas works in points from the
bottom-left, so every coordinate is scaled by `mm` and flipped.
"""

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Union

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from folio.contexts.layout.document import Document, HorizontalRule, LinkRegion, TextRun
from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.metrics import font_face


class PDFWriter:
    """
    Draw one Document onto a reportlab canvas.

    Args:
        document: Laid-out document (pages and primitives)

    Example:
        >>> PDFWriter(document).write(Path("outs/results/resume_modified.pdf"))
    """

    def __init__(self, document: Document):
        self.document = document
        self.page_height = document.geometry.height

    def _flip(self, y: float) -> float:
        return (self.page_height - y) * mm

    def _draw_text(self, pdf: canvas.Canvas, run: TextRun) -> None:
        pdf.setFont(font_face(self.document.font_family, run.bold), run.font_size)
        pdf.drawString(run.x * mm, self._flip(run.y), run.text)

    def _draw_rule(self, pdf: canvas.Canvas, rule: HorizontalRule) -> None:
        pdf.setLineWidth(rule.thickness * mm)
        pdf.line(rule.x_start * mm, self._flip(rule.y), rule.x_end * mm, self._flip(rule.y))

    def _draw_link(self, pdf: canvas.Canvas, link: LinkRegion) -> None:
        rect = (
            link.x * mm,
            self._flip(link.y + link.height),
            (link.x + link.width) * mm,
            self._flip(link.y),
        )
        pdf.linkURL(link.url, rect, relative=0, thickness=0)

    def draw(self, pdf: canvas.Canvas) -> None:
        """Draw every page, in order, onto an open canvas."""
        drawers = {
            TextRun: self._draw_text,
            HorizontalRule: self._draw_rule,
            LinkRegion: self._draw_link,
        }
        for page in self.document.pages:
            for primitive in self.document.primitives_on(page.index):
                drawers[type(primitive)](pdf, primitive)
            pdf.showPage()

    def write(self, target: Union[str, Path, BinaryIO]) -> None:
        """
        Write the PDF to a path or a binary file object.

        Parent directories of a path target are created.
        """
        if isinstance(target, (str, Path)):
            target = Path(target)
            target.parent.mkdir(parents=True, exist_ok=True)
            target = str(target)

        geometry = self.document.geometry
        pdf = canvas.Canvas(target, pagesize=(geometry.width * mm, geometry.height * mm))
        pdf.setTitle(Path(self.document.filename).stem)
        self.draw(pdf)
        pdf.save()
        _log_debug(f"Wrote {self.document.page_count} page(s) for {self.document.filename}")


def write_pdf(document: Document, output_path: Union[str, Path]) -> Path:
    """Write a Document to output_path and return the path."""
    output_path = Path(output_path)
    PDFWriter(document).write(output_path)
    return output_path


def pdf_bytes(document: Document) -> bytes:
    """Render a Document to PDF bytes in memory."""
    buffer = BytesIO()
    PDFWriter(document).write(buffer)
    return buffer.getvalue()
