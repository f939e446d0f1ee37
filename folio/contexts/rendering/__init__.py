"""
Rendering Context

Responsibilities:
- Measures text with reportlab font metrics
- Writes laid-out Documents to PDF
- Renders HTML previews of classified resumes
- Validates written PDFs against the layout they were drawn from

Owns: Font metrics, PDF output, previews, output management
Never: Decides line roles or page breaks
"""

from folio.contexts.rendering.converter import (
    ConversionResult,
    convert_resume,
    render_resume_pdf,
)
from folio.contexts.rendering.metrics import helvetica_metrics, make_metrics
from folio.contexts.rendering.pdf_writer import PDFWriter, pdf_bytes, write_pdf
from folio.contexts.rendering.preview import PreviewRenderer
from folio.contexts.rendering.validator import ValidationResult, validate_document
