"""
Resume text -> PDF conversion.

This module exports:
- convert_resume: pure conversion (text -> blocks -> Document), no I/O
- render_resume_pdf: orchestration (read source, lay out, write PDF, optional
  validation) with Tier 1 logging and pipeline events
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from folio.contexts.layout.blocks import Block
from folio.contexts.layout.config_resolver import resolve_settings
from folio.contexts.layout.document import Document
from folio.contexts.layout.normalizer import normalize_resume
from folio.contexts.layout.renderer import DocumentRenderer
from folio.contexts.layout.styles import LayoutSettings
from folio.contexts.layout.text_flow import MeasureFn
from folio.contexts.rendering.logger import (
    _log_info,
    log_render_failure,
    log_render_result,
    log_render_start,
    setup_rendering_logger,
)
from folio.contexts.rendering.metrics import make_metrics
from folio.contexts.rendering.pdf_writer import write_pdf
from folio.contexts.rendering.validator import ValidationResult, validate_document
from folio.utils.event_logging import log_pipeline_event
from folio.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


@dataclass
class ConversionResult:
    """
    Result of converting one resume.

    Attributes:
        blocks: Canonical block sequence
        document: Laid-out document
        discarded_lines: Input lines dropped by the classifier
        pdf_path: Written PDF (None for in-memory conversions)
        log_dir: Directory holding render.log (orchestrated runs only)
        time_s: Wall time for layout and writing
        validation: Validation result, when requested
    """

    blocks: List[Block]
    document: Document
    discarded_lines: int = 0
    pdf_path: Optional[Path] = None
    log_dir: Optional[Path] = None
    time_s: float = 0.0
    validation: Optional[ValidationResult] = None

    @property
    def filename(self) -> str:
        return self.document.filename

    @property
    def page_count(self) -> int:
        return self.document.page_count


def convert_resume(
    text: str,
    original_filename: Optional[str] = None,
    settings: Optional[LayoutSettings] = None,
    measure_fn: Optional[MeasureFn] = None,
) -> ConversionResult:
    """
    Classify and lay out resume text.

    Args:
        text: Resume text in the markdown-like dialect
        original_filename: Uploaded file name, used for the output name
        settings: Layout settings (defaults to LayoutSettings())
        measure_fn: Font metric (defaults to reportlab metrics for settings.font_family)

    Returns:
        ConversionResult with blocks and Document (no file written)

    Raises:
        MeasurementError: If the font metric fails
    """
    settings = settings or LayoutSettings()
    measure_fn = measure_fn or make_metrics(settings.font_family)

    normalized = normalize_resume(text)
    document = DocumentRenderer(measure_fn, settings).render(
        normalized.blocks, filename=original_filename
    )

    return ConversionResult(
        blocks=normalized.blocks,
        document=document,
        discarded_lines=normalized.discarded_lines,
    )


def render_resume_pdf(
    source_path: Path,
    output_dir: Optional[Path] = None,
    original_filename: Optional[str] = None,
    preset_names: Optional[List[str]] = None,
    validate: bool = False,
    events_file: Optional[Path] = None,
) -> ConversionResult:
    """
    Render a resume text file to PDF with logging and pipeline events.

    Orchestration function that wraps convert_resume():
        - Creates a timestamped log directory with render.log
        - Writes the PDF to output_dir (default: outs/results/YYYY-MM-DD/)
        - Optionally re-reads the PDF and validates the layout
        - Logs render_completed / render_failed pipeline events

    Args:
        source_path: Resume text file (UTF-8)
        output_dir: Directory for the PDF (default: RESULTS_PATH / today)
        original_filename: Name used to derive the output file (default: source file name)
        preset_names: Layout presets to apply, e.g. ["spacing_compact"]
        validate: Validate the written PDF against the layout
        events_file: Override for the pipeline events file

    Returns:
        ConversionResult with pdf_path and log_dir set

    Raises:
        FileNotFoundError: If source_path does not exist
        ValueError: If a preset is unknown
        MeasurementError: If the font metric fails
    """
    source_path = Path(source_path)
    if not source_path.exists():
        raise FileNotFoundError(f"Resume not found: {source_path}")

    original_filename = original_filename or source_path.name
    settings = resolve_settings(preset_names)

    # Create timestamped log directory for this conversion
    log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(log_dir, settings, preset_names)

    output_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH / today()
    log_render_start(source_path.name, output_dir, preset_names)

    start_time = time.time()
    try:
        result = convert_resume(
            source_path.read_text(encoding="utf-8"),
            original_filename=original_filename,
            settings=settings,
        )
        pdf_path = write_pdf(result.document, output_dir / result.filename)
    except Exception as e:
        log_render_failure(source_path.name, e)
        log_pipeline_event(
            event_type="render_failed",
            document_name=original_filename,
            source="rendering",
            events_file=events_file,
            error=str(e),
        )
        raise

    result.pdf_path = pdf_path
    result.log_dir = log_dir
    result.time_s = time.time() - start_time

    log_render_result(result, result.time_s)
    _log_info(f"PDF saved to: {pdf_path}")
    log_pipeline_event(
        event_type="render_completed",
        document_name=result.filename,
        source="rendering",
        events_file=events_file,
        render_time_s=round(result.time_s, 2),
        page_count=result.page_count,
        pdf_path=str(pdf_path),
        presets=list(preset_names or []),
    )

    if validate:
        result.validation = validate_document(
            result.blocks, result.document, pdf_path, events_file=events_file
        )

    return result
