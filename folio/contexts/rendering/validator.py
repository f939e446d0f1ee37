"""
Rendered-PDF validation with actionable feedback.

Re-reads a written resume PDF, runs layout diagnostics against the Document
it was drawn from, and records the outcome in the pipeline event log.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from folio.contexts.layout.blocks import Block
from folio.contexts.layout.document import Document
from folio.contexts.rendering.layout_diagnostics import DocumentDiagnostics, analyze_layout
from folio.contexts.rendering.logger import log_validation_result, log_validation_start
from folio.utils.event_logging import log_pipeline_event


@dataclass
class ValidationResult:
    """
    Result of PDF validation.

    Attributes:
        is_valid: Whether the PDF passes all validation checks
        diagnostics: Layout diagnostics from the Document/PDF comparison
        feedback: Actionable feedback (only if invalid)
    """

    is_valid: bool
    diagnostics: DocumentDiagnostics
    feedback: Optional[str] = None

    @property
    def issues(self) -> List[str]:
        """All issues from diagnostics hierarchy."""
        return self.diagnostics.get_inherited_issues()

    @property
    def page_count(self) -> int:
        """Actual page count from PDF."""
        return self.diagnostics.actual_page_count


def generate_feedback_report(diagnostics: DocumentDiagnostics) -> str:
    """
    Generate actionable feedback for a failed validation.

    Reports:
    - Sections not found in the PDF
    - Sections that landed on another page than laid out
    - Page count drift
    """
    lines = []

    recommendations_counter = 0
    recommendations_counter_str = "\n#{counter}"

    for section_diag in diagnostics.sections:
        if section_diag.found and section_diag.displacement == 0:
            continue

        section = section_diag.section_name
        page = section_diag.intended_page

        recommendations_counter += 1
        lines.append(recommendations_counter_str.format(counter=recommendations_counter))

        if not section_diag.found:
            lines.append(f"issue:section_missing::section:{section}::page:{page}")
            lines.append(f"action: Check that the PDF font covers the text of '{section}'")
        else:
            lines.append(
                f"issue:section_displaced::section:{section}::page:{page}"
                f"::actual_page:{section_diag.actual_page}"
            )
            lines.append("action: Re-render with the same font metrics used for layout")

    if diagnostics.actual_page_count != diagnostics.intended_page_count:
        recommendations_counter += 1
        lines.append(recommendations_counter_str.format(counter=recommendations_counter))
        lines.append(
            f"issue:page_count::actual:{diagnostics.actual_page_count}"
            f"::intended:{diagnostics.intended_page_count}"
        )
        lines.append("action: Check that the PDF was written from this document")

    return "\n".join(lines)


def validate_document(
    blocks: Sequence[Block],
    document: Document,
    pdf_path: Union[str, Path],
    events_file: Optional[Path] = None,
) -> ValidationResult:
    """
    Validate a written PDF against the Document it was drawn from.

    Orchestration function that:
    1. Runs layout diagnostics (Document vs re-read PDF)
    2. Generates actionable feedback if validation fails
    3. Logs to both Tier 1 (render.log) and Tier 2 (pipeline events)

    Args:
        blocks: Block sequence the document was laid out from
        document: Laid-out Document
        pdf_path: Path to the written PDF
        events_file: Override for the pipeline events file

    Returns:
        ValidationResult with diagnostics and feedback (if invalid)

    Raises:
        FileNotFoundError: If pdf_path does not exist
    """
    pdf_path = Path(pdf_path)
    log_validation_start(document.filename, pdf_path)

    diagnostics = analyze_layout(blocks, document, pdf_path)
    feedback = None if diagnostics.is_valid else generate_feedback_report(diagnostics)

    result = ValidationResult(
        is_valid=diagnostics.is_valid,
        diagnostics=diagnostics,
        feedback=feedback,
    )

    log_validation_result(document.filename, result)
    log_pipeline_event(
        event_type="validation_completed",
        document_name=document.filename,
        source="rendering",
        events_file=events_file,
        is_valid=result.is_valid,
        page_count=result.page_count,
        validation_issues=result.issues,
    )

    return result
