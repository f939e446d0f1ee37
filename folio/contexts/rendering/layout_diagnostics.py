"""
Layout diagnostics for rendered resume PDFs.

Compares a written PDF against the Document the layout engine produced:
the engine knows which page every section header was placed on, the PDF
is re-read with pdfplumber and each header is searched for as a whole line.

Detection capabilities:
- Page count drift: the PDF has more or fewer pages than laid out
- Displaced sections: a header landed on a different page than intended
- Missing sections: a header could not be found at all
- Missing name: the candidate name is not on page 1

Section headers are matched in document order; each search starts where the
previous header was found, so a section name that also appears in body text
earlier in the resume does not produce a false match.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from folio.contexts.layout.blocks import Block, Name, SectionHeader
from folio.contexts.layout.document import Document
from folio.utils.pdf_processing import PDFDocument, normalize_for_matching

# Fonts the PDF backend can emit (substring match on PDF font names)
RESUME_TEXT_FONTS = ["Helvetica", "Times", "Courier"]

# Character count for prefix matching
MATCH_LENGTH = 30


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {intended})"

    # Page-level
    NAME_NOT_FOUND = "Name not found on page 1"

    # Section-level
    SECTION_NOT_FOUND = "'{section}': not found in PDF (intended page {intended})"
    SECTION_DISPLACED = "'{section}': found on page {actual} (intended page {intended})"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class SectionDiagnostics(Diagnostics):
    """Diagnostics for a single section header."""

    section_name: str = ""
    intended_page: int = 0
    actual_page: Optional[int] = None  # None means not found in PDF

    @property
    def found(self) -> bool:
        return self.actual_page is not None

    @property
    def displacement(self) -> int:
        """Pages between intended and actual placement (0 if not found)."""
        return 0 if self.actual_page is None else self.actual_page - self.intended_page

    def get_issues(self) -> List[str]:
        issues = []
        if not self.found:
            issues.append(
                IssueTemplates.SECTION_NOT_FOUND.format(
                    section=self.section_name,
                    intended=self.intended_page,
                )
            )
        elif self.displacement != 0:
            issues.append(
                IssueTemplates.SECTION_DISPLACED.format(
                    section=self.section_name,
                    actual=self.actual_page,
                    intended=self.intended_page,
                )
            )
        return issues


@dataclass
class PageDiagnostics(Diagnostics):
    """Diagnostics for a single intended page."""

    intended_page_number: int = 0
    name_found: Optional[bool] = None  # Only checked on page 1; None = not applicable

    def get_issues(self) -> List[str]:
        issues = []
        if self.name_found is False:
            issues.append(IssueTemplates.NAME_NOT_FOUND)
        return issues


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the entire document."""

    actual_page_count: int = 0
    intended_page_count: int = 0

    def get_issues(self) -> List[str]:
        issues = []
        if self.actual_page_count != self.intended_page_count:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    actual=self.actual_page_count,
                    intended=self.intended_page_count,
                )
            )
        return issues

    @property
    def sections(self) -> List[SectionDiagnostics]:
        return [
            section
            for page in self.components
            for section in page.components
            if isinstance(section, SectionDiagnostics)
        ]


# =============================================================================
# Helper Functions
# =============================================================================


def intended_section_pages(blocks: Sequence[Block], document: Document) -> List[Tuple[str, int]]:
    """
    Pair each section header with the page the engine placed it on.

    The renderer draws exactly one rule per section header, in block order,
    so the n-th rule carries the page of the n-th header.
    """
    headers = [block.name for block in blocks if isinstance(block, SectionHeader)]
    rules = document.rules
    if len(headers) != len(rules):
        raise ValueError(
            f"Document does not match blocks: {len(headers)} section headers, {len(rules)} rules"
        )
    return [(name, rule.page) for name, rule in zip(headers, rules)]


def _find_header_after(
    pdf: PDFDocument, section_name: str, start: Tuple[int, int]
) -> Optional[Tuple[int, int]]:
    """First whole-line match of section_name at or after (page, line_idx)."""
    for location in pdf.find_all(section_name, whole_line=True):
        if location >= start:
            return location
    return None


def _name_on_first_page(pdf: PDFDocument, name: str) -> bool:
    prefix = normalize_for_matching(name.replace("**", ""))[:MATCH_LENGTH]
    if not prefix:
        return True
    return prefix in pdf.get_character_stream(1)


# =============================================================================
# Main Analysis Function
# =============================================================================


def analyze_layout(
    blocks: Sequence[Block],
    document: Document,
    pdf_path: Union[str, Path],
) -> DocumentDiagnostics:
    """
    Analyze a written PDF against the layout it was drawn from.

    Builds a hierarchical diagnostics tree (Document -> Page -> Section).

    Args:
        blocks: Block sequence the document was laid out from
        document: Laid-out Document
        pdf_path: Path to the written PDF

    Returns:
        DocumentDiagnostics tree. Call .get_inherited_issues() for all issues,
        or .is_valid to check if document passes validation.
    """
    pdf = PDFDocument(Path(pdf_path), allowed_fonts=RESUME_TEXT_FONTS)

    document_diagnostics = DocumentDiagnostics(
        actual_page_count=pdf.page_count,
        intended_page_count=document.page_count,
    )

    page_diagnostics = {
        page.index: PageDiagnostics(intended_page_number=page.index) for page in document.pages
    }

    names = [block.text for block in blocks if isinstance(block, Name)]
    if names:
        page_diagnostics[1].name_found = _name_on_first_page(pdf, names[0])

    search_from = (1, 0)
    for section_name, intended_page in intended_section_pages(blocks, document):
        section_diagnostics = SectionDiagnostics(
            section_name=section_name,
            intended_page=intended_page,
        )

        location = _find_header_after(pdf, section_name, search_from)
        if location is not None:
            section_diagnostics.actual_page = location[0]
            search_from = (location[0], location[1] + 1)

        page_diagnostics[intended_page].components.append(section_diagnostics)

    document_diagnostics.components.extend(
        page_diagnostics[index] for index in sorted(page_diagnostics)
    )
    return document_diagnostics
