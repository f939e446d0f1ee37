"""
PDF processing utilities for reading back rendered resumes.

Main class:
    PDFDocument: Parsed PDF with line-level text extraction and search.

Helper functions:
    page_count: Quick page count without full extraction.
    normalize_for_matching: Text normalization for fuzzy matching.
    is_text_font: Font family filtering for PDF extraction.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def is_text_font(fontname: str, allowed_fonts: List[str]) -> bool:
    """Check if PDF font matches any allowed font family substring."""
    # Embedded subsets carry prefixes like "ABCDEE+Helvetica-Bold"
    if "+" in fontname:
        fontname = fontname.split("+")[1]
    return any(allowed in fontname for allowed in allowed_fonts)


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


class PDFDocument:
    """
    Parsed PDF with line-level text extraction.

    Resumes produced by the layout engine are single-column, so each page is
    extracted as one top-to-bottom list of lines. Characters are clustered by
    Y coordinate (bold and regular runs share a baseline but not always a
    "top") and joined in X order. Page data is lazily loaded and cached.

    Args:
        pdf_path: Path to PDF file
        allowed_fonts: Font family substrings to include (None = all fonts)
        y_tolerance: Max Y-distance (points) to group characters as same line

    Example:
        >>> pdf = PDFDocument(Path("resume.pdf"), allowed_fonts=["Helvetica"])
        >>> for line in pdf.get_lines(page=1):
        ...     print(line)
    """

    def __init__(
        self,
        pdf_path: Union[str, Path],
        allowed_fonts: Optional[List[str]] = None,
        y_tolerance: float = 3.0,
    ):
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        self.pdf_path = pdf_path
        self.allowed_fonts = allowed_fonts
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[str]]] = None
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.pdf_path) or 0
        return self._page_count

    def _extract_pages(self, max_pages: int = 100) -> Dict[int, List[str]]:
        """Extract text lines for every page (1-indexed)."""
        pages_data: Dict[int, List[str]] = {}

        with pdfplumber.open(self.pdf_path) as pdf:
            for page_num, page in enumerate(pdf.pages[:max_pages], start=1):
                pages_data[page_num] = self._chars_to_lines(page.chars)

        return pages_data

    def _chars_to_lines(self, chars: List) -> List[str]:
        """Convert character list to text lines with font filtering and Y-clustering."""
        if self.allowed_fonts is not None:
            chars = [c for c in chars if is_text_font(c.get("fontname", ""), self.allowed_fonts)]

        text_lines = []
        for char_objs in cluster_by_y_tolerance(chars, tolerance=self.y_tolerance):
            char_objs.sort(key=lambda c: c["x0"])
            text_lines.append("".join(c["text"] for c in char_objs))

        return text_lines

    def _ensure_loaded(self) -> None:
        """Lazily load page data if not already cached."""
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_lines(self, page: int) -> List[str]:
        """
        Get text lines for a specific page (1-indexed), top-to-bottom.

        Returns an empty list if the page doesn't exist.
        """
        self._ensure_loaded()
        return self._pages_cache.get(page, [])

    def get_character_stream(self, page: int) -> str:
        """Normalized character stream of one page (see normalize_for_matching)."""
        return normalize_for_matching("".join(self.get_lines(page)))

    def find(self, text: str, whole_line: bool = False) -> Optional[Tuple[int, int]]:
        """
        Find first occurrence of text in the document.

        Returns:
            Tuple of (page, line_index) for first match, or None.
        """
        result = self.find_all(text, whole_line=whole_line, limit=1)
        return result[0] if result else None

    def find_all(
        self,
        text: str,
        whole_line: bool = False,
        limit: Optional[int] = None,
    ) -> List[Tuple[int, int]]:
        """
        Find all occurrences of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.
            limit: Maximum number of results to return (None = all)

        Returns:
            List of (page, line_index) tuples for each match.
        """
        self._ensure_loaded()

        results: List[Tuple[int, int]] = []
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            for line_idx, line in enumerate(self._pages_cache[page_num]):
                line_norm = normalize_for_matching(line)
                match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                if match:
                    results.append((page_num, line_idx))
                    if limit and len(results) >= limit:
                        return results

        return results
