"""
Pagination manager.

Owns the vertical cursor and the page list for one conversion. Callers ask
for vertical space with `reserve()`; when the request does not fit above the
bottom margin a new page is started first. All distances are millimetres,
measured from the top edge of the page.
"""

from dataclasses import dataclass
from typing import List

from folio.contexts.layout.logger import log_page_break


@dataclass
class Page:
    """
    Page state owned by the Paginator.

    Attributes:
        index: 1-based page number in emission order
        cursor_y: Next free vertical position (mm from the top edge)
        used_height: Sum of heights placed on this page
    """

    index: int
    cursor_y: float
    used_height: float = 0.0


class Paginator:
    """
    Vertical cursor and page list for one document.

    Args:
        page_height: Page height (mm)
        margin: Top and bottom margin (mm)

    Example:
        >>> paginator = Paginator(page_height=297.0, margin=20.0)
        >>> paginator.reserve(5.0)
        20.0
        >>> paginator.cursor_y
        25.0
    """

    def __init__(self, page_height: float, margin: float):
        self.page_height = page_height
        self.margin = margin
        self.pages: List[Page] = [Page(index=1, cursor_y=margin)]

    @property
    def current_page(self) -> Page:
        return self.pages[-1]

    @property
    def page_number(self) -> int:
        return self.current_page.index

    @property
    def cursor_y(self) -> float:
        return self.current_page.cursor_y

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin

    def new_page(self) -> Page:
        """Append a page and reset the cursor to the top margin."""
        page = Page(index=len(self.pages) + 1, cursor_y=self.margin)
        self.pages.append(page)
        return page

    def fits(self, height: float) -> bool:
        return self.cursor_y + height <= self.bottom_limit

    def reserve(self, height: float, keep_with_next: float = 0.0) -> float:
        """
        Claim vertical space for content about to be placed.

        Args:
            height: Space the content consumes (mm)
            keep_with_next: Minimum free space required below the cursor
                            (keeps headers together with their first line)

        Returns:
            The y position (mm from top) where the content starts
        """
        needed = max(height, keep_with_next)
        page = self.current_page

        # An empty page never breaks again; oversized content is placed as is
        if not self.fits(needed) and page.used_height > 0:
            log_page_break(page.index + 1, page.cursor_y, needed)
            page = self.new_page()

        y = page.cursor_y
        page.cursor_y += height
        page.used_height += height
        return y

    def skip(self, gap: float) -> None:
        """
        Add blank spacing without placing content.

        Spacing at the top of a fresh page is dropped.
        """
        page = self.current_page
        if page.used_height == 0:
            return
        page.cursor_y += gap
