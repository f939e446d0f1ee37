"""Unit tests for the pagination manager."""

import pytest

from folio.contexts.layout.pagination import Paginator


@pytest.mark.unit
class TestReserve:
    """Tests for Paginator.reserve()."""

    def test_first_placement_at_top_margin(self):
        paginator = Paginator(page_height=297, margin=20)

        assert paginator.reserve(5) == 20
        assert paginator.cursor_y == 25
        assert paginator.page_number == 1

    def test_break_when_content_does_not_fit(self):
        paginator = Paginator(page_height=100, margin=10)
        paginator.reserve(70)

        y = paginator.reserve(15)

        assert paginator.page_number == 2
        assert y == 10
        assert paginator.cursor_y == 25

    def test_exact_fit_does_not_break(self):
        paginator = Paginator(page_height=100, margin=10)
        paginator.reserve(70)

        assert paginator.reserve(10) == 80
        assert paginator.page_number == 1

    def test_keep_with_next(self):
        """Headers needing room below them move to the next page."""
        paginator = Paginator(page_height=100, margin=10)
        paginator.reserve(70)

        y = paginator.reserve(5, keep_with_next=15)

        assert paginator.page_number == 2
        assert y == 10
        # Only the block's own height is consumed
        assert paginator.cursor_y == 15

    def test_oversized_content_on_fresh_page(self):
        """An empty page never breaks again, so oversized content cannot loop."""
        paginator = Paginator(page_height=100, margin=10)

        assert paginator.reserve(500) == 10
        assert paginator.page_number == 1
        assert len(paginator.pages) == 1

    def test_never_exceeds_printable_area(self):
        paginator = Paginator(page_height=297, margin=20)

        placements = []
        for _ in range(200):
            y = paginator.reserve(5)
            placements.append((paginator.page_number, y))

        assert all(y + 5 <= 297 - 20 for _, y in placements)
        assert [page for page, _ in placements] == sorted(page for page, _ in placements)
        assert [page.index for page in paginator.pages] == list(range(1, paginator.page_number + 1))


@pytest.mark.unit
class TestSkip:
    """Tests for Paginator.skip()."""

    def test_skip_adds_gap(self):
        paginator = Paginator(page_height=297, margin=20)
        paginator.reserve(5)
        paginator.skip(2)

        assert paginator.reserve(5) == 27

    def test_skip_on_fresh_page_is_dropped(self):
        paginator = Paginator(page_height=297, margin=20)
        paginator.skip(2)

        assert paginator.reserve(5) == 20

    def test_gap_does_not_count_as_content(self):
        paginator = Paginator(page_height=297, margin=20)
        paginator.reserve(5)
        paginator.skip(3)

        assert paginator.current_page.used_height == 5
