"""
Layout context logger.

Provides logging interface for the layout context with automatic [layout] prefix.
All layout modules should import from this module, not from loguru directly.

The layout engine is pure and synchronous; it only emits DEBUG records so a
conversion is silent unless the caller configured a file sink.
"""

from loguru import logger

CONTEXT_PREFIX = "[layout]"


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_normalization_result(result) -> None:
    """Log block counts after normalizing a document."""
    counts = {}
    for block in result.blocks:
        counts[block.kind] = counts.get(block.kind, 0) + 1
    summary = ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items()))
    _log_debug(f"Classified {len(result.blocks)} blocks ({summary})")
    if result.discarded_lines:
        _log_debug(f"  Discarded {result.discarded_lines} lines")


def log_page_break(page_number: int, cursor_y: float, height: float) -> None:
    """Log a page break triggered by the pagination manager."""
    _log_debug(
        f"Page break -> page {page_number} (cursor {cursor_y:.1f}mm, needed {height:.1f}mm)"
    )


def log_overflowing_word(word: str, width: float, max_width: float) -> None:
    """Log a single token that is wider than the line it sits on."""
    _log_warning(f"Word wider than line ({width:.1f}mm > {max_width:.1f}mm): {word!r}")


def log_layout_result(document) -> None:
    """Log summary of a laid-out document."""
    _log_debug(
        f"Laid out {len(document.primitives)} primitives on {document.page_count} page(s)"
    )
