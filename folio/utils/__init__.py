"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup
- Pipeline event logging
- PDF text extraction
- Timestamps
"""

from folio.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
