"""
Pipeline event logging utilities for FOLIO (Tier 2 logging).

Appends one JSON object per line to the pipeline events file so conversions
and validations can be audited or tailed across runs.

For detailed within-context logging (Tier 1), use folio.utils.logger instead.

Usage:
    from folio.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="render_completed",
        document_name="jane_doe_modified.pdf",
        source="rendering",
        page_count=2,
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "folio_pipeline_events.log"))
)


def log_pipeline_event(
    event_type: str,
    document_name: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Log an event to the master pipeline event log.

    Args:
        event_type: Type of event (e.g., "render_completed", "validation_completed")
        document_name: Output document identifier (usually the PDF filename)
        source: Event source (e.g., "rendering", "cli")
        events_file: Override for the events file (defaults to PIPELINE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    events_file = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "document_name": document_name,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    n: int = 10,
    document_name: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> list[dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        document_name: Filter to only events for this document (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override for the events file (defaults to PIPELINE_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if document_name:
        events = [e for e in events if e.get("document_name") == document_name]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
