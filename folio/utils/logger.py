"""
Logger setup for Tier 1 (detailed) logging.

Every render run gets its own log directory; the first lines of each log file
are a provenance header recording the folio version, the invocation and the
layout the run used, so a PDF can be traced back to the settings that
produced it. Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from folio import __version__

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: Optional[Mapping[str, object]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to `<log_dir>/<context_name>.log` and the console.

    The file sink records DEBUG and up (layout decisions included); the
    console only shows console_level and up.

    Args:
        context_name: Context identifier, used as the log file stem ("render")
        log_dir: Directory for this run (created if missing)
        provenance: Run details for the header, e.g. {"Presets": "spacing_compact"}
        console_level: Minimum level echoed to the console

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(provenance)
    return log_file


def log_provenance(provenance: Optional[Mapping[str, object]] = None) -> None:
    """Write the provenance header: folio version, invocation, then run details."""
    logger.info("=" * 80)
    logger.info(f"Folio: {__version__} (Python {sys.version.split()[0]})")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")

    for key, value in (provenance or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
