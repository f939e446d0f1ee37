"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from loguru import logger

from folio.contexts.layout.styles import LayoutSettings
from folio.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def rendering_provenance(
    settings: LayoutSettings, preset_names: Optional[List[str]] = None
) -> Dict[str, str]:
    """Layout details recorded at the top of render.log."""
    geometry = settings.geometry
    return {
        "Presets": ", ".join(preset_names) if preset_names else "none",
        "Page": (
            f"{geometry.width:g} x {geometry.height:g} mm, {geometry.margin:g} mm margins"
        ),
        "Font family": settings.font_family,
        "Body sizes": (
            f"paragraph {settings.style_for('paragraph').font_size:g}pt, "
            f"bullet {settings.style_for('bullet').font_size:g}pt"
        ),
    }


def setup_rendering_logger(
    log_dir: Path,
    settings: Optional[LayoutSettings] = None,
    preset_names: Optional[List[str]] = None,
) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        settings: Resolved layout settings (defaults to LayoutSettings())
        preset_names: Presets the settings were resolved from

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir, settings, ["spacing_compact"])
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        provenance=rendering_provenance(settings or LayoutSettings(), preset_names),
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(source_name: str, output_path: Path, presets=None) -> None:
    """Log start of a conversion with context."""
    _log_info(f"Rendering: {source_name}")
    _log_debug(f"  Output: {output_path}")
    if presets:
        _log_debug(f"  Presets: {', '.join(presets)}")


def log_render_result(result, elapsed_time: float) -> None:
    """
    Log conversion result.

    Args:
        result: ConversionResult from convert_resume()
        elapsed_time: Time taken to lay out and write the PDF
    """
    document = result.document
    _log_success(f"{document.filename}: {document.page_count} page(s) ({elapsed_time:.2f}s)")
    _log_debug(f"  Blocks: {len(result.blocks)}")
    _log_debug(f"  Text runs: {len(document.text_runs)}")
    _log_debug(f"  Links: {len(document.links)}")
    if result.pdf_path:
        _log_debug(f"  PDF: {result.pdf_path}")


def log_render_failure(source_name: str, error: Exception) -> None:
    """Log a conversion that raised."""
    _log_error(f"Rendering failed: {source_name}")
    for line in str(error).splitlines():
        _log_error(f"  {line}")


def log_validation_start(document_name: str, pdf_path: Path) -> None:
    """Log start of validation."""
    _log_info(f"Validating: {document_name}")
    _log_debug(f"  PDF: {pdf_path}")


def log_validation_result(document_name: str, result) -> None:
    """
    Log validation result with all issues.

    Args:
        document_name: Output document identifier
        result: ValidationResult from validate_document()
    """
    if result.is_valid:
        _log_success(f"{document_name}: valid ({result.page_count} page(s))")
        return

    _log_warning(f"{document_name}: {len(result.issues)} issue(s)")
    for i, issue in enumerate(result.issues, 1):
        _log_warning(f"  Issue {i}: {issue}")
