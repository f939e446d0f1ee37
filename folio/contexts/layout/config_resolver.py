"""
Layout Preset Resolution

Applies named layout presets over the default LayoutSettings. Presets are
composable and can override each other, allowing flexible combination of
spacing, type sizes and margins.

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> settings = resolve_settings(["spacing_compact", "type_large"])

    # Defaults only
    >>> settings = resolve_settings([])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.layout.styles import LayoutSettings

load_dotenv()
LAYOUT_PRESETS_PATH = Path(
    os.getenv(
        "LAYOUT_PRESETS_PATH",
        str(Path(__file__).resolve().parents[3] / "configs" / "layout_presets.yaml"),
    )
)


def load_layout_presets(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load layout_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: spacing.compact -> spacing_compact

    Args:
        config_path: Optional path to config file (defaults to LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"spacing_compact": {...}, "type_large": {...}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in (nested or {}).items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def apply_presets(
    settings: LayoutSettings,
    preset_names: List[str],
    config_path: Optional[Path] = None,
) -> LayoutSettings:
    """
    Apply named presets to layout settings.

    Presets are merged in order with OmegaConf, later presets overriding
    earlier ones. Keys must match the LayoutSettings structure.

    Args:
        settings: Base settings (left untouched)
        preset_names: Preset names, e.g. ["spacing_compact", "margins_narrow"]
        config_path: Optional path to layout_presets.yaml

    Returns:
        New LayoutSettings with presets applied

    Raises:
        ValueError: If a preset is unknown or does not fit the settings structure
    """
    if not preset_names:
        return settings

    presets_dict = load_layout_presets(config_path)

    merged = OmegaConf.create(settings.to_dict())
    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = list(presets_dict.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")
        merged = OmegaConf.merge(merged, OmegaConf.create(presets_dict[preset_name]))

    try:
        return LayoutSettings.from_dict(OmegaConf.to_container(merged, resolve=True))
    except TypeError as e:
        raise ValueError(f"Presets {preset_names} do not match the layout settings: {e}") from e


def resolve_settings(
    preset_names: Optional[List[str]] = None, config_path: Optional[Path] = None
) -> LayoutSettings:
    """Default settings with the given presets applied."""
    return apply_presets(LayoutSettings(), preset_names or [], config_path)
