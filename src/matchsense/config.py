"""
Configuration Management for MatchSense

Loads session parameters from YAML config files with fallback to
hardcoded defaults in physics.constants.

Usage:
    from matchsense.config import load_config, get_config_path

    cfg = load_config()  # Load default config
    cfg = load_config("configs/custom.yaml")  # Load custom config

    # Access parameters
    interval = cfg["fusion"]["interval_ms"]
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

# File is at: src/matchsense/config.py
# Project root: src/matchsense -> src -> project_root
_THIS_FILE = Path(__file__)
PROJECT_ROOT = _THIS_FILE.parent.parent.parent

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "default_session.yaml"


def get_config_path(config_name: str = "default_session.yaml") -> Path:
    """
    Get the full path to a config file.

    Parameters
    ----------
    config_name : str
        Name of the config file (with or without .yaml extension).

    Returns
    -------
    Path
        Full path to the config file.
    """
    if not config_name.endswith(".yaml"):
        config_name = f"{config_name}.yaml"
    return PROJECT_ROOT / "configs" / config_name


def get_default_config() -> dict[str, Any]:
    """
    Return hardcoded default configuration.

    Used as fallback when config file is missing.
    """
    # Import here to avoid circular imports
    from matchsense.physics.constants import (
        DEFAULT_EMOTION_WEIGHTS,
        DEFAULT_RANDOM_SEED,
        EMOTION_INTERVAL_MS,
        FRAME_INTERVAL_MS,
        FUSION_INTERVAL_MS,
    )

    return {
        "session": {
            "mode": "deaf",
            "random_seed": DEFAULT_RANDOM_SEED,
        },
        "frame": {
            "interval_ms": FRAME_INTERVAL_MS,
        },
        "emotion": {
            "interval_ms": EMOTION_INTERVAL_MS,
        },
        "fusion": {
            "interval_ms": FUSION_INTERVAL_MS,
            "emotion_weights": dict(DEFAULT_EMOTION_WEIGHTS),
        },
    }


def merge_with_defaults(config: dict[str, Any]) -> dict[str, Any]:
    """
    Fill sections and keys missing from ``config`` with defaults.

    The input is not modified.
    """
    merged = get_default_config()
    for section, values in config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(copy.deepcopy(values))
        else:
            merged[section] = copy.deepcopy(values)
    return merged


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file. If None, uses default_session.yaml.
        If file doesn't exist, falls back to hardcoded defaults.

    Returns
    -------
    dict
        Configuration dictionary, with missing keys filled from defaults.

    Raises
    ------
    None
        This function never raises; it gracefully falls back to defaults.

    Examples
    --------
    >>> cfg = load_config()
    >>> cfg["fusion"]["interval_ms"]
    50.0
    >>> cfg["session"]["mode"]
    'deaf'
    """
    config, _ = load_config_safe(config_path)
    return config


def load_config_safe(
    config_path: str | Path | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Load configuration with detailed error reporting.

    Unlike load_config(), this function returns error messages
    for debugging and user feedback.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file.

    Returns
    -------
    tuple[dict, list[str]]
        (config_dict, error_messages). Config is always loadable (defaults
        used on error). error_messages is empty if load succeeded.

    Examples
    --------
    >>> cfg, errors = load_config_safe("bad_config.yaml")
    >>> if errors:
    ...     print("Warnings:", errors)
    """
    errors = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        errors.append(f"Config file not found: {config_path}. Using defaults.")
        return get_default_config(), errors

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        errors.append(
            f"YAML parse error in {config_path}: {e}. "
            "Check indentation and syntax. Using defaults."
        )
        return get_default_config(), errors
    except IOError as e:
        errors.append(f"Cannot read {config_path}: {e}. Using defaults.")
        return get_default_config(), errors

    if config is None:
        errors.append(f"Config file is empty: {config_path}. Using defaults.")
        return get_default_config(), errors
    if not isinstance(config, dict):
        errors.append(
            f"Config file {config_path} must contain a mapping. Using defaults."
        )
        return get_default_config(), errors

    return merge_with_defaults(config), errors


def save_config(config: dict[str, Any], config_path: str | Path) -> None:
    """
    Save configuration to a YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    config_path : str or Path
        Output path for the YAML file.
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
