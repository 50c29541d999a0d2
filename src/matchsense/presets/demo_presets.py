"""
Demo Presets for MatchSense Sessions

Pre-configured session scenarios for common accessibility use cases.
Each preset defines a complete parameter set for SimulationSession.

Usage:
    from matchsense.presets import VISUAL_STANDARD, get_preset

    # Use preset directly
    params = VISUAL_STANDARD

    # Or load by name
    params = get_preset("visual_standard")
    session = SimulationSession.from_preset("visual_standard")
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Preset Definitions
# =============================================================================


VISUAL_STANDARD: dict[str, Any] = {
    "name": "Visual Standard",
    "description": (
        "Directional indicator feed for deaf and hard-of-hearing viewers. "
        "Default emotion weighting, 50 ms fusion."
    ),
    "mode": "deaf",
    "emotion_weights": {"excitement": 0.4, "focus": 0.3, "stress": 0.3},
    "frame_interval_ms": 1000.0 / 60.0,
    "emotion_interval_ms": 1000.0,
    "fusion_interval_ms": 50.0,
    "random_seed": 42,
}


AUDIO_STANDARD: dict[str, Any] = {
    "name": "Spatial Audio Standard",
    "description": (
        "Spatial-audio feed for blind and low-vision listeners. "
        "Default emotion weighting, 50 ms fusion."
    ),
    "mode": "blind",
    "emotion_weights": {"excitement": 0.4, "focus": 0.3, "stress": 0.3},
    "frame_interval_ms": 1000.0 / 60.0,
    "emotion_interval_ms": 1000.0,
    "fusion_interval_ms": 50.0,
    "random_seed": 42,
}


HIGH_EXCITEMENT: dict[str, Any] = {
    "name": "High Excitement Derby",
    "description": (
        "Excitement-led weighting for big-match atmosphere. The indicator "
        "speeds up and pitch rises more sharply with crowd excitement."
    ),
    "mode": "deaf",
    "emotion_weights": {"excitement": 0.6, "focus": 0.2, "stress": 0.2},
    "frame_interval_ms": 1000.0 / 60.0,
    "emotion_interval_ms": 1000.0,
    "fusion_interval_ms": 50.0,
    "random_seed": 7,
}


LOW_LATENCY_AUDIO: dict[str, Any] = {
    "name": "Low-Latency Audio",
    "description": (
        "Spatial-audio feed with faster fusion (25 ms) and emotion "
        "sampling (500 ms) for tighter audio tracking."
    ),
    "mode": "blind",
    "emotion_weights": {"excitement": 0.4, "focus": 0.3, "stress": 0.3},
    "frame_interval_ms": 1000.0 / 60.0,
    "emotion_interval_ms": 500.0,
    "fusion_interval_ms": 25.0,
    "random_seed": 42,
}


PRESETS: dict[str, dict[str, Any]] = {
    "visual_standard": VISUAL_STANDARD,
    "audio_standard": AUDIO_STANDARD,
    "high_excitement": HIGH_EXCITEMENT,
    "low_latency_audio": LOW_LATENCY_AUDIO,
}


# =============================================================================
# Preset Access Functions
# =============================================================================


def list_presets() -> list[str]:
    """
    List all available preset names.

    Returns
    -------
    list[str]
        List of preset keys.
    """
    return list(PRESETS.keys())


def get_preset(name: str) -> dict[str, Any]:
    """
    Get a preset by name.

    Parameters
    ----------
    name : str
        Preset name (case-insensitive, spaces and dashes allowed).

    Returns
    -------
    dict
        Preset parameter dictionary.

    Raises
    ------
    KeyError
        If preset name not found.

    Examples
    --------
    >>> preset = get_preset("audio_standard")
    >>> preset["mode"]
    'blind'

    >>> preset = get_preset("Visual Standard")  # Also works
    >>> preset["fusion_interval_ms"]
    50.0
    """
    normalized = name.lower().replace(" ", "_").replace("-", "_")

    if normalized not in PRESETS:
        available = ", ".join(list_presets())
        raise KeyError(
            f"Preset '{name}' not found. Available presets: {available}"
        )

    # Copy so callers cannot modify the shared definition
    preset = dict(PRESETS[normalized])
    preset["emotion_weights"] = dict(preset["emotion_weights"])
    return preset


def get_preset_names_and_descriptions() -> list[tuple[str, str, str]]:
    """
    Get all preset names with their display names and descriptions.

    Returns
    -------
    list[tuple[str, str, str]]
        List of (key, display_name, description) tuples.
    """
    result = []
    for key, preset in PRESETS.items():
        result.append((key, preset["name"], preset["description"]))
    return result


def preset_to_config(preset: dict[str, Any]) -> dict[str, Any]:
    """Convert a flat preset into the sectioned config layout."""
    return {
        "session": {
            "mode": preset["mode"],
            "random_seed": preset["random_seed"],
        },
        "frame": {"interval_ms": preset["frame_interval_ms"]},
        "emotion": {"interval_ms": preset["emotion_interval_ms"]},
        "fusion": {
            "interval_ms": preset["fusion_interval_ms"],
            "emotion_weights": dict(preset["emotion_weights"]),
        },
    }
