"""
Demo Presets for MatchSense

Pre-configured session scenarios for common accessibility use cases.
"""

from __future__ import annotations

from matchsense.presets.demo_presets import (
    AUDIO_STANDARD,
    HIGH_EXCITEMENT,
    LOW_LATENCY_AUDIO,
    PRESETS,
    VISUAL_STANDARD,
    get_preset,
    get_preset_names_and_descriptions,
    list_presets,
    preset_to_config,
)

__all__ = [
    "VISUAL_STANDARD",
    "AUDIO_STANDARD",
    "HIGH_EXCITEMENT",
    "LOW_LATENCY_AUDIO",
    "PRESETS",
    "get_preset",
    "get_preset_names_and_descriptions",
    "list_presets",
    "preset_to_config",
]
