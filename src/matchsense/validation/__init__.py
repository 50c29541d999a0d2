"""
Validation Module for MatchSense

Provides emotion weight, tick interval and configuration file validation
with actionable feedback for the configuration layer.
"""

from __future__ import annotations

from matchsense.validation.input_validators import (
    ConfigValidationResult,
    IntervalValidationResult,
    WeightsValidationResult,
    validate_config_file,
    validate_emotion_weights,
    validate_tick_intervals,
)

__all__ = [
    "WeightsValidationResult",
    "IntervalValidationResult",
    "ConfigValidationResult",
    "validate_emotion_weights",
    "validate_tick_intervals",
    "validate_config_file",
]
