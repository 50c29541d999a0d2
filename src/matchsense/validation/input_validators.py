"""
Input Validators for MatchSense Sessions

Provides validation for:
- Emotion fusion weights (range and sum-to-one)
- Tick interval consistency between the frame, emotion and fusion clocks
- YAML configuration file parsing

Validators never raise. They return result objects carrying errors,
warnings and recovery suggestions so the configuration layer can show
helpful feedback; runtime components turn failed results into
``ConfigurationError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from pathlib import Path
from typing import Any, Mapping

import yaml

from matchsense.physics.constants import (
    DEFAULT_EMOTION_WEIGHTS,
    EMOTION_INTERVAL_MS,
    EMOTION_WEIGHT_TOLERANCE,
    FRAME_INTERVAL_MS,
    FUSION_INTERVAL_MS,
    SUPPORTED_MODES,
)


# =============================================================================
# Validation Result Types
# =============================================================================


@dataclass
class WeightsValidationResult:
    """Result of emotion weight validation.

    Attributes
    ----------
    is_valid : bool
        True if every weight is in [0, 1] and they sum to 1.0.
    weights : dict[str, float]
        The weights being validated.
    total : float
        Sum of the weights.
    warnings : list[str]
        Non-fatal warnings (e.g., an axis switched off).
    errors : list[str]
        Fatal errors (e.g., weights not summing to one).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    weights: dict[str, float]
    total: float
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


@dataclass
class IntervalValidationResult:
    """Result of tick interval validation.

    Attributes
    ----------
    is_valid : bool
        True if all intervals are positive.
    frame_interval_ms : float
        Physics/detection period.
    fusion_interval_ms : float
        Fusion period.
    emotion_interval_ms : float
        Emotion estimation period.
    frames_per_fusion : float
        Physics frames between consecutive fusion ticks.
    warnings : list[str]
        Non-fatal warnings (e.g., fusion faster than physics).
    errors : list[str]
        Fatal errors (e.g., non-positive interval).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    frame_interval_ms: float
    fusion_interval_ms: float
    emotion_interval_ms: float
    frames_per_fusion: float
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


@dataclass
class ConfigValidationResult:
    """Result of YAML configuration file validation.

    Attributes
    ----------
    is_valid : bool
        True if config loaded and validated successfully.
    config : dict | None
        Loaded configuration (None if load failed).
    file_path : Path | None
        Path to the config file (None if using defaults).
    warnings : list[str]
        Non-fatal warnings (e.g., missing optional fields).
    errors : list[str]
        Fatal errors (e.g., parse failures).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    config: dict[str, Any] | None
    file_path: Path | None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


# =============================================================================
# Emotion Weight Validation
# =============================================================================


def validate_emotion_weights(
    weights: Mapping[str, float] | None = None,
    tolerance: float = EMOTION_WEIGHT_TOLERANCE,
) -> WeightsValidationResult:
    """
    Validate fusion weights for the excitement, focus and stress axes.

    Each weight must lie in [0, 1] and the three must sum to 1.0 within
    ``tolerance``.

    Parameters
    ----------
    weights : mapping, optional
        Axis name to weight. Missing axes take their defaults
        (0.4 / 0.3 / 0.3).
    tolerance : float
        Allowed deviation of the sum from 1.0.

    Returns
    -------
    WeightsValidationResult

    Examples
    --------
    >>> validate_emotion_weights({"excitement": 0.4, "focus": 0.3, "stress": 0.3}).is_valid
    True
    >>> validate_emotion_weights({"excitement": 0.9, "focus": 0.3, "stress": 0.3}).is_valid
    False
    """
    merged = dict(DEFAULT_EMOTION_WEIGHTS)
    unknown = []
    for axis, value in (weights or {}).items():
        if axis in merged:
            merged[axis] = value
        else:
            unknown.append(axis)

    warnings = []
    errors = []
    suggestions = []

    for axis in unknown:
        errors.append(
            f"UNKNOWN AXIS: '{axis}' is not an emotion axis "
            f"(expected {', '.join(DEFAULT_EMOTION_WEIGHTS)})."
        )

    for axis, value in merged.items():
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            errors.append(
                f"WEIGHT TYPE: '{axis}' weight must be a number, got {type(value).__name__}."
            )
            continue
        if not math.isfinite(value) or value < 0.0 or value > 1.0:
            errors.append(
                f"WEIGHT RANGE: '{axis}' weight {value} is outside [0, 1]."
            )
        elif value == 0.0:
            warnings.append(
                f"AXIS DISABLED: '{axis}' weight is 0; that emotion has no effect."
            )

    numeric = [v for v in merged.values() if isinstance(v, (int, float))]
    total = float(sum(numeric))

    if not errors and abs(total - 1.0) > tolerance:
        errors.append(
            f"WEIGHT SUM: Emotion weights sum to {total:.6f}, expected 1.0 "
            f"(tolerance {tolerance:g})."
        )
        if total > 0:
            normalized = ", ".join(
                f"{axis}={value / total:.3f}" for axis, value in merged.items()
            )
            suggestions.append(f"Normalize the weights: {normalized}.")

    if errors and not suggestions:
        suggestions.append(
            "Use the defaults: excitement=0.4, focus=0.3, stress=0.3."
        )

    return WeightsValidationResult(
        is_valid=len(errors) == 0,
        weights=merged,
        total=total,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Tick Interval Validation
# =============================================================================


def validate_tick_intervals(
    frame_interval_ms: float = FRAME_INTERVAL_MS,
    fusion_interval_ms: float = FUSION_INTERVAL_MS,
    emotion_interval_ms: float = EMOTION_INTERVAL_MS,
) -> IntervalValidationResult:
    """
    Check that the three clocks have sensible periods.

    Fusion faster than the physics frame only republishes unchanged ball
    states, and emotion sampling faster than fusion discards samples
    before anyone reads them. Both are warnings, not errors.

    Examples
    --------
    >>> validate_tick_intervals(16.7, 50.0, 1000.0).is_valid
    True
    >>> validate_tick_intervals(16.7, 0.0, 1000.0).is_valid
    False
    """
    warnings = []
    errors = []
    suggestions = []

    for name, value in (
        ("frame", frame_interval_ms),
        ("fusion", fusion_interval_ms),
        ("emotion", emotion_interval_ms),
    ):
        if value <= 0:
            errors.append(
                f"INVALID INTERVAL: {name} interval must be > 0 ms, got {value}."
            )

    if errors:
        suggestions.append(
            f"Use the defaults: frame={FRAME_INTERVAL_MS:.3f}ms, "
            f"fusion={FUSION_INTERVAL_MS:g}ms, emotion={EMOTION_INTERVAL_MS:g}ms."
        )
        frames_per_fusion = 0.0
    else:
        frames_per_fusion = fusion_interval_ms / frame_interval_ms

        if fusion_interval_ms < frame_interval_ms:
            warnings.append(
                f"FUSION OUTPACES PHYSICS: fusion every {fusion_interval_ms}ms but "
                f"physics only every {frame_interval_ms:.3f}ms. Consecutive outputs "
                "will repeat the same ball state."
            )
            suggestions.append(
                f"Raise fusion interval to at least {frame_interval_ms:.1f}ms."
            )

        if emotion_interval_ms < fusion_interval_ms:
            warnings.append(
                f"EMOTION OUTPACES FUSION: emotion every {emotion_interval_ms}ms, "
                f"fusion every {fusion_interval_ms}ms. Some emotion samples are "
                "never fused."
            )

    return IntervalValidationResult(
        is_valid=len(errors) == 0,
        frame_interval_ms=frame_interval_ms,
        fusion_interval_ms=fusion_interval_ms,
        emotion_interval_ms=emotion_interval_ms,
        frames_per_fusion=frames_per_fusion,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Configuration File Validation
# =============================================================================

# Required sections in config
REQUIRED_CONFIG_SECTIONS = ["session", "fusion", "emotion"]

# Type specifications for validation
CONFIG_TYPE_SPECS = {
    "session": {
        "random_seed": (int, 0, 2**32 - 1),
    },
    "fusion": {
        "interval_ms": (float, 1.0, 10_000.0),
    },
    "emotion": {
        "interval_ms": (float, 1.0, 60_000.0),
    },
    "frame": {
        "interval_ms": (float, 1.0, 1000.0),
    },
}


def validate_config_file(
    config_path: Path | str | None = None,
    strict: bool = False,
) -> ConfigValidationResult:
    """
    Load and validate a YAML session configuration file.

    Provides graceful error handling with helpful messages for:
    - Missing files (falls back to defaults)
    - Malformed YAML (syntax errors)
    - Invalid parameter values (type/range checks, mode, weights)

    Parameters
    ----------
    config_path : Path or str, optional
        Path to YAML config file. If None, uses default_session.yaml.
    strict : bool
        If True, treat warnings as errors. Default False.

    Returns
    -------
    ConfigValidationResult
        Validation result with loaded config and any issues found.
    """
    from matchsense.config import DEFAULT_CONFIG_PATH, get_default_config

    warnings = []
    errors = []
    suggestions = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    config = None
    file_exists = config_path.exists()

    if not file_exists:
        warnings.append(
            f"CONFIG FILE NOT FOUND: '{config_path}' does not exist. "
            "Using built-in defaults."
        )
        suggestions.append(
            f"Create config file at '{config_path}' or use load_config() without path."
        )
        config = get_default_config()
    else:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is None:
                warnings.append(
                    f"CONFIG FILE EMPTY: '{config_path}' contains no data. "
                    "Using built-in defaults."
                )
                config = get_default_config()
        except yaml.YAMLError as e:
            errors.append(f"YAML PARSE ERROR in '{config_path}': {str(e)}")
            suggestions.append(
                "Check YAML syntax: proper indentation (2 spaces), "
                "colons after keys, no tabs."
            )
            config = get_default_config()
        except IOError as e:
            errors.append(f"FILE READ ERROR for '{config_path}': {str(e)}")
            suggestions.append("Check file permissions and path.")
            config = get_default_config()

    if not isinstance(config, dict):
        errors.append(
            f"CONFIG STRUCTURE: top level of '{config_path}' must be a mapping."
        )
        config = get_default_config()

    defaults = get_default_config()

    for section in REQUIRED_CONFIG_SECTIONS:
        if section not in config:
            if strict:
                errors.append(
                    f"MISSING REQUIRED SECTION: '{section}' not found in config."
                )
            else:
                warnings.append(
                    f"MISSING SECTION: '{section}' not found. Using defaults."
                )
            config[section] = defaults[section]

    for section, specs in CONFIG_TYPE_SPECS.items():
        if not isinstance(config.get(section), dict):
            continue
        for param, (expected_type, min_val, max_val) in specs.items():
            if param not in config[section]:
                continue
            value = config[section][param]

            if not isinstance(value, (expected_type, int if expected_type == float else type(None))):
                if strict:
                    errors.append(
                        f"TYPE ERROR: {section}.{param} should be {expected_type.__name__}, "
                        f"got {type(value).__name__}."
                    )
                else:
                    warnings.append(
                        f"TYPE WARNING: {section}.{param} should be {expected_type.__name__}, "
                        f"got {type(value).__name__}. Attempting conversion."
                    )
                    try:
                        config[section][param] = expected_type(value)
                        value = config[section][param]
                    except (ValueError, TypeError):
                        errors.append(
                            f"CONVERSION FAILED: Cannot convert {section}.{param} "
                            f"value '{value}' to {expected_type.__name__}."
                        )

            if isinstance(value, (int, float)):
                if value < min_val or value > max_val:
                    warnings.append(
                        f"RANGE WARNING: {section}.{param}={value} is outside "
                        f"expected range [{min_val}, {max_val}]."
                    )

    mode = config.get("session", {}).get("mode", defaults["session"]["mode"])
    if mode not in SUPPORTED_MODES:
        errors.append(
            f"INVALID MODE: session.mode={mode!r}. Supported: {', '.join(SUPPORTED_MODES)}."
        )
        suggestions.append("Set session.mode to 'deaf' or 'blind'.")

    weights = config.get("fusion", {}).get("emotion_weights")
    if weights is not None:
        if not isinstance(weights, dict):
            errors.append("WEIGHTS STRUCTURE: fusion.emotion_weights must be a mapping.")
        else:
            weights_result = validate_emotion_weights(weights)
            errors.extend(weights_result.errors)
            warnings.extend(weights_result.warnings)
            suggestions.extend(weights_result.recovery_suggestions)

    is_valid = len(errors) == 0
    if strict:
        is_valid = is_valid and len(warnings) == 0

    return ConfigValidationResult(
        is_valid=is_valid,
        config=config,
        file_path=config_path if file_exists else None,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Convenience Functions
# =============================================================================


def validate_all(
    emotion_weights: Mapping[str, float] | None = None,
    frame_interval_ms: float = FRAME_INTERVAL_MS,
    fusion_interval_ms: float = FUSION_INTERVAL_MS,
    emotion_interval_ms: float = EMOTION_INTERVAL_MS,
    config_path: Path | str | None = None,
) -> dict[str, Any]:
    """
    Run all validators and return combined results.

    Returns
    -------
    dict
        Dictionary with "weights", "intervals", "config" results and
        "all_valid" boolean.
    """
    weights_result = validate_emotion_weights(emotion_weights)
    interval_result = validate_tick_intervals(
        frame_interval_ms, fusion_interval_ms, emotion_interval_ms
    )
    config_result = validate_config_file(config_path)

    all_valid = (
        weights_result.is_valid
        and interval_result.is_valid
        and config_result.is_valid
    )

    return {
        "weights": weights_result,
        "intervals": interval_result,
        "config": config_result,
        "all_valid": all_valid,
    }
