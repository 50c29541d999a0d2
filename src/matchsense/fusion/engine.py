"""
Fusion Engine - Mode-Specific Real-Time Feed

Combines the latest emotion estimate with the latest ball state into one
output per fusion tick. Two projections exist, selected by mode:

Deaf (visual / directional):
    velocity' = velocity * (1 + excitement_factor - stress_factor)
    emotional_intensity = excitement_factor + focus_factor

Blind (spatial audio):
    distance = |position - (0.5, 0.5)|
    angle    = atan2(y - 0.5, x - 0.5)
    volume   = 1 - 0.5 * distance
    pitch    = 1 + 0.5 * excitement_factor
    emotional_intensity = excitement_factor + focus_factor
    velocity passed through unchanged

where each factor is the emotion axis times its weight (default
excitement 0.4, focus 0.3, stress 0.3).

With weights in [0, 1] the deaf scale factor stays in [0, 2]. It reaches
zero only under full stress with a stress-only weighting, which freezes
the direction indicator.

Usage:
    from matchsense.fusion.engine import FusionEngine

    engine = FusionEngine()
    engine.wire(emotion_source=estimator_state, ball_source=ball_state)
    engine.subscribe(print)
    engine.start("blind")
    engine.tick()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Callable, ClassVar, Mapping, Union

from matchsense.exceptions import ConfigurationError, InvalidModeError, NotReadyError
from matchsense.physics.constants import (
    DEFAULT_EMOTION_WEIGHTS,
    FIELD_CENTER,
    PITCH_EXCITEMENT_SLOPE,
    SUPPORTED_MODES,
    VOLUME_DISTANCE_SLOPE,
)
from matchsense.physics.field import BallState, Vector2
from matchsense.simulation.emotion_estimator import EmotionState
from matchsense.validation.input_validators import validate_emotion_weights


# =============================================================================
# Weights and Outputs
# =============================================================================


@dataclass(frozen=True)
class EmotionWeights:
    """Per-axis fusion weights. Must sum to 1.0 within tolerance."""

    excitement: float = DEFAULT_EMOTION_WEIGHTS["excitement"]
    focus: float = DEFAULT_EMOTION_WEIGHTS["focus"]
    stress: float = DEFAULT_EMOTION_WEIGHTS["stress"]

    def __post_init__(self) -> None:
        result = validate_emotion_weights(
            {"excitement": self.excitement, "focus": self.focus, "stress": self.stress}
        )
        if not result.is_valid:
            raise ConfigurationError(result.errors, result.recovery_suggestions)

    @classmethod
    def from_mapping(cls, weights: Mapping[str, float] | None) -> EmotionWeights:
        """Build from a config mapping; missing keys take defaults."""
        if weights is None:
            return cls()
        unknown = set(weights) - set(DEFAULT_EMOTION_WEIGHTS)
        if unknown:
            raise ConfigurationError(
                f"Unknown emotion weight(s): {', '.join(sorted(unknown))}."
            )
        merged = {**DEFAULT_EMOTION_WEIGHTS, **weights}
        return cls(
            excitement=float(merged["excitement"]),
            focus=float(merged["focus"]),
            stress=float(merged["stress"]),
        )


@dataclass(frozen=True)
class EmotionFactors:
    """Weighted emotion axes for one fusion tick."""

    excitement: float
    focus: float
    stress: float

    @property
    def intensity(self) -> float:
        return self.excitement + self.focus


def compute_factors(emotions: EmotionState, weights: EmotionWeights) -> EmotionFactors:
    return EmotionFactors(
        excitement=emotions.excitement * weights.excitement,
        focus=emotions.focus * weights.focus,
        stress=emotions.stress * weights.stress,
    )


@dataclass(frozen=True)
class DeafOutput:
    """Directional indicator for the visual presentation."""

    mode: ClassVar[str] = "deaf"

    position: Vector2
    velocity: Vector2
    emotional_intensity: float

    @property
    def direction(self) -> str:
        """
        Dominant screen direction of the indicator: 'right', 'left',
        'down' or 'up' (screen y grows downward).
        """
        degrees = math.degrees(math.atan2(self.velocity.y, self.velocity.x))
        if abs(degrees) <= 45:
            return "right"
        if abs(degrees) >= 135:
            return "left"
        if 45 < degrees < 135:
            return "down"
        return "up"

    @property
    def arrow_scale(self) -> float:
        """Indicator size relative to its base size."""
        return 1.0 + 0.4 * self.emotional_intensity


@dataclass(frozen=True)
class BlindOutput:
    """Spatial-audio parameters for the audio presentation."""

    mode: ClassVar[str] = "blind"

    position: Vector2
    velocity: Vector2
    distance: float
    angle: float
    volume: float
    pitch: float
    emotional_intensity: float

    @property
    def pulse_period_s(self) -> float:
        """Period of the sound-wave pulse; shorter when more intense."""
        return 3.0 - self.emotional_intensity

    @property
    def wave_opacity(self) -> float:
        return 0.5 + 0.5 * self.emotional_intensity


FusionOutput = Union[DeafOutput, BlindOutput]


# =============================================================================
# Projections
# =============================================================================


def project_deaf(
    ball: BallState,
    emotions: EmotionState,
    weights: EmotionWeights = EmotionWeights(),
) -> DeafOutput:
    """Scale ball velocity by ``1 + excitement_factor - stress_factor``."""
    factors = compute_factors(emotions, weights)
    scale = 1.0 + factors.excitement - factors.stress
    return DeafOutput(
        position=ball.position,
        velocity=ball.velocity * scale,
        emotional_intensity=factors.intensity,
    )


def project_blind(
    ball: BallState,
    emotions: EmotionState,
    weights: EmotionWeights = EmotionWeights(),
) -> BlindOutput:
    """Polar position around the centre spot plus volume and pitch cues."""
    factors = compute_factors(emotions, weights)
    dx = ball.position.x - FIELD_CENTER[0]
    dy = ball.position.y - FIELD_CENTER[1]
    distance = math.hypot(dx, dy)
    return BlindOutput(
        position=ball.position,
        velocity=ball.velocity,
        distance=distance,
        angle=math.atan2(dy, dx),
        volume=1.0 - VOLUME_DISTANCE_SLOPE * distance,
        pitch=1.0 + PITCH_EXCITEMENT_SLOPE * factors.excitement,
        emotional_intensity=factors.intensity,
    )


_PROJECTIONS: dict[str, Callable[[BallState, EmotionState, EmotionWeights], FusionOutput]] = {
    "deaf": project_deaf,
    "blind": project_blind,
}


def validate_mode(mode: object) -> str:
    """Return ``mode`` if supported, else raise InvalidModeError."""
    if not isinstance(mode, str) or mode not in SUPPORTED_MODES:
        raise InvalidModeError(mode)
    return mode


# =============================================================================
# Engine
# =============================================================================


class FusionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


class FusionEngine:
    """
    Periodic fusion of the emotion and ball streams.

    The engine never mutates its inputs: each tick pulls the last
    committed value from each producer and publishes a new output, which
    replaces the previous one.

    Parameters
    ----------
    weights : EmotionWeights or mapping, optional
        Fusion weights. Defaults to excitement 0.4, focus 0.3, stress 0.3.

    Attributes
    ----------
    state : FusionState
        IDLE until ``start``; back to IDLE on ``stop``.
    mode : str | None
        Active projection ('deaf' or 'blind').
    latest : FusionOutput | None
        Most recently published output.
    """

    def __init__(
        self,
        weights: EmotionWeights | Mapping[str, float] | None = None,
    ) -> None:
        if not isinstance(weights, EmotionWeights):
            weights = EmotionWeights.from_mapping(weights)
        self.weights = weights
        self.state = FusionState.IDLE
        self.mode: str | None = None
        self.latest: FusionOutput | None = None
        self.tick_count = 0

        self._emotion_source: Callable[[], EmotionState] | None = None
        self._ball_source: Callable[[], BallState] | None = None
        self._subscribers: list[Callable[[FusionOutput], None]] = []

    @property
    def is_active(self) -> bool:
        return self.state is FusionState.ACTIVE

    @property
    def is_wired(self) -> bool:
        return self._emotion_source is not None and self._ball_source is not None

    def wire(
        self,
        emotion_source: Callable[[], EmotionState],
        ball_source: Callable[[], BallState],
    ) -> None:
        """Attach the producers' last-committed-value readers."""
        self._emotion_source = emotion_source
        self._ball_source = ball_source

    def subscribe(self, callback: Callable[[FusionOutput], None]) -> Callable[[], None]:
        """Register a listener; returns an idempotent unsubscribe handle."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self, mode: str) -> None:
        """
        Enter ACTIVE with the given projection.

        Raises
        ------
        InvalidModeError
            If mode is not 'deaf' or 'blind'.
        NotReadyError
            If either producer has not been wired.
        """
        mode = validate_mode(mode)
        if not self.is_wired:
            raise NotReadyError(
                "FusionEngine.start() requires both the emotion and ball "
                "producers to be wired first."
            )
        self.mode = mode
        self.state = FusionState.ACTIVE

    def stop(self) -> None:
        """Return to IDLE. Idempotent; ``latest`` stays readable."""
        self.state = FusionState.IDLE

    def fuse(self, ball: BallState, emotions: EmotionState) -> FusionOutput:
        """Apply the active projection without publishing."""
        if self.mode is None:
            raise NotReadyError("No mode selected; call start() first.")
        return _PROJECTIONS[self.mode](ball, emotions, self.weights)

    def tick(self, now_ms: float | None = None) -> FusionOutput | None:
        """
        One fusion step. Returns None (and publishes nothing) while IDLE.
        """
        if not self.is_active:
            return None

        emotions = self._emotion_source()
        ball = self._ball_source()
        output = self.fuse(ball, emotions)

        self.latest = output
        self.tick_count += 1
        for callback in list(self._subscribers):
            callback(output)
        return output

    def __repr__(self) -> str:
        return f"FusionEngine(state={self.state.value}, mode={self.mode})"
