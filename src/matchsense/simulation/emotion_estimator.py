"""
Emotion Estimator - Synthetic Biosignal Analysis

Stands in for EEG-based affect decoding. On every emotion tick each axis
is recomputed from scratch as

    value = baseline + amplitude * trig(frequency * t) + U[0, 0.1)

and clamped to [0, 1]:

- excitement: 0.5 + 0.3 * sin(0.10 t)
- focus:      0.6 + 0.2 * cos(0.07 t)
- stress:     0.3 + 0.2 * sin(0.15 t)

The three axes use different frequencies (and focus a cosine) so they
never move in lockstep. Samples depend only on time and the random draw,
never on the match state. No smoothing is applied between samples.

The module also produces the raw multi-band EEG trace shown on the
brain-signal display (delta, theta, alpha and beta sinusoids plus noise).

Usage:
    from matchsense.simulation.emotion_estimator import EmotionEstimator

    estimator = EmotionEstimator(rng=np.random.default_rng(0))
    state = estimator.sample(now_s=12.5)
    trace = estimator.eeg_trace(now_s=12.5, n_points=400)
"""

from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from matchsense.physics.constants import (
    EEG_ALPHA_BAND,
    EEG_BETA_BAND,
    EEG_DELTA_BAND,
    EEG_NOISE_AMPLITUDE_UV,
    EEG_THETA_BAND,
    EMOTION_NOISE_AMPLITUDE,
    EXCITEMENT_MODEL,
    FOCUS_MODEL,
    STRESS_MODEL,
)


_TRIG = {"sin": math.sin, "cos": math.cos}


@dataclass(frozen=True)
class EmotionState:
    """Three-axis affect estimate, each component in [0, 1]."""

    excitement: float = 0.0
    focus: float = 0.0
    stress: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "excitement": self.excitement,
            "focus": self.focus,
            "stress": self.stress,
        }


def clamp_unit(value: float) -> float:
    """Clamp to the closed unit interval."""
    return max(0.0, min(1.0, value))


def axis_value(
    model: tuple[float, float, float, str],
    now_s: float,
    noise: float,
) -> float:
    """Evaluate one axis model ``(baseline, amplitude, frequency, trig)``."""
    baseline, amplitude, frequency, trig = model
    return clamp_unit(baseline + amplitude * _TRIG[trig](frequency * now_s) + noise)


class EmotionEstimator:
    """
    Periodic synthetic emotion source.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Source of the additive noise.
    noise_amplitude : float
        Upper bound of the uniform noise added to every axis.

    Attributes
    ----------
    state : EmotionState
        Most recently committed sample. All zeros before the first tick.
    sample_count : int
        Number of samples taken.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        noise_amplitude: float = EMOTION_NOISE_AMPLITUDE,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.noise_amplitude = noise_amplitude
        self.state = EmotionState()
        self.sample_count = 0

    def sample(self, now_s: float) -> EmotionState:
        """
        Recompute all three axes for time ``now_s`` and commit the result.

        Parameters
        ----------
        now_s : float
            Wall-clock (or virtual) time in seconds.

        Returns
        -------
        EmotionState
            The new state; each axis is clamped to [0, 1].
        """
        noise = self.rng.random(3) * self.noise_amplitude
        self.state = EmotionState(
            excitement=axis_value(EXCITEMENT_MODEL, now_s, float(noise[0])),
            focus=axis_value(FOCUS_MODEL, now_s, float(noise[1])),
            stress=axis_value(STRESS_MODEL, now_s, float(noise[2])),
        )
        self.sample_count += 1
        return self.state

    def eeg_trace(
        self,
        now_s: float,
        n_points: int = 400,
        spacing_s: float = 0.05,
    ) -> np.ndarray:
        """
        Synthetic EEG trace for display, starting at ``now_s``.

        Point ``i`` is sampled at ``now_s + i * spacing_s``.

        Returns
        -------
        np.ndarray
            Trace in microvolts, shape (n_points,).
        """
        t = now_s + np.arange(n_points) * spacing_s
        return generate_eeg_samples(t, self.rng)

    def __repr__(self) -> str:
        s = self.state
        return (
            f"EmotionEstimator(excitement={s.excitement:.2f}, "
            f"focus={s.focus:.2f}, stress={s.stress:.2f})"
        )


def generate_eeg_samples(
    time_vector: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Sum of four band sinusoids plus uniform noise.

    Bands are given as (angular frequency rad/s, amplitude uV):
    delta (0.5, 20), theta (1.5, 15), alpha (2.5, 10), beta (5.0, 5).
    Noise is uniform in [-2.5, 2.5) uV.

    Parameters
    ----------
    time_vector : np.ndarray
        Sample times in seconds.
    rng : np.random.Generator
        Noise source.

    Returns
    -------
    np.ndarray
        Signal with the same shape as ``time_vector``.
    """
    t = np.asarray(time_vector, dtype=np.float64)
    signal = np.zeros_like(t)
    for frequency, amplitude in (EEG_DELTA_BAND, EEG_THETA_BAND, EEG_ALPHA_BAND, EEG_BETA_BAND):
        signal += amplitude * np.sin(frequency * t)
    noise = (rng.random(t.shape) - 0.5) * EEG_NOISE_AMPLITUDE_UV
    return signal + noise
