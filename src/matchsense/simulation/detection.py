"""
Detection Simulator - Synthetic Object Tracker

Marks the ball and each player as detected or missed on every frame.
The detection probability rises with the frame count of the current fps
window,

    p = 0.8 + 0.1 * sin(0.01 * window_frames)

and each entity is detected independently iff a uniform draw is below p.
The tracker also reports a frames-per-second estimate recomputed once per
window of at least one second. Closing a window sets the frame count back
to zero, so p restarts at 0.8 every window.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Sequence

import numpy as np

from matchsense.physics.constants import (
    DETECTION_BASE_PROBABILITY,
    DETECTION_PHASE_RATE,
    DETECTION_SWING,
    FIELD_MAPPED_PROBABILITY,
    FPS_WINDOW_MS,
)
from matchsense.physics.field import BallState, PlayerState


@dataclass(frozen=True)
class DetectionSnapshot:
    """
    Aggregate tracker output for one frame.

    Attributes
    ----------
    ball_detected : bool
        Whether the ball was found this frame.
    detected_player_count : int
        Number of players found (0..22).
    fps : float
        Frame rate measured over the last completed window.
    detection_probability : float
        The probability used for this frame's draws.
    field_mapped : bool
        Whether the pitch markings were registered this frame.
    """

    ball_detected: bool = False
    detected_player_count: int = 0
    fps: float = 0.0
    detection_probability: float = DETECTION_BASE_PROBABILITY
    field_mapped: bool = False


def detection_probability(frame_count: int) -> float:
    """Probability curve ``0.8 + 0.1 * sin(0.01 * frame_count)``, where
    ``frame_count`` counts frames in the current fps window."""
    return DETECTION_BASE_PROBABILITY + DETECTION_SWING * math.sin(
        DETECTION_PHASE_RATE * frame_count
    )


class FpsCounter:
    """
    Counts frames and publishes a rate once per elapsed window.

    Attributes
    ----------
    frame_count : int
        Frames counted in the open window; zero again once it closes.
    fps : float
        Rate measured over the last completed window.
    """

    def __init__(self, window_ms: float = FPS_WINDOW_MS) -> None:
        self.window_ms = window_ms
        self.fps = 0.0
        self.frame_count = 0
        self._window_start_ms: float | None = None

    def reset(self, now_ms: float | None = None) -> None:
        self.fps = 0.0
        self.frame_count = 0
        self._window_start_ms = now_ms

    def tick(self, now_ms: float) -> float:
        if self._window_start_ms is None:
            self._window_start_ms = now_ms
        self.frame_count += 1

        elapsed = now_ms - self._window_start_ms
        if elapsed >= self.window_ms:
            self.fps = float(round(self.frame_count * 1000.0 / elapsed))
            self.frame_count = 0
            self._window_start_ms = now_ms
        return self.fps


class DetectionSimulator:
    """
    Stochastic tracker driven by the frame tick.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Source of the detection draws.
    fps_window_ms : float
        Minimum length of an fps measurement window.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        fps_window_ms: float = FPS_WINDOW_MS,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.fps_counter = FpsCounter(fps_window_ms)
        self.last = DetectionSnapshot()

    def reset(self, now_ms: float | None = None) -> None:
        self.fps_counter.reset(now_ms)
        self.last = DetectionSnapshot()

    def detect(
        self,
        ball: BallState,
        players: Sequence[PlayerState],
        now_ms: float,
    ) -> tuple[tuple[PlayerState, ...], DetectionSnapshot]:
        """
        Run one frame of synthetic detection.

        Parameters
        ----------
        ball : BallState
            Ball state after this frame's physics step.
        players : Sequence[PlayerState]
            Player states after this frame's physics step.
        now_ms : float
            Tick time, used for the fps estimate.

        Returns
        -------
        tuple[tuple[PlayerState, ...], DetectionSnapshot]
            Players with updated ``detected`` flags, and the aggregate.
        """
        # Probability comes from frames seen before this one in the window
        p = detection_probability(self.fps_counter.frame_count)

        draws = self.rng.random(len(players))
        flagged = tuple(
            replace(player, detected=bool(draw < p))
            for player, draw in zip(players, draws)
        )
        ball_detected = bool(self.rng.random() < p)
        field_mapped = bool(self.rng.random() < FIELD_MAPPED_PROBABILITY)

        self.last = DetectionSnapshot(
            ball_detected=ball_detected,
            detected_player_count=sum(1 for player in flagged if player.detected),
            fps=self.fps_counter.tick(now_ms),
            detection_probability=p,
            field_mapped=field_mapped,
        )
        return flagged, self.last
