"""
Simulation Session - Composition Root

Owns one PhysicsSimulator, EmotionEstimator, DetectionSimulator and
FusionEngine, drives them from a ClockSet and publishes an immutable
SessionSnapshot to subscribers on every fusion tick.

Clock wiring:
    frame   (~16.7 ms)  physics.advance() then detection.detect()
    emotion (1000 ms)   emotion.sample()
    fusion  (50 ms)     fusion.tick() -> SessionSnapshot to subscribers

Each piece of state has exactly one producer; the fusion tick only reads
last-committed values, so its output may lag the physics by up to one
fusion period. Every session owns its own random generator and state, so
several sessions can run side by side.

Usage:
    from matchsense.session import SimulationSession

    session = SimulationSession(seed=42)
    session.initialize("blind")
    unsubscribe = session.subscribe(lambda snap: print(snap.fusion))
    session.start(now_ms=0.0)
    session.run_for(2.0)        # two seconds of virtual time
    session.stop()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

import numpy as np

from matchsense.config import load_config, merge_with_defaults
from matchsense.exceptions import ConfigurationError, NotReadyError
from matchsense.fusion.engine import EmotionWeights, FusionEngine, FusionOutput, validate_mode
from matchsense.physics.constants import (
    EMOTION_INTERVAL_MS,
    FRAME_INTERVAL_MS,
    FUSION_INTERVAL_MS,
)
from matchsense.physics.field import BallState, PlayerState
from matchsense.simulation.clock import ClockSet
from matchsense.simulation.detection import DetectionSimulator, DetectionSnapshot
from matchsense.simulation.emotion_estimator import EmotionEstimator, EmotionState
from matchsense.simulation.physics_simulator import GoalEvent, PhysicsSimulator
from matchsense.validation.input_validators import validate_tick_intervals


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Everything the presentation layer needs for one feed update.

    Attributes
    ----------
    ball : BallState
    players : tuple[PlayerState, ...]
    detection : DetectionSnapshot
    fusion : FusionOutput | None
        None until the first fusion tick.
    emotion : EmotionState
    score : tuple[int, int]
        (team A, team B).
    match_clock : str
        Elapsed simulated match time as ``m:ss``.
    frame_count : int
    timestamp : float
        Clock time in seconds.
    """

    ball: BallState
    players: tuple[PlayerState, ...]
    detection: DetectionSnapshot
    fusion: FusionOutput | None
    emotion: EmotionState
    score: tuple[int, int]
    match_clock: str
    frame_count: int
    timestamp: float


class SimulationSession:
    """
    Independent simulation + fusion pipeline.

    Parameters
    ----------
    emotion_weights : EmotionWeights or mapping, optional
        Fusion weights; must sum to 1.0.
    frame_interval_ms, emotion_interval_ms, fusion_interval_ms : float
        Periods of the three clocks.
    seed : int, optional
        Seed for the session's random generator. Ignored if ``rng`` is given.
    rng : np.random.Generator, optional
        Shared by physics, emotion and detection.
    time_source : Callable[[], float], optional
        Millisecond clock for ``start`` and ``run_realtime``.
    ball : BallState, optional
        Initial ball state.
    players : Sequence[PlayerState], optional
        Initial players; spawned randomly if omitted.

    Raises
    ------
    ConfigurationError
        If the weights or intervals are invalid.
    """

    def __init__(
        self,
        emotion_weights: EmotionWeights | Mapping[str, float] | None = None,
        frame_interval_ms: float = FRAME_INTERVAL_MS,
        emotion_interval_ms: float = EMOTION_INTERVAL_MS,
        fusion_interval_ms: float = FUSION_INTERVAL_MS,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        time_source: Callable[[], float] | None = None,
        ball: BallState | None = None,
        players: Sequence[PlayerState] | None = None,
    ) -> None:
        intervals = validate_tick_intervals(
            frame_interval_ms, fusion_interval_ms, emotion_interval_ms
        )
        if not intervals.is_valid:
            raise ConfigurationError(intervals.errors, intervals.recovery_suggestions)

        self.frame_interval_ms = float(frame_interval_ms)
        self.emotion_interval_ms = float(emotion_interval_ms)
        self.fusion_interval_ms = float(fusion_interval_ms)

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.physics = PhysicsSimulator(rng=self.rng, ball=ball, players=players)
        self.emotion = EmotionEstimator(rng=self.rng)
        self.detection = DetectionSimulator(rng=self.rng)
        self.fusion = FusionEngine(weights=emotion_weights)

        self.clock = ClockSet(time_source)
        self.clock.add_task("frame", self.frame_interval_ms, self._on_frame)
        self.clock.add_task("emotion", self.emotion_interval_ms, self._on_emotion)
        self.clock.add_task("fusion", self.fusion_interval_ms, self._on_fusion)

        self.mode: str | None = None
        self.published_count = 0
        self._frame_count = 0
        self._subscribers: list[Callable[[SessionSnapshot], None]] = []
        self._last_published: SessionSnapshot | None = None

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> SimulationSession:
        """
        Build and initialize a session from a config dictionary.

        Missing keys take the defaults from ``matchsense.config``; when
        ``config`` is None the default YAML file is loaded.
        """
        if config is None:
            cfg = load_config()
        else:
            cfg = merge_with_defaults(dict(config))

        session = cls(
            emotion_weights=cfg["fusion"].get("emotion_weights"),
            frame_interval_ms=float(cfg["frame"]["interval_ms"]),
            emotion_interval_ms=float(cfg["emotion"]["interval_ms"]),
            fusion_interval_ms=float(cfg["fusion"]["interval_ms"]),
            seed=cfg["session"].get("random_seed"),
            **kwargs,
        )
        session.initialize(cfg["session"]["mode"])
        return session

    @classmethod
    def from_preset(cls, name: str, **kwargs: Any) -> SimulationSession:
        """Build and initialize a session from a named preset."""
        from matchsense.presets import get_preset, preset_to_config

        return cls.from_config(preset_to_config(get_preset(name)), **kwargs)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self.mode is not None

    @property
    def is_running(self) -> bool:
        return self.clock.running

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def initialize(self, mode: str) -> None:
        """
        Select the presentation mode and wire the producers into fusion.

        Raises
        ------
        InvalidModeError
            If mode is not 'deaf' or 'blind'.
        RuntimeError
            If the session is running.
        """
        if self.is_running:
            raise RuntimeError("Cannot re-initialize a running session; call stop() first")
        mode = validate_mode(mode)
        self.fusion.wire(
            emotion_source=lambda: self.emotion.state,
            ball_source=lambda: self.physics.ball,
        )
        self.mode = mode

    def start(self, now_ms: float | None = None) -> None:
        """
        Start all three clocks. A no-op while already running.

        Raises
        ------
        NotReadyError
            If ``initialize`` has not been called.
        """
        if self.is_running:
            return
        if not self.is_initialized:
            raise NotReadyError("SimulationSession.start() requires initialize(mode) first")

        self.fusion.start(self.mode)
        if now_ms is None:
            now_ms = self.clock.time_source()
        self.detection.reset(now_ms)
        self.clock.start(now_ms)

    def stop(self) -> None:
        """Halt all clocks. Idempotent; the last snapshot stays readable."""
        self.clock.stop()
        self.fusion.stop()

    def run_for(self, seconds: float) -> int:
        """
        Advance virtual time by ``seconds`` and fire every due tick.

        Returns the number of tick callbacks invoked (0 when stopped).
        """
        return self.clock.advance_by(seconds * 1000.0)

    def run_realtime(self, seconds: float) -> int:
        """Run against the real clock for ``seconds``, sleeping between ticks."""
        self.start()
        return self.clock.run_realtime(seconds)

    # -------------------------------------------------------------------------
    # Feed
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Callable[[SessionSnapshot], None]) -> Callable[[], None]:
        """
        Receive a SessionSnapshot on every fusion tick.

        Returns
        -------
        Callable[[], None]
            Unsubscribe handle; calling it more than once is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def add_goal_listener(self, callback: Callable[[GoalEvent], None]) -> Callable[[], None]:
        """Receive GoalEvents from the scoring rule; returns an unsubscribe handle."""
        self.physics.add_goal_listener(callback)
        return lambda: self.physics.remove_goal_listener(callback)

    def get_snapshot(self) -> SessionSnapshot:
        """Composite of the latest committed state of every producer."""
        return SessionSnapshot(
            ball=self.physics.ball,
            players=self.physics.players,
            detection=self.detection.last,
            fusion=self.fusion.latest,
            emotion=self.emotion.state,
            score=self.physics.scoreboard.as_tuple(),
            match_clock=self.physics.match_clock(),
            frame_count=self._frame_count,
            timestamp=self.clock.now_ms / 1000.0,
        )

    @property
    def last_published(self) -> SessionSnapshot | None:
        return self._last_published

    # -------------------------------------------------------------------------
    # Tick handlers
    # -------------------------------------------------------------------------

    def _on_frame(self, now_ms: float) -> None:
        # Detection must see this frame's post-physics positions
        self._frame_count += 1
        ball, players = self.physics.advance()
        flagged, _ = self.detection.detect(ball, players, now_ms)
        self.physics.apply_detection([player.detected for player in flagged])

    def _on_emotion(self, now_ms: float) -> None:
        self.emotion.sample(now_ms / 1000.0)

    def _on_fusion(self, now_ms: float) -> None:
        if self.fusion.tick(now_ms) is None:
            return
        snapshot = self.get_snapshot()
        self._last_published = snapshot
        self.published_count += 1
        for callback in list(self._subscribers):
            callback(snapshot)

    def __repr__(self) -> str:
        state = "running" if self.is_running else "stopped"
        return (
            f"SimulationSession(mode={self.mode}, {state}, "
            f"frames={self._frame_count}, published={self.published_count})"
        )
