"""
Simulation Session Integration Tests

Drives complete sessions in virtual time and checks the feed:
lifecycle errors, publish cadence, mode exclusivity, ordering between
physics and detection, containment and determinism per seed.
"""

from __future__ import annotations

import numpy as np
import pytest

from matchsense import (
    ConfigurationError,
    InvalidModeError,
    NotReadyError,
    SessionSnapshot,
    SimulationSession,
)
from matchsense.fusion.engine import BlindOutput, DeafOutput
from matchsense.physics.constants import FIELD_MIN
from matchsense.physics.field import BallState, Vector2, is_inside_field
from matchsense.simulation.emotion_estimator import EmotionState


class FixedRng:
    """Stand-in generator returning constant draws."""

    def __init__(self, value: float = 0.5, uniform_value: float = 0.0) -> None:
        self.value = value
        self.uniform_value = uniform_value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)

    def uniform(self, low, high, size=None):
        if size is None:
            return self.uniform_value
        return np.full(size, self.uniform_value)


def record(session: SimulationSession, seconds: float) -> list[SessionSnapshot]:
    snapshots: list[SessionSnapshot] = []
    session.subscribe(snapshots.append)
    session.start(now_ms=0.0)
    session.run_for(seconds)
    return snapshots


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    def test_invalid_mode(self):
        session = SimulationSession(seed=0)
        with pytest.raises(InvalidModeError):
            session.initialize("x")
        assert session.mode is None

    def test_start_before_initialize(self):
        session = SimulationSession(seed=0)
        with pytest.raises(NotReadyError):
            session.start(now_ms=0.0)
        assert session.is_running is False

    def test_start_is_idempotent(self):
        session = SimulationSession(seed=0)
        session.initialize("deaf")
        snapshots = []
        session.subscribe(snapshots.append)
        session.start(now_ms=0.0)
        session.start(now_ms=0.0)
        session.run_for(1.0)

        assert len(snapshots) == 20

    def test_stop_is_idempotent_and_final(self):
        session = SimulationSession(seed=0)
        session.initialize("blind")
        snapshots = record(session, 0.5)
        frames = session.frame_count

        session.stop()
        session.stop()
        assert session.run_for(1.0) == 0

        assert len(snapshots) == 10
        assert session.frame_count == frames
        assert session.last_published is snapshots[-1]

    def test_cannot_reinitialize_while_running(self):
        session = SimulationSession(seed=0)
        session.initialize("deaf")
        session.start(now_ms=0.0)
        with pytest.raises(RuntimeError):
            session.initialize("blind")

    def test_restart_in_other_mode(self):
        session = SimulationSession(seed=0)
        session.initialize("deaf")
        snapshots = record(session, 0.2)
        session.stop()

        session.initialize("blind")
        session.start(now_ms=1000.0)
        session.run_for(0.2)

        assert isinstance(snapshots[0].fusion, DeafOutput)
        assert isinstance(snapshots[-1].fusion, BlindOutput)


# =============================================================================
# Feed
# =============================================================================


class TestFeed:
    def test_publishes_twenty_times_per_second(self):
        session = SimulationSession(seed=1)
        session.initialize("deaf")
        snapshots = record(session, 1.0)

        assert len(snapshots) == 20
        assert session.published_count == 20
        assert [s.timestamp for s in snapshots] == pytest.approx(
            [0.05 * i for i in range(1, 21)]
        )
        assert 59 <= session.frame_count <= 60

    @pytest.mark.parametrize("mode,output_type", [("deaf", DeafOutput), ("blind", BlindOutput)])
    def test_mode_exclusivity(self, mode, output_type):
        session = SimulationSession(seed=2)
        session.initialize(mode)
        snapshots = record(session, 2.0)

        assert snapshots
        assert all(type(s.fusion) is output_type for s in snapshots)

    def test_fusion_reads_latest_ball(self):
        session = SimulationSession(seed=3)
        session.initialize("blind")
        for snapshot in record(session, 3.0):
            assert snapshot.fusion.position == snapshot.ball.position

    def test_emotion_zero_until_first_sample(self):
        session = SimulationSession(seed=4)
        session.initialize("deaf")
        snapshots = record(session, 1.5)

        assert snapshots[0].emotion == EmotionState()
        assert snapshots[-1].emotion != EmotionState()
        assert session.emotion.sample_count == 1

    def test_unsubscribe(self):
        session = SimulationSession(seed=5)
        session.initialize("deaf")
        received = []
        unsubscribe = session.subscribe(received.append)
        session.start(now_ms=0.0)
        session.run_for(0.1)
        unsubscribe()
        unsubscribe()
        session.run_for(0.5)

        assert len(received) == 2
        assert session.published_count == 12

    def test_snapshot_before_start(self):
        session = SimulationSession(seed=6)
        snapshot = session.get_snapshot()

        assert snapshot.fusion is None
        assert snapshot.frame_count == 0
        assert snapshot.score == (0, 0)
        assert snapshot.match_clock == "0:00"


# =============================================================================
# Physics and Detection Wiring
# =============================================================================


class TestFrameWiring:
    def test_ball_reflection_in_blind_session(self):
        """Ball at (0.05, 0.5) moving left bounces and is fused as such."""
        session = SimulationSession(
            rng=FixedRng(0.5),
            ball=BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0)),
        )
        session.initialize("blind")
        session.start(now_ms=0.0)
        session.clock.advance_to(session.frame_interval_ms)

        ball = session.physics.ball
        assert session.frame_count == 1
        assert ball.velocity.x == pytest.approx(0.5)
        assert ball.position.x >= FIELD_MIN
        assert session.get_snapshot().score == (0, 0)

        session.clock.advance_to(session.fusion_interval_ms)
        fused = session.last_published.fusion
        assert fused.velocity.x == pytest.approx(0.5)
        assert fused.distance == pytest.approx(0.5 - ball.position.x, abs=0.05)

    def test_detection_sees_post_physics_state(self):
        session = SimulationSession(seed=7)
        session.initialize("deaf")
        original = session.detection.detect
        seen = []

        def spy(ball, players, now_ms):
            assert ball is session.physics.ball
            assert players is session.physics.players
            seen.append((session.frame_count, session.physics.tick_count))
            return original(ball, players, now_ms)

        session.detection.detect = spy
        record(session, 0.5)

        assert seen
        assert all(frame == tick for frame, tick in seen)

    def test_detection_probability_restarts_each_second(self):
        session = SimulationSession(seed=10)
        session.initialize("blind")
        probabilities = [s.detection.detection_probability for s in record(session, 30.0)]

        assert min(probabilities) >= 0.8
        assert max(probabilities) < 0.86

    def test_detection_flags_committed(self):
        session = SimulationSession(seed=8)
        session.initialize("deaf")
        for snapshot in record(session, 2.0):
            detected = sum(p.detected for p in snapshot.players)
            assert detected == snapshot.detection.detected_player_count

    def test_containment_and_bounds(self):
        session = SimulationSession(seed=9)
        session.initialize("deaf")
        for snapshot in record(session, 60.0):
            assert is_inside_field(snapshot.ball.position)
            assert all(is_inside_field(p.position) for p in snapshot.players)
            for value in snapshot.emotion.as_dict().values():
                assert 0.0 <= value <= 1.0
            assert 0 <= snapshot.detection.detected_player_count <= 22

    def test_goal_listener(self):
        session = SimulationSession(
            rng=FixedRng(0.05),
            ball=BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0)),
        )
        session.initialize("deaf")
        goals = []
        session.add_goal_listener(goals.append)
        session.start(now_ms=0.0)
        session.clock.advance_to(session.frame_interval_ms)

        assert [g.scoring_team for g in goals] == ["B"]
        assert session.get_snapshot().score == (0, 1)


# =============================================================================
# Determinism and Independence
# =============================================================================


class TestDeterminism:
    def test_same_seed_same_feed(self):
        first = SimulationSession(seed=11)
        second = SimulationSession(seed=11)
        first.initialize("blind")
        second.initialize("blind")

        assert record(first, 3.0) == record(second, 3.0)

    def test_sessions_are_independent(self):
        a = SimulationSession(seed=12)
        b = SimulationSession(seed=12)
        a.initialize("deaf")
        b.initialize("deaf")
        a.start(now_ms=0.0)
        b.start(now_ms=0.0)

        a.run_for(1.0)
        b.run_for(2.0)
        a.run_for(1.0)

        assert a.get_snapshot() == b.get_snapshot()

    def test_different_seeds_diverge(self):
        a = SimulationSession(seed=13)
        b = SimulationSession(seed=14)
        assert a.physics.players != b.physics.players


# =============================================================================
# Construction from Config and Presets
# =============================================================================


class TestConstruction:
    def test_bad_weights(self):
        with pytest.raises(ConfigurationError):
            SimulationSession.from_config(
                {"fusion": {"emotion_weights": {"excitement": 0.9, "focus": 0.9, "stress": 0.9}}}
            )

    def test_bad_interval(self):
        with pytest.raises(ConfigurationError) as excinfo:
            SimulationSession(fusion_interval_ms=0.0)
        assert "INVALID INTERVAL" in str(excinfo.value)

    def test_bad_mode_in_config(self):
        with pytest.raises(InvalidModeError):
            SimulationSession.from_config({"session": {"mode": "tactile"}})

    def test_from_config_initializes(self):
        session = SimulationSession.from_config(
            {"session": {"mode": "blind", "random_seed": 3}, "fusion": {"interval_ms": 25.0}}
        )
        assert session.mode == "blind"
        assert session.fusion_interval_ms == 25.0

        snapshots = record(session, 1.0)
        assert len(snapshots) == 40

    def test_from_preset(self):
        session = SimulationSession.from_preset("high_excitement")

        assert session.mode == "deaf"
        assert session.fusion.weights.excitement == 0.6

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            SimulationSession.from_preset("stadium_roar")
