"""
Physics Module Unit Tests

Validates the field motion rules (integration, reflection, perturbation,
attraction) and the PhysicsSimulator's containment and goal rule.
"""

from __future__ import annotations

import numpy as np
import pytest

from matchsense.physics.constants import (
    ATTRACTION_GAIN,
    ATTRACTION_RADIUS,
    FIELD_MAX,
    FIELD_MIN,
    FRAME_STEP_S,
    PLAYER_COUNT,
)
from matchsense.physics.field import (
    BallState,
    PlayerState,
    Vector2,
    attract,
    integrate,
    is_inside_field,
    perturb,
    reflect_axis,
    step_ball,
)
from matchsense.simulation.physics_simulator import (
    PhysicsSimulator,
    Scoreboard,
    format_match_clock,
    spawn_players,
)


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


class TestPhysicsConstants:
    """Test that field constants are consistent."""

    def test_field_bounds_ordered(self) -> None:
        assert 0.0 < FIELD_MIN < FIELD_MAX < 1.0

    def test_frame_step(self) -> None:
        assert FRAME_STEP_S == pytest.approx(1.0 / 60.0)

    def test_player_count(self) -> None:
        assert PLAYER_COUNT == 22


class TestVector2:
    def test_arithmetic(self) -> None:
        a = Vector2(0.25, 0.5)
        b = Vector2(0.5, 0.25)
        assert a + b == Vector2(0.75, 0.75)
        assert b - a == Vector2(0.25, -0.25)
        assert a * 2 == Vector2(0.5, 1.0)
        assert 2 * a == Vector2(0.5, 1.0)

    def test_norm(self) -> None:
        assert Vector2(0.3, 0.4).norm() == pytest.approx(0.5)

    def test_immutable(self) -> None:
        v = Vector2(0.1, 0.2)
        with pytest.raises(AttributeError):
            v.x = 0.5


class TestReflection:
    """Boundary reflection flips velocity and keeps entities inside."""

    def test_inside_unchanged(self) -> None:
        assert reflect_axis(0.5, 0.3) == (0.5, 0.3, 0)

    def test_low_wall(self) -> None:
        coordinate, velocity, wall = reflect_axis(0.04, -0.2)
        assert coordinate == FIELD_MIN
        assert velocity == pytest.approx(0.2)
        assert wall == -1

    def test_high_wall(self) -> None:
        coordinate, velocity, wall = reflect_axis(0.96, 0.2)
        assert coordinate == FIELD_MAX
        assert velocity == pytest.approx(-0.2)
        assert wall == 1

    def test_exactly_on_boundary_is_inside(self) -> None:
        assert reflect_axis(FIELD_MIN, -0.1) == (FIELD_MIN, -0.1, 0)

    def test_integrate_reflects_each_axis_independently(self) -> None:
        position, velocity, hits = integrate(
            Vector2(0.06, 0.5), Vector2(-1.0, 0.3), dt=FRAME_STEP_S
        )
        assert hits == (-1, 0)
        assert velocity.x == pytest.approx(1.0)
        assert velocity.y == pytest.approx(0.3)
        assert position.x == FIELD_MIN
        assert position.y == pytest.approx(0.5 + 0.3 * FRAME_STEP_S)

    def test_ball_at_left_wall_reflects(self) -> None:
        """Ball at (0.05, 0.5) moving (-0.5, 0) bounces back to +0.5."""
        ball = BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0))
        new_ball, hits = step_ball(ball, FRAME_STEP_S, FixedRng(0.5))

        assert new_ball.velocity.x == pytest.approx(0.5)
        assert new_ball.position.x >= FIELD_MIN
        assert hits[0] == -1


class TestPerturbationAndAttraction:
    def test_perturb_below_probability(self) -> None:
        rng = FixedRng(value=0.0, uniform_value=0.02)
        assert perturb(Vector2(0.1, 0.1), rng, 0.02, 0.06) == Vector2(0.02, 0.02)

    def test_perturb_above_probability(self) -> None:
        rng = FixedRng(value=0.5, uniform_value=0.02)
        assert perturb(Vector2(0.1, 0.1), rng, 0.02, 0.06) == Vector2(0.1, 0.1)

    def test_perturb_range(self) -> None:
        rng = np.random.default_rng(3)
        for _ in range(200):
            v = perturb(Vector2(0.0, 0.0), rng, 1.0, 0.06)
            assert -0.06 <= v.x < 0.06
            assert -0.06 <= v.y < 0.06

    def test_attraction_inside_radius(self) -> None:
        velocity = attract(Vector2(0.5, 0.5), Vector2(0.0, 0.0), Vector2(0.6, 0.4))
        assert velocity.x == pytest.approx(0.1 * ATTRACTION_GAIN)
        assert velocity.y == pytest.approx(-0.1 * ATTRACTION_GAIN)

    def test_no_attraction_outside_radius(self) -> None:
        far = Vector2(0.5 + ATTRACTION_RADIUS + 0.01, 0.5)
        velocity = attract(Vector2(0.5, 0.5), Vector2(0.01, 0.02), far)
        assert velocity == Vector2(0.01, 0.02)


class TestPlayers:
    def test_spawn_layout(self) -> None:
        players = spawn_players(np.random.default_rng(42))

        assert len(players) == PLAYER_COUNT
        assert [p.id for p in players] == list(range(PLAYER_COUNT))
        for player in players:
            if player.id < 11:
                assert player.team == "A"
                assert 0.3 <= player.position.x < 0.5
            else:
                assert player.team == "B"
                assert 0.5 <= player.position.x < 0.7
            assert 0.1 <= player.position.y < 0.9
            assert player.detected is False

    def test_team_must_match_id(self) -> None:
        with pytest.raises(ValueError):
            PlayerState(id=3, team="B", position=Vector2(0.5, 0.5), velocity=Vector2(0, 0))


class TestPhysicsSimulator:
    def test_boundary_containment(self) -> None:
        """Ball and every player stay inside the field on every tick."""
        sim = PhysicsSimulator(
            rng=np.random.default_rng(7),
            ball=BallState(Vector2(0.5, 0.5), Vector2(2.0, -1.7)),
        )
        for _ in range(3000):
            ball, players = sim.advance()
            assert is_inside_field(ball.position)
            for player in players:
                assert is_inside_field(player.position)

    def test_advance_returns_immutable_snapshot(self) -> None:
        sim = PhysicsSimulator(rng=np.random.default_rng(0))
        ball, players = sim.advance()
        assert isinstance(players, tuple)
        assert ball is sim.ball
        assert sim.tick_count == 1

    def test_fixed_step_integration(self) -> None:
        sim = PhysicsSimulator(
            rng=FixedRng(0.5),
            ball=BallState(Vector2(0.5, 0.5), Vector2(0.3, 0.18)),
        )
        ball, _ = sim.advance()
        assert ball.position.x == pytest.approx(0.5 + 0.3 * FRAME_STEP_S)
        assert ball.position.y == pytest.approx(0.5 + 0.18 * FRAME_STEP_S)

    def test_goal_on_left_wall_scores_for_team_b(self) -> None:
        sim = PhysicsSimulator(
            rng=FixedRng(0.05),
            ball=BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0)),
        )
        goals = []
        sim.add_goal_listener(goals.append)
        sim.advance()

        assert len(goals) == 1
        assert goals[0].scoring_team == "B"
        assert sim.scoreboard.as_tuple() == (0, 1)

    def test_goal_on_right_wall_scores_for_team_a(self) -> None:
        sim = PhysicsSimulator(
            rng=FixedRng(0.05),
            ball=BallState(Vector2(0.95, 0.5), Vector2(0.5, 0.0)),
        )
        goals = []
        sim.add_goal_listener(goals.append)
        sim.advance()

        assert [g.scoring_team for g in goals] == ["A"]
        assert sim.scoreboard.as_tuple() == (1, 0)

    def test_no_goal_on_y_reflection(self) -> None:
        sim = PhysicsSimulator(
            rng=FixedRng(0.05),
            ball=BallState(Vector2(0.5, 0.05), Vector2(0.0, -0.5)),
        )
        goals = []
        sim.add_goal_listener(goals.append)
        sim.advance()
        assert goals == []

    def test_no_goal_when_draw_misses(self) -> None:
        sim = PhysicsSimulator(
            rng=FixedRng(0.5),
            ball=BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0)),
        )
        sim.advance()
        assert sim.scoreboard.as_tuple() == (0, 0)

    def test_apply_detection(self) -> None:
        sim = PhysicsSimulator(rng=np.random.default_rng(0))
        flags = [i % 2 == 0 for i in range(PLAYER_COUNT)]
        sim.apply_detection(flags)
        assert [p.detected for p in sim.players] == flags

        with pytest.raises(ValueError):
            sim.apply_detection([True])

    def test_match_clock(self) -> None:
        assert format_match_clock(0.0) == "0:00"
        assert format_match_clock(75.4) == "1:15"
        assert format_match_clock(600.0) == "10:00"

    def test_scoreboard_rejects_unknown_team(self) -> None:
        with pytest.raises(ValueError):
            Scoreboard().record("C")
