"""
Physics Simulator - Ball and Player Motion

Advances the ball and all 22 players by one fixed frame step per tick.
The per-entity rules live in ``matchsense.physics.field``; this module
owns the mutable state, the scoreboard and the goal-scoring game rule.

Goal rule:
    Whenever the ball reflects off the left or right wall, a single draw
    decides (with ``goal_probability``) whether that bounce counts as a
    goal. Crossing the left wall scores for team B, the right wall for
    team A. This is a game rule of the simulation, not a physical effect
    of the reflection.

Usage:
    from matchsense.simulation.physics_simulator import PhysicsSimulator

    sim = PhysicsSimulator(rng=np.random.default_rng(42))
    sim.add_goal_listener(lambda goal: print(goal.scoring_team))
    ball, players = sim.advance()
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Sequence

import numpy as np

from matchsense.physics.constants import (
    BALL_MAX_SPEED,
    BALL_PERTURB_PROBABILITY,
    BALL_START_POSITION,
    BALL_START_VELOCITY,
    FRAME_STEP_S,
    GOAL_PROBABILITY,
    PLAYER_COUNT,
    PLAYER_MAX_SPEED,
    PLAYER_PERTURB_PROBABILITY,
    PLAYERS_PER_TEAM,
    SPAWN_Y,
    TEAM_A_SPAWN_X,
    TEAM_B_SPAWN_X,
)
from matchsense.physics.field import (
    BallState,
    PlayerState,
    Vector2,
    step_ball,
    step_player,
)


@dataclass(frozen=True)
class GoalEvent:
    """A goal awarded by the stochastic scoring rule."""

    scoring_team: str
    score_a: int
    score_b: int
    tick: int


@dataclass
class Scoreboard:
    """Running score for the session."""

    score_a: int = 0
    score_b: int = 0

    def record(self, team: str) -> None:
        if team == "A":
            self.score_a += 1
        elif team == "B":
            self.score_b += 1
        else:
            raise ValueError(f"Unknown team {team!r}")

    def as_tuple(self) -> tuple[int, int]:
        return self.score_a, self.score_b


def format_match_clock(elapsed_s: float) -> str:
    """
    Format elapsed match time as ``m:ss``.

    >>> format_match_clock(75.4)
    '1:15'
    """
    total = int(elapsed_s)
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


def spawn_players(rng: np.random.Generator) -> tuple[PlayerState, ...]:
    """
    Create the 22 kick-off players.

    Team A (ids 0-10) spawns in x in [0.3, 0.5), team B (ids 11-21) in
    [0.5, 0.7); y is uniform in [0.1, 0.9).
    """
    players = []
    for player_id in range(PLAYER_COUNT):
        team = "A" if player_id < PLAYERS_PER_TEAM else "B"
        x_low, x_high = TEAM_A_SPAWN_X if team == "A" else TEAM_B_SPAWN_X
        x = x_low + rng.random() * (x_high - x_low)
        y = SPAWN_Y[0] + rng.random() * (SPAWN_Y[1] - SPAWN_Y[0])
        vx, vy = rng.uniform(-PLAYER_MAX_SPEED, PLAYER_MAX_SPEED, size=2)
        players.append(
            PlayerState(
                id=player_id,
                team=team,
                position=Vector2(float(x), float(y)),
                velocity=Vector2(float(vx), float(vy)),
            )
        )
    return tuple(players)


class PhysicsSimulator:
    """
    Owns the ball and player states and advances them each frame.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Random source for spawning, perturbation and the goal rule.
    dt : float
        Fixed integration step in seconds. Default is one 60 Hz frame.
    ball : BallState, optional
        Initial ball state. Defaults to kick-off at the centre spot.
    players : Sequence[PlayerState], optional
        Initial players. Defaults to ``spawn_players(rng)``.
    ball_perturb_probability, player_perturb_probability : float
        Per-tick chance of a random change of direction.
    goal_probability : float
        Chance that an x-axis ball reflection counts as a goal.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        dt: float = FRAME_STEP_S,
        ball: BallState | None = None,
        players: Sequence[PlayerState] | None = None,
        ball_perturb_probability: float = BALL_PERTURB_PROBABILITY,
        player_perturb_probability: float = PLAYER_PERTURB_PROBABILITY,
        goal_probability: float = GOAL_PROBABILITY,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.dt = dt
        self.ball_perturb_probability = ball_perturb_probability
        self.player_perturb_probability = player_perturb_probability
        self.goal_probability = goal_probability

        if ball is None:
            ball = BallState(
                position=Vector2(*BALL_START_POSITION),
                velocity=Vector2(*BALL_START_VELOCITY),
            )
        self._ball = ball

        if players is None:
            players = spawn_players(self.rng)
        if len(players) != PLAYER_COUNT:
            raise ValueError(f"Expected {PLAYER_COUNT} players, got {len(players)}")
        self._players = tuple(players)

        self.scoreboard = Scoreboard()
        self._goal_listeners: list[Callable[[GoalEvent], None]] = []
        self._tick_count = 0

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def ball(self) -> BallState:
        return self._ball

    @property
    def players(self) -> tuple[PlayerState, ...]:
        return self._players

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def elapsed_s(self) -> float:
        """Simulated match time (ticks times the fixed step)."""
        return self._tick_count * self.dt

    def match_clock(self) -> str:
        return format_match_clock(self.elapsed_s)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def set_ball(self, ball: BallState) -> None:
        """Place the ball (kick-off, replays, tests)."""
        self._ball = ball

    def apply_detection(self, detected: Sequence[bool]) -> None:
        """Commit per-player detection flags from the tracker."""
        if len(detected) != len(self._players):
            raise ValueError(
                f"Expected {len(self._players)} detection flags, got {len(detected)}"
            )
        self._players = tuple(
            replace(player, detected=bool(flag))
            for player, flag in zip(self._players, detected)
        )

    def add_goal_listener(self, listener: Callable[[GoalEvent], None]) -> None:
        self._goal_listeners.append(listener)

    def remove_goal_listener(self, listener: Callable[[GoalEvent], None]) -> None:
        if listener in self._goal_listeners:
            self._goal_listeners.remove(listener)

    def advance(self) -> tuple[BallState, tuple[PlayerState, ...]]:
        """
        Advance ball and players by one fixed step.

        Returns
        -------
        tuple[BallState, tuple[PlayerState, ...]]
            Post-tick snapshot. Both are immutable.
        """
        self._tick_count += 1

        ball, (hit_x, _) = step_ball(
            self._ball,
            self.dt,
            self.rng,
            perturb_probability=self.ball_perturb_probability,
            max_speed=BALL_MAX_SPEED,
        )
        self._ball = ball

        if hit_x != 0 and self.rng.random() < self.goal_probability:
            self._score_goal("B" if hit_x < 0 else "A")

        self._players = tuple(
            step_player(
                player,
                ball.position,
                self.dt,
                self.rng,
                perturb_probability=self.player_perturb_probability,
                max_speed=PLAYER_MAX_SPEED,
            )
            for player in self._players
        )
        return self._ball, self._players

    def _score_goal(self, team: str) -> None:
        self.scoreboard.record(team)
        event = GoalEvent(
            scoring_team=team,
            score_a=self.scoreboard.score_a,
            score_b=self.scoreboard.score_b,
            tick=self._tick_count,
        )
        for listener in list(self._goal_listeners):
            listener(event)

    def __repr__(self) -> str:
        pos = self._ball.position
        return (
            f"PhysicsSimulator(tick={self._tick_count}, "
            f"ball=({pos.x:.3f}, {pos.y:.3f}), "
            f"score={self.scoreboard.score_a}-{self.scoreboard.score_b})"
        )
