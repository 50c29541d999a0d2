"""
Field Kinematics - Value Types and Pure Motion Rules

Immutable state types for the ball and players, plus the stateless
motion rules applied on every frame tick:

- integrate: position += velocity * dt
- reflect: elastic bounce off the [0.05, 0.95] field boundary
- perturb: occasional random change of direction
- attract: players near the ball steer toward it

Every rule is a pure function of ``(state, rng) -> state'``. Randomness
comes only from the injected ``numpy.random.Generator`` so the rules can
be tested deterministically.

Usage:
    from matchsense.physics.field import Vector2, BallState, step_ball

    ball = BallState(Vector2(0.05, 0.5), Vector2(-0.5, 0.0))
    ball, hits = step_ball(ball, dt=1 / 60, rng=np.random.default_rng(0))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from matchsense.physics.constants import (
    ATTRACTION_GAIN,
    ATTRACTION_RADIUS,
    BALL_MAX_SPEED,
    BALL_PERTURB_PROBABILITY,
    FIELD_MAX,
    FIELD_MIN,
    PLAYER_MAX_SPEED,
    PLAYER_PERTURB_PROBABILITY,
    PLAYERS_PER_TEAM,
)


# =============================================================================
# Value Types
# =============================================================================


@dataclass(frozen=True)
class Vector2:
    """2D vector in normalized field coordinates."""

    x: float
    y: float

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vector2:
        return Vector2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def norm(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class BallState:
    """
    Ball position and velocity.

    Attributes
    ----------
    position : Vector2
        Field position, kept inside [0.05, 0.95] on both axes.
    velocity : Vector2
        Field units per second.
    """

    position: Vector2
    velocity: Vector2


@dataclass(frozen=True)
class PlayerState:
    """
    One tracked player.

    Attributes
    ----------
    id : int
        Player index 0..21. Ids below 11 belong to team A.
    team : str
        'A' or 'B'.
    position : Vector2
        Field position.
    velocity : Vector2
        Field units per second.
    detected : bool
        Whether the detection simulator saw this player on the last frame.
    """

    id: int
    team: str
    position: Vector2
    velocity: Vector2
    detected: bool = False

    def __post_init__(self) -> None:
        expected = "A" if self.id < PLAYERS_PER_TEAM else "B"
        if self.team != expected:
            raise ValueError(
                f"player {self.id} must belong to team {expected}, got {self.team!r}"
            )


# Which wall was crossed on each axis: -1 low wall, +1 high wall, 0 none
WallHits = tuple[int, int]


# =============================================================================
# Motion Rules
# =============================================================================


def reflect_axis(
    coordinate: float,
    velocity: float,
    lower: float = FIELD_MIN,
    upper: float = FIELD_MAX,
) -> tuple[float, float, int]:
    """
    Reflect one axis off the field boundary.

    If the coordinate left ``[lower, upper]`` the velocity component is
    negated and the coordinate is clamped back onto the boundary.

    Returns
    -------
    tuple[float, float, int]
        (coordinate, velocity, wall) where wall is -1 for the low wall,
        +1 for the high wall and 0 when no reflection happened.
    """
    if coordinate < lower:
        return lower, -velocity, -1
    if coordinate > upper:
        return upper, -velocity, 1
    return coordinate, velocity, 0


def integrate(
    position: Vector2,
    velocity: Vector2,
    dt: float,
) -> tuple[Vector2, Vector2, WallHits]:
    """Advance one fixed step and apply boundary reflection on both axes."""
    x, vx, hit_x = reflect_axis(position.x + velocity.x * dt, velocity.x)
    y, vy, hit_y = reflect_axis(position.y + velocity.y * dt, velocity.y)
    return Vector2(x, y), Vector2(vx, vy), (hit_x, hit_y)


def perturb(
    velocity: Vector2,
    rng: np.random.Generator,
    probability: float,
    max_speed: float,
) -> Vector2:
    """
    With the given probability, replace velocity by a uniform random vector.

    One draw decides whether to perturb; two more draw the new components
    from ``[-max_speed, max_speed)``.
    """
    if rng.random() < probability:
        vx, vy = rng.uniform(-max_speed, max_speed, size=2)
        return Vector2(float(vx), float(vy))
    return velocity


def attract(
    position: Vector2,
    velocity: Vector2,
    target: Vector2,
    radius: float = ATTRACTION_RADIUS,
    gain: float = ATTRACTION_GAIN,
) -> Vector2:
    """Nudge velocity toward target when within radius (strictly closer)."""
    displacement = target - position
    if displacement.norm() < radius:
        return velocity + displacement * gain
    return velocity


def step_ball(
    ball: BallState,
    dt: float,
    rng: np.random.Generator,
    perturb_probability: float = BALL_PERTURB_PROBABILITY,
    max_speed: float = BALL_MAX_SPEED,
) -> tuple[BallState, WallHits]:
    """Integrate, reflect and maybe perturb the ball."""
    position, velocity, hits = integrate(ball.position, ball.velocity, dt)
    velocity = perturb(velocity, rng, perturb_probability, max_speed)
    return BallState(position=position, velocity=velocity), hits


def step_player(
    player: PlayerState,
    ball_position: Vector2,
    dt: float,
    rng: np.random.Generator,
    perturb_probability: float = PLAYER_PERTURB_PROBABILITY,
    max_speed: float = PLAYER_MAX_SPEED,
) -> PlayerState:
    """Integrate, reflect, maybe perturb, then attract a player to the ball."""
    position, velocity, _ = integrate(player.position, player.velocity, dt)
    velocity = perturb(velocity, rng, perturb_probability, max_speed)
    velocity = attract(position, velocity, ball_position)
    return replace(player, position=position, velocity=velocity)


def is_inside_field(point: Vector2) -> bool:
    """True if both coordinates lie in [FIELD_MIN, FIELD_MAX]."""
    return FIELD_MIN <= point.x <= FIELD_MAX and FIELD_MIN <= point.y <= FIELD_MAX
