"""
Physics Module

Contains field constants, immutable ball/player state types and the
pure motion rules (integration, reflection, perturbation, attraction).
"""

from .constants import *
from .field import (
    BallState,
    PlayerState,
    Vector2,
    attract,
    integrate,
    is_inside_field,
    perturb,
    reflect_axis,
    step_ball,
    step_player,
)
