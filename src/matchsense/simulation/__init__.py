"""
Simulation Module

Contains the independently-clocked producers (physics, detection,
emotion estimation) and the cooperative ClockSet that drives them.
"""

from .clock import ClockSet, PeriodicTask
from .detection import DetectionSimulator, DetectionSnapshot, detection_probability
from .emotion_estimator import EmotionEstimator, EmotionState, generate_eeg_samples
from .physics_simulator import (
    GoalEvent,
    PhysicsSimulator,
    Scoreboard,
    format_match_clock,
    spawn_players,
)

__all__ = [
    "ClockSet",
    "PeriodicTask",
    "DetectionSimulator",
    "DetectionSnapshot",
    "detection_probability",
    "EmotionEstimator",
    "EmotionState",
    "generate_eeg_samples",
    "GoalEvent",
    "PhysicsSimulator",
    "Scoreboard",
    "format_match_clock",
    "spawn_players",
]
