"""
Fusion Module

Combines emotion estimates with ball tracking into the deaf
(directional) or blind (spatial-audio) real-time feed.
"""

from .engine import (
    BlindOutput,
    DeafOutput,
    EmotionWeights,
    FusionEngine,
    FusionOutput,
    FusionState,
    project_blind,
    project_deaf,
)

__all__ = [
    "BlindOutput",
    "DeafOutput",
    "EmotionWeights",
    "FusionEngine",
    "FusionOutput",
    "FusionState",
    "project_blind",
    "project_deaf",
]
