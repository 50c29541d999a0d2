"""
MatchSense - Core Simulation and Fusion Engine

This package contains the real-time data production core for the
accessible match-viewing platform:
- Physics: Field geometry, constants and ball/player motion rules
- Simulation: Frame-clocked physics and detection, emotion estimation
- Fusion: Mode-specific (deaf / blind) projection of ball and emotion
- Session: Clock wiring and the subscription feed

Usage:
    # After installing with: pip install -e .
    from matchsense import SimulationSession

    session = SimulationSession.from_preset("audio_standard")
    session.subscribe(lambda snapshot: print(snapshot.fusion))
    session.run_realtime(5.0)
"""

from matchsense.exceptions import (
    ConfigurationError,
    InvalidModeError,
    MatchSenseError,
    NotReadyError,
)
from matchsense.session import SessionSnapshot, SimulationSession

__version__ = "0.1.0"
__all__ = [
    "SimulationSession",
    "SessionSnapshot",
    "MatchSenseError",
    "InvalidModeError",
    "NotReadyError",
    "ConfigurationError",
]
