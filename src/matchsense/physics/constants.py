"""
Simulation Constants for MatchSense

All constants include units in their names. Field coordinates are
normalized to [0, 1] on both axes; speeds are field units per second.
"""

from __future__ import annotations

# =============================================================================
# Field Geometry
# =============================================================================

FIELD_MIN: float = 0.05  # Reflection boundary (both axes)
FIELD_MAX: float = 0.95
FIELD_CENTER: tuple[float, float] = (0.5, 0.5)

# Kick-off spawn bands for each team (x ranges, half-open)
TEAM_A_SPAWN_X: tuple[float, float] = (0.3, 0.5)
TEAM_B_SPAWN_X: tuple[float, float] = (0.5, 0.7)
SPAWN_Y: tuple[float, float] = (0.1, 0.9)

PLAYERS_PER_TEAM: int = 11
PLAYER_COUNT: int = 2 * PLAYERS_PER_TEAM

# =============================================================================
# Kinematics - Fixed Frame Step
# =============================================================================

# Nominal render-synchronized step. Integration always uses this value,
# never the measured wall-clock delta.
FRAME_RATE_HZ: float = 60.0
FRAME_STEP_S: float = 1.0 / FRAME_RATE_HZ
FRAME_INTERVAL_MS: float = 1000.0 / FRAME_RATE_HZ

BALL_START_POSITION: tuple[float, float] = (0.5, 0.5)
BALL_START_VELOCITY: tuple[float, float] = (0.3, 0.18)  # 0.005 / 0.003 per frame

BALL_MAX_SPEED: float = 0.3  # Perturbed ball velocity drawn from [-max, max)
PLAYER_MAX_SPEED: float = 0.06

BALL_PERTURB_PROBABILITY: float = 0.01
PLAYER_PERTURB_PROBABILITY: float = 0.02

# Players inside this radius steer toward the ball
ATTRACTION_RADIUS: float = 0.3
ATTRACTION_GAIN: float = 0.006  # velocity += gain * displacement, per frame

# Probability that an x-axis ball reflection counts as a goal
GOAL_PROBABILITY: float = 0.1

# =============================================================================
# Emotion Estimation (synthetic biosignal analysis)
# =============================================================================

EMOTION_INTERVAL_MS: float = 1000.0

# (baseline, amplitude, angular frequency rad/s, trig function name)
EXCITEMENT_MODEL: tuple[float, float, float, str] = (0.5, 0.3, 0.1, "sin")
FOCUS_MODEL: tuple[float, float, float, str] = (0.6, 0.2, 0.07, "cos")
STRESS_MODEL: tuple[float, float, float, str] = (0.3, 0.2, 0.15, "sin")

EMOTION_NOISE_AMPLITUDE: float = 0.1  # Additive U[0, 0.1)

# Synthetic EEG trace bands: (angular frequency rad/s, amplitude uV)
EEG_DELTA_BAND: tuple[float, float] = (0.5, 20.0)
EEG_THETA_BAND: tuple[float, float] = (1.5, 15.0)
EEG_ALPHA_BAND: tuple[float, float] = (2.5, 10.0)
EEG_BETA_BAND: tuple[float, float] = (5.0, 5.0)
EEG_NOISE_AMPLITUDE_UV: float = 5.0  # Peak-to-peak uniform noise

# =============================================================================
# Object Detection (synthetic tracker)
# =============================================================================

DETECTION_BASE_PROBABILITY: float = 0.8
DETECTION_SWING: float = 0.1
DETECTION_PHASE_RATE: float = 0.01  # rad per frame
FPS_WINDOW_MS: float = 1000.0
FIELD_MAPPED_PROBABILITY: float = 0.9

# =============================================================================
# Fusion
# =============================================================================

FUSION_INTERVAL_MS: float = 50.0

DEFAULT_EMOTION_WEIGHTS: dict[str, float] = {
    "excitement": 0.4,
    "focus": 0.3,
    "stress": 0.3,
}
EMOTION_WEIGHT_TOLERANCE: float = 1e-6

VOLUME_DISTANCE_SLOPE: float = 0.5  # volume = 1 - slope * distance
PITCH_EXCITEMENT_SLOPE: float = 0.5  # pitch = 1 + slope * excitement_factor

SUPPORTED_MODES: tuple[str, ...] = ("deaf", "blind")

DEFAULT_RANDOM_SEED: int = 42
