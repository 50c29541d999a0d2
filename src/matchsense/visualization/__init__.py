"""
Visualization Module

Contains shared theming, color palettes and pitch drawing for the
session trace notebooks.
"""

from .theme import COLORS, apply_dark_theme, draw_pitch, setup_axis_style

__all__ = ["COLORS", "apply_dark_theme", "draw_pitch", "setup_axis_style"]
