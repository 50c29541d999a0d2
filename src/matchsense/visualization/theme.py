"""
MatchSense Dark Pitch Theme

Color palette and matplotlib styling for the session trace notebooks.

Usage:
    from matchsense.visualization.theme import COLORS, apply_dark_theme, setup_axis_style

    apply_dark_theme()
    fig, ax = plt.subplots()
    setup_axis_style(ax, "BALL TRAJECTORY")
"""

from __future__ import annotations

import matplotlib.pyplot as plt


# =============================================================================
# MATCHSENSE COLOR PALETTE
# =============================================================================

COLORS: dict[str, str] = {
    # Base theme - dark backgrounds
    "background": "#0f0f0f",
    "panel_bg": "#12121a",
    "grid_line": "#1a1a2e",
    "pitch_line": "#FFFFFF",

    # Primary accent
    "text_accent": "#00FFFF",

    # Text hierarchy
    "text_primary": "#E0E0E0",
    "text_secondary": "#808080",

    # Entities
    "team_a": "#3498db",
    "team_b": "#e74c3c",
    "ball": "#f1c40f",

    # Emotion axes
    "excitement": "#FF6B6B",
    "focus": "#4ECDC4",
    "stress": "#FFD93D",

    # Fusion outputs
    "intensity": "#00FF88",
    "volume": "#95E1D3",
}


def apply_dark_theme() -> None:
    """
    Configure matplotlib for the dark pitch aesthetic.

    Call this at the start of any visualization script.
    """
    plt.style.use("dark_background")
    plt.rcParams["figure.facecolor"] = COLORS["background"]
    plt.rcParams["axes.facecolor"] = COLORS["panel_bg"]
    plt.rcParams["savefig.facecolor"] = COLORS["background"]
    plt.rcParams["axes.edgecolor"] = COLORS["grid_line"]
    plt.rcParams["axes.labelcolor"] = COLORS["text_secondary"]
    plt.rcParams["xtick.color"] = COLORS["text_secondary"]
    plt.rcParams["ytick.color"] = COLORS["text_secondary"]
    plt.rcParams["grid.color"] = COLORS["grid_line"]
    plt.rcParams["text.color"] = COLORS["text_primary"]


def setup_axis_style(ax, title: str) -> None:
    """
    Apply consistent dark styling to a matplotlib axis.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        The axis to style.
    title : str
        Title text for the axis.
    """
    ax.set_facecolor(COLORS["panel_bg"])
    ax.set_title(
        title,
        color=COLORS["text_accent"],
        fontsize=11,
        fontweight="bold",
        fontfamily="monospace",
        pad=10,
    )
    ax.tick_params(colors=COLORS["text_secondary"], labelsize=8)
    ax.grid(True, alpha=0.2, color=COLORS["grid_line"])

    for spine in ax.spines.values():
        spine.set_color(COLORS["grid_line"])


def draw_pitch(ax) -> None:
    """Draw halfway line, centre circle and penalty areas on a unit pitch."""
    line = {"color": COLORS["pitch_line"], "alpha": 0.5, "linewidth": 1.0}
    ax.plot([0.5, 0.5], [0.0, 1.0], **line)
    ax.add_patch(plt.Circle((0.5, 0.5), 0.2, fill=False, **line))
    ax.add_patch(plt.Rectangle((0.0, 0.25), 0.2, 0.5, fill=False, **line))
    ax.add_patch(plt.Rectangle((0.8, 0.25), 0.2, 0.5, fill=False, **line))
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(1.0, 0.0)  # screen orientation: y grows downward
    ax.set_aspect("equal")
