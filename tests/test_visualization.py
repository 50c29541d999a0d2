"""
Theme smoke tests (headless Agg backend).
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from matchsense.visualization.theme import (
    COLORS,
    apply_dark_theme,
    draw_pitch,
    setup_axis_style,
)


class TestTheme:
    def test_palette_covers_feed_series(self):
        for key in ("team_a", "team_b", "ball", "excitement", "focus", "stress", "intensity"):
            assert key in COLORS

    def test_pitch_axes(self):
        apply_dark_theme()
        fig, ax = plt.subplots()
        try:
            draw_pitch(ax)
            setup_axis_style(ax, "BALL TRAJECTORY")

            assert ax.get_xlim() == (0.0, 1.0)
            assert ax.get_ylim() == (1.0, 0.0)
            assert ax.get_title() == "BALL TRAJECTORY"
            assert len(ax.patches) == 3
        finally:
            plt.close(fig)
