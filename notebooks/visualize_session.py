"""
MatchSense Session Trace - Feed Visualization

Runs a session in virtual time and plots what the presentation layer
received:

- Left panel: ball trajectory on the pitch, final player positions
- Top right: emotion axes per fusion tick
- Bottom right: fused outputs (intensity, plus volume/pitch in blind mode)

Run from project root:
    python notebooks/visualize_session.py
    python notebooks/visualize_session.py --preset audio_standard --seconds 60
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.gridspec as gridspec
import matplotlib.pyplot as plt
import numpy as np

from matchsense.fusion.engine import BlindOutput
from matchsense.session import SimulationSession
from matchsense.visualization.theme import (
    COLORS,
    apply_dark_theme,
    draw_pitch,
    setup_axis_style,
)


def get_project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


def record_session(preset: str, seconds: float) -> tuple[SimulationSession, list]:
    """Run a session in virtual time and collect every published snapshot."""
    session = SimulationSession.from_preset(preset)
    snapshots = []
    session.subscribe(snapshots.append)
    session.start(now_ms=0.0)
    session.run_for(seconds)
    session.stop()
    return session, snapshots


def plot_trajectory(ax, session: SimulationSession, snapshots: list) -> None:
    """Ball path over the pitch with the final player positions."""
    draw_pitch(ax)

    xs = np.array([s.ball.position.x for s in snapshots])
    ys = np.array([s.ball.position.y for s in snapshots])
    ax.plot(xs, ys, color=COLORS["ball"], linewidth=0.8, alpha=0.7)

    for player in session.physics.players:
        ax.scatter(
            player.position.x,
            player.position.y,
            s=25,
            color=COLORS["team_a"] if player.team == "A" else COLORS["team_b"],
            edgecolors="white" if player.detected else "none",
            linewidths=0.6,
        )

    setup_axis_style(ax, "BALL TRAJECTORY")


def plot_emotions(ax, snapshots: list) -> None:
    t = np.array([s.timestamp for s in snapshots])
    for axis in ("excitement", "focus", "stress"):
        values = [getattr(s.emotion, axis) for s in snapshots]
        ax.step(t, values, where="post", color=COLORS[axis], linewidth=1.2, label=axis)

    setup_axis_style(ax, "EMOTION ESTIMATE")
    ax.set_ylim(-0.05, 1.05)
    ax.set_xlabel("Time (s)", color=COLORS["text_secondary"], fontsize=9)
    ax.legend(loc="upper right", fontsize=8, framealpha=0.3)


def plot_fusion(ax, snapshots: list) -> None:
    t = np.array([s.timestamp for s in snapshots])
    intensity = [s.fusion.emotional_intensity for s in snapshots]
    ax.plot(t, intensity, color=COLORS["intensity"], linewidth=1.2, label="intensity")

    if snapshots and isinstance(snapshots[0].fusion, BlindOutput):
        ax.plot(t, [s.fusion.volume for s in snapshots],
                color=COLORS["volume"], linewidth=1.0, label="volume")
        ax.plot(t, [s.fusion.pitch for s in snapshots],
                color=COLORS["excitement"], linewidth=1.0, label="pitch")

    setup_axis_style(ax, "FUSED OUTPUT")
    ax.set_xlabel("Time (s)", color=COLORS["text_secondary"], fontsize=9)
    ax.legend(loc="upper right", fontsize=8, framealpha=0.3)


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot a MatchSense session trace")
    parser.add_argument("--preset", default="visual_standard")
    parser.add_argument("--seconds", type=float, default=30.0)
    args = parser.parse_args()

    print("=" * 60)
    print("  MATCHSENSE SESSION TRACE")
    print("=" * 60)

    print(f"  [1/3] Running '{args.preset}' for {args.seconds:g}s of virtual time...")
    session, snapshots = record_session(args.preset, args.seconds)
    print(f"        {len(snapshots)} snapshots, score "
          f"{session.physics.scoreboard.score_a}-{session.physics.scoreboard.score_b}")

    print("  [2/3] Building figure...")
    apply_dark_theme()
    fig = plt.figure(figsize=(16, 8))
    gs = gridspec.GridSpec(2, 2, width_ratios=[1, 1.4], hspace=0.35, wspace=0.2)

    plot_trajectory(fig.add_subplot(gs[:, 0]), session, snapshots)
    plot_emotions(fig.add_subplot(gs[0, 1]), snapshots)
    plot_fusion(fig.add_subplot(gs[1, 1]), snapshots)

    fig.suptitle(
        f"MATCHSENSE FEED - {session.mode.upper()} MODE",
        fontsize=14,
        fontweight="bold",
        fontfamily="monospace",
        color=COLORS["text_accent"],
    )

    print("  [3/3] Saving figure...")
    output_dir = get_project_root() / "data" / "processed"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"session_{session.mode}.png"
    plt.savefig(output_path, dpi=150, bbox_inches="tight", facecolor=COLORS["background"])

    print("=" * 60)
    print(f"  Figure saved: {output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
