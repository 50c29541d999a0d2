#!/usr/bin/env python
"""
MatchSense - Headless Feed Demo

Runs a simulation session and prints the fused feed to the console,
the way the rendering or announcement layer would receive it.

Usage:
    python run_demo.py
    python run_demo.py --preset audio_standard --seconds 10 --realtime
    python run_demo.py --mode blind --config configs/default_session.yaml

Requirements:
    - numpy, pyyaml
    - pip install -e . from the project root
"""

from __future__ import annotations

import argparse
import math
import sys

from matchsense import ConfigurationError, InvalidModeError, SimulationSession
from matchsense.config import load_config_safe
from matchsense.fusion.engine import BlindOutput, DeafOutput
from matchsense.presets import get_preset_names_and_descriptions


def format_feed_line(snapshot) -> str:
    """One console line per published snapshot."""
    fusion = snapshot.fusion
    ball = snapshot.ball.position
    head = (
        f"[{snapshot.match_clock}] score {snapshot.score[0]}-{snapshot.score[1]} | "
        f"ball=({ball.x:.3f}, {ball.y:.3f}) | "
        f"players={snapshot.detection.detected_player_count:2d}/22 "
        f"fps={snapshot.detection.fps:.0f}"
    )
    if isinstance(fusion, DeafOutput):
        return (
            f"{head} | arrow={fusion.direction:<5} "
            f"intensity={fusion.emotional_intensity:.2f}"
        )
    if isinstance(fusion, BlindOutput):
        return (
            f"{head} | dist={fusion.distance:.3f} "
            f"angle={math.degrees(fusion.angle):+6.1f}deg "
            f"vol={fusion.volume:.2f} pitch={fusion.pitch:.2f}"
        )
    return head


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MatchSense headless feed demo")
    parser.add_argument("--preset", default=None, help="Preset name (see --list-presets)")
    parser.add_argument("--config", default=None, help="YAML session config path")
    parser.add_argument("--mode", default=None, help="Override mode: deaf | blind")
    parser.add_argument("--seconds", type=float, default=5.0, help="Duration to run")
    parser.add_argument("--every", type=int, default=10, help="Print every Nth snapshot")
    parser.add_argument(
        "--realtime", action="store_true", help="Run against the wall clock"
    )
    parser.add_argument("--list-presets", action="store_true")
    return parser.parse_args(argv)


def build_session(args: argparse.Namespace) -> SimulationSession:
    if args.preset:
        session = SimulationSession.from_preset(args.preset)
    else:
        config, errors = load_config_safe(args.config)
        for message in errors:
            print(f"  Warning: {message}")
        session = SimulationSession.from_config(config)

    if args.mode:
        session.initialize(args.mode)
    return session


def main(argv: list[str] | None = None) -> int:
    """Run the demo."""
    args = parse_args(argv)

    if args.list_presets:
        for key, name, description in get_preset_names_and_descriptions():
            print(f"  {key:<20} {name}")
            print(f"  {'':<20} {description}")
        return 0

    print()
    print("=" * 60)
    print("  MATCHSENSE FEED DEMO")
    print("=" * 60)

    try:
        session = build_session(args)
    except (ConfigurationError, InvalidModeError, KeyError) as e:
        print(f"Error: {e}")
        return 1

    print(f"  Mode: {session.mode}")
    print(f"  Fusion every {session.fusion_interval_ms:g}ms, "
          f"emotion every {session.emotion_interval_ms:g}ms")
    print(f"  Running for {args.seconds:g}s ({'realtime' if args.realtime else 'virtual time'})")
    print()

    counter = {"n": 0}

    def on_snapshot(snapshot) -> None:
        counter["n"] += 1
        if counter["n"] % args.every == 0:
            print(f"  {format_feed_line(snapshot)}")

    def on_goal(goal) -> None:
        print(f"  GOAL for team {goal.scoring_team}! ({goal.score_a}-{goal.score_b})")

    session.subscribe(on_snapshot)
    session.add_goal_listener(on_goal)

    try:
        if args.realtime:
            session.run_realtime(args.seconds)
        else:
            session.start(now_ms=0.0)
            session.run_for(args.seconds)
    except KeyboardInterrupt:
        print("\nStopping session...")
    finally:
        session.stop()

    final = session.get_snapshot()
    print()
    print(f"  Published {session.published_count} snapshots over {session.frame_count} frames")
    print(f"  Final score: {final.score[0]}-{final.score[1]} at {final.match_clock}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
