#!/usr/bin/env python3
"""
Command-line interface for inspecting and dry-running track files.

Usage
-----
::

    # Summarize the tracks in a file
    propanim inspect tracks.json

    # Play a file against stand-in targets, one JSON line per frame
    propanim simulate tracks.json --fps 30 --duration 4

    # List easing names
    propanim --list-easings
"""

import argparse
import json
import logging
import sys
from collections import defaultdict
from typing import Dict

from .core.easing import list_easings
from .core.exceptions import AnimationError
from .core.logging_config import setup_logging
from .timeline import Timeline
from .tracks import KeyframeTrack, SampledTrack


def _stand_in_resolver(targets: Dict[str, dict]):
    """Resolve every name to a dict whose missing properties read as 0.0."""
    def resolve(name: str):
        if name not in targets:
            targets[name] = defaultdict(float)
        return targets[name]
    return resolve


def cmd_inspect(args) -> int:
    timeline = Timeline()
    targets: Dict[str, dict] = {}
    report = timeline.load(args.file, _stand_in_resolver(targets))

    print(f"{len(report.tracks)} tracks, end time {timeline.end_time:.3f}s")
    for track in timeline.tracks:
        print(f"  [{track.type.value}] {track.name} -> {track.target_name} (end {track.end_time:.3f}s)")
        if isinstance(track, KeyframeTrack):
            for name, pk in track.keys_map.items():
                follow = ""
                if pk.following:
                    follow_name = pk.follow_track.name if pk.follow_track else "?"
                    follow = f" following {follow_name} ({pk.follow_type.value}, {pk.follow_axis})"
                print(f"      {name}: {len(pk.keys)} keys{follow}")
        elif isinstance(track, SampledTrack):
            print(f"      {track.sample_count} samples every {track.sample_rate}s")
    return 0


def cmd_simulate(args) -> int:
    timeline = Timeline()
    targets: Dict[str, dict] = {}
    timeline.load(args.file, _stand_in_resolver(targets))
    timeline.loop(args.loop)
    timeline.play()

    delta = 1.0 / args.fps
    frames = int(round(args.duration * args.fps))
    for frame in range(frames):
        timeline.update(delta)
        if frame % args.every == 0:
            line = {
                "frame": frame,
                "time": round(timeline.time, 6),
                "targets": {name: dict(values) for name, values in targets.items()},
            }
            print(json.dumps(line))
        if not timeline.playing:
            break
    return 0


def main(args=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="propanim",
        description="Inspect and dry-run property animation track files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--list-easings",
        action="store_true",
        help="List available easing names and exit"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a track file")
    inspect_parser.add_argument("file", help="Path to a track descriptor JSON file")

    simulate_parser = subparsers.add_parser("simulate", help="Play a track file against stand-in targets")
    simulate_parser.add_argument("file", help="Path to a track descriptor JSON file")
    simulate_parser.add_argument("--fps", type=float, default=30.0, help="Ticks per second (default: 30)")
    simulate_parser.add_argument("--duration", type=float, default=5.0, help="Seconds to simulate (default: 5)")
    simulate_parser.add_argument("--loop", type=int, default=1, help="Loop mode (default: 1, play once)")
    simulate_parser.add_argument("--every", type=int, default=1, help="Print every Nth frame (default: 1)")

    args = parser.parse_args(args)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_easings:
        for name in list_easings():
            print(name)
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "simulate" and (args.fps <= 0 or args.every < 1):
        print("Error: --fps must be positive and --every at least 1", file=sys.stderr)
        return 1

    try:
        if args.command == "inspect":
            return cmd_inspect(args)
        return cmd_simulate(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AnimationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
