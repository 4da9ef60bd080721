#!/usr/bin/env python3
"""
Command-line interface for procscene.

  procscene generate --forest-size 20 --seed 7 --output scene.json
  procscene simulate --ticks 1200 --delta 0.05
"""

import argparse
import json
import sys
from pathlib import Path

from tqdm import tqdm

from .engine import RecordingBackend, SceneConfig, SceneOrchestrator
from .engine.config import SUN_DAY_INTENSITY, WHITE


def add_config_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--forest-size", type=int, default=None, help="Number of trees (defaults to 10)")
    parser.add_argument("--forest-spread", type=float, default=None, help="Spread size of trees (defaults to 1.5)")
    parser.add_argument("--pyramid-base-size", type=int, default=None, help="Pyramid base size, clamped to 3-10")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def config_from_args(args: argparse.Namespace) -> SceneConfig:
    return SceneConfig(
        forest_size=args.forest_size,
        forest_spread=args.forest_spread,
        pyramid_base_size=args.pyramid_base_size,
        seed=args.seed
    )


def generate_command(args: argparse.Namespace) -> int:
    """Generate a scene and dump its layout and scene graph as JSON."""

    backend = RecordingBackend()
    orchestrator = SceneOrchestrator(config=config_from_args(args), backend=backend)
    layout = orchestrator.initialize()

    forest = layout.forest
    if not forest.is_complete:
        print(
            f"Placed {len(forest.trees)}/{forest.requested} trees "
            f"after {forest.attempts} attempts",
            file=sys.stderr
        )

    data = {
        "layout": layout.model_dump(mode="json"),
        "scene_graph": backend.to_dict()
    }

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)
        print(f"✓ Scene written to {output_path}")
        print(f"  Trees: {len(forest.trees)}, pyramid cubes: {layout.pyramid.cube_count}")
    else:
        json.dump(data, sys.stdout, indent=2)
        print()

    return 0


def simulate_command(args: argparse.Namespace) -> int:
    """Run the day/night cycle and print every transition."""

    backend = RecordingBackend()
    sun = None
    if not args.no_sun:
        sun = backend.create_light(backend.create_node("Sun"), "directional", SUN_DAY_INTENSITY, WHITE)

    orchestrator = SceneOrchestrator(config=config_from_args(args), backend=backend, sun=sun)
    orchestrator.initialize()

    transitions = 0
    for _ in tqdm(range(args.ticks), desc="Simulating", disable=args.quiet):
        lighting = orchestrator.tick(args.delta)
        if lighting is None:
            continue

        transitions += 1
        phase = "night" if lighting.is_night else "day"
        tqdm.write(
            f"t={orchestrator.elapsed:8.2f}s -> {phase:5s} "
            f"sun={lighting.sun_intensity:.2f} celestial={lighting.celestial_intensity:.2f}"
        )

    print(f"Simulated {orchestrator.elapsed:.2f}s, {transitions} transitions")
    print(f"Final phase: {'night' if orchestrator.day_night.is_night else 'day'}, "
          f"celestial angle {orchestrator.celestial_angle:.1f}°")
    return 0


def main(argv=None) -> int:
    """CLI entry point."""

    parser = argparse.ArgumentParser(description="Procedural forest/pyramid scene generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate a scene and export it as JSON")
    add_config_arguments(generate_parser)
    generate_parser.add_argument("--output", "-o", help="Output JSON file (stdout if omitted)")
    generate_parser.set_defaults(func=generate_command)

    simulate_parser = subparsers.add_parser("simulate", help="Simulate the day/night cycle")
    add_config_arguments(simulate_parser)
    simulate_parser.add_argument("--ticks", type=int, default=600, help="Number of ticks")
    simulate_parser.add_argument("--delta", type=float, default=0.1, help="Simulated seconds per tick")
    simulate_parser.add_argument("--no-sun", action="store_true", help="Run without a directional sun light")
    simulate_parser.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    simulate_parser.set_defaults(func=simulate_command)

    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
