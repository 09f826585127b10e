#!/usr/bin/env python3
"""Run repeated sortition draws and report how closely they track stakes."""

from __future__ import annotations

import argparse

from sortition_trees.simulation.runner import simulate
from sortition_trees.utils.config import load_config
from sortition_trees.utils.seeding import seed_everything


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate weighted draws from a sortition sum tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python scripts/simulate.py
  python scripts/simulate.py --scenario configs/scenarios/skewed.yaml
  python scripts/simulate.py --set draws.count=100000 --set seed=7
""",
    )
    parser.add_argument(
        "--config",
        default="configs/default.yaml",
        help="Path to base config (default: configs/default.yaml)",
    )
    parser.add_argument("--scenario", default=None, help="Path to scenario config override")
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="Override config values (e.g. --set draws.count=5000)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    config = load_config(
        default_path=args.config,
        scenario_path=args.scenario,
        overrides=args.overrides,
    )

    seed_everything(config["seed"])
    print(f"Tree: {config['draws']['key']!r}")
    print(f"Draws: {config['draws']['count']}")

    metrics = simulate(config)
    for name, value in metrics.items():
        print(f"{name}: {value:g}")


if __name__ == "__main__":
    main()
