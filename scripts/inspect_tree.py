#!/usr/bin/env python3
"""Print the leaves of a configured sortition tree, one page at a time."""

from __future__ import annotations

import argparse

import yaml

from sortition_trees.simulation.runner import build_registry
from sortition_trees.utils.config import load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect the leaves of a sortition tree")
    parser.add_argument("--config", default="configs/default.yaml", help="Base config")
    parser.add_argument("--scenario", default=None, help="Scenario config override")
    parser.add_argument("--key", default=None, help="Tree key (YAML scalar, default: draws.key)")
    parser.add_argument("--page-size", type=int, default=8, help="Leaves per page")
    parser.add_argument(
        "--set", action="append", default=[], dest="overrides", metavar="KEY=VALUE"
    )
    args = parser.parse_args(argv)
    if args.page_size < 1:
        parser.error(f"--page-size must be >= 1, got {args.page_size}")
    return args


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    config = load_config(
        default_path=args.config,
        scenario_path=args.scenario,
        overrides=args.overrides,
    )
    key = yaml.safe_load(args.key) if args.key is not None else config["draws"]["key"]

    registry = build_registry(config)
    tree = registry.tree(key)
    print(f"Tree {key!r}: k={tree.k}, total={tree.total}, nodes={tree.node_count}")

    cursor = 0
    page_no = 1
    while True:
        page = registry.query_leaves(key, cursor, args.page_size)
        print(f"Page {page_no} (start_index={page.start_index}): {page.values}")
        cursor += len(page.values)
        page_no += 1
        if not page.has_more:
            break


if __name__ == "__main__":
    main()
