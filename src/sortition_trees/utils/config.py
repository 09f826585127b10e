"""YAML config loading with layered merging and CLI overrides.

A simulation config looks like::

    seed: 42
    trees:                 # created in order by build_registry
      - key: jurors        # any YAML scalar, unique across trees
        k: 4               # branching factor, >= 2 (default 2)
        stakes:            # identifier -> stake, applied with set()
          1: 1000
          2: 10
    draws:
      key: jurors          # must name one of the trees above
      count: 20000
    mlflow:
      experiment_name: sortition
      tracking_uri: mlruns

Scenario files under ``configs/scenarios/`` override any part of it;
lists such as ``trees`` are replaced, not extended.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict).

    Lists are replaced wholesale, so a scenario's ``trees`` list stands in
    for the default one rather than extending it.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_overrides(config: dict, overrides: list[str]) -> dict:
    """Apply dot-notation CLI overrides like ``draws.count=5000``.

    Values are parsed as YAML scalars so ``"true"`` becomes ``True``,
    ``"42"`` becomes ``42``, etc.
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Override must be key=value, got: {override!r}")
        key_path, raw_value = override.split("=", 1)
        if not key_path:
            raise ValueError(f"Override has an empty key: {override!r}")
        value = yaml.safe_load(raw_value)
        keys = key_path.split(".")
        node = config
        for k in keys[:-1]:
            node = node.setdefault(k, {})
            if not isinstance(node, dict):
                raise ValueError(f"Cannot set {key_path!r}: {k!r} is not a mapping")
        node[keys[-1]] = value
    return config


def load_config(
    default_path: str | Path = "configs/default.yaml",
    scenario_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> dict[str, Any]:
    """Build a config by merging: default → scenario → CLI overrides.

    The merged result is checked with :func:`validate_config`.
    """
    config = load_yaml(default_path)
    if scenario_path:
        config = deep_merge(config, load_yaml(scenario_path))
    if overrides:
        config = apply_overrides(config, overrides)
    validate_config(config)
    return config


def validate_config(config: dict) -> dict:
    """Check the ``trees`` and ``draws`` sections against the schema above.

    Stakes themselves are validated by the trees when they are applied.
    Raises ``ValueError`` naming the first offending entry.
    """
    trees = config.get("trees") or []
    if not isinstance(trees, list):
        raise ValueError(f"'trees' must be a list, got {type(trees).__name__}")

    keys = []
    for i, tree_cfg in enumerate(trees):
        if not isinstance(tree_cfg, dict) or "key" not in tree_cfg:
            raise ValueError(f"trees[{i}] must be a mapping with a 'key'")
        k = tree_cfg.get("k", 2)
        if isinstance(k, bool) or not isinstance(k, int) or k < 2:
            raise ValueError(f"trees[{i}].k must be an int >= 2, got {k!r}")
        stakes = tree_cfg.get("stakes")
        if stakes is not None and not isinstance(stakes, dict):
            raise ValueError(f"trees[{i}].stakes must be a mapping, got {type(stakes).__name__}")
        if tree_cfg["key"] in keys:
            raise ValueError(f"trees[{i}].key {tree_cfg['key']!r} is used twice")
        keys.append(tree_cfg["key"])

    draws = config.get("draws")
    if draws is not None:
        if not isinstance(draws, dict):
            raise ValueError(f"'draws' must be a mapping, got {type(draws).__name__}")
        if draws.get("key") not in keys:
            raise ValueError(f"draws.key {draws.get('key')!r} names no configured tree")
        count = draws.get("count", 0)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"draws.count must be a non-negative int, got {count!r}")
    return config
