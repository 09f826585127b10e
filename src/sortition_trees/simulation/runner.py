"""Build registries from config and run repeated draws against them."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable
from typing import Any

import numpy as np
from tqdm import tqdm

from sortition_trees.simulation.evaluator import evaluate_frequencies, expected_frequencies
from sortition_trees.trees.registry import SortitionRegistry
from sortition_trees.utils.logging import ExperimentLogger
from sortition_trees.utils.seeding import draw_number, make_rng


def build_registry(config: dict) -> SortitionRegistry:
    """Create every tree listed under ``config["trees"]`` and apply its stakes."""
    registry = SortitionRegistry()
    for tree_cfg in config.get("trees", []):
        key = tree_cfg["key"]
        registry.create_tree(key, tree_cfg.get("k", 2))
        for identifier, stake in (tree_cfg.get("stakes") or {}).items():
            registry.set(key, identifier, stake)
    return registry


def run_draws(
    registry: SortitionRegistry,
    key: Hashable,
    n_draws: int,
    rng: np.random.Generator,
    progress: bool = False,
) -> Counter:
    """Draw *n_draws* times from tree *key* and count the winners."""
    counts: Counter = Counter()
    steps = range(n_draws)
    if progress:
        steps = tqdm(steps, desc=f"Drawing from {key!r}")
    for _ in steps:
        counts[registry.draw(key, draw_number(rng))] += 1
    return counts


def simulate(config: dict[str, Any], progress: bool = True) -> dict[str, float]:
    """Build the configured registry, draw, evaluate and log to MLFlow.

    Steps: build trees → draw → compare with stakes → log.
    """
    draws_cfg = config["draws"]
    key = draws_cfg["key"]

    registry = build_registry(config)
    rng = make_rng(config.get("seed"))

    with ExperimentLogger(
        experiment_name=config["mlflow"]["experiment_name"],
        tracking_uri=config["mlflow"]["tracking_uri"],
    ) as logger:
        logger.log_params(config)

        counts = run_draws(registry, key, draws_cfg["count"], rng, progress=progress)
        expected = expected_frequencies(registry, key)
        metrics = evaluate_frequencies(counts, expected)
        metrics["total_stake"] = float(registry.total(key))
        metrics["node_count"] = float(registry.tree(key).node_count)

        logger.log_metrics(metrics)
        n_draws = max(sum(counts.values()), 1)
        logger.log_frequencies({ident: counts[ident] / n_draws for ident in expected})

    return metrics
