"""Tests for registry building, draw loops and the MLFlow-logged simulation."""

from __future__ import annotations

from pathlib import Path

import pytest

from sortition_trees.simulation.runner import build_registry, run_draws, simulate
from sortition_trees.trees import AlreadyExists
from sortition_trees.utils.config import load_config
from sortition_trees.utils.seeding import make_rng


def test_build_registry_from_default(default_config: dict) -> None:
    registry = build_registry(default_config)
    assert registry.stake_of(1, 100) == 10
    assert registry.stake_of(1, 200) == 20
    assert registry.tree(1).k == 2


def test_build_registry_rejects_duplicate_keys() -> None:
    config = {"trees": [{"key": "a", "k": 2}, {"key": "a", "k": 3}]}
    with pytest.raises(AlreadyExists):
        build_registry(config)


def test_build_registry_tree_without_stakes() -> None:
    registry = build_registry({"trees": [{"key": "a", "stakes": None}]})
    assert registry.total("a") == 0
    assert registry.tree("a").k == 2


def test_run_draws_counts_every_draw(default_config: dict) -> None:
    registry = build_registry(default_config)
    counts = run_draws(registry, 1, 3000, make_rng(0))
    assert sum(counts.values()) == 3000
    assert set(counts) <= {100, 200}
    assert abs(counts[200] / 3000 - 2 / 3) < 0.05


def test_run_draws_reproducible(default_config: dict) -> None:
    registry = build_registry(default_config)
    assert run_draws(registry, 1, 200, make_rng(9)) == run_draws(registry, 1, 200, make_rng(9))


def test_simulate_logs_and_returns_metrics(configs_dir: Path, tmp_path: Path) -> None:
    config = load_config(
        default_path=configs_dir / "default.yaml",
        scenario_path=configs_dir / "scenarios" / "skewed.yaml",
        overrides=[
            "draws.count=2000",
            f"mlflow.tracking_uri={(tmp_path / 'mlruns').as_uri()}",
        ],
    )
    metrics = simulate(config, progress=False)

    assert metrics["n_draws"] == 2000
    assert metrics["n_identifiers"] == 10
    assert metrics["total_stake"] == 1090
    assert metrics["max_abs_error"] < 0.05
    assert (tmp_path / "mlruns").exists()
