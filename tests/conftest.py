"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from sortition_trees.trees import SortitionRegistry


@pytest.fixture
def configs_dir() -> Path:
    """Path to the configs/ directory."""
    return Path(__file__).resolve().parent.parent / "configs"


@pytest.fixture
def default_config(configs_dir: Path) -> dict:
    """Load the default config dict."""
    from sortition_trees.utils.config import load_yaml

    return load_yaml(configs_dir / "default.yaml")


@pytest.fixture
def registry() -> SortitionRegistry:
    """Registry with tree 1 (k=2) holding 100 -> 10 and 200 -> 20."""
    reg = SortitionRegistry()
    reg.create_tree(1, 2)
    reg.set(1, 100, 10)
    reg.set(1, 200, 20)
    return reg
