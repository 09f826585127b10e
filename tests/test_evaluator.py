"""Tests for draw-frequency evaluation."""

from __future__ import annotations

from collections import Counter

import pytest

from sortition_trees.simulation.evaluator import evaluate_frequencies, expected_frequencies
from sortition_trees.trees import SortitionRegistry


def test_expected_frequencies(registry: SortitionRegistry) -> None:
    expected = expected_frequencies(registry, 1)
    assert expected == pytest.approx({100: 1 / 3, 200: 2 / 3})


def test_expected_frequencies_small_pages_skip_removed() -> None:
    reg = SortitionRegistry()
    reg.create_tree("t", 3)
    for ident in range(1, 11):
        reg.set("t", ident, ident)
    reg.set("t", 4, 0)

    expected = expected_frequencies(reg, "t", page_size=2)
    total = sum(range(1, 11)) - 4
    assert set(expected) == set(range(1, 11)) - {4}
    for ident, freq in expected.items():
        assert freq == pytest.approx(ident / total)


def test_expected_frequencies_empty_tree() -> None:
    reg = SortitionRegistry()
    reg.create_tree("t", 2)
    assert expected_frequencies(reg, "t") == {}


def test_evaluate_perfect_match() -> None:
    metrics = evaluate_frequencies(Counter({1: 25, 2: 75}), {1: 0.25, 2: 0.75})
    assert metrics["n_draws"] == 100
    assert metrics["n_identifiers"] == 2
    assert metrics["max_abs_error"] == pytest.approx(0.0)
    assert metrics["chi_square"] == pytest.approx(0.0)


def test_evaluate_counts_missing_identifiers_as_zero() -> None:
    metrics = evaluate_frequencies(Counter({1: 100}), {1: 0.5, 2: 0.5})
    assert metrics["max_abs_error"] == pytest.approx(0.5)
    assert metrics["mean_abs_error"] == pytest.approx(0.5)
    assert metrics["chi_square"] == pytest.approx(100.0)


def test_evaluate_rejects_unexpected_identifier() -> None:
    with pytest.raises(ValueError):
        evaluate_frequencies(Counter({3: 1}), {1: 1.0})


def test_evaluate_no_draws() -> None:
    metrics = evaluate_frequencies(Counter(), {1: 1.0})
    assert metrics["n_draws"] == 0
    assert metrics["chi_square"] == 0.0


def test_expected_frequencies_rejects_empty_pages(registry: SortitionRegistry) -> None:
    with pytest.raises(ValueError):
        expected_frequencies(registry, 1, page_size=0)
    with pytest.raises(ValueError):
        expected_frequencies(registry, 1, page_size=-3)
