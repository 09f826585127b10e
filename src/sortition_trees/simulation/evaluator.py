"""Compare empirical draw frequencies with the stakes that produced them."""

from __future__ import annotations

from collections.abc import Hashable, Mapping

import numpy as np

from sortition_trees.trees.registry import SortitionRegistry


def expected_frequencies(
    registry: SortitionRegistry,
    key: Hashable,
    page_size: int = 256,
) -> dict[Hashable, float]:
    """Map every active identifier in tree *key* to ``stake / total``.

    Walks the leaves page by page, so it sees exactly what
    ``query_leaves`` reports.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    tree = registry.tree(key)
    total = tree.total
    if total == 0:
        return {}

    stakes: dict[Hashable, int] = {}
    cursor = 0
    while True:
        page = registry.query_leaves(key, cursor, page_size)
        for offset, value in enumerate(page.values):
            if value:
                stakes[tree.identifier_at(page.start_index + cursor + offset)] = value
        cursor += len(page.values)
        if not page.has_more:
            break
    return {ident: stake / total for ident, stake in stakes.items()}


def evaluate_frequencies(
    counts: Mapping[Hashable, int],
    expected: Mapping[Hashable, float],
) -> dict[str, float]:
    """Summary stats of observed draw counts against expected frequencies.

    Returns:
        Dict with ``n_draws``, ``n_identifiers``, ``max_abs_error``,
        ``mean_abs_error`` and ``chi_square``.
    """
    unexpected = [ident for ident in counts if ident not in expected]
    if unexpected:
        raise ValueError(f"Drawn identifiers with no stake: {unexpected!r}")

    idents = list(expected)
    n_draws = int(sum(counts.values()))
    if not idents or n_draws == 0:
        return {
            "n_draws": float(n_draws),
            "n_identifiers": float(len(idents)),
            "max_abs_error": 0.0,
            "mean_abs_error": 0.0,
            "chi_square": 0.0,
        }

    probs = np.array([expected[i] for i in idents], dtype=np.float64)
    observed = np.array([counts.get(i, 0) for i in idents], dtype=np.float64)
    errors = np.abs(observed / n_draws - probs)
    predicted = probs * n_draws

    return {
        "n_draws": float(n_draws),
        "n_identifiers": float(len(idents)),
        "max_abs_error": float(errors.max()),
        "mean_abs_error": float(errors.mean()),
        "chi_square": float(np.sum((observed - predicted) ** 2 / predicted)),
    }
