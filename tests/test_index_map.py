"""Tests for the identifier <-> node index bijection."""

from __future__ import annotations

import pytest

from sortition_trees.trees import InvariantViolation
from sortition_trees.trees.index_map import IndexMap


def test_bind_and_lookup_both_ways() -> None:
    ids = IndexMap()
    ids.bind("alice", 3)
    assert ids.index_of("alice") == 3
    assert ids.identifier_at(3) == "alice"
    assert "alice" in ids
    assert ids.is_bound(3)
    assert len(ids) == 1


def test_unknown_lookups() -> None:
    ids = IndexMap()
    assert ids.index_of("nobody") is None
    with pytest.raises(InvariantViolation):
        ids.identifier_at(7)


def test_bind_refuses_duplicate_identifier() -> None:
    ids = IndexMap()
    ids.bind("alice", 1)
    with pytest.raises(InvariantViolation):
        ids.bind("alice", 2)
    assert ids.index_of("alice") == 1
    assert not ids.is_bound(2)


def test_bind_refuses_occupied_index() -> None:
    ids = IndexMap()
    ids.bind("alice", 1)
    with pytest.raises(InvariantViolation):
        ids.bind("bob", 1)
    assert "bob" not in ids


def test_unbind_returns_index_and_clears_both_sides() -> None:
    ids = IndexMap()
    ids.bind("alice", 4)
    assert ids.unbind("alice") == 4
    assert "alice" not in ids
    assert not ids.is_bound(4)
    with pytest.raises(InvariantViolation):
        ids.unbind("alice")


def test_rebind_moves_identifier() -> None:
    ids = IndexMap()
    ids.bind("alice", 1)
    assert ids.rebind("alice", 4) == 1
    assert ids.index_of("alice") == 4
    assert not ids.is_bound(1)
    assert ids.identifier_at(4) == "alice"


def test_rebind_onto_occupied_index_leaves_map_unchanged() -> None:
    ids = IndexMap()
    ids.bind("alice", 1)
    ids.bind("bob", 2)
    with pytest.raises(InvariantViolation):
        ids.rebind("alice", 2)
    assert dict(ids.items()) == {"alice": 1, "bob": 2}
