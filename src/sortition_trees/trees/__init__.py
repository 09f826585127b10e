"""Sortition sum trees and the registry that addresses them by key."""

from __future__ import annotations

from sortition_trees.trees.errors import (
    AlreadyExists,
    EmptyTree,
    InvariantViolation,
    NotFound,
    SortitionError,
)
from sortition_trees.trees.registry import SortitionRegistry
from sortition_trees.trees.sum_tree import MAX_WEIGHT, LeavesPage, SortitionSumTree

__all__ = [
    "MAX_WEIGHT",
    "AlreadyExists",
    "EmptyTree",
    "InvariantViolation",
    "LeavesPage",
    "NotFound",
    "SortitionError",
    "SortitionRegistry",
    "SortitionSumTree",
]
