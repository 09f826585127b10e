"""Exceptions raised by sortition sum trees and their registry."""

from __future__ import annotations


class SortitionError(Exception):
    """Base class for every error raised by this package."""


class NotFound(SortitionError, KeyError):
    """An operation addressed a tree key that was never created."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No sortition tree under key {self.key!r}"


class AlreadyExists(SortitionError):
    """``create_tree`` was called with a key that is already in use."""

    def __init__(self, key: object) -> None:
        super().__init__(f"A sortition tree already exists under key {key!r}")
        self.key = key


class EmptyTree(SortitionError):
    """A draw was requested from a tree whose total weight is zero."""


class InvariantViolation(SortitionError, AssertionError):
    """The tree's internal bookkeeping is inconsistent.

    Never raised under correct use; seeing one means a bug in the tree
    machinery, not in the caller.
    """
