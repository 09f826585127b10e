"""Registry of sortition sum trees addressed by key."""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from sortition_trees.trees.errors import AlreadyExists, NotFound
from sortition_trees.trees.sum_tree import LeavesPage, SortitionSumTree


class SortitionRegistry:
    """Holds independent :class:`SortitionSumTree` instances by key.

    Every operation routes to the tree under *key* and raises
    :class:`NotFound` when no such tree was created.

    Not thread-safe: writes (``create_tree``, ``set``) to a key must not
    run concurrently with any other call on that key.
    """

    def __init__(self) -> None:
        self._trees: dict[Hashable, SortitionSumTree] = {}

    def create_tree(self, key: Hashable, k: int) -> SortitionSumTree:
        """Create an empty tree with branching factor *k* under *key*."""
        if key in self._trees:
            raise AlreadyExists(key)
        tree = SortitionSumTree(k)
        self._trees[key] = tree
        return tree

    def tree(self, key: Hashable) -> SortitionSumTree:
        try:
            return self._trees[key]
        except KeyError:
            raise NotFound(key) from None

    def set(self, key: Hashable, identifier: Hashable, value: int) -> None:
        self.tree(key).set(identifier, value)

    def stake_of(self, key: Hashable, identifier: Hashable) -> int:
        return self.tree(key).stake_of(identifier)

    def draw(self, key: Hashable, drawn_number: int) -> Hashable:
        return self.tree(key).draw(drawn_number)

    def query_leaves(self, key: Hashable, cursor: int, count: int) -> LeavesPage:
        return self.tree(key).query_leaves(cursor, count)

    def total(self, key: Hashable) -> int:
        """Total stake of the tree under *key*."""
        return self.tree(key).total

    def __contains__(self, key: object) -> bool:
        return key in self._trees

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._trees)
