"""K-ary sum tree for O(log_k n) weighted sortition."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from numbers import Integral
from typing import NamedTuple

from sortition_trees.trees.errors import EmptyTree, InvariantViolation
from sortition_trees.trees.index_map import IndexMap

MAX_WEIGHT = 2**128 - 1


def parent(index: int, k: int) -> int:
    """Index of the parent of node *index* (``index > 0``)."""
    return (index - 1) // k


def first_child(index: int, k: int) -> int:
    """Index of the leftmost child slot of node *index*."""
    return k * index + 1


def as_int(value: Integral, what: str) -> int:
    """Return *value* as a plain ``int``; NumPy integers are accepted, bools are not."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    return int(value)


def check_weight(value: Integral) -> int:
    """Validate a stake and return it as a plain ``int``."""
    value = as_int(value, "Weight")
    if not 0 <= value <= MAX_WEIGHT:
        raise ValueError(f"Weight must be in [0, 2**128), got {value}")
    return value


class LeavesPage(NamedTuple):
    """One page of leaf values returned by :meth:`SortitionSumTree.query_leaves`."""

    start_index: int
    values: list[int]
    has_more: bool


class SortitionSumTree:
    """A k-ary tree where leaves hold stakes and internal nodes their sums.

    Nodes live in a flat list addressed like a k-ary heap: the root is
    index 0 and node *i* has children ``k*i + 1 .. k*i + k``.  The list
    only grows; zeroed leaves go on a free list and are reused LIFO by the
    next insertion.

    Supports O(log_k n) stake updates and O(k log_k n) draws.
    """

    def __init__(self, k: int) -> None:
        if isinstance(k, bool) or not isinstance(k, int):
            raise TypeError(f"Branching factor must be an int, got {type(k).__name__}")
        if k < 2:
            raise ValueError(f"Branching factor must be >= 2, got {k}")
        self.k = k
        self._nodes: list[int] = [0]
        self._free: list[int] = []
        self._ids = IndexMap()

    # ── public API ────────────────────────────────────────────────────────

    def set(self, identifier: Hashable, value: int) -> None:
        """Insert, update or remove (``value == 0``) the stake of *identifier*."""
        value = check_weight(value)
        index = self._ids.index_of(identifier)

        if index is not None:
            current = self._nodes[index]
            if value == 0:
                self.update_parents(index, -1, current)
                self._nodes[index] = 0
                self._ids.unbind(identifier)
                self._free.append(index)
            elif value != current:
                sign = 1 if value > current else -1
                self.update_parents(index, sign, abs(value - current))
                self._nodes[index] = value
            return

        if value == 0:
            return

        if self._free:
            index = self._free.pop()
            self._nodes[index] = value
        else:
            index = len(self._nodes)
            if index != 1 and (index - 1) % self.k == 0:
                # The parent leaf becomes an aggregator; its stake moves
                # into the slot right after the new node.
                parent_index = parent(index, self.k)
                moved = self._ids.identifier_at(parent_index)
                self._nodes.extend((value, self._nodes[parent_index]))
                self._ids.rebind(moved, index + 1)
            else:
                self._nodes.append(value)

        self._ids.bind(identifier, index)
        self.update_parents(index, 1, value)

    def update_parents(self, index: int, sign: int, amount: int) -> None:
        """Add (``sign=1``) or subtract (``sign=-1``) *amount* on every
        ancestor of *index*, root included.

        Subtractions are checked before anything is written, so a failing
        call leaves the tree untouched.
        """
        if sign not in (1, -1):
            raise ValueError(f"sign must be 1 or -1, got {sign}")
        ancestors = list(self._ancestors(index))
        if sign < 0:
            for node in ancestors:
                if self._nodes[node] < amount:
                    raise InvariantViolation(
                        f"Subtracting {amount} from node {node} "
                        f"(weight {self._nodes[node]}) would underflow"
                    )
        for node in ancestors:
            self._nodes[node] += sign * amount

    def stake_of(self, identifier: Hashable) -> int:
        """Current stake of *identifier*, 0 if it is not active."""
        index = self._ids.index_of(identifier)
        if index is None:
            return 0
        return self._nodes[index]

    def draw(self, drawn_number: int) -> Hashable:
        """Pick an identifier with probability proportional to its stake.

        *drawn_number* is reduced modulo the total stake, then located in
        the contiguous, stake-sized intervals the children of each node
        cover.  The result is deterministic for a given tree state.
        """
        drawn_number = as_int(drawn_number, "Drawn number")
        if drawn_number < 0:
            raise ValueError(f"Drawn number must be non-negative, got {drawn_number}")
        if self._nodes[0] == 0:
            raise EmptyTree("Cannot draw from a tree with zero total stake")

        remaining = drawn_number % self._nodes[0]
        index = 0
        size = len(self._nodes)
        while first_child(index, self.k) < size:
            start = first_child(index, self.k)
            for child in range(start, min(start + self.k, size)):
                weight = self._nodes[child]
                if remaining < weight:
                    index = child
                    break
                remaining -= weight
            else:
                raise InvariantViolation(
                    f"Children of node {index} do not cover its weight {self._nodes[index]}"
                )
        return self._ids.identifier_at(index)

    def query_leaves(self, cursor: int, count: int) -> LeavesPage:
        """Return up to *count* leaf values starting *cursor* leaves in.

        Leaves are the nodes from ``start_index`` to the end of the array.
        For an empty tree ``start_index`` is 0 and the page holds the
        root's value.
        """
        if cursor < 0 or count < 0:
            raise ValueError(f"cursor and count must be non-negative, got {cursor}, {count}")
        size = len(self._nodes)
        start_index = self.leaves_start()
        begin = start_index + cursor
        end = min(begin + count, size)
        values = self._nodes[begin:end]
        return LeavesPage(start_index, values, end < size)

    def leaves_start(self) -> int:
        """Smallest index whose children would fall outside the array."""
        return (len(self._nodes) + self.k - 2) // self.k

    # ── inspection ────────────────────────────────────────────────────────

    @property
    def total(self) -> int:
        """Sum of all stakes (root value)."""
        return self._nodes[0]

    @property
    def nodes(self) -> list[int]:
        """Copy of the node array, root first."""
        return list(self._nodes)

    @property
    def node_count(self) -> int:
        """Number of nodes ever allocated, including recycled ones."""
        return len(self._nodes)

    def identifier_at(self, index: int) -> Hashable:
        return self._ids.identifier_at(index)

    def items(self) -> Iterator[tuple[Hashable, int]]:
        """Yield ``(identifier, stake)`` for every active identifier."""
        for identifier, index in self._ids.items():
            yield identifier, self._nodes[index]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def _ancestors(self, index: int) -> Iterator[int]:
        while index != 0:
            index = parent(index, self.k)
            yield index
