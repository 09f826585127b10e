"""One-to-one mapping between identifiers and node indices."""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from sortition_trees.trees.errors import InvariantViolation


class IndexMap:
    """A bijection between active identifiers and the nodes holding them.

    Both directions are kept in step here, so callers never touch the two
    underlying dicts.  Every mutating method refuses to break the
    bijection and raises :class:`InvariantViolation` instead.
    """

    def __init__(self) -> None:
        self._index_of: dict[Hashable, int] = {}
        self._identifier_at: dict[int, Hashable] = {}

    # ── queries ───────────────────────────────────────────────────────────

    def index_of(self, identifier: Hashable) -> int | None:
        """Node index bound to *identifier*, or ``None`` if it is unbound."""
        return self._index_of.get(identifier)

    def identifier_at(self, index: int) -> Hashable:
        """Identifier bound to node *index*."""
        try:
            return self._identifier_at[index]
        except KeyError:
            raise InvariantViolation(f"No identifier is bound to node {index}") from None

    def is_bound(self, index: int) -> bool:
        return index in self._identifier_at

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index_of

    def __len__(self) -> int:
        return len(self._index_of)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._index_of)

    def items(self) -> Iterator[tuple[Hashable, int]]:
        """Yield ``(identifier, index)`` pairs."""
        return iter(self._index_of.items())

    # ── mutation ──────────────────────────────────────────────────────────

    def bind(self, identifier: Hashable, index: int) -> None:
        """Bind a currently unbound *identifier* to a currently free *index*."""
        if identifier in self._index_of:
            raise InvariantViolation(
                f"Identifier {identifier!r} is already bound to node "
                f"{self._index_of[identifier]}"
            )
        if index in self._identifier_at:
            raise InvariantViolation(
                f"Node {index} is already bound to {self._identifier_at[index]!r}"
            )
        self._index_of[identifier] = index
        self._identifier_at[index] = identifier

    def unbind(self, identifier: Hashable) -> int:
        """Remove *identifier* and return the index it was bound to."""
        try:
            index = self._index_of.pop(identifier)
        except KeyError:
            raise InvariantViolation(f"Identifier {identifier!r} is not bound") from None
        del self._identifier_at[index]
        return index

    def rebind(self, identifier: Hashable, new_index: int) -> int:
        """Move *identifier* to *new_index*, freeing its old index.

        Returns the old index.
        """
        if new_index in self._identifier_at:
            raise InvariantViolation(
                f"Node {new_index} is already bound to {self._identifier_at[new_index]!r}"
            )
        old_index = self.unbind(identifier)
        self.bind(identifier, new_index)
        return old_index
