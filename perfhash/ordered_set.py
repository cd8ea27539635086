"""An order-preserving immutable set backed by a perfect-hash ordered map."""

from __future__ import annotations

from typing import Any, Iterator

from perfhash.ordered_map import OrderedMap


class OrderedSet:
    """An immutable set whose members are the keys of an :class:`OrderedMap`.

    Members are iterated in the order they were defined.
    """

    __slots__ = ("_map",)

    def __init__(self, map: OrderedMap | None = None) -> None:
        self._map = OrderedMap() if map is None else map

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, value: Any) -> bool:
        return self._map.contains_key(value)

    def __iter__(self) -> Iterator[Any]:
        return self._map.keys()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedSet):
            return NotImplemented
        return self._map == other._map

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(repr(value) for value in self)
        return f"OrderedSet({{{body}}})"

    def contains(self, value: Any) -> bool:
        """Return whether ``value`` is in the set."""
        return self._map.contains_key(value)

    def get_key(self, key: Any) -> Any:
        """Return the set's own stored instance of ``key``, or ``None``."""
        return self._map.get_key(key)

    def get_index(self, key: Any) -> int | None:
        """Return the position of ``key`` in definition order, or ``None``."""
        return self._map.get_index(key)

    def index(self, index: int) -> Any:
        """Return the member at ``index``, or ``None`` if out of range."""
        entry = self._map.index(index)
        return None if entry is None else entry[0]

    def is_disjoint(self, other: Any) -> bool:
        """Return whether no member of this set is in ``other``."""
        return not any(value in other for value in self)

    def is_subset(self, other: Any) -> bool:
        """Return whether every member of this set is in ``other``."""
        return all(value in other for value in self)

    def is_superset(self, other: Any) -> bool:
        """Return whether every member of ``other`` is in this set."""
        return all(value in self for value in other)