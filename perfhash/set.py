"""An immutable set backed by a perfect-hash map."""

from __future__ import annotations

from typing import Any, Iterator

from perfhash.map import Map


class Set:
    """An immutable set whose members are the keys of a :class:`Map`.

    Members are iterated in an arbitrary but fixed order.
    """

    __slots__ = ("_map",)

    def __init__(self, map: Map | None = None) -> None:
        self._map = Map() if map is None else map

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, value: Any) -> bool:
        return self._map.contains_key(value)

    def __iter__(self) -> Iterator[Any]:
        return self._map.keys()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self._map == other._map

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(repr(value) for value in self)
        return f"Set({{{body}}})"

    def contains(self, value: Any) -> bool:
        """Return whether ``value`` is in the set."""
        return self._map.contains_key(value)

    def get_key(self, key: Any) -> Any:
        """Return the set's own stored instance of ``key``, or ``None``."""
        return self._map.get_key(key)

    def is_disjoint(self, other: Any) -> bool:
        """Return whether no member of this set is in ``other``."""
        return not any(value in other for value in self)

    def is_subset(self, other: Any) -> bool:
        """Return whether every member of this set is in ``other``."""
        return all(value in other for value in self)

    def is_superset(self, other: Any) -> bool:
        """Return whether every member of ``other`` is in this set."""
        return all(value in self for value in other)