"""An order-preserving immutable map laid out by a perfect hash."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from perfhash.shared import get_index, hash_key


class OrderedMap:
    """An immutable map that remembers the order its entries were defined in.

    ``key`` is the hash key and ``disps`` the per-bucket displacement pairs.
    ``idxs`` maps each hash slot to a position in ``entries``, and ``entries``
    holds the ``(key, value)`` pairs in definition order. Iteration follows
    that order.
    """

    __slots__ = ("_key", "_disps", "_idxs", "_entries")

    def __init__(
        self,
        key: int = 0,
        disps: Iterable[tuple[int, int]] = (),
        idxs: Iterable[int] = (),
        entries: Iterable[tuple[Any, Any]] = (),
    ) -> None:
        self._key = key
        self._disps = tuple((d1, d2) for d1, d2 in disps)
        self._idxs = tuple(idxs)
        self._entries = tuple((k, v) for k, v in entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, key: Any) -> Any:
        found = self._lookup(key)
        if found is None:
            raise KeyError(key)
        return found[1][1]

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        return (
            self._key == other._key
            and self._disps == other._disps
            and self._idxs == other._idxs
            and self._entries == other._entries
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries)
        return f"OrderedMap({{{body}}})"

    def _lookup(self, key: Any) -> tuple[int, tuple[Any, Any]] | None:
        if not self._disps or not self._idxs:
            return None
        hashes = hash_key(key, self._key)
        position = self._idxs[get_index(hashes, self._disps, len(self._idxs))]
        stored = self._entries[position]
        return (position, stored) if stored[0] == key else None

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        found = self._lookup(key)
        return default if found is None else found[1][1]

    def get_key(self, key: Any) -> Any:
        """Return the map's own stored instance of ``key``, or ``None``."""
        found = self._lookup(key)
        return None if found is None else found[1][0]

    def get_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Return the stored ``(key, value)`` pair for ``key``, or ``None``."""
        found = self._lookup(key)
        return None if found is None else found[1]

    def get_index(self, key: Any) -> int | None:
        """Return the position of ``key`` in definition order, or ``None``."""
        found = self._lookup(key)
        return None if found is None else found[0]

    def index(self, index: int) -> tuple[Any, Any] | None:
        """Return the ``(key, value)`` pair at ``index``, or ``None`` if out of range."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def contains_key(self, key: Any) -> bool:
        """Return whether ``key`` is in the map."""
        return self._lookup(key) is not None

    def entries(self) -> Iterator[tuple[Any, Any]]:
        """Iterate over ``(key, value)`` pairs in definition order."""
        return iter(self._entries)

    def keys(self) -> Iterator[Any]:
        """Iterate over keys in definition order."""
        return (k for k, _ in self._entries)

    def values(self) -> Iterator[Any]:
        """Iterate over values in definition order."""
        return (v for _, v in self._entries)