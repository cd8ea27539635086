"""An immutable map whose slots are laid out by a perfect hash."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from perfhash.shared import get_index, hash_key


class Map:
    """An immutable map built from a solved perfect hash.

    ``key`` is the hash key, ``disps`` the per-bucket displacement pairs and
    ``entries`` the ``(key, value)`` pairs placed in their hash slots.
    Iteration yields keys in an arbitrary but fixed order.
    """

    __slots__ = ("_key", "_disps", "_entries")

    def __init__(
        self,
        key: int = 0,
        disps: Iterable[tuple[int, int]] = (),
        entries: Iterable[tuple[Any, Any]] = (),
    ) -> None:
        self._key = key
        self._disps = tuple((d1, d2) for d1, d2 in disps)
        self._entries = tuple((k, v) for k, v in entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, key: Any) -> Any:
        entry = self.get_entry(key)
        if entry is None:
            raise KeyError(key)
        return entry[1]

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return (
            self._key == other._key
            and self._disps == other._disps
            and self._entries == other._entries
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries)
        return f"Map({{{body}}})"

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        entry = self.get_entry(key)
        return default if entry is None else entry[1]

    def get_key(self, key: Any) -> Any:
        """Return the map's own stored instance of ``key``, or ``None``."""
        entry = self.get_entry(key)
        return None if entry is None else entry[0]

    def get_entry(self, key: Any) -> tuple[Any, Any] | None:
        """Return the stored ``(key, value)`` pair for ``key``, or ``None``."""
        if not self._disps or not self._entries:
            return None
        hashes = hash_key(key, self._key)
        stored = self._entries[get_index(hashes, self._disps, len(self._entries))]
        return stored if stored[0] == key else None

    def contains_key(self, key: Any) -> bool:
        """Return whether ``key`` is in the map."""
        return self.get_entry(key) is not None

    def entries(self) -> Iterator[tuple[Any, Any]]:
        """Iterate over ``(key, value)`` pairs in an arbitrary but fixed order."""
        return iter(self._entries)

    def keys(self) -> Iterator[Any]:
        """Iterate over keys in the same order as :meth:`entries`."""
        return (k for k, _ in self._entries)

    def values(self) -> Iterator[Any]:
        """Iterate over values in the same order as :meth:`entries`."""
        return (v for _, v in self._entries)