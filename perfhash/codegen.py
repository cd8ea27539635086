"""Builders that emit source text for perfect-hash maps and sets."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from perfhash.generator import HashState, generate_hash
from perfhash.shared import DuplicateKeyError, fmt_const

_DEFAULT_PATH = "::phf"
_UNIT = "()"


def _freeze(value: Any) -> Any:
    """Return a hashable stand-in for ``value`` that keeps its equality."""
    if isinstance(value, list):
        return (list, tuple(_freeze(element) for element in value))
    if isinstance(value, tuple):
        return tuple(_freeze(element) for element in value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


def _solve(keys: Sequence[Any]) -> HashState:
    seen: set[Any] = set()
    for key in keys:
        frozen = _freeze(key)
        if frozen in seen:
            raise DuplicateKeyError(key)
        seen.add(frozen)
    return generate_hash(keys)


def _check_value(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"value must be source text (str), got {type(value).__name__}")
    return value


def _render_disps(state: HashState) -> str:
    return "".join(f"\n        ({d1}, {d2})," for d1, d2 in state.disps)


def _render_map(path: str, state: HashState, keys: Sequence[Any], values: Sequence[str]) -> str:
    entries = "".join(
        f"\n        ({fmt_const(keys[idx])}, {values[idx]}),"
        for idx in state.map
    )
    return (
        f"{path}::Map {{\n    key: {state.key},\n    disps: &["
        f"{_render_disps(state)}\n    ],\n    entries: &["
        f"{entries}\n    ],\n}}"
    )


def _render_ordered_map(
    path: str, state: HashState, keys: Sequence[Any], values: Sequence[str]
) -> str:
    idxs = "".join(f"\n        {idx}," for idx in state.map)
    entries = "".join(
        f"\n        ({fmt_const(key)}, {value}),"
        for key, value in zip(keys, values)
    )
    return (
        f"{path}::OrderedMap {{\n    key: {state.key},\n    disps: &["
        f"{_render_disps(state)}\n    ],\n    idxs: &["
        f"{idxs}\n    ],\n    entries: &["
        f"{entries}\n    ],\n}}"
    )


class MapBuilder:
    """Collects keys and value source text and renders a ``Map`` constant."""

    def __init__(self) -> None:
        self._keys: list[Any] = []
        self._values: list[str] = []
        self._path = _DEFAULT_PATH

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Any, str]]) -> MapBuilder:
        """Create a builder holding every ``(key, value)`` pair in ``pairs``."""
        builder = cls()
        for key, value in pairs:
            builder.entry(key, value)
        return builder

    def phf_path(self, path: str) -> MapBuilder:
        """Set the path that prefixes the emitted type name."""
        self._path = str(path)
        return self

    def entry(self, key: Any, value: str) -> MapBuilder:
        """Add an entry; ``value`` is written exactly as given."""
        self._values.append(_check_value(value))
        self._keys.append(key)
        return self

    def build(self) -> str:
        """Solve the perfect hash and return the rendered map.

        Raises :class:`DuplicateKeyError` if any key was added twice.
        """
        state = _solve(self._keys)
        return _render_map(self._path, state, self._keys, self._values)


class SetBuilder:
    """Collects keys and renders a ``Set`` constant."""

    def __init__(self) -> None:
        self._map = MapBuilder()

    def phf_path(self, path: str) -> SetBuilder:
        """Set the path that prefixes the emitted type names."""
        self._map.phf_path(path)
        return self

    def entry(self, entry: Any) -> SetBuilder:
        """Add a member."""
        self._map.entry(entry, _UNIT)
        return self

    def build(self) -> str:
        """Solve the perfect hash and return the rendered set.

        Raises :class:`DuplicateKeyError` if any member was added twice.
        """
        inner = self._map.build()
        return f"{self._map._path}::Set {{ map: {inner} }}"


class OrderedMapBuilder:
    """Collects keys and value source text and renders an ``OrderedMap`` constant."""

    def __init__(self) -> None:
        self._keys: list[Any] = []
        self._values: list[str] = []
        self._path = _DEFAULT_PATH

    def phf_path(self, path: str) -> OrderedMapBuilder:
        """Set the path that prefixes the emitted type name."""
        self._path = str(path)
        return self

    def entry(self, key: Any, value: str) -> OrderedMapBuilder:
        """Add an entry; ``value`` is written exactly as given."""
        self._values.append(_check_value(value))
        self._keys.append(key)
        return self

    def build(self) -> str:
        """Solve the perfect hash and return the rendered ordered map.

        Raises :class:`DuplicateKeyError` if any key was added twice.
        """
        state = _solve(self._keys)
        return _render_ordered_map(self._path, state, self._keys, self._values)


class OrderedSetBuilder:
    """Collects keys and renders an ``OrderedSet`` constant."""

    def __init__(self) -> None:
        self._map = OrderedMapBuilder()

    def phf_path(self, path: str) -> OrderedSetBuilder:
        """Set the path that prefixes the emitted type names."""
        self._map.phf_path(path)
        return self

    def entry(self, entry: Any) -> OrderedSetBuilder:
        """Add a member."""
        self._map.entry(entry, _UNIT)
        return self

    def build(self) -> str:
        """Solve the perfect hash and return the rendered ordered set.

        Raises :class:`DuplicateKeyError` if any member was added twice.
        """
        inner = self._map.build()
        return f"{self._map._path}::OrderedSet {{ map: {inner} }}"