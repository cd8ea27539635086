"""Build perfect-hash maps and sets directly from key/value definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from perfhash.generator import generate_hash
from perfhash.map import Map
from perfhash.ordered_map import OrderedMap
from perfhash.ordered_set import OrderedSet
from perfhash.set import Set
from perfhash.shared import DuplicateKeyError


class AnyOf:
    """Several keys that share one value (or one set entry)."""

    __slots__ = ("keys",)

    def __init__(self, *args: Any) -> None:
        if not args:
            raise ValueError("AnyOf needs at least one key")
        self.keys = tuple(args)

    def alternatives(self) -> Iterator[Any]:
        """Yield every key, flattening nested alternatives in order."""
        for key in self.keys:
            if isinstance(key, AnyOf):
                yield from key.alternatives()
            else:
                yield key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnyOf):
            return NotImplemented
        return self.keys == other.keys

    def __hash__(self) -> int:
        return hash((AnyOf, self.keys))

    def __repr__(self) -> str:
        return "AnyOf(" + ", ".join(repr(key) for key in self.keys) + ")"


@dataclass(frozen=True)
class Cfg:
    """An entry that is only included when ``enabled`` is true.

    When the wrapped key is an :class:`AnyOf`, only its first alternative
    carries the condition; the remaining alternatives are always included.
    """

    item: Any
    enabled: bool


@dataclass(frozen=True)
class _Entry:
    key: Any
    value: Any
    condition: bool | None


def _freeze(value: Any) -> Any:
    """Return a hashable stand-in for ``value`` that keeps key identity."""
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, list):
        return (list, tuple(_freeze(element) for element in value))
    if isinstance(value, tuple):
        return tuple(_freeze(element) for element in value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


def _expand(items: Iterable[Any], pairs: bool) -> list[_Entry]:
    if pairs and isinstance(items, Mapping):
        items = items.items()
    expanded: list[_Entry] = []
    for item in items:
        condition: bool | None = None
        if isinstance(item, Cfg):
            condition = bool(item.enabled)
            item = item.item
        if pairs:
            try:
                key, value = item
            except (TypeError, ValueError):
                raise TypeError(f"expected a (key, value) pair, got {item!r}") from None
        else:
            key, value = item, None
        if isinstance(key, Cfg):
            raise TypeError("Cfg must wrap a whole entry, not a key")
        alternatives = list(key.alternatives()) if isinstance(key, AnyOf) else [key]
        for position, alternative in enumerate(alternatives):
            if isinstance(alternative, Cfg):
                raise TypeError("Cfg cannot appear inside AnyOf")
            expanded.append(
                _Entry(alternative, value, condition if position == 0 else None)
            )
    return expanded


def _check_duplicates(entries: list[_Entry]) -> None:
    seen: set[Any] = set()
    for entry in entries:
        frozen = _freeze(entry.key)
        if frozen in seen:
            raise DuplicateKeyError(entry.key)
        seen.add(frozen)


def _resolve(items: Iterable[Any], pairs: bool) -> tuple[list[tuple[Any, Any]], bool]:
    """Expand, validate and filter definitions; report whether any were conditional."""
    entries = _expand(items, pairs)
    _check_duplicates(entries)
    conditional = any(entry.condition is not None for entry in entries)
    kept = [entry for entry in entries if entry.condition is None]
    kept += [entry for entry in entries if entry.condition]
    return [(entry.key, entry.value) for entry in kept], conditional


def _make_map(pairs: list[tuple[Any, Any]], conditional: bool) -> Map:
    if conditional and not pairs:
        return Map()
    state = generate_hash([key for key, _ in pairs])
    return Map(state.key, state.disps, [pairs[idx] for idx in state.map])


def _make_ordered_map(pairs: list[tuple[Any, Any]], conditional: bool) -> OrderedMap:
    if conditional and not pairs:
        return OrderedMap()
    state = generate_hash([key for key, _ in pairs])
    return OrderedMap(state.key, state.disps, state.map, pairs)


def phf_map(entries: Iterable[Any] | Mapping[Any, Any]) -> Map:
    """Build a :class:`Map` from ``(key, value)`` pairs or a mapping.

    Keys may be :class:`AnyOf` to share a value; pairs may be wrapped in
    :class:`Cfg`. Raises :class:`DuplicateKeyError` on a repeated key.
    """
    return _make_map(*_resolve(entries, pairs=True))


def phf_set(keys: Iterable[Any]) -> Set:
    """Build a :class:`Set` from keys, which may be :class:`AnyOf` or :class:`Cfg`."""
    return Set(_make_map(*_resolve(keys, pairs=False)))


def phf_ordered_map(entries: Iterable[Any] | Mapping[Any, Any]) -> OrderedMap:
    """Build an :class:`OrderedMap` that keeps definition order.

    Conditional entries that are enabled follow all unconditional ones.
    """
    return _make_ordered_map(*_resolve(entries, pairs=True))


def phf_ordered_set(keys: Iterable[Any]) -> OrderedSet:
    """Build an :class:`OrderedSet` that keeps definition order."""
    return OrderedSet(_make_ordered_map(*_resolve(keys, pairs=False)))