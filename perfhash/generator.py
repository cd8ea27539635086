"""Search for perfect-hash parameters with the CHD algorithm."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Sequence

from perfhash.shared import Hashes, displace, hash_key

DEFAULT_LAMBDA = 5
FIXED_SEED = 1234567890

_MASK64 = (1 << 64) - 1
_WY_CONST_0 = 0x2D358DCCAA6C78A5
_WY_CONST_1 = 0x8BB84B93962EACC9


class Rng:
    """Small seeded wyrand generator, so key searches are reproducible."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK64

    def u64(self) -> int:
        """Return the next 64-bit value."""
        s = (self._state + _WY_CONST_0) & _MASK64
        self._state = s
        t = s * (s ^ _WY_CONST_1)
        return (t & _MASK64) ^ (t >> 64)


@dataclass
class HashState:
    """A solved perfect hash: the hash key, bucket displacements and slot map."""

    key: int
    disps: list[tuple[int, int]] = field(default_factory=list)
    map: list[int] = field(default_factory=list)


def generate_hash(entries: Iterable[Any]) -> HashState:
    """Find a perfect hash for ``entries`` using the standard key hash."""
    return generate_hash_with_hash_fn(entries, hash_key)


def generate_hash_with_hash_fn(
    entries: Iterable[Any], hash_fn: Callable[[Any, int], Hashes]
) -> HashState:
    """Find a perfect hash for ``entries`` using ``hash_fn(entry, key)``.

    Keys are drawn from a fixed-seed generator until one yields a solution,
    so the result is the same on every run. Entries must hash distinctly.
    """
    items = list(entries)
    rng = Rng(FIXED_SEED)
    while True:
        key = rng.u64()
        solution = _try_generate([hash_fn(item, key) for item in items])
        if solution is not None:
            disps, table = solution
            return HashState(key=key, disps=disps, map=table)


def _try_generate(
    hashes: Sequence[Hashes],
) -> tuple[list[tuple[int, int]], list[int]] | None:
    table_len = len(hashes)
    buckets_len = (table_len + DEFAULT_LAMBDA - 1) // DEFAULT_LAMBDA
    buckets: list[list[int]] = [[] for _ in range(buckets_len)]
    for i, hashed in enumerate(hashes):
        buckets[hashed.g % buckets_len].append(i)

    order = sorted(range(buckets_len), key=lambda b: len(buckets[b]), reverse=True)

    disps = [(0, 0)] * buckets_len
    table: list[int | None] = [None] * table_len
    try_map = [0] * table_len
    generations = itertools.count(1)

    for bucket in order:
        found = _displace_bucket(buckets[bucket], hashes, table, try_map, generations)
        if found is None:
            return None
        disps[bucket] = found

    return disps, [slot for slot in table if slot is not None]


def _displace_bucket(
    keys: list[int],
    hashes: Sequence[Hashes],
    table: list[int | None],
    try_map: list[int],
    generations: Iterator[int],
) -> tuple[int, int] | None:
    table_len = len(table)
    for d1 in range(table_len):
        for d2 in range(table_len):
            generation = next(generations)
            placed = []
            for key in keys:
                hashed = hashes[key]
                idx = displace(hashed.f1, hashed.f2, d1, d2) % table_len
                if table[idx] is not None or try_map[idx] == generation:
                    break
                try_map[idx] = generation
                placed.append((idx, key))
            else:
                for idx, key in placed:
                    table[idx] = key
                return d1, d2
    return None