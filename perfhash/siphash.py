"""SipHash-1-3 with 128-bit output, fed incrementally."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK64


def _sipround(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


class SipHasher13:
    """Streaming SipHash-1-3 producing a 128-bit digest.

    Bytes passed to successive :meth:`write` calls are hashed as one
    contiguous message.
    """

    _C_ROUNDS = 1
    _D_ROUNDS = 3

    def __init__(self, key0: int, key1: int) -> None:
        for name, key in (("key0", key0), ("key1", key1)):
            if isinstance(key, bool) or not isinstance(key, int):
                raise TypeError(f"{name} must be an int")
            if not 0 <= key <= _MASK64:
                raise ValueError(f"{name} must fit in 64 unsigned bits")
        self._v = (
            key0 ^ 0x736F6D6570736575,
            key1 ^ 0x646F72616E646F6D ^ 0xEE,
            key0 ^ 0x6C7967656E657261,
            key1 ^ 0x7465646279746573,
        )
        self._tail = b""
        self._length = 0

    def _compress(self, word: int) -> None:
        v0, v1, v2, v3 = self._v
        v3 ^= word
        for _ in range(self._C_ROUNDS):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= word
        self._v = (v0, v1, v2, v3)

    def write(self, data: bytes | bytearray | memoryview) -> None:
        """Feed more bytes into the hash."""
        chunk = bytes(data)
        self._length += len(chunk)
        buffer = self._tail + chunk
        full = len(buffer) - len(buffer) % 8
        for start in range(0, full, 8):
            self._compress(int.from_bytes(buffer[start:start + 8], "little"))
        self._tail = buffer[full:]

    def finish128(self) -> tuple[int, int]:
        """Return the digest as ``(low, high)`` 64-bit halves without changing state."""
        v0, v1, v2, v3 = self._v
        last = ((self._length & 0xFF) << 56) | int.from_bytes(self._tail, "little")
        v3 ^= last
        for _ in range(self._C_ROUNDS):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= last

        v2 ^= 0xEE
        for _ in range(self._D_ROUNDS):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        low = v0 ^ v1 ^ v2 ^ v3

        v1 ^= 0xDD
        for _ in range(self._D_ROUNDS):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        high = v0 ^ v1 ^ v2 ^ v3
        return low, high