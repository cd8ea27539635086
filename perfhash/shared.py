"""Hashing, displacement and constant formatting shared by the perfect-hash types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from perfhash.siphash import SipHasher13

_MASK32 = 0xFFFFFFFF
_I32 = (-(2**31), 2**31 - 1)


@dataclass(frozen=True)
class Hashes:
    """The three 32-bit hash components derived from one key."""

    g: int
    f1: int
    f2: int


class IntType(Enum):
    """Fixed-width integer types a key may be hashed as."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    ISIZE = "isize"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    USIZE = "usize"

    @property
    def bits(self) -> int:
        suffix = self.value[1:]
        return 64 if suffix == "size" else int(suffix)

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class Typed:
    """An integer tagged with the fixed-width type it is hashed as."""

    value: int
    kind: IntType

    def __post_init__(self) -> None:
        kind = self.kind if isinstance(self.kind, IntType) else IntType(self.kind)
        object.__setattr__(self, "kind", kind)
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{kind.value} value must be an int, got {self.value!r}")
        if not kind.min <= self.value <= kind.max:
            raise ValueError(f"{self.value} does not fit in {kind.value}")

    def to_bytes(self) -> bytes:
        """Little-endian encoding at the type's width."""
        return self.value.to_bytes(self.kind.bits // 8, "little", signed=self.kind.signed)


@dataclass(frozen=True)
class Char:
    """A single character, hashed as its 32-bit code point."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise ValueError(f"Char needs exactly one character, got {self.value!r}")


class DuplicateKeyError(ValueError):
    """Raised when the same key is given twice to a builder."""

    def __init__(self, key: Any) -> None:
        try:
            shown = fmt_const(key)
        except TypeError:
            shown = repr(key)
        super().__init__(f"duplicate key `{shown}`")
        self.key = key


def displace(f1: int, f2: int, d1: int, d2: int) -> int:
    """Combine hash halves with a displacement pair, wrapping at 32 bits."""
    return (d2 + f1 * d1 + f2) & _MASK32


def phf_hash(value: Any, hasher: Any) -> None:
    """Feed ``value`` into ``hasher`` (anything with ``write(bytes)``)."""
    if isinstance(value, bool):
        hasher.write(b"\x01" if value else b"\x00")
    elif isinstance(value, Typed):
        hasher.write(value.to_bytes())
    elif isinstance(value, Char):
        hasher.write(ord(value.value).to_bytes(4, "little"))
    elif isinstance(value, int):
        if not _I32[0] <= value <= _I32[1]:
            raise ValueError(f"{value} does not fit in i32; wrap it in Typed")
        hasher.write(value.to_bytes(4, "little", signed=True))
    elif isinstance(value, str):
        hasher.write(value.encode("utf-8"))
    elif isinstance(value, (bytes, bytearray, memoryview)):
        hasher.write(bytes(value))
    elif isinstance(value, (tuple, list)):
        for element in value:
            phf_hash(element, hasher)
    else:
        raise TypeError(f"unsupported key type: {type(value).__name__}")


def hash_key(value: Any, key: int) -> Hashes:
    """Hash ``value`` with the 64-bit hash ``key``."""
    hasher = SipHasher13(0, key)
    phf_hash(value, hasher)
    lower, upper = hasher.finish128()
    return Hashes(g=(lower >> 32) & _MASK32, f1=lower & _MASK32, f2=upper & _MASK32)


def get_index(hashes: Hashes, disps: Sequence[tuple[int, int]], length: int) -> int:
    """Return the table slot for ``hashes`` given displacements and table length."""
    d1, d2 = disps[hashes.g % len(disps)]
    return displace(hashes.f1, hashes.f2, d1, d2) % length


def _escape(text: str, quote: str) -> str:
    pieces = []
    for ch in text:
        if ch == "\\":
            pieces.append("\\\\")
        elif ch == quote:
            pieces.append("\\" + quote)
        elif ch == "\0":
            pieces.append("\\0")
        elif ch == "\t":
            pieces.append("\\t")
        elif ch == "\r":
            pieces.append("\\r")
        elif ch == "\n":
            pieces.append("\\n")
        elif not ch.isprintable():
            pieces.append(f"\\u{{{ord(ch):x}}}")
        else:
            pieces.append(ch)
    return "".join(pieces)


def fmt_const(value: Any) -> str:
    """Render ``value`` as a constant expression in generated source."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Typed):
        return str(value.value)
    if isinstance(value, Char):
        return "'" + _escape(value.value, "'") + "'"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return '"' + _escape(value, '"') + '"'
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "&[" + ", ".join(str(b) for b in bytes(value)) + "]"
    if isinstance(value, list):
        return "[" + ", ".join(fmt_const(element) for element in value) + "]"
    if isinstance(value, tuple):
        return "(" + ", ".join(fmt_const(element) for element in value) + ")"
    raise TypeError(f"unsupported key type: {type(value).__name__}")