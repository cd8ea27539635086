"""Immutable maps and sets backed by perfect hash functions, with builders and source text generation."""

__version__ = "0.12.1"

__all__ = [
    "builders",
    "codegen",
    "generator",
    "map",
    "ordered_map",
    "ordered_set",
    "set",
    "shared",
    "siphash",
]