# perfhash

Immutable lookup tables built on perfect hash functions.

`perfhash` builds maps and sets that resolve every key with one hash and
one table probe. Construction uses the CHD ("compress, hash and
displace") algorithm over a 128-bit SipHash-1-3. The hash depends only on
the key's bytes and the chosen hash key, and the search for a hash key is
driven by a fixed-seed generator, so the same entries always give the same
table.

There are four containers:

| Container      | Module                  | Iteration order                  |
|----------------|-------------------------|----------------------------------|
| `Map`          | `perfhash.map`          | arbitrary but fixed              |
| `Set`          | `perfhash.set`          | arbitrary but fixed              |
| `OrderedMap`   | `perfhash.ordered_map`  | the order the entries were given |
| `OrderedSet`   | `perfhash.ordered_set`  | the order the entries were given |

## Installation

```
pip install perfhash
```

The package has no runtime dependencies and needs Python 3.10 or later.

## Building tables

The functions in `perfhash.builders` take your entries and return a ready
container. `phf_map` and `phf_ordered_map` accept an iterable of
`(key, value)` pairs or a mapping:

```python
from perfhash.builders import phf_map, phf_set

KEYWORDS = phf_map([
    ("loop", "Loop"),
    ("continue", "Continue"),
    ("break", "Break"),
    ("fn", "Fn"),
    ("extern", "Extern"),
])

KEYWORDS["loop"]          # "Loop"
KEYWORDS.get("while")     # None
KEYWORDS.get("while", 0)  # 0
"fn" in KEYWORDS          # True
len(KEYWORDS)             # 5
```

Looking up a missing key with `[]` raises `KeyError`. Maps also offer
`get_key` (the stored key instance), `get_entry` (the stored
`(key, value)` pair), `contains_key`, `entries`, `keys` and `values`;
iterating a map yields its keys.

Sets work the same way, with keys only:

```python
GREETINGS = phf_set(["hello world", "hola mundo"])
GREETINGS.contains("hello world")   # True
"hola mundo" in GREETINGS           # True
```

### Several keys for one value

Wrap alternatives in `AnyOf` to give several keys the same value. Each
alternative becomes an entry of its own:

```python
from perfhash.builders import AnyOf, phf_map, phf_set

OPERATORS = phf_map([
    (AnyOf("+", "add", "plus"), "addition"),
    (AnyOf("-", "sub", "minus"), "subtraction"),
])
OPERATORS["plus"]         # "addition"

KEYWORDS = phf_set([AnyOf("if", "elif", "else"), "for"])
len(KEYWORDS)             # 4
```

### Conditional entries

`Cfg(item, enabled)` wraps a whole entry and includes it only when
`enabled` is true:

```python
from perfhash.builders import Cfg, phf_map

FEATURES = phf_map([
    ("foo", 1),
    Cfg(("bar", 2), enabled=False),
    Cfg(("baz", 3), enabled=True),
])
FEATURES.get("bar")       # None
FEATURES["baz"]           # 3
```

When a `Cfg` wraps an `AnyOf` key, only the first alternative carries the
condition. In the ordered containers, enabled conditional entries come
after all unconditional ones.

A key given twice (including one repeated through `AnyOf`) raises
`perfhash.shared.DuplicateKeyError`, a subclass of `ValueError`.

## Key types

Keys may be strings, `bytes` (or `bytearray`/`memoryview`), booleans,
integers, and tuples or lists of these. Hashing must be reproducible, so
each key is hashed as a fixed byte encoding:

- a plain `int` is hashed as a 32-bit signed integer; values outside that
  range raise `ValueError`;
- for other widths, wrap the integer in `perfhash.shared.Typed` with an
  `IntType` kind, e.g. `Typed(255, IntType.U8)` or `Typed(2**64 - 1, "u64")`;
  a value that does not fit the kind raises `ValueError`;
- `perfhash.shared.Char("a")` is a single character hashed as its 32-bit
  code point.

A key must be looked up in the same form it was stored in: `Typed(1, "u32")`
does not find a key stored as the plain `1`.

## Ordered containers

`OrderedMap` and `OrderedSet` also remember where each key was defined:

```python
from perfhash.builders import phf_ordered_map, phf_ordered_set

M = phf_ordered_map([("foo", 10), ("bar", 11), ("baz", 12)])
list(M.keys())            # ["foo", "bar", "baz"]
M.get_index("baz")        # 2
M.index(1)                # ("bar", 11)
M.index(5)                # None

S = phf_ordered_set(["hello", "there", "world"])
list(S)                   # ["hello", "there", "world"]
S.index(0)                # "hello"
```

Both set types provide `is_disjoint`, `is_subset` and `is_superset`; the
other argument may be any container that supports `in`.

## Generating source text

`perfhash.codegen` has builders that render a table as text, for writing
into generated source files. Values must be strings and are written
exactly as given; keys are rendered as constant literals:

```python
from perfhash.codegen import MapBuilder, SetBuilder

builder = MapBuilder()
builder.entry("a", "1").entry("b", "2").entry("c", "3")
print(builder.build())

print(SetBuilder().entry("x").entry("y").build())
```

The output has the shape `::phf::Map { key: ..., disps: &[...],
entries: &[...] }`. `MapBuilder.from_pairs(pairs)` builds from an iterable
of `(key, value)` pairs, and `phf_path(path)` changes the prefix of the
printed type names (`::phf` by default). `OrderedMapBuilder` and
`OrderedSetBuilder` are the ordered counterparts. `build()` raises
`DuplicateKeyError` if a key was added twice.

## Lower-level pieces

- `perfhash.generator.generate_hash(entries)` solves the perfect hash for
  a list of keys and returns a `HashState` (hash key, displacements and
  slot mapping). `generate_hash_with_hash_fn(entries, hash_fn)` accepts a
  custom `hash_fn(entry, key) -> Hashes`. `Rng` is the seeded generator
  that supplies candidate hash keys.
- The containers can be built directly from a solved state, e.g.
  `Map(state.key, state.disps, [pairs[i] for i in state.map])`.
- `perfhash.shared` has `hash_key`, `displace`, `get_index`, `phf_hash`
  and `fmt_const`, the primitives shared by the containers and builders.
- `perfhash.siphash.SipHasher13` is the streaming 128-bit SipHash-1-3 used
  for keys; `finish128()` returns the `(low, high)` 64-bit halves.

## What it does not do

- There is no command-line tool; everything is used from Python.
- The text from `perfhash.codegen` is meant for other source files; this
  package does not read it back.
- There are no case-insensitive key types; keys compare and hash exactly.

## Running the tests

```
pip install -e ".[test]"
pytest
```