import string

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from perfhash.generator import generate_hash
from perfhash.map import Map
from perfhash.shared import Char, IntType, Typed


def build(pairs):
    pairs = list(pairs)
    state = generate_hash([k for k, _ in pairs])
    return Map(state.key, state.disps, [pairs[i] for i in state.map])


def check_keys(pairs):
    m = build(pairs)
    for k, v in pairs:
        assert m.get(k) == v


def test_trailing_and_single_entry():
    m = build([("foo", 10)])
    assert m["foo"] == 10
    assert len(m) == 1


def test_byte_string_key():
    m = build([(b"camembert", "delicious")])
    assert m.get(b"camembert") == "delicious"


def test_two():
    m = build([("foo", 10), ("bar", 11)])
    assert m.get("foo") == 10
    assert m.get("bar") == 11
    assert m.get("asdf") is None
    assert len(m) == 2


def test_entries():
    m = build([("foo", 10), ("bar", 11)])
    assert dict(m.entries()) == {"foo": 10, "bar": 11}


def test_keys():
    m = build([("foo", 10), ("bar", 11)])
    assert set(m.keys()) == {"foo", "bar"}


def test_values():
    m = build([("foo", 10), ("bar", 11)])
    assert sorted(m.values()) == [10, 11]


def test_large():
    pairs = [(letter, i) for i, letter in enumerate(string.ascii_lowercase)]
    m = build(pairs)
    assert m.get("a") == 0
    assert all(m[k] == v for k, v in pairs)


def test_non_static_str_key():
    m = build([("a", 0)])
    assert m.get("".join(["a"])) == 0


def test_index_ok():
    m = build([("a", 0)])
    assert m["a"] == 0


def test_index_fail():
    m = build([("a", 0)])
    with pytest.raises(KeyError):
        m["b"]
    assert "b" not in m
    assert m["a"] == 0


def test_array_vals():
    m = build([("a", [0, 1, 2])])
    assert m.get("a") == [0, 1, 2]


def test_array_keys():
    m = build([(bytes([0, 1]), 0), (bytes([2, 3]), 1), (bytes([4, 5]), 2)])
    assert m.get(bytes([0, 1])) == 0
    assert m.get(bytes([4, 5])) == 2


def test_byte_keys():
    check_keys([(Typed(ord("a"), IntType.U8), 0), (Typed(ord("b"), IntType.U8), 1)])


def test_char_keys():
    check_keys([(Char("a"), 0), (Char("b"), 1)])


@pytest.mark.parametrize(
    "kind, values",
    [
        ("i8", [0, 1, 127, -128]),
        ("i16", [0, 1, 32767, -32768]),
        ("i32", [0, 1, 2147483647, -2147483648]),
        ("i64", [0, 1, -9223372036854775808]),
        (
            "i128",
            [
                0,
                1,
                170141183460469231731687303715884105727,
                -170141183460469231731687303715884105727,
            ],
        ),
        ("isize", [0, 1, 9223372036854775807, -9223372036854775808]),
        ("u8", [0, 1, 255]),
        ("u16", [0, 1, 65535]),
        ("u32", [0, 1, 4294967295]),
        ("u64", [0, 1, 18446744073709551615]),
        ("u128", [0, 1, 340282366920938463463374607431768211455]),
        ("usize", [0, 1, 18446744073709551615]),
    ],
)
def test_integer_keys(kind, values):
    check_keys([(Typed(value, kind), i) for i, value in enumerate(values)])


def test_bool_keys():
    check_keys([(False, 0), (True, 1)])


def test_into_iterator():
    m = build([("foo", 10)])
    assert list(m) == ["foo"]
    assert list(m.entries()) == [("foo", 10)]


def test_tuples():
    m = build([((0, "a"), 1), ((1, "b"), 2), ((2, "c"), 3)])
    assert m.get((0, "a")) == 1
    assert m.get((1, "b")) == 2
    assert m.get((2, "c")) == 3
    assert m.get((3, "d")) is None


def test_empty_map():
    m = Map()
    assert len(m) == 0
    assert m.get("anything") is None
    assert "anything" not in m
    assert list(m.entries()) == []


def test_get_default():
    m = build([("foo", 10)])
    assert m.get("missing", -1) == -1
    assert m.get("foo", -1) == 10


def test_get_key_returns_stored_instance():
    m = build([(b"camembert", "delicious")])
    stored = m.get_key(bytearray(b"camembert"))
    assert stored == b"camembert"
    assert type(stored) is bytes


def test_get_entry():
    m = build([("foo", 10), ("bar", 11)])
    assert m.get_entry("bar") == ("bar", 11)
    assert m.get_entry("baz") is None


def test_same_bytes_different_type_is_missing():
    m = build([("foo", 1)])
    assert m.get(b"foo") is None
    assert not m.contains_key(b"foo")


def test_contains():
    m = build([("foo", 10)])
    assert "foo" in m
    assert m.contains_key("foo")
    assert "bar" not in m


def test_orders_agree():
    m = build([(letter, i) for i, letter in enumerate("abcdefg")])
    assert list(zip(m.keys(), m.values())) == list(m.entries())


def test_equality():
    a = build([("foo", 1), ("bar", 2)])
    b = build([("foo", 1), ("bar", 2)])
    c = build([("foo", 1), ("bar", 3)])
    assert a == b
    assert not a == c
    assert Map() == Map()


def test_repr():
    m = build([("foo", 10)])
    assert repr(m) == "Map({'foo': 10})"


@settings(max_examples=25, deadline=None)
@given(st.lists(st.text(max_size=8), unique=True, max_size=15))
def test_every_key_found(keys):
    m = build([(k, i) for i, k in enumerate(keys)])
    assert len(m) == len(keys)
    assert [m[k] for k in keys] == list(range(len(keys)))