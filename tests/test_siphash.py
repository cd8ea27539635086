import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from perfhash.siphash import SipHasher13


def digest(key0, key1, *chunks):
    hasher = SipHasher13(key0, key1)
    for chunk in chunks:
        hasher.write(chunk)
    return hasher.finish128()


def test_output_halves_are_64_bit():
    low, high = digest(0, 42, b"hello world")
    assert 0 <= low < 2**64
    assert 0 <= high < 2**64


def test_deterministic():
    results = {digest(0, 7, b"abc") for _ in range(3)}
    assert len(results) == 1
    assert digest(0, 7, b"abd") not in results


def test_key_changes_digest():
    assert digest(0, 1, b"abc") != digest(0, 2, b"abc")


def test_key_halves_are_not_interchangeable():
    assert digest(0, 1, b"abc") != digest(1, 0, b"abc")


def test_trailing_zero_byte_changes_digest():
    assert digest(0, 5, b"") != digest(0, 5, b"\x00")


def test_finish_does_not_consume_state():
    hasher = SipHasher13(0, 99)
    hasher.write(b"first part")
    first = hasher.finish128()
    assert hasher.finish128() == first
    hasher.write(b" and more")
    assert hasher.finish128() == digest(0, 99, b"first part and more")


@settings(max_examples=60, deadline=None)
@given(data=st.binary(max_size=64), cuts=st.lists(st.integers(0, 64), max_size=4))
def test_streaming_matches_one_shot(data, cuts):
    points = sorted({min(c, len(data)) for c in cuts})
    pieces = []
    previous = 0
    for point in points:
        pieces.append(data[previous:point])
        previous = point
    pieces.append(data[previous:])
    assert digest(0, 12345, *pieces) == digest(0, 12345, data)


def test_accepts_bytearray_and_memoryview():
    expected = digest(0, 3, b"abcdefghij")
    assert digest(0, 3, bytearray(b"abcde"), memoryview(b"fghij")) == expected


@pytest.mark.parametrize("keys", [(-1, 0), (0, 2**64)])
def test_key_out_of_range(keys):
    with pytest.raises(ValueError):
        SipHasher13(*keys)


def test_key_must_be_int():
    with pytest.raises(TypeError):
        SipHasher13(0, "1")