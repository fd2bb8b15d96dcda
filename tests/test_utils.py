import random

import pytest

from garblekit.utils import (
    and_bytes,
    and_into,
    pack_bits,
    unpack_bits,
    xor_bytes,
    xor_bytes_n,
    xor_into,
    xor_into_n,
)


@pytest.fixture
def rng():
    return random.Random(99)


def _random_bytes(rng, n=128):
    return bytes(rng.getrandbits(8) for _ in range(n))


def test_xor(rng):
    v = _random_bytes(rng)
    w = _random_bytes(rng)
    assert xor_bytes(xor_bytes(v, w), w) == v


def test_xor_inplace(rng):
    v = bytearray(_random_bytes(rng))
    goal = bytes(v)
    w = _random_bytes(rng)
    xor_into(v, w)
    xor_into(v, w)
    assert bytes(v) == goal


def test_and(rng):
    v = _random_bytes(rng)
    ones = b"\xff" * 128
    assert and_bytes(v, ones) == v


def test_and_inplace(rng):
    v = bytearray(_random_bytes(rng))
    and_into(v, bytes(128))
    assert bytes(v) == bytes(128)


def test_pack_bits_lsb_first():
    bits = [True, False, False, False, False, False, False, False, True]
    assert pack_bits(bits) == b"\x01\x01"
    assert pack_bits([False, True]) == b"\x02"
    assert pack_bits([]) == b""


@pytest.mark.parametrize("size", [1, 7, 8, 9, 10, 64, 100])
def test_pack_unpack_round_trip(rng, size):
    bits = [bool(rng.getrandbits(1)) for _ in range(size)]
    packed = pack_bits(bits)
    assert len(packed) == (size + 7) // 8
    assert unpack_bits(packed, size) == bits


def test_unpack_bits_limited_by_data():
    assert unpack_bits(b"\xff", 12) == [True] * 8


def test_xor_stops_at_shorter():
    assert xor_bytes(b"\x0f\x0f\x0f", b"\xff") == b"\xf0"


def test_xor_bytes_n(rng):
    v = _random_bytes(rng, 16)
    w = _random_bytes(rng, 16)
    assert xor_bytes_n(v, w, 4) == xor_bytes(v, w)[:4]


def test_xor_bytes_n_too_long():
    with pytest.raises(ValueError):
        xor_bytes_n(b"\x00" * 3, b"\x00" * 8, 4)


def test_xor_into_n_leaves_tail():
    a = bytearray(b"\x01\x02\x03\x04")
    xor_into_n(a, b"\xff\xff\xff\xff", 2)
    assert bytes(a) == b"\xfe\xfd\x03\x04"


def test_xor_into_n_too_long():
    with pytest.raises(ValueError):
        xor_into_n(bytearray(2), b"\x00" * 4, 3)