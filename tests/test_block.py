import random

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from garblekit.block import ONES_BLOCK, SELECT_MASK, ZERO_BLOCK, Block


@pytest.fixture
def rng():
    return random.Random(1234)


def test_and(rng):
    x = Block.random(rng)
    assert x & ONES_BLOCK == x


def test_or(rng):
    x = Block.random(rng)
    assert x | ONES_BLOCK == ONES_BLOCK
    assert x | x == x


def test_xor(rng):
    x = Block.random(rng)
    y = Block.random(rng)
    assert (x ^ y) ^ y == x


def test_lsb(rng):
    x = Block.random(rng) | Block(1)
    assert x.lsb()
    x = x ^ Block(1)
    assert not x.lsb()


def test_flip(rng):
    x = Block.random(rng)
    assert x.flip().flip() == x
    assert x ^ x.flip() == ONES_BLOCK
    assert ~x == x.flip()


def test_conversion(rng):
    value = rng.getrandbits(128)
    assert int(Block(value)) == value
    block = Block(value)
    assert Block.from_bytes(block.to_bytes()) == block


def test_set_lsb():
    assert Block(2).set_lsb() == Block(3)
    assert Block(3).set_lsb() == Block(3)


def test_byte_order_is_little_endian():
    assert Block(1).to_bytes() == b"\x01" + b"\x00" * 15
    assert bytes(Block(1)) == Block(1).to_bytes()
    assert str(Block(1)) == "01" + "00" * 15


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        Block.from_bytes(b"\x00" * 15)
    with pytest.raises(ValueError):
        Block.from_bytes(b"\x00" * 17)


def test_out_of_range_value():
    with pytest.raises(ValueError):
        Block(1 << 128)
    with pytest.raises(ValueError):
        Block(-1)


def test_ordering_follows_integer_value():
    assert Block(1) < Block(2)
    assert sorted([Block(5), Block(0), Block(3)]) == [Block(0), Block(3), Block(5)]


def test_hash_consistent_with_equality(rng):
    x = Block.random(rng)
    assert len({x, Block(x.value)}) == 1


def test_select_mask():
    assert SELECT_MASK[0] == ZERO_BLOCK
    assert SELECT_MASK[1] == ONES_BLOCK
    assert SELECT_MASK[1] & Block(7) == Block(7)


def test_clmul_identity(rng):
    x = Block.random(rng)
    assert x.clmul(Block(1)) == (x, ZERO_BLOCK)


def test_clmul_high_part():
    x = Block(1 << 64)
    assert x.clmul(x) == (ZERO_BLOCK, Block(1))


def test_clmul_commutes(rng):
    x = Block.random(rng)
    y = Block.random(rng)
    assert x.clmul(y) == y.clmul(x)


def test_clmul_has_no_carries():
    assert Block(3).clmul(Block(3)) == (Block(5), ZERO_BLOCK)


def test_random_without_rng_gives_distinct_blocks():
    assert len({Block.random() for _ in range(8)}) == 8


def test_hash_point_round_trip():
    point = bytes(range(32))
    hashed = Block.hash_point(7, point)
    decryptor = Cipher(algorithms.AES(point), modes.ECB()).decryptor()
    assert decryptor.update(hashed.to_bytes()) + decryptor.finalize() == Block(7).to_bytes()


def test_hash_point_tweak_matters():
    point = bytes(32)
    assert Block.hash_point(0, point) != Block.hash_point(1, point)
    assert Block.hash_point(Block(3), point) == Block.hash_point(3, point)


def test_hash_point_rejects_bad_point():
    with pytest.raises(ValueError):
        Block.hash_point(0, bytes(31))