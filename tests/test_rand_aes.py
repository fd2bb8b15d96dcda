import pytest

from garblekit.block import ZERO_BLOCK, Block
from garblekit.rand_aes import AesRng


def test_generate():
    rng = AesRng()
    a = [rng.next_block() for _ in range(8)]
    b = [rng.next_block() for _ in range(8)]
    assert a != b


def test_zero_seed_first_output_is_encrypted_zero_counter():
    rng = AesRng(ZERO_BLOCK)
    assert rng.random_bytes(16) == bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e")


def test_next_block_reads_bytes_little_endian():
    seed = Block(0x1234)
    assert AesRng(seed).next_block() == Block.from_bytes(AesRng(seed).random_bytes(16))


def test_same_seed_same_stream():
    expected = bytes.fromhex(
        "66e94bd4ef8a2c3b884cfa59ca342b2e" "58e2fccefa7e3061367f1d57a4e7455a"
    )
    first = AesRng(ZERO_BLOCK).random_bytes(32)
    second = AesRng(ZERO_BLOCK).random_bytes(32)
    assert first == expected
    assert second == expected


def test_different_seeds_differ():
    assert AesRng(Block(1)).random_bytes(32) != AesRng(Block(2)).random_bytes(32)


def test_stream_continues_across_batches():
    seed = Block(7)
    whole = AesRng(seed).random_bytes(256)
    split = AesRng(seed)
    assert split.random_bytes(128) + split.random_bytes(128) == whole


def test_next_u64_joins_two_words():
    seed = Block(11)
    words = AesRng(seed)
    low = words.next_u32()
    high = words.next_u32()
    assert AesRng(seed).next_u64() == (high << 32) | low


def test_partial_word_is_discarded():
    seed = Block(13)
    partial = AesRng(seed)
    assert len(partial.random_bytes(3)) == 3
    reference = AesRng(seed)
    reference.next_u32()
    assert partial.next_u32() == reference.next_u32()


def test_next_bool_is_top_bit():
    seed = Block(17)
    bools = AesRng(seed)
    words = AesRng(seed)
    for _ in range(64):
        assert bools.next_bool() == bool(words.next_u32() >> 31)


def test_fork_is_seeded_from_parent():
    seed = Block(19)
    parent = AesRng(seed)
    child = parent.fork()
    expected_seed = AesRng(seed).next_block()
    assert child.random_bytes(48) == AesRng(expected_seed).random_bytes(48)


def test_block_random_uses_rng():
    seed = Block(23)
    assert Block.random(AesRng(seed)) == AesRng(seed).next_block()


def test_negative_byte_count():
    with pytest.raises(ValueError):
        AesRng(ZERO_BLOCK).random_bytes(-1)