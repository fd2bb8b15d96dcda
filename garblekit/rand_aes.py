"""A pseudo-random generator built on AES in counter mode."""

from __future__ import annotations

import struct

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .block import Block

_MASK128 = (1 << 128) - 1
_BLOCKS_PER_BATCH = 8
_WORDS_PER_BATCH = _BLOCKS_PER_BATCH * 4


class AesRng:
    """Random generator that encrypts a counter starting at zero under the seed.

    Output is produced eight blocks at a time and handed out as 32-bit
    little-endian words; every request consumes whole words.
    """

    __slots__ = ("_encryptor", "_counter", "_words", "_index")

    def __init__(self, seed: Block | None = None) -> None:
        if seed is None:
            seed = Block.random()
        self._encryptor = Cipher(algorithms.AES(seed.to_bytes()), modes.ECB()).encryptor()
        self._counter = 0
        self._words: tuple[int, ...] = ()
        self._index = 0

    def __repr__(self) -> str:
        return "AesRng()"

    def _refill(self) -> None:
        plaintext = b"".join(
            ((self._counter + k) & _MASK128).to_bytes(16, "big")
            for k in range(_BLOCKS_PER_BATCH)
        )
        self._counter = (self._counter + _BLOCKS_PER_BATCH) & _MASK128
        self._words = struct.unpack(f"<{_WORDS_PER_BATCH}I", self._encryptor.update(plaintext))
        self._index = 0

    def next_u32(self) -> int:
        """Return the next 32-bit word."""
        if self._index >= len(self._words):
            self._refill()
        word = self._words[self._index]
        self._index += 1
        return word

    def next_u64(self) -> int:
        """Return the next 64-bit value, built from two words, low word first."""
        low = self.next_u32()
        return (self.next_u32() << 32) | low

    def next_block(self) -> Block:
        """Return the next 128-bit block, built from two 64-bit values."""
        low = self.next_u64()
        return Block((self.next_u64() << 64) | low)

    def next_bool(self) -> bool:
        """Return the top bit of the next word."""
        return self.next_u32() >= 1 << 31

    def random_bytes(self, n: int) -> bytes:
        """Return ``n`` random bytes; a partly used final word is discarded."""
        if n < 0:
            raise ValueError(f"byte count must be non-negative, got {n}")
        words = (n + 3) // 4
        data = b"".join(self.next_u32().to_bytes(4, "little") for _ in range(words))
        return data[:n]

    def fork(self) -> AesRng:
        """Return a new generator seeded from this one."""
        return AesRng(self.next_block())