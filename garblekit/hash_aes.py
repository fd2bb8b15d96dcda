"""Correlation-robust hash functions built on fixed-key AES."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .block import ZERO_BLOCK, Block

_MASK64 = (1 << 64) - 1


class AesHash:
    """AES-128 keyed permutation and the hash variants derived from it."""

    __slots__ = ("_encryptor",)

    def __init__(self, key: Block) -> None:
        self._encryptor = Cipher(algorithms.AES(key.to_bytes()), modes.ECB()).encryptor()

    def _permute(self, x: Block) -> Block:
        return Block.from_bytes(self._encryptor.update(x.to_bytes()))

    def cr_hash(self, i: Block, x: Block) -> Block:
        """Correlation-robust hash: pi(x) xor x. The tweak is unused."""
        return self._permute(x) ^ x

    def ccr_hash(self, i: Block, x: Block) -> Block:
        """Circular correlation-robust hash: cr_hash of sigma(x).

        With x split into high and low 64-bit halves, sigma maps
        (high, low) to (high xor low, high).
        """
        high = x.value >> 64
        low = x.value & _MASK64
        return self.cr_hash(i, Block(((high ^ low) << 64) | high))

    def tccr_hash(self, i: Block, x: Block) -> Block:
        """Tweakable circular correlation-robust hash: pi(pi(x) xor i) xor pi(x)."""
        y = self._permute(x)
        return y ^ self._permute(y ^ i)


AES_HASH = AesHash(ZERO_BLOCK)