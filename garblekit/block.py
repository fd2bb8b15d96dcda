"""A 128-bit block value and the operations defined on it."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

BLOCK_SIZE = 16
_MASK128 = (1 << 128) - 1
_MASK64 = (1 << 64) - 1


def _carryless_mul(a: int, b: int) -> int:
    """Multiply two integers as polynomials over GF(2)."""
    product = 0
    while b:
        low = b & -b
        product ^= a << (low.bit_length() - 1)
        b ^= low
    return product


@dataclass(frozen=True, slots=True, order=True)
class Block:
    """An immutable 128-bit value.

    The byte form is little-endian, so bit 0 of the value is the least
    significant bit of the first byte.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise TypeError(f"block value must be an int, not {type(self.value).__name__}")
        if not 0 <= self.value <= _MASK128:
            raise ValueError(f"block value out of 128-bit range: {self.value}")

    @classmethod
    def from_bytes(cls, data: bytes) -> Block:
        """Build a block from exactly 16 bytes."""
        data = bytes(data)
        if len(data) != BLOCK_SIZE:
            raise ValueError(f"a block needs exactly {BLOCK_SIZE} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    def to_bytes(self) -> bytes:
        """Return the 16-byte little-endian encoding."""
        return self.value.to_bytes(BLOCK_SIZE, "little")

    @classmethod
    def random(cls, rng=None) -> Block:
        """Draw a uniformly random block.

        ``rng`` may be anything with a ``next_block()`` method (such as
        ``AesRng``) or a ``getrandbits()`` method (such as ``random.Random``);
        without one the operating system's source is used.
        """
        if rng is None:
            return cls.from_bytes(secrets.token_bytes(BLOCK_SIZE))
        next_block = getattr(rng, "next_block", None)
        if next_block is not None:
            return next_block()
        return cls(rng.getrandbits(128))

    def clmul(self, other: Block) -> tuple[Block, Block]:
        """Carryless product, returned as (low 128 bits, high 128 bits)."""
        product = _carryless_mul(self.value, other.value)
        return Block(product & _MASK128), Block(product >> 128)

    def lsb(self) -> bool:
        """Return the least significant bit."""
        return bool(self.value & 1)

    def set_lsb(self) -> Block:
        """Return a copy with the least significant bit set."""
        return Block(self.value | 1)

    def flip(self) -> Block:
        """Return a copy with every bit inverted."""
        return Block(self.value ^ _MASK128)

    @classmethod
    def hash_point(cls, tweak, point: bytes) -> Block:
        """Hash a compressed curve point with a tweak.

        The 32-byte point encoding keys AES-256, which encrypts the tweak's
        16-byte little-endian form.
        """
        point = bytes(point)
        if len(point) != 32:
            raise ValueError(f"a compressed point has 32 bytes, got {len(point)}")
        tweak_block = tweak if isinstance(tweak, Block) else Block(tweak)
        encryptor = Cipher(algorithms.AES(point), modes.ECB()).encryptor()
        return cls.from_bytes(encryptor.update(tweak_block.to_bytes()) + encryptor.finalize())

    def __and__(self, other: object) -> Block:
        if not isinstance(other, Block):
            return NotImplemented
        return Block(self.value & other.value)

    def __or__(self, other: object) -> Block:
        if not isinstance(other, Block):
            return NotImplemented
        return Block(self.value | other.value)

    def __xor__(self, other: object) -> Block:
        if not isinstance(other, Block):
            return NotImplemented
        return Block(self.value ^ other.value)

    def __invert__(self) -> Block:
        return self.flip()

    def __int__(self) -> int:
        return self.value

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_bytes().hex().upper()

    def __repr__(self) -> str:
        return f"Block({self})"


ZERO_BLOCK = Block(0)
ONES_BLOCK = Block(_MASK128)
SELECT_MASK = (ZERO_BLOCK, ONES_BLOCK)