"""1-out-of-2 oblivious transfer and the Chou-Orlandi protocol.

The sender holds pairs of blocks; the receiver holds one choice bit per pair
and learns exactly the chosen block of each pair. Curve points travel as
32-byte compressed Edwards25519 encodings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import contextmanager

from nacl.bindings import (
    crypto_core_ed25519_add,
    crypto_core_ed25519_scalar_reduce,
    crypto_core_ed25519_sub,
    crypto_scalarmult_ed25519_base_noclamp,
    crypto_scalarmult_ed25519_noclamp,
)

from .block import Block
from .channel import Channel
from .rand_aes import AesRng

_MASK128 = (1 << 128) - 1
_IO_ERRORS = (OSError, EOFError, ValueError, RuntimeError)


class OTSenderError(Exception):
    """Raised when the sending side of an oblivious transfer fails."""


class OTReceiverError(Exception):
    """Raised when the receiving side of an oblivious transfer fails."""


@contextmanager
def _wrap_io(error_type: type[Exception], message: str):
    try:
        yield
    except _IO_ERRORS as exc:
        raise error_type(message) from exc


def _random_scalar(rng: AesRng) -> bytes:
    """Draw a non-zero scalar modulo the group order."""
    while True:
        scalar = crypto_core_ed25519_scalar_reduce(rng.random_bytes(64))
        if any(scalar):
            return scalar


def _tweak(counter: int, index: int) -> int:
    return (counter + index) & _MASK128


class OtSender(ABC):
    """The party that offers pairs of messages."""

    @abstractmethod
    def send(self, channel: Channel, inputs: Sequence[tuple[Block, Block]], rng=None) -> None:
        """Transfer one message of each pair, as chosen by the receiver."""


class OtReceiver(ABC):
    """The party that picks one message from each pair."""

    @abstractmethod
    def receive(self, channel: Channel, choices: Sequence[bool], rng=None) -> list[Block]:
        """Return the chosen message of each pair."""


class ChouOrlandiSender(OtSender):
    """Sender side of the Chou-Orlandi protocol.

    A counter shared in step with the receiver tweaks every key hash, so
    consecutive runs between the same pair of objects use distinct tweaks.
    """

    def __init__(self) -> None:
        self.counter = 0

    def send(self, channel: Channel, inputs: Sequence[tuple[Block, Block]], rng=None) -> None:
        pairs = [tuple(pair) for pair in inputs]
        if any(len(pair) != 2 for pair in pairs):
            raise OTSenderError("Sender Invalid Input Length")
        if rng is None:
            rng = AesRng()

        with _wrap_io(OTSenderError, "Sender IO Error"):
            y = _random_scalar(rng)
            s = crypto_scalarmult_ed25519_base_noclamp(y)
            channel.write_point(s)
            channel.flush()

            t = crypto_scalarmult_ed25519_noclamp(y, s)

            keys = []
            for index in range(len(pairs)):
                r = channel.read_point()
                yr = crypto_scalarmult_ed25519_noclamp(y, r)
                tweak = _tweak(self.counter, index)
                k0 = Block.hash_point(tweak, yr)
                k1 = Block.hash_point(tweak, crypto_core_ed25519_sub(yr, t))
                keys.append((k0, k1))

            for (m0, m1), (k0, k1) in zip(pairs, keys):
                channel.write_block(m0 ^ k0)
                channel.write_block(m1 ^ k1)
            channel.flush()

        self.counter = (self.counter + len(pairs)) & _MASK128


class ChouOrlandiReceiver(OtReceiver):
    """Receiver side of the Chou-Orlandi protocol."""

    def __init__(self) -> None:
        self.counter = 0

    def receive(self, channel: Channel, choices: Sequence[bool], rng=None) -> list[Block]:
        bits = [bool(choice) for choice in choices]
        if rng is None:
            rng = AesRng()

        with _wrap_io(OTReceiverError, "Receiver IO Error"):
            s = channel.read_point()

            keys = []
            for index, bit in enumerate(bits):
                x = _random_scalar(rng)
                xg = crypto_scalarmult_ed25519_base_noclamp(x)
                r = crypto_core_ed25519_add(s, xg) if bit else xg
                channel.write_point(r)
                tweak = _tweak(self.counter, index)
                keys.append(Block.hash_point(tweak, crypto_scalarmult_ed25519_noclamp(x, s)))
            channel.flush()

            self.counter = (self.counter + len(bits)) & _MASK128

            results = []
            for bit, key in zip(bits, keys):
                c0 = channel.read_block()
                c1 = channel.read_block()
                results.append(key ^ (c1 if bit else c0))
        return results