"""Bit packing and bytewise logic helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def pack_bits(bits: Sequence[bool]) -> bytes:
    """Pack bits into bytes, least significant bit first."""
    return bytes(
        sum(int(bool(bit)) << j for j, bit in enumerate(bits[start:start + 8]))
        for start in range(0, len(bits), 8)
    )


def unpack_bits(data: Iterable[int], size: int) -> list[bool]:
    """Unpack at most ``size`` bits from bytes, least significant bit first."""
    bits = [bool((byte >> j) & 1) for byte in data for j in range(8)]
    return bits[:size]


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings, stopping at the shorter one."""
    return bytes(x ^ y for x, y in zip(a, b))


def xor_bytes_n(a: bytes, b: bytes, n: int) -> bytes:
    """XOR the first ``n`` bytes of two byte strings."""
    if n > len(a) or n > len(b):
        raise ValueError(f"cannot take {n} bytes from inputs of length {len(a)} and {len(b)}")
    return xor_bytes(a[:n], b[:n])


def xor_into(a: bytearray, b: bytes) -> None:
    """XOR ``b`` into ``a`` in place, over the shorter length."""
    count = min(len(a), len(b))
    a[:count] = xor_bytes(a[:count], b)


def xor_into_n(a: bytearray, b: bytes, n: int) -> None:
    """XOR ``b`` into the first ``n`` bytes of ``a`` in place."""
    if n > len(a):
        raise ValueError(f"cannot take {n} bytes from a buffer of length {len(a)}")
    count = min(n, len(b))
    a[:count] = xor_bytes(a[:count], b)


def and_bytes(a: bytes, b: bytes) -> bytes:
    """AND two byte strings, stopping at the shorter one."""
    return bytes(x & y for x, y in zip(a, b))


def and_into(a: bytearray, b: bytes) -> None:
    """AND ``b`` into ``a`` in place, over the shorter length."""
    count = min(len(a), len(b))
    a[:count] = and_bytes(a[:count], b)