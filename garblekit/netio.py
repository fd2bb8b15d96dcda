"""Two-party demonstration of the channel: each side sends a random payload."""

from __future__ import annotations

import argparse

from nacl.bindings import crypto_scalarmult_ed25519_base_noclamp

from .channel import Channel, NetChannel
from .rand_aes import AesRng

DEFAULT_ADDRESS = "127.0.0.1:12345"
_COUNT = 10


def _random_point(rng: AesRng) -> bytes:
    scalar = rng.next_block().value or 1
    return crypto_scalarmult_ed25519_base_noclamp(scalar.to_bytes(32, "little"))


def _make_payload(rng: AesRng) -> dict:
    return {
        "bytes": rng.random_bytes(_COUNT),
        "bool": rng.next_bool(),
        "bools": [rng.next_bool() for _ in range(_COUNT)],
        "block": rng.next_block(),
        "point": _random_point(rng),
    }


def _send(channel: Channel, payload: dict) -> None:
    channel.write_bytes(payload["bytes"])
    channel.write_bool(payload["bool"])
    channel.write_bools(payload["bools"])
    channel.write_block(payload["block"])
    channel.write_point(payload["point"])
    channel.flush()


def _receive(channel: Channel) -> dict:
    return {
        "bytes": channel.read_bytes(_COUNT),
        "bool": channel.read_bool(),
        "bools": channel.read_bools(_COUNT),
        "block": channel.read_block(),
        "point": channel.read_point(),
    }


def _report(prefix: str, payload: dict) -> None:
    print(f"{prefix}_bytes: {list(payload['bytes'])}")
    print(f"{prefix}_bool: {payload['bool']}")
    print(f"{prefix}_bools: {payload['bools']}")
    print(f"{prefix}_block: {payload['block']}")
    print(f"{prefix}_point: {list(payload['point'])}")


def exchange(channel: Channel, rng: AesRng | None = None) -> tuple[dict, dict]:
    """Swap a random payload with the peer and return (sent, received).

    The server sends first and then receives; the client does the reverse.
    """
    if rng is None:
        rng = AesRng()
    if channel.is_server:
        sent = _make_payload(rng)
        _report("send", sent)
        _send(channel, sent)
        received = _receive(channel)
        _report("recv", received)
    else:
        received = _receive(channel)
        _report("recv", received)
        sent = _make_payload(rng)
        _report("send", sent)
        _send(channel, sent)
    return sent, received


def main(argv=None) -> int:
    """Run one side of the exchange over TCP."""
    parser = argparse.ArgumentParser(description="Exchange random values with a peer.")
    parser.add_argument("-i", "--is-server", type=int, default=-1,
                        help="non-zero to act as the server")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="host:port to use")
    args = parser.parse_args(argv)
    with NetChannel(args.is_server != 0, args.address) as channel:
        exchange(channel)
    return 0