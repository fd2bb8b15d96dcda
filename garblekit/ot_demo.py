"""Two-party demonstration of oblivious transfer over TCP."""

from __future__ import annotations

import argparse

from .block import Block
from .channel import Channel, NetChannel
from .ot import ChouOrlandiReceiver, ChouOrlandiSender
from .rand_aes import AesRng

DEFAULT_ADDRESS = "127.0.0.1:12345"
DEFAULT_COUNT = 8


def run_ot(channel: Channel, is_server: bool, count: int = DEFAULT_COUNT):
    """Run one side of a transfer of ``count`` random pairs.

    The server sends random block pairs and returns them. The client picks
    random choice bits and returns ``(choices, received_blocks)``.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = AesRng()
    if is_server:
        pairs = [(Block.random(rng), Block.random(rng)) for _ in range(count)]
        ChouOrlandiSender().send(channel, pairs, AesRng())
        print(f"send blocks: {pairs}")
        return pairs
    choices = [rng.next_bool() for _ in range(count)]
    received = ChouOrlandiReceiver().receive(channel, choices, AesRng())
    print(f"select bits: {choices}")
    print(f"received blocks: {received}")
    return choices, received


def main(argv=None) -> int:
    """Run one side of the transfer over TCP."""
    parser = argparse.ArgumentParser(description="Run oblivious transfer with a peer.")
    parser.add_argument("-i", "--is-server", type=int, default=-1,
                        help="non-zero to act as the server")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="host:port to use")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT,
                        help="number of pairs to transfer")
    args = parser.parse_args(argv)
    is_server = args.is_server != 0
    with NetChannel(is_server, args.address) as channel:
        run_ot(channel, is_server, args.count)
    return 0