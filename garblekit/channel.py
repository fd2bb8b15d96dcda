"""Byte channels between two parties, with typed reads and writes on top."""

from __future__ import annotations

import socket
import threading
from typing import BinaryIO, Union

from nacl.bindings import crypto_core_ed25519_is_valid_point

from .block import BLOCK_SIZE, Block
from .utils import pack_bits, unpack_bits

POINT_SIZE = 32

Address = Union[str, "tuple[str, int]"]


def _point_bytes(point) -> bytes:
    if isinstance(point, (bytes, bytearray, memoryview)):
        data = bytes(point)
    elif hasattr(point, "__bytes__") and not isinstance(point, int):
        data = bytes(point)
    else:
        raise TypeError(f"a point must be given as bytes, not {type(point).__name__}")
    if len(data) != POINT_SIZE:
        raise ValueError(f"a compressed point has {POINT_SIZE} bytes, got {len(data)}")
    return data


class Channel:
    """A two-way byte stream built from a binary reader and a binary writer.

    Reads and writes are each guarded by a lock, so one thread may read while
    another writes.  The channel counts the bytes it moves and its flushes.
    """

    is_server: bool = False

    def __init__(self, reader: BinaryIO, writer: BinaryIO) -> None:
        self._reader = reader
        self._writer = writer
        self._read_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._read_bytes_size = 0
        self._write_bytes_size = 0
        self._flush_num = 0
        self._closed = False

    @property
    def read_bytes_size(self) -> int:
        """Total number of bytes read so far."""
        return self._read_bytes_size

    @property
    def write_bytes_size(self) -> int:
        """Total number of bytes written so far."""
        return self._write_bytes_size

    @property
    def flush_num(self) -> int:
        """Number of flushes so far."""
        return self._flush_num

    def write_bytes(self, data: bytes) -> None:
        """Write all of ``data``."""
        data = bytes(data)
        with self._write_lock:
            self._writer.write(data)
            self._write_bytes_size += len(data)

    def read_bytes(self, n: int) -> bytes:
        """Read exactly ``n`` bytes; raise EOFError if the stream ends first."""
        if n < 0:
            raise ValueError(f"byte count must be non-negative, got {n}")
        with self._read_lock:
            chunks = []
            remaining = n
            while remaining:
                chunk = self._reader.read(remaining)
                if not chunk:
                    raise EOFError(f"stream ended with {remaining} of {n} bytes unread")
                chunks.append(chunk)
                remaining -= len(chunk)
            self._read_bytes_size += n
        return b"".join(chunks)

    def flush(self) -> None:
        """Push buffered output to the peer."""
        with self._write_lock:
            self._writer.flush()
            self._flush_num += 1

    def write_bool(self, value: bool) -> None:
        """Write one bool as a single byte."""
        self.write_bytes(b"\x01" if value else b"\x00")

    def write_bools(self, bits) -> None:
        """Write bools packed eight to a byte, least significant bit first."""
        self.write_bytes(pack_bits(list(bits)))

    def read_bool(self) -> bool:
        """Read one bool; any non-zero byte is true."""
        return self.read_bytes(1)[0] != 0

    def read_bools(self, size: int) -> list[bool]:
        """Read ``size`` packed bools."""
        if size < 1:
            raise ValueError(f"bool count must be positive, got {size}")
        return unpack_bits(self.read_bytes((size - 1) // 8 + 1), size)

    def write_block(self, block: Block) -> None:
        """Write a block as its 16-byte encoding."""
        self.write_bytes(block.to_bytes())

    def read_block(self) -> Block:
        """Read a 16-byte block."""
        return Block.from_bytes(self.read_bytes(BLOCK_SIZE))

    def write_point(self, point) -> None:
        """Write a 32-byte compressed curve point."""
        self.write_bytes(_point_bytes(point))

    def read_point(self) -> bytes:
        """Read a compressed curve point, rejecting encodings of no valid point."""
        data = self.read_bytes(POINT_SIZE)
        if not crypto_core_ed25519_is_valid_point(data):
            raise ValueError("unable to decompress point")
        return data

    def close(self) -> None:
        """Flush pending output and close both ends."""
        if self._closed:
            return
        self._closed = True
        try:
            with self._write_lock:
                if not self._writer.closed:
                    self._writer.flush()
        except OSError:
            pass
        finally:
            self._writer.close()
            self._reader.close()

    def __enter__(self) -> Channel:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _socket_channel(sock: socket.socket) -> tuple[BinaryIO, BinaryIO]:
    reader = sock.makefile("rb")
    writer = sock.makefile("wb")
    # The file objects keep the descriptor open until they are closed.
    sock.close()
    return reader, writer


def local_channel_pair() -> tuple[Channel, Channel]:
    """Return two channels connected to each other within this process."""
    left, right = socket.socketpair()
    return Channel(*_socket_channel(left)), Channel(*_socket_channel(right))


def _parse_address(address: Address) -> tuple[str, int]:
    if isinstance(address, str):
        host, sep, port = address.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"address must look like host:port, got {address!r}")
        return host.strip("[]"), int(port)
    host, port = address
    return host, int(port)


class NetChannel(Channel):
    """A channel over TCP: the server accepts one client, the client connects."""

    def __init__(self, is_server: bool, address: Address) -> None:
        host, port = _parse_address(address)
        try:
            if is_server:
                with socket.create_server((host, port)) as listener:
                    sock, _ = listener.accept()
            else:
                sock = socket.create_connection((host, port))
        except OSError as exc:
            peer = "client" if is_server else "server"
            raise ConnectionError(f"could not get {peer}: {exc}") from exc
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        super().__init__(*_socket_channel(sock))
        self.is_server = bool(is_server)
        print("connected")