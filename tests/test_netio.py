import socket
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from nacl.bindings import crypto_core_ed25519_is_valid_point

from garblekit.block import Block
from garblekit.channel import local_channel_pair
from garblekit.netio import exchange, main
from garblekit.rand_aes import AesRng


def _run_pair(server_seed, client_seed):
    server, client = local_channel_pair()
    server.is_server = True
    with server, client, ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(exchange, server, AesRng(Block(server_seed)))
        client_result = exchange(client, AesRng(Block(client_seed)))
        server_result = future.result(timeout=10)
    return server_result, client_result


def test_exchange_delivers_both_payloads():
    (server_sent, server_recv), (client_sent, client_recv) = _run_pair(1, 2)
    assert client_recv == server_sent
    assert server_recv == client_sent


def test_exchange_payload_shape():
    (server_sent, _), (client_sent, _) = _run_pair(3, 4)
    for payload in (server_sent, client_sent):
        assert len(payload["bytes"]) == 10
        assert len(payload["bools"]) == 10
        assert crypto_core_ed25519_is_valid_point(payload["point"])


def test_exchange_is_deterministic_for_a_seed():
    (first, _), _ = _run_pair(5, 6)
    (second, _), _ = _run_pair(5, 7)
    assert first == second


def test_exchange_prints_both_directions(capsys):
    _run_pair(8, 9)
    out = capsys.readouterr().out
    assert out.count("send_point:") == 2
    assert out.count("recv_point:") == 2


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _client_main(address):
    for _ in range(200):
        try:
            return main(["--is-server", "0", "--address", address])
        except ConnectionError:
            time.sleep(0.02)
    raise AssertionError("server never came up")


def test_main_runs_both_sides_over_tcp(capsys):
    address = f"127.0.0.1:{_free_port()}"
    with ThreadPoolExecutor(max_workers=1) as pool:
        server = pool.submit(main, ["--is-server", "1", "--address", address])
        client_status = _client_main(address)
        server_status = server.result(timeout=10)
    out = capsys.readouterr().out
    assert (server_status, client_status) == (0, 0)
    assert out.count("recv_bytes:") == 2


def test_main_rejects_non_integer_flag():
    with pytest.raises(SystemExit) as info:
        main(["--is-server", "yes"])
    assert info.value.code == 2