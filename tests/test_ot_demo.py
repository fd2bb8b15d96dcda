import threading

import pytest

from garblekit.channel import local_channel_pair
from garblekit.ot_demo import run_ot


def _run_pair(count):
    server_channel, client_channel = local_channel_pair()
    outcome = {}

    def serve():
        try:
            outcome["pairs"] = run_ot(server_channel, True, count)
        except BaseException as exc:  # noqa: BLE001
            outcome["error"] = exc

    with server_channel, client_channel:
        worker = threading.Thread(target=serve, daemon=True)
        worker.start()
        choices, received = run_ot(client_channel, False, count)
        worker.join(timeout=60)
    assert "error" not in outcome
    return outcome["pairs"], choices, received


def test_client_receives_chosen_blocks():
    pairs, choices, received = _run_pair(8)
    assert len(pairs) == 8
    assert len(choices) == 8
    assert received == [m1 if bit else m0 for (m0, m1), bit in zip(pairs, choices)]


def test_zero_count_transfers_nothing():
    pairs, choices, received = _run_pair(0)
    assert pairs == []
    assert choices == []
    assert received == []


def test_client_prints_its_choices(capsys):
    _, choices, received = _run_pair(4)
    out = capsys.readouterr().out
    assert f"select bits: {choices}" in out
    assert f"received blocks: {received}" in out


def test_negative_count_is_rejected():
    server_channel, client_channel = local_channel_pair()
    with server_channel, client_channel:
        with pytest.raises(ValueError):
            run_ot(client_channel, False, -1)
        assert client_channel.write_bytes_size == 0