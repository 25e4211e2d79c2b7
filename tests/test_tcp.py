import socket
import threading

import pytest

from cipc.errors import CipcError, ErrorCode
from cipc.tcp import TcpConfig, TcpMode, TcpTransport, retry_delays


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _open_pair(**server_options):
    port = _free_port()
    server = TcpTransport()
    failures = []

    def run():
        try:
            server.open(
                TcpConfig("127.0.0.1", port, TcpMode.BIND, backlog=1, **server_options)
            )
        except CipcError as exc:
            failures.append(exc)

    thread = threading.Thread(target=run)
    thread.start()
    client = TcpTransport().open(TcpConfig("127.0.0.1", port, TcpMode.CONNECT, retries=6))
    thread.join(timeout=10)
    assert failures == []
    return server, client


@pytest.fixture
def pair():
    server, client = _open_pair()
    yield server, client
    client.close()
    server.close()


def test_retry_delays_start_and_cap():
    delays = list(retry_delays(10))
    assert len(delays) == 10
    assert delays[0] == 100
    assert max(delays) == 5000
    assert delays[-1] == 5000


def test_retry_delays_double_until_cap():
    delays = list(retry_delays(12))
    for previous, current in zip(delays, delays[1:]):
        assert current == min(previous * 2, 5000)


def test_retry_delays_none():
    assert list(retry_delays(0)) == []


def test_config_defaults():
    config = TcpConfig("127.0.0.1", 5555)
    assert config.mode is TcpMode.CONNECT
    assert config.sndtimeo_ms == 5000
    assert config.rcvtimeo_ms == 5000
    assert config.retries == 3


def test_round_trip(pair):
    server, client = pair
    client.send(b"Hello from TCP Client!")
    assert server.recv(1024) == b"Hello from TCP Client!"
    server.send(b"Hello from TCP server!")
    assert client.recv(1024) == b"Hello from TCP server!"


def test_roles(pair):
    server, client = pair
    assert server.is_server is True
    assert client.is_server is False


def test_send_accepts_text(pair):
    server, client = pair
    client.send("text")
    assert server.recv(64) == b"text"


def test_recv_limits_size(pair):
    server, client = pair
    client.send(b"abcdef")
    first = server.recv(3)
    assert first == b"abc"


def test_recv_after_peer_closed(pair):
    server, client = pair
    client.close()
    with pytest.raises(CipcError) as info:
        server.recv(64)
    assert info.value.code is ErrorCode.BAD_TCP_RECV


def test_recv_timeout():
    server, client = _open_pair(rcvtimeo_ms=150)
    try:
        with pytest.raises(CipcError) as info:
            server.recv(64)
        assert info.value.code is ErrorCode.BAD_TCP_RECV
    finally:
        client.close()
        server.close()


def test_invalid_address():
    config = TcpConfig("not-an-ip", 5555, TcpMode.CONNECT)
    with pytest.raises(CipcError) as info:
        TcpTransport().open(config)
    assert info.value.code is ErrorCode.BAD_TCP_ADDRESS


def test_connect_refused_without_retries():
    config = TcpConfig("127.0.0.1", _free_port(), TcpMode.CONNECT, retries=0)
    with pytest.raises(CipcError) as info:
        TcpTransport().open(config)
    assert info.value.code is ErrorCode.BAD_TCP_CONNECT


def test_bind_conflict():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as occupier:
        occupier.bind(("", 0))
        occupier.listen(1)
        port = occupier.getsockname()[1]
        with pytest.raises(CipcError) as info:
            TcpTransport().open(TcpConfig("127.0.0.1", port, TcpMode.BIND, backlog=1))
    assert info.value.code is ErrorCode.BAD_TCP_BIND


def test_accept_timeout():
    config = TcpConfig("127.0.0.1", _free_port(), TcpMode.BIND, rcvtimeo_ms=150, backlog=1)
    with pytest.raises(CipcError) as info:
        TcpTransport().open(config)
    assert info.value.code is ErrorCode.BAD_TCP_SOCKET


def test_negative_timeout_rejected():
    config = TcpConfig("127.0.0.1", 5555, TcpMode.CONNECT, sndtimeo_ms=-1)
    with pytest.raises(CipcError) as info:
        TcpTransport().open(config)
    assert info.value.code is ErrorCode.BAD_TCP_SOCKET_OPT


def test_unopened_transport():
    transport = TcpTransport()
    with pytest.raises(CipcError) as info:
        transport.send(b"x")
    assert info.value.code is ErrorCode.NULL_PTR


def test_close_is_idempotent_and_disables_use():
    server, client = _open_pair()
    server.close()
    client.close()
    client.close()
    with pytest.raises(CipcError) as info:
        client.recv(8)
    assert info.value.code is ErrorCode.NULL_PTR


def test_context_manager_closes():
    server, client = _open_pair()
    with client:
        client.send(b"bye")
    assert server.recv(16) == b"bye"
    server.close()
    with pytest.raises(CipcError) as info:
        client.send(b"again")
    assert info.value.code is ErrorCode.NULL_PTR