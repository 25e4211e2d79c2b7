import pytest

from cipc.errors import CipcError, ErrorCode
from cipc.factory import create
from cipc.tcp import TcpTransport
from cipc.transport import Protocol
from cipc.zmqtransport import ZmqTransport


def test_create_tcp_returns_fresh_unopened_transport():
    first = create(Protocol.TCP)
    second = create(Protocol.TCP)
    assert isinstance(first, TcpTransport)
    assert first is not second
    with pytest.raises(CipcError) as info:
        first.recv(16)
    assert info.value.code is ErrorCode.NULL_PTR


def test_create_zmq_returns_unopened_transport():
    transport = create(Protocol.ZMQ)
    assert isinstance(transport, ZmqTransport)
    with pytest.raises(CipcError) as info:
        transport.send(b"data")
    assert info.value.code is ErrorCode.NULL_PTR


def test_grpc_is_not_supported():
    with pytest.raises(ValueError):
        create(Protocol.GRPC)


@pytest.mark.parametrize("protocol", ["tcp", 1, None])
def test_non_protocol_values_are_rejected(protocol):
    with pytest.raises(ValueError):
        create(protocol)