"""Create a transport for a protocol."""

from .tcp import TcpTransport
from .transport import Protocol
from .zmqtransport import ZmqTransport

_BACKENDS = {
    Protocol.ZMQ: ZmqTransport,
    Protocol.TCP: TcpTransport,
}


def create(protocol):
    """Return a new, unopened transport for ``protocol``.

    Raises ``ValueError`` for a protocol that has no backend.
    """
    try:
        backend = _BACKENDS[protocol]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported protocol: {protocol!r}") from None
    return backend()