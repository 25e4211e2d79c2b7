"""ZeroMQ transport: one context and one socket per transport."""

from contextlib import suppress
from dataclasses import dataclass
from enum import Enum

import zmq

from .errors import CipcError, ErrorCode
from .transport import Transport

_DEFAULT_SNDTIMEO_MS = 5000
_DEFAULT_RCVTIMEO_MS = 5000
_DEFAULT_RETRY_INTERVAL_MS = 10
_DEFAULT_RETRIES = 3


class ZmqMode(Enum):
    """Whether the socket binds to or connects to its address."""

    BIND = 0
    CONNECT = 1


@dataclass
class ZmqConfig:
    """Settings for a ZeroMQ transport. Timeouts are in milliseconds."""

    address: str
    socket_type: int
    mode: ZmqMode
    sndtimeo_ms: int = _DEFAULT_SNDTIMEO_MS
    rcvtimeo_ms: int = _DEFAULT_RCVTIMEO_MS
    retries: int = _DEFAULT_RETRIES


def config_default(address, socket_type, mode):
    """Build a config with the default timeouts and retries."""
    return ZmqConfig(address=address, socket_type=socket_type, mode=mode)


def config_req(address):
    """Config for a REQ socket that connects to ``address``."""
    return config_default(address, zmq.REQ, ZmqMode.CONNECT)


def config_rep(address):
    """Config for a REP socket that binds to ``address``."""
    return config_default(address, zmq.REP, ZmqMode.BIND)


class ZmqTransport(Transport):
    """A single ZeroMQ socket with its own context."""

    def __init__(self):
        self._context = None
        self._socket = None

    def open(self, config):
        """Create the socket, apply options, bind or connect; return self."""
        self.close()
        try:
            context = zmq.Context()
        except zmq.ZMQError as exc:
            raise CipcError(ErrorCode.BAD_ZMQ_CONTEXT, f"context failed: {exc}") from exc

        try:
            sock = context.socket(config.socket_type)
        except (zmq.ZMQError, ValueError) as exc:
            context.term()
            raise CipcError(ErrorCode.BAD_ZMQ_SOCKET, f"socket failed: {exc}") from exc

        options = (
            (zmq.SNDTIMEO, config.sndtimeo_ms),
            (zmq.RCVTIMEO, config.rcvtimeo_ms),
            (zmq.RECONNECT_IVL, _DEFAULT_RETRY_INTERVAL_MS),
            (zmq.RECONNECT_IVL_MAX, config.retries),
        )
        for option, value in options:
            with suppress(zmq.ZMQError):
                sock.setsockopt(option, value)

        binding = config.mode is ZmqMode.BIND
        try:
            if binding:
                sock.bind(config.address)
            else:
                sock.connect(config.address)
        except zmq.ZMQError as exc:
            sock.close(linger=0)
            context.term()
            code = ErrorCode.BAD_ZMQ_BIND if binding else ErrorCode.BAD_ZMQ_CONNECT
            verb = "bind" if binding else "connect"
            raise CipcError(code, f"ZMQ {verb} failed: {exc}") from exc

        self._context = context
        self._socket = sock
        return self

    def _require(self):
        if self._socket is None:
            raise CipcError(ErrorCode.NULL_PTR, "transport is not open")
        return self._socket

    def send(self, data):
        """Send ``data`` as one message."""
        sock = self._require()
        payload = data.encode() if isinstance(data, str) else bytes(data)
        try:
            sock.send(payload)
        except zmq.ZMQError as exc:
            raise CipcError(ErrorCode.BAD_ZMQ_SEND, f"send failed: {exc}") from exc

    def recv(self, size):
        """Receive one message, truncated to at most ``size`` bytes."""
        sock = self._require()
        try:
            message = sock.recv()
        except zmq.ZMQError as exc:
            raise CipcError(ErrorCode.BAD_ZMQ_RECV, f"recv failed: {exc}") from exc
        return message[:size]

    def close(self):
        """Close the socket and terminate the context if open."""
        if self._socket is not None:
            self._socket.close(linger=0)
            self._socket = None
        if self._context is not None:
            self._context.term()
            self._context = None