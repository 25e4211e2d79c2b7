"""Plain TCP transport: one connected stream socket per transport."""

import socket
import time
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum

from .errors import CipcError, ErrorCode
from .transport import Transport

_INITIAL_RETRY_DELAY_MS = 100
_MAX_RETRY_DELAY_MS = 5000


class TcpMode(Enum):
    """Whether the transport waits for a peer or connects to one."""

    BIND = 0
    CONNECT = 1


@dataclass
class TcpConfig:
    """Settings for a TCP transport. Timeouts are in milliseconds; 0 means none."""

    host: str
    port: int
    mode: TcpMode = TcpMode.CONNECT
    sndtimeo_ms: int = 5000
    rcvtimeo_ms: int = 5000
    retries: int = 3
    backlog: int = 0


def retry_delays(retries):
    """Yield the wait in milliseconds before each of ``retries`` connect retries."""
    delay = _INITIAL_RETRY_DELAY_MS
    for _ in range(retries):
        yield delay
        delay = min(delay * 2, _MAX_RETRY_DELAY_MS)


def _timeout(milliseconds):
    if milliseconds < 0:
        raise CipcError(ErrorCode.BAD_TCP_SOCKET_OPT, f"invalid timeout: {milliseconds} ms")
    return milliseconds / 1000 if milliseconds else None


def _new_socket():
    try:
        return socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise CipcError(ErrorCode.BAD_TCP_SOCKET, f"socket failed: {exc}") from exc


class TcpTransport(Transport):
    """A TCP stream that either accepts one peer (bind) or connects to one."""

    def __init__(self):
        self._sock = None
        self._send_timeout = None
        self._recv_timeout = None
        self.is_server = False

    def open(self, config):
        """Bind and accept one peer, or connect with retries; return self."""
        self.close()
        send_timeout = _timeout(config.sndtimeo_ms)
        recv_timeout = _timeout(config.rcvtimeo_ms)
        if config.mode is TcpMode.BIND:
            self._sock = self._accept(config, recv_timeout)
            self.is_server = True
        else:
            self._sock = self._connect(config, send_timeout)
            self.is_server = False
        self._send_timeout = send_timeout
        self._recv_timeout = recv_timeout
        return self

    @staticmethod
    def _accept(config, recv_timeout):
        with _new_socket() as listener:
            try:
                listener.bind(("", config.port))
            except OSError as exc:
                raise CipcError(ErrorCode.BAD_TCP_BIND, f"bind failed: {exc}") from exc
            try:
                listener.listen(config.backlog)
            except OSError as exc:
                raise CipcError(ErrorCode.BAD_TCP_LISTEN, f"listen failed: {exc}") from exc
            listener.settimeout(recv_timeout)
            try:
                connection, _ = listener.accept()
            except OSError as exc:
                raise CipcError(ErrorCode.BAD_TCP_SOCKET, f"accept failed: {exc}") from exc
        return connection

    @staticmethod
    def _connect(config, send_timeout):
        try:
            socket.inet_pton(socket.AF_INET, config.host)
        except (OSError, TypeError) as exc:
            raise CipcError(ErrorCode.BAD_TCP_ADDRESS, f"invalid address: {config.host}") from exc

        delays = retry_delays(max(config.retries, 0))
        while True:
            sock = _new_socket()
            sock.settimeout(send_timeout)
            try:
                sock.connect((config.host, config.port))
                return sock
            except OSError as exc:
                sock.close()
                delay = next(delays, None)
                if delay is None:
                    raise CipcError(
                        ErrorCode.BAD_TCP_CONNECT,
                        f"connect failed after {config.retries} retries: {exc}",
                    ) from exc
                time.sleep(delay / 1000)

    def _require(self):
        if self._sock is None:
            raise CipcError(ErrorCode.NULL_PTR, "transport is not open")
        return self._sock

    def send(self, data):
        """Send all of ``data`` in one call; a short send is an error."""
        sock = self._require()
        payload = data.encode() if isinstance(data, str) else bytes(data)
        sock.settimeout(self._send_timeout)
        try:
            sent = sock.send(payload)
        except OSError as exc:
            raise CipcError(ErrorCode.BAD_TCP_SEND, f"send failed: {exc}") from exc
        if sent != len(payload):
            raise CipcError(ErrorCode.BAD_TCP_SEND, f"short send: {sent} of {len(payload)} bytes")

    def recv(self, size):
        """Receive at most ``size`` bytes; a closed peer is an error."""
        sock = self._require()
        sock.settimeout(self._recv_timeout)
        try:
            data = sock.recv(size)
        except OSError as exc:
            raise CipcError(ErrorCode.BAD_TCP_RECV, f"recv failed: {exc}") from exc
        if not data:
            raise CipcError(ErrorCode.BAD_TCP_RECV, "connection closed by peer")
        return data

    def close(self):
        """Shut down and close the socket if one is open."""
        if self._sock is None:
            return
        with suppress(OSError):
            self._sock.shutdown(socket.SHUT_RDWR)
        self._sock.close()
        self._sock = None