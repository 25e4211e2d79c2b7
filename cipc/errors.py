"""Error codes and the exception raised by transports."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Kinds of failure a transport can report."""

    OK = 0
    BAD_ALLOC = 1
    BAD_ZMQ_CONTEXT = 2
    BAD_ZMQ_SOCKET = 3
    BAD_ZMQ_BIND = 4
    BAD_ZMQ_CONNECT = 5
    BAD_ZMQ_SEND = 6
    BAD_ZMQ_RECV = 7
    BAD_TCP_SOCKET = 8
    BAD_TCP_BIND = 9
    BAD_TCP_LISTEN = 10
    BAD_TCP_ADDRESS = 11
    BAD_TCP_CONNECT = 12
    BAD_TCP_SEND = 13
    BAD_TCP_RECV = 14
    BAD_TCP_SOCKET_OPT = 15
    NULL_PTR = 16


class CipcError(Exception):
    """A transport operation failed; ``code`` tells which kind of failure."""

    def __init__(self, code, message):
        self.code = ErrorCode(code)
        self.message = message
        text = f"{self.code.name}: {message}" if message else self.code.name
        super().__init__(text)