"""Example TCP client and echo-style server built on the TCP transport."""

import argparse
import sys

from .errors import CipcError, ErrorCode
from .factory import create
from .tcp import TcpConfig, TcpMode
from .transport import Protocol

CLIENT_HOST = "127.0.0.1"
CLIENT_MESSAGE = "Hello from TCP Client!"
SERVER_HOST = "127.0.0.1"
SERVER_REPLY = "Hello from TCP server!"
PORT = 5555
SERVER_BACKLOG = 1
BUFFER_SIZE = 1024
TIMEOUT_MS = 5000
RETRIES = 3


def request(transport, message, size):
    """Send ``message`` and return the reply of at most ``size`` bytes."""
    transport.send(message)
    return transport.recv(size)


def serve(transport, reply, size, max_messages=None):
    """Answer each received message with ``reply``.

    Runs until ``max_messages`` have been handled, or forever when it is
    ``None``; returns the number handled. Transport failures propagate.
    """
    handled = 0
    while max_messages is None or handled < max_messages:
        message = transport.recv(size)
        print(f"[TCP Server] Received: {message.decode(errors='replace')}", flush=True)
        transport.send(reply)
        handled += 1
    return handled


def client_main(argv=None):
    """Send one message to the server and print its reply."""
    parser = argparse.ArgumentParser(description="TCP example client")
    parser.add_argument("--host", default=CLIENT_HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--retries", type=int, default=RETRIES)
    args = parser.parse_args(argv)

    config = TcpConfig(
        host=args.host,
        port=args.port,
        mode=TcpMode.CONNECT,
        sndtimeo_ms=TIMEOUT_MS,
        rcvtimeo_ms=TIMEOUT_MS,
        retries=args.retries,
        backlog=0,
    )
    with create(Protocol.TCP) as client:
        try:
            client.open(config)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            print("Failed to initialize client!", file=sys.stderr)
            return 1
        try:
            reply = request(client, CLIENT_MESSAGE, BUFFER_SIZE - 1)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            if exc.code is ErrorCode.BAD_TCP_SEND:
                print(f"Failed to send message: {CLIENT_MESSAGE}", file=sys.stderr)
            else:
                print("Failed to receive response!", file=sys.stderr)
            return 1
    print(f"[TCP Client] Received: {reply.decode(errors='replace')}")
    return 0


def server_main(argv=None):
    """Accept one client and reply to its messages."""
    parser = argparse.ArgumentParser(description="TCP example server")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--count", type=int, default=None, help="stop after this many messages")
    args = parser.parse_args(argv)

    config = TcpConfig(
        host=SERVER_HOST,
        port=args.port,
        mode=TcpMode.BIND,
        sndtimeo_ms=TIMEOUT_MS,
        rcvtimeo_ms=TIMEOUT_MS,
        retries=RETRIES,
        backlog=SERVER_BACKLOG,
    )
    with create(Protocol.TCP) as server:
        try:
            server.open(config)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            print("Failed to initialize server!", file=sys.stderr)
            return 1
        print(f"[TCP Server] Listening on {SERVER_HOST}:{args.port}", flush=True)
        try:
            serve(server, SERVER_REPLY, BUFFER_SIZE - 1, args.count)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            if exc.code is ErrorCode.BAD_TCP_SEND:
                print("Failed to send message!", file=sys.stderr)
            else:
                print("Failed to receive message!", file=sys.stderr)
            return 1
    return 0