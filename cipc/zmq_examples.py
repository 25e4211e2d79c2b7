"""Example ZeroMQ request/reply client and server."""

import argparse
import sys

from .errors import CipcError, ErrorCode
from .factory import create
from .transport import Protocol
from .zmqtransport import config_rep, config_req

CLIENT_ADDRESS = "tcp://localhost:5555"
CLIENT_MESSAGE = "Hello from Client!"
SERVER_ADDRESS = "tcp://*:5555"
SERVER_REPLY = "Hello from Server!"
BUFFER_SIZE = 1024


def request(transport, message, size):
    """Send ``message`` and return the reply, truncated to ``size`` bytes."""
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
        print(f"[REP Server] Received: {message.decode(errors='replace')}", flush=True)
        transport.send(reply)
        handled += 1
    return handled


def req_main(argv=None):
    """Send one request and print the reply."""
    parser = argparse.ArgumentParser(description="ZeroMQ example REQ client")
    parser.add_argument("--address", default=CLIENT_ADDRESS)
    args = parser.parse_args(argv)

    config = config_req(args.address)
    with create(Protocol.ZMQ) as client:
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
            if exc.code is ErrorCode.BAD_ZMQ_SEND:
                print(f"Failed to send message: {CLIENT_MESSAGE}", file=sys.stderr)
            else:
                print("Failed to receive response!", file=sys.stderr)
            return 1
    print(f"[REQ Client] Received: {reply.decode(errors='replace')}")
    return 0


def rep_main(argv=None):
    """Bind a REP socket and reply to requests."""
    parser = argparse.ArgumentParser(description="ZeroMQ example REP server")
    parser.add_argument("--address", default=SERVER_ADDRESS)
    parser.add_argument("--timeout", type=int, default=None, help="receive timeout in ms")
    parser.add_argument("--count", type=int, default=None, help="stop after this many messages")
    args = parser.parse_args(argv)

    config = config_rep(args.address)
    if args.timeout is not None:
        config.rcvtimeo_ms = args.timeout
    with create(Protocol.ZMQ) as server:
        try:
            server.open(config)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            print("Failed to initialize server!", file=sys.stderr)
            return 1
        print(f"[REP Server] Online and waiting on {args.address}", flush=True)
        try:
            serve(server, SERVER_REPLY, BUFFER_SIZE - 1, args.count)
        except CipcError as exc:
            print(exc, file=sys.stderr)
            if exc.code is ErrorCode.BAD_ZMQ_SEND:
                print("Failed to send response!", file=sys.stderr)
            else:
                print("Failed to receive message!", file=sys.stderr)
            return 1
    return 0