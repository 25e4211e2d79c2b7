# cipc

A small inter-process communication layer. Every backend implements one
interface, `cipc.transport.Transport`, which has `open(config)`, `send(data)`,
`recv(size)` and `close()`. A transport is also a context manager: leaving the
`with` block closes it. Two backends are available:

- **TCP** (`cipc.tcp.TcpTransport`) uses one plain IPv4 stream socket.
  - In `TcpMode.BIND` it binds the configured port on all interfaces. It then
    waits for a single peer, accepts it and closes the listening socket.
  - In `TcpMode.CONNECT` it connects to a dotted IPv4 address. It retries up to
    `retries` times with doubling delays (100 ms, 200 ms, … capped at 5 s), and
    `cipc.tcp.retry_delays` yields those delays.
- **ZeroMQ** (`cipc.zmqtransport.ZmqTransport`) uses one pyzmq socket of any
  type with its own context. It binds or connects according to `ZmqMode`.

## Installation

```
pip install .
```

To run the tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Usage

`cipc.factory.create` returns a new, unopened transport for a
`cipc.transport.Protocol`. Open it with the config that matches the protocol.

```python
from cipc.factory import create
from cipc.transport import Protocol
from cipc.tcp import TcpConfig, TcpMode

config = TcpConfig(host="127.0.0.1", port=5555, mode=TcpMode.CONNECT)

with create(Protocol.TCP) as client:
    client.open(config)
    client.send(b"Hello from TCP Client!")
    print(client.recv(1024))
```

`TcpConfig` has these fields:

| Field | Default | Meaning |
| --- | --- | --- |
| `host` | | The peer's IPv4 address. Used in connect mode only. |
| `port` | | The port to bind or to connect to. |
| `mode` | `CONNECT` | Bind or connect. |
| `sndtimeo_ms` | 5000 | Timeout for sending. 0 means no timeout. |
| `rcvtimeo_ms` | 5000 | Timeout for receiving. 0 means no timeout. |
| `retries` | 3 | Number of connect retries. |
| `backlog` | 0 | The listen backlog. |

In bind mode the receive timeout also limits how long `open` waits for a peer.

ZeroMQ configs come from `config_default(address, socket_type, mode)`,
`config_req(address)` (a REQ socket that connects) and `config_rep(address)`
(a REP socket that binds). All three set 5000 ms send and receive timeouts and
3 retries. `ZmqConfig` is a dataclass, so you can change its fields after it is
built.

```python
from cipc.factory import create
from cipc.transport import Protocol
from cipc.zmqtransport import config_req

with create(Protocol.ZMQ) as client:
    client.open(config_req("tcp://localhost:5555"))
    client.send(b"Hello from Client!")
    print(client.recv(1024))
```

`send` accepts `bytes` or `str`; a `str` is encoded as UTF-8. `recv(size)`
returns `bytes`:

- On TCP it returns at most `size` bytes from one read.
- On ZeroMQ it receives one whole message and cuts it to `size` bytes.

### Errors

When an operation fails it raises `cipc.errors.CipcError`. Its `code` is a
member of `cipc.errors.ErrorCode`, for example `BAD_TCP_CONNECT` or
`BAD_ZMQ_RECV`. Some specific cases:

- Calling `send` or `recv` on a transport that is not open raises the code
  `NULL_PTR`.
- On TCP, a peer that has closed the connection raises `BAD_TCP_RECV`.
- A send that does not go out whole in one call raises `BAD_TCP_SEND`.

## Commands

The package installs these example programs. By default all of them use port
5555 on the local machine.

```
cipc-tcp-server   # wait for one TCP peer and answer every message
cipc-tcp-client   # send one message to the TCP server and print the reply
cipc-zmq-rep      # ZeroMQ REP server bound to tcp://*:5555
cipc-zmq-req      # ZeroMQ REQ client connecting to tcp://localhost:5555
cipc              # print a greeting
```

Start the server in one terminal, then run the client in another.

Options:

- `cipc-tcp-server`: `--port`, and `--count N` to stop after N messages.
- `cipc-tcp-client`: `--host`, `--port`, `--retries`.
- `cipc-zmq-rep`: `--address`, `--timeout MS` for the receive timeout, and
  `--count N`.
- `cipc-zmq-req`: `--address`.

Each command exits with status 0 on success and 1 when the transport fails.

The functions these commands are built on can also be imported:

- `cipc.tcp_examples` provides `request(transport, message, size)` and
  `serve(transport, reply, size, max_messages=None)`.
- `cipc.zmq_examples` provides the same two functions.

## What it does not do

- `Protocol.GRPC` exists, but it has no backend. Passing it to `create` raises
  `ValueError`.
- The TCP transport serves exactly one peer per `open`. It has no message
  framing: a `recv` returns whatever one read delivers.
- The `cipc` command only prints a greeting.