[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cipc"
version = "0.1.0"
description = "A small inter-process communication layer with interchangeable TCP and ZeroMQ transports"
requires-python = ">=3.10"
keywords = ["ipc", "tcp", "zeromq", "zmq", "messaging", "sockets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]
dependencies = [
    "pyzmq",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cipc = "cipc.app:main"
cipc-tcp-client = "cipc.tcp_examples:client_main"
cipc-tcp-server = "cipc.tcp_examples:server_main"
cipc-zmq-req = "cipc.zmq_examples:req_main"
cipc-zmq-rep = "cipc.zmq_examples:rep_main"

[tool.hatch.build.targets.wheel]
packages = ["cipc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
