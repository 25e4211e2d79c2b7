"""Inter-process communication over interchangeable TCP and ZeroMQ transports."""

__version__ = "0.1.0"