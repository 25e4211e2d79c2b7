"""The interface every transport backend implements."""

from abc import ABC, abstractmethod
from enum import Enum


class Protocol(Enum):
    """Transport protocols known to the library."""

    ZMQ = 0
    TCP = 1
    GRPC = 2


class Transport(ABC):
    """A message transport that is opened with a config, then sends and receives bytes."""

    @abstractmethod
    def open(self, config):
        """Open the transport as described by ``config`` and return it."""

    @abstractmethod
    def send(self, data):
        """Send ``data``; raise ``CipcError`` on failure."""

    @abstractmethod
    def recv(self, size):
        """Receive at most ``size`` bytes; raise ``CipcError`` on failure."""

    @abstractmethod
    def close(self):
        """Release the transport's resources. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()