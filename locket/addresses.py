"""Socket address types: the abstract base and Unix-domain addresses."""

from __future__ import annotations

import abc
import enum
import os
import socket
from typing import Any

__all__ = [
    "ByteOrder",
    "InetSocketAddr",
    "IpVersion",
    "SockDomain",
    "SocketAddr",
    "UnixSocketAddr",
]


class SockDomain(enum.IntEnum):
    """Address families a socket can belong to."""

    UNK = 0
    UNIX = getattr(socket, "AF_UNIX", 1)
    INET4 = socket.AF_INET
    INET6 = socket.AF_INET6


class IpVersion(enum.Enum):
    IPV4 = enum.auto()
    IPV6 = enum.auto()


class ByteOrder(enum.Enum):
    HOST = enum.auto()
    NET = enum.auto()


class SocketAddr(abc.ABC):
    """An address that a socket can be bound or connected to."""

    @abc.abstractmethod
    def domain(self) -> SockDomain:
        """The address family of this address."""

    @abc.abstractmethod
    def size(self) -> int:
        """Size in bytes of the native address structure."""

    @abc.abstractmethod
    def is_set(self) -> bool:
        """Whether the address holds a value."""

    @abc.abstractmethod
    def sockaddr(self) -> Any:
        """The address in the form the socket module expects."""

    @abc.abstractmethod
    def copy(self) -> SocketAddr:
        """An independent copy of this address."""

    @abc.abstractmethod
    def empty_like(self) -> SocketAddr:
        """A new, empty address of the same kind."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human-readable form of the address."""


class InetSocketAddr(SocketAddr):
    """Base class of IPv4 and IPv6 addresses."""

    @abc.abstractmethod
    def port(self) -> int:
        """The port of the address."""


_SUN_PATH_LEN = 108
_SOCKADDR_UN_SIZE = 110


def _to_bytes(value: str | bytes) -> bytes:
    raw = os.fsencode(value)
    return raw.split(b"\0", 1)[0]


class UnixSocketAddr(SocketAddr):
    """A Unix-domain socket address: a filesystem path or an abstract name."""

    def __init__(self, path_or_name: str | bytes = "", is_abstract: bool = False) -> None:
        limit = _SUN_PATH_LEN - 2 if is_abstract else _SUN_PATH_LEN - 1
        self._name = _to_bytes(path_or_name)[:limit]
        self._abstract = bool(is_abstract)

    @classmethod
    def from_sockaddr(cls, sockaddr: Any) -> UnixSocketAddr:
        """Build an address from a socket-module address or another address."""
        if isinstance(sockaddr, SocketAddr):
            if sockaddr.domain() is not SockDomain.UNIX:
                raise ValueError("socket_addr is not a Unix address")
            return sockaddr.copy()
        if not isinstance(sockaddr, (str, bytes)):
            raise ValueError("sockaddr is not a Unix address")
        raw = os.fsencode(sockaddr)[:_SUN_PATH_LEN]
        if raw[:1] == b"\0":
            name = raw[1:].split(b"\0", 1)[0]
            return cls(name, is_abstract=bool(name))
        return cls(raw)

    @property
    def name(self) -> str:
        """The path, or the abstract name without its leading NUL."""
        return os.fsdecode(self._name)

    def is_abstract(self) -> bool:
        return self._abstract

    def domain(self) -> SockDomain:
        return SockDomain.UNIX

    def size(self) -> int:
        return _SOCKADDR_UN_SIZE

    def is_set(self) -> bool:
        return bool(self._name)

    def sockaddr(self) -> str:
        if self._abstract:
            return "\0" + self.name
        return self.name

    def copy(self) -> UnixSocketAddr:
        return UnixSocketAddr(self._name, self._abstract)

    def empty_like(self) -> UnixSocketAddr:
        return UnixSocketAddr()

    def __str__(self) -> str:
        # The native path of an abstract address starts with NUL, so it reads as empty.
        return "" if self._abstract else self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnixSocketAddr):
            return NotImplemented
        return (self._name, self._abstract) == (other._name, other._abstract)

    def __hash__(self) -> int:
        return hash((self._name, self._abstract))

    def __repr__(self) -> str:
        return f"UnixSocketAddr({self.name!r}, is_abstract={self._abstract})"