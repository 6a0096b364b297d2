"""IPv4 and IPv6 socket addresses and name resolution for them."""

from __future__ import annotations

import ipaddress
import operator
import socket
import sys
from typing import Any

from locket.addresses import (
    ByteOrder,
    InetSocketAddr,
    SockDomain,
    SocketAddr,
    UnixSocketAddr,
)
from locket.errors import AddrinfoError, AddrinfoFunc

__all__ = [
    "Inet4SocketAddr",
    "Inet6SocketAddr",
    "address_from_sockaddr",
    "resolve_ipv4",
    "resolve_ipv6",
]

_SOCKADDR_IN_SIZE = 16
_SOCKADDR_IN6_SIZE = 28
_MAX_PORT = 0xFFFF


def _check_port(port: int) -> int:
    port = operator.index(port)
    if not 0 <= port <= _MAX_PORT:
        raise ValueError(f"port {port} is out of range")
    return port


def _first_address(name: str, family: int) -> Any:
    try:
        results = socket.getaddrinfo(name, None, family)
    except socket.gaierror as exc:
        raise AddrinfoError(AddrinfoFunc.GETADDRINFO, exc.errno) from exc
    if not results:
        raise AddrinfoError(AddrinfoFunc.GETADDRINFO, socket.EAI_NONAME)
    return results[0][4]


def _strip_scope(host: str) -> str:
    return host.split("%", 1)[0]


def resolve_ipv4(name: str, byte_order: ByteOrder = ByteOrder.NET) -> int:
    """Resolve a name to an IPv4 address given as the value of ``s_addr``.

    With ``ByteOrder.HOST`` the result is the address as a plain number;
    with ``ByteOrder.NET`` it is the number whose native in-memory bytes
    are the address in network order.
    """
    host = _first_address(name, socket.AF_INET)[0]
    packed = ipaddress.IPv4Address(host).packed
    if byte_order is ByteOrder.HOST:
        return int.from_bytes(packed, "big")
    return int.from_bytes(packed, sys.byteorder)


def resolve_ipv6(name: str) -> ipaddress.IPv6Address:
    """Resolve a name to an IPv6 address."""
    host = _first_address(name, socket.AF_INET6)[0]
    return ipaddress.IPv6Address(_strip_scope(host))


def _coerce_v4(address: Any) -> ipaddress.IPv4Address:
    if address is None:
        return ipaddress.IPv4Address(socket.INADDR_ANY)
    if isinstance(address, ipaddress.IPv4Address):
        return address
    if isinstance(address, str):
        return ipaddress.IPv4Address(resolve_ipv4(address, ByteOrder.HOST))
    if isinstance(address, int):
        return ipaddress.IPv4Address(address)
    raise TypeError(f"cannot use {type(address).__name__} as an IPv4 address")


def _coerce_v6(address: Any) -> ipaddress.IPv6Address:
    if address is None:
        return ipaddress.IPv6Address(0)
    if isinstance(address, ipaddress.IPv6Address):
        return address
    if isinstance(address, str):
        return resolve_ipv6(address)
    if isinstance(address, (int, bytes)):
        return ipaddress.IPv6Address(address)
    raise TypeError(f"cannot use {type(address).__name__} as an IPv6 address")


class Inet4SocketAddr(InetSocketAddr):
    """An IPv4 address and port.

    With neither argument the address is empty; with only a port it is the
    wildcard address. A string address is resolved by name, an integer is
    taken as the address in host byte order.
    """

    def __init__(self, address: Any = None, port: int | None = None) -> None:
        self._port = _check_port(0 if port is None else port)
        self._address = _coerce_v4(address)

    @classmethod
    def from_sockaddr(cls, sockaddr: Any) -> Inet4SocketAddr:
        """Build an address from a socket-module address or another address."""
        if isinstance(sockaddr, SocketAddr):
            if sockaddr.domain() is not SockDomain.INET4:
                raise ValueError("socket_addr is not an inet address")
            return sockaddr.copy()
        if not (isinstance(sockaddr, tuple) and len(sockaddr) == 2):
            raise ValueError("sockaddr is not an inet address")
        host, port = sockaddr
        try:
            address = ipaddress.IPv4Address(host)
        except ValueError as exc:
            raise ValueError("sockaddr is not an inet address") from exc
        return cls(address, port)

    def address(self) -> ipaddress.IPv4Address:
        return self._address

    def port(self) -> int:
        return self._port

    def domain(self) -> SockDomain:
        return SockDomain.INET4

    def size(self) -> int:
        return _SOCKADDR_IN_SIZE

    def is_set(self) -> bool:
        """True when the address equals a freshly made empty address."""
        return int(self._address) == 0 and self._port == 0

    def sockaddr(self) -> tuple[str, int]:
        return (str(self._address), self._port)

    def copy(self) -> Inet4SocketAddr:
        return Inet4SocketAddr(self._address, self._port)

    def empty_like(self) -> Inet4SocketAddr:
        return Inet4SocketAddr()

    def __str__(self) -> str:
        return f"{self._address}:{self._port}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inet4SocketAddr):
            return NotImplemented
        return (self._address, self._port) == (other._address, other._port)

    def __hash__(self) -> int:
        return hash((self._address, self._port))

    def __repr__(self) -> str:
        return f"Inet4SocketAddr({str(self._address)!r}, {self._port})"


class Inet6SocketAddr(InetSocketAddr):
    """An IPv6 address and port, with flow information and scope id.

    With neither argument the address is empty; with only a port it is the
    wildcard address. A string address is resolved by name.
    """

    def __init__(self, address: Any = None, port: int | None = None) -> None:
        self._port = _check_port(0 if port is None else port)
        self._address = _coerce_v6(address)
        self._flowinfo = 0
        self._scope_id = 0

    @classmethod
    def from_sockaddr(cls, sockaddr: Any) -> Inet6SocketAddr:
        """Build an address from a socket-module address or another address."""
        if isinstance(sockaddr, SocketAddr):
            if sockaddr.domain() is not SockDomain.INET6:
                raise ValueError("socket_addr is not an inet6 address")
            return sockaddr.copy()
        if not (isinstance(sockaddr, tuple) and len(sockaddr) in (2, 4)):
            raise ValueError("sockaddr is not an inet6 address")
        host, port, *rest = sockaddr
        try:
            address = ipaddress.IPv6Address(
                _strip_scope(host) if isinstance(host, str) else host
            )
        except ValueError as exc:
            raise ValueError("sockaddr is not an inet6 address") from exc
        result = cls(address, port)
        if rest:
            result._flowinfo, result._scope_id = (operator.index(v) for v in rest)
        return result

    def address(self) -> ipaddress.IPv6Address:
        return self._address

    def port(self) -> int:
        return self._port

    @property
    def flowinfo(self) -> int:
        return self._flowinfo

    @property
    def scope_id(self) -> int:
        return self._scope_id

    def domain(self) -> SockDomain:
        return SockDomain.INET6

    def size(self) -> int:
        return _SOCKADDR_IN6_SIZE

    def is_set(self) -> bool:
        """True when the address equals a freshly made empty address."""
        return (int(self._address), self._port, self._flowinfo, self._scope_id) == (0, 0, 0, 0)

    def sockaddr(self) -> tuple[str, int, int, int]:
        return (str(self._address), self._port, self._flowinfo, self._scope_id)

    def copy(self) -> Inet6SocketAddr:
        return Inet6SocketAddr.from_sockaddr(self.sockaddr())

    def empty_like(self) -> Inet6SocketAddr:
        return Inet6SocketAddr()

    def __str__(self) -> str:
        return f"{self._address}:{self._port}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inet6SocketAddr):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[ipaddress.IPv6Address, int, int, int]:
        return (self._address, self._port, self._flowinfo, self._scope_id)

    def __repr__(self) -> str:
        return f"Inet6SocketAddr({str(self._address)!r}, {self._port})"


def address_from_sockaddr(domain: SockDomain | int, sockaddr: Any) -> SocketAddr:
    """Build the address type matching ``domain`` from a socket-module address.

    ``None`` (an unnamed peer) gives an empty address of that domain.
    """
    domain = SockDomain(domain)
    if domain is SockDomain.UNIX:
        return UnixSocketAddr() if sockaddr is None else UnixSocketAddr.from_sockaddr(sockaddr)
    if domain is SockDomain.INET4:
        return Inet4SocketAddr() if sockaddr is None else Inet4SocketAddr.from_sockaddr(sockaddr)
    if domain is SockDomain.INET6:
        return Inet6SocketAddr() if sockaddr is None else Inet6SocketAddr.from_sockaddr(sockaddr)
    raise ValueError(f"unsupported socket domain: {domain!r}")