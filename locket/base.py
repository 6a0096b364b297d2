"""The socket base class and the stream socket built on it."""

from __future__ import annotations

import contextlib
import enum
import os
import socket
import sys
from typing import Iterator

from locket.addresses import SockDomain, SocketAddr
from locket.errors import SocketError

__all__ = ["ShutdownHow", "Socket", "StreamSocket"]

MAX_MESSAGE_LENGTH = 1024


class ShutdownHow(enum.IntEnum):
    """Which directions of a connection to shut down."""

    READ = socket.SHUT_RD
    WRITE = socket.SHUT_WR
    READWRITE = socket.SHUT_RDWR


@contextlib.contextmanager
def _syscall(name: str) -> Iterator[None]:
    """Turn an ``OSError`` raised inside the block into a :class:`SocketError`."""
    try:
        yield
    except OSError as exc:
        raise SocketError(name, exc.errno or 0) from exc


def _encode(message: str | bytes) -> bytes:
    """The wire form of a message: its bytes followed by a NUL terminator."""
    if isinstance(message, str):
        data = message.encode("utf-8", "surrogateescape")
    else:
        data = bytes(message)
    return data + b"\0"


def _decode(data: bytes) -> str:
    """A received message, cut at its first NUL."""
    return data.split(b"\0", 1)[0].decode("utf-8", "surrogateescape")


def _domain_of(family: int) -> SockDomain:
    try:
        return SockDomain(int(family))
    except ValueError:
        return SockDomain.UNK


class Socket:
    """A socket of one domain, optionally bound to an address.

    A socket is created for ``domain`` (or for the domain of ``bound_addr``,
    to which it is then bound), or wraps the open descriptor ``fileno``,
    taking ownership of it.
    """

    _SOCKET_TYPE: int | None = None
    _TYPE_NAME = ""

    def __init__(
        self,
        domain: SockDomain | int | None = None,
        *,
        bound_addr: SocketAddr | None = None,
        fileno: int | None = None,
    ) -> None:
        self._sock: socket.socket | None = None
        self._bound_addr: SocketAddr | None = None
        if self._SOCKET_TYPE is None:
            raise TypeError(f"{type(self).__name__} cannot be instantiated directly")

        if fileno is not None:
            with _syscall("getsockopt()"):
                self._sock = socket.socket(fileno=fileno)
            self._domain = _domain_of(self._sock.family)
            if self.get_option(socket.SO_TYPE) != self._SOCKET_TYPE:
                raise RuntimeError(f"socket is not a {self._TYPE_NAME} socket")
            return

        if bound_addr is not None:
            domain = bound_addr.domain()
        if domain is None:
            raise ValueError("a domain, a bound address or a file descriptor is required")
        self._domain = SockDomain(domain)
        with _syscall("socket()"):
            self._sock = socket.socket(int(self._domain), self._SOCKET_TYPE)
        if bound_addr is not None:
            self.bind(bound_addr)

    def fileno(self) -> int:
        """The underlying descriptor, or -1 once closed."""
        return -1 if self._sock is None else self._sock.fileno()

    def domain(self) -> SockDomain:
        return self._domain

    def bound_addr(self) -> SocketAddr | None:
        """A copy of the address the socket is bound to, if any."""
        return None if self._bound_addr is None else self._bound_addr.copy()

    def bind(self, bind_addr: SocketAddr) -> None:
        if self._bound_addr is not None:
            raise RuntimeError("socket is already bound")
        if bind_addr.domain() != self._domain:
            raise RuntimeError("domains of socket and bind address do not match")
        with _syscall("bind()"):
            self._sock.bind(bind_addr.sockaddr())
        self._bound_addr = bind_addr.copy()

    def duplicate(self) -> int:
        """A new descriptor referring to the same socket."""
        with _syscall("dup()"):
            return os.dup(self.fileno())

    def shutdown(self, how: ShutdownHow | int) -> None:
        with _syscall("shutdown()"):
            self._sock.shutdown(int(how))

    def set_option(self, option_name: int, value: int | bool | bytes) -> None:
        """Set a socket-level (``SOL_SOCKET``) option."""
        if isinstance(value, bool):
            value = int(value)
        with _syscall("setsockopt()"):
            self._sock.setsockopt(socket.SOL_SOCKET, option_name, value)

    def get_option(self, option_name: int) -> int:
        """Read a socket-level (``SOL_SOCKET``) integer option."""
        with _syscall("getsockopt()"):
            return self._sock.getsockopt(socket.SOL_SOCKET, option_name)

    def close(self) -> None:
        """Close the socket; closing twice does nothing."""
        if self._sock is None or self._sock.fileno() == -1:
            return
        with _syscall("close()"):
            self._sock.close()

    def __enter__(self) -> Socket:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except SocketError as exc:
            print(
                f"Error in function that was asked not to throw: {exc}",
                file=sys.stderr,
            )


class StreamSocket(Socket):
    """A connection-oriented socket exchanging NUL-terminated messages."""

    _SOCKET_TYPE = socket.SOCK_STREAM
    _TYPE_NAME = "stream"

    def recv(self, flags: int = 0) -> str:
        """Receive one message of at most 1024 bytes."""
        with _syscall("recv()"):
            data = self._sock.recv(MAX_MESSAGE_LENGTH, flags)
        return _decode(data)

    def send(self, message: str | bytes, flags: int = 0) -> None:
        """Send ``message`` followed by a NUL terminator."""
        data = _encode(message)
        with _syscall("send()"):
            sent = self._sock.send(data, flags)
        if sent != len(data):
            raise SocketError("send()", 0)