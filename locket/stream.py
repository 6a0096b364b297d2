"""Client, server and accepted-connection stream sockets."""

from __future__ import annotations

from locket.addresses import SockDomain, SocketAddr
from locket.base import StreamSocket, _syscall
from locket.inet import address_from_sockaddr

__all__ = ["ClientStreamSocket", "ConnectedStreamSocket", "ServerStreamSocket"]

DEFAULT_BACKLOG = 4096


class ClientStreamSocket(StreamSocket):
    """A stream socket that connects out to a peer.

    It is created for ``domain``, optionally bound to ``bound_addr``, and
    connected to ``connected_addr`` if one is given. A socket wrapping
    ``fileno`` starts out unconnected.
    """

    def __init__(
        self,
        domain: SockDomain | int | None = None,
        *,
        bound_addr: SocketAddr | None = None,
        connected_addr: SocketAddr | None = None,
        fileno: int | None = None,
    ) -> None:
        self._connected_addr: SocketAddr | None = None
        if domain is None and bound_addr is None and connected_addr is not None:
            domain = connected_addr.domain()
        super().__init__(domain, bound_addr=bound_addr, fileno=fileno)
        if connected_addr is not None:
            self.connect(connected_addr)

    def connect(self, connect_addr: SocketAddr) -> None:
        if self.domain() != connect_addr.domain():
            raise RuntimeError("domains of socket and connect address do not match")
        if self._connected_addr is not None:
            raise RuntimeError("socket is already connected")
        with _syscall("connect()"):
            self._sock.connect(connect_addr.sockaddr())
        self._connected_addr = connect_addr.copy()

    def connected_addr(self) -> SocketAddr | None:
        """A copy of the address the socket is connected to, if any."""
        return None if self._connected_addr is None else self._connected_addr.copy()

    def recv(self, flags: int = 0) -> str:
        """Receive one message; the socket must be connected."""
        if self._connected_addr is None:
            raise RuntimeError("socket is not connected")
        return super().recv(flags)

    def send(self, message: str | bytes, flags: int = 0) -> None:
        """Send one NUL-terminated message; the socket must be connected."""
        if self._connected_addr is None:
            raise RuntimeError("socket is not connected")
        super().send(message, flags)


class ConnectedStreamSocket(StreamSocket):
    """A stream socket for one connection accepted by a server."""

    def __init__(self, fileno: int, connected_addr: SocketAddr | None) -> None:
        self._connected_addr: SocketAddr | None = None
        super().__init__(fileno=fileno)
        if connected_addr is None:
            raise RuntimeError("connected address is null")
        self._connected_addr = connected_addr.copy()

    def connected_addr(self) -> SocketAddr | None:
        """A copy of the peer's address."""
        return None if self._connected_addr is None else self._connected_addr.copy()

    def recv(self, flags: int = 0) -> str:
        return super().recv(flags)

    def send(self, message: str | bytes, flags: int = 0) -> None:
        super().send(message, flags)


class ServerStreamSocket(StreamSocket):
    """A stream socket that listens for and accepts connections."""

    def __init__(
        self,
        domain: SockDomain | int | None = None,
        *,
        bound_addr: SocketAddr | None = None,
        listen: bool = False,
        backlog: int = DEFAULT_BACKLOG,
        fileno: int | None = None,
    ) -> None:
        self._is_listening = False
        super().__init__(domain, bound_addr=bound_addr, fileno=fileno)
        if listen:
            self.listen(backlog)

    def listen(self, backlog: int = DEFAULT_BACKLOG) -> None:
        if self._is_listening:
            raise RuntimeError("socket is already listening")
        with _syscall("listen()"):
            self._sock.listen(backlog)
        self._is_listening = True

    def is_listening(self) -> bool:
        return self._is_listening

    def accept(self) -> ConnectedStreamSocket:
        """Wait for a connection and return a socket for it."""
        if self.bound_addr() is None:
            raise RuntimeError("socket is not bound")
        if not self._is_listening:
            raise RuntimeError("socket is not listening")
        with _syscall("accept()"):
            conn, peer = self._sock.accept()
        connected_addr = address_from_sockaddr(self.domain(), peer or None)
        return ConnectedStreamSocket(conn.detach(), connected_addr)