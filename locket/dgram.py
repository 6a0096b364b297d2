"""Datagram sockets, connected or addressing each peer explicitly."""

from __future__ import annotations

import socket

from locket.addresses import SockDomain, SocketAddr
from locket.base import MAX_MESSAGE_LENGTH, Socket, _decode, _encode, _syscall
from locket.errors import SocketError
from locket.inet import address_from_sockaddr

__all__ = ["DgramSocket"]


class DgramSocket(Socket):
    """A datagram socket exchanging NUL-terminated messages.

    Without a connected peer, every send names its peer and every receive
    records the sender's address.
    """

    _SOCKET_TYPE = socket.SOCK_DGRAM
    _TYPE_NAME = "datagram"

    def __init__(
        self,
        domain: SockDomain | int | None = None,
        *,
        bound_addr: SocketAddr | None = None,
        connected_addr: SocketAddr | None = None,
        fileno: int | None = None,
    ) -> None:
        self._connected_addr: SocketAddr | None = None
        self._last_sender_addr: SocketAddr | None = None
        if domain is None and bound_addr is None and connected_addr is not None:
            domain = connected_addr.domain()
        super().__init__(domain, bound_addr=bound_addr, fileno=fileno)
        if connected_addr is not None:
            self.connect(connected_addr)

    def connect(self, connect_addr: SocketAddr) -> None:
        if self._connected_addr is not None:
            raise RuntimeError("socket is already connected")
        if self.domain() != connect_addr.domain():
            raise RuntimeError("domains of socket and connect address do not match")
        with _syscall("connect()"):
            self._sock.connect(connect_addr.sockaddr())
        self._connected_addr = connect_addr.copy()

    def recv(self, flags: int = 0) -> str:
        """Receive one message of at most 1024 bytes."""
        if self._connected_addr is not None:
            with _syscall("recv()"):
                data = self._sock.recv(MAX_MESSAGE_LENGTH, flags)
            return _decode(data)

        with _syscall("recvfrom()"):
            data, sender = self._sock.recvfrom(MAX_MESSAGE_LENGTH, flags)
        self._last_sender_addr = address_from_sockaddr(self.domain(), sender or None)
        return _decode(data)

    def send(
        self,
        message: str | bytes,
        peer_addr: SocketAddr | None = None,
        flags: int = 0,
    ) -> None:
        """Send ``message`` with a NUL terminator to the connected or given peer."""
        if self._connected_addr is not None and peer_addr is not None:
            raise RuntimeError("socket is connected but peer address is specified")
        if self._connected_addr is None and peer_addr is None:
            raise RuntimeError("socket is not connected but no peer address is specified")
        if peer_addr is not None and self.domain() != peer_addr.domain():
            raise RuntimeError("domains of socket and peer address do not match")

        data = _encode(message)
        if self._connected_addr is not None:
            with _syscall("send()"):
                sent = self._sock.send(data, flags)
            if sent != len(data):
                raise SocketError("send()", 0)
        else:
            with _syscall("sendto()"):
                sent = self._sock.sendto(data, flags, peer_addr.sockaddr())
            if sent != len(data):
                raise SocketError("sendto()", 0)

    def connected_peer_addr(self) -> SocketAddr | None:
        """A copy of the connected peer's address, if connected."""
        return None if self._connected_addr is None else self._connected_addr.copy()

    def last_sender_addr(self) -> SocketAddr | None:
        """A copy of the address of the last message's sender, if any."""
        return None if self._last_sender_addr is None else self._last_sender_addr.copy()