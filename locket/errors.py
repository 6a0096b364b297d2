"""Exceptions carrying an errno value and its textual description."""

from __future__ import annotations

import enum
import os
import socket
from typing import Callable

__all__ = [
    "AddrinfoError",
    "AddrinfoFunc",
    "ErrnoError",
    "SocketError",
    "gai_strerror",
    "strerror",
]


def strerror(errno_num: int) -> str:
    """Return the system's description of an errno value."""
    return os.strerror(errno_num)


_GAI_MESSAGES: dict[str, str] = {
    "EAI_BADFLAGS": "Bad value for ai_flags",
    "EAI_NONAME": "Name or service not known",
    "EAI_AGAIN": "Temporary failure in name resolution",
    "EAI_FAIL": "Non-recoverable failure in name resolution",
    "EAI_FAMILY": "ai_family not supported",
    "EAI_SOCKTYPE": "ai_socktype not supported",
    "EAI_SERVICE": "Servname not supported for ai_socktype",
    "EAI_MEMORY": "Memory allocation failure",
    "EAI_SYSTEM": "System error",
    "EAI_OVERFLOW": "Argument buffer overflow",
    "EAI_NODATA": "No address associated with hostname",
    "EAI_ADDRFAMILY": "Address family for hostname not supported",
}

_GAI_BY_CODE: dict[int, str] = {
    getattr(socket, name): message
    for name, message in _GAI_MESSAGES.items()
    if hasattr(socket, name)
}


def gai_strerror(errno_num: int) -> str:
    """Return the description of an address-resolution error code."""
    return _GAI_BY_CODE.get(errno_num, "Unknown error")


class ErrnoError(RuntimeError):
    """A runtime error that carries an error number and its description."""

    _describe: Callable[[int], str] = staticmethod(strerror)

    def __init__(self, what: str, errno_num: int) -> None:
        super().__init__(what)
        self.what = what
        self.errno = errno_num
        self._errno_str = type(self)._describe(errno_num)

    def errno_string(self) -> str:
        """The textual description of the carried error number."""
        return self._errno_str

    def __str__(self) -> str:
        return self.what


class SocketError(ErrnoError):
    """An error reported by a socket system call."""


class AddrinfoFunc(enum.Enum):
    """The resolver functions that can report an :class:`AddrinfoError`."""

    GETADDRINFO = 0
    GETNAMEINFO = 1

    @property
    def label(self) -> str:
        return f"{self.name.lower()}()"


class AddrinfoError(SocketError):
    """An error reported by the name resolver."""

    _describe = staticmethod(gai_strerror)

    def __init__(self, function: AddrinfoFunc | int, errno_num: int) -> None:
        self.function = AddrinfoFunc(function)
        super().__init__(self.function.label, errno_num)