# locket

Small, object-oriented wrappers around POSIX sockets for Unix-domain, IPv4
and IPv6 addresses, with stream sockets (client, server and accepted
connection) and datagram sockets. Messages are text: each one is sent with a
NUL terminator, and a receive reads at most 1024 bytes and returns the text
up to the first NUL.

## Installation

```
pip install .
```

## Modules

- `locket.errors`: `ErrnoError`, `SocketError`, `AddrinfoError`,
  `AddrinfoFunc`, and the helpers `strerror()` and `gai_strerror()`.
- `locket.addresses`: `SockDomain`, `IpVersion`, `ByteOrder`, the abstract
  `SocketAddr` and `InetSocketAddr`, and `UnixSocketAddr`.
- `locket.inet`: `Inet4SocketAddr`, `Inet6SocketAddr`, `resolve_ipv4()`,
  `resolve_ipv6()` and `address_from_sockaddr()`.
- `locket.base`: `ShutdownHow`, the base class `Socket` and `StreamSocket`.
- `locket.dgram`: `DgramSocket`.
- `locket.stream`: `ClientStreamSocket`, `ConnectedStreamSocket` and
  `ServerStreamSocket`.

## Addresses

- `UnixSocketAddr(path_or_name, is_abstract=False)`: a filesystem path or,
  with `is_abstract=True`, a name in the Linux abstract namespace. `str()`
  gives the path, and an empty string for an abstract address; the `name`
  property gives the path or abstract name.
- `Inet4SocketAddr(address, port)` and `Inet6SocketAddr(address, port)`: a
  host name or literal address plus a port. String addresses are resolved
  with `getaddrinfo`; with only a port the address is the wildcard address.
  `str()` gives `host:port`.

Every address has `domain()`, `size()` (the size of the native address
structure), `is_set()`, `sockaddr()` (the form the `socket` module expects),
`copy()` and `empty_like()`. Addresses compare equal by value. `from_sockaddr()`
builds an address from a `socket`-module address or another address of the
same domain, raising `ValueError` on a mismatch.

Note that `is_set()` of an inet address is true when it equals a freshly
made empty address; for a Unix address it is true when a path or name is
present.

## Stream sockets

```python
from locket.addresses import SockDomain
from locket.inet import Inet4SocketAddr
from locket.stream import ClientStreamSocket, ServerStreamSocket

server_addr = Inet4SocketAddr("127.0.0.1", 5000)

with ServerStreamSocket(SockDomain.INET4, bound_addr=server_addr, listen=True) as server:
    with ClientStreamSocket(SockDomain.INET4, connected_addr=server_addr) as client:
        with server.accept() as conn:
            client.send("hello")
            print(conn.recv(), conn.connected_addr())
```

A client must be connected before `send` or `recv`; connecting twice, or to
an address of another domain, raises `RuntimeError`. A server must be bound
and listening before `accept()`, which returns a `ConnectedStreamSocket`
holding the peer's address. The default listen backlog is 4096.

## Datagram sockets

```python
from locket.addresses import SockDomain
from locket.inet import Inet4SocketAddr
from locket.dgram import DgramSocket

a_addr = Inet4SocketAddr("127.0.0.1", 5001)
b_addr = Inet4SocketAddr("127.0.0.1", 5002)

with DgramSocket(SockDomain.INET4, bound_addr=a_addr) as a, \
     DgramSocket(SockDomain.INET4, bound_addr=b_addr) as b:
    a.send("ping", b_addr)
    print(b.recv(), b.last_sender_addr())
```

An unconnected datagram socket needs a peer address for `send` and records
the sender of each received message in `last_sender_addr()`; a connected one
must not be given a peer address, and `connected_peer_addr()` returns its
peer.

## Common socket operations

Every socket can be created for a domain, for the domain of `bound_addr`
(and bound to it), or around an open descriptor passed as `fileno=`, whose
type is checked (`RuntimeError` if it is not a stream or datagram socket as
expected). Sockets offer `fileno()`, `domain()`, `bound_addr()`, `bind()`,
`duplicate()` (a new descriptor), `shutdown(ShutdownHow.READ | WRITE |
READWRITE)`, `set_option()` and `get_option()` for `SOL_SOCKET` options, and
`close()`. They are context managers that close on exit.

## Errors

System call failures raise `locket.errors.SocketError`, a `RuntimeError`
whose message is the failing call's name (such as `"connect()"`), with the
`errno` attribute and its description from `errno_string()`. Name
resolution failures raise `locket.errors.AddrinfoError`, carrying the
`getaddrinfo` error code and its description.

## What it does not do

locket is a library only: it has no command-line tool. Sockets are
blocking; there is no non-blocking or asynchronous interface, no TLS, and no
message framing beyond the NUL terminator and the 1024-byte receive limit.

## Running the tests

```
pip install .[test]
pytest
```