import ipaddress
import socket
import sys
from unittest import mock

import pytest

from locket.addresses import ByteOrder, SockDomain, UnixSocketAddr
from locket.errors import AddrinfoError, AddrinfoFunc, gai_strerror
from locket.inet import (
    Inet4SocketAddr,
    Inet6SocketAddr,
    address_from_sockaddr,
    resolve_ipv4,
    resolve_ipv6,
)


def _failing_getaddrinfo():
    return mock.patch(
        "locket.inet.socket.getaddrinfo",
        side_effect=socket.gaierror(socket.EAI_NONAME, "lookup failed"),
    )


def test_ipv4_empty_address():
    addr = Inet4SocketAddr()
    assert str(addr) == "0.0.0.0:0"
    assert addr.port() == 0
    assert addr.is_set() is True


def test_ipv4_port_only_is_wildcard():
    addr = Inet4SocketAddr(port=8080)
    assert addr.address() == ipaddress.IPv4Address(socket.INADDR_ANY)
    assert addr.port() == 8080
    assert addr.is_set() is False


def test_ipv4_numeric_string():
    addr = Inet4SocketAddr("127.0.0.1", 8080)
    assert addr.address() == ipaddress.IPv4Address("127.0.0.1")
    assert str(addr) == "127.0.0.1:8080"
    assert addr.sockaddr() == ("127.0.0.1", 8080)


def test_ipv4_int_is_host_order():
    value = int(ipaddress.IPv4Address("10.1.2.3"))
    addr = Inet4SocketAddr(value, 5)
    assert addr.address() == ipaddress.IPv4Address("10.1.2.3")


def test_ipv4_domain_and_size():
    addr = Inet4SocketAddr("127.0.0.1", 1)
    assert addr.domain() is SockDomain.INET4
    assert addr.size() == 16


@pytest.mark.parametrize("port", [-1, 65536])
def test_ipv4_port_out_of_range(port):
    with pytest.raises(ValueError):
        Inet4SocketAddr("127.0.0.1", port)


def test_ipv4_sockaddr_round_trip():
    addr = Inet4SocketAddr("192.0.2.10", 4242)
    assert Inet4SocketAddr.from_sockaddr(addr.sockaddr()) == addr


def test_ipv4_from_other_address_copies():
    addr = Inet4SocketAddr("192.0.2.10", 4242)
    other = Inet4SocketAddr.from_sockaddr(addr)
    assert other == addr
    assert other is not addr


def test_ipv4_from_wrong_domain_address():
    with pytest.raises(ValueError, match="socket_addr is not an inet address"):
        Inet4SocketAddr.from_sockaddr(Inet6SocketAddr("::1", 1))


def test_ipv4_from_ipv6_tuple():
    with pytest.raises(ValueError, match="sockaddr is not an inet address"):
        Inet4SocketAddr.from_sockaddr(("::1", 1, 0, 0))


def test_ipv4_copy_and_empty_like():
    addr = Inet4SocketAddr("192.0.2.1", 99)
    assert addr.copy() == addr
    assert addr.empty_like() == Inet4SocketAddr()
    assert len({addr, addr.copy()}) == 1


def test_ipv4_bound_socket_reports_same_address():
    requested = Inet4SocketAddr("127.0.0.1", 0)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(requested.sockaddr())
        bound = Inet4SocketAddr.from_sockaddr(sock.getsockname())
    assert bound.address() == requested.address()
    assert 0 < bound.port() <= 65535


def test_ipv4_resolves_names_through_getaddrinfo():
    result = [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.7", 0))]
    with mock.patch("locket.inet.socket.getaddrinfo", return_value=result):
        addr = Inet4SocketAddr("host.example.com", 9)
    assert addr.address() == ipaddress.IPv4Address("192.0.2.7")


def test_ipv4_resolution_failure():
    with _failing_getaddrinfo(), pytest.raises(AddrinfoError) as info:
        Inet4SocketAddr("nowhere.example.com", 80)
    assert info.value.errno == socket.EAI_NONAME
    assert info.value.function is AddrinfoFunc.GETADDRINFO
    assert str(info.value) == "getaddrinfo()"
    assert info.value.errno_string() == gai_strerror(socket.EAI_NONAME)


def test_resolve_ipv4_byte_orders():
    host = resolve_ipv4("127.0.0.1", ByteOrder.HOST)
    net = resolve_ipv4("127.0.0.1", ByteOrder.NET)
    assert host == int(ipaddress.IPv4Address("127.0.0.1"))
    assert net.to_bytes(4, sys.byteorder) == socket.inet_aton("127.0.0.1")
    assert resolve_ipv4("127.0.0.1") == net


def test_ipv6_empty_address():
    addr = Inet6SocketAddr()
    assert str(addr) == ":::0"
    assert addr.is_set() is True


def test_ipv6_port_only_is_wildcard():
    addr = Inet6SocketAddr(port=443)
    assert addr.address() == ipaddress.IPv6Address("::")
    assert addr.port() == 443
    assert addr.is_set() is False


def test_ipv6_numeric_string():
    addr = Inet6SocketAddr("::1", 80)
    assert addr.address() == ipaddress.IPv6Address("::1")
    assert str(addr) == "::1:80"
    assert addr.domain() is SockDomain.INET6
    assert addr.size() == 28


def test_ipv6_sockaddr_round_trip_keeps_flow_and_scope():
    addr = Inet6SocketAddr.from_sockaddr(("fe80::1", 5000, 7, 3))
    assert addr.flowinfo == 7
    assert addr.scope_id == 3
    assert addr.sockaddr() == ("fe80::1", 5000, 7, 3)
    assert Inet6SocketAddr.from_sockaddr(addr.sockaddr()) == addr
    assert addr.copy() == addr


def test_ipv6_from_ipv4_tuple():
    with pytest.raises(ValueError, match="sockaddr is not an inet6 address"):
        Inet6SocketAddr.from_sockaddr(("127.0.0.1", 1))


def test_ipv6_from_wrong_domain_address():
    with pytest.raises(ValueError, match="socket_addr is not an inet6 address"):
        Inet6SocketAddr.from_sockaddr(Inet4SocketAddr("127.0.0.1", 1))


def test_resolve_ipv6_numeric():
    assert resolve_ipv6("::1") == ipaddress.IPv6Address("::1")


def test_ipv6_resolution_failure():
    with _failing_getaddrinfo(), pytest.raises(AddrinfoError) as info:
        resolve_ipv6("nowhere.example.com")
    assert info.value.errno == socket.EAI_NONAME


def test_address_from_sockaddr_by_domain():
    v4 = address_from_sockaddr(SockDomain.INET4, ("127.0.0.1", 10))
    v6 = address_from_sockaddr(SockDomain.INET6, ("::1", 10, 0, 0))
    unix = address_from_sockaddr(SockDomain.UNIX, "/tmp/locket.sock")
    assert v4 == Inet4SocketAddr("127.0.0.1", 10)
    assert v6 == Inet6SocketAddr("::1", 10)
    assert unix == UnixSocketAddr("/tmp/locket.sock")


def test_address_from_sockaddr_unnamed_peer():
    assert address_from_sockaddr(SockDomain.UNIX, None) == UnixSocketAddr()
    assert address_from_sockaddr(SockDomain.INET4, None) == Inet4SocketAddr()


def test_address_from_sockaddr_unknown_domain():
    with pytest.raises(ValueError):
        address_from_sockaddr(SockDomain.UNK, ("127.0.0.1", 1))