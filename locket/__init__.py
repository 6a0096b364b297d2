"""Object-oriented Unix, IPv4 and IPv6 stream and datagram sockets."""

__version__ = "0.1.0"

__all__ = ["addresses", "base", "dgram", "errors", "inet", "stream"]