[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "locket"
version = "0.1.0"
description = "Object-oriented Unix, IPv4 and IPv6 stream and datagram sockets"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket", "networking", "unix-socket", "tcp", "udp", "ipv6"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["locket"]

[tool.pytest.ini_options]
addopts = "-ra"
