"""Opening TCP connections to a host and port."""

from __future__ import annotations

import argparse
import socket
import sys

DEFAULT_HOST = "example.com"
DEFAULT_PORT = 80


def create_connection(hostname: str, port: int) -> socket.socket:
    """Connect to the first reachable address of ``hostname:port``.

    Every address that name resolution returns is tried in order.
    Raises ``ConnectionError`` if resolution fails or no address accepts
    the connection.
    """
    try:
        addresses = socket.getaddrinfo(
            hostname, str(port), socket.AF_UNSPEC, socket.SOCK_STREAM
        )
    except socket.gaierror as exc:
        raise ConnectionError(f"getaddrinfo: {exc}") from exc

    last_error: OSError | None = None
    for family, socktype, proto, _canonname, address in addresses:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            last_error = exc
            continue
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock

    raise ConnectionError(f"Failed to connect to {hostname}:{port}") from last_error


def _connect_from_command_line(
    argv: list[str] | None, description: str
) -> tuple[str, socket.socket | None]:
    """Parse ``[hostname] [port]``, connect and report progress.

    Returns the host name and the connected socket, or ``None`` in place
    of the socket if the connection failed.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("hostname", nargs="?", default=DEFAULT_HOST)
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    print(f"Connecting to {args.hostname}:{args.port}")
    try:
        sock = create_connection(args.hostname, args.port)
    except ConnectionError as exc:
        print(exc, file=sys.stderr)
        print("Connection failed", file=sys.stderr)
        return args.hostname, None

    print(f"Connected successfully! Socket descriptor: {sock.fileno()}")
    return args.hostname, sock


def main(argv: list[str] | None = None) -> int:
    """Connect to a host, report the socket descriptor and disconnect."""
    _hostname, sock = _connect_from_command_line(
        argv, "Open a TCP connection to a host."
    )
    if sock is None:
        return 1
    sock.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())