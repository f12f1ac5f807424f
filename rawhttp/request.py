"""Building and sending HTTP/1.1 requests."""

from __future__ import annotations

import socket
import sys

from rawhttp.connection import _connect_from_command_line

USER_AGENT = "SimpleHTTPClient/1.0"


def format_http_request(hostname: str, path: str, method: str = "GET") -> str:
    """Return the request text for ``method path`` on ``hostname``.

    The request asks the server to close the connection after replying.
    """
    return (
        f"{method} {path} HTTP/1.1\r\n"
        f"Host: {hostname}\r\n"
        f"User-Agent: {USER_AGENT}\r\n"
        "Accept: */*\r\n"
        "Connection: close\r\n"
        "\r\n"
    )


def send_http_request(sock: socket.socket, request: str) -> None:
    """Send the whole request over ``sock``; raises ``OSError`` on failure."""
    sock.sendall(request.encode("utf-8"))


def main(argv: list[str] | None = None) -> int:
    """Connect to a host and send a GET request for its root page."""
    hostname, sock = _connect_from_command_line(argv, "Send an HTTP GET request.")
    if sock is None:
        return 1

    with sock:
        request = format_http_request(hostname, "/")
        print(f"\nSending HTTP request:\n{request}")
        try:
            send_http_request(sock, request)
        except OSError as exc:
            print(f"Error sending request: {exc}", file=sys.stderr)
            print("Failed to send HTTP request", file=sys.stderr)
            return 1
        print("Request sent successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())