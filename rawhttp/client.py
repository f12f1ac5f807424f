"""A small HTTP client that fetches, parses and reports on responses."""

from __future__ import annotations

import argparse
import re
import socket
import sys
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from rawhttp import connection
from rawhttp import request as _request_module

HEADER_SEPARATOR = "\r\n\r\n"
PREVIEW_LENGTH = 300
DEFAULT_MAX_REDIRECTS = 5
IMPORTANT_HEADERS = (
    "content-length",
    "content-type",
    "server",
    "date",
    "cache-control",
    "set-cookie",
    "location",
)

_RECEIVE_SIZE = 4096
_INTEGER = re.compile(r"\s*([+-]?\d+)")
_HEX_SIZE = re.compile(r"\s*([0-9a-fA-F]+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_CLIENT_ERROR_MESSAGES = {
    400: "Bad Request - The server couldn't understand the request.",
    401: "Unauthorized - Authentication required.",
    403: "Forbidden - Access denied.",
    404: "Not Found - The requested resource doesn't exist.",
}
_SERVER_ERROR_MESSAGES = {
    500: "Internal Server Error - Something went wrong on the server.",
    502: "Bad Gateway - Invalid response from upstream server.",
    503: "Service Unavailable - Server temporarily unavailable.",
}


@dataclass
class ClientResponse:
    """A parsed HTTP response, or the reason no response could be obtained."""

    http_version: str = ""
    status_code: int = 0
    reason_phrase: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    is_success: bool = False
    error_message: str = ""


def is_success_status(status_code: int) -> bool:
    """True for status codes in the 2xx range."""
    return 200 <= status_code < 300


def is_redirect_status(status_code: int) -> bool:
    """True for status codes in the 3xx range."""
    return 300 <= status_code < 400


def is_client_error_status(status_code: int) -> bool:
    """True for status codes in the 4xx range."""
    return 400 <= status_code < 500


def is_server_error_status(status_code: int) -> bool:
    """True for status codes of 500 and above."""
    return status_code >= 500


def _lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` with any trailing carriage return removed."""
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part.removesuffix("\r")


def is_chunked_encoding(header_section: str) -> bool:
    """True if the header section declares chunked transfer encoding."""
    return "transfer-encoding: chunked" in header_section.lower()


def decode_chunked_body(chunked_body: str) -> str:
    """Decode a chunked body line by line.

    Each size line gives, in hexadecimal, how many following lines make up
    the chunk; those lines are joined with newlines. A size of zero, or a
    size line that is not hexadecimal, ends the body.
    """
    decoded = []
    lines = _lines(chunked_body)
    for size_line in lines:
        match = _HEX_SIZE.match(size_line)
        size = int(match.group(1), 16) if match else 0
        if size == 0:
            break
        chunk = []
        for index in range(size):
            line = next(lines, None)
            if line is None:
                break
            chunk.append(line)
            if index < size - 1:
                chunk.append("\n")
        decoded.append("".join(chunk))
    return "".join(decoded)


def _parse_status_line(line: str, response: ClientResponse) -> bool:
    parts = line.split(maxsplit=1)
    if not parts:
        response.error_message = "Invalid status line format"
        return False
    response.http_version = parts[0]
    rest = parts[1] if len(parts) > 1 else ""
    match = _INTEGER.match(rest)
    if match is None or not _INT_MIN <= int(match.group(1)) <= _INT_MAX:
        response.error_message = "Invalid status line format"
        return False
    response.status_code = int(match.group(1))
    response.reason_phrase = " ".join(rest[match.end():].split())
    return True


def _parse_header_line(line: str, headers: dict[str, str]) -> None:
    key, colon, value = line.partition(":")
    if colon:
        headers[key.lower()] = value.strip(" \t")


def _parse_port(text: str) -> int:
    match = _INTEGER.match(text)
    if match is None:
        raise ValueError(f"Invalid port: {text!r}")
    return int(match.group(1))


class SimpleHttpClient:
    """Makes plain HTTP requests over TCP and reports on the responses."""

    def __init__(self, max_redirects: int = DEFAULT_MAX_REDIRECTS) -> None:
        self.max_redirects = max_redirects

    def create_connection(self, hostname: str, port: int) -> socket.socket:
        """Open a TCP connection; raises ``ConnectionError`` on failure."""
        return connection.create_connection(hostname, port)

    def format_http_request(self, hostname: str, path: str, method: str = "GET") -> str:
        """Return the request text for ``method path`` on ``hostname``."""
        return _request_module.format_http_request(hostname, path, method)

    def send_http_request(self, sock: socket.socket, request: str) -> None:
        """Send the whole request; raises ``OSError`` on failure."""
        _request_module.send_http_request(sock, request)

    def receive_http_response(self, sock: socket.socket) -> str:
        """Read until the peer closes the connection or receiving fails.

        Whatever arrived before a failure is returned, decoded as Latin-1.
        """
        chunks = []
        while True:
            try:
                chunk = sock.recv(_RECEIVE_SIZE)
            except OSError:
                break
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks).decode("latin-1")

    def parse_http_response(self, raw_response: str) -> ClientResponse:
        """Parse a raw response; failures are reported in ``error_message``."""
        response = ClientResponse()
        if not raw_response:
            response.error_message = "Empty response received"
            return response

        header_end = raw_response.find(HEADER_SEPARATOR)
        if header_end == -1:
            response.error_message = (
                "Invalid HTTP response format - no header separator found"
            )
            return response

        header_section = raw_response[:header_end]
        response.body = raw_response[header_end + len(HEADER_SEPARATOR):]
        if is_chunked_encoding(header_section):
            response.body = decode_chunked_body(response.body)

        lines = _lines(header_section)
        status_line = next(lines, None)
        if status_line is not None and not _parse_status_line(status_line, response):
            return response
        for line in lines:
            _parse_header_line(line, response.headers)

        response.is_success = True
        return response

    def make_http_request(
        self, hostname: str, path: str, port: int = 80, method: str = "GET"
    ) -> ClientResponse:
        """Connect, send one request and return the parsed response."""
        try:
            sock = self.create_connection(hostname, port)
        except ConnectionError:
            return ClientResponse(
                error_message=f"Failed to establish connection to {hostname}"
            )

        with sock:
            try:
                self.send_http_request(
                    sock, self.format_http_request(hostname, path, method)
                )
            except OSError:
                return ClientResponse(error_message="Failed to send HTTP request")
            raw_response = self.receive_http_response(sock)

        return self.parse_http_response(raw_response)

    def process_response(
        self, response: ClientResponse, out: TextIO | None = None
    ) -> None:
        """Write a report on ``response`` to ``out`` (stdout by default)."""
        out = sys.stdout if out is None else out
        if not response.is_success:
            print(f"Error: {response.error_message}", file=out)
            return

        print("\n=== HTTP Response Processing ===", file=out)
        print(f"Status: {response.status_code} {response.reason_phrase}", file=out)

        code = response.status_code
        if is_success_status(code):
            self._report_success(response, out)
        elif is_redirect_status(code):
            self._report_redirect(response, out)
        elif is_client_error_status(code):
            print("✗ Client Error.", file=out)
            print(_CLIENT_ERROR_MESSAGES.get(code, "Client error occurred."), file=out)
        elif is_server_error_status(code):
            print("⚠ Server Error.", file=out)
            print(_SERVER_ERROR_MESSAGES.get(code, "Server error occurred."), file=out)
        else:
            print("Unknown status code range", file=out)

        self._report_headers(response, out)
        self._report_body(response, out)

    def get(self, url: str) -> ClientResponse:
        """GET a URL of the form ``host[:port][/path]``.

        Raises ``ValueError`` if a port is given that is not a number.
        """
        hostname, slash, rest = url.partition("/")
        path = slash + rest if slash else "/"
        port = 80
        hostname, colon, port_text = hostname.partition(":")
        if colon:
            port = _parse_port(port_text)
        return self.make_http_request(hostname, path, port, "GET")

    @staticmethod
    def _report_success(response: ClientResponse, out: TextIO) -> None:
        print("✓ Success! Request completed successfully.", file=out)
        content_type = response.headers.get("content-type")
        if content_type is not None:
            print(f"Content Type: {content_type}", file=out)

    @staticmethod
    def _report_redirect(response: ClientResponse, out: TextIO) -> None:
        print("↻ Redirect response.", file=out)
        location = response.headers.get("location")
        if location is not None:
            print(f"Redirect location: {location}", file=out)
            print("Note: This client doesn't automatically follow redirects.", file=out)

    @staticmethod
    def _report_headers(response: ClientResponse, out: TextIO) -> None:
        print("\nImportant Headers:", file=out)
        for name in IMPORTANT_HEADERS:
            if name in response.headers:
                print(f"  {name}: {response.headers[name]}", file=out)

    @staticmethod
    def _report_body(response: ClientResponse, out: TextIO) -> None:
        print("\nResponse Body:", file=out)
        print(f"Length: {len(response.body)} bytes", file=out)
        if not response.body:
            return
        content_type = response.headers.get("content-type")
        is_text = content_type is None or (
            content_type.startswith("text/")
            or "application/json" in content_type
            or "application/xml" in content_type
        )
        if not is_text:
            print("Binary content (not displayed)", file=out)
            return
        print("\nContent preview:", file=out)
        preview = response.body[:PREVIEW_LENGTH]
        if len(response.body) > PREVIEW_LENGTH:
            preview += "\n... (content truncated)"
        print(preview, file=out)


def main(argv: list[str] | None = None) -> int:
    """Run a series of example requests and report on each response."""
    parser = argparse.ArgumentParser(description="Run example HTTP requests.")
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="do not wait for Enter between examples",
    )
    args = parser.parse_args(argv)

    def pause(prompt: str) -> None:
        if args.no_pause:
            return
        print(prompt, end="", flush=True)
        sys.stdin.readline()

    client = SimpleHttpClient()

    print("=== Example 1: Simple GET Request ===")
    client.process_response(client.get("example.com/"))
    pause("\n\nPress Enter to continue...")

    print("\n=== Example 2: Detailed Method Call ===")
    client.process_response(client.make_http_request("httpbin.org", "/json", 80, "GET"))
    pause("\n\nPress Enter to continue...")

    test_cases = [
        ("httpbin.org", "/status/200"),
        ("httpbin.org", "/status/404"),
        ("httpbin.org", "/status/500"),
        ("httpbin.org", "/redirect/1"),
    ]
    for hostname, path in test_cases:
        print(f"\n=== Testing: {hostname}{path} ===")
        response = client.make_http_request(hostname, path)
        client.process_response(response)
        if is_success_status(response.status_code):
            print("✓ Success status detected")
        elif is_client_error_status(response.status_code):
            print("⚠ Client error detected")
        pause("\nPress Enter to continue...")

    return 0


if __name__ == "__main__":
    sys.exit(main())