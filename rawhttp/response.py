"""Receiving, parsing and printing HTTP responses."""

from __future__ import annotations

import argparse
import re
import socket
import sys
from dataclasses import dataclass, field
from typing import TextIO

from rawhttp.connection import DEFAULT_HOST, DEFAULT_PORT, create_connection
from rawhttp.request import format_http_request, send_http_request

HEADER_SEPARATOR = "\r\n\r\n"
PREVIEW_LENGTH = 500
_RECEIVE_SIZE = 4096
_STATUS_CODE = re.compile(r"[+-]?\d+")


@dataclass
class HttpResponse:
    """A parsed HTTP response."""

    http_version: str = ""
    status_code: int = 0
    reason_phrase: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


def receive_http_response(sock: socket.socket) -> str:
    """Read from ``sock`` until the peer closes the connection.

    The bytes are decoded as Latin-1, so every byte maps to one character.
    Raises ``OSError`` if receiving fails.
    """
    chunks = []
    while chunk := sock.recv(_RECEIVE_SIZE):
        chunks.append(chunk)
    return b"".join(chunks).decode("latin-1")


def _parse_status_line(line: str, response: HttpResponse) -> None:
    parts = line.split(maxsplit=1)
    response.http_version = parts[0] if parts else ""
    rest = parts[1] if len(parts) > 1 else ""
    match = _STATUS_CODE.match(rest)
    if match is None:
        response.status_code = 0
        response.reason_phrase = ""
        return
    response.status_code = int(match.group())
    response.reason_phrase = " ".join(rest[match.end():].split())


def _parse_header_line(line: str, headers: dict[str, str]) -> None:
    key, colon, value = line.partition(":")
    if colon:
        headers[key] = value.strip(" \t")


def parse_http_response(raw_response: str) -> HttpResponse:
    """Split a raw response into status line, headers and body.

    Raises ``ValueError`` when no blank line separates headers from body.
    """
    header_end = raw_response.find(HEADER_SEPARATOR)
    if header_end == -1:
        raise ValueError("Invalid HTTP response format")

    response = HttpResponse(body=raw_response[header_end + len(HEADER_SEPARATOR):])
    status_line, *header_lines = raw_response[:header_end].split("\n")
    _parse_status_line(status_line.removesuffix("\r"), response)
    for line in header_lines:
        _parse_header_line(line.removesuffix("\r"), response.headers)
    return response


def print_http_response(response: HttpResponse, out: TextIO | None = None) -> None:
    """Write a readable summary of ``response`` to ``out`` (stdout by default)."""
    out = sys.stdout if out is None else out
    print("\n=== HTTP Response ===", file=out)
    print(
        f"Status: {response.http_version} {response.status_code} "
        f"{response.reason_phrase}",
        file=out,
    )
    print("\nHeaders:", file=out)
    for name, value in sorted(response.headers.items()):
        print(f"  {name}: {value}", file=out)
    print(f"\nBody length: {len(response.body)} bytes", file=out)
    if response.body:
        print("\nBody preview:", file=out)
        preview = response.body[:PREVIEW_LENGTH]
        if len(response.body) > PREVIEW_LENGTH:
            preview += "... (truncated)"
        print(preview, file=out)


def main(argv: list[str] | None = None) -> int:
    """Fetch a host's root page and print the parsed response."""
    parser = argparse.ArgumentParser(description="Fetch and print an HTTP response.")
    parser.add_argument("hostname", nargs="?", default=DEFAULT_HOST)
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    print(f"Connecting to {args.hostname}:{args.port}")
    try:
        sock = create_connection(args.hostname, args.port)
    except ConnectionError as exc:
        print(exc, file=sys.stderr)
        print("Connection failed", file=sys.stderr)
        return 1

    with sock:
        print("Connected successfully!")
        request = format_http_request(args.hostname, "/")
        print("\nSending HTTP request...")
        try:
            send_http_request(sock, request)
        except OSError as exc:
            print(f"Error sending request: {exc}", file=sys.stderr)
            print("Failed to send HTTP request", file=sys.stderr)
            return 1
        print("Request sent! Waiting for response...")
        try:
            raw_response = receive_http_response(sock)
        except OSError as exc:
            print(f"Error receiving response: {exc}", file=sys.stderr)
            raw_response = ""

    if not raw_response:
        print("Failed to receive response", file=sys.stderr)
        return 1

    try:
        response = parse_http_response(raw_response)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    print_http_response(response)
    return 0


if __name__ == "__main__":
    sys.exit(main())