import io
import socket
import threading

import pytest

from rawhttp.client import (
    ClientResponse,
    SimpleHttpClient,
    decode_chunked_body,
    is_chunked_encoding,
    is_client_error_status,
    is_redirect_status,
    is_server_error_status,
    is_success_status,
)
from rawhttp.request import format_http_request


def _serve_once(payload: bytes):
    server = socket.create_server(("127.0.0.1", 0))
    port = server.getsockname()[1]
    captured = []

    def run():
        conn, _ = server.accept()
        with conn:
            data = b""
            while b"\r\n\r\n" not in data:
                chunk = conn.recv(1024)
                if not chunk:
                    break
                data += chunk
            captured.append(data.decode("latin-1"))
            conn.sendall(payload)
        server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, captured, thread


def _free_port():
    with socket.create_server(("127.0.0.1", 0)) as probe:
        return probe.getsockname()[1]


def _report(response):
    out = io.StringIO()
    SimpleHttpClient().process_response(response, out)
    return out.getvalue()


@pytest.mark.parametrize(
    "code, success, redirect, client_error, server_error",
    [
        (199, False, False, False, False),
        (200, True, False, False, False),
        (299, True, False, False, False),
        (301, False, True, False, False),
        (404, False, False, True, False),
        (500, False, False, False, True),
        (600, False, False, False, True),
    ],
)
def test_status_ranges(code, success, redirect, client_error, server_error):
    assert is_success_status(code) is success
    assert is_redirect_status(code) is redirect
    assert is_client_error_status(code) is client_error
    assert is_server_error_status(code) is server_error


def test_chunked_detection_is_case_insensitive():
    assert is_chunked_encoding("HTTP/1.1 200 OK\r\nTransfer-Encoding: Chunked")
    assert not is_chunked_encoding("HTTP/1.1 200 OK\r\nContent-Length: 5")


def test_decode_multi_line_chunk_joins_with_newline():
    assert decode_chunked_body("2\r\nab\r\ncd\r\n0\r\n") == "ab\ncd"


def test_decode_stops_on_non_hex_size():
    assert decode_chunked_body("zz\r\nhello\r\n") == ""
    assert decode_chunked_body("") == ""


def test_parse_empty_response():
    response = SimpleHttpClient().parse_http_response("")
    assert response.is_success is False
    assert response.error_message == "Empty response received"


def test_parse_without_separator():
    response = SimpleHttpClient().parse_http_response("HTTP/1.1 200 OK\r\n")
    assert response.is_success is False
    assert response.error_message == (
        "Invalid HTTP response format - no header separator found"
    )


def test_parse_full_response():
    raw = (
        "HTTP/1.1 404 Not   Found\r\n"
        "Content-Type:  text/html \t\r\n"
        "X-Empty:   \r\n"
        "\r\n"
        "<p>missing</p>"
    )
    response = SimpleHttpClient().parse_http_response(raw)
    assert response.is_success is True
    assert response.http_version == "HTTP/1.1"
    assert response.status_code == 404
    assert response.reason_phrase == "Not Found"
    assert response.headers == {"content-type": "text/html", "x-empty": ""}
    assert response.body == "<p>missing</p>"


def test_parse_invalid_status_line():
    response = SimpleHttpClient().parse_http_response("HTTP/1.1 OK\r\n\r\nbody")
    assert response.is_success is False
    assert response.error_message == "Invalid status line format"


def test_format_matches_request_module():
    client = SimpleHttpClient()
    text = client.format_http_request("example.com", "/a", "HEAD")
    assert text == format_http_request("example.com", "/a", "HEAD")
    assert text.startswith("HEAD /a HTTP/1.1\r\nHost: example.com\r\n")
    assert "User-Agent: SimpleHTTPClient/1.0\r\n" in text


def test_send_and_receive_round_trip():
    client = SimpleHttpClient()
    left, right = socket.socketpair()
    with left, right:
        client.send_http_request(left, "GET / HTTP/1.1\r\n\r\n")
        left.shutdown(socket.SHUT_WR)
        assert client.receive_http_response(right) == "GET / HTTP/1.1\r\n\r\n"


def test_max_redirects_default_and_override():
    assert SimpleHttpClient().max_redirects == 5
    client = SimpleHttpClient(2)
    client.max_redirects = 7
    assert client.max_redirects == 7


def test_report_error_response():
    output = _report(ClientResponse(error_message="Empty response received"))
    assert output == "Error: Empty response received\n"


def test_report_not_found():
    output = _report(ClientResponse(status_code=404, reason_phrase="Not Found", is_success=True))
    assert "Status: 404 Not Found" in output
    assert "Not Found - The requested resource doesn't exist." in output
    assert "Length: 0 bytes" in output


def test_report_server_error_and_redirect():
    output = _report(ClientResponse(status_code=503, is_success=True))
    assert "Service Unavailable - Server temporarily unavailable." in output
    redirect = ClientResponse(
        status_code=302, headers={"location": "/next"}, is_success=True
    )
    output = _report(redirect)
    assert "Redirect location: /next" in output
    assert "  location: /next" in output


def test_report_truncates_long_text_body():
    response = ClientResponse(
        status_code=200,
        headers={"content-type": "text/plain"},
        body="a" * 400,
        is_success=True,
    )
    output = _report(response)
    assert "a" * 300 + "\n... (content truncated)" in output
    assert "a" * 301 not in output
    assert "Content Type: text/plain" in output


def test_report_binary_body_not_displayed():
    response = ClientResponse(
        status_code=200,
        headers={"content-type": "image/png"},
        body="\x89PNG",
        is_success=True,
    )
    output = _report(response)
    assert "Binary content (not displayed)" in output
    assert "\x89PNG" not in output


def test_make_http_request_against_local_server():
    payload = b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\npong"
    port, captured, thread = _serve_once(payload)
    response = SimpleHttpClient().make_http_request("127.0.0.1", "/ping", port)
    thread.join(timeout=5)
    assert response.is_success is True
    assert response.status_code == 200
    assert response.body == "pong"
    assert captured[0] == format_http_request("127.0.0.1", "/ping")


def test_get_parses_port_and_path():
    port, captured, thread = _serve_once(b"HTTP/1.1 204 No Content\r\n\r\n")
    response = SimpleHttpClient().get(f"127.0.0.1:{port}/items/1")
    thread.join(timeout=5)
    assert response.status_code == 204
    assert response.reason_phrase == "No Content"
    assert captured[0].startswith("GET /items/1 HTTP/1.1\r\n")


def test_get_rejects_non_numeric_port():
    with pytest.raises(ValueError):
        SimpleHttpClient().get("127.0.0.1:http/")


def test_connection_failure_is_reported():
    response = SimpleHttpClient().make_http_request("127.0.0.1", "/", _free_port())
    assert response.is_success is False
    assert response.error_message == "Failed to establish connection to 127.0.0.1"