# rawhttp

A small HTTP/1.1 client that talks straight to a TCP socket. It opens a
connection, writes a plain-text request, reads until the server closes the
connection, and parses the status line, headers and body. It is useful for
seeing how HTTP works on the wire, and for quick checks against
plain-HTTP servers.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using the library

### Building blocks

```python
from rawhttp.connection import create_connection
from rawhttp.request import format_http_request, send_http_request
from rawhttp.response import receive_http_response, parse_http_response, print_http_response

sock = create_connection("example.com", 80)
with sock:
    send_http_request(sock, format_http_request("example.com", "/"))
    raw = receive_http_response(sock)

response = parse_http_response(raw)
print(response.status_code, response.reason_phrase)
print_http_response(response)
```

- `create_connection(hostname, port)` tries every address the name
  resolves to and returns the first connected socket. It raises
  `ConnectionError` if resolution fails or no address accepts.
- `format_http_request(hostname, path, method="GET")` produces a request
  with `Host`, `User-Agent`, `Accept` and `Connection: close` headers, so
  the server closes the connection once it has answered.
- `send_http_request(sock, request)` sends the whole request; it raises
  `OSError` on failure.
- `receive_http_response(sock)` reads until the peer closes the connection
  and decodes the bytes as Latin-1.
- `parse_http_response(raw)` returns an `HttpResponse` with
  `http_version`, `status_code`, `reason_phrase`, `headers` (names kept as
  sent) and `body`. It raises `ValueError` when no blank line separates
  headers from body.
- `print_http_response(response, out=None)` writes a summary to `out`
  (stdout by default): status, headers in sorted order, body length and
  the first 500 characters of the body.

### The client

`SimpleHttpClient` in `rawhttp.client` bundles the steps together, never
raising for network or parse failures, and adds lower-cased header names,
decoding of chunked bodies and a readable report on a response:

```python
from rawhttp.client import SimpleHttpClient, is_success_status

client = SimpleHttpClient()
response = client.get("example.com/")            # host[:port][/path]
client.process_response(response)

response = client.make_http_request("httpbin.org", "/status/404")
if not is_success_status(response.status_code):
    print("request did not succeed")
```

`make_http_request(hostname, path, port=80, method="GET")` returns a
`ClientResponse`. Besides the status, headers and body it records whether
the exchange itself worked (`is_success`) and, when it did not, why
(`error_message`): a failed connection, a failed send, an empty reply, a
missing header separator or a bad status line. `get(url)` raises
`ValueError` only if the URL carries a port that is not a number.

`process_response(response, out=None)` reports the status, a note on its
class (success, redirect, client error, server error), the headers
`content-length`, `content-type`, `server`, `date`, `cache-control`,
`set-cookie` and `location` when present, and the body length. Text, JSON
and XML bodies, and bodies with no content type, are previewed up to 300
characters; others are marked as binary.

The functions `is_success_status`, `is_redirect_status`,
`is_client_error_status` and `is_server_error_status` classify status
codes into their ranges (any code of 500 or more counts as a server
error). `is_chunked_encoding` and `decode_chunked_body` are available on
their own. The chunked decoder works line by line: each hexadecimal size
gives the number of following lines that make up the chunk.

## Commands

Each command needs network access and speaks plain HTTP.

- `rawhttp-connect [hostname] [port]` opens a TCP connection (example.com
  on port 80 by default), reports the socket descriptor and closes it.
- `rawhttp-send [hostname] [port]` connects, prints a GET request for `/`
  and sends it.
- `rawhttp-fetch [hostname] [port]` sends that request, reads the reply and
  prints the parsed response.
- `rawhttp-demo [--no-pause]` runs a series of requests against
  example.com and httpbin.org with `SimpleHttpClient`, waiting for Enter
  between them unless `--no-pause` is given.

Each command exits with status 1 when it cannot connect or the exchange
fails.

## What it does not do

- No HTTPS: connections are plain TCP.
- Redirects are reported but never followed. `SimpleHttpClient` takes a
  `max_redirects` value and keeps it, but does not act on it.
- Requests carry no body and no headers beyond the fixed set above.
- Responses are read until the server closes the connection; there is no
  keep-alive and no use of `Content-Length` to stop reading.