import socket
import threading

import pytest

from rawhttp.connection import create_connection, main


@pytest.fixture
def listener():
    """Accept one connection; yield its port and a function giving the peer."""
    server = socket.create_server(("127.0.0.1", 0))
    server.settimeout(5)
    port = server.getsockname()[1]
    peers = []

    def accept():
        with server:
            conn, peer = server.accept()
            peers.append(peer)
            with conn:
                conn.settimeout(5)
                conn.recv(1024)

    thread = threading.Thread(target=accept, daemon=True)
    thread.start()

    def peer():
        thread.join(5)
        return peers[0] if peers else None

    yield port, peer
    thread.join(5)


@pytest.fixture
def closed_port():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


def test_create_connection_reaches_listener(listener):
    port, peer = listener
    with create_connection("127.0.0.1", port) as sock:
        assert sock.getpeername() == ("127.0.0.1", port)
        assert sock.type == socket.SOCK_STREAM
    assert peer()[0] == "127.0.0.1"


def test_create_connection_refused_raises(closed_port):
    with pytest.raises(ConnectionError):
        create_connection("127.0.0.1", closed_port)


def test_main_reports_success(listener, capsys):
    port, peer = listener
    status = main(["127.0.0.1", str(port)])
    peer()
    out = capsys.readouterr().out
    assert status == 0
    assert f"Connecting to 127.0.0.1:{port}" in out
    assert "Connected successfully! Socket descriptor:" in out


def test_main_reports_failure(closed_port, capsys):
    status = main(["127.0.0.1", str(closed_port)])
    assert status == 1
    assert "Connection failed" in capsys.readouterr().err