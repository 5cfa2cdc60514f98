import socket
import tempfile
from pathlib import Path

import pytest

from unitvisor.platform.sockets import make_seqpacket_socket


@pytest.fixture
def short_dir():
    with tempfile.TemporaryDirectory(dir="/tmp") as d:
        yield Path(d)


def test_socket_is_seqpacket_and_bound(short_dir):
    path = short_dir / "s.sock"
    with make_seqpacket_socket(path) as sock:
        assert sock.type == socket.SOCK_SEQPACKET
        assert sock.family == socket.AF_UNIX
        assert sock.getsockname() == str(path)
        assert path.exists()


def test_messages_keep_their_boundaries(short_dir):
    path = short_dir / "s.sock"
    with make_seqpacket_socket(path) as server:
        with socket.socket(socket.AF_UNIX, socket.SOCK_SEQPACKET) as client:
            client.connect(str(path))
            conn, _ = server.accept()
            with conn:
                client.send(b"first")
                client.send(b"second")
                assert conn.recv(512) == b"first"
                assert conn.recv(512) == b"second"


def test_bind_in_missing_directory_fails(short_dir):
    with pytest.raises(OSError):
        make_seqpacket_socket(short_dir / "missing" / "s.sock")


def test_binding_same_path_twice_fails(short_dir):
    path = short_dir / "s.sock"
    with make_seqpacket_socket(path):
        with pytest.raises(OSError):
            make_seqpacket_socket(path)