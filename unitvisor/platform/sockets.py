"""Unix socket helpers common to all Unix platforms."""

from __future__ import annotations

import os
import socket

_BACKLOG = 128


def make_seqpacket_socket(path: str | os.PathLike[str]) -> socket.socket:
    """Open a listening sequential-packet Unix socket bound to path."""
    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_SEQPACKET, 0)
    except OSError as err:
        raise OSError(
            err.errno, f"Could not open sequential packet socket: {err}"
        ) from err
    try:
        sock.bind(os.fspath(path))
        sock.listen(_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock