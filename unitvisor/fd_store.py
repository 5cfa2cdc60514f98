"""A keyed store of open file descriptors.

Descriptors come from socket units (stored under the unit's name) and from
services that ask for descriptors to be kept open across restarts.
"""

from __future__ import annotations

from typing import Any

GlobalEntry = list[tuple[Any, str, Any]]


def _raw_fd(fd: Any) -> int:
    return fd.fileno() if hasattr(fd, "fileno") else int(fd)


class FDStore:
    """Holds socket-unit descriptors and service-stored descriptors."""

    def __init__(self) -> None:
        self._global_sockets: dict[str, GlobalEntry] = {}
        self._service_stored: dict[str, dict[str, list[int]]] = {}

    def global_fds_to_ids(self) -> list[tuple[int, Any]]:
        """Pair every stored socket-unit descriptor with its unit id."""
        return [
            (_raw_fd(fd), unit_id)
            for entries in self._global_sockets.values()
            for unit_id, _name, fd in entries
        ]

    def insert_global(self, name: str, new_fds: GlobalEntry) -> GlobalEntry | None:
        """Store new_fds under name; hand them back if name already has fds."""
        if name in self._global_sockets:
            return new_fds
        self._global_sockets[name] = new_fds
        return None

    def remove_global(self, name: str) -> GlobalEntry | None:
        return self._global_sockets.pop(name, None)

    def get_global(self, name: str) -> GlobalEntry | None:
        return self._global_sockets.get(name)

    def insert_service_stored(self, srvc_name: str, fd_name: str, new_fds: list[int]) -> None:
        """Add descriptors a service asked to keep, under its name and the fd name."""
        self._service_stored.setdefault(srvc_name, {}).setdefault(fd_name, []).extend(new_fds)

    def remove_service_stored(self, srvc_name: str, fd_name: str) -> list[int] | None:
        fds = self._service_stored.get(srvc_name)
        return None if fds is None else fds.pop(fd_name, None)

    def get_service_stored(self, srvc_name: str, fd_name: str) -> list[int] | None:
        fds = self._service_stored.get(srvc_name)
        return None if fds is None else fds.get(fd_name)