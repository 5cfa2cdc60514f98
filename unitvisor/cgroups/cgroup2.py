"""Process tracking and freezing with the unified cgroup v2 hierarchy."""

from __future__ import annotations

import errno
import logging
import os
import time
from collections.abc import Iterable
from pathlib import Path

from unitvisor.cgroups.errors import CgroupIOError, _io_guard

log = logging.getLogger(__name__)

_PROCS_FILE = "cgroup.procs"
_CONTROLLERS_FILE = "cgroup.controllers"
_SUBTREE_CONTROL_FILE = "cgroup.subtree_control"
_FREEZE_FILE = "cgroup.freeze"


def move_pid_to_cgroup(cgroup_path: str | os.PathLike[str], pid: int) -> None:
    """Move the process pid into the cgroup."""
    procs = Path(cgroup_path) / _PROCS_FILE
    with _io_guard(procs), procs.open("r+b") as handle:
        handle.write(str(pid).encode())


def move_self_to_cgroup(cgroup_path: str | os.PathLike[str]) -> None:
    """Move this process into the cgroup."""
    move_pid_to_cgroup(cgroup_path, os.getpid())


def get_available_controllers(cgroup_path: str | os.PathLike[str]) -> list[str]:
    """Return the controllers listed for this cgroup, one entry per line."""
    controllers = Path(cgroup_path) / _CONTROLLERS_FILE
    with _io_guard(controllers):
        content = controllers.read_text()
    return content.split("\n")


def _write_subtree_control(
    cgroup_path: str | os.PathLike[str], controllers: Iterable[str], sign: str
) -> None:
    subtree = Path(cgroup_path) / _SUBTREE_CONTROL_FILE
    request = "".join(f" {sign}{ctl}" for ctl in controllers)
    with _io_guard(subtree), subtree.open("r+b") as handle:
        handle.write(request.encode())


def enable_controllers(
    cgroup_path: str | os.PathLike[str], controllers: Iterable[str]
) -> None:
    """Enable controllers for the child cgroups."""
    _write_subtree_control(cgroup_path, controllers, "+")


def disable_controllers(
    cgroup_path: str | os.PathLike[str], controllers: Iterable[str]
) -> None:
    """Disable controllers for the child cgroups."""
    _write_subtree_control(cgroup_path, controllers, "-")


def _write_freeze_state(cgroup_path: str | os.PathLike[str], desired_state: str) -> None:
    freeze_file = Path(cgroup_path) / _FREEZE_FILE
    if not freeze_file.exists():
        raise CgroupIOError(
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT)), freeze_file
        )
    log.debug("Write %s to %s", desired_state, freeze_file)
    with _io_guard(freeze_file):
        with os.fdopen(os.open(freeze_file, os.O_WRONLY), "wb") as handle:
            handle.write(desired_state.encode())


def wait_frozen(cgroup_path: str | os.PathLike[str]) -> None:
    """Keep asking the cgroup to freeze until it reports being frozen."""
    freeze_file = Path(cgroup_path) / _FREEZE_FILE
    with _io_guard(freeze_file), freeze_file.open("rb") as handle:
        while True:
            freeze(cgroup_path)
            handle.seek(0)
            if handle.read()[:1] == b"1":
                return
            time.sleep(0.001)


def freeze(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to freeze."""
    _write_freeze_state(cgroup_path, "1")


def thaw(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to thaw."""
    _write_freeze_state(cgroup_path, "0")