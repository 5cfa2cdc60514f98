"""Process tracking and freezing with the cgroup v1 freezer controller."""

from __future__ import annotations

import errno
import logging
import os
import time
from pathlib import Path

from unitvisor.cgroups.errors import CgroupIOError, _io_guard

log = logging.getLogger(__name__)

_PROCS_FILE = "cgroup.procs"
_FREEZE_FILE = "freezer.state"
_FROZEN = "FROZEN"
_THAWED = "THAWED"


def move_pid_to_cgroup(cgroup_path: str | os.PathLike[str], pid: int) -> None:
    """Move the process pid into the cgroup."""
    procs = Path(cgroup_path) / _PROCS_FILE
    with _io_guard(procs), procs.open("r+b") as handle:
        handle.write(str(pid).encode())


def move_self_to_cgroup(cgroup_path: str | os.PathLike[str]) -> None:
    """Move this process into the cgroup."""
    move_pid_to_cgroup(cgroup_path, os.getpid())


def _write_freeze_state(cgroup_path: str | os.PathLike[str], desired_state: str) -> None:
    freeze_file = Path(cgroup_path) / _FREEZE_FILE
    if not freeze_file.exists():
        raise CgroupIOError(
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT)), freeze_file
        )
    log.debug("Write %s to %s", desired_state, freeze_file)
    with _io_guard(freeze_file), freeze_file.open("r+b") as handle:
        handle.write(desired_state.encode())


def wait_frozen(cgroup_path: str | os.PathLike[str]) -> None:
    """Keep asking the cgroup to freeze until it reports being frozen."""
    freeze_file = Path(cgroup_path) / _FREEZE_FILE
    with _io_guard(freeze_file), freeze_file.open("rb") as handle:
        while True:
            freeze(cgroup_path)
            handle.seek(0)
            state = handle.read()
            if len(state) >= len(_FROZEN):
                if state[: len(_FROZEN)] == _FROZEN.encode():
                    return
                log.debug(
                    "Wait for frozen state. Read (): %s", state.decode(errors="replace")
                )
            time.sleep(0.001)


def freeze(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to freeze."""
    _write_freeze_state(cgroup_path, _FROZEN)


def thaw(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to thaw."""
    _write_freeze_state(cgroup_path, _THAWED)