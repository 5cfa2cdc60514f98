"""Track services with cgroups, choosing between cgroup v1 and v2.

The paths found here lie inside the cgroup that holds the service manager
itself, so the groups it creates stay within its own part of the hierarchy.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from unitvisor.cgroups import cgroup1, cgroup2
from unitvisor.cgroups.errors import CgroupSignalError, _io_guard

log = logging.getLogger(__name__)

PROC_SELF_CGROUP = Path("/proc/self/cgroup")
OWN_CGROUP_NAME = "unitvisor_self"

_PID_PATTERN = re.compile(r"[+-]?\d+")


def _own_cgroup_lines() -> list[str]:
    return PROC_SELF_CGROUP.read_text().split("\n")


def use_v2(cgroup_path: str | os.PathLike[str]) -> bool:
    """Tell whether the cgroup offers v2 freezing."""
    freeze_file = Path(cgroup_path) / "cgroup.freeze"
    exists = freeze_file.exists()
    log.debug("%s exists: %s", freeze_file, exists)
    return exists


def move_to_own_cgroup(base_path: str | os.PathLike[str]) -> None:
    """Move this process into a manager cgroup of its own when v2 is in use.

    cgroup v2 discourages processes in cgroups that are not leaves.
    """
    log.debug("Move to own manager cgroup")
    v2path = get_own_cgroup_v2(_own_cgroup_lines())
    log.debug("V2 path: %s", v2path)
    if v2path is None:
        return
    absolute_v2path = Path(base_path) / "unified" / v2path
    manager_cgroup = absolute_v2path / f"unitvisor_{os.getpid()}" / OWN_CGROUP_NAME
    log.debug("Manager path: %s", manager_cgroup)
    if not manager_cgroup.exists():
        with _io_guard(manager_cgroup):
            manager_cgroup.mkdir(parents=True, exist_ok=True)
    move_self_to_cgroup(manager_cgroup)


def move_out_of_own_cgroup(base_path: str | os.PathLike[str]) -> None:
    """Move this process to the parent cgroup and remove the managed cgroups."""
    v2path = get_own_cgroup_v2(_own_cgroup_lines())
    if v2path is None:
        return
    absolute_v2path = Path(base_path) / v2path
    parent_group = absolute_v2path.parent
    log.debug("Move to parent cgroup: %s", parent_group)
    move_self_to_cgroup(parent_group)

    self_cgroup = absolute_v2path / OWN_CGROUP_NAME
    log.debug("Remove manager cgroup: %s", self_cgroup)
    with _io_guard(self_cgroup):
        os.rmdir(self_cgroup)

    log.debug("Remove managed cgroup: %s", absolute_v2path)
    with _io_guard(absolute_v2path):
        os.rmdir(absolute_v2path)


def get_own_freezer(base_path: str | os.PathLike[str]) -> Path:
    """Return (and create) the cgroup to put services under.

    The v2 group under base_path/unified is preferred when it can be frozen;
    otherwise the v1 group under base_path/freezer is used.
    """
    lines = _own_cgroup_lines()
    base = Path(base_path)

    v1_full_path = base / "freezer" / get_own_cgroup_v1(lines)
    log.debug("v1 cgroup: %s", v1_full_path)

    cgroup_path = v1_full_path
    v2path = get_own_cgroup_v2(lines)
    if v2path is not None:
        v2_full_path = base / "unified" / v2path
        log.debug("v2 cgroup: %s", v2_full_path)
        if (v2_full_path / "cgroup.freeze").exists():
            cgroup_path = v2_full_path

    log.debug("Own cgroup: %s", cgroup_path)
    with _io_guard(cgroup_path):
        cgroup_path.mkdir(parents=True, exist_ok=True)
    return cgroup_path


def get_own_cgroup_v2(proc_cgroup_content: Iterable[str]) -> Path | None:
    """Find the v2 cgroup in lines of /proc/self/cgroup ("0::/path").

    The path is relative to the cgroup mount point. A trailing manager cgroup
    name is dropped so the managed cgroup is returned.
    """
    for line in proc_cgroup_content:
        if line.startswith("0::"):
            path = line[3:]
            while path.endswith(OWN_CGROUP_NAME):
                path = path[: -len(OWN_CGROUP_NAME)]
            return Path(path[1:])
    return None


def get_own_cgroup_v1(proc_cgroup_content: Iterable[str]) -> Path:
    """Find the v1 freezer cgroup in lines of /proc/self/cgroup.

    Without a freezer entry, the longest path of any controller is used, as
    v1 hierarchies by convention share their directory trees.
    """
    freezer_path: Path | None = None
    longest_path = "/"
    for line in proc_cgroup_content:
        triple = line.split(":")
        if len(triple) != 3:
            continue
        _id, controller, path = triple
        if controller == "freezer":
            freezer_path = Path(path[1:])
        if len(path) > len(longest_path):
            longest_path = path
    return freezer_path if freezer_path is not None else Path(longest_path[1:])


def move_pid_to_cgroup(cgroup_path: str | os.PathLike[str], pid: int) -> None:
    """Move the process pid into the cgroup."""
    if use_v2(cgroup_path):
        cgroup2.move_pid_to_cgroup(cgroup_path, pid)
    else:
        cgroup1.move_pid_to_cgroup(cgroup_path, pid)


def move_self_to_cgroup(cgroup_path: str | os.PathLike[str]) -> None:
    """Move this process into the cgroup."""
    if use_v2(cgroup_path):
        cgroup2.move_self_to_cgroup(cgroup_path)
    else:
        cgroup1.move_self_to_cgroup(cgroup_path)


def get_all_procs(cgroup_path: str | os.PathLike[str]) -> list[int]:
    """Return the pids currently in the cgroup."""
    procs = Path(cgroup_path) / "cgroup.procs"
    with _io_guard(procs):
        content = procs.read_text()
    pids: list[int] = []
    for pid_str in content.split("\n"):
        if not pid_str:
            break
        if _PID_PATTERN.fullmatch(pid_str):
            pids.append(int(pid_str))
    return pids


def freeze_kill_thaw_cgroup(cgroup_path: str | os.PathLike[str], sig: int) -> None:
    """Freeze the cgroup, signal every process in it, then thaw it.

    Freezing first makes sure no process escapes by forking during the kill.
    """
    backend = cgroup2 if use_v2(cgroup_path) else cgroup1
    log.debug("Freeze cgroup: %s", cgroup_path)
    backend.freeze(cgroup_path)
    backend.wait_frozen(cgroup_path)
    log.debug("Kill cgroup: %s", cgroup_path)
    kill_cgroup(cgroup_path, sig)
    log.debug("Thaw cgroup: %s", cgroup_path)
    backend.thaw(cgroup_path)


def remove_cgroup(cgroup_path: str | os.PathLike[str]) -> None:
    """Remove the (empty) cgroup directory."""
    with _io_guard(cgroup_path):
        os.rmdir(cgroup_path)


def kill_cgroup(cgroup_path: str | os.PathLike[str], sig: int) -> None:
    """Send sig to every process in the cgroup.

    Freeze the cgroup first, or make sure otherwise that no new processes
    appear while killing.
    """
    for pid in get_all_procs(cgroup_path):
        try:
            os.kill(pid, sig)
        except OSError as err:
            raise CgroupSignalError(err) from err


def wait_frozen(cgroup_path: str | os.PathLike[str]) -> None:
    """Wait until the cgroup is frozen."""
    if use_v2(cgroup_path):
        cgroup2.wait_frozen(cgroup_path)
    else:
        cgroup1.wait_frozen(cgroup_path)


def freeze(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to freeze."""
    if use_v2(cgroup_path):
        cgroup2.freeze(cgroup_path)
    else:
        cgroup1.freeze(cgroup_path)


def thaw(cgroup_path: str | os.PathLike[str]) -> None:
    """Ask the cgroup to thaw."""
    if use_v2(cgroup_path):
        cgroup2.thaw(cgroup_path)
    else:
        cgroup1.thaw(cgroup_path)