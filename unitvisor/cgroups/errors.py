"""Errors raised while managing cgroups."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager


class CgroupError(Exception):
    """Base class of all cgroup errors."""


class CgroupIOError(CgroupError):
    """Reading or writing a cgroup file or directory failed."""

    def __init__(self, error: OSError, path: str | os.PathLike[str]) -> None:
        self.error = error
        self.path = os.fspath(path)
        super().__init__(f"io error: {error}, file: {self.path}")


class CgroupSignalError(CgroupError):
    """Sending a signal to a process of a cgroup failed."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"signal error: {error}")


class CgroupNotMountedError(CgroupError):
    """The freezer cgroup hierarchy is not mounted."""

    def __init__(self) -> None:
        super().__init__("The freezer cgroup was not mounted")


@contextmanager
def _io_guard(path: str | os.PathLike[str]) -> Iterator[None]:
    """Turn OSError raised inside the block into CgroupIOError for path."""
    try:
        yield
    except CgroupError:
        raise
    except OSError as err:
        raise CgroupIOError(err, path) from err