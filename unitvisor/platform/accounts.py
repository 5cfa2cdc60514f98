"""Look up group and user database entries by name."""

from __future__ import annotations

import grp
import pwd
from dataclasses import dataclass


@dataclass(frozen=True)
class GroupEntry:
    """A group database entry."""

    name: str
    pw: bytes | None
    gid: int


@dataclass(frozen=True)
class PwEntry:
    """A user database entry."""

    name: str
    pw: bytes | None
    uid: int
    gid: int


def _password(value: str | None) -> bytes | None:
    return None if value is None else value.encode("utf-8", "surrogateescape")


def getgrnam_r(groupname: str) -> GroupEntry:
    """Return the group named groupname; raise KeyError if there is none."""
    try:
        entry = grp.getgrnam(groupname)
    except KeyError:
        raise KeyError(f"No entry found for groupname: {groupname}") from None
    return GroupEntry(name=groupname, pw=_password(entry.gr_passwd), gid=entry.gr_gid)


def getpwnam_r(username: str) -> PwEntry:
    """Return the user named username; raise KeyError if there is none."""
    try:
        entry = pwd.getpwnam(username)
    except KeyError:
        raise KeyError(f"No entry found for username: {username}") from None
    return PwEntry(
        name=username,
        pw=_password(entry.pw_passwd),
        uid=entry.pw_uid,
        gid=entry.pw_gid,
    )