"""Wait until a name has been acquired on the D-Bus.

Services of type dbus are considered started once they own a given bus name.
This build carries no D-Bus client, so every wait fails with
DbusUnsupportedError.
"""

from __future__ import annotations

import enum

_UNSUPPORTED_MESSAGE = "Dbus is not supported in this build"


class WaitResult(enum.Enum):
    """Outcome of waiting for a bus name."""

    OK = "ok"
    TIMEDOUT = "timedout"


class DbusUnsupportedError(RuntimeError):
    """Raised because waiting on the bus is not available in this build."""


def wait_for_name_system_bus(name: str, timeout: float | None = None) -> WaitResult:
    """Wait for name to appear on the system bus, at most timeout seconds."""
    raise DbusUnsupportedError(_UNSUPPORTED_MESSAGE)


def wait_for_name_session_bus(name: str, timeout: float | None = None) -> WaitResult:
    """Wait for name to appear on the session bus, at most timeout seconds."""
    raise DbusUnsupportedError(_UNSUPPORTED_MESSAGE)