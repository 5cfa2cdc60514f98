"""Parse sd_notify style messages that services send to the service manager.

Messages arrive as newline-terminated lines of the form NAME=VALUE. Bytes
read from a notification socket are appended to a buffer, and every complete
line in it is applied to the service's notification state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


@dataclass
class NotificationState:
    """What a service has told the service manager so far."""

    status_msgs: list[str] = field(default_factory=list)
    signaled_ready: bool = False
    notifications_buffer: str = ""


def handle_notification_message(msg: str, state: NotificationState, name: str) -> None:
    """Apply one notification line to state.

    STATUS=<text> records a status message (the text up to any further "="),
    READY=... marks the service as ready, and anything else is logged and
    ignored. A bare STATUS without a value raises ValueError.
    """
    parts = msg.split("=")
    key = parts[0]
    if key == "STATUS":
        if len(parts) < 2:
            raise ValueError(f"STATUS notification without a value from service {name}")
        state.status_msgs.append(parts[1])
        log.debug(
            "New status message pushed from service %s: %s", name, state.status_msgs[-1]
        )
    elif key == "READY":
        state.signaled_ready = True
    else:
        log.warning("Unknown notification name: %s", key)


def handle_notifications_from_buffer(state: NotificationState, name: str) -> None:
    """Apply every complete line in the buffer and keep the unfinished rest."""
    while "\n" in state.notifications_buffer:
        line, _, rest = state.notifications_buffer.partition("\n")
        state.notifications_buffer = rest
        handle_notification_message(line, state, name)