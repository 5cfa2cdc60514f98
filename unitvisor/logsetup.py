"""Configure process-wide logging from a LoggingConfig."""

from __future__ import annotations

import logging
import sys

from unitvisor.config import LoggingConfig

_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d][%H:%M:%S"


class _StdoutHandler(logging.StreamHandler):
    """The handler this module installs on the root logger."""


def setup_logging(conf: LoggingConfig) -> None:
    """Install the log handlers that conf asks for on the root logger.

    Calling it again replaces the handlers installed earlier. Logging to disk
    is not offered; pipe the stdout logs elsewhere instead.
    """
    if conf.log_to_disk:
        raise ValueError(
            "Logging to disk is currently not supported. "
            "Pipe the stdout logs to your preferred logging solution"
        )

    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _StdoutHandler)]:
        root.removeHandler(handler)
    root.setLevel(logging.DEBUG)

    if conf.log_to_stdout:
        handler = _StdoutHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)