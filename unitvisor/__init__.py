"""Building blocks of a small service manager: config, fd store, notifications, cgroups."""

__version__ = "0.1.0"