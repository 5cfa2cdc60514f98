# unitvisor

Building blocks of a small, systemd-like service manager, as a plain Python
library with no third-party dependencies. Everything here is Unix-only, and
the cgroup functions need root (and a mounted cgroup hierarchy) to do real
work.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Modules

### `unitvisor.config`

`load_config(config_path=None)` reads `unitvisor_config.json` or
`unitvisor_config.toml` from `config_path` (default `./config`) and returns
a `(LoggingConfig, Config)` pair.

Recognised keys in the file: `unit_dirs` (list of directories; only those
that exist are kept), `logging_dir`, `log_to_disk`, `log_to_stdout`,
`target_unit`, `selfpath` and `notifications_dir`.

Environment variables starting with `UNITVISOR_` override the file: the
rest of the name is lower-cased and its `_` become `.`, so
`UNITVISOR_TARGET_UNIT=multi.target` sets the target unit and
`UNITVISOR_NOTIFICATIONS_DIR=/run/x` the notification socket directory.

Defaults: unit directory `./unitfiles`, target `default.target`,
notification directory `./notifications`, log directory `./logs`, logging
to stdout on and to disk off, and the running Python interpreter as
`self_path`.

`ConfigError` is raised when a file cannot be read or parsed, when both a
JSON and a TOML file exist, or when an explicitly given directory holds no
config file. The exception carries the `logging_config` that was still
worked out.

### `unitvisor.logsetup`

`setup_logging(conf)` installs a timestamped stdout handler on the root
logger when `conf.log_to_stdout` is set; calling it again replaces that
handler. `log_to_disk` is not supported and raises `ValueError`.

### `unitvisor.fd_store`

`FDStore` keeps open file descriptors:

- socket-unit descriptors by unit name: `insert_global` (returns the new
  entries back if the name is taken), `get_global`, `remove_global`,
  `global_fds_to_ids`;
- descriptors services asked to keep, by service name and fd name:
  `insert_service_stored` (appends), `get_service_stored`,
  `remove_service_stored`.

### `unitvisor.notifications`

`NotificationState` holds a service's `status_msgs`, `signaled_ready` flag
and unfinished `notifications_buffer`.
`handle_notifications_from_buffer(state, name)` applies every complete line
of the buffer; `handle_notification_message(msg, state, name)` applies one
line: `STATUS=<text>` records a status message, `READY=...` marks the
service ready, other names are logged and ignored.

### `unitvisor.cgroups`

- `unitvisor.cgroups.manager` picks v2 when a `cgroup.freeze` file is
  present and v1 otherwise: `get_own_freezer`, `get_own_cgroup_v1`,
  `get_own_cgroup_v2`, `move_to_own_cgroup`, `move_out_of_own_cgroup`,
  `move_pid_to_cgroup`, `move_self_to_cgroup`, `get_all_procs`, `freeze`,
  `wait_frozen`, `thaw`, `kill_cgroup`, `freeze_kill_thaw_cgroup` and
  `remove_cgroup`.
- `unitvisor.cgroups.cgroup1` and `unitvisor.cgroups.cgroup2` do the work
  for each version; `cgroup2` can also list, enable and disable controllers.
- `unitvisor.cgroups.errors` defines `CgroupError` and its subclasses
  `CgroupIOError`, `CgroupSignalError` and `CgroupNotMountedError`.

### `unitvisor.platform`

- `unitvisor.platform.accounts`: `getgrnam_r(name)` returns a `GroupEntry`,
  `getpwnam_r(name)` a `PwEntry`; unknown names raise `KeyError`.
- `unitvisor.platform.sockets`: `make_seqpacket_socket(path)` returns a
  listening `AF_UNIX`/`SOCK_SEQPACKET` socket bound to `path`.

### `unitvisor.dbus_wait`

`wait_for_name_system_bus` and `wait_for_name_session_bus` exist for
services of type dbus, but this package has no bus client: both always
raise `DbusUnsupportedError`.

## What this package does not do

It is a library of parts, not a running service manager. It has no
command-line tool, no control socket or request server, no unit-file
loading or dependency handling, no helper for starting services with
dropped privileges, and no event descriptors for waking select loops.