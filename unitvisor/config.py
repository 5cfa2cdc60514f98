"""Load the service manager configuration from JSON, TOML and the environment.

Settings come from ``unitvisor_config.json`` or ``unitvisor_config.toml`` in
the configuration directory, and environment variables that start with
``UNITVISOR_`` override them.
"""

from __future__ import annotations

import json
import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

JSON_FILE_NAME = "unitvisor_config.json"
TOML_FILE_NAME = "unitvisor_config.toml"
ENV_PREFIX = "unitvisor"

DEFAULT_CONFIG_DIR = Path("./config")
DEFAULT_LOG_DIR = Path("./logs")
DEFAULT_UNIT_DIR = Path("./unitfiles")
DEFAULT_NOTIFICATIONS_DIR = Path("./notifications")
DEFAULT_TARGET_UNIT = "default.target"

# Document key -> (setting name, accepted type)
_JSON_KEYS: dict[str, tuple[str, type]] = {
    "logging_dir": ("logging.dir", str),
    "log_to_disk": ("logging.to_disk", bool),
    "log_to_stdout": ("logging.to_stdout", bool),
    "target_unit": ("target.unit", str),
    "selfpath": ("selfpath", str),
    "notifications_dir": ("notifications.dir", str),
}

_TOML_KEYS: dict[str, tuple[str, type]] = {
    "logging_dir": ("logging.dir", str),
    "log_to_disk": ("logging.to.disk", bool),
    "log_to_stdout": ("logging.to.stdout", bool),
    "target_unit": ("target.unit", str),
    "selfpath": ("selfpath", str),
    "notifications_dir": ("notifications.dir", str),
}


@dataclass
class LoggingConfig:
    """Where log output goes."""

    log_to_stdout: bool = True
    log_to_disk: bool = False
    log_dir: Path = DEFAULT_LOG_DIR


@dataclass
class Config:
    """General settings of the service manager."""

    unit_dirs: list[Path] = field(default_factory=lambda: [DEFAULT_UNIT_DIR])
    target_unit: str = DEFAULT_TARGET_UNIT
    notification_sockets_dir: Path = DEFAULT_NOTIFICATIONS_DIR
    self_path: Path = field(default_factory=lambda: Path(sys.executable))


class ConfigError(Exception):
    """The configuration could not be loaded.

    The logging configuration that was still worked out is kept on the
    exception so the caller can report the problem.
    """

    def __init__(self, message: str, logging_config: LoggingConfig) -> None:
        super().__init__(message)
        self.message = message
        self.logging_config = logging_config


def _apply_document(
    document: Any, keys: dict[str, tuple[str, type]], settings: dict[str, Any]
) -> None:
    if not isinstance(document, dict):
        return
    unit_dirs = document.get("unit_dirs")
    if isinstance(unit_dirs, list):
        settings["unit.dirs"] = [d if isinstance(d, str) else None for d in unit_dirs]
    for key, (setting, kind) in keys.items():
        value = document.get(key)
        if isinstance(value, kind):
            settings[setting] = value


def _load_json(path: Path, settings: dict[str, Any]) -> str | None:
    try:
        with path.open("r", encoding="utf-8") as handle:
            document = json.load(handle)
    except (OSError, ValueError) as err:
        return f"Error while decoding config json: {err}"
    _apply_document(document, _JSON_KEYS, settings)
    return None


def _load_toml(path: Path, settings: dict[str, Any]) -> str | None:
    try:
        with path.open("rb") as handle:
            raw = handle.read()
    except OSError as err:
        return f"Error while opening config file: {err}"
    try:
        document = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as err:
        return f"Error while decoding config toml: {err}"
    _apply_document(document, _TOML_KEYS, settings)
    return None


def _apply_environment(settings: dict[str, Any]) -> None:
    for key, value in os.environ.items():
        parts = [part.lower() for part in key.split("_")]
        if parts[0] == ENV_PREFIX:
            settings[".".join(parts[1:])] = value


def _unit_dirs(value: Any) -> list[Path]:
    if value is None:
        return [DEFAULT_UNIT_DIR]
    if isinstance(value, str):
        return [Path(value)]
    if isinstance(value, list):
        return [Path(d) for d in value if d and Path(d).exists()]
    return []


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return value if isinstance(value, bool) else False


def load_config(config_path: Path | str | None = None) -> tuple[LoggingConfig, Config]:
    """Load the logging and general configuration.

    Raises ConfigError if a config file is broken, if both a JSON and a TOML
    file exist, or if an explicit directory holds no config file at all.
    """
    settings: dict[str, Any] = {}
    config_dir = DEFAULT_CONFIG_DIR if config_path is None else Path(config_path)
    json_path = config_dir / JSON_FILE_NAME
    toml_path = config_dir / TOML_FILE_NAME

    json_exists = json_path.exists()
    json_error = _load_json(json_path, settings) if json_exists else None
    toml_exists = toml_path.exists()
    toml_error = _load_toml(toml_path, settings) if toml_exists else None

    _apply_environment(settings)

    log_dir = settings.get("logging.dir")
    logging_config = LoggingConfig(
        log_to_stdout=_flag(settings.get("logging.to_stdout"), True),
        log_to_disk=_flag(settings.get("logging.to_disk"), False),
        log_dir=Path(log_dir) if isinstance(log_dir, str) else DEFAULT_LOG_DIR,
    )

    notifications_dir = settings.get("notifications.dir")
    target_unit = settings.get("target.unit")
    self_path = settings.get("selfpath")
    config = Config(
        unit_dirs=_unit_dirs(settings.get("unit.dirs")),
        target_unit=target_unit if isinstance(target_unit, str) else DEFAULT_TARGET_UNIT,
        notification_sockets_dir=(
            Path(notifications_dir)
            if isinstance(notifications_dir, str)
            else DEFAULT_NOTIFICATIONS_DIR
        ),
        self_path=Path(self_path) if isinstance(self_path, str) else Path(sys.executable),
    )

    if json_exists:
        if toml_exists:
            raise ConfigError("Found both json and toml conf!", logging_config)
        if json_error is not None:
            raise ConfigError(json_error, logging_config)
    elif toml_exists:
        if toml_error is not None:
            raise ConfigError(toml_error, logging_config)
    elif toml_path != DEFAULT_CONFIG_DIR / TOML_FILE_NAME:
        raise ConfigError("No config file was loaded", logging_config)

    return logging_config, config