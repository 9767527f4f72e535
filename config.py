"""Settings: defaults, optional TOML config file, environment overrides."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import storage
from errors import ConfigError

HOME = Path.home()
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = Path(XDG_CONFIG_HOME) if XDG_CONFIG_HOME else HOME / ".config"
CONFIG_DIR = CONFIG_HOME / "tasklists"
CONFIG_TOML = CONFIG_DIR / "config.toml"
LOG_PATH = CONFIG_DIR / "tasklists.log"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    data_path: Path = storage.DEFAULT_PATH
    storage_key: str = storage.DEFAULT_KEY
    log_level: str = "INFO"
    log_path: Path = LOG_PATH
    startup_delay: tuple[float, float] = field(default=(0.0, 0.0))


def _path(value, key: str) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a path string")
    return Path(value).expanduser()


def _log_level(value, key: str) -> str:
    if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
        raise ConfigError(f"{key} must be one of {', '.join(LOG_LEVELS)}")
    return value.upper()


def _delay(value) -> tuple[float, float]:
    if (not isinstance(value, list) or len(value) != 2
            or not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in value)):
        raise ConfigError("startup_delay must be a [min, max] pair of seconds")
    low, high = float(value[0]), float(value[1])
    if low < 0 or high < low:
        raise ConfigError("startup_delay needs 0 <= min <= max")
    return low, high


def load_config(path: Path = CONFIG_TOML, environ=None) -> Config:
    """Read the optional config file, then apply TASKLISTS_* environment overrides.

    Unknown keys are ignored; a wrongly-typed value raises ConfigError.
    """
    environ = os.environ if environ is None else environ
    cfg = Config()

    path = Path(path)
    if path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"cannot read {path}: {e}") from e

        if "data_path" in data:
            cfg.data_path = _path(data["data_path"], "data_path")
        if "storage_key" in data:
            key = data["storage_key"]
            if not isinstance(key, str) or not key:
                raise ConfigError("storage_key must be a non-empty string")
            cfg.storage_key = key
        if "log_level" in data:
            cfg.log_level = _log_level(data["log_level"], "log_level")
        if "log_path" in data:
            cfg.log_path = _path(data["log_path"], "log_path")
        if "startup_delay" in data:
            cfg.startup_delay = _delay(data["startup_delay"])

    if environ.get("TASKLISTS_DATA"):
        cfg.data_path = _path(environ["TASKLISTS_DATA"], "TASKLISTS_DATA")
    if environ.get("TASKLISTS_LOG_LEVEL"):
        cfg.log_level = _log_level(environ["TASKLISTS_LOG_LEVEL"], "TASKLISTS_LOG_LEVEL")
    return cfg
