"""Configuration management using pydantic-settings."""

import logging
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import Field, StrictInt, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

APP_NAME = "trash-expiry"
CONFIG_FILENAME = "config.toml"
ENV_PREFIX = "TRASH_EXPIRY_"
DESCRIPTOR_EXTENSION = "trashinfo"
DEFAULT_DELETE_AFTER_DAYS = 60
DEFAULT_WARN_AFTER_DAYS = 50
POLICY_KEYS = ("delete_after_days", "warn_after_days")

_policy_value = TypeAdapter(StrictInt)


def xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME") or "~/.local/share").expanduser()


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME") or "~/.config").expanduser()


def xdg_config_dirs() -> list[Path]:
    """System config dirs, most-preferred first (XDG order)."""
    raw = os.environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"
    # XDG only allows absolute paths here
    return [Path(p) for p in raw.split(os.pathsep) if p and os.path.isabs(p)]


class PathsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    trash: Path = Field(default_factory=lambda: xdg_data_home() / "Trash")

    @field_validator("trash", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @property
    def info(self) -> Path:
        return self.trash / "info"

    @property
    def files(self) -> Path:
        return self.trash / "files"


class PolicyConfig(BaseSettings):
    """Warn and delete thresholds, in days since deletion.

    ``warn_after_days <= delete_after_days`` is expected but not enforced;
    with an inverted pair items go straight from fresh to expired.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    delete_after_days: int = DEFAULT_DELETE_AFTER_DAYS
    warn_after_days: int = DEFAULT_WARN_AFTER_DAYS


def config_search_path(config_path: Path | None = None) -> list[Path]:
    """Candidate config files, least-preferred first.

    System dirs come first (reversed so the most-preferred is last), then
    the user's config home, then an explicit ``--config`` file.
    """
    dirs = [*reversed(xdg_config_dirs()), xdg_config_home()]
    paths = [d / APP_NAME / CONFIG_FILENAME for d in dirs]
    if config_path is not None:
        paths.append(config_path)
    return paths


def read_overrides(path: Path) -> dict[str, int]:
    """Read valid policy keys from one TOML file.

    Invalid values are reported and dropped; a file that cannot be read or
    parsed contributes nothing.
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except FileNotFoundError:
        logger.debug(f"No config file at {path}")
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring config file {path}: {e}")
        return {}

    logger.info(f"Loading config: {path}")
    overrides: dict[str, int] = {}
    for key, value in data.items():
        if key not in POLICY_KEYS:
            logger.debug(f"Ignoring unknown config key {key!r} in {path}")
            continue
        try:
            overrides[key] = _policy_value.validate_python(value)
        except ValidationError:
            logger.warning(f"Invalid integer for {key} in {path}: {value!r}")
    return overrides


def load_policy(search_path: Iterable[Path] | None = None) -> PolicyConfig:
    """Layer config files over the defaults, key by key.

    Environment variables (``TRASH_EXPIRY_DELETE_AFTER_DAYS``,
    ``TRASH_EXPIRY_WARN_AFTER_DAYS``) replace the defaults; any value from a
    config file wins over them.
    """
    if search_path is None:
        search_path = config_search_path()

    merged: dict[str, int] = {}
    for path in search_path:
        merged.update(read_overrides(path))

    return PolicyConfig(**merged)
