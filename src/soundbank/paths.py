"""Shared filesystem path helpers for the sound bank."""
from __future__ import annotations

import os
import sys
from pathlib import Path

from platformdirs import PlatformDirs

from .errors import ConfigDirUnavailable

APP_ID = "com.innoinva.auditory-training-app"
BANK_SEGMENTS = ("AuditoryTraining", "SoundBank")
CONFIG_DIR_ENV = "SOUNDBANK_CONFIG_DIR"


def app_config_dir(app_id: str = APP_ID) -> Path:
    """Return the per-user configuration directory for the application.

    ``SOUNDBANK_CONFIG_DIR`` takes precedence over the platform lookup.
    """
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    if not app_id:
        raise ConfigDirUnavailable("Application identifier must not be empty")
    dirs = PlatformDirs(appname=app_id, appauthor=False, roaming=sys.platform == "win32")
    try:
        path = dirs.user_config_path
    except (KeyError, OSError, RuntimeError) as exc:
        raise ConfigDirUnavailable(f"Unable to determine user config directory: {exc}") from exc
    if not path.is_absolute():
        raise ConfigDirUnavailable(f"User config directory is not absolute: {path}")
    return path


def bank_root_from(config_dir: Path) -> Path:
    """Append the fixed bank segments to ``config_dir``."""
    return config_dir.joinpath(*BANK_SEGMENTS)


def default_config_file() -> Path:
    """Return the default YAML configuration location."""
    return app_config_dir() / "config.yaml"


__all__ = [
    "APP_ID",
    "BANK_SEGMENTS",
    "CONFIG_DIR_ENV",
    "app_config_dir",
    "bank_root_from",
    "default_config_file",
]
