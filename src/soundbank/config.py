"""Configuration loading utilities for the sound bank."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigDirUnavailable
from .paths import APP_ID, default_config_file


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")
    renderer: Literal["json", "console"] = Field(default="json", description="Log line format on stderr")

    def normalized_level(self) -> str:
        return self.level.upper()


class BankConfig(BaseModel):
    app_id: str = Field(default=APP_ID, description="Application identifier used for the config directory")
    config_dir: Optional[Path] = Field(
        default=None,
        description="Override for the platform user config directory",
    )

    @field_validator("app_id")
    @classmethod
    def _validate_app_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("app_id must not be empty")
        return value

    @field_validator("config_dir")
    @classmethod
    def _validate_config_dir(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        return value.expanduser().resolve(strict=False)


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    bank: BankConfig = Field(default_factory=BankConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".soundbank" / "config.yaml"
    try:
        fallback = default_config_file()
    except ConfigDirUnavailable:
        return
    yield fallback


def load_config(path: Optional[Path] = None) -> AppConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                try:
                    data = yaml.safe_load(handle) or {}
                except yaml.YAMLError as exc:
                    raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
