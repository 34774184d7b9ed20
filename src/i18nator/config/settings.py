"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    LanguageConfig,
    ManagerConfiguration,
    TranslatorConfig,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULT_CONFIG_FILE = CONFIG_DIRECTORY / "languages.yaml"
DEFAULT_BASE_DIR = Path("pkg") / "translates" / "localize" / "i18n"

CONFIG_ENV_VAR = "I18NATOR_CONFIG"
BASE_DIR_ENV_VAR = "I18NATOR_BASE_DIR"

_LOGGER = logging.getLogger(__name__)


class SetupError(RuntimeError):
    """Raised when the catalogue storage location cannot be prepared."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings threaded through the store, engine and interfaces."""

    base_dir: Path
    configuration: ManagerConfiguration

    @property
    def languages(self) -> tuple[LanguageConfig, ...]:
        return self.configuration.ordered_languages

    @property
    def reference(self) -> LanguageConfig:
        return self.configuration.reference


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def load_configuration(path: str | os.PathLike[str] | None = None) -> ManagerConfiguration:
    """Load the language configuration from ``path``, the environment or the default."""

    source = path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE
    config_file = Path(source)
    if not config_file.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    try:
        raw_config = _load_yaml(config_file)
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Configuration file {config_file} is not valid YAML: {error}") from error

    try:
        configuration = ManagerConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed for {config_file}: {error}") from error

    _LOGGER.debug(
        "Loaded %d language(s) from %s", len(configuration.languages), config_file
    )
    return configuration


def resolve_base_dir(
    configuration: ManagerConfiguration,
    base_dir: str | os.PathLike[str] | None = None,
    *,
    cwd: Path | None = None,
) -> Path:
    """Pick the catalogue directory: argument, environment, config file, default."""

    working_directory = cwd or Path.cwd()
    candidate = (
        base_dir
        or os.getenv(BASE_DIR_ENV_VAR)
        or configuration.base_dir
        or DEFAULT_BASE_DIR
    )
    resolved = Path(candidate).expanduser()
    if not resolved.is_absolute():
        resolved = working_directory / resolved
    return resolved


def resolve_settings(
    configuration: ManagerConfiguration | None = None,
    base_dir: str | os.PathLike[str] | None = None,
) -> Settings:
    """Combine configuration and base directory into immutable runtime settings."""

    configuration = configuration or load_configuration()
    return Settings(
        base_dir=resolve_base_dir(configuration, base_dir),
        configuration=configuration,
    )


def ensure_base_directory(settings: Settings) -> Path:
    """Create the catalogue directory when missing and confirm it is usable."""

    base_dir = settings.base_dir
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise SetupError(f"failed to create directory {base_dir}: {error}") from error

    if not base_dir.is_dir():
        raise SetupError(f"{base_dir} exists but is not a directory")
    if not os.access(base_dir, os.W_OK):
        raise SetupError(f"{base_dir} is not writable")
    return base_dir


__all__ = [
    "BASE_DIR_ENV_VAR",
    "CONFIG_DIRECTORY",
    "CONFIG_ENV_VAR",
    "ConfigurationError",
    "DEFAULT_BASE_DIR",
    "DEFAULT_CONFIG_FILE",
    "LanguageConfig",
    "ManagerConfiguration",
    "Settings",
    "SetupError",
    "TranslatorConfig",
    "ensure_base_directory",
    "load_configuration",
    "resolve_base_dir",
    "resolve_settings",
]
