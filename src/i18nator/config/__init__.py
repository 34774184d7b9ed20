"""Language configuration loading and validation."""

from .schema import ConfigurationError, LanguageConfig, ManagerConfiguration, TranslatorConfig
from .settings import Settings, SetupError, ensure_base_directory, load_configuration, resolve_settings

__all__ = [
    "ConfigurationError",
    "LanguageConfig",
    "ManagerConfiguration",
    "Settings",
    "SetupError",
    "TranslatorConfig",
    "ensure_base_directory",
    "load_configuration",
    "resolve_settings",
]
