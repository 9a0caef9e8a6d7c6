from .loader import LOG_LEVEL_ENV, load_settings, log_level_from_env, resolve_settings
from .types import (
    DEFAULT_RUNS,
    ConfigError,
    LogLevel,
    PartialSettings,
    Settings,
    ShowOutput,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_settings",
    "log_level_from_env",
    "resolve_settings",
    "LOG_LEVEL_ENV",
    "DEFAULT_RUNS",
    "Settings",
    "PartialSettings",
    "ShowOutput",
    "LogLevel",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
