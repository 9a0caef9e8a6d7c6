import logging
from dataclasses import dataclass
from enum import Enum


class ShowOutput(Enum):
    ON_SUCCESS = "on-success"
    ON_FAILURE = "on-failure"
    ALWAYS = "always"
    NEVER = "never"

    def should_show(self, success: bool) -> bool:
        match self:
            case ShowOutput.ALWAYS:
                return True
            case ShowOutput.ON_SUCCESS:
                return success
            case ShowOutput.ON_FAILURE:
                return not success
            case ShowOutput.NEVER:
                return False

    def __str__(self) -> str:
        return self.value


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> int:
        return getattr(logging, self.name)

    def __str__(self) -> str:
        return self.value


DEFAULT_RUNS = 100


@dataclass(frozen=True)
class Settings:
    runs: int = DEFAULT_RUNS
    show_output: ShowOutput = ShowOutput.NEVER
    log_level: LogLevel = LogLevel.INFO


@dataclass(frozen=True)
class PartialSettings:
    """Values found in one source; None means the source did not set it."""

    runs: int | None = None
    show_output: ShowOutput | None = None
    log_level: LogLevel | None = None


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
