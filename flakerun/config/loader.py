import json
import logging
import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, TypeVar

import yaml

from .types import (
    ConfigError,
    LogLevel,
    PartialSettings,
    Settings,
    ShowOutput,
    UnsupportedConfigFormatError,
)

LOG_LEVEL_ENV = "FLAKERUN_LOG_LEVEL"

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)


def load_settings(path: str | Path) -> PartialSettings:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_settings(pure_path, raw_file)


def log_level_from_env(environ: Mapping[str, str] | None = None) -> LogLevel | None:
    env = os.environ if environ is None else environ
    raw = env.get(LOG_LEVEL_ENV)
    if raw is None or len(raw.strip()) < 1:
        return None

    return parse_choice(LogLevel, raw.strip().lower(), LOG_LEVEL_ENV)


def resolve_settings(
    *,
    cli: PartialSettings,
    env_log_level: LogLevel | None = None,
    file: PartialSettings | None = None,
) -> Settings:
    """
    Merge settings sources: command line, then environment, then settings file.
    Only the log level can come from the environment.
    """
    file = file or PartialSettings()
    defaults = Settings()

    runs = _first(cli.runs, file.runs, defaults.runs)
    show_output = _first(cli.show_output, file.show_output, defaults.show_output)
    log_level = _first(
        cli.log_level, env_log_level, file.log_level, defaults.log_level
    )

    return Settings(runs=runs, show_output=show_output, log_level=log_level)


def parse_choice(enum_cls: type[_E], value: str, where: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(
            f"{where}: invalid value '{value}', expected one of: {choices}"
        ) from None


def _first(*values):
    for value in values:
        if value is not None:
            return value
    raise AssertionError("Unreachable")


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    # An empty YAML file loads as None.
    if raw_file is None:
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: parsed succesfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_settings(path: Path, raw: Mapping[str, Any]) -> PartialSettings:
    keys = {"runs", "show_output", "log_level"}
    runs = None
    show_output = None
    log_level = None

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"{path}: Can't process: {field}")

    if "runs" in raw:
        # bool is an int subclass
        if not isinstance(raw["runs"], int) or isinstance(raw["runs"], bool):
            raise ConfigError(f"{path}: 'runs' should be an integer")

        if raw["runs"] < 0:
            raise ConfigError(f"{path}: 'runs' can't be negative")

        runs = raw["runs"]

    if "show_output" in raw:
        if not isinstance(raw["show_output"], str):
            raise ConfigError(f"{path}: 'show_output' should be a string")

        show_output = parse_choice(
            ShowOutput, raw["show_output"].strip().lower(), f"{path}: show_output"
        )

    if "log_level" in raw:
        if not isinstance(raw["log_level"], str):
            raise ConfigError(f"{path}: 'log_level' should be a string")

        log_level = parse_choice(
            LogLevel, raw["log_level"].strip().lower(), f"{path}: log_level"
        )

    logger.debug("loaded settings file %s", path)
    return PartialSettings(runs=runs, show_output=show_output, log_level=log_level)
