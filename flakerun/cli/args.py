from __future__ import annotations

import argparse

from flakerun.config import DEFAULT_RUNS, LOG_LEVEL_ENV, LogLevel, ShowOutput


def _non_negative_int(value: str) -> int:
    try:
        runs = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None

    if runs < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {runs}")

    return runs


def _enum_type(enum_cls):
    def parse(value: str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            choices = ", ".join(member.value for member in enum_cls)
            raise argparse.ArgumentTypeError(
                f"invalid choice: '{value}' (choose from {choices})"
            ) from None

    parse.__name__ = enum_cls.__name__
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flakerun",
        description="Run a command many times and tally how often it fails.",
    )

    # Defaults are None so that settings files can fill in what was not given here.
    parser.add_argument(
        "-r",
        "--runs",
        type=_non_negative_int,
        default=None,
        help=f"The number of times to run the command (default: {DEFAULT_RUNS})",
    )
    parser.add_argument(
        "-s",
        "--show-output",
        type=_enum_type(ShowOutput),
        default=None,
        metavar="{" + ",".join(m.value for m in ShowOutput) + "}",
        help="When to show the stdout and stderr of each run (default: never)",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        type=_enum_type(LogLevel),
        default=None,
        metavar="{" + ",".join(m.value for m in LogLevel) + "}",
        help=f"Diagnostic verbosity, overrides ${LOG_LEVEL_ENV} (default: info)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a settings file (.yml/.yaml, .toml, .json)",
    )

    parser.add_argument("cmd", help="The command to run")
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed verbatim to the command",
    )

    return parser
