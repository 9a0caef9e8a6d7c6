from __future__ import annotations

import argparse
import logging
import sys
from typing import Mapping

from flakerun.config import (
    ConfigError,
    PartialSettings,
    Settings,
    load_settings,
    log_level_from_env,
    resolve_settings,
)
from flakerun.runner import Runner, RunnerError, run_many
from flakerun.summary import StatusSummary

from .args import build_parser
from .output import print_progress, print_report

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def main() -> None:
    sys.exit(run_cli())


def run_cli(
    argv: list[str] | None = None, environ: Mapping[str, str] | None = None
) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if len(args.cmd) < 1:
            parser.error("the command can't be empty")

        settings = _resolve_settings(args, environ)
        _configure_logging(settings)
        logger.debug("parsed arguments: %s", vars(args))
        logger.debug("resolved settings: %s", settings)

        return cmd_run(args, settings)

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except RunnerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    runner = Runner(args.cmd, args.args)
    summary = StatusSummary()

    logger.info("running %s %d times", args.cmd, settings.runs)
    run_many(
        runner,
        settings.runs,
        summary,
        on_result=lambda result, current: print_progress(
            result, current, settings.show_output
        ),
    )

    print_report(summary)
    # Child failures are reported, never turned into our own exit status.
    return 0


def _resolve_settings(
    args: argparse.Namespace, environ: Mapping[str, str] | None
) -> Settings:
    cli = PartialSettings(
        runs=args.runs, show_output=args.show_output, log_level=args.log_level
    )
    file = load_settings(args.config) if args.config is not None else None
    return resolve_settings(
        cli=cli, env_log_level=log_level_from_env(environ), file=file
    )


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.level, format=LOG_FORMAT)
    logging.getLogger("flakerun").setLevel(settings.log_level.level)
