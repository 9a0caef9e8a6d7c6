from __future__ import annotations

import click

from flakerun.config import ShowOutput
from flakerun.runner import Failure, Killed, RunResult, Success, is_success
from flakerun.summary import StatusSummary


def format_progress(result: RunResult, summary: StatusSummary) -> str:
    match result.outcome:
        case Success():
            tag = click.style("ok", fg="green")
        case Failure(exit_code=code):
            tag = click.style(f"failed: {code}", fg="red")
        case Killed():
            tag = click.style("killed", fg="red")
        case _:
            raise TypeError(f"Unknown run outcome: {result.outcome!r}")

    return f"{tag}\t{click.style(str(summary), dim=True)}"


def print_progress(
    result: RunResult, summary: StatusSummary, show_output: ShowOutput
) -> None:
    click.echo(format_progress(result, summary))

    if show_output.should_show(is_success(result.outcome)):
        _print_stream("stdout:", result.stdout)
        _print_stream("stderr:", result.stderr)


def print_report(summary: StatusSummary) -> None:
    for line in summary.report_lines():
        click.echo(line)


def _print_stream(label: str, data: bytes) -> None:
    if not data:
        return

    click.echo(click.style(label, bold=True))
    text = data.decode("utf-8", errors="replace")
    click.echo(click.style(text, dim=True))
