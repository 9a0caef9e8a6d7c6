from __future__ import annotations

import logging
import subprocess
import time
from typing import TYPE_CHECKING, Callable, Protocol, Sequence

from .types import RunnerError, RunResult, SpawnError, outcome_from_returncode

if TYPE_CHECKING:
    from flakerun.summary import StatusSummary

logger = logging.getLogger(__name__)


class SupportsRunOnce(Protocol):
    def run_once(self) -> RunResult: ...


class Runner:
    def __init__(self, command: str, args: Sequence[str] = ()):
        if len(command) < 1:
            raise RunnerError("Command name can't be empty")

        self.command = command
        self.args = list(args)

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]

    def run_once(self) -> RunResult:
        start = time.monotonic()
        try:
            # No timeout: a hung child hangs the caller.
            completed = subprocess.run(self.argv, capture_output=True)
        except OSError as exc:
            raise SpawnError(self.command, exc.strerror or str(exc)) from exc
        duration = time.monotonic() - start

        result = RunResult(
            outcome_from_returncode(completed.returncode),
            completed.stdout,
            completed.stderr,
            duration,
        )

        logger.debug(
            "%s finished in %.3fs: %r", self.command, duration, result.outcome
        )
        logger.debug("stdout: %r", result.stdout)
        logger.debug("stderr: %r", result.stderr)
        return result


def run_many(
    runner: SupportsRunOnce,
    runs: int,
    summary: StatusSummary,
    on_result: Callable[[RunResult, StatusSummary], None] | None = None,
) -> StatusSummary:
    if runs < 0:
        raise ValueError(f"runs must be non-negative, got {runs}")

    for index in range(runs):
        logger.debug("run %d of %d", index + 1, runs)
        result = runner.run_once()
        summary.update(result.outcome)
        if on_result is not None:
            on_result(result, summary)

    return summary
