from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class Failure:
    exit_code: int

    def __post_init__(self) -> None:
        if self.exit_code == 0:
            raise ValueError("exit code 0 is a success, not a failure")


@dataclass(frozen=True)
class Killed:
    # Only informative; the summary counts every kill the same way.
    signal: int | None = None


RunOutcome = Success | Failure | Killed


def outcome_from_returncode(returncode: int | None) -> RunOutcome:
    """
    Classify a child's return code as reported by `subprocess`.
    On POSIX a negative return code -N means the child was terminated by signal N.
    """
    if returncode is None:
        return Killed()
    if returncode == 0:
        return Success()
    if returncode < 0:
        return Killed(-returncode)
    return Failure(returncode)


def is_success(outcome: RunOutcome) -> bool:
    return isinstance(outcome, Success)


@dataclass(frozen=True)
class RunResult:
    outcome: RunOutcome
    stdout: bytes
    stderr: bytes
    duration_s: float


class RunnerError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class SpawnError(RunnerError):
    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"couldn't execute command '{command}': {reason}")
        self.command = command
        self.reason = reason
