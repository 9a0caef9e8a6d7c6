from .runner import Runner, run_many
from .types import (
    Failure,
    Killed,
    RunnerError,
    RunOutcome,
    RunResult,
    SpawnError,
    Success,
    is_success,
    outcome_from_returncode,
)

__all__ = [
    "Runner",
    "run_many",
    "RunOutcome",
    "Success",
    "Failure",
    "Killed",
    "RunResult",
    "RunnerError",
    "SpawnError",
    "is_success",
    "outcome_from_returncode",
]
