from __future__ import annotations

from dataclasses import dataclass, field

from flakerun.runner.types import Failure, Killed, RunOutcome, Success


@dataclass
class StatusSummary:
    """
    Running tally of run outcomes.
    Counters only ever grow; every update bumps exactly one of them.
    """

    successes: int = 0
    killed: int = 0
    failures: dict[int, int] = field(default_factory=dict)

    def update(self, outcome: RunOutcome) -> None:
        match outcome:
            case Success():
                self.successes += 1
            case Failure(exit_code=code):
                self.failures[code] = self.failures.get(code, 0) + 1
            case Killed():
                self.killed += 1
            case _:
                raise TypeError(f"Unknown run outcome: {outcome!r}")

    @property
    def total_failures(self) -> int:
        return self.killed + sum(self.failures.values())

    @property
    def runs(self) -> int:
        return self.successes + self.total_failures

    def report_lines(self) -> list[str]:
        lines = [
            f"successes: {self.successes}",
            f"failures: {self.total_failures}",
        ]
        if self.killed != 0:
            lines.append(f"(killed): {self.killed}")
        for code in sorted(self.failures):
            lines.append(f"(exit code {code}): {self.failures[code]}")
        return lines

    def __str__(self) -> str:
        return f"({self.successes} successes, {self.total_failures} failures)"
