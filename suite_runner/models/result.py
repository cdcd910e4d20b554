"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

SUCCESS = 0
ERROR = 1
NOT_FOUND = -1

OutcomeStatus = Literal["passed", "failed", "not_found", "error"]


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Result of running a single selected test."""

    __test__ = False

    name: str
    code: int
    status: OutcomeStatus
    duration: float = 0.0
    message: str | None = None

    @classmethod
    def from_code(cls, name: str, code: int, duration: float) -> "TestOutcome":
        """Build an outcome from the integer returned by an executor."""
        return cls(
            name=name,
            code=code,
            status="passed" if code == SUCCESS else "failed",
            duration=duration,
        )


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Aggregated result of one runner invocation.

    ``skipped`` lists the selected tests that never ran because an earlier
    failure ended the run.
    """

    exit_code: int
    outcomes: Sequence[TestOutcome] = field(default_factory=list)
    skipped: Sequence[str] = field(default_factory=list)
