"""Policies controlling how a runner aggregates results and missing tests."""

from typing import Literal

from pydantic import Field

from suite_runner.models.base import Model

Aggregation = Literal["first_failure", "last_failure"]
MissingTestAction = Literal["abort", "record"]


class ExecutionPolicy(Model):
    """Failure aggregation and selection-error handling for a run."""

    aggregation: Aggregation = Field(
        ...,
        description=(
            "first_failure stops at the first non-zero result; "
            "last_failure runs everything and keeps the latest non-zero result"
        ),
    )
    on_missing: MissingTestAction = Field(
        ...,
        description=(
            "abort fails the whole run on an unregistered test name; "
            "record reports the name as not found and carries on"
        ),
    )

    @property
    def stops_on_failure(self) -> bool:
        """Whether execution ends at the first failing test."""
        return self.aggregation == "first_failure"


SYNC_POLICY = ExecutionPolicy(aggregation="first_failure", on_missing="abort")
DEFERRED_POLICY = ExecutionPolicy(aggregation="last_failure", on_missing="record")
