"""Configuration for a command line run."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from suite_runner.models.policy import (
    DEFERRED_POLICY,
    SYNC_POLICY,
    Aggregation,
    ExecutionPolicy,
    MissingTestAction,
)

ENTRY_POINT_GROUP = "suite_runner.tests"


class RunnerConfig(BaseModel):
    """Configuration for the suite runner CLI."""

    mode: Literal["sync", "deferred"] = "sync"
    modules: Sequence[str] = Field(
        default_factory=list,
        description="Modules imported for their test registration side effects",
    )
    entry_point_group: str = ENTRY_POINT_GROUP
    aggregation: Aggregation | None = None
    on_missing: MissingTestAction | None = None
    list_tests: bool = False
    json_output: bool = False

    def execution_policy(self) -> ExecutionPolicy:
        """Return the mode's default policy with any overrides applied."""
        default = SYNC_POLICY if self.mode == "sync" else DEFERRED_POLICY
        return ExecutionPolicy(
            aggregation=self.aggregation or default.aggregation,
            on_missing=self.on_missing or default.on_missing,
        )
