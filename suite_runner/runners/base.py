"""Shared selection and execution logic of the runners."""

import logging
import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from suite_runner.execution import Executor, MethodExecutor
from suite_runner.models.policy import ExecutionPolicy
from suite_runner.models.result import (
    ERROR,
    NOT_FOUND,
    SUCCESS,
    RunReport,
    TestOutcome,
)
from suite_runner.registry import Registry
from suite_runner.selection import (
    SelectedTest,
    SelectionNotFoundError,
    resolve_selection,
)

log = logging.getLogger(__name__)


class SuiteRunner:
    """Selects tests from a registry and runs them under a policy.

    Subclasses decide when the batch runs; :meth:`_execute` is the batch.
    """

    def __init__(
        self,
        registry: Registry,
        policy: ExecutionPolicy,
        executor: Executor | None = None,
    ) -> None:
        self.registry = registry
        self.policy = policy
        self.executor = executor or MethodExecutor()
        self.last_report: RunReport | None = None

    def _execute(self, arguments: Iterable[str]) -> RunReport:
        """Resolve the selection, run it and record the report."""
        self.registry.seal()
        try:
            selection = resolve_selection(
                arguments, self.registry, on_missing=self.policy.on_missing
            )
        except SelectionNotFoundError as e:
            report = RunReport(
                exit_code=NOT_FOUND,
                outcomes=[
                    TestOutcome(
                        name=e.name, code=NOT_FOUND, status="not_found", message=str(e)
                    )
                ],
            )
        else:
            if selection.working_directory is not None:
                log.info("Working directory: %s", Path.cwd())
            report = self._run_selected(selection.run_set)

        self.last_report = report
        return report

    def _run_selected(self, run_set: Sequence[SelectedTest]) -> RunReport:
        log.info("Running %d test(s)", len(run_set))
        exit_code = SUCCESS
        outcomes: list[TestOutcome] = []

        for index, selected in enumerate(run_set):
            outcome = self._run_one(selected)
            outcomes.append(outcome)
            if outcome.code == SUCCESS:
                continue

            exit_code = outcome.code
            if self.policy.stops_on_failure:
                skipped = [s.name for s in run_set[index + 1 :]]
                if skipped:
                    log.info("Skipping %d test(s) after failure", len(skipped))
                return RunReport(
                    exit_code=exit_code, outcomes=outcomes, skipped=skipped
                )

        return RunReport(exit_code=exit_code, outcomes=outcomes)

    def _run_one(self, selected: SelectedTest) -> TestOutcome:
        if selected.factory is None:
            return TestOutcome(
                name=selected.name,
                code=NOT_FOUND,
                status="not_found",
                message=f"Test '{selected.name}' is not registered",
            )

        start = time.monotonic()
        try:
            test = selected.factory.create_test()
            code = self.executor.execute(test)
        except Exception as e:
            log.error("Test %s raised: %s", selected.name, e, exc_info=e)
            return TestOutcome(
                name=selected.name,
                code=ERROR,
                status="error",
                duration=time.monotonic() - start,
                message=str(e),
            )

        return TestOutcome.from_code(selected.name, code, time.monotonic() - start)
