"""Synchronous runner returning on the first failing test."""

from collections.abc import Iterable

from suite_runner.execution import Executor
from suite_runner.models.policy import SYNC_POLICY, ExecutionPolicy
from suite_runner.registry import Registry
from suite_runner.runners.base import SuiteRunner


class SyncRunner(SuiteRunner):
    """Runs the selection inline on the calling thread.

    With the default policy the first non-zero result is returned at once
    and later tests are never instantiated, and an unregistered ``-test=``
    name returns ``-1`` before anything runs.
    """

    def __init__(
        self,
        registry: Registry,
        executor: Executor | None = None,
        policy: ExecutionPolicy = SYNC_POLICY,
    ) -> None:
        super().__init__(registry, policy, executor)

    def run_tests(self, arguments: Iterable[str]) -> int:
        """Run the selected tests and return the process exit code."""
        return self._execute(arguments).exit_code
