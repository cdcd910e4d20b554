"""Runner executing its batch inside a cooperative event loop."""

import enum
import logging
from collections.abc import Iterable, Sequence
from functools import partial

from suite_runner.execution import Executor
from suite_runner.models.policy import DEFERRED_POLICY, ExecutionPolicy
from suite_runner.models.result import ERROR
from suite_runner.registry import Registry
from suite_runner.runners.base import SuiteRunner
from suite_runner.runners.event_loop import AsyncioLoopController, EventLoopController

log = logging.getLogger(__name__)


class RunnerState(enum.Enum):
    """Lifecycle of a deferred runner, traversed once."""

    CONSTRUCTED = "constructed"
    SCHEDULED = "scheduled"
    RUNNING = "running"
    TERMINATING = "terminating"
    EXITED = "exited"


class RunnerStateError(Exception):
    """Raised when a deferred runner is used outside its lifecycle."""


class DeferredRunner(SuiteRunner):
    """Schedules the batch on an event loop and blocks until the loop exits.

    With the default policy every selected test runs, the exit code is the
    most recent non-zero result, and unregistered names are reported as
    ``not_found`` while the rest of the selection still runs.
    """

    def __init__(
        self,
        registry: Registry,
        executor: Executor | None = None,
        policy: ExecutionPolicy = DEFERRED_POLICY,
        controller: EventLoopController | None = None,
    ) -> None:
        super().__init__(registry, policy, executor)
        self._controller = controller or AsyncioLoopController()
        self._state = RunnerState.CONSTRUCTED

    @property
    def state(self) -> RunnerState:
        """Current lifecycle state."""
        return self._state

    def run_tests(self, arguments: Iterable[str]) -> int:
        """Schedule the batch, run the loop and return its exit value.

        Raises:
            RunnerStateError: If the runner has already been started

        """
        if self._state is not RunnerState.CONSTRUCTED:
            raise RunnerStateError(
                f"Deferred runner cannot start from state {self._state.value}"
            )

        self._controller.schedule_soon(partial(self._run_scheduled, tuple(arguments)))
        self._state = RunnerState.SCHEDULED
        log.debug("Test batch scheduled, starting event loop")

        exit_code = self._controller.run_until_exit()
        self._state = RunnerState.EXITED
        return exit_code

    def _run_scheduled(self, arguments: Sequence[str]) -> None:
        self._state = RunnerState.RUNNING
        exit_code = ERROR
        try:
            exit_code = self._execute(arguments).exit_code
        except Exception:
            log.exception("Test batch failed")
        finally:
            self._state = RunnerState.TERMINATING
            log.debug("Requesting event loop exit with code %d", exit_code)
            self._controller.request_exit(exit_code)
