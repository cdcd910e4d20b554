"""Runners executing a selection of registered tests."""

from suite_runner.runners.base import SuiteRunner
from suite_runner.runners.deferred import DeferredRunner, RunnerState, RunnerStateError
from suite_runner.runners.event_loop import AsyncioLoopController, EventLoopController
from suite_runner.runners.sync import SyncRunner

__all__ = [
    "AsyncioLoopController",
    "DeferredRunner",
    "EventLoopController",
    "RunnerState",
    "RunnerStateError",
    "SuiteRunner",
    "SyncRunner",
]
