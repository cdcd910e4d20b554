"""Execution primitive turning a test instance into an integer result."""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any, Protocol

log = logging.getLogger(__name__)

TEST_METHOD_PREFIX = "test"
MAX_RESULT_CODE = 255


class Executor(Protocol):
    """Runs one test instance and reports a result code (0 means pass)."""

    def execute(self, test: Any) -> int:
        """Run the test and return its result code."""
        ...


def collect_test_methods(test: Any) -> Sequence[str]:
    """Return the names of test methods in definition order.

    Base class methods come first; a name overridden in a subclass keeps
    the position of its first definition.
    """
    names: dict[str, None] = {}
    for cls in reversed(type(test).__mro__):
        for name, value in vars(cls).items():
            if name.startswith(TEST_METHOD_PREFIX) and callable(value):
                names[name] = None
    return list(names)


class MethodExecutor:
    """Runs every ``test*`` method of an instance and counts failures.

    Optional hooks are honoured: ``setup_class`` and ``teardown_class``
    around the whole instance, ``setup_method`` and ``teardown_method``
    around each test method. An exception raised by a test method or its
    per-method hooks fails that method. A failing ``setup_class`` skips
    every method and counts as a single failure.
    """

    def execute(self, test: Any) -> int:
        """Run the instance's test methods and return the failure count.

        The count is capped at 255 so it survives as a process exit status.
        """
        test_name = type(test).__name__
        log.info("********* Start testing of %s *********", test_name)
        start = time.monotonic()

        if not self._call_hook(test, "setup_class", test_name):
            log.info("********* Finished testing of %s *********", test_name)
            return 1

        passed = failed = 0
        for method_name in collect_test_methods(test):
            if self._run_method(test, test_name, method_name):
                passed += 1
            else:
                failed += 1

        self._call_hook(test, "teardown_class", test_name)

        log.info(
            "Totals: %d passed, %d failed (%.3fs)",
            passed,
            failed,
            time.monotonic() - start,
        )
        log.info("********* Finished testing of %s *********", test_name)
        return min(failed, MAX_RESULT_CODE)

    def _run_method(self, test: Any, test_name: str, method_name: str) -> bool:
        """Run one test method between its hooks; return whether it passed."""
        qualified = f"{test_name}::{method_name}"
        if not self._call_hook(test, "setup_method", qualified):
            return False
        try:
            getattr(test, method_name)()
        except Exception:
            log.error("FAIL!  : %s", qualified, exc_info=True)
            self._call_hook(test, "teardown_method", qualified)
            return False
        if not self._call_hook(test, "teardown_method", qualified):
            return False
        log.info("PASS   : %s", qualified)
        return True

    @staticmethod
    def _call_hook(test: Any, hook_name: str, context: str) -> bool:
        """Call an optional hook; return False if it raised."""
        hook: Callable[[], Any] | None = getattr(test, hook_name, None)
        if hook is None:
            return True
        try:
            hook()
        except Exception:
            log.error("FAIL!  : %s (%s)", context, hook_name, exc_info=True)
            return False
        return True
