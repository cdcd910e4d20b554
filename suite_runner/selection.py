"""Resolution of ``-dir=`` and ``-test=`` arguments into a run set."""

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from suite_runner.factory import TestFactory
from suite_runner.models.policy import MissingTestAction
from suite_runner.registry import Registry

log = logging.getLogger(__name__)

DIR_PREFIX = "-dir="
TEST_PREFIX = "-test="
SELECTION_PREFIXES = (DIR_PREFIX, TEST_PREFIX)


class SelectionNotFoundError(Exception):
    """Raised when a ``-test=`` argument names an unregistered test."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Test '{name}' is not registered")
        self.name = name


@dataclass(frozen=True, kw_only=True)
class SelectedTest:
    """One entry of the run set; ``factory`` is None for unknown names."""

    name: str
    factory: TestFactory[Any] | None


@dataclass(frozen=True, kw_only=True)
class Selection:
    """Outcome of scanning the argument list."""

    working_directory: Path | None
    requested: Sequence[str]
    run_set: Sequence[SelectedTest]

    @property
    def runs_all(self) -> bool:
        """Whether no explicit selection was given."""
        return not self.requested


def resolve_selection(
    arguments: Iterable[str],
    registry: Registry,
    *,
    on_missing: MissingTestAction,
    change_directory: Callable[[Path], None] = os.chdir,
) -> Selection:
    """Scan arguments once, in order, and build the run set.

    ``-dir=<path>`` changes the working directory as soon as it is seen,
    so with several occurrences the last one wins. ``-test=<name>`` adds a
    name to the explicit selection. Anything else is ignored.

    Args:
        arguments: Raw argument list, typically ``sys.argv[1:]``
        registry: Registry used to look up selected names
        on_missing: ``abort`` raises on an unregistered name, ``record``
            keeps it in the run set without a factory
        change_directory: Function applying a ``-dir=`` argument

    Returns:
        The explicit selection in argument order, or every registry entry
        when nothing was selected

    Raises:
        SelectionNotFoundError: If a name is unregistered and on_missing is
            ``abort``. Arguments after it are not processed.

    """
    working_directory: Path | None = None
    requested: list[str] = []
    selected: list[SelectedTest] = []

    for argument in arguments:
        if argument.startswith(DIR_PREFIX):
            path = Path(argument.removeprefix(DIR_PREFIX))
            try:
                change_directory(path)
            except OSError as e:
                log.warning("Cannot change working directory to %s: %s", path, e)
                continue
            working_directory = path
        elif argument.startswith(TEST_PREFIX):
            name = argument.removeprefix(TEST_PREFIX)
            factory = registry.lookup(name)
            if factory is None:
                log.error("Test %s not registered", name)
                if on_missing == "abort":
                    raise SelectionNotFoundError(name)
            requested.append(name)
            selected.append(SelectedTest(name=name, factory=factory))

    if not requested:
        selected = [
            SelectedTest(name=name, factory=factory)
            for name, factory in registry.all()
        ]

    return Selection(
        working_directory=working_directory,
        requested=requested,
        run_set=selected,
    )
