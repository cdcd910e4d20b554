"""Explicit registration of tests from entry points and modules."""

import importlib
import logging
from collections.abc import Iterable
from importlib.metadata import entry_points

from suite_runner.factory import ClassFactory
from suite_runner.models.config import ENTRY_POINT_GROUP
from suite_runner.registry import Registry, registering_into

log = logging.getLogger(__name__)


class InvalidTestEntryError(Exception):
    """Raised when an entry point is neither a test class nor a hook."""


def load_registered_tests(
    registry: Registry, group: str = ENTRY_POINT_GROUP
) -> Registry:
    """Register every test advertised under an entry point group.

    Entries are processed sorted by name so registration order does not
    depend on installation order. A class is registered under the entry
    point name; any other callable is a hook receiving the registry.

    Args:
        registry: Registry to populate
        group: Entry point group, as declared in pyproject.toml

    Returns:
        The populated registry

    Raises:
        InvalidTestEntryError: If an entry point loads something unusable

    """
    for entry in sorted(entry_points(group=group), key=lambda e: e.name):
        target = entry.load()
        if isinstance(target, type):
            log.debug("Registering test class %s from %s", entry.name, entry.value)
            registry.register(entry.name, ClassFactory(test_cls=target))
        elif callable(target):
            log.debug("Running registration hook %s from %s", entry.name, entry.value)
            target(registry)
        else:
            raise InvalidTestEntryError(
                f"Entry point '{entry.name}' ({entry.value}) is neither "
                "a test class nor a registration hook"
            )
    return registry


def import_test_modules(module_names: Iterable[str], registry: Registry) -> None:
    """Import modules whose import registers tests via ``register_test``.

    Undirected ``register_test`` calls made while importing go to registry.
    A module imported earlier is not imported again, so its tests stay
    wherever they were registered then.
    """
    with registering_into(registry):
        for module_name in module_names:
            log.debug("Importing test module %s", module_name)
            importlib.import_module(module_name)
