"""Name to factory mapping of every test known to the process."""

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from functools import cache
from typing import Any, TypeVar, overload

from suite_runner.factory import ClassFactory, TestFactory

log = logging.getLogger(__name__)

T = TypeVar("T")


class DuplicateTestError(Exception):
    """Raised when a test name is registered twice."""


class RegistrySealedError(Exception):
    """Raised when registering after a runner started using the registry."""


class Registry:
    """Mapping of test names to the factories that create them.

    All registration must happen before any runner reads the registry.
    Runners call :meth:`seal` before their first lookup, after which
    :meth:`register` is rejected.
    """

    def __init__(self) -> None:
        self._factories: dict[str, TestFactory[Any]] = {}
        self._sealed = False

    def register(
        self, name: str, factory: TestFactory[Any], *, replace: bool = False
    ) -> None:
        """Register a factory under a unique test name.

        Args:
            name: Test name used by ``-test=<name>`` selections
            factory: Factory creating one test instance per call
            replace: Overwrite an existing registration instead of failing

        Raises:
            DuplicateTestError: If the name is taken and replace is False
            RegistrySealedError: If the registry is already in use by a runner

        """
        if self._sealed:
            raise RegistrySealedError(
                f"Cannot register test '{name}': registry is sealed"
            )
        if name in self._factories:
            if not replace:
                raise DuplicateTestError(f"Test '{name}' is already registered")
            log.warning("Replacing registration of test %s", name)
        self._factories[name] = factory

    def lookup(self, name: str) -> TestFactory[Any] | None:
        """Return the factory registered under name, if any."""
        return self._factories.get(name)

    def all(self) -> Sequence[tuple[str, TestFactory[Any]]]:
        """Return every registered entry in registration order."""
        return list(self._factories.items())

    def names(self) -> Sequence[str]:
        """Return every registered test name in registration order."""
        return list(self._factories)

    def seal(self) -> None:
        """Reject further registrations."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        """Whether the registry still accepts registrations."""
        return self._sealed

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


@cache
def get_default_registry() -> Registry:
    """Return the process-wide registry, creating it on first use."""
    return Registry()


_active_registry: ContextVar[Registry | None] = ContextVar(
    "active_registry", default=None
)


def current_registry() -> Registry:
    """Return the registry targeted by undirected registrations."""
    active = _active_registry.get()
    return active if active is not None else get_default_registry()


@contextmanager
def registering_into(registry: Registry) -> Iterator[Registry]:
    """Direct ``register_test`` calls without a registry into registry."""
    token = _active_registry.set(registry)
    try:
        yield registry
    finally:
        _active_registry.reset(token)


@overload
def register_test(test_cls: type[T], /) -> type[T]: ...


@overload
def register_test(
    name: str | None = None, /, *, registry: Registry | None = None
) -> Callable[[type[T]], type[T]]: ...


def register_test(
    name: Any = None, /, *, registry: Registry | None = None
) -> Any:
    """Register a test class when its module is imported.

    Usable bare (``@register_test``) to register under the class name, or
    called (``@register_test("name", registry=...)``) to choose the name
    and the target registry. Without a registry the class goes to the one
    made current by :func:`registering_into`, else the default registry.
    """
    if isinstance(name, type):
        return register_test()(name)

    def decorator(test_cls: type[T]) -> type[T]:
        target = registry if registry is not None else current_registry()
        target.register(name or test_cls.__name__, ClassFactory(test_cls=test_cls))
        return test_cls

    return decorator
