"""Factories that produce fresh test instances on demand."""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class TestFactory(Protocol[T]):
    """Creates one new, independently owned test instance per call."""

    def create_test(self) -> T:
        """Return a fresh test instance."""
        ...


@dataclass(frozen=True, kw_only=True)
class ClassFactory(Generic[T]):
    """Factory for test classes constructed without arguments."""

    test_cls: type[T]

    def create_test(self) -> T:
        """Instantiate the wrapped test class."""
        return self.test_cls()
