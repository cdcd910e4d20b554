"""Sample test classes and a registration hook used by the test suite."""

from suite_runner.factory import ClassFactory
from suite_runner.registry import Registry


class PassingSuite:
    """Test object whose methods all pass, recording hook order."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def setup_class(self) -> None:
        self.calls.append("setup_class")

    def setup_method(self) -> None:
        self.calls.append("setup_method")

    def test_first(self) -> None:
        self.calls.append("test_first")

    def test_second(self) -> None:
        self.calls.append("test_second")

    def teardown_method(self) -> None:
        self.calls.append("teardown_method")

    def teardown_class(self) -> None:
        self.calls.append("teardown_class")


class FailingSuite:
    """Test object with one passing and two failing methods."""

    def test_passes(self) -> None:
        pass

    def test_fails(self) -> None:
        raise AssertionError("expected failure")

    def test_raises(self) -> None:
        raise ValueError("boom")


class BrokenSetupSuite:
    """Test object whose class setup fails."""

    def setup_class(self) -> None:
        raise RuntimeError("fixture unavailable")

    def test_never_runs(self) -> None:  # pragma: no cover
        raise AssertionError("must not run")


def register_samples(registry: Registry) -> None:
    """Register the passing and failing sample suites."""
    registry.register("PassingSuite", ClassFactory(test_cls=PassingSuite))
    registry.register("FailingSuite", ClassFactory(test_cls=FailingSuite))
