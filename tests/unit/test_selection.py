"""Tests for selection resolution."""

from pathlib import Path

import pytest

from suite_runner.registry import Registry
from suite_runner.selection import SelectionNotFoundError, resolve_selection
from suite_runner.testing.factories import RecordingFactory


@pytest.fixture
def registry() -> Registry:
    """Create a registry with tests A, B and C."""
    registry = Registry()
    for name in ("A", "B", "C"):
        registry.register(name, RecordingFactory(name=name))
    return registry


def test_no_selection_runs_whole_registry(registry: Registry) -> None:
    """Selects every registered test when no -test= is given."""
    selection = resolve_selection([], registry, on_missing="abort")

    assert selection.runs_all
    assert [s.name for s in selection.run_set] == ["A", "B", "C"]


def test_explicit_selection_keeps_argument_order(registry: Registry) -> None:
    """Selects exactly the named tests in the given order."""
    selection = resolve_selection(
        ["-test=C", "-test=A"], registry, on_missing="abort"
    )

    assert not selection.runs_all
    assert selection.requested == ["C", "A"]
    assert [s.name for s in selection.run_set] == ["C", "A"]
    assert selection.run_set[0].factory is registry.lookup("C")


def test_unrecognized_arguments_are_ignored(registry: Registry) -> None:
    """Ignores anything that is not a selection argument."""
    selection = resolve_selection(
        ["--mode", "sync", "-testX", "-test=B", "extra"],
        registry,
        on_missing="abort",
    )

    assert [s.name for s in selection.run_set] == ["B"]


def test_missing_name_aborts(registry: Registry) -> None:
    """Raises for an unregistered name under the abort action."""
    with pytest.raises(SelectionNotFoundError) as exc_info:
        resolve_selection(["-test=A", "-test=Nope"], registry, on_missing="abort")

    assert exc_info.value.name == "Nope"


def test_abort_stops_scanning_at_missing_name(registry: Registry) -> None:
    """Does not apply arguments following the missing name."""
    visited: list[Path] = []

    with pytest.raises(SelectionNotFoundError):
        resolve_selection(
            ["-dir=/first", "-test=Nope", "-dir=/second"],
            registry,
            on_missing="abort",
            change_directory=visited.append,
        )

    assert visited == [Path("/first")]


def test_missing_name_recorded(registry: Registry) -> None:
    """Keeps an unregistered name without a factory under the record action."""
    selection = resolve_selection(
        ["-test=Nope", "-test=B"], registry, on_missing="record"
    )

    assert [s.name for s in selection.run_set] == ["Nope", "B"]
    assert selection.run_set[0].factory is None
    assert selection.run_set[1].factory is not None


def test_missing_name_is_logged(
    registry: Registry, caplog: pytest.LogCaptureFixture
) -> None:
    """Logs the unregistered name."""
    resolve_selection(["-test=Nope"], registry, on_missing="record")

    assert "Test Nope not registered" in caplog.text


def test_dir_arguments_apply_in_order(registry: Registry) -> None:
    """Applies every -dir= as encountered, the last one winning."""
    visited: list[Path] = []

    selection = resolve_selection(
        ["-dir=/tmp/x", "-test=A", "-dir=/tmp/y"],
        registry,
        on_missing="abort",
        change_directory=visited.append,
    )

    assert visited == [Path("/tmp/x"), Path("/tmp/y")]
    assert selection.working_directory == Path("/tmp/y")


def test_dir_changes_process_working_directory(
    registry: Registry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Changes the real working directory to the last -dir= path."""
    monkeypatch.chdir(tmp_path)
    first = tmp_path / "x"
    second = tmp_path / "y"
    first.mkdir()
    second.mkdir()

    resolve_selection(
        [f"-dir={first}", f"-dir={second}"], registry, on_missing="abort"
    )

    assert Path.cwd().resolve() == second.resolve()


def test_unusable_dir_is_skipped(
    registry: Registry,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Warns and keeps the current directory when -dir= cannot be entered."""
    monkeypatch.chdir(tmp_path)
    missing = tmp_path / "does-not-exist"

    selection = resolve_selection([f"-dir={missing}"], registry, on_missing="abort")

    assert selection.working_directory is None
    assert Path.cwd().resolve() == tmp_path.resolve()
    assert "Cannot change working directory" in caplog.text
