"""CLI entry point for running registered tests."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from suite_runner.loading import import_test_modules, load_registered_tests
from suite_runner.models.config import ENTRY_POINT_GROUP, RunnerConfig
from suite_runner.models.result import RunReport
from suite_runner.registry import Registry, get_default_registry
from suite_runner.runners import DeferredRunner, SyncRunner
from suite_runner.selection import SELECTION_PREFIXES

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "error": "❗",
    "not_found": "❓",
}


def log_results_summary(log: logging.Logger, report: RunReport) -> None:
    """Log a formatted summary of test outcomes."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for outcome in report.outcomes:
        symbol = STATUS_SYMBOLS.get(outcome.status, "?")
        log.info(
            "%s %s: %s (code %d, %.2fs)",
            symbol,
            outcome.name,
            outcome.status,
            outcome.code,
            outcome.duration,
        )
        if outcome.message:
            log.info("  Message: %s", outcome.message)

    for name in report.skipped:
        log.info("- %s: skipped", name)

    log.info("Exit code: %d", report.exit_code)


def format_output(report: RunReport) -> dict[str, Any]:
    """Format a run report for JSON output."""
    results = [
        {
            "test": outcome.name,
            "status": outcome.status,
            "code": outcome.code,
            "duration": outcome.duration,
            "message": outcome.message,
        }
        for outcome in report.outcomes
    ]

    return {
        "exit_code": report.exit_code,
        "total": len(results),
        "passed": sum(1 for r in results if r["status"] == "passed"),
        "failed": sum(1 for r in results if r["status"] == "failed"),
        "errors": sum(1 for r in results if r["status"] == "error"),
        "not_found": sum(1 for r in results if r["status"] == "not_found"),
        "skipped": list(report.skipped),
        "results": results,
    }


def split_arguments(argv: Sequence[str]) -> Sequence[str]:
    """Return the arguments that are not ``-dir=`` or ``-test=`` selections."""
    return [arg for arg in argv if not arg.startswith(SELECTION_PREFIXES)]


def build_runner(config: RunnerConfig, registry: Registry) -> SyncRunner | DeferredRunner:
    """Create the runner for the configured mode."""
    policy = config.execution_policy()
    if config.mode == "deferred":
        return DeferredRunner(registry, policy=policy)
    return SyncRunner(registry, policy=policy)


def run(
    config: RunnerConfig,
    argv: Sequence[str],
    registry: Registry | None = None,
) -> int:
    """Register tests, run the selection and return the exit code."""
    log = logging.getLogger("suite_runner")
    registry = registry if registry is not None else get_default_registry()

    import_test_modules(config.modules, registry)
    load_registered_tests(registry, config.entry_point_group)
    log.info("%d test(s) registered", len(registry))

    if config.list_tests:
        for name in registry.names():
            print(name)
        return 0

    runner = build_runner(config, registry)
    log.info("Running tests (mode=%s)", config.mode)
    exit_code = runner.run_tests(argv)

    if runner.last_report is not None:
        log_results_summary(log, runner.last_report)
        if config.json_output:
            print(json.dumps(format_output(runner.last_report), indent=2))

    return exit_code


def parse_options(argv: Sequence[str]) -> RunnerConfig:
    """Parse runner options, leaving selection arguments to the runner."""
    parser = argparse.ArgumentParser(
        description=(
            "Run registered tests. Select tests with -test=<name> (repeatable) "
            "and change directory with -dir=<path>; without -test= every "
            "registered test runs."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "--mode",
        choices=["sync", "deferred"],
        default="sync",
        help="sync stops at the first failure; deferred runs everything in an event loop",
    )
    parser.add_argument(
        "--module",
        dest="modules",
        action="append",
        default=[],
        help="Module to import for its test registrations (repeatable)",
    )
    parser.add_argument(
        "--entry-point-group",
        default=ENTRY_POINT_GROUP,
        help="Entry point group advertising tests",
    )
    parser.add_argument(
        "--aggregation",
        choices=["first_failure", "last_failure"],
        help="Override how failures are aggregated into the exit code",
    )
    parser.add_argument(
        "--on-missing",
        choices=["abort", "record"],
        help="Override handling of unregistered -test= names",
    )
    parser.add_argument(
        "--list",
        dest="list_tests",
        action="store_true",
        help="List registered tests and exit",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print a JSON report on stdout",
    )

    args, ignored = parser.parse_known_args(split_arguments(argv))
    if ignored:
        logging.getLogger("suite_runner").debug(
            "Ignoring unrecognized arguments: %s", " ".join(ignored)
        )
    return RunnerConfig(**vars(args))


def main() -> None:
    """CLI entry point."""
    argv = sys.argv[1:]
    config = parse_options(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(run(config, argv))


if __name__ == "__main__":  # pragma: no cover
    main()
