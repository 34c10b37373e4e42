"""Command-line entry point: filter, list and run registered tests."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Sequence

from .api import create_registry
from .engine import Executor, Registry, select
from .models import TestRecord
from .query import Query, RunOptions
from .reporting import render_listing, render_record, render_summary

log = logging.getLogger("unitcheck")


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog, description="Run registered unitcheck test suites"
    )
    parser.add_argument(
        "-s",
        "--suite",
        action="append",
        default=[],
        help="Comma-separated suite names to run (any match)",
    )
    parser.add_argument(
        "-t",
        "--tag",
        action="append",
        default=[],
        help="Comma-separated tags; a test runs if it carries any of them",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List the selected suites and tests instead of running them",
    )
    parser.add_argument(
        "-c",
        "--case_sensitive",
        action="store_true",
        help="Match suite and tag names case-sensitively",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report passing tests and log progress",
    )
    return parser


def parse_options(
    argv: Sequence[str] | None = None,
    *,
    parser: argparse.ArgumentParser | None = None,
) -> RunOptions:
    args = (parser or build_parser()).parse_args(argv)
    return options_from_args(args)


def options_from_args(args: argparse.Namespace) -> RunOptions:
    query = Query(
        suites=args.suite,
        tags=args.tag,
        case_sensitive=args.case_sensitive,
    )
    return RunOptions(query=query, list_only=args.list, verbose=args.verbose)


def run_cli(registry: Registry, argv: Sequence[str] | None = None) -> int:
    """Run ``registry`` as directed by ``argv`` and return the exit code."""
    return run_with_options(registry, parse_options(argv))


def run_with_options(registry: Registry, options: RunOptions) -> int:
    if options.list_only:
        print(render_listing(select(registry, options.query)))
        return 0

    def _print_record(record: TestRecord) -> None:
        for line in render_record(record, verbose=options.verbose):
            print(line)

    summary = Executor(registry, on_record=_print_record).run(options.query)
    for line in render_summary(summary):
        print(line)
    return 0 if summary.ok else 1


def load_modules(registry: Registry, module_names: Sequence[str]) -> None:
    for module_name in module_names:
        module = importlib.import_module(module_name)
        plugin = getattr(module, "registrations", module)
        log.debug("Registering tests from module '%s'.", module_name)
        registry.register_plugin(plugin)


def main(argv: Sequence[str] | None = None) -> None:
    """Console script entry point."""
    parser = build_parser(prog="unitcheck")
    parser.add_argument(
        "-m",
        "--module",
        action="append",
        default=[],
        help="Import a module and register its tests (repeatable)",
    )
    args = parser.parse_args(argv)
    options = options_from_args(args)

    logging.basicConfig(
        level=logging.INFO if options.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    registry = create_registry()
    load_modules(registry, args.module)
    sys.exit(run_with_options(registry, options))


if __name__ == "__main__":  # pragma: no cover
    main()
