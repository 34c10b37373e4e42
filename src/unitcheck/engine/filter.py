from __future__ import annotations

from dataclasses import dataclass

from ..query import Query
from .registry import Registry, TestCase, TestSuite


@dataclass(frozen=True)
class SelectedSuite:
    suite: TestSuite
    tests: tuple[tuple[str, TestCase], ...]

    @property
    def name(self) -> str:
        return self.suite.name


def _suite_matches(suite: TestSuite, query: Query, wanted: set[str]) -> bool:
    if not wanted:
        return True
    return query.normalize(suite.name) in wanted


def _case_matches(case: TestCase, query: Query, wanted: set[str]) -> bool:
    # Only the case's own tags count; suite tags are never inherited here.
    if not wanted:
        return True
    return any(query.normalize(tag) in wanted for tag in case.tags)


def select(registry: Registry, query: Query | None = None) -> list[SelectedSuite]:
    """Resolve ``query`` against ``registry`` in registration order.

    A suite that passes the suite filter is selected even when none of its
    tests pass the tag filter, so its hooks still run.
    """
    query = query or Query()
    wanted_suites = query.suite_names()
    wanted_tags = query.tag_names()

    selected: list[SelectedSuite] = []
    for suite in registry.suites.values():
        if not _suite_matches(suite, query, wanted_suites):
            continue
        tests = tuple(
            (name, case)
            for name, case in suite.tests
            if _case_matches(case, query, wanted_tags)
        )
        selected.append(SelectedSuite(suite=suite, tests=tests))
    return selected


def selected_tests(
    registry: Registry, query: Query | None = None
) -> list[tuple[str, str, TestCase]]:
    return [
        (selection.name, name, case)
        for selection in select(registry, query)
        for name, case in selection.tests
    ]
