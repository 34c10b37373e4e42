from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Callable, Iterable

from ..models import Result, Summary

if TYPE_CHECKING:
    from ..query import Query

log = logging.getLogger(__name__)

_ENTRYPOINT_GROUP = "unitcheck.suites"

TestBody = Callable[[], Result]
Hook = Callable[[], object]


def _checked_hook(
    fn: Callable[..., object] | None, role: str
) -> Callable[..., object] | None:
    if fn is not None and not callable(fn):
        raise TypeError(f"{role} must be callable, got {type(fn).__name__}.")
    return fn


def _merge_tags(existing: list[str], tags: Iterable[str]) -> None:
    for tag in tags:
        if tag not in existing:
            existing.append(tag)


@dataclass(eq=False)
class TestCase:
    __test__ = False

    name: str
    tags: list[str] = field(default_factory=list)
    body: TestBody | None = None
    setup: Hook | None = None
    teardown: Hook | None = None

    def __post_init__(self) -> None:
        tags, self.tags = self.tags, []
        _merge_tags(self.tags, tags)
        _checked_hook(self.body, "body")
        _checked_hook(self.setup, "setup")
        _checked_hook(self.teardown, "teardown")

    def with_tags(self, *tags: str) -> TestCase:
        _merge_tags(self.tags, tags)
        return self

    def with_body(self, fn: TestBody) -> TestCase:
        self.body = _checked_hook(fn, "body")
        return self

    def with_setup(self, fn: Hook) -> TestCase:
        self.setup = _checked_hook(fn, "setup")
        return self

    def with_teardown(self, fn: Hook) -> TestCase:
        self.teardown = _checked_hook(fn, "teardown")
        return self


@dataclass(eq=False)
class TestSuite:
    """Named, ordered collection of test cases sharing hooks and tags.

    ``tests`` holds ``(name, case)`` pairs in registration order; names may
    repeat.
    """

    __test__ = False

    name: str
    tags: list[str] = field(default_factory=list)
    setup: Hook | None = None
    teardown: Hook | None = None
    tests: list[tuple[str, TestCase]] = field(default_factory=list)

    def with_tags(self, *tags: str) -> TestSuite:
        _merge_tags(self.tags, tags)
        return self

    def with_setup(self, fn: Hook) -> TestSuite:
        self.setup = _checked_hook(fn, "setup")
        return self

    def with_teardown(self, fn: Hook) -> TestSuite:
        self.teardown = _checked_hook(fn, "teardown")
        return self

    def add(self, *cases: TestCase) -> TestSuite:
        for case in cases:
            self.tests.append((case.name, case))
            log.debug("Registered test '%s' in suite '%s'.", case.name, self.name)
        return self

    def test(
        self,
        name: str,
        *,
        tags: Iterable[str] = (),
        body: TestBody | None = None,
        setup: Hook | None = None,
        teardown: Hook | None = None,
    ) -> TestSuite:
        case = TestCase(
            name=name, tags=list(tags), body=body, setup=setup, teardown=teardown
        )
        return self.add(case)

    def test_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.tests)


class Registry:
    """Owns every suite and its tests for the lifetime of the program."""

    def __init__(self) -> None:
        self._suites: dict[str, TestSuite] = {}

    @property
    def suites(self) -> dict[str, TestSuite]:
        return self._suites

    def suite(self, name: str) -> TestSuite:
        existing = self._suites.get(name)
        if existing is not None:
            return existing
        created = TestSuite(name=name)
        self._suites[name] = created
        log.debug("Created suite '%s'.", name)
        return created

    def add_test(
        self,
        suite_name: str,
        test_name: str,
        case: TestCase | None = None,
        *,
        tags: Iterable[str] = (),
        body: TestBody | None = None,
        setup: Hook | None = None,
        teardown: Hook | None = None,
    ) -> TestCase:
        if case is None:
            case = TestCase(name=test_name)
        else:
            case.name = test_name
        case.with_tags(*tags)
        if body is not None:
            case.with_body(body)
        if setup is not None:
            case.with_setup(setup)
        if teardown is not None:
            case.with_teardown(teardown)
        self.suite(suite_name).add(case)
        return case

    def register_plugin(self, plugin: object) -> int:
        """Let ``plugin`` register into this registry; return the tests it added."""
        label = getattr(plugin, "name", None) or type(plugin).__name__
        register = getattr(plugin, "register", None)
        if not callable(register):
            raise TypeError(
                f"Suite plugin '{label}' has no callable register(registry)."
            )
        suites_before = len(self._suites)
        tests_before = self.count_tests()
        register(self)
        added = self.count_tests() - tests_before
        log.debug(
            "Plugin '%s' added %d test(s) and %d new suite(s).",
            label,
            added,
            len(self._suites) - suites_before,
        )
        return added

    def register_entrypoint_plugins(self) -> int:
        """Register every plugin advertised under ``unitcheck.suites``."""
        added = 0
        for ep in entry_points(group=_ENTRYPOINT_GROUP):
            target = ep.load()
            # Entry points may name a plugin class or a ready instance.
            plugin = target() if isinstance(target, type) else target
            log.debug("Loading suite plugin from entry point '%s'.", ep.name)
            added += self.register_plugin(plugin)
        return added

    def list_suites(self) -> tuple[str, ...]:
        return tuple(self._suites)

    def count_tests(self) -> int:
        return sum(len(suite.tests) for suite in self._suites.values())

    def run(self, query: Query | None = None) -> Summary:
        from .runner import Executor

        return Executor(self).run(query)

    def __repr__(self) -> str:
        return f"Registry(suites={len(self._suites)}, tests={self.count_tests()})"
