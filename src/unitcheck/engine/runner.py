from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal

from ..models import Result, Summary, TestRecord, TestStatus
from ..query import Query
from .filter import SelectedSuite, select
from .registry import Registry, TestCase

log = logging.getLogger(__name__)

HookScope = Literal["suite", "test"]
RecordCallback = Callable[[TestRecord], None]


class Phase(str, Enum):
    setup = "Setup"
    test = "Test"
    teardown = "Teardown"


class OutcomeKind(str, Enum):
    ok = "ok"
    failed = "failed"
    errored = "errored"


@dataclass(frozen=True)
class PhaseOutcome:
    kind: OutcomeKind
    messages: tuple[str, ...] = ()
    cause: str | None = None

    @classmethod
    def ok(cls) -> PhaseOutcome:
        return cls(kind=OutcomeKind.ok)

    @classmethod
    def failed(cls, messages: list[str]) -> PhaseOutcome:
        return cls(kind=OutcomeKind.failed, messages=tuple(messages))

    @classmethod
    def errored(cls, cause: str) -> PhaseOutcome:
        return cls(kind=OutcomeKind.errored, cause=cause)

    @property
    def is_error(self) -> bool:
        return self.kind == OutcomeKind.errored


def describe_exception(exc: BaseException) -> str:
    text = str(exc)
    if text:
        return f"{type(exc).__name__}: {text}"
    if type(exc) is Exception:
        return "unknown"
    return type(exc).__name__


def run_phase(
    phase: Phase,
    scope: HookScope,
    owner: str,
    fn: Callable[[], object] | None,
) -> PhaseOutcome:
    """Invoke one phase callable and convert whatever happens into an outcome.

    Hooks return nothing meaningful; only the test body is expected to hand
    back a ``Result``.
    """
    if fn is None:
        if phase == Phase.test:
            return PhaseOutcome.errored("missing body")
        return PhaseOutcome.ok()

    try:
        returned = fn()
    except (Exception, SystemExit) as exc:  # test code faults stay in the phase
        cause = describe_exception(exc)
        log.warning("%s %s fault in '%s': %s", scope, phase.value, owner, cause)
        return PhaseOutcome.errored(cause)

    if phase != Phase.test:
        return PhaseOutcome.ok()
    if not isinstance(returned, Result):
        return PhaseOutcome.errored(
            f"invalid result type: expected Result, got {type(returned).__name__}"
        )
    if returned.success:
        return PhaseOutcome.ok()
    return PhaseOutcome.failed(returned.messages)


def format_error(phase: Phase, owner: str, cause: str | None) -> str:
    return f"{phase.value} | {owner} | {cause or 'unknown'}"


class Executor:
    """Runs selected suites sequentially and tallies a ``Summary``."""

    def __init__(
        self, registry: Registry, *, on_record: RecordCallback | None = None
    ) -> None:
        self.registry = registry
        self.on_record = on_record

    def run(self, query: Query | None = None) -> Summary:
        selection = select(self.registry, query)
        log.info(
            "Running %d test(s) from %d suite(s).",
            sum(len(item.tests) for item in selection),
            len(selection),
        )
        summary = Summary()
        for selected in selection:
            self._run_suite(selected, summary)
        log.info(
            "Finished: total=%d passed=%d failed=%d errors=%d",
            summary.total,
            summary.passed,
            len(summary.failed),
            len(summary.errors),
        )
        return summary

    def _run_suite(self, selected: SelectedSuite, summary: Summary) -> None:
        suite = selected.suite
        self._run_hook(Phase.setup, suite.name, suite.setup, summary)
        for name, case in selected.tests:
            record = self._run_test(suite.name, name, case, summary)
            summary.records.append(record)
            if self.on_record is not None:
                self.on_record(record)
        self._run_hook(Phase.teardown, suite.name, suite.teardown, summary)

    def _run_hook(
        self,
        phase: Phase,
        suite_name: str,
        fn: Callable[[], object] | None,
        summary: Summary,
    ) -> None:
        outcome = run_phase(phase, "suite", suite_name, fn)
        if outcome.is_error:
            summary.errors.append(suite_name)
            summary.suite_errors.append(
                format_error(phase, suite_name, outcome.cause)
            )

    def _run_test(
        self, suite_name: str, name: str, case: TestCase, summary: Summary
    ) -> TestRecord:
        if case.body is None:
            # Nothing of the test is invoked, hooks included.
            summary.errors.append(name)
            log.warning("Test '%s' in suite '%s' has no body.", name, suite_name)
            return TestRecord(
                suite=suite_name,
                name=name,
                status=TestStatus.error,
                errors=(format_error(Phase.test, name, "missing body"),),
            )

        errors: list[str] = []
        messages: tuple[str, ...] = ()

        setup = run_phase(Phase.setup, "test", name, case.setup)
        if setup.is_error:
            summary.errors.append(name)
            errors.append(format_error(Phase.setup, name, setup.cause))

        body = run_phase(Phase.test, "test", name, case.body)
        summary.total += 1
        if body.kind == OutcomeKind.ok:
            summary.passed += 1
        elif body.kind == OutcomeKind.failed:
            summary.failed.append(name)
            messages = body.messages
        else:
            summary.errors.append(name)
            errors.append(format_error(Phase.test, name, body.cause))

        teardown = run_phase(Phase.teardown, "test", name, case.teardown)
        if teardown.is_error:
            summary.errors.append(name)
            errors.append(format_error(Phase.teardown, name, teardown.cause))

        if errors:
            status = TestStatus.error
        elif body.kind == OutcomeKind.failed:
            status = TestStatus.failed
        else:
            status = TestStatus.passed
        return TestRecord(
            suite=suite_name,
            name=name,
            status=status,
            messages=messages,
            errors=tuple(errors),
        )
