from __future__ import annotations

import sys

import pytest

from unitcheck import Executor, Query, Registry, Result, equal, not_equal
from unitcheck.engine.runner import OutcomeKind, Phase, run_phase
from unitcheck.models import TestStatus


def _boom() -> None:
    raise RuntimeError("boom")


def test_math_suite_end_to_end() -> None:
    registry = Registry()
    registry.add_test("Math", "Addition", body=lambda: equal(2 + 2, 4))
    registry.add_test("Math", "Subtraction", body=lambda: equal(2 - 1, 5))

    summary = registry.run(Query())

    assert summary.total == 2
    assert summary.passed == 1
    assert summary.failed == ["Subtraction"]
    assert summary.errors == []
    assert summary.ok is False


def test_phases_run_in_order_for_each_test() -> None:
    calls: list[str] = []
    registry = Registry()
    registry.suite("S").with_setup(lambda: calls.append("suite setup")).with_teardown(
        lambda: calls.append("suite teardown")
    )
    for name in ("A", "B"):
        registry.add_test(
            "S",
            name,
            setup=lambda name=name: calls.append(f"{name} setup"),
            teardown=lambda name=name: calls.append(f"{name} teardown"),
            body=lambda name=name: calls.append(f"{name} body") or Result(),
        )

    Executor(registry).run()

    assert calls == [
        "suite setup",
        "A setup",
        "A body",
        "A teardown",
        "B setup",
        "B body",
        "B teardown",
        "suite teardown",
    ]


def test_setup_fault_is_isolated_to_its_test() -> None:
    torn_down: list[str] = []
    registry = Registry()
    registry.add_test(
        "S",
        "A",
        setup=_boom,
        teardown=lambda: torn_down.append("A"),
        body=lambda: Result(),
    )
    registry.add_test("S", "B", body=lambda: equal(1, 1))

    summary = registry.run()

    assert "A" in summary.errors
    assert torn_down == ["A"]
    assert [record.name for record in summary.records] == ["A", "B"]
    assert summary.records[1].status == TestStatus.passed
    assert summary.records[0].status == TestStatus.error
    assert summary.records[0].errors == ("Setup | A | RuntimeError: boom",)


def test_body_fault_still_runs_teardown_and_next_test() -> None:
    torn_down: list[str] = []
    registry = Registry()
    registry.add_test(
        "S", "A", body=_boom, teardown=lambda: torn_down.append("A")
    )
    registry.add_test("S", "B", body=lambda: equal(1, 1))

    summary = registry.run()

    assert torn_down == ["A"]
    assert summary.total == 2
    assert summary.passed == 1
    assert summary.failed == []
    assert summary.errors == ["A"]


def test_teardown_fault_is_reported_as_error() -> None:
    registry = Registry()
    registry.add_test("S", "A", body=lambda: Result(), teardown=_boom)

    summary = registry.run()

    assert summary.passed == 1
    assert summary.errors == ["A"]
    assert summary.records[0].errors == ("Teardown | A | RuntimeError: boom",)


def test_missing_body_is_an_error_without_counting_a_test() -> None:
    calls: list[str] = []
    registry = Registry()
    registry.add_test(
        "S",
        "Pending",
        setup=lambda: calls.append("setup"),
        teardown=lambda: calls.append("teardown"),
    )

    summary = registry.run()

    assert summary.total == 0
    assert summary.errors == ["Pending"]
    assert summary.records[0].errors == ("Test | Pending | missing body",)
    assert calls == []


def test_suite_hook_faults_do_not_stop_the_run() -> None:
    registry = Registry()
    registry.suite("Broken").with_setup(_boom).with_teardown(_boom)
    registry.add_test("Broken", "A", body=lambda: equal(1, 1))
    registry.add_test("Fine", "B", body=lambda: equal(1, 2))

    summary = registry.run()

    assert summary.total == 2
    assert summary.passed == 1
    assert summary.failed == ["B"]
    assert summary.errors == ["Broken", "Broken"]
    assert summary.suite_errors == [
        "Setup | Broken | RuntimeError: boom",
        "Teardown | Broken | RuntimeError: boom",
    ]


def test_failed_record_carries_check_messages() -> None:
    registry = Registry()
    registry.add_test(
        "Math",
        "Multiplication",
        body=lambda: equal(2 * 2, 5, "custom message") & not_equal(1, 1),
    )

    summary = registry.run()
    record = summary.records[0]

    assert record.status == TestStatus.failed
    assert len(record.messages) == 2
    assert record.messages[0].endswith("| custom message")
    assert record.messages[1].startswith("NotEqual | test_runner.py:")


def test_body_returning_wrong_type_is_an_error() -> None:
    registry = Registry()
    registry.add_test("S", "A", body=lambda: True)  # type: ignore[arg-type]

    summary = registry.run()

    assert summary.total == 1
    assert summary.errors == ["A"]
    assert "invalid result type" in summary.records[0].errors[0]


def test_only_filtered_tests_run() -> None:
    ran: list[str] = []
    registry = Registry()
    for suite, name, tags in [
        ("math", "slow", ["slow"]),
        ("math", "plain", []),
        ("core", "fast", ["fast"]),
    ]:
        registry.add_test(
            suite,
            name,
            tags=tags,
            body=lambda name=name: ran.append(name) or Result(),
        )

    summary = registry.run(Query(suites=["math"], tags=["fast", "slow"]))

    assert ran == ["slow"]
    assert summary.total == 1


def test_on_record_receives_each_record() -> None:
    seen: list[str] = []
    registry = Registry()
    registry.add_test("S", "A", body=lambda: Result())
    registry.add_test("S", "B", body=lambda: equal(1, 2))

    Executor(registry, on_record=lambda record: seen.append(record.name)).run()

    assert seen == ["A", "B"]


@pytest.mark.parametrize(
    ("fn", "phase", "kind", "cause"),
    [
        (None, Phase.setup, OutcomeKind.ok, None),
        (None, Phase.test, OutcomeKind.errored, "missing body"),
        (lambda: None, Phase.teardown, OutcomeKind.ok, None),
        (lambda: Result(), Phase.test, OutcomeKind.ok, None),
        (_boom, Phase.setup, OutcomeKind.errored, "RuntimeError: boom"),
    ],
)
def test_run_phase_outcomes(fn, phase, kind, cause) -> None:
    outcome = run_phase(phase, "test", "owner", fn)

    assert outcome.kind == kind
    assert outcome.cause == cause


def test_run_phase_reports_unknown_cause() -> None:
    def _silent() -> None:
        raise Exception()

    outcome = run_phase(Phase.setup, "suite", "owner", _silent)

    assert outcome.cause == "unknown"


def test_run_phase_failed_body_keeps_messages() -> None:
    outcome = run_phase(Phase.test, "test", "owner", lambda: equal(1, 2, "why"))

    assert outcome.kind == OutcomeKind.failed
    assert outcome.messages[0].endswith("| why")


def test_body_calling_sys_exit_does_not_halt_the_run() -> None:
    registry = Registry()
    registry.add_test("S", "A", body=lambda: sys.exit(3))
    registry.add_test("S", "B", body=lambda: equal(1, 1))

    summary = registry.run()

    assert summary.total == 2
    assert summary.passed == 1
    assert summary.errors == ["A"]
    assert summary.records[0].errors == ("Test | A | SystemExit: 3",)


def test_keyboard_interrupt_is_not_swallowed() -> None:
    def _interrupt() -> None:
        raise KeyboardInterrupt

    registry = Registry()
    registry.add_test("S", "A", body=_interrupt)

    with pytest.raises(KeyboardInterrupt):
        registry.run()
