from __future__ import annotations

from typing import Any, Iterable

from .engine.filter import SelectedSuite
from .models import Summary, TestRecord, TestStatus

_STATUS_LABELS = {
    TestStatus.passed: "PASS",
    TestStatus.failed: "FAIL",
    TestStatus.error: "ERROR",
}


def report_to_dict(summary: Summary) -> dict[str, Any]:
    return summary.to_dict()


def render_record(record: TestRecord, *, verbose: bool = False) -> list[str]:
    """Lines describing one test; passing tests are only shown when verbose."""
    if record.status == TestStatus.passed and not verbose:
        return []
    label = _STATUS_LABELS[record.status]
    lines = [f"{label} | {record.suite} | {record.name}"]
    lines.extend(f"    {message}" for message in record.messages)
    lines.extend(f"    {error}" for error in record.errors)
    return lines


def render_summary(summary: Summary) -> list[str]:
    lines = list(summary.suite_errors)
    lines.append(
        f"SUMMARY | total={summary.total} passed={summary.passed} "
        f"failed={len(summary.failed)} errors={len(summary.errors)}"
    )
    if summary.failed:
        lines.append("FAILED | " + ", ".join(summary.failed))
    if summary.errors:
        lines.append("ERRORS | " + ", ".join(summary.errors))
    return lines


def render_report(summary: Summary, *, verbose: bool = False) -> str:
    lines: list[str] = []
    for record in summary.records:
        lines.extend(render_record(record, verbose=verbose))
    lines.extend(render_summary(summary))
    return "\n".join(lines)


def render_listing(selection: Iterable[SelectedSuite]) -> str:
    lines: list[str] = []
    for selected in selection:
        lines.append(_with_tags(selected.name, selected.suite.tags))
        for name, case in selected.tests:
            lines.append("    " + _with_tags(name, case.tags))
    return "\n".join(lines)


def _with_tags(name: str, tags: list[str]) -> str:
    if not tags:
        return name
    return f"{name} [{', '.join(tags)}]"
