from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class CheckKind(str, Enum):
    equal = "Equal"
    not_equal = "NotEqual"
    true = "True"
    false = "False"
    null = "Null"
    not_null = "NotNull"


class TestStatus(str, Enum):
    __test__ = False

    passed = "passed"
    failed = "failed"
    error = "error"


@dataclass(frozen=True)
class Location:
    file: str
    line: int

    @classmethod
    def here(cls, depth: int = 1) -> Location:
        """Location of the frame ``depth`` levels above the caller."""
        frame = sys._getframe(depth + 1)
        return cls(file=Path(frame.f_code.co_filename).name, line=frame.f_lineno)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass
class Result:
    success: bool = True
    messages: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        kind: CheckKind | str,
        location: Location,
        message: str | None = None,
    ) -> Result:
        label = kind.value if isinstance(kind, CheckKind) else str(kind)
        line = f"{label} | {location}"
        if message:
            line = f"{line} | {message}"
        return cls(success=False, messages=[line])

    def __bool__(self) -> bool:
        return self.success

    def __and__(self, other: Result) -> Result:
        if not isinstance(other, Result):
            return NotImplemented
        combined = Result(success=self.success, messages=list(self.messages))
        combined &= other
        return combined

    def __iand__(self, other: Result) -> Result:
        if not isinstance(other, Result):
            return NotImplemented
        self.success = self.success and other.success
        if not other.success:
            self.messages.extend(other.messages)
        return self


def combine(first: Result, second: Result) -> Result:
    return first & second


@dataclass(frozen=True)
class TestRecord:
    __test__ = False

    suite: str
    name: str
    status: TestStatus
    messages: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "suite": self.suite,
            "name": self.name,
            "status": self.status.value,
            "messages": list(self.messages),
            "errors": list(self.errors),
        }


@dataclass
class Summary:
    total: int = 0
    passed: int = 0
    failed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    suite_errors: list[str] = field(default_factory=list)
    records: list[TestRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": list(self.failed),
            "errors": list(self.errors),
            "suite_errors": list(self.suite_errors),
            "ok": self.ok,
            "records": [record.to_dict() for record in self.records],
        }
