from __future__ import annotations

from typing import Any

from .approx import approx_equal
from .models import CheckKind, Location, Result


def _outcome(
    passed: bool,
    kind: CheckKind,
    message: str | None,
    location: Location | None,
) -> Result:
    if passed:
        return Result()
    # Two frames up: past _outcome and the public check function.
    return Result.failure(kind, location or Location.here(depth=2), message)


def equal(
    a: Any, b: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(approx_equal(a, b), CheckKind.equal, message, location)


def not_equal(
    a: Any, b: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(not approx_equal(a, b), CheckKind.not_equal, message, location)


def is_true(
    value: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(bool(value), CheckKind.true, message, location)


def is_false(
    value: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(not value, CheckKind.false, message, location)


def is_none(
    value: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(value is None, CheckKind.null, message, location)


def is_not_none(
    value: Any, message: str | None = None, *, location: Location | None = None
) -> Result:
    return _outcome(value is not None, CheckKind.not_null, message, location)
