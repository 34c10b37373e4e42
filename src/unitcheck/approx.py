"""Approximate equality for numeric check operands.

Integral and non-numeric values compare exactly. Floating-point values
(Python ``float`` or any numpy floating scalar) compare within a tolerance
that has an absolute floor near zero and a relative term at scale::

    diff = |a - b|
    norm = min(|a + b|, finfo.max)
    equal  <=>  diff < max(finfo.smallest_normal, 128 * finfo.eps * norm)
"""

from __future__ import annotations

from numbers import Integral
from typing import Any

import numpy as np

RELATIVE_EPSILON_FACTOR = 128


def is_floating(value: Any) -> bool:
    return isinstance(value, (float, np.floating))


def floating_dtype(a: Any, b: Any) -> np.dtype:
    """Floating dtype both operands are compared in.

    Python scalars adopt the numpy operand's type; two Python scalars are
    compared as IEEE doubles.
    """
    typed = [value.dtype for value in (a, b) if isinstance(value, np.generic)]
    if not typed:
        return np.dtype(np.float64)
    dtype = np.result_type(*typed)
    if not np.issubdtype(dtype, np.floating):
        return np.dtype(np.float64)
    return dtype


def relative_epsilon(dtype: np.dtype) -> np.floating:
    info = np.finfo(dtype)
    return info.dtype.type(RELATIVE_EPSILON_FACTOR) * info.eps


def absolute_threshold(dtype: np.dtype) -> np.floating:
    return np.finfo(dtype).smallest_normal


def approx_equal(a: Any, b: Any) -> bool:
    if not (is_floating(a) or is_floating(b)):
        return _exact_equal(a, b)
    if not (_is_real(a) and _is_real(b)):
        return _exact_equal(a, b)
    return _float_equal(a, b)


def _float_equal(a: Any, b: Any) -> bool:
    dtype = floating_dtype(a, b)
    info = np.finfo(dtype)
    with np.errstate(over="ignore", invalid="ignore"):
        try:
            x = dtype.type(a)
            y = dtype.type(b)
        except OverflowError:
            # An integer beyond the float range; Python compares it exactly.
            return _exact_equal(a, b)

        # NaN never passes this or the tolerance test below.
        if x == y:
            return True

        diff = np.abs(x - y)
        norm = np.minimum(np.abs(x + y), info.max)
        tolerance = np.maximum(
            absolute_threshold(dtype), relative_epsilon(dtype) * norm
        )
        return bool(diff < tolerance)


def _is_real(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (float, np.floating, Integral, np.integer))


def _exact_equal(a: Any, b: Any) -> bool:
    outcome = a == b
    if isinstance(outcome, np.ndarray):
        return bool(outcome.all())
    return bool(outcome)
