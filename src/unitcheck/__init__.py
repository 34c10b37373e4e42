"""Embeddable test registry and runner with accumulating checks."""

from .api import create_registry, run
from .approx import approx_equal
from .checks import equal, is_false, is_none, is_not_none, is_true, not_equal
from .engine import Executor, Registry, TestCase, TestSuite, select
from .models import CheckKind, Location, Result, Summary, TestRecord, combine
from .plugins import Registrations
from .query import Query, RunOptions
from .reporting import render_listing, render_report, report_to_dict

__all__ = [
    "CheckKind",
    "Executor",
    "Location",
    "Query",
    "Registrations",
    "Registry",
    "Result",
    "RunOptions",
    "Summary",
    "TestCase",
    "TestRecord",
    "TestSuite",
    "approx_equal",
    "combine",
    "create_registry",
    "equal",
    "is_false",
    "is_none",
    "is_not_none",
    "is_true",
    "not_equal",
    "render_listing",
    "render_report",
    "report_to_dict",
    "run",
    "select",
]
