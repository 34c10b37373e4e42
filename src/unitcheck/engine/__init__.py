from .filter import SelectedSuite, select, selected_tests
from .registry import Registry, TestCase, TestSuite
from .runner import Executor, HookScope, Phase, PhaseOutcome, run_phase

__all__ = [
    "Executor",
    "HookScope",
    "Phase",
    "PhaseOutcome",
    "Registry",
    "SelectedSuite",
    "TestCase",
    "TestSuite",
    "run_phase",
    "select",
    "selected_tests",
]
