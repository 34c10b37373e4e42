from __future__ import annotations

from typing import Iterable

from .engine import Executor, Registry
from .engine.runner import RecordCallback
from .models import Summary
from .plugins import SuitePlugin
from .query import Query


def create_registry(
    plugins: Iterable[SuitePlugin] = (), *, load_entrypoints: bool = True
) -> Registry:
    """Build a registry and complete every registration before returning it."""
    registry = Registry()
    for plugin in plugins:
        registry.register_plugin(plugin)
    if load_entrypoints:
        registry.register_entrypoint_plugins()
    return registry


def run(
    registry: Registry,
    query: Query | None = None,
    *,
    suites: Iterable[str] | str | None = None,
    tags: Iterable[str] | str | None = None,
    case_sensitive: bool = False,
    on_record: RecordCallback | None = None,
) -> Summary:
    if query is None:
        query = Query(
            suites=suites or [],
            tags=tags or [],
            case_sensitive=case_sensitive,
        )
    return Executor(registry, on_record=on_record).run(query)
