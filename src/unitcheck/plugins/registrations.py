from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from ..models import Result

if TYPE_CHECKING:
    from ..engine.registry import Hook, Registry

log = logging.getLogger(__name__)

RegistrationFn = Callable[["Registry"], None]


class Registrations:
    """Deferred registration callbacks, applied to a registry before a run.

    Modules declare tests at import time against a ``Registrations`` object
    instead of a shared registry; ``apply`` replays the callbacks in
    declaration order. The object satisfies the ``SuitePlugin`` protocol, so
    it can also be handed to ``Registry.register_plugin`` or advertised as an
    entry point.
    """

    def __init__(self, name: str = "registrations") -> None:
        self.name = name
        self._callbacks: list[RegistrationFn] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: RegistrationFn) -> RegistrationFn:
        if not callable(callback):
            raise TypeError("Registration callback must be callable.")
        self._callbacks.append(callback)
        return callback

    def register(self, registry: "Registry") -> None:
        self.apply(registry)

    def apply(self, registry: "Registry") -> None:
        log.debug("Applying %d registration(s) from '%s'.", len(self), self.name)
        for callback in self._callbacks:
            callback(registry)

    def test(
        self,
        suite: str,
        name: str | None = None,
        *,
        tags: Iterable[str] = (),
        setup: "Hook | None" = None,
        teardown: "Hook | None" = None,
    ) -> Callable[[Callable[[], Result]], Callable[[], Result]]:
        """Decorator registering the wrapped function as a test body."""
        tag_list = list(tags)

        def decorator(fn: Callable[[], Result]) -> Callable[[], Result]:
            test_name = name or fn.__name__

            def _register(registry: "Registry") -> None:
                registry.add_test(
                    suite,
                    test_name,
                    tags=tag_list,
                    body=fn,
                    setup=setup,
                    teardown=teardown,
                )

            self.add(_register)
            return fn

        return decorator

    def suite(
        self,
        name: str,
        *,
        tags: Iterable[str] = (),
        setup: "Hook | None" = None,
        teardown: "Hook | None" = None,
    ) -> None:
        tag_list = list(tags)

        def _register(registry: "Registry") -> None:
            created = registry.suite(name).with_tags(*tag_list)
            if setup is not None:
                created.with_setup(setup)
            if teardown is not None:
                created.with_teardown(teardown)

        self.add(_register)
