from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..engine.registry import Registry


class SuitePlugin(Protocol):
    name: str

    def register(self, registry: "Registry") -> None: ...
