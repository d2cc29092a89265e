"""Front-end abstractions and the registry of front-end kinds."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Tuple

from diagtest.core.models import Diagnostic, FrontendOptions

if TYPE_CHECKING:  # pragma: no cover
    from diagtest.suite.models import FrontendConfig


class BufferedSink:
    """Collects diagnostics instead of presenting them."""

    def __init__(self) -> None:
        self._buffer: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self._buffer.append(diagnostic)

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._buffer)


class Frontend:
    """Base interface for analysis front-ends.

    ``run`` blocks until the analysis of one fragment is complete and must
    hand every diagnostic to ``sink``. Raising signals an abnormal
    termination of the front-end.
    """

    name: str = ""

    def run(self, options: FrontendOptions, sink: BufferedSink) -> None:
        raise NotImplementedError


FrontendFactory = Callable[["FrontendConfig"], Frontend]


class FrontendManager:
    """Registry for front-end factories keyed by kind."""

    def __init__(self) -> None:
        self._factories: Dict[str, FrontendFactory] = {}

    def register(self, kind: str, factory: FrontendFactory) -> None:
        if kind in self._factories:
            raise ValueError(f"Front-end kind '{kind}' already registered")
        self._factories[kind] = factory

    def create(self, config: "FrontendConfig") -> Frontend:
        factory = self._factories.get(config.kind)
        if factory is None:
            known = ", ".join(sorted(self._factories)) or "none"
            raise KeyError(f"No front-end registered for kind={config.kind!r} (known: {known})")
        return factory(config)

    def kinds(self) -> Iterable[str]:
        return tuple(self._factories)


frontend_manager = FrontendManager()
