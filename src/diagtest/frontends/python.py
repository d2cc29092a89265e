"""In-process front-end wrapping a Python callable."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from diagtest.core.models import FrontendOptions
from diagtest.utils.importing import import_string

from .base import BufferedSink, Frontend

if TYPE_CHECKING:  # pragma: no cover
    from diagtest.suite.models import FrontendConfig

AnalyzeCallable = Callable[[FrontendOptions, BufferedSink], None]


class CallableFrontend(Frontend):
    """Delegates each invocation to ``func(options, sink)``."""

    name = "python"

    def __init__(self, func: AnalyzeCallable) -> None:
        if not callable(func):
            raise TypeError(f"Front-end target {func!r} is not callable")
        self._func = func

    @classmethod
    def from_config(cls, config: "FrontendConfig") -> "CallableFrontend":
        if not config.callable:
            raise ValueError("Python front-end requires 'callable' (module:attr)")
        return cls(import_string(config.callable))

    def run(self, options: FrontendOptions, sink: BufferedSink) -> None:
        self._func(options, sink)
