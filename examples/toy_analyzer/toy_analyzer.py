"""A tiny line-based analyzer registered as the ``toy`` front-end kind.

Run from this directory with::

    DIAGTEST_PLUGINS=toy_analyzer PYTHONPATH=. diagtest run
"""
from __future__ import annotations

from pathlib import Path

from diagtest.core.models import Diagnostic, FrontendOptions
from diagtest.frontends import BufferedSink, CallableFrontend, frontend_manager


def analyze(options: FrontendOptions, sink: BufferedSink) -> None:
    for line in Path(options.fragment).read_text(encoding="utf-8").splitlines():
        code = line.split("//", 1)[0]
        if "unsafe {" in code:
            sink.emit(Diagnostic("unsafe block", level="warning"))
        if ".unwrap()" in code:
            sink.emit(
                Diagnostic(
                    "call to unwrap may panic",
                    children=("consider propagating the error with `?`",),
                    level="warning",
                )
            )


def register() -> None:
    frontend_manager.register("toy", lambda config: CallableFrontend(analyze))
