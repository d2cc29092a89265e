"""Terminal reporter rendering failures and the run summary."""
from __future__ import annotations

from typing import Sequence

import click
from colorama import init as colorama_init

from diagtest.core.models import TestCase
from diagtest.core.results import ERROR, FAILED, PASSED, CaseResult, SuiteResult
from diagtest.suite.models import SuiteConfig

from .base import Reporter


STATUS_COLORS = {
    PASSED: "green",
    FAILED: "red",
    ERROR: "yellow",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout.

    Every failing fragment produces a ``<fragment path> failed`` line,
    followed by the reason indented underneath. With ``err=True`` all
    output goes to stderr.
    """

    def __init__(self, *, use_color: bool = True, verbose: bool = False, err: bool = False) -> None:
        self._use_color = use_color
        self._verbose = verbose
        self._err = err

    def on_start(self, config: SuiteConfig, cases: Sequence[TestCase], *, jobs: int, sysroot: str) -> None:
        if self._use_color:
            colorama_init()
        self._echo(
            self._styled(
                f"Running {len(cases)} fragment(s) from {config.directory} with {jobs} job(s)",
                force_color="cyan",
            )
        )
        if self._verbose:
            self._echo(f"sysroot: {sysroot}")

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        if result.passed:
            if self._verbose:
                ms = result.duration_s * 1000
                self._echo(
                    f"[{index}/{total}] {result.case.identifier()} -> "
                    f"{self._styled(result.status.upper())} ({ms:.2f} ms)"
                )
            return
        self._echo(f"{result.case.identifier()} failed")
        label = self._styled(result.status.upper())
        self._echo(f"    {label}: {result.error or 'no details'}")
        if self._verbose and result.diagnostics:
            self._echo("    produced:")
            for diagnostic in result.diagnostics:
                self._echo(f"      - {diagnostic.message}")
                for child in diagnostic.children:
                    self._echo(f"        note: {child}")

    def on_complete(self, suite: SuiteResult) -> None:
        results = suite.results
        passed = sum(1 for result in results if result.status == PASSED)
        failed = sum(1 for result in results if result.status == FAILED)
        errors = sum(1 for result in results if result.status == ERROR)
        self._echo(
            self._styled(
                f"Summary: total={len(results)} passed={passed} failed={failed} errors={errors} "
                f"duration={suite.duration_s:.2f}s",
                force_color="green" if suite.passed else "red",
            )
        )

    def _echo(self, text: str) -> None:
        click.echo(text, err=self._err)

    def _styled(self, text: str, *, force_color: str | None = None) -> str:
        if not self._use_color:
            return text
        color = force_color or STATUS_COLORS.get(text.lower(), None)
        if color:
            return click.style(text, fg=color)
        return text
