"""Reporter interface definitions."""
from __future__ import annotations

from typing import Sequence

from diagtest.core.models import TestCase
from diagtest.core.results import CaseResult, SuiteResult
from diagtest.suite.models import SuiteConfig


class Reporter:
    """Interface for output renderers."""

    def on_start(
        self, config: SuiteConfig, cases: Sequence[TestCase], *, jobs: int, sysroot: str
    ) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, suite: SuiteResult) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def start(self, config: SuiteConfig, cases: Sequence[TestCase], *, jobs: int, sysroot: str) -> None:
        for reporter in self._reporters:
            reporter.on_start(config, cases, jobs=jobs, sysroot=sysroot)

    def handle_result(self, result: CaseResult, index: int, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_case_result(result, index, total)

    def complete(self, suite: SuiteResult) -> None:
        for reporter in self._reporters:
            reporter.on_complete(suite)
