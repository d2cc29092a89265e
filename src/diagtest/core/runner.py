"""Isolated per-fragment invocation and the parallel suite runner."""
from __future__ import annotations

import functools
import logging
import operator
import os
import queue
import shutil
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import click

from diagtest.frontends.base import BufferedSink, Frontend

from .discovery import discover_cases
from .errors import DiagnosticMismatch, SetupError
from .expectations import MARKER, ExpectedDiagnostics
from .models import DEFAULT_ANALYZER_FLAGS, DEFAULT_CRATE_NAME, FrontendOptions, TestCase
from .results import ERROR, FAILED, PASSED, CaseResult, SuiteResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[CaseResult, int, int], None]


def default_jobs() -> int:
    """Number of CPUs this process may run on."""

    if hasattr(os, "sched_getaffinity"):
        try:
            return len(os.sched_getaffinity(0)) or 1
        except OSError:
            pass
    return os.cpu_count() or 1


def invoke_case(
    case: TestCase,
    frontend: Frontend,
    sysroot: str,
    *,
    marker: str = MARKER,
    crate_name: str = DEFAULT_CRATE_NAME,
    analyzer_flags: Sequence[str] = DEFAULT_ANALYZER_FLAGS,
) -> CaseResult:
    """Analyze one fragment and match what it reports against its annotations.

    Anything that goes wrong inside the front-end or the matching step is
    turned into a failing ``CaseResult``; only ``SetupError`` escapes.
    """

    start = time.perf_counter()
    options = FrontendOptions(
        fragment=case.fragment,
        output_dir=case.output_dir,
        sysroot=sysroot,
        crate_name=crate_name,
        analyzer_flags=tuple(analyzer_flags),
    )
    sink = BufferedSink()
    error: Optional[str] = None
    try:
        expected = ExpectedDiagnostics.from_fragment(case.fragment, marker)
        frontend.run(options, sink)
        expected.check(sink.diagnostics)
        status = PASSED
    except SetupError:
        raise
    except DiagnosticMismatch as exc:
        status = FAILED
        error = str(exc)
    except (Exception, SystemExit) as exc:
        logger.debug("case crashed: %s", case.fragment, exc_info=True)
        status = ERROR
        error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
    return CaseResult(
        case=case,
        status=status,
        duration_s=time.perf_counter() - start,
        diagnostics=sink.diagnostics,
        error=error,
    )


class SuiteRunner:
    """Runs every case on a fixed-size thread pool and counts failures.

    Each worker drains a shared queue of cases and keeps its own running
    total; the per-worker totals are summed once all workers finish.
    """

    def __init__(
        self,
        frontend: Frontend,
        sysroot: str,
        *,
        jobs: Optional[int] = None,
        marker: str = MARKER,
        crate_name: str = DEFAULT_CRATE_NAME,
        analyzer_flags: Sequence[str] = DEFAULT_ANALYZER_FLAGS,
        keep_output: bool = False,
    ) -> None:
        if jobs is not None and jobs < 1:
            raise ValueError("jobs must be a positive integer")
        self._frontend = frontend
        self._sysroot = sysroot
        self._jobs = jobs or default_jobs()
        self._marker = marker
        self._crate_name = crate_name
        self._analyzer_flags = tuple(analyzer_flags)
        self._keep_output = keep_output

    @property
    def jobs(self) -> int:
        return self._jobs

    def run(
        self,
        cases: Sequence[TestCase],
        *,
        on_result: Optional[ResultCallback] = None,
    ) -> SuiteResult:
        cases = list(cases)
        total = len(cases)
        workers = max(1, min(self._jobs, total))
        pending: "queue.SimpleQueue[TestCase]" = queue.SimpleQueue()
        for case in cases:
            pending.put(case)
        stop = threading.Event()
        report_lock = threading.Lock()
        reported = [0]

        def report(result: CaseResult) -> None:
            with report_lock:
                reported[0] += 1
                if on_result:
                    on_result(result, reported[0], total)

        logger.debug("running %d case(s) on %d worker(s)", total, workers)
        start = time.perf_counter()
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="diagtest") as pool:
                futures = [pool.submit(self._drain, pending, stop, report) for _ in range(workers)]
                partials = [future.result() for future in futures]
        finally:
            self._discard(pending)
        failures = functools.reduce(operator.add, (count for count, _ in partials), 0)
        results = sorted(
            (result for _, worker_results in partials for result in worker_results),
            key=lambda result: str(result.case.fragment),
        )
        return SuiteResult(
            failures=failures,
            results=tuple(results),
            jobs=workers,
            sysroot=self._sysroot,
            duration_s=time.perf_counter() - start,
        )

    def run_case(self, case: TestCase) -> CaseResult:
        try:
            return invoke_case(
                case,
                self._frontend,
                self._sysroot,
                marker=self._marker,
                crate_name=self._crate_name,
                analyzer_flags=self._analyzer_flags,
            )
        finally:
            if not self._keep_output and case.temp_root is not None:
                shutil.rmtree(case.temp_root, ignore_errors=True)

    def _discard(self, pending: "queue.SimpleQueue[TestCase]") -> None:
        """Remove output of cases that never ran."""

        while True:
            try:
                case = pending.get_nowait()
            except queue.Empty:
                return
            if not self._keep_output and case.temp_root is not None:
                shutil.rmtree(case.temp_root, ignore_errors=True)

    def _drain(
        self,
        pending: "queue.SimpleQueue[TestCase]",
        stop: threading.Event,
        report: Callable[[CaseResult], None],
    ) -> Tuple[int, List[CaseResult]]:
        failures = 0
        results: List[CaseResult] = []
        while not stop.is_set():
            try:
                case = pending.get_nowait()
            except queue.Empty:
                break
            try:
                result = self.run_case(case)
            except BaseException:
                stop.set()
                raise
            logger.debug("%s -> %s", case.fragment, result.status)
            failures += result.outcome
            results.append(result)
            report(result)
        return failures, results


def _echo_failure(result: CaseResult, index: int, total: int) -> None:
    if not result.passed:
        click.echo(f"{result.case.fragment} failed")


def run_directory(
    directory: Union[str, Path],
    frontend: Frontend,
    sysroot: str,
    *,
    jobs: Optional[int] = None,
    marker: str = MARKER,
    keep_output: bool = False,
) -> int:
    """Run every fragment in ``directory`` and return the number of failures."""

    cases = discover_cases(directory)
    runner = SuiteRunner(frontend, sysroot, jobs=jobs, marker=marker, keep_output=keep_output)
    return runner.run(cases, on_result=_echo_failure).failures
