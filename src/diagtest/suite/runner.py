"""Execute a loaded suite and render its reports."""
from __future__ import annotations

import logging

import click

from diagtest import bootstrap
from diagtest.core.discovery import discover_cases, list_fragments
from diagtest.core.runner import SuiteRunner
from diagtest.core.sysroot import find_sysroot
from diagtest.frontends import frontend_manager
from diagtest.reporting import JsonReporter, ReportManager, Reporter, TerminalReporter

from .models import SuiteConfig

logger = logging.getLogger(__name__)


def run_suite(
    config: SuiteConfig,
    *,
    list_only: bool = False,
    report_format: str = "terminal",
    report_path: str | None = None,
    use_color: bool = True,
    verbose: bool = False,
) -> int:
    """Run the suite; returns process exit code (0 success, 1 failures).

    Setup problems raise ``SetupError`` before any case runs.
    """

    if list_only:
        for fragment in list_fragments(config.directory):
            click.echo(str(fragment))
        return 0
    bootstrap()
    frontend = frontend_manager.create(config.frontend)
    sysroot = find_sysroot(config.sysroot)
    logger.info("using sysroot %s", sysroot)
    cases = discover_cases(config.directory)
    runner = SuiteRunner(
        frontend,
        sysroot,
        jobs=config.jobs,
        marker=config.marker,
        crate_name=config.frontend.crate_name,
        analyzer_flags=config.frontend.analyzer_flags,
        keep_output=config.keep_output,
    )
    json_to_stdout = report_format == "json" and not report_path
    # stdout carries only the JSON document; terminal output moves to stderr.
    reporters: list[Reporter] = [TerminalReporter(use_color=use_color, verbose=verbose, err=json_to_stdout)]
    if report_format == "json":
        reporters.append(JsonReporter(report_path))
    manager = ReportManager(reporters)
    manager.start(config, cases, jobs=min(runner.jobs, max(len(cases), 1)), sysroot=sysroot)
    suite = runner.run(cases, on_result=manager.handle_result)
    manager.complete(suite)
    return 0 if suite.passed else 1
