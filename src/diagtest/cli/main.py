"""CLI entry point for diagtest."""
from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from diagtest import __version__, bootstrap
from diagtest.suite import SuiteOptions, apply_options, load_suite
from diagtest.suite.runner import run_suite


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"diagtest {__version__}")
    raise click.exceptions.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the diagtest version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for diagtest."""

    _configure_logging(verbose)
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("directory", required=False, type=click.Path(file_okay=False))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML suite file (defaults to ./diagtest.yaml when present).",
)
@click.option("--jobs", "-j", type=click.IntRange(min=1), help="Worker count (defaults to available CPUs).")
@click.option("--sysroot", type=str, help="Toolchain system root passed to the front-end.")
@click.option("--keep-output", is_flag=True, help="Keep per-case output directories.")
@click.option("--list", "list_only", is_flag=True, help="List fragments without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    directory: Optional[str],
    config_path: Optional[str],
    jobs: Optional[int],
    sysroot: Optional[str],
    keep_output: bool,
    list_only: bool,
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Run every fragment in DIRECTORY and check its annotated diagnostics."""

    options = SuiteOptions(
        directory=directory,
        jobs=jobs,
        sysroot=sysroot,
        keep_output=keep_output,
        list_only=list_only,
    )
    try:
        config = apply_options(load_suite(config_path), options)
        exit_code = run_suite(
            config,
            list_only=options.list_only,
            report_format=report_format,
            report_path=report_path,
            use_color=not no_color,
            verbose=state.verbose,
        )
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="diagtest", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
