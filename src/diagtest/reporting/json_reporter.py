"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import Any, Dict, Optional, Sequence

import click
from jsonschema import validate

from diagtest.core.models import TestCase
from diagtest.core.results import ERROR, FAILED, PASSED, CaseResult, SuiteResult
from diagtest.suite.models import SuiteConfig

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results to a JSON file (or stdout) validated against the schema."""

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = pathlib.Path(path) if path else None
        self._directory = ""

    def on_start(self, config: SuiteConfig, cases: Sequence[TestCase], *, jobs: int, sysroot: str) -> None:
        self._directory = str(config.directory)

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        pass

    def on_complete(self, suite: SuiteResult) -> None:
        payload = build_payload(suite, directory=self._directory)
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        text = json.dumps(payload, indent=2)
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def build_payload(suite: SuiteResult, *, directory: str = "") -> Dict[str, Any]:
    results = suite.results
    return {
        "schema_version": SCHEMA_VERSION,
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "summary": {
            "total": len(results),
            "passed": sum(1 for result in results if result.status == PASSED),
            "failed": sum(1 for result in results if result.status == FAILED),
            "errors": sum(1 for result in results if result.status == ERROR),
            "failures": suite.failures,
            "jobs": suite.jobs,
            "sysroot": suite.sysroot,
            "directory": directory,
            "duration_s": suite.duration_s,
        },
        "cases": [_case_to_dict(result) for result in results],
    }


def _case_to_dict(result: CaseResult) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "fragment": str(result.case.fragment),
        "output_dir": str(result.case.output_dir),
        "status": result.status,
        "duration_ms": result.duration_s * 1000,
        "diagnostics": [
            {
                "message": diagnostic.message,
                "level": diagnostic.level,
                "children": list(diagnostic.children),
            }
            for diagnostic in result.diagnostics
        ],
    }
    if result.error:
        record["error"] = result.error
    return record
