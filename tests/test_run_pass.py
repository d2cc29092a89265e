from __future__ import annotations

from pathlib import Path

from diagtest.core.runner import run_directory
from diagtest.frontends import CallableFrontend

from fake_analyzer import FAKE_SYSROOT, analyze

RUN_PASS = Path(__file__).parent / "run-pass"


def test_run_pass() -> None:
    assert run_directory(RUN_PASS, CallableFrontend(analyze), FAKE_SYSROOT) == 0
