from __future__ import annotations

import subprocess
import sys

import pytest

from diagtest.core import SetupError
from diagtest.core import sysroot as sysroot_module
from diagtest.core.sysroot import find_sysroot


def test_explicit_sysroot_wins() -> None:
    env = {"RUST_SYSROOT": "/from/env"}
    assert find_sysroot("/explicit", environ=env) == "/explicit"


def test_rustup_toolchain_layout() -> None:
    env = {"RUSTUP_HOME": "/home/dev/.rustup", "RUSTUP_TOOLCHAIN": "nightly-2019-01-15", "RUST_SYSROOT": "/x"}
    assert find_sysroot(environ=env) == "/home/dev/.rustup/toolchains/nightly-2019-01-15"


def test_rust_sysroot_variable() -> None:
    assert find_sysroot(environ={"RUST_SYSROOT": "/opt/rust"}) == "/opt/rust"


def test_falls_back_to_rustc(monkeypatch) -> None:
    calls = []

    def fake_run(argv, **kwargs):
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 0, stdout="/opt/rust/nightly\n", stderr="")

    monkeypatch.setattr(sysroot_module.subprocess, "run", fake_run)
    assert find_sysroot(environ={}) == "/opt/rust/nightly"
    assert calls == [["rustc", "--print", "sysroot"]]


def test_missing_rustc_is_setup_error(tmp_path) -> None:
    with pytest.raises(SetupError, match="Unable to locate sysroot"):
        find_sysroot(environ={}, rustc=str(tmp_path / "rustc"))


def test_failing_rustc_is_setup_error() -> None:
    with pytest.raises(SetupError, match="--print sysroot"):
        find_sysroot(environ={}, rustc=sys.executable)
