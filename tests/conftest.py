from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from diagtest import bootstrap
from diagtest.frontends import CallableFrontend

from fake_analyzer import analyze



@pytest.fixture(scope="session", autouse=True)
def setup_diagtest_frontends() -> None:
    """Register built-in front-ends once for the entire test session."""

    bootstrap()


@pytest.fixture
def frontend() -> CallableFrontend:
    return CallableFrontend(analyze)


@pytest.fixture
def fragments(tmp_path: Path) -> Path:
    directory = tmp_path / "fragments"
    directory.mkdir()
    return directory


@pytest.fixture
def write_fragment(fragments: Path) -> Callable[..., Path]:
    def _write(name: str, *lines: str) -> Path:
        path = fragments / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
