"""Data models for suite configuration files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from diagtest.core.expectations import MARKER
from diagtest.core.models import DEFAULT_ANALYZER_FLAGS, DEFAULT_CRATE_NAME
from diagtest.frontends.command import (
    DEFAULT_IGNORE_LEVELS,
    DEFAULT_IGNORE_MESSAGES,
    DEFAULT_OK_EXIT_CODES,
)

DEFAULT_DIRECTORY = "tests/run-pass"
DEFAULT_SUITE_FILE = "diagtest.yaml"


@dataclass(frozen=True)
class FrontendConfig:
    kind: str = "command"
    command: Sequence[str] = ("rustc",)
    callable: Optional[str] = None
    crate_name: str = DEFAULT_CRATE_NAME
    analyzer_flags: Sequence[str] = DEFAULT_ANALYZER_FLAGS
    extra_args: Sequence[str] = field(default_factory=tuple)
    env: Mapping[str, str] = field(default_factory=dict)
    ok_exit_codes: Sequence[int] = DEFAULT_OK_EXIT_CODES
    ignore_levels: Sequence[str] = DEFAULT_IGNORE_LEVELS
    ignore_messages: Sequence[str] = DEFAULT_IGNORE_MESSAGES


@dataclass(frozen=True)
class SuiteConfig:
    directory: Path = Path(DEFAULT_DIRECTORY)
    marker: str = MARKER
    jobs: Optional[int] = None
    sysroot: Optional[str] = None
    keep_output: bool = False
    frontend: FrontendConfig = field(default_factory=FrontendConfig)
    source: Optional[Path] = None


@dataclass(frozen=True)
class SuiteOptions:
    """Command-line overrides applied on top of a ``SuiteConfig``."""

    directory: Optional[str] = None
    jobs: Optional[int] = None
    sysroot: Optional[str] = None
    keep_output: bool = False
    list_only: bool = False
