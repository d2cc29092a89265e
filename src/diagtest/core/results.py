"""Result data structures produced by the suite runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .models import Diagnostic, TestCase

PASSED = "passed"
FAILED = "failed"
ERROR = "error"


@dataclass
class CaseResult:
    """Outcome of running a single fragment."""

    case: TestCase
    status: str
    duration_s: float
    diagnostics: Tuple[Diagnostic, ...] = tuple()
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == PASSED

    @property
    def outcome(self) -> int:
        """``0`` for a passing case, ``1`` otherwise."""

        return 0 if self.passed else 1


@dataclass
class SuiteResult:
    failures: int
    results: Tuple[CaseResult, ...] = field(default_factory=tuple)
    jobs: int = 1
    sysroot: str = ""
    duration_s: float = 0.0

    @property
    def passed(self) -> bool:
        return self.failures == 0
