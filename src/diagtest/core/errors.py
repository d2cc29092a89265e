"""Error taxonomy shared by discovery, invocation and the CLI."""
from __future__ import annotations

from typing import Sequence


class DiagtestError(Exception):
    """Base class for all harness errors."""


class SetupError(DiagtestError):
    """Environment problem that aborts the whole run (not a case failure)."""


class FrontendCrash(DiagtestError):
    """The analysis front-end terminated abnormally."""


def format_messages(messages: Sequence[str]) -> str:
    return "[" + ", ".join(messages) + "]"


class DiagnosticMismatch(DiagtestError):
    """Produced diagnostics disagree with a fragment's expectations."""

    def __init__(self, text: str, remaining: Sequence[str]) -> None:
        super().__init__(text)
        self.remaining = tuple(remaining)


class UnexpectedDiagnostic(DiagnosticMismatch):
    def __init__(self, message: str, remaining: Sequence[str]) -> None:
        super().__init__(
            f"unexpected diagnostic: {message} (expected: {format_messages(remaining)})",
            remaining,
        )
        self.message = message


class MissingDiagnostics(DiagnosticMismatch):
    def __init__(self, remaining: Sequence[str]) -> None:
        super().__init__(f"missing expected diagnostics: {format_messages(remaining)}", remaining)
