"""Core models and helpers exposed at the package level."""
from .discovery import discover_cases, list_fragments
from .errors import (
    DiagnosticMismatch,
    DiagtestError,
    FrontendCrash,
    MissingDiagnostics,
    SetupError,
    UnexpectedDiagnostic,
)
from .expectations import MARKER, ExpectedDiagnostics, load_expectations, parse_expected
from .models import Diagnostic, FrontendOptions, TestCase
from .results import CaseResult, SuiteResult

__all__ = [
    "MARKER",
    "CaseResult",
    "Diagnostic",
    "DiagnosticMismatch",
    "DiagtestError",
    "ExpectedDiagnostics",
    "FrontendCrash",
    "FrontendOptions",
    "MissingDiagnostics",
    "SetupError",
    "SuiteResult",
    "TestCase",
    "UnexpectedDiagnostic",
    "discover_cases",
    "list_fragments",
    "load_expectations",
    "parse_expected",
]
