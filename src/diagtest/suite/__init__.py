"""Suite file loading; execution lives in ``diagtest.suite.runner``."""

from .loader import apply_options, load_suite, parse_suite
from .models import FrontendConfig, SuiteConfig, SuiteOptions

__all__ = [
    "FrontendConfig",
    "SuiteConfig",
    "SuiteOptions",
    "apply_options",
    "load_suite",
    "parse_suite",
]
