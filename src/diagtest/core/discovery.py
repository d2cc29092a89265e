"""Enumerate fragments and give each one a fresh output directory."""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import List, Union

from .errors import SetupError
from .models import TestCase

logger = logging.getLogger(__name__)

TEMP_PREFIX = "diagtestTest"


def list_fragments(directory: Union[str, Path]) -> List[Path]:
    """Return the regular files directly inside ``directory``, sorted by name."""

    root = Path(directory)
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise SetupError(f"Failed to read fragment directory {root}: {exc}") from exc
    return sorted(entry for entry in entries if entry.is_file())


def discover_cases(directory: Union[str, Path]) -> List[TestCase]:
    """Create one isolated ``TestCase`` per fragment in ``directory``."""

    cases: List[TestCase] = []
    for fragment in list_fragments(directory):
        try:
            temp_root = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
        except OSError as exc:
            raise SetupError(f"Failed to create a temp dir: {exc}") from exc
        output_dir = temp_root / fragment.name
        try:
            output_dir.mkdir()
        except OSError as exc:
            raise SetupError(f"Failed to create test output dir {output_dir}: {exc}") from exc
        logger.debug("discovered %s -> %s", fragment, output_dir)
        cases.append(TestCase(fragment=fragment, output_dir=output_dir, temp_root=temp_root))
    return cases
