"""Resolve ``module:attr`` references found in suite files and plugins."""
from __future__ import annotations

import importlib
from typing import Any


def import_string(path: str) -> Any:
    """Return the object named by ``path`` (``module:attr`` or ``module.attr``)."""

    text = (path or "").strip()
    if not text:
        raise ValueError("Empty import path provided")
    module_name, sep, attr = text.partition(":")
    if not sep:
        module_name, _, attr = text.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Invalid import path '{path}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ImportError(f"Cannot import '{module_name}' for '{text}': {exc}") from exc
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise AttributeError(f"'{module_name}' has no attribute '{attr}'") from exc
    return target
