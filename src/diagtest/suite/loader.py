"""YAML loader and validation for suite files."""
from __future__ import annotations

import shlex
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml
from jsonschema import Draft7Validator

from diagtest.core.errors import SetupError

from .models import DEFAULT_SUITE_FILE, FrontendConfig, SuiteConfig, SuiteOptions

_STR_LIST = {"type": "array", "items": {"type": "string"}}

SUITE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "diagtest suite",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "directory": {"type": "string", "minLength": 1},
        "marker": {"type": "string", "minLength": 1},
        "jobs": {"type": "integer", "minimum": 1},
        "sysroot": {"type": "string", "minLength": 1},
        "keep_output": {"type": "boolean"},
        "frontend": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "kind": {"type": "string", "minLength": 1},
                "command": {
                    "oneOf": [
                        {"type": "string", "minLength": 1},
                        {"type": "array", "items": {"type": "string"}, "minItems": 1},
                    ]
                },
                "callable": {"type": "string", "minLength": 1},
                "crate_name": {"type": "string", "minLength": 1},
                "analyzer_flags": _STR_LIST,
                "extra_args": _STR_LIST,
                "env": {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}},
                "ok_exit_codes": {"type": "array", "items": {"type": "integer"}, "minItems": 1},
                "ignore_levels": _STR_LIST,
                "ignore_messages": _STR_LIST,
            },
        },
    },
}

_validator = Draft7Validator(SUITE_SCHEMA)


def load_suite(path: Optional[str] = None) -> SuiteConfig:
    """Load a suite file, or return defaults when no file is given or found.

    An explicit ``path`` must exist; the implicit ``diagtest.yaml`` lookup in
    the working directory is optional.
    """

    if path is None:
        candidate = Path(DEFAULT_SUITE_FILE)
        if not candidate.is_file():
            return SuiteConfig()
        path = str(candidate)
    suite_path = Path(path).expanduser().resolve()
    try:
        raw = yaml.safe_load(suite_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise SetupError(f"Unable to read suite file {suite_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SetupError(f"Invalid YAML in suite file {suite_path}: {exc}") from exc
    return parse_suite(raw, base=suite_path.parent, source=suite_path)


def parse_suite(raw: Any, *, base: Path, source: Optional[Path] = None) -> SuiteConfig:
    if not isinstance(raw, Mapping):
        raise SetupError("Suite file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise SetupError(f"Suite schema validation failed: {messages}")
    defaults = SuiteConfig()
    directory = Path(raw.get("directory", str(defaults.directory))).expanduser()
    if not directory.is_absolute():
        directory = base / directory
    frontend = _parse_frontend(raw.get("frontend") or {})
    return SuiteConfig(
        directory=directory,
        marker=str(raw.get("marker", defaults.marker)),
        jobs=raw.get("jobs"),
        sysroot=raw.get("sysroot"),
        keep_output=bool(raw.get("keep_output", defaults.keep_output)),
        frontend=frontend,
        source=source,
    )


def _parse_frontend(raw: Mapping[str, Any]) -> FrontendConfig:
    defaults = FrontendConfig()
    kind = str(raw.get("kind", defaults.kind))
    command = raw.get("command", defaults.command)
    if isinstance(command, str):
        command = shlex.split(command)
    if kind == "python" and not raw.get("callable"):
        raise SetupError("frontend.callable is required when frontend.kind is 'python'")
    return FrontendConfig(
        kind=kind,
        command=tuple(command),
        callable=raw.get("callable"),
        crate_name=str(raw.get("crate_name", defaults.crate_name)),
        analyzer_flags=_str_tuple(raw.get("analyzer_flags"), defaults.analyzer_flags),
        extra_args=_str_tuple(raw.get("extra_args"), defaults.extra_args),
        env={str(k): str(v) for k, v in (raw.get("env") or {}).items()},
        ok_exit_codes=tuple(int(code) for code in raw.get("ok_exit_codes", defaults.ok_exit_codes)),
        ignore_levels=_str_tuple(raw.get("ignore_levels"), defaults.ignore_levels),
        ignore_messages=_str_tuple(raw.get("ignore_messages"), defaults.ignore_messages),
    )


def _str_tuple(raw: Any, default: Sequence[str]) -> tuple[str, ...]:
    if raw is None:
        return tuple(default)
    return tuple(str(item) for item in raw)


def apply_options(config: SuiteConfig, options: SuiteOptions) -> SuiteConfig:
    """Return ``config`` with any command-line overrides applied."""

    updates: dict[str, Any] = {}
    if options.directory:
        updates["directory"] = Path(options.directory).expanduser()
    if options.jobs is not None:
        updates["jobs"] = options.jobs
    if options.sysroot:
        updates["sysroot"] = options.sysroot
    if options.keep_output:
        updates["keep_output"] = True
    return replace(config, **updates) if updates else config
