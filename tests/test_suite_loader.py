from __future__ import annotations

from pathlib import Path

import pytest

from diagtest.core import MARKER, SetupError
from diagtest.suite import SuiteOptions, apply_options, load_suite, parse_suite
from diagtest.suite.models import DEFAULT_DIRECTORY


def test_defaults_without_suite_file(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = load_suite()
    assert config.directory == Path(DEFAULT_DIRECTORY)
    assert config.marker == MARKER
    assert config.jobs is None
    assert config.frontend.kind == "command"
    assert config.frontend.command == ("rustc",)
    assert config.source is None


def test_load_full_suite_file(tmp_path) -> None:
    suite_file = tmp_path / "diagtest.yaml"
    suite_file.write_text(
        """
directory: fragments
marker: "//~"
jobs: 4
sysroot: /opt/rust
keep_output: true
frontend:
  kind: command
  command: "mirai --quiet"
  crate_name: mirai
  analyzer_flags: [span_free_formats, mir-emit-retag, mir-opt-level=0]
  env: {MIRAI_LOG: warn, LEVEL: 2}
  ok_exit_codes: [0, 1]
  ignore_messages: []
""",
        encoding="utf-8",
    )
    config = load_suite(str(suite_file))
    assert config.directory == tmp_path.resolve() / "fragments"
    assert config.jobs == 4
    assert config.sysroot == "/opt/rust"
    assert config.keep_output is True
    assert config.source == suite_file.resolve()
    frontend = config.frontend
    assert frontend.command == ("mirai", "--quiet")
    assert frontend.crate_name == "mirai"
    assert frontend.analyzer_flags == ("span_free_formats", "mir-emit-retag", "mir-opt-level=0")
    assert frontend.env == {"MIRAI_LOG": "warn", "LEVEL": "2"}
    assert frontend.ignore_messages == ()
    assert frontend.ignore_levels == ("failure-note",)


def test_implicit_suite_file_is_picked_up(tmp_path, monkeypatch) -> None:
    (tmp_path / "diagtest.yaml").write_text("jobs: 2\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    config = load_suite()
    assert config.jobs == 2
    assert config.directory == tmp_path.resolve() / DEFAULT_DIRECTORY


def test_schema_errors_are_reported_together(tmp_path) -> None:
    with pytest.raises(SetupError) as excinfo:
        parse_suite({"jobs": 0, "colour": True}, base=tmp_path)
    text = str(excinfo.value)
    assert text.startswith("Suite schema validation failed")
    assert "jobs" in text
    assert "colour" in text


def test_top_level_must_be_mapping(tmp_path) -> None:
    with pytest.raises(SetupError, match="mapping"):
        parse_suite(["directory"], base=tmp_path)


def test_python_frontend_requires_callable(tmp_path) -> None:
    with pytest.raises(SetupError, match="frontend.callable"):
        parse_suite({"frontend": {"kind": "python"}}, base=tmp_path)


def test_invalid_yaml(tmp_path) -> None:
    suite_file = tmp_path / "broken.yaml"
    suite_file.write_text("jobs: [1, 2\n", encoding="utf-8")
    with pytest.raises(SetupError, match="Invalid YAML"):
        load_suite(str(suite_file))


def test_apply_options_overrides(tmp_path) -> None:
    config = parse_suite({"jobs": 2, "sysroot": "/a"}, base=tmp_path)
    updated = apply_options(
        config,
        SuiteOptions(directory=str(tmp_path / "other"), jobs=8, sysroot="/b", keep_output=True),
    )
    assert updated.directory == tmp_path / "other"
    assert updated.jobs == 8
    assert updated.sysroot == "/b"
    assert updated.keep_output is True
    assert apply_options(config, SuiteOptions()) is config
