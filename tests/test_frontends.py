from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from diagtest.core import FrontendCrash, FrontendOptions, TestCase
from diagtest.core.runner import invoke_case
from diagtest.frontends import (
    BufferedSink,
    CallableFrontend,
    CommandFrontend,
    FrontendManager,
    frontend_manager,
)
from diagtest.suite import FrontendConfig

from fake_analyzer import FAKE_SYSROOT

ANALYZER_SCRIPT = textwrap.dedent(
    """
    import json
    import sys

    args = sys.argv[1:]
    assert args[-1] == "--error-format=json", args
    fragment = args[2]
    emitted = 0
    print("compiling " + fragment)
    for line in open(fragment, encoding="utf-8"):
        text = line.strip()
        if text == "// crash":
            sys.stderr.write("thread 'rustc' panicked\\n")
            sys.exit(101)
        if text.startswith("// emit:"):
            children = []
            if "|" in text:
                text, note = text.split("|", 1)
                children.append({"message": note.strip(), "level": "note", "children": []})
            message = text[len("// emit:"):].strip()
            sys.stderr.write(json.dumps({"message": message, "level": "warning", "children": children}) + "\\n")
            emitted += 1
    if emitted:
        sys.stderr.write("{not json\\n")
        sys.stderr.write(json.dumps({"message": "aborting due to 1 previous error", "level": "error", "children": []}) + "\\n")
        sys.stderr.write(json.dumps({"message": "For more information, try --explain", "level": "failure-note", "children": []}) + "\\n")
    sys.exit(1 if emitted else 0)
    """
)


@pytest.fixture
def command_frontend(tmp_path: Path) -> CommandFrontend:
    script = tmp_path / "analyzer.py"
    script.write_text(ANALYZER_SCRIPT, encoding="utf-8")
    return CommandFrontend([sys.executable, str(script)])


def _options(tmp_path: Path, fragment: Path) -> FrontendOptions:
    return FrontendOptions(fragment=fragment, output_dir=tmp_path, sysroot=FAKE_SYSROOT)


def test_buffered_sink_keeps_order() -> None:
    from diagtest.core import Diagnostic

    sink = BufferedSink()
    sink.emit(Diagnostic("first"))
    sink.emit(Diagnostic("second"))
    assert [d.message for d in sink.diagnostics] == ["first", "second"]


def test_command_frontend_builds_argv(tmp_path, command_frontend) -> None:
    argv = command_frontend.build_argv(_options(tmp_path, tmp_path / "a.rs"))
    assert argv[0] == sys.executable
    assert argv[2:4] == ["--crate-name", "diagtest"]
    assert argv[-1] == "--error-format=json"


def test_command_frontend_string_command() -> None:
    frontend = CommandFrontend("mirai --verbose")
    assert frontend.command == ("mirai", "--verbose")
    with pytest.raises(ValueError):
        CommandFrontend([])


def test_command_frontend_parses_json_diagnostics(tmp_path, write_fragment, command_frontend) -> None:
    fragment = write_fragment("moved.rs", "// emit: use of moved value | value moved here")
    sink = BufferedSink()
    command_frontend.run(_options(tmp_path, fragment), sink)
    assert len(sink.diagnostics) == 1
    diagnostic = sink.diagnostics[0]
    assert diagnostic.message == "use of moved value"
    assert diagnostic.children == ("value moved here",)
    assert diagnostic.level == "warning"


def test_command_frontend_crash(tmp_path, write_fragment, command_frontend) -> None:
    fragment = write_fragment("boom.rs", "// crash")
    with pytest.raises(FrontendCrash, match="code 101"):
        command_frontend.run(_options(tmp_path, fragment), BufferedSink())


def test_command_frontend_missing_executable(tmp_path, write_fragment) -> None:
    fragment = write_fragment("a.rs", "pub fn a() {}")
    frontend = CommandFrontend([str(tmp_path / "no-such-analyzer")])
    with pytest.raises(FrontendCrash, match="failed to launch"):
        frontend.run(_options(tmp_path, fragment), BufferedSink())


def test_command_frontend_end_to_end(tmp_path, write_fragment, command_frontend) -> None:
    fragment = write_fragment(
        "moved.rs",
        "// emit: use of moved value | value moved here",
        "let y = x; //~ use of moved value",
        "//~ value moved here",
    )
    case = TestCase(fragment=fragment, output_dir=tmp_path)
    result = invoke_case(case, command_frontend, FAKE_SYSROOT)
    assert result.passed, result.error

    crashing = write_fragment("boom.rs", "// crash")
    result = invoke_case(TestCase(fragment=crashing, output_dir=tmp_path), command_frontend, FAKE_SYSROOT)
    assert result.status == "error"
    assert "panicked" in result.error


def test_command_frontend_from_config() -> None:
    config = FrontendConfig(
        command=("mirai",),
        extra_args=("--edition", "2018"),
        env={"MIRAI_FLAGS": "--diag=paranoid"},
        ok_exit_codes=(0,),
        ignore_levels=(),
        ignore_messages=("^unused",),
    )
    frontend = frontend_manager.create(config)
    assert isinstance(frontend, CommandFrontend)
    assert frontend.extra_args == ("--edition", "2018")
    assert frontend.env == {"MIRAI_FLAGS": "--diag=paranoid"}
    assert frontend.ok_exit_codes == frozenset({0})


def test_callable_frontend_from_config(monkeypatch) -> None:
    monkeypatch.syspath_prepend(str(Path(__file__).parent))
    frontend = frontend_manager.create(FrontendConfig(kind="python", callable="fake_analyzer:analyze"))
    assert isinstance(frontend, CallableFrontend)
    with pytest.raises(ValueError):
        CallableFrontend.from_config(FrontendConfig(kind="python"))
    with pytest.raises(TypeError):
        CallableFrontend("not callable")  # type: ignore[arg-type]


def test_frontend_manager_registration() -> None:
    manager = FrontendManager()
    manager.register("command", CommandFrontend.from_config)
    with pytest.raises(ValueError):
        manager.register("command", CommandFrontend.from_config)
    with pytest.raises(KeyError):
        manager.create(FrontendConfig(kind="clippy"))
    assert tuple(manager.kinds()) == ("command",)
