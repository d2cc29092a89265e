"""Front-end that shells out to an analyzer emitting JSON diagnostics."""
from __future__ import annotations

import json
import logging
import os
import re
import shlex
import subprocess
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, Sequence, Union

from diagtest.core.errors import FrontendCrash
from diagtest.core.models import Diagnostic, FrontendOptions

from .base import BufferedSink, Frontend

if TYPE_CHECKING:  # pragma: no cover
    from diagtest.suite.models import FrontendConfig

logger = logging.getLogger(__name__)

ERROR_FORMAT_FLAG = "--error-format=json"
DEFAULT_OK_EXIT_CODES = (0, 1)
DEFAULT_IGNORE_LEVELS = ("failure-note",)
DEFAULT_IGNORE_MESSAGES = ("^aborting due to",)


class CommandFrontend(Frontend):
    """Runs ``command`` once per fragment and reads its JSON diagnostic stream."""

    name = "command"

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        *,
        extra_args: Sequence[str] = (),
        env: Optional[Mapping[str, str]] = None,
        ok_exit_codes: Sequence[int] = DEFAULT_OK_EXIT_CODES,
        ignore_levels: Sequence[str] = DEFAULT_IGNORE_LEVELS,
        ignore_messages: Sequence[str] = DEFAULT_IGNORE_MESSAGES,
    ) -> None:
        argv = shlex.split(command) if isinstance(command, str) else [str(part) for part in command]
        if not argv:
            raise ValueError("Command front-end requires a non-empty command")
        self.command = tuple(argv)
        self.extra_args = tuple(str(arg) for arg in extra_args)
        self.env = {str(k): str(v) for k, v in (env or {}).items()}
        self.ok_exit_codes = frozenset(int(code) for code in ok_exit_codes)
        self.ignore_levels = frozenset(ignore_levels)
        self._ignore_patterns = tuple(re.compile(pattern) for pattern in ignore_messages)

    @classmethod
    def from_config(cls, config: "FrontendConfig") -> "CommandFrontend":
        return cls(
            config.command,
            extra_args=config.extra_args,
            env=config.env,
            ok_exit_codes=config.ok_exit_codes,
            ignore_levels=config.ignore_levels,
            ignore_messages=config.ignore_messages,
        )

    def build_argv(self, options: FrontendOptions) -> list[str]:
        return [*self.command, *options.arguments(), *self.extra_args, ERROR_FORMAT_FLAG]

    def run(self, options: FrontendOptions, sink: BufferedSink) -> None:
        argv = self.build_argv(options)
        env = os.environ.copy()
        env.update(self.env)
        logger.debug("running %s", shlex.join(argv))
        try:
            proc = subprocess.run(argv, env=env, capture_output=True, text=True)
        except OSError as exc:
            raise FrontendCrash(f"failed to launch '{argv[0]}': {exc}") from exc
        if proc.returncode not in self.ok_exit_codes:
            detail = _tail(proc.stderr) or _tail(proc.stdout)
            raise FrontendCrash(f"front-end exited with code {proc.returncode}: {detail}")
        for stream in (proc.stderr, proc.stdout):
            for diagnostic in self._parse(stream):
                sink.emit(diagnostic)

    def _parse(self, text: str) -> Iterator[Diagnostic]:
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped.startswith("{"):
                if stripped:
                    logger.debug("ignoring non-JSON front-end output: %s", stripped)
                continue
            try:
                payload = json.loads(stripped)
            except json.JSONDecodeError:
                logger.debug("ignoring malformed JSON line: %s", stripped)
                continue
            if not isinstance(payload, Mapping) or "message" not in payload:
                continue
            diagnostic = Diagnostic.from_mapping(payload)
            if self._ignored(diagnostic):
                continue
            yield diagnostic

    def _ignored(self, diagnostic: Diagnostic) -> bool:
        if diagnostic.level is not None and diagnostic.level in self.ignore_levels:
            return True
        return any(pattern.search(diagnostic.message) for pattern in self._ignore_patterns)


def _tail(text: str, lines: int = 5) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])
