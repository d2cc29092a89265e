"""Locate the toolchain system root the front-end resolves its std library from."""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional

from .errors import SetupError

logger = logging.getLogger(__name__)


def find_sysroot(
    explicit: Optional[str] = None,
    *,
    rustc: str = "rustc",
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    env = os.environ if environ is None else environ
    if explicit:
        return explicit
    home = env.get("RUSTUP_HOME")
    toolchain = env.get("RUSTUP_TOOLCHAIN")
    if home and toolchain:
        return str(Path(home) / "toolchains" / toolchain)
    sysroot = env.get("RUST_SYSROOT")
    if sysroot:
        return sysroot
    try:
        proc = subprocess.run(
            [rustc, "--print", "sysroot"],
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise SetupError(
            f"Unable to locate sysroot: set RUST_SYSROOT or install {rustc!r} ({exc})"
        ) from exc
    text = proc.stdout.strip()
    if proc.returncode != 0 or not text:
        raise SetupError(
            f"'{rustc} --print sysroot' failed (code {proc.returncode}): {proc.stderr.strip()}"
        )
    logger.debug("sysroot from %s: %s", rustc, text)
    return text
