"""Core dataclasses shared across diagtest subsystems."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple


DEFAULT_CRATE_NAME = "diagtest"
DEFAULT_ANALYZER_FLAGS: Tuple[str, ...] = ("span_free_formats", "mir-emit-retag")


@dataclass(frozen=True)
class Diagnostic:
    """A message reported by the front-end, with optional sub-notes."""

    message: str
    children: Tuple[str, ...] = tuple()
    level: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Diagnostic":
        children = tuple(
            str(child["message"])
            for child in data.get("children") or ()
            if isinstance(child, Mapping) and "message" in child
        )
        level = data.get("level")
        return cls(
            message=str(data["message"]),
            children=children,
            level=str(level) if level is not None else None,
        )

    def messages(self) -> Iterator[str]:
        """Yield the primary message followed by each child message."""

        yield self.message
        yield from self.children


@dataclass(frozen=True)
class TestCase:
    """One fragment together with the output directory it owns."""

    __test__ = False  # keep pytest from collecting this class

    fragment: Path
    output_dir: Path
    temp_root: Optional[Path] = None

    def identifier(self) -> str:
        return str(self.fragment)


@dataclass(frozen=True)
class FrontendOptions:
    """Fixed configuration handed to the front-end for one case."""

    fragment: Path
    output_dir: Path
    sysroot: str
    crate_name: str = DEFAULT_CRATE_NAME
    analyzer_flags: Sequence[str] = field(default_factory=lambda: DEFAULT_ANALYZER_FLAGS)

    def arguments(self) -> list[str]:
        args = [
            "--crate-name",
            self.crate_name,
            str(self.fragment),
            "--crate-type",
            "lib",
            "-C",
            "debuginfo=2",
            "--out-dir",
            str(self.output_dir),
            "--sysroot",
            self.sysroot,
        ]
        for flag in self.analyzer_flags:
            args.extend(["-Z", flag])
        return args
