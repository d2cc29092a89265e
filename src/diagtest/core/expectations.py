"""Inline expectation annotations and the bag they are matched against."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .errors import MissingDiagnostics, SetupError, UnexpectedDiagnostic
from .models import Diagnostic

MARKER = "//~"

# Unicode White_Space; \x1c-\x1f are not trimmed.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def parse_expected(line: str, marker: str = MARKER) -> Optional[str]:
    """Return the trimmed text after ``marker`` in ``line``, or ``None``.

    Only the first occurrence of the marker counts; anything after it,
    including further markers, is part of the message.
    """

    index = line.find(marker)
    if index < 0:
        return None
    return line[index + len(marker):].strip(WHITESPACE)


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line."""

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_expectations(path: Union[str, Path], marker: str = MARKER) -> List[str]:
    """Scan a fragment file and return its expected messages in file order.

    A file that cannot be read raises ``SetupError``; a file that is not
    valid UTF-8 raises ``UnicodeDecodeError``, which fails only its case.
    """

    fragment = Path(path)
    try:
        data = fragment.read_bytes()
    except OSError as exc:
        raise SetupError(f"Unable to read fragment {fragment}: {exc}") from exc
    messages: List[str] = []
    for line in split_lines(data.decode("utf-8")):
        expected = parse_expected(line, marker)
        if expected is not None:
            messages.append(expected)
    return messages


class ExpectedDiagnostics:
    """Ordered bag of the messages one fragment expects to see."""

    def __init__(self, messages: Iterable[str] = ()) -> None:
        self._messages: List[str] = list(messages)

    @classmethod
    def from_fragment(cls, path: Union[str, Path], marker: str = MARKER) -> "ExpectedDiagnostics":
        return cls(load_expectations(path, marker))

    @property
    def remaining(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def match_and_remove(self, message: str) -> None:
        try:
            self._messages.remove(message)
        except ValueError:
            raise UnexpectedDiagnostic(message, self._messages) from None

    def assert_exhausted(self) -> None:
        if self._messages:
            raise MissingDiagnostics(self._messages)

    def check(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Consume every produced message, then require that nothing is left."""

        for diagnostic in diagnostics:
            for message in diagnostic.messages():
                self.match_and_remove(message)
        self.assert_exhausted()
