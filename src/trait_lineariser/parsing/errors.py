# src/trait_lineariser/parsing/errors.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple

from ..domain.errors import LineariserError

END_OF_INPUT = "end of input"


class ParseError(LineariserError):
    """Structural parse failure at a known position.

    `line` and `column` are 1-based, `offset` is the 0-based character offset
    into the parsed text. `expected` holds human readable descriptions of the
    tokens that would have been accepted, `found` describes the offending one.
    """

    def __init__(
        self,
        *,
        source: str,
        text: str,
        offset: int,
        expected: Iterable[str] = (),
        found: str = END_OF_INPUT,
        message: Optional[str] = None,
    ):
        self.source = source
        self.offset = offset
        self.line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        self.column = offset - line_start + 1
        line_end = text.find("\n", offset)
        self.source_line = text[line_start: line_end if line_end != -1 else len(text)].rstrip("\r")
        self.expected: Tuple[str, ...] = tuple(sorted(set(expected)))
        self.found = found
        self.message = message
        super().__init__(self.pretty())

    def pretty(self) -> str:
        gutter = str(self.line)
        pad = " " * len(gutter)
        lines = [
            f"{self.source}:{self.line}:{self.column}:",
            f"{pad} |",
            f"{gutter} | {self.source_line}",
            f"{pad} | {' ' * (self.column - 1)}^",
            f"unexpected {self.found}",
        ]
        if self.expected:
            lines.append(f"expecting {_alternatives(self.expected)}")
        if self.message:
            lines.append(self.message)
        return "\n".join(lines)


def _alternatives(items: Tuple[str, ...]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + ", or " + items[-1]
