# src/trait_lineariser/parsing/localisation.py
from __future__ import annotations

from ..domain.localisation import LocalisationTable
from .errors import ParseError

DELIMITER = ";"
COMMENT = "#"


def parse_localisation(text: str, source: str = "<localisation>") -> LocalisationTable:
    """Parse one localisation CSV into a key -> text mapping.

    Each record is `key;text;...`; only the first two fields are used. Blank
    lines and `#` comments are skipped. Within a file the first occurrence of
    a key wins. Whitespace around a key is not part of it.
    """
    table: LocalisationTable = {}
    offset = 0
    if text.startswith("\ufeff"):
        offset = 1

    for raw in text[offset:].split("\n"):
        line_offset = offset
        offset += len(raw) + 1
        line = raw.rstrip("\r")
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT):
            continue

        sep = line.find(DELIMITER)
        if sep == -1:
            raise ParseError(
                source=source,
                text=text,
                offset=line_offset + len(line),
                expected=[f"'{DELIMITER}'"],
                found="end of line",
            )
        key = line[:sep].strip()
        if not key:
            raise ParseError(
                source=source,
                text=text,
                offset=line_offset + sep,
                expected=["localisation key"],
                found=f"'{DELIMITER}'",
            )

        rest = line[sep + 1:]
        end = rest.find(DELIMITER)
        value = rest if end == -1 else rest[:end]
        table.setdefault(key, value)
    return table
