# src/trait_lineariser/pipeline/adapters/filesystem.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from ...domain.errors import OutputEncodingError
from ..ports import FileLister, Reporter, TextReader, TextWriter

_LOG = logging.getLogger(__name__)

GAME_ENCODING = "cp1252"


class FileSystemReader(TextReader):
    """Reads game and mod files in the legacy encoding the game expects.

    A file that does not decode is reported and read as empty text, which is
    a valid localisation file with no entries.
    """

    def __init__(self, *, encoding: str = GAME_ENCODING, reporter: Optional[Reporter] = None):
        self.encoding = encoding
        self.reporter = reporter

    def read_text(self, path: str) -> str:
        with open(path, "rb") as f:
            raw = f.read()
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            msg = f"Decoding of one file failed, skipping it:\n    ‘{path}’: {e}"
            if self.reporter is not None:
                self.reporter.warn(msg)
            else:
                _LOG.warning(msg)
            return ""


class FileSystemLister(FileLister):
    def list_files(self, directory: str) -> List[str]:
        return [e.name for e in os.scandir(directory) if e.is_file()]


class FileSystemWriter(TextWriter):
    """Writes output files in the game's encoding.

    `write_all` encodes every file before creating any of them, so a text the
    encoding cannot represent leaves the output directory untouched.
    """

    def __init__(self, *, encoding: str = GAME_ENCODING):
        self.encoding = encoding

    def write_text(self, path: str, text: str) -> None:
        self.write_all({path: text})

    def write_all(self, files: Mapping[str, str]) -> None:
        encoded = {}
        for path, text in files.items():
            try:
                encoded[path] = text.encode(self.encoding)
            except UnicodeEncodeError as e:
                raise OutputEncodingError(path, self.encoding, str(e)) from e

        for path, data in encoded.items():
            target = Path(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            # bytes keep the "\n" line endings the formatters produce
            target.write_bytes(data)
            _LOG.info("Wrote %s (%d bytes)", target, len(data))
