# src/trait_lineariser/domain/errors.py
from __future__ import annotations


class LineariserError(Exception):
    """Base class for conditions that stop a run before any output is written."""


class AlreadyLinearisedError(LineariserError):
    def __init__(self, source: str, marker: str):
        self.source = source
        self.marker = marker
        super().__init__(
            f"Traits file ‘{source}’ seems to already have been auto-generated by this "
            f"program, aborting. If you still want to attempt to linearise the file, "
            f"remove the auto-generation header:\n\n{marker}"
        )


class NothingToLineariseError(LineariserError):
    def __init__(self, kind: str, count: int):
        self.kind = kind
        self.count = count
        amount = "no" if count == 0 else "only one"
        super().__init__(
            f"Nothing to linearise as there is {amount} {kind}, aborting. "
            f"(Did you run the program on an already linearised trait file?)"
        )


class TraitsFileError(LineariserError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read traits file ‘{path}’: {reason}")


class OutputEncodingError(LineariserError):
    def __init__(self, path: str, encoding: str, reason: str):
        self.path = path
        self.encoding = encoding
        self.reason = reason
        super().__init__(
            f"Could not write ‘{path}’ as {encoding}, nothing was written: {reason}"
        )
