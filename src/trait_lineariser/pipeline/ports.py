# src/trait_lineariser/pipeline/ports.py
from __future__ import annotations
from typing import List, Mapping, NoReturn, Protocol

from ..domain.traits import AttributeSet, Trait


class TextReader(Protocol):
    def read_text(self, path: str) -> str: ...

class FileLister(Protocol):
    def list_files(self, directory: str) -> List[str]: ...

class TextWriter(Protocol):
    def write_text(self, path: str, text: str) -> None: ...
    def write_all(self, files: Mapping[str, str]) -> None: ...

class Reporter(Protocol):
    """Status channel. Called from worker threads; implementations must not block."""
    def report(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...
    def abort(self, message: str) -> NoReturn: ...

class PairCombiner(Protocol):
    """How one personality and one background become a composite trait."""
    def name(self, personality: str, background: str) -> str: ...
    def attributes(self, personality: Trait, background: Trait) -> AttributeSet: ...
    def text(self, personality: str, background: str) -> str: ...
