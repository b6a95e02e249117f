# src/trait_lineariser/pipeline/adapters/reporters.py
from __future__ import annotations
import logging
from typing import List, NoReturn, Tuple

from ..ports import Reporter

_LOG = logging.getLogger("trait_lineariser")


class ConsoleReporter(Reporter):
    """Reports through logging so messages interleave cleanly with tqdm bars."""

    def __init__(self, logger: logging.Logger = _LOG):
        self.logger = logger

    def report(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def abort(self, message: str) -> NoReturn:
        self.logger.error(message)
        raise SystemExit(1)


class RecordingReporter(Reporter):
    """Keeps every message; abort raises SystemExit like the console one."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def report(self, message: str) -> None:
        self.messages.append(("info", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warning", message))

    def abort(self, message: str) -> NoReturn:
        self.messages.append(("error", message))
        raise SystemExit(1)

    @property
    def warnings(self) -> List[str]:
        return [m for level, m in self.messages if level == "warning"]

    @property
    def infos(self) -> List[str]:
        return [m for level, m in self.messages if level == "info"]
