# src/trait_lineariser/config.py
"""Run settings: command-line values layered over environment variables.

Environment variables (also read from a `.env` file in the working directory):

- LINEARISER_ENCODING: encoding of game and mod files (default cp1252)
- LINEARISER_MAX_WORKERS: threads used to read localisation files
- LINEARISER_NAME_TEMPLATE: display name of a composite, with {personality}
  and {background} placeholders
- LINEARISER_SEPARATOR: joins personality and background into a composite key
- LINEARISER_COMBINE: attribute combination rule, `sum` or `override`
"""
from __future__ import annotations
import codecs
import logging
import os
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .pipeline.adapters.combiners import COMBINERS, DEFAULT_SEPARATOR, DEFAULT_TEMPLATE
from .pipeline.adapters.filesystem import GAME_ENCODING

_LOG = logging.getLogger(__name__)

TRAITS_FILE = os.path.join("common", "traits.txt")
OUTPUT_TRAITS = "traits.txt"
OUTPUT_LOCALISATION = "traits.csv"

_SEPARATOR_RE = re.compile(r"[^\s{}=#\"]*")
_TEMPLATE_FORBIDDEN = (";", "\n", "\r")


@dataclass(frozen=True)
class Settings:
    mod_path: str = "."
    extra_paths: Tuple[str, ...] = field(default_factory=tuple)
    output_dir: str = "."
    encoding: str = GAME_ENCODING
    max_workers: Optional[int] = None
    name_template: str = DEFAULT_TEMPLATE
    separator: str = DEFAULT_SEPARATOR
    combine: str = "sum"
    progress: bool = True

    @property
    def traits_path(self) -> str:
        return os.path.join(self.mod_path, TRAITS_FILE)

    @property
    def base_paths(self) -> List[str]:
        # N.b. order is significant: earlier base paths take precedence.
        return [self.mod_path, *self.extra_paths]

    @property
    def output_traits_path(self) -> str:
        return os.path.join(self.output_dir, OUTPUT_TRAITS)

    @property
    def output_localisation_path(self) -> str:
        return os.path.join(self.output_dir, OUTPUT_LOCALISATION)


def _int_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        codecs.lookup(settings.encoding)
    except LookupError as e:
        raise ValueError(f"Unknown encoding {settings.encoding!r}") from e
    _check_separator(settings.separator, settings.encoding)
    _check_template(settings.name_template, settings.encoding)
    return settings


def _check_separator(separator: str, encoding: str) -> None:
    # composite keys must stay single bare words of the trait script
    if _SEPARATOR_RE.fullmatch(separator) is None:
        raise ValueError(
            f"Separator {separator!r} cannot appear in a trait name: "
            f"no whitespace, braces, '=', '#' or '\"'"
        )
    _check_encodable("Separator", separator, encoding)


def _check_template(template: str, encoding: str) -> None:
    if any(c in template for c in _TEMPLATE_FORBIDDEN):
        raise ValueError(
            f"Name template {template!r} cannot contain ';' or line breaks"
        )
    try:
        template.format(personality="", background="")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(
            f"Invalid name template {template!r}: only {{personality}} and "
            f"{{background}} placeholders are allowed ({e!r})"
        ) from e
    _check_encodable("Name template", template, encoding)


def _check_encodable(what: str, value: str, encoding: str) -> None:
    try:
        value.encode(encoding)
    except UnicodeEncodeError as e:
        raise ValueError(f"{what} {value!r} cannot be written as {encoding}: {e.reason}") from e
