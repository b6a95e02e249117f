# src/trait_lineariser/services/formatters.py
from __future__ import annotations
from typing import Iterable, List, Optional

from ..domain.localisation import CompositeLocalisationEntry
from ..domain.traits import AttributeSet, AttributeValue, Block, CompositeTrait
from ..parsing.localisation import DELIMITER
from ..parsing.marker import GENERATION_MARKER
from ..parsing.script import BACKGROUND, PERSONALITY

# key;English;French;German;;Spanish;;;;;;;;;x
_LOCALISATION_COLUMNS = 15
_LOCALISATION_END = "x"


def _value_lines(key: Optional[str], value: AttributeValue, depth: int, indent: str) -> List[str]:
    pad = indent * depth
    prefix = f"{key} = " if key is not None else ""
    if not isinstance(value, Block):
        return [f"{pad}{prefix}{value}"]
    if not value.entries:
        return [f"{pad}{prefix}{{ }}"]
    lines = [f"{pad}{prefix}{{"]
    for entry in value.entries:
        lines.extend(_value_lines(entry.key, entry.value, depth + 1, indent))
    lines.append(f"{pad}}}")
    return lines


def _trait_lines(name: str, attributes: AttributeSet, depth: int, indent: str) -> List[str]:
    pad = indent * depth
    lines = [f"{pad}{name} = {{"]
    for key, value in attributes.items():
        lines.extend(_value_lines(key, value, depth + 1, indent))
    lines.append(f"{pad}}}")
    return lines


def format_traits(composites: Iterable[CompositeTrait], *, indent: str = "\t") -> str:
    """Serialise composites as the personality section of a trait file.

    The background section is left empty: every composite already carries its
    background, and a single-sided file is refused if it is ever fed back in.
    """
    lines = [GENERATION_MARKER, f"{PERSONALITY} = {{"]
    for c in composites:
        lines.extend(_trait_lines(c.name, c.attributes, 1, indent))
    lines.append("}")
    lines.append(f"{BACKGROUND} = {{")
    lines.append("}")
    return "\n".join(lines) + "\n"


def format_localisation(entries: Iterable[CompositeLocalisationEntry]) -> str:
    padding = [""] * (_LOCALISATION_COLUMNS - 3)
    lines = [GENERATION_MARKER]
    for e in entries:
        lines.append(DELIMITER.join([e.key, e.text, *padding, _LOCALISATION_END]))
    return "\n".join(lines) + "\n"
