# src/trait_lineariser/parsing/marker.py
from __future__ import annotations

# A comment in both output grammars, so the parsers skip it.
GENERATION_MARKER = (
    "# Auto-generated by trait-lineariser. Do not run the lineariser on this file again."
)

_BOM = "\ufeff"


def has_generation_marker(text: str) -> bool:
    if text.startswith(_BOM):
        text = text[1:]
    return text.startswith(GENERATION_MARKER)
