# src/trait_lineariser/domain/localisation.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, NewType, Tuple

LocalisationKey = NewType("LocalisationKey", str)
LocalisationTable = Dict[str, str]


@dataclass(frozen=True, slots=True)
class CompositeLocalisationEntry:
    key: str
    text: str


@dataclass(frozen=True, slots=True)
class LinearisedLocalisation:
    """Composite entries plus the keys that had no translation.

    Orphans are deduplicated and kept in the order their first lookup failed.
    """
    orphans: Tuple[str, ...]
    entries: Tuple[CompositeLocalisationEntry, ...]
