# src/trait_lineariser/pipeline/linearise.py
from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

from ..domain.localisation import (
    CompositeLocalisationEntry,
    LinearisedLocalisation,
    LocalisationTable,
)
from ..domain.traits import CompositeTrait, TraitsDocument
from .ports import PairCombiner


def linearise_traits(doc: TraitsDocument, combiner: PairCombiner) -> List[CompositeTrait]:
    """Cross product of personalities and backgrounds.

    Personalities are the outer loop and backgrounds the inner one, both in
    document order; the output order is relied upon by the game.
    """
    return [
        CompositeTrait(
            personality=p,
            background=b,
            name=combiner.name(p.name, b.name),
            attributes=combiner.attributes(p, b),
        )
        for p in doc.personalities
        for b in doc.backgrounds
    ]


def traits_localisation_keys(doc: TraitsDocument) -> Tuple[List[str], List[str]]:
    return [t.name for t in doc.personalities], [t.name for t in doc.backgrounds]


def linearise_localisation(
    table: LocalisationTable,
    personality_keys: Sequence[str],
    background_keys: Sequence[str],
    combiner: PairCombiner,
) -> LinearisedLocalisation:
    """Composite localisation entries in the same order as linearise_traits.

    A key without a translation is recorded once as an orphan and its own key
    is used in place of the missing text, so every composite still gets an entry.
    """
    orphans: Dict[str, None] = {}

    def lookup(key: str) -> str:
        text = table.get(key)
        if text is None:
            orphans.setdefault(key)
            return key
        return text

    entries = [
        CompositeLocalisationEntry(
            key=combiner.name(p, b),
            text=combiner.text(lookup(p), lookup(b)),
        )
        for p in personality_keys
        for b in background_keys
    ]
    return LinearisedLocalisation(orphans=tuple(orphans), entries=tuple(entries))
