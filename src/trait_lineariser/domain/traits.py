# src/trait_lineariser/domain/traits.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class Entry:
    """One item of a block: `key = value`, or a bare value when key is None."""
    key: Optional[str]
    value: "AttributeValue"


@dataclass(frozen=True, slots=True)
class Block:
    entries: Tuple[Entry, ...] = ()


# Scalars are kept verbatim (quotes included) so they round-trip.
AttributeValue = Union[str, Block]
AttributeSet = Dict[str, AttributeValue]


@dataclass(frozen=True, slots=True)
class Trait:
    name: str
    attributes: AttributeSet = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TraitsDocument:
    """Both trait categories in document order."""
    personalities: Tuple[Trait, ...]
    backgrounds: Tuple[Trait, ...]


@dataclass(frozen=True, slots=True)
class CompositeTrait:
    personality: Trait
    background: Trait
    name: str
    attributes: AttributeSet

    def as_trait(self) -> Trait:
        return Trait(name=self.name, attributes=self.attributes)
