# src/trait_lineariser/pipeline/adapters/combiners.py
from __future__ import annotations
import re
from decimal import Decimal

from ...domain.traits import AttributeSet, AttributeValue, Trait
from ..ports import PairCombiner

DEFAULT_SEPARATOR = "_"
DEFAULT_TEMPLATE = "{personality} {background}"

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _is_number(value: AttributeValue) -> bool:
    return isinstance(value, str) and _NUMBER_RE.fullmatch(value) is not None


class OverridingCombiner(PairCombiner):
    """Union of both attribute sets; on a shared key the background wins."""

    def __init__(self, *, separator: str = DEFAULT_SEPARATOR, template: str = DEFAULT_TEMPLATE):
        self.separator = separator
        self.template = template

    def name(self, personality: str, background: str) -> str:
        return f"{personality}{self.separator}{background}"

    def text(self, personality: str, background: str) -> str:
        return self.template.format(personality=personality, background=background)

    def attributes(self, personality: Trait, background: Trait) -> AttributeSet:
        merged: AttributeSet = dict(personality.attributes)
        for key, value in background.attributes.items():
            merged[key] = self._merge(merged[key], value) if key in merged else value
        return merged

    def _merge(self, ours: AttributeValue, theirs: AttributeValue) -> AttributeValue:
        return theirs


class SummingCombiner(OverridingCombiner):
    """Like OverridingCombiner, but numeric modifiers present on both sides are added.

    Leader modifiers from a personality and a background stack in game, so
    `attack = 1` and `attack = 2` become `attack = 3`.
    """

    def _merge(self, ours: AttributeValue, theirs: AttributeValue) -> AttributeValue:
        if _is_number(ours) and _is_number(theirs):
            return format(Decimal(ours) + Decimal(theirs), "f")
        return theirs


COMBINERS = {
    "sum": SummingCombiner,
    "override": OverridingCombiner,
}
