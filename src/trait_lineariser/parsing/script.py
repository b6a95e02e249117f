# src/trait_lineariser/parsing/script.py
"""Parser for the trait definition file (`common/traits.txt`).

The file is a small subset of the game's script language:

    personality = {
        reckless = {
            attack = 1
            morale = -0.1
        }
    }
    background = {
        ...
    }

Each top-level section holds named traits, each trait holds `key = value`
attributes. Values are bare words, quoted strings or nested `{ ... }` blocks
and are kept verbatim; nothing here interprets what an attribute means.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from ..domain.errors import AlreadyLinearisedError, NothingToLineariseError
from ..domain.traits import AttributeSet, AttributeValue, Block, Entry, Trait, TraitsDocument
from .errors import END_OF_INPUT, ParseError
from .marker import GENERATION_MARKER, has_generation_marker

PERSONALITY = "personality"
BACKGROUND = "background"
SECTIONS = (PERSONALITY, BACKGROUND)

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<comment>\#[^\n]*)
    | (?P<lbrace>\{)
    | (?P<rbrace>\})
    | (?P<equals>=)
    | (?P<string>"[^"\n]*")
    | (?P<word>[^\s{}=\#"]+)
    | (?P<unterminated>")
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    offset: int

    def describe(self) -> str:
        if self.kind == "eof":
            return END_OF_INPUT
        if self.kind == "string":
            return f"string {self.text}"
        return f"'{self.text}'"


def _tokenize(text: str, source: str) -> Iterator[_Token]:
    pos = 1 if text.startswith("\ufeff") else 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(
                source=source,
                text=text,
                offset=pos,
                expected=["token"],
                found=repr(text[pos]),
            )
        kind = m.lastgroup
        if kind == "unterminated":
            eol = text.find("\n", pos)
            raise ParseError(
                source=source,
                text=text,
                offset=eol if eol != -1 else len(text),
                expected=["closing '\"'"],
                found="end of line" if eol != -1 else END_OF_INPUT,
            )
        if kind not in ("ws", "comment"):
            yield _Token(kind, m.group(), pos)
        pos = m.end()
    yield _Token("eof", "", len(text))


class _ScriptParser:
    def __init__(self, text: str, source: str):
        self._text = text
        self._source = source
        self._tokens: List[_Token] = list(_tokenize(text, source))
        self._i = 0

    # --- token helpers ---------------------------------------------------
    def _peek(self) -> _Token:
        return self._tokens[self._i]

    def _advance(self) -> _Token:
        tok = self._tokens[self._i]
        if tok.kind != "eof":
            self._i += 1
        return tok

    def _fail(self, tok: _Token, expected: Iterable[str], message: str | None = None) -> ParseError:
        return ParseError(
            source=self._source,
            text=self._text,
            offset=tok.offset,
            expected=expected,
            found=tok.describe(),
            message=message,
        )

    def _expect(self, kind: str, label: str) -> _Token:
        tok = self._peek()
        if tok.kind != kind:
            raise self._fail(tok, [label])
        return self._advance()

    # --- grammar ---------------------------------------------------------
    def document(self) -> TraitsDocument:
        sections: Dict[str, Tuple[Trait, ...]] = {}
        while True:
            tok = self._peek()
            missing = [f"'{s}'" for s in SECTIONS if s not in sections]
            if tok.kind == "eof":
                if missing:
                    raise self._fail(tok, missing)
                break
            if tok.kind != "word" or tok.text not in SECTIONS:
                raise self._fail(tok, missing or [END_OF_INPUT])
            if tok.text in sections:
                raise self._fail(tok, missing or [END_OF_INPUT],
                                 message=f"section '{tok.text}' is defined twice")
            self._advance()
            self._expect("equals", "'='")
            self._expect("lbrace", "'{'")
            sections[tok.text] = self._traits(tok.text)
        return TraitsDocument(
            personalities=sections[PERSONALITY],
            backgrounds=sections[BACKGROUND],
        )

    def _traits(self, kind: str) -> Tuple[Trait, ...]:
        traits: List[Trait] = []
        seen = set()
        while True:
            tok = self._peek()
            if tok.kind == "rbrace":
                self._advance()
                return tuple(traits)
            if tok.kind != "word":
                raise self._fail(tok, [f"{kind} name", "'}'"])
            if tok.text in seen:
                raise self._fail(tok, [f"{kind} name", "'}'"],
                                 message=f"{kind} '{tok.text}' is defined twice")
            seen.add(tok.text)
            self._advance()
            self._expect("equals", "'='")
            self._expect("lbrace", "'{'")
            traits.append(Trait(name=tok.text, attributes=self._attributes()))

    def _attributes(self) -> AttributeSet:
        attrs: AttributeSet = {}
        while True:
            tok = self._peek()
            if tok.kind == "rbrace":
                self._advance()
                return attrs
            if tok.kind != "word":
                raise self._fail(tok, ["attribute name", "'}'"])
            if tok.text in attrs:
                raise self._fail(tok, ["attribute name", "'}'"],
                                 message=f"attribute '{tok.text}' is defined twice")
            self._advance()
            self._expect("equals", "'='")
            attrs[tok.text] = self._value()

    def _value(self) -> AttributeValue:
        tok = self._peek()
        if tok.kind in ("word", "string"):
            return self._advance().text
        if tok.kind == "lbrace":
            self._advance()
            return self._block()
        raise self._fail(tok, ["value", "'{'"])

    def _block(self) -> Block:
        entries: List[Entry] = []
        while True:
            tok = self._peek()
            if tok.kind == "rbrace":
                self._advance()
                return Block(tuple(entries))
            if tok.kind == "lbrace":
                self._advance()
                entries.append(Entry(None, self._block()))
            elif tok.kind in ("word", "string"):
                self._advance()
                if tok.kind == "word" and self._peek().kind == "equals":
                    self._advance()
                    entries.append(Entry(tok.text, self._value()))
                else:
                    entries.append(Entry(None, tok.text))
            else:
                raise self._fail(tok, ["value", "'{'", "'}'"])


def parse_traits_structure(text: str, source: str = "<traits>") -> TraitsDocument:
    """Structural parse only: no marker guard, no category size checks."""
    return _ScriptParser(text, source).document()


def parse_traits(text: str, source: str = "<traits>") -> TraitsDocument:
    """Parse a trait file that is about to be linearised.

    Raises AlreadyLinearisedError if the text starts with the generation marker,
    ParseError on malformed input and NothingToLineariseError when either
    category has fewer than two traits.
    """
    if has_generation_marker(text):
        raise AlreadyLinearisedError(source, GENERATION_MARKER)

    doc = parse_traits_structure(text, source)
    for kind, traits in ((PERSONALITY, doc.personalities), (BACKGROUND, doc.backgrounds)):
        if len(traits) <= 1:
            raise NothingToLineariseError(kind, len(traits))
    return doc
