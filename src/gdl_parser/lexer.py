"""Lexical layer shared by the GDL and s-expression grammars.

Every factory returns a fresh pyparsing element so each grammar owns its
terminals and can attach parse actions without affecting the other.
Whitespace is skipped by pyparsing before each token; comments are added
with ``ignore(comment())`` on the finished grammar. Token factories report
their failures to the tracker installed by `tracking()`, which is how the
deepest failure of a parse is found after backtracking has discarded it.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional

from pyparsing import Keyword, Literal, ParserElement, Regex, Suppress, Word, alphanums

IDENT_CHARS = alphanums + "_"
KEYWORDS = ("not", "or", "distinct")

_TRIVIA = re.compile(r"(?:[ \t\r\n]+|;[^\n]*)*")
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")


class Furthest:
    """Deepest position at which a token failed to match, and the tokens expected there."""

    def __init__(self) -> None:
        self.loc = -1
        self.expected: List[str] = []

    def record(self, loc: int, expected: str) -> None:
        if loc > self.loc:
            self.loc, self.expected = loc, [expected]
        elif loc == self.loc and expected not in self.expected:
            self.expected.append(expected)


_furthest: ContextVar[Optional[Furthest]] = ContextVar("furthest", default=None)


@contextmanager
def tracking() -> Iterator[Furthest]:
    """Collect token failures for the duration of one parse call."""
    furthest = Furthest()
    token = _furthest.set(furthest)
    try:
        yield furthest
    finally:
        _furthest.reset(token)


def _record_failure(s, loc, expr, err) -> None:
    furthest = _furthest.get()
    if furthest is not None:
        furthest.record(loc, str(expr))


def _token(element: ParserElement, name: str) -> ParserElement:
    return element.set_name(name).set_fail_action(_record_failure)


def skip_trivia(text: str, loc: int = 0) -> int:
    """Return the first offset at or after `loc` that is not whitespace or comment."""
    return _TRIVIA.match(text, loc).end()


def is_identifier(name: str) -> bool:
    return _IDENTIFIER.fullmatch(name) is not None


def is_relation_name(name: str) -> bool:
    return is_identifier(name) and name not in KEYWORDS


def comment() -> ParserElement:
    return Suppress(Regex(r";[^\n]*")).set_name("comment")


def identifier() -> ParserElement:
    # digits-only identifiers are allowed: "123" is a valid constant
    return _token(Word(IDENT_CHARS), "identifier")


def number() -> ParserElement:
    return _token(Regex(r"[0-9]+(?![A-Za-z0-9_])"), "number")


def keyword(word: str) -> ParserElement:
    return _token(Suppress(Keyword(word, ident_chars=IDENT_CHARS)), repr(word))


def relation_name() -> ParserElement:
    """Identifier that is not one of the literal keywords."""
    words = "|".join(KEYWORDS)
    return _token(Regex(rf"(?!(?:{words})(?![A-Za-z0-9_]))[A-Za-z0-9_]+"), "relation name")


def lpar() -> ParserElement:
    return _token(Suppress(Literal("(")), "'('")


def rpar() -> ParserElement:
    return _token(Suppress(Literal(")")), "')'")


def implies() -> ParserElement:
    return _token(Suppress(Literal("<=")), "'<='")


def qmark() -> ParserElement:
    return _token(Suppress(Literal("?")), "'?'")
