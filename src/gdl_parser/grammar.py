"""GDL grammar as ordered-choice pyparsing productions.

    description  := clause*
    clause       := rule / sentence
    rule         := '(' '<=' sentence literal* ')'
    sentence     := prop_lit / '(' rel_lit ')'
    literal      := '(' (or_lit / not_lit / distinct_lit / rel_lit) ')' / prop_lit
    not_lit      := 'not' literal
    or_lit       := 'or' literal*
    distinct_lit := 'distinct' term term
    prop_lit     := relation_name
    rel_lit      := relation_name term*
    term         := '(' func_term ')' / var_term / const_term
    func_term    := constant term*
    var_term     := '?' identifier
    relation_name := !('not' / 'or' / 'distinct') identifier

Alternatives are tried left to right and the first match wins, so the order
above is part of the accepted language.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from pyparsing import Forward, ParseBaseException, ParseFatalException, ParserElement, ZeroOrMore

from . import lexer
from .errors import GDLSyntaxError
from .locations import Location
from .nodes import (
    Constant,
    Description,
    Distinct,
    Function,
    Not,
    Or,
    Proposition,
    Relation,
    Rule,
    Variable,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grammar:
    """Entry points of one fully built grammar.

    Elements are streamlined when built and never modified afterwards, so a
    Grammar can be shared between threads.
    """

    description: ParserElement
    clause: ParserElement
    sentence: ParserElement
    literal: ParserElement
    term: ParserElement


def _constant(tokens):
    return Constant(tokens[0])


def _variable(tokens):
    return Variable(tokens[0])


def _function(tokens):
    return Function(tokens[0], tuple(tokens[1:]))


def _proposition(tokens):
    return Proposition(Constant(tokens[0]))


def _relation(tokens):
    return Relation(tokens[0], tuple(tokens[1:]))


def _not(tokens):
    return Not(tokens[0])


def _or(tokens):
    return Or(tuple(tokens))


def _distinct(tokens):
    return Distinct(tokens[0], tokens[1])


def _rule(tokens):
    return Rule(tokens[0], tuple(tokens[1:]))


def _description(tokens):
    return Description(tuple(tokens))


def build_grammar() -> Grammar:
    lpar, rpar = lexer.lpar(), lexer.rpar()

    constant = lexer.identifier().set_parse_action(_constant).set_name("constant")
    term = Forward().set_name("term")
    literal = Forward().set_name("literal")

    var_term = (lexer.qmark() + lexer.identifier()).set_parse_action(_variable).set_name("variable")
    func_term = (constant + ZeroOrMore(term)).set_parse_action(_function).set_name("function")
    term <<= (lpar + func_term + rpar) | var_term | constant

    # Proposition is built directly, never recovered from another variant
    prop_lit = lexer.relation_name().set_parse_action(_proposition)
    rel_lit = (lexer.relation_name().set_parse_action(_constant) + ZeroOrMore(term)).set_parse_action(_relation).set_name("relation")
    not_lit = (lexer.keyword("not") + literal).set_parse_action(_not).set_name("not")
    or_lit = (lexer.keyword("or") + ZeroOrMore(literal)).set_parse_action(_or).set_name("or")
    distinct_lit = (lexer.keyword("distinct") + term + term).set_parse_action(_distinct).set_name("distinct")
    literal <<= (lpar + (or_lit | not_lit | distinct_lit | rel_lit) + rpar) | prop_lit

    sentence = (prop_lit | (lpar + rel_lit + rpar)).set_name("sentence")
    rule = (lpar + lexer.implies() + sentence + ZeroOrMore(literal) + rpar).set_parse_action(_rule).set_name("rule")
    clause = (rule | sentence).set_name("clause")

    description = ZeroOrMore(clause).set_parse_action(_description).set_name("description")

    comment = lexer.comment()
    entry_points = (description, clause, sentence, literal, term)
    for element in entry_points:
        element.ignore(comment)
        element.parse_with_tabs()
        element.streamline()
    return Grammar(*entry_points)


GRAMMAR = build_grammar()

# pyparsing spends roughly a dozen interpreter frames per level of parentheses
FRAMES_PER_LEVEL = 20

_limit_lock = threading.Lock()
_limit_users = 0
_saved_limit = 0


def nesting_depth(text: str) -> int:
    """Deepest parenthesis nesting in `text`, comments included."""
    depth = deepest = 0
    for ch in text:
        if ch == "(":
            depth += 1
            if depth > deepest:
                deepest = depth
        elif ch == ")" and depth:
            depth -= 1
    return deepest


@contextmanager
def recursion_headroom(depth: int) -> Iterator[None]:
    """Raise the interpreter recursion limit for `depth` nested forms.

    The limit is process-wide, so overlapping calls share one raised limit and
    the previous limit comes back when the last of them finishes.
    """
    global _limit_users, _saved_limit
    with _limit_lock:
        if _limit_users == 0:
            _saved_limit = sys.getrecursionlimit()
        _limit_users += 1
        needed = _saved_limit + FRAMES_PER_LEVEL * depth
        if needed > sys.getrecursionlimit():
            sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        with _limit_lock:
            _limit_users -= 1
            if _limit_users == 0:
                sys.setrecursionlimit(_saved_limit)


def run(element: ParserElement, text: str):
    """Match `element` against the whole of `text`, trailing trivia included."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    logger.debug("matching %s against %d characters", element, len(text))
    with recursion_headroom(nesting_depth(text)), lexer.tracking() as furthest:
        try:
            return element.parse_string(text, parse_all=True)[0]
        except ParseFatalException as pe:
            err = syntax_error(text, pe)
        except ParseBaseException as pe:
            err = syntax_error(text, pe, furthest)
        except RecursionError:
            err = GDLSyntaxError("input nested too deeply", Location.at(text, 0))
    logger.debug("syntax error in %s: %s", element, err)
    raise err


def _expected(msg: str) -> List[str]:
    return [msg[len("Expected "):]] if msg.startswith("Expected ") else []


def syntax_error(text: str, pe: ParseBaseException, furthest: Optional[lexer.Furthest] = None) -> GDLSyntaxError:
    """Convert a pyparsing failure, preferring the deepest token failure seen."""
    offset, expected = pe.loc, _expected(pe.msg)
    if furthest is not None and furthest.loc > offset:
        offset, expected = furthest.loc, list(furthest.expected)
    elif furthest is not None and furthest.loc == offset:
        expected = furthest.expected + [e for e in expected if e not in furthest.expected]

    if offset < len(text):
        offset = lexer.skip_trivia(text, offset)
    location = Location.at(text, offset)
    found = repr(text[offset]) if offset < len(text) else "end of input"
    if not expected:
        message = pe.msg or "syntax error"
    elif len(expected) == 1:
        message = f"Expected {expected[0]}, found {found}"
    else:
        message = f"Expected {', '.join(expected[:-1])} or {expected[-1]}, found {found}"
    source_line = text.split("\n")[location.line - 1]
    return GDLSyntaxError(message, location, expected=" or ".join(expected), source_line=source_line)


def parse(text: str) -> Description:
    """Parse a complete GDL program.

    Raises GDLSyntaxError, positioned at the furthest point any alternative
    reached, if the text is not a sequence of clauses.
    """
    desc = run(GRAMMAR.description, text)
    logger.debug("parsed %d clauses", len(desc.clauses))
    return desc


def parse_clause(text: str):
    return run(GRAMMAR.clause, text)


def parse_sentence(text: str):
    return run(GRAMMAR.sentence, text)


def parse_literal(text: str):
    return run(GRAMMAR.literal, text)


def parse_term(text: str):
    return run(GRAMMAR.term, text)
