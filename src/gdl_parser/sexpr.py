"""Generic s-expression surface grammar.

    program := sexpr*
    sexpr   := '(' body ')' / constant
    body    := '<=' sterm*          -> RuleOp
             / constant sterm*      -> Func
    sterm   := '(' body ')'         -> ExprTerm
             / '?' identifier       -> Variable
             / number               -> Num
             / constant             -> Constant

No distinction is made between rules, sentences and literals; a bare
constant is a Func with no terms. Shares the lexical layer of the GDL
grammar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple, Union

from pyparsing import Forward, ParseFatalException, ParserElement, ZeroOrMore

from . import lexer
from .grammar import run
from .nodes import Constant, Variable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Num:
    value: int


@dataclass(frozen=True, slots=True)
class Func:
    name: Constant
    terms: Tuple[STerm, ...] = ()


@dataclass(frozen=True, slots=True)
class RuleOp:
    terms: Tuple[STerm, ...] = ()


@dataclass(frozen=True, slots=True)
class ExprTerm:
    expr: SExpr


@dataclass(frozen=True, slots=True)
class Program:
    exprs: Tuple[SExpr, ...] = ()


SExpr = Union[Func, RuleOp]
STerm = Union[ExprTerm, Variable, Num, Constant]


def _number(number_bits: Optional[int]):
    limit = None if number_bits is None else (1 << number_bits) - 1

    def convert(s, loc, tokens):
        value = int(tokens[0])
        if limit is not None and value > limit:
            # fatal: an out-of-range number is an error, not a reason to backtrack
            raise ParseFatalException(s, loc, f"number {tokens[0]} exceeds the {number_bits}-bit maximum {limit}")
        return Num(value)

    return convert


def build_sexpr_grammar(number_bits: Optional[int] = None) -> ParserElement:
    """Return the s-expression grammar for one number width, built once per width."""
    if number_bits is not None and (
        isinstance(number_bits, bool) or not isinstance(number_bits, int) or number_bits < 1
    ):
        raise ValueError(f"number_bits must be a positive int or None, got {number_bits!r}")
    return _build_sexpr_grammar(number_bits)


@lru_cache(maxsize=None)
def _build_sexpr_grammar(number_bits: Optional[int]) -> ParserElement:
    lpar, rpar = lexer.lpar(), lexer.rpar()
    constant = lexer.identifier().set_parse_action(lambda t: Constant(t[0])).set_name("constant")
    sterm = Forward().set_name("term")

    rule_op = (lexer.implies() + ZeroOrMore(sterm)).set_parse_action(lambda t: RuleOp(tuple(t)))
    func = (constant + ZeroOrMore(sterm)).set_parse_action(lambda t: Func(t[0], tuple(t[1:])))
    body = (rule_op | func).set_name("s-expression")

    expr_term = (lpar + body + rpar).set_parse_action(lambda t: ExprTerm(t[0]))
    var_term = (lexer.qmark() + lexer.identifier()).set_parse_action(lambda t: Variable(t[0]))
    num = lexer.number().set_parse_action(_number(number_bits))
    sterm <<= expr_term | var_term | num | constant

    bare = lexer.identifier().set_parse_action(lambda t: Func(Constant(t[0])))
    sexpr = ((lpar + body + rpar) | bare).set_name("s-expression")
    program = ZeroOrMore(sexpr).set_parse_action(lambda t: Program(tuple(t))).set_name("program")

    program.ignore(lexer.comment())
    program.parse_with_tabs()
    program.streamline()
    return program


def parse_program(text: str, number_bits: Optional[int] = None) -> Program:
    """Parse text with the s-expression grammar.

    Numbers are unbounded unless `number_bits` is given, in which case any
    literal above ``2**number_bits - 1`` is a GDLSyntaxError.
    """
    prog = run(build_sexpr_grammar(number_bits), text)
    logger.debug("parsed %d s-expressions", len(prog.exprs))
    return prog
