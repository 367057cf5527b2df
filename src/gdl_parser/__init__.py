"""gdl_parser: Game Description Language parser and AST utilities."""

from .nodes import (
    Description,
    Clause,
    Rule,
    Sentence,
    Literal,
    Term,
    Constant,
    Variable,
    Function,
    Relation,
    Proposition,
    Not,
    Or,
    Distinct,
    const,
    var,
    func,
    prop,
    rel,
    rule,
    description,
)
from .errors import GDLError, GDLSyntaxError
from .locations import Location
from .diagnostics import Diagnostic, format_diagnostic
from .grammar import parse, parse_clause, parse_sentence, parse_literal, parse_term
from .sexpr import parse_program
from .printer import print_description
from .visitors import Visitor, Transformer, walk
from .serialization import dumps, loads, to_dict, from_dict

__all__ = [
    "Description",
    "Clause",
    "Rule",
    "Sentence",
    "Literal",
    "Term",
    "Constant",
    "Variable",
    "Function",
    "Relation",
    "Proposition",
    "Not",
    "Or",
    "Distinct",
    "const",
    "var",
    "func",
    "prop",
    "rel",
    "rule",
    "description",
    "GDLError",
    "GDLSyntaxError",
    "Location",
    "Diagnostic",
    "format_diagnostic",
    "parse",
    "parse_clause",
    "parse_sentence",
    "parse_literal",
    "parse_term",
    "parse_program",
    "print_description",
    "Visitor",
    "Transformer",
    "walk",
    "dumps",
    "loads",
    "to_dict",
    "from_dict",
]
