"""Canonical prefix GDL text for an AST.

Only trees that the parser could have produced are printable: every name
must be an identifier, and relation and proposition names must not be one
of the literal keywords. Anything else raises ValueError, since its text
would not parse back to the same tree.
"""

from __future__ import annotations

from .lexer import is_identifier, is_relation_name
from .nodes import (
    Clause,
    Constant,
    Description,
    Distinct,
    Function,
    Literal,
    Not,
    Or,
    Proposition,
    Relation,
    Rule,
    Term,
    Variable,
)


def print_description(d: Description) -> str:
    return "\n".join(print_clause(c) for c in d.clauses)


def print_clause(c: Clause) -> str:
    match c:
        case Rule(head=head, body=body):
            parts = [print_literal(head), *(print_literal(lit) for lit in body)]
            return f"(<= {' '.join(parts)})"
    return print_literal(c)


def print_literal(lit: Literal) -> str:
    match lit:
        case Proposition(name=name):
            return _relation_name(name)
        case Relation(name=name, args=args):
            return _compound(_relation_name(name), [print_term(t) for t in args])
        case Not(literal=inner):
            return f"(not {print_literal(inner)})"
        case Or(literals=literals):
            return _compound("or", [print_literal(x) for x in literals])
        case Distinct(term1=t1, term2=t2):
            return f"(distinct {print_term(t1)} {print_term(t2)})"
    raise TypeError(f"not a literal: {lit!r}")


def print_term(t: Term) -> str:
    match t:
        case Constant(name=name):
            return _identifier(name)
        case Variable(name=name):
            return f"?{_identifier(name)}"
        case Function(name=name, args=args):
            return _compound(_identifier(name.name), [print_term(a) for a in args])
    raise TypeError(f"not a term: {t!r}")


def _identifier(name: str) -> str:
    if not is_identifier(name):
        raise ValueError(f"{name!r} is not a GDL identifier")
    return name


def _relation_name(name: Constant) -> str:
    if not is_relation_name(name.name):
        raise ValueError(f"{name.name!r} cannot name a relation or proposition")
    return name.name


def _compound(head: str, args: list) -> str:
    if not args:
        return f"({head})"
    return f"({head} {' '.join(args)})"
