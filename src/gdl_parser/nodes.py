from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class Constant:
    name: str


@dataclass(frozen=True, slots=True)
class Variable:
    # stored without the leading '?'
    name: str


@dataclass(frozen=True, slots=True)
class Function:
    name: Constant
    args: Tuple[Term, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.args)


@dataclass(frozen=True, slots=True)
class Proposition:
    name: Constant

    @property
    def arity(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Relation:
    """Parenthesized sentence. `(p)` is a Relation with no args, never a Proposition."""

    name: Constant
    args: Tuple[Term, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.args)


@dataclass(frozen=True, slots=True)
class Not:
    literal: Literal


@dataclass(frozen=True, slots=True)
class Or:
    literals: Tuple[Literal, ...] = ()


@dataclass(frozen=True, slots=True)
class Distinct:
    term1: Term
    term2: Term


@dataclass(frozen=True, slots=True)
class Rule:
    head: Sentence
    body: Tuple[Literal, ...] = ()


@dataclass(frozen=True, slots=True)
class Description:
    clauses: Tuple[Clause, ...] = ()

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(c for c in self.clauses if isinstance(c, Rule))

    @property
    def sentences(self) -> Tuple[Sentence, ...]:
        return tuple(c for c in self.clauses if not isinstance(c, Rule))


# Sum types are unions of concrete node types
Term = Union[Function, Variable, Constant]
Sentence = Union[Proposition, Relation]
Literal = Union[Not, Or, Distinct, Relation, Proposition]
Clause = Union[Rule, Sentence]
Node = Union[Description, Rule, Not, Or, Distinct, Relation, Proposition, Function, Variable, Constant]

# Ergonomic factories; strings are wrapped as Constants

def const(name: str) -> Constant:
    return Constant(name)


def var(name: str) -> Variable:
    return Variable(name[1:] if name.startswith("?") else name)


def _term(t: Union[Term, str]) -> Term:
    if isinstance(t, str):
        return var(t) if t.startswith("?") else Constant(t)
    return t


def func(name: str, *args: Union[Term, str]) -> Function:
    return Function(name=Constant(name), args=tuple(_term(a) for a in args))


def prop(name: str) -> Proposition:
    return Proposition(name=Constant(name))


def rel(name: str, *args: Union[Term, str]) -> Relation:
    return Relation(name=Constant(name), args=tuple(_term(a) for a in args))


def rule(head: Sentence, *body: Literal) -> Rule:
    return Rule(head=head, body=tuple(body))


def description(*clauses: Clause) -> Description:
    return Description(clauses=tuple(clauses))
