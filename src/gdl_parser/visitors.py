from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterator, List

from .nodes import (
    Constant,
    Description,
    Distinct,
    Function,
    Node,
    Not,
    Or,
    Proposition,
    Relation,
    Rule,
    Variable,
)


def _children(node: Node) -> List[Node]:
    match node:
        case Description(clauses=clauses):
            return list(clauses)
        case Rule(head=head, body=body):
            return [head, *body]
        case Relation(name=name, args=args) | Function(name=name, args=args):
            return [name, *args]
        case Proposition(name=name):
            return [name]
        case Not(literal=literal):
            return [literal]
        case Or(literals=literals):
            return list(literals)
        case Distinct(term1=t1, term2=t2):
            return [t1, t2]
        case Variable() | Constant():
            return []
    raise TypeError(f"not a GDL node: {node!r}")


def walk(node: Node) -> Iterator[Node]:
    """Yield every node under `node` in post-order, children left to right.

    Iterative, so arbitrarily deep trees do not hit the recursion limit.
    """
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            yield current
            continue
        stack.append((current, True))
        for child in reversed(_children(current)):
            stack.append((child, False))


class Visitor:
    """Composition-based visitor using structural pattern matching.

    Calls `node_cb` once for every node, children before parents. The name
    Constant of a relation, function or proposition is visited before its
    arguments; a Variable's name is a plain string and is not visited.
    """

    def __init__(self, node_cb: Callable[[Node], None]) -> None:
        self._node_cb = node_cb

    def visit(self, node: Node) -> None:
        for n in walk(node):
            self._node_cb(n)


class Transformer:
    """Composition-based transformer using structural pattern matching.

    Rebuilds children first (post-order) and hands each rebuilt node to
    `node_fn`. Nodes are frozen, so the input tree is left untouched.
    """

    def __init__(self, node_fn: Callable[[Node], Node]) -> None:
        self._node_fn = node_fn

    def transform(self, node: Node) -> Node:
        match node:
            case Description(clauses=clauses):
                node = replace(node, clauses=tuple(self.transform(c) for c in clauses))
            case Rule(head=head, body=body):
                node = replace(
                    node,
                    head=self.transform(head),
                    body=tuple(self.transform(lit) for lit in body),
                )
            case Relation(name=name, args=args) | Function(name=name, args=args):
                node = replace(
                    node,
                    name=self.transform(name),
                    args=tuple(self.transform(a) for a in args),
                )
            case Proposition(name=name):
                node = replace(node, name=self.transform(name))
            case Not(literal=literal):
                node = replace(node, literal=self.transform(literal))
            case Or(literals=literals):
                node = replace(node, literals=tuple(self.transform(lit) for lit in literals))
            case Distinct(term1=t1, term2=t2):
                node = replace(node, term1=self.transform(t1), term2=self.transform(t2))
        return self._node_fn(node)
