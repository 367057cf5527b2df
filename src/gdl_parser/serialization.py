"""JSON encoding of GDL trees.

Every node becomes an object with a ``"type"`` tag:

    {"type": "relation", "name": "role", "args": [{"type": "constant", "name": "red"}]}
"""

from __future__ import annotations

from typing import Any, Dict

import orjson

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


def to_dict(node: Node) -> Dict[str, Any]:
    """Convert a node (and everything under it) to plain dicts and lists"""
    match node:
        case Description(clauses=clauses):
            return {"type": "description", "clauses": [to_dict(c) for c in clauses]}
        case Rule(head=head, body=body):
            return {"type": "rule", "head": to_dict(head), "body": [to_dict(lit) for lit in body]}
        case Proposition(name=name):
            return {"type": "proposition", "name": name.name}
        case Relation(name=name, args=args):
            return {"type": "relation", "name": name.name, "args": [to_dict(a) for a in args]}
        case Not(literal=literal):
            return {"type": "not", "literal": to_dict(literal)}
        case Or(literals=literals):
            return {"type": "or", "literals": [to_dict(lit) for lit in literals]}
        case Distinct(term1=t1, term2=t2):
            return {"type": "distinct", "term1": to_dict(t1), "term2": to_dict(t2)}
        case Function(name=name, args=args):
            return {"type": "function", "name": name.name, "args": [to_dict(a) for a in args]}
        case Variable(name=name):
            return {"type": "variable", "name": name}
        case Constant(name=name):
            return {"type": "constant", "name": name}
    raise TypeError(f"not a GDL node: {node!r}")


def from_dict(data: Dict[str, Any]) -> Node:
    """Create a node from the output of `to_dict`"""
    node_type = data.get("type")
    if node_type == "description":
        return Description(tuple(from_dict(c) for c in data["clauses"]))
    elif node_type == "rule":
        return Rule(from_dict(data["head"]), tuple(from_dict(lit) for lit in data["body"]))
    elif node_type == "proposition":
        return Proposition(Constant(data["name"]))
    elif node_type == "relation":
        return Relation(Constant(data["name"]), tuple(from_dict(a) for a in data["args"]))
    elif node_type == "not":
        return Not(from_dict(data["literal"]))
    elif node_type == "or":
        return Or(tuple(from_dict(lit) for lit in data["literals"]))
    elif node_type == "distinct":
        return Distinct(from_dict(data["term1"]), from_dict(data["term2"]))
    elif node_type == "function":
        return Function(Constant(data["name"]), tuple(from_dict(a) for a in data["args"]))
    elif node_type == "variable":
        return Variable(data["name"])
    elif node_type == "constant":
        return Constant(data["name"])
    else:
        raise ValueError(f"Unknown node type: {node_type}")


def dumps(node: Node) -> str:
    """Serialize to JSON string"""
    return orjson.dumps(to_dict(node)).decode("utf-8")


def loads(json_str: str) -> Node:
    """Deserialize from JSON string"""
    return from_dict(orjson.loads(json_str))
