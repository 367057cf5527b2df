from dataclasses import replace

from gdl_parser import Constant, Not, Rule, Transformer, Variable, Visitor, parse, prop, rel, walk


def test_visitor_is_post_order():
    desc = parse("(<= (p ?x) (not (q ?x a)))")

    kinds = []
    Visitor(lambda n: kinds.append(type(n).__name__)).visit(desc)
    assert kinds == [
        "Constant",  # p
        "Variable",
        "Relation",  # (p ?x)
        "Constant",  # q
        "Variable",
        "Constant",  # a
        "Relation",
        "Not",
        "Rule",
        "Description",
    ]


def test_walk_visits_every_constant_in_source_order():
    desc = parse("(role red) (init (cell 1 b)) terminal")
    names = [n.name for n in walk(desc) if isinstance(n, Constant)]
    assert names == ["role", "red", "init", "cell", "1", "b", "terminal"]


def test_walk_handles_deep_trees():
    depth = 5000
    lit = prop("q")
    for _ in range(depth):
        lit = Not(lit)
    assert sum(1 for n in walk(Rule(prop("p"), (lit,))) if isinstance(n, Not)) == depth


def test_transformer_can_rename_relations_and_variables():
    desc = parse("(<= (p ?x) (q ?x))")

    out = Transformer(lambda n: replace(n, name=Constant("p2")) if n == rel("p", "?x") else n).transform(desc)
    assert out.clauses[0].head == rel("p2", "?x")
    assert out.clauses[0].body == (rel("q", "?x"),)

    out2 = Transformer(lambda n: Variable("z") if isinstance(n, Variable) else n).transform(out)
    assert out2.clauses[0] == Rule(rel("p2", "?z"), (rel("q", "?z"),))
    # the input tree is untouched
    assert desc.clauses[0] == Rule(rel("p", "?x"), (rel("q", "?x"),))
