import pytest

from gdl_parser import Description, Distinct, Not, Or, Rule, Variable, func, parse, print_description, prop, rel
from gdl_parser.printer import print_literal, print_term


def test_print_facts_and_rules():
    desc = Description(clauses=(
        rel("role", "red"),
        rel("init", func("cell", "1", "1", "b")),
        Rule(rel("legal", "?w", func("mark", "?x", "?y")), (
            rel("true", func("cell", "?x", "?y", "b")),
            rel("true", func("control", "?w")),
        )),
        Rule(prop("terminal"), (Not(prop("open")),)),
    ))

    out = print_description(desc)
    expected = "\n".join([
        "(role red)",
        "(init (cell 1 1 b))",
        "(<= (legal ?w (mark ?x ?y)) (true (cell ?x ?y b)) (true (control ?w)))",
        "(<= terminal (not open))",
    ])
    assert out == expected


def test_print_zero_arity_forms():
    # A proposition prints as just the name; an empty relation keeps its parens
    assert print_literal(prop("start")) == "start"
    assert print_literal(rel("start")) == "(start)"
    assert print_literal(Or(())) == "(or)"
    assert print_term(func("f")) == "(f)"


def test_print_distinct_and_or():
    lit = Or((Distinct(Variable("x"), func("f", "a")), Not(rel("p", "?x"))))
    assert print_literal(lit) == "(or (distinct ?x (f a)) (not (p ?x)))"


def test_printed_output_parses_back():
    text = "(<= (next (cell ?m ?n x)) (does xplayer (mark ?m ?n)) (or (true (cell ?m ?n b)) (distinct ?m 1)))\nterminal\n(role)"
    desc = parse(text)
    assert print_description(desc) == text
    assert parse(print_description(desc)) == desc


def test_unparseable_names_are_rejected():
    for lit in (prop("not"), rel("or", "a"), rel("p", "bad name"), Not(rel("distinct"))):
        with pytest.raises(ValueError):
            print_literal(lit)
    with pytest.raises(ValueError):
        print_term(Variable("x y"))
    # keywords are fine where the grammar accepts them as terms
    assert print_literal(rel("input", "not", func("or"))) == "(input not (or))"
