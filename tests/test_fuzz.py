import pytest

from gdl_parser import (
    Constant,
    Description,
    Distinct,
    Function,
    GDLSyntaxError,
    Not,
    Or,
    Proposition,
    Relation,
    Rule,
    Variable,
    loads,
    dumps,
    parse,
    parse_program,
    print_description,
)
from gdl_parser.lexer import KEYWORDS

hypothesis = pytest.importorskip("hypothesis")
st = hypothesis.strategies
given, settings = hypothesis.given, hypothesis.settings

names = st.from_regex(r"[a-z0-9_][a-z0-9_]{0,6}", fullmatch=True).filter(lambda s: s not in KEYWORDS)
constants = names.map(Constant)
terms = st.recursive(
    constants | names.map(Variable),
    lambda children: st.builds(Function, constants, st.lists(children, max_size=3).map(tuple)),
    max_leaves=8,
)
sentences = st.builds(Proposition, constants) | st.builds(Relation, constants, st.lists(terms, max_size=3).map(tuple))
literals = st.recursive(
    sentences | st.builds(Distinct, terms, terms),
    lambda children: st.builds(Not, children) | st.builds(Or, st.lists(children, max_size=3).map(tuple)),
    max_leaves=8,
)
clauses = sentences | st.builds(Rule, sentences, st.lists(literals, max_size=3).map(tuple))
descriptions = st.lists(clauses, max_size=5).map(lambda cs: Description(tuple(cs)))

gdl_text = st.text(alphabet="()<=?; \n\tabnotdisc01_", max_size=80)


@settings(deadline=None)
@given(descriptions)
def test_print_then_parse_is_identity(desc):
    assert parse(print_description(desc)) == desc


@settings(deadline=None)
@given(descriptions)
def test_json_round_trip(desc):
    assert loads(dumps(desc)) == desc


@settings(deadline=None)
@given(st.text() | gdl_text)
def test_parse_never_crashes(text):
    try:
        result = parse(text)
    except GDLSyntaxError as err:
        assert 0 <= err.offset <= len(text)
        return
    assert isinstance(result, Description)


@settings(deadline=None)
@given(st.text() | gdl_text)
def test_sexpr_parse_never_crashes(text):
    try:
        parse_program(text, number_bits=8)
    except GDLSyntaxError:
        pass
