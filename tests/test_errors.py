import pytest

from gdl_parser import GDLError, GDLSyntaxError, format_diagnostic, parse, parse_literal


def test_error_reports_furthest_position():
    with pytest.raises(GDLSyntaxError) as info:
        parse("(<= (p ?x) (distinct ?x))")
    err = info.value
    assert err.offset == 23
    assert (err.line, err.column) == (1, 24)
    assert "constant" in err.expected
    assert "found ')'" in err.message


def test_error_line_and_column_on_later_line():
    text = "(role red)\n  (<= p (distinct x))"
    with pytest.raises(GDLSyntaxError) as info:
        parse(text)
    err = info.value
    assert (err.line, err.column) == (2, 20)
    assert err.source_line == "  (<= p (distinct x))"
    assert err.explain().splitlines()[-1] == " " * 19 + "^"


def test_unclosed_paren_reports_end_of_input():
    with pytest.raises(GDLSyntaxError) as info:
        parse("(role red)\n(init (cell 1 1 b)\n")
    err = info.value
    assert "end of input" in err.message
    assert "')'" in err.expected


def test_keyword_cannot_name_a_relation():
    with pytest.raises(GDLSyntaxError) as info:
        parse("(not x)")
    assert "relation name" in info.value.expected


def test_stray_close_paren():
    with pytest.raises(GDLSyntaxError) as info:
        parse("(role red) )")
    err = info.value
    assert err.column == 12
    assert "end of text" in err.expected


def test_error_is_a_gdl_error():
    with pytest.raises(GDLError):
        parse_literal("(distinct x)")


def test_to_diagnostic():
    with pytest.raises(GDLSyntaxError) as info:
        parse("(role red)\n  (<= p (distinct x))")
    diag = info.value.to_diagnostic()
    assert diag.code == "E001"
    assert diag.source_line == "  (<= p (distinct x))"
    out = format_diagnostic(diag, file="game.gdl")
    first, source, marker, note = out.splitlines()
    assert first.startswith("error[E001] at game.gdl:2:20: Expected")
    assert source == "  |   (<= p (distinct x))"
    assert marker == "  | " + " " * 19 + "^"
    assert note.startswith("  note at game.gdl:2:20: expected")


def test_caret_keeps_tabs_aligned():
    with pytest.raises(GDLSyntaxError) as info:
        parse("\t(role red))")
    assert info.value.explain().splitlines()[-1] == "\t" + " " * 10 + "^"
