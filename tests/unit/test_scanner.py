import pytest

import toon_scanner as ts


@pytest.mark.parametrize("text", ["", "a,b", "k:v", "{x}", "[1]", "a\nb", "a\rb", "a\tb", " x", "x ", 'say "hi"', "dir\\"])
def test_needs_quoting(text):
    assert ts.needs_quoting(text)

@pytest.mark.parametrize("text", ["Alice", "hello world", "true", "42", "it's", "a-b_c.d"])
def test_bare_strings(text):
    assert not ts.needs_quoting(text)

def test_quote_escapes_specials():
    assert ts.quote('a\\b"c\nd\re\tf') == '"a\\\\b\\"c\\nd\\re\\tf"'

def test_unquote_reverses_quote():
    original = 'a\\b"c\nd\re\tf, g: h'
    assert ts.unquote(ts.quote(original)) == original

def test_unquote_leaves_bare_and_unknown_escapes():
    assert ts.unquote("  plain  ") == "plain"
    assert ts.unquote('"\\q"') == "\\q"
    assert ts.unquote('"') == '"'
    assert ts.unquote('"abc') == '"abc'

def test_unquote_escaped_backslash_before_n():
    # \\n is a backslash followed by n, not a newline
    assert ts.unquote('"a\\\\nb"') == "a\\nb"

def test_find_unquoted_skips_quoted_segments():
    assert ts.find_unquoted('"a:b": c', ":") == 5
    assert ts.find_unquoted('"a\\":b":c', ":") == 7
    assert ts.find_unquoted("no colon here", ":") == -1

def test_find_unquoted_honours_start():
    assert ts.find_unquoted("a:b:c", ":", 2) == 3

def test_split_delimited_respects_quotes():
    assert ts.split_delimited('a, "b,c" ,d') == ["a", '"b,c"', "d"]

def test_split_delimited_keeps_escapes():
    assert ts.split_delimited('"x\\"y",z') == ['"x\\"y"', "z"]

def test_split_delimited_edges():
    assert ts.split_delimited("") == []
    assert ts.split_delimited("a,") == ["a"]
    assert ts.split_delimited("a, ") == ["a"]
    assert ts.split_delimited(" , ") == [""]
    assert ts.split_delimited("a,,b") == ["a", "", "b"]

def test_indent_width():
    assert ts.indent_width("x") == 0
    assert ts.indent_width("   x") == 3
    assert ts.indent_width("  \tx") == 4
    assert ts.indent_width("\t\t") == 4

def test_parse_scalar_literals_and_numbers():
    assert ts.parse_scalar("null") is None
    assert ts.parse_scalar("true") is True
    assert ts.parse_scalar("false") is False
    assert ts.parse_scalar(" 42 ") == 42
    assert ts.parse_scalar("-0.5") == -0.5
    assert ts.parse_scalar("2E-3") == 0.002

def test_parse_scalar_strings():
    assert ts.parse_scalar('"42"') == "42"
    assert ts.parse_scalar("hello world") == "hello world"
    assert ts.parse_scalar('"a\\tb"') == "a\tb"
    assert ts.parse_scalar("+1") == "+1"

def test_parse_fields():
    assert ts.parse_fields('1,"two",true,null, x ') == [1, "two", True, None, "x"]
