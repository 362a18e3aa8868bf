import re

import pytest
from hypothesis import given, strategies as st

from warbler.Parser import Environment, GrammarError, Parser, ParseResult
from warbler.Prim import Terminal, W, parse, literal, pattern, is_success, value, lazy, forward_decl
from warbler.Char import digit, integer, whitespace, any_char


# --- Literal ---

@given(st.text(), st.text())
def test_literal_matches_prefix(s, text):
    res = parse(s)(text)
    assert res.success == text.startswith(s)
    if res.success:
        assert res.value == s
        assert res.rest == text[len(s):]
    else:
        assert res.value is None
        assert res.rest == text


def test_literal_is_terminal():
    assert isinstance(parse('a'), Terminal)
    assert isinstance(literal('a'), Terminal)


# --- Pattern ---

def test_pattern_anchored_at_start():
    ident = W(re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*'))
    assert value(ident('christopherWalken')) == 'christopherWalken'

    # A match later in the input does not count
    res = ident('  abc')
    assert not res.success
    assert res.rest == '  abc'


def test_pattern_failure_value_is_empty_string():
    res = pattern(re.compile(r'[0-9]'))('x')
    assert res.success is False
    assert res.value == ''


# --- Normalization ---

def test_several_arguments_mean_or():
    fruits = W('apple', 'banana', 'orange')
    assert value(fruits('bananas for mañana')) == 'banana'


def test_list_means_seq():
    res = W(['a', 'b', 'c'])('abcd')
    assert res == ParseResult(True, ['a', 'b', 'c'], 'd')


def test_parser_is_returned_unchanged():
    p = W('a')
    assert parse(p) is p


def test_function_parser():
    def parse_x(text, env):
        return ParseResult(text[:1] == 'x', text[:1], text[1:])

    three_xs = W([parse_x, parse_x, parse_x])
    assert value(three_xs('xxxyyyzzz')) == ['x', 'x', 'x']


def test_function_parser_gets_default_environment():
    seen = []

    def record(text, env):
        seen.append(env)
        return ParseResult.ok(None, text)

    W(record)('abc')
    assert isinstance(seen[0], Environment)
    assert (seen[0].line, seen[0].col) == (1, 1)


def test_none_is_a_grammar_error():
    with pytest.raises(GrammarError):
        parse(None)
    with pytest.raises(TypeError):
        W(['a', None])


def test_unsupported_value_is_a_grammar_error():
    with pytest.raises(GrammarError):
        parse(42)


# --- Built-ins ---

def test_digit():
    assert digit('7x') == ParseResult(True, '7', 'x')
    assert not digit('x7').success


def test_integer():
    res = integer('42abc')
    assert res.success
    assert res.value == 42
    assert res.rest == 'abc'


def test_whitespace_matches_empty():
    assert whitespace('  \n\tx') == ParseResult(True, '  \n\t', 'x')
    assert whitespace('x') == ParseResult(True, '', 'x')


def test_any_char():
    assert any_char('ab') == ParseResult(True, 'a', 'b')
    res = any_char('')
    assert res.success is False
    assert res.rest == ''


# --- Results ---

def test_is_success_requires_all_input():
    assert is_success(ParseResult(True, 1, ''))
    assert not is_success(ParseResult(True, 1, 'c'))
    assert not is_success(ParseResult(False, None, ''))


def test_maps_parse_results():
    number = W('0', '1', '2', '3', '4', '5', '6', '7', '8', '9').map(int)
    op = W(
        W('*').const(lambda a, b: a * b),
        W('+').const(lambda a, b: a + b),
    )
    expr = W([number, op, number]).map(lambda xs: xs[1](xs[0], xs[2]))
    assert value(expr('2+3')) == 5


# --- Forward references ---

def test_forward_decl():
    expr = forward_decl("expr")
    group = W(['(', expr, ')']).nth(1)
    expr.define(W(group, integer))

    res = expr('((7))')
    assert is_success(res)
    assert res.value == 7


def test_forward_decl_used_before_define():
    expr = forward_decl("expr")
    with pytest.raises(GrammarError):
        expr('1')


def test_lazy_looks_up_at_call_time():
    rules = {}
    p = lazy(lambda: rules['item'])
    rules['item'] = 'a'
    assert value(p('a')) == 'a'


def test_or_operator():
    p = W('a') | 'b'
    assert isinstance(p, Parser)
    assert value(p('b')) == 'b'
    assert value(('x' | W('y'))('x')) == 'x'
