from warbler.Parser import ParseResult
from warbler.Prim import W, value
from warbler.Char import integer

abcd = W(['a', 'b', 'c', 'd'])


def test_map():
    assert value(integer.map(lambda n: n * n)('5')) == 25


def test_map_leaves_failure_alone():
    calls = []
    res = W('a').map(calls.append)('b')
    assert res == ParseResult(False, None, 'b')
    assert calls == []


def test_nth_single():
    assert value(W(['a', 'b', 'c']).nth(1)('abc')) == 'b'


def test_nth_several():
    instruction = W([
        'throw ',
        W('eggs', 'bricks'),
        ' at ',
        W('neighboring houses', 'Martin Shkreli'),
    ]).nth(1, 3)
    assert value(instruction('throw eggs at Martin Shkreli')) == ['eggs', 'Martin Shkreli']


def test_const():
    op = W(W('+').const('add'), W('*').const('multiply'))
    assert value(op('+')) == 'add'
    assert value(op('*')) == 'multiply'


def test_set_on_mapping():
    tagged = integer.map(lambda n: {'n': n}).set('type', 'Number')
    assert value(tagged('3')) == {'n': 3, 'type': 'Number'}


def test_skip_and_take():
    assert value(abcd.skip(1)('abcd')) == ['b', 'c', 'd']
    assert value(abcd.skip_last(1)('abcd')) == ['a', 'b', 'c']
    assert value(abcd.take(2)('abcd')) == ['a', 'b']
    assert value(abcd.take_last(2)('abcd')) == ['c', 'd']


def test_skip_and_take_zero():
    assert value(abcd.skip_last(0)('abcd')) == ['a', 'b', 'c', 'd']
    assert value(abcd.take_last(0)('abcd')) == []


def test_chains_keep_rest():
    res = abcd.nth(0)('abcdz')
    assert res == ParseResult(True, 'a', 'z')


def test_readme_arithmetic():
    operations = {
        '+': lambda a, b: a + b,
        '*': lambda a, b: a * b,
    }
    add = W([integer, W('+', '*'), integer]).map(lambda xs: operations[xs[1]](xs[0], xs[2]))
    assert value(add('45+9')) == 54
