'''
Lexer tests
'''

import regex

from precalc.lexer import Lexer
from precalc.registry import default_registry
from precalc.tokens import TokenKind
from precalc.util import LexError

from pytest import raises


def texts(tokens):
    return [token.text for token in tokens]


def kinds(tokens):
    return [token.kind for token in tokens]


def test_simple_expression():
    l = Lexer()
    tokens = l.tokenize('3+4*2')
    assert texts(tokens) == ['3', '+', '4', '*', '2']
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.OPERATOR,
                             TokenKind.NUMBER, TokenKind.OPERATOR,
                             TokenKind.NUMBER]


def test_maximal_munch():
    l = Lexer()
    assert texts(l.tokenize('sinh(1)')) == ['sinh', '(', '1', ')']
    assert texts(l.tokenize('log10(1)')) == ['log10', '(', '1', ')']
    assert texts(l.tokenize('acosh(2)')) == ['acosh', '(', '2', ')']
    assert texts(l.tokenize('sin\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}(1)')) \
        == ['sin\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}', '(', '1', ')']


def test_every_symbol_lexes_whole():
    l = Lexer()
    for entry in default_registry():
        assert list(l.lex(entry.symbol)) == [('symbol', entry.symbol, 0)]


def test_number_literals_are_canonical():
    l = Lexer()
    assert texts(l.tokenize('1_000.5')) == ['1000.5']
    assert texts(l.tokenize('.5')) == ['0.5']
    assert texts(l.tokenize('2.')) == ['2']


def test_sign_folds_into_literal_only_where_an_operand_is_expected():
    l = Lexer()
    assert texts(l.tokenize('-2+3')) == ['-2', '+', '3']
    assert texts(l.tokenize('3-2')) == ['3', '-', '2']
    assert texts(l.tokenize('3*-2')) == ['3', '*', '-2']
    assert texts(l.tokenize('(-2)')) == ['(', '-2', ')']
    assert texts(l.tokenize('+2')) == ['2']


def test_unary_minus_before_non_literal():
    l = Lexer()
    tokens = l.tokenize('-x')
    assert kinds(tokens) == [TokenKind.FUNCTION, TokenKind.VARIABLE]
    assert texts(tokens) == ['neg', 'x']
    assert texts(l.tokenize('-(1)')) == ['neg', '(', '1', ')']


def test_separators():
    l = Lexer()
    for separator in ';', ',':
        tokens = l.tokenize('gcd(4' + separator + '6)')
        assert kinds(tokens)[3] is TokenKind.ARGUMENT_SEPARATOR


def test_absolute_value_bars():
    l = Lexer()
    assert texts(l.tokenize('|-5|')) == ['abs', '(', '-5', ')']
    assert texts(l.tokenize('||x|-1|')) == ['abs', '(', 'abs', '(', 'x', ')',
                                            '-', '1', ')']


def test_implicit_multiplication():
    l = Lexer()
    assert texts(l.tokenize('2pi')) == ['2', '*', 'pi']
    assert texts(l.tokenize('2(3)')) == ['2', '*', '(', '3', ')']
    assert texts(l.tokenize('(1)(2)')) == ['(', '1', ')', '*', '(', '2', ')']
    assert texts(l.tokenize('2sin(1)')) == ['2', '*', 'sin', '(', '1', ')']
    assert texts(l.tokenize('|-5|3')) == ['abs', '(', '-5', ')', '*', '3']
    assert texts(l.tokenize('(2)3')) == ['(', '2', ')', '*', '3']


def test_adjacent_numbers_stay_apart():
    l = Lexer()
    assert texts(l.tokenize('1 2')) == ['1', '2']


def test_constants_and_variables():
    l = Lexer()
    tokens = l.tokenize('Rec(r;\N{GREEK SMALL LETTER THETA})')
    assert kinds(tokens) == [TokenKind.FUNCTION, TokenKind.LEFT_PAREN,
                             TokenKind.VARIABLE, TokenKind.ARGUMENT_SEPARATOR,
                             TokenKind.VARIABLE, TokenKind.RIGHT_PAREN]
    assert kinds(l.tokenize('pi')) == [TokenKind.CONSTANT]
    assert kinds(l.tokenize('\N{GREEK SMALL LETTER PI}')) == \
        [TokenKind.CONSTANT]


def test_unicode_operators():
    l = Lexer()
    assert texts(l.tokenize('\N{SQUARE ROOT}16')) == ['\N{SQUARE ROOT}', '16']
    tokens = l.tokenize('2\N{MULTIPLICATION SIGN}3')
    assert tokens[1].kind is TokenKind.OPERATOR


def test_factorial_is_operator():
    l = Lexer()
    tokens = l.tokenize('5!')
    assert tokens[1].kind is TokenKind.OPERATOR
    assert tokens[1].text == '!'


def test_misplaced_factorial():
    l = Lexer()
    with raises(LexError, match=regex.escape("Factorial '!' must follow")):
        l.tokenize('!3')
    with raises(LexError):
        l.tokenize('3+!')


def test_unknown_character():
    l = Lexer()
    with raises(LexError, match=regex.escape("Couldn't lex '$ 4' at "
                                             "position 2")):
        l.tokenize('3 $ 4')


def test_empty():
    l = Lexer()
    assert l.tokenize('') == []
    assert l.tokenize('   ') == []
