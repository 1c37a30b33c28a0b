'''
Shunting-Yard parser tests
'''

from precalc.lexer import Lexer
from precalc.parser import Parser, parse_to_postfix
from precalc.tokens import Token, TokenKind
from precalc.util import (MismatchedParentheses, MisplacedSeparator,
                          UnexpectedToken)

from pytest import raises


def rpn(expression):
    return [token.text for token in parse_to_postfix(
        Lexer().tokenize(expression))]


def test_precedence():
    assert rpn('3+4*2') == ['3', '4', '2', '*', '+']
    assert rpn('3*4+2') == ['3', '4', '*', '2', '+']


def test_power_is_right_associative():
    assert rpn('2^3^2') == ['2', '3', '2', '^', '^']


def test_everything_else_is_left_associative():
    assert rpn('10-3-2') == ['10', '3', '-', '2', '-']
    assert rpn('8/4/2') == ['8', '4', '/', '2', '/']
    assert rpn('7%4*2') == ['7', '4', '%', '2', '*']


def test_postfix_goes_straight_to_output():
    assert rpn('5!') == ['5', '!']
    assert rpn('2+3!') == ['2', '3', '!', '+']
    assert rpn('(1+2)!') == ['1', '2', '+', '!']


def test_parentheses():
    assert rpn('(3+4)*2') == ['3', '4', '+', '2', '*']


def test_function_binds_its_argument_list():
    assert rpn('sin(30)+1') == ['30', 'sin', '1', '+']
    assert rpn('sqrt(16)*2') == ['16', 'sqrt', '2', '*']


def test_separator_flushes_each_argument():
    assert rpn('atan2(1;2)+1') == ['1', '2', 'atan2', '1', '+']
    assert rpn('logbase(8;1+1)') == ['8', '1', '1', '+', 'logbase']
    assert rpn('gcd(2*6;3+15)') == ['2', '6', '*', '3', '15', '+', 'gcd']


def test_infix_operator_called_like_a_function():
    assert rpn('nPr(5;2)') == ['5', '2', 'nPr']
    assert rpn('5nPr2') == ['5', '2', 'nPr']
    assert rpn('2*nPr(5;2)') == ['2', '5', '2', 'nPr', '*']


def test_unary_minus():
    assert rpn('-(2+3)') == ['2', '3', '+', 'neg']
    assert rpn('2*-(1)') == ['2', '1', 'neg', '*']


def test_unclosed_parenthesis():
    with raises(MismatchedParentheses) as info:
        rpn('(1+2')
    assert info.value.token.kind is TokenKind.LEFT_PAREN


def test_unopened_parenthesis():
    with raises(MismatchedParentheses):
        rpn('1+2)')
    with raises(MismatchedParentheses):
        rpn(')')


def test_separator_outside_group():
    with raises(MisplacedSeparator) as info:
        rpn('1;2')
    assert info.value.token.kind is TokenKind.ARGUMENT_SEPARATOR


def test_unsubstituted_variable():
    with raises(UnexpectedToken):
        parse_to_postfix([Token(TokenKind.VARIABLE, 'x')])


def test_parse_is_stable_on_own_output():
    parser = Parser()
    for expression in '3+4*2', '2^3^2', '5!', 'sin(30)', '2+3!':
        postfix = parser.to_postfix(Lexer().tokenize(expression))
        assert parser.to_postfix(postfix) == postfix


def test_empty():
    assert parse_to_postfix([]) == []
