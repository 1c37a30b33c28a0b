from functools import reduce
import operator

import regex

from . import bignum
from .registry import ABS, FACTORIAL, NEGATE, default_registry
from .tokens import LEFT_PAREN, RIGHT_PAREN, SEPARATOR, Token, TokenKind
from .util import LexError


class Lexer:
    '''
    Lexer for infix expressions.

    Symbols come from a registry, so the grammar is built per instance;
    otherwise holds no state between calls.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Thousands separators
                        _\d{3}
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      (?:
                          _\d+
                      )*
                  )
                  '''
    # Unsigned number. Signs are the lexer's call, not the grammar's.
    NUMBER = r'''
              (?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .2, .200_200
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    # Unknown words are variables.
    VARIABLE = r'\p{L}+'
    LPAREN = r'\('
    RPAREN = r'\)'
    SEPARATOR = r'[;,]'
    # |x| is abs(x)
    BAR = r'\|'
    SPACE = r'\s+'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Token kinds after which an operand is expected, not an operator.
    OPERAND_EXPECTED = {
        TokenKind.OPERATOR,
        TokenKind.FUNCTION,
        TokenKind.LEFT_PAREN,
        TokenKind.ARGUMENT_SEPARATOR,
    }
    ENDS_OPERAND = {
        TokenKind.NUMBER,
        TokenKind.CONSTANT,
        TokenKind.VARIABLE,
        TokenKind.RIGHT_PAREN,
    }
    STARTS_OPERAND = {
        TokenKind.CONSTANT,
        TokenKind.VARIABLE,
        TokenKind.LEFT_PAREN,
        TokenKind.FUNCTION,
    }

    def __init__(self, registry=None, constants=None):
        self.registry = default_registry() if registry is None else registry
        self.constants = frozenset(bignum.CONSTANTS if constants is None
                                   else constants)
        # Longest first, so alternation is maximal munch.
        symbols = sorted(self.registry.symbols | self.constants,
                         key=lambda symbol: (-len(symbol), symbol))
        self.SYMBOL = r'(?:' + r'|'.join(map(regex.escape, symbols)) + r')'
        # All possible lexemes. Symbols before variables, so sin beats s.
        self.LEXEME = r'(?<number>' + self.NUMBER + r')|' \
                      r'(?<symbol>' + self.SYMBOL + r')|' \
                      r'(?<variable>' + self.VARIABLE + r')|' \
                      r'(?<lparen>' + self.LPAREN + r')|' \
                      r'(?<rparen>' + self.RPAREN + r')|' \
                      r'(?<separator>' + self.SEPARATOR + r')|' \
                      r'(?<bar>' + self.BAR + r')|' \
                      r'(?<space>' + self.SPACE + r')'
        self.pattern = regex.compile(self.LEXEME, flags=self.FLAGS)

    def lex(self, line):
        '''
        Yield (group, text, position) for every lexeme in line.

        Raises LexError at the first character no lexeme matches.
        '''
        position = 0
        while position < len(line):
            match = self.pattern.match(line, position)
            if match is None:
                raise LexError("Couldn't lex {!r} at position {}".format(
                    line[position:].strip(), position))
            yield match.lastgroup, match.group(0), position
            position = match.end()

    @staticmethod
    def canonical(number):
        '''
        Canonical text of a number literal: 1_200. -> 1200, .5 -> 0.5.
        '''
        number = number.replace('_', '')
        if number.startswith('.'):
            number = '0' + number
        return number.rstrip('.') if number.endswith('.') else number

    def _expects_operand(self, tokens):
        if not tokens:
            return True
        last = tokens[-1]
        if last.kind is TokenKind.OPERATOR:
            return last.text != FACTORIAL
        return last.kind in self.OPERAND_EXPECTED

    def _ends_operand(self, token):
        return token.kind in self.ENDS_OPERAND or \
            token == Token.operator(FACTORIAL)

    def tokenize(self, line):
        '''
        Turn an infix expression into Tokens.
        '''
        tokens = []
        lexemes = list(self.lex(line))
        bars = 0
        skip = False
        for index, (group, text, position) in enumerate(lexemes):
            if skip:
                skip = False
            elif group == 'space':
                pass
            elif group == 'number':
                tokens.append(Token.number(self.canonical(text)))
            elif group == 'variable':
                tokens.append(Token(TokenKind.VARIABLE, text))
            elif group == 'lparen':
                tokens.append(LEFT_PAREN)
            elif group == 'rparen':
                tokens.append(RIGHT_PAREN)
            elif group == 'separator':
                tokens.append(SEPARATOR)
            elif group == 'bar':
                if bars and not self._expects_operand(tokens):
                    tokens.append(RIGHT_PAREN)
                    bars -= 1
                else:
                    tokens.extend([Token.function(ABS), LEFT_PAREN])
                    bars += 1
            elif text in self.constants:
                tokens.append(Token(TokenKind.CONSTANT, text))
            elif text in ('+', '-') and self._expects_operand(tokens):
                following = lexemes[index + 1:index + 2]
                if following and following[0][0] == 'number':
                    # Sign of a literal: -2, or 2 for +2.
                    sign = '-' if text == '-' else ''
                    tokens.append(Token.number(
                        sign + self.canonical(following[0][1])))
                    skip = True
                elif text == '-':
                    tokens.append(Token.function(NEGATE))
            elif text == FACTORIAL:
                if not tokens or not self._ends_operand(tokens[-1]):
                    raise LexError("Factorial '!' must follow a number, "
                                   "constant, variable, or closing "
                                   "parenthesis (position {})".format(
                                       position))
                tokens.append(Token.operator(text))
            else:
                entry = self.registry.lookup(text)
                if entry.is_function:
                    tokens.append(Token.function(text))
                else:
                    tokens.append(Token.operator(text))
        return self.insert_implicit_multiplication(tokens)

    def _needs_multiplication(self, current, following):
        if not self._ends_operand(current):
            return False
        if following.kind is TokenKind.NUMBER:
            # Only (2)3; "1 2" stays two numbers.
            return current.kind is TokenKind.RIGHT_PAREN
        return following.kind in self.STARTS_OPERAND

    def insert_implicit_multiplication(self, tokens):
        '''
        2(3) -> 2*(3), 2pi -> 2*pi, (1)(2) -> (1)*(2), and so on.
        '''
        if not tokens:
            return tokens
        result = [tokens[0]]
        for current, following in zip(tokens, tokens[1:]):
            if self._needs_multiplication(current, following):
                result.append(Token.operator('*'))
            result.append(following)
        return result
