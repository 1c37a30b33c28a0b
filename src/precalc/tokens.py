from collections import namedtuple
from enum import Enum


class TokenKind(Enum):
    NUMBER = 'number'
    OPERATOR = 'operator'
    FUNCTION = 'function'
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    ARGUMENT_SEPARATOR = ';'
    VARIABLE = 'variable'
    CONSTANT = 'constant'
    STRING = 'string'


class Token(namedtuple('Token', 'kind text')):
    '''
    Lexeme: what kind it is, and its literal text.
    '''
    __slots__ = ()

    def __str__(self):
        return self.text

    @classmethod
    def number(cls, text):
        return cls(TokenKind.NUMBER, str(text))

    @classmethod
    def operator(cls, text):
        return cls(TokenKind.OPERATOR, text)

    @classmethod
    def function(cls, text):
        return cls(TokenKind.FUNCTION, text)


LEFT_PAREN = Token(TokenKind.LEFT_PAREN, '(')
RIGHT_PAREN = Token(TokenKind.RIGHT_PAREN, ')')
SEPARATOR = Token(TokenKind.ARGUMENT_SEPARATOR, ';')
