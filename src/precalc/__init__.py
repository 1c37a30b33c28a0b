'''
Arbitrary precision expression calculator.

Takes infix formulas like sin(x)+2^3^2, nPr(5;2) or Rec(r;θ), converts them
to RPN with the Shunting-Yard algorithm, and runs the RPN on a stack machine
over decimal numbers.

    text -> Lexer -> Tokens -> Parser -> RPN Tokens -> Machine -> Value

Operators and functions live in a Registry, read by both the parser
(precedence, associativity) and the machine (arity, operation). Settings
(precision, rounding, angle unit, locale) travel in an immutable EvalContext.
'''

from .calculator import Calculator, Outcome, evaluate_expression
from .context import AngleUnit, EvalContext
from .lexer import Lexer
from .machine import Machine, evaluate
from .parser import Parser, parse_to_postfix
from .registry import (Associativity, Fixity, Registry, RegistryEntry,
                       default_registry)
from .tokens import Token, TokenKind
from .util import (CalcError, CyclicVariableReference, DomainError,
                   InvalidExpression, LexError, MismatchedParentheses,
                   MisplacedSeparator, ParseError, RegistryFrozen,
                   UndefinedVariable, UnexpectedToken, UnknownOperator)
from .values import Coordinate, CoordinateKind, Scalar


__all__ = (
    'Calculator', 'Outcome', 'evaluate_expression',
    'AngleUnit', 'EvalContext',
    'Lexer', 'Machine', 'evaluate', 'Parser', 'parse_to_postfix',
    'Associativity', 'Fixity', 'Registry', 'RegistryEntry',
    'default_registry',
    'Token', 'TokenKind',
    'CalcError', 'CyclicVariableReference', 'DomainError',
    'InvalidExpression', 'LexError', 'MismatchedParentheses',
    'MisplacedSeparator', 'ParseError', 'RegistryFrozen',
    'UndefinedVariable', 'UnexpectedToken', 'UnknownOperator',
    'Coordinate', 'CoordinateKind', 'Scalar',
)
