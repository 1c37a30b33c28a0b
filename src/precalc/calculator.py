'''
Text in, value out: the lexer, parser and machine wired together.
'''

from collections import namedtuple
from decimal import Decimal
import logging

from . import bignum
from .context import DEFAULT_CONTEXT, EvalContext
from .lexer import Lexer
from .machine import Machine
from .parser import Parser
from .registry import default_registry
from .tokens import Token, TokenKind
from .util import CalcError, CyclicVariableReference, UndefinedVariable
from .values import Scalar


logger = logging.getLogger(__name__)


class Outcome(namedtuple('Outcome', 'value error')):
    '''
    Result of Calculator.attempt(): either a value, or the error instead.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


class Calculator:
    '''
    Evaluates infix expressions under one EvalContext.

    Variables are given per call, as numbers or as expression strings
    that may reference other variables:

    >>> Calculator().evaluate('2a', {'a': 'b+1', 'b': 3}).number
    Decimal('8')
    '''

    def __init__(self, context=None, registry=None):
        self.context = DEFAULT_CONTEXT if context is None else context
        self.registry = default_registry() if registry is None else registry
        self.lexer = Lexer(self.registry)
        self.parser = Parser(self.registry)
        self.machine = Machine(self.context, self.registry)

    def tokenize(self, expression):
        return self.lexer.tokenize(expression)

    def to_postfix(self, expression, variables=None):
        '''
        Tokenize, substitute constants and variables, and convert to RPN.
        '''
        tokens = self.substitute(self.tokenize(expression), variables or {})
        return self.parser.to_postfix(tokens)

    def evaluate(self, expression, variables=None):
        '''
        Evaluate expression, returning a Scalar. Blank input is 0.
        '''
        return self._evaluate(expression, variables or {}, ())

    def attempt(self, expression, variables=None):
        '''
        Like evaluate(), but failures come back as Outcome(None, error).

        For callers sampling many points, where a failure just means there
        is no value at that point.
        '''
        try:
            return Outcome(self.evaluate(expression, variables), None)
        except CalcError as e:
            return Outcome(None, e)

    def to_string(self, expression, variables=None, grouping=False):
        '''
        Evaluate expression and format it for the context's locale.
        '''
        return self.evaluate(expression, variables).format(
            self.context.locale, grouping)

    def _evaluate(self, expression, variables, resolving):
        if not expression.strip():
            return Scalar(bignum.ZERO)
        logger.debug('Evaluating %r', expression)
        tokens = self.substitute(self.tokenize(expression), variables,
                                 resolving)
        return self.machine.evaluate(self.parser.to_postfix(tokens))

    def substitute(self, tokens, variables, resolving=()):
        '''
        Replace CONSTANT and VARIABLE tokens with NUMBER tokens.
        '''
        result = []
        for token in tokens:
            if token.kind is TokenKind.CONSTANT:
                number = bignum.CONSTANTS[token.text](self.context)
            elif token.kind is TokenKind.VARIABLE:
                number = self._variable(token.text, variables, resolving)
            else:
                result.append(token)
                continue
            result.append(Token.number('{:f}'.format(number)))
        return result

    def _variable(self, name, variables, resolving):
        if name not in variables:
            raise UndefinedVariable(name)
        if name in resolving:
            raise CyclicVariableReference(resolving + (name,))
        value = variables[name]
        if isinstance(value, str):
            return self._evaluate(value, variables,
                                  resolving + (name,)).number
        if isinstance(value, Scalar):
            return value.number
        if isinstance(value, float):
            # Shortest repr, not the binary expansion.
            return Decimal(repr(value))
        return Decimal(value)

    def check_variables(self, variables):
        '''
        Raise CyclicVariableReference if expression variables refer back to
        themselves. References to undefined variables are not checked.
        '''
        references = {
            name: {token.text
                   for token
                   in self.tokenize(value)
                   if token.kind is TokenKind.VARIABLE}
            for name, value
            in variables.items()
            if isinstance(value, str)
        }
        done = set()

        def visit(name, chain):
            if name in chain:
                raise CyclicVariableReference(
                    chain[chain.index(name):] + (name,))
            if name in done:
                return
            for reference in references.get(name, ()):
                visit(reference, chain + (name,))
            done.add(name)

        for name in references:
            visit(name, ())


def evaluate_expression(expression, variables=None, **settings):
    '''
    One-shot evaluation; settings are EvalContext fields.
    '''
    context = EvalContext(**settings) if settings else None
    return Calculator(context).evaluate(expression, variables)
