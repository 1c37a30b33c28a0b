'''
Stack machine executing RPN token sequences.
'''

from collections import deque
import logging

from . import bignum
from .context import DEFAULT_CONTEXT
from .registry import default_registry
from .tokens import TokenKind
from .util import InvalidExpression, UnexpectedToken
from .values import Coordinate, Scalar, scalar_of


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine (RPN evaluator).

    Configured once with an EvalContext and a registry, both read-only;
    every evaluate() call gets its own operand stack.
    '''

    def __init__(self, context=None, registry=None):
        self.context = DEFAULT_CONTEXT if context is None else context
        self.registry = default_registry() if registry is None else registry

    def evaluate(self, tokens):
        '''
        Run RPN tokens, returning the single resulting Scalar.

        A coordinate result comes back as a Scalar holding its first
        component and displaying as the whole coordinate.
        '''
        stack = deque()
        for token in tokens:
            if token.kind is TokenKind.NUMBER:
                stack.append(Scalar(bignum.parse(token.text, self.context)))
            elif token.kind in (TokenKind.OPERATOR, TokenKind.FUNCTION):
                self._apply(self.registry.lookup(token.text), stack)
            else:
                raise UnexpectedToken(token)

        if len(stack) != 1:
            raise InvalidExpression(len(stack))
        result = stack.pop()
        if isinstance(result, Coordinate):
            result = result.to_scalar(self.context.locale)
        logger.debug('Result: %s', result)
        return result

    def _popstack(self, stack, n):
        '''
        Pop n operands, topmost first.
        '''
        if len(stack) < n:
            raise InvalidExpression(
                len(stack),
                'Less than {} element(s) on stack'.format(n))
        return [stack.pop() for _ in range(n)]

    def _apply(self, entry, stack):
        '''
        Apply entry to the top of the stack, pushing the result.
        '''
        # If you don't reverse, you'll do 2**9 when you say 9 2 ^ instead
        # of 9**2.
        operands = tuple(scalar_of(value)
                         for value
                         in reversed(self._popstack(stack, entry.arity)))
        result = entry.operation(operands, self.context)
        if not isinstance(result, Coordinate):
            result = Scalar(result)
        stack.append(result)


def evaluate(tokens, context=None, registry=None):
    return Machine(context, registry).evaluate(tokens)
