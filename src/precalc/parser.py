'''
Infix to postfix (RPN) conversion, with Dijkstra's Shunting-Yard algorithm.
'''

from collections import deque
import logging

from .registry import default_registry
from .tokens import TokenKind
from .util import (MismatchedParentheses, MisplacedSeparator,
                   UnexpectedToken)


logger = logging.getLogger(__name__)


class Parser:
    '''
    Reorders infix Tokens into RPN. Structural only: computes nothing.

    Holds no state between calls, so one instance can be shared.
    '''

    def __init__(self, registry=None):
        self.registry = default_registry() if registry is None else registry

    def _pops_before(self, top, incoming):
        '''
        Return True if top must go to output before incoming is pushed.
        '''
        if top.kind is TokenKind.FUNCTION:
            return True
        if top.kind is not TokenKind.OPERATOR:
            return False
        top = self.registry.lookup(top.text)
        incoming = self.registry.lookup(incoming.text)
        if top.precedence > incoming.precedence:
            return True
        return top.precedence == incoming.precedence and \
            not incoming.right_associative

    def to_postfix(self, tokens):
        '''
        Return the RPN reordering of infix tokens.

        Raises MismatchedParentheses or MisplacedSeparator on malformed
        input; UnexpectedToken on token kinds that should've been
        substituted away already.
        '''
        output = []
        stack = deque()

        for token in tokens:
            kind = token.kind
            if kind is TokenKind.NUMBER:
                output.append(token)
            elif kind in (TokenKind.FUNCTION, TokenKind.LEFT_PAREN):
                stack.append(token)
            elif kind is TokenKind.OPERATOR:
                # Postfix operators bind to what's already in the output.
                if self.registry.lookup(token.text).is_postfix:
                    output.append(token)
                    continue
                while stack and self._pops_before(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)
            elif kind is TokenKind.RIGHT_PAREN:
                while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                    output.append(stack.pop())
                if not stack:
                    raise MismatchedParentheses('Mismatched parentheses',
                                                token)
                stack.pop()
                # Close the function's argument list too.
                if stack and stack[-1].kind is TokenKind.FUNCTION:
                    output.append(stack.pop())
            elif kind is TokenKind.ARGUMENT_SEPARATOR:
                while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                    output.append(stack.pop())
                if not stack:
                    raise MisplacedSeparator('Misplaced separator or '
                                             'mismatched parentheses',
                                             token)
            else:
                raise UnexpectedToken(token)

        while stack:
            top = stack.pop()
            if top.kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN):
                raise MismatchedParentheses('Mismatched parentheses', top)
            output.append(top)

        logger.debug('RPN: %s', ' '.join(token.text for token in output))
        return output


def parse_to_postfix(tokens, registry=None):
    return Parser(registry).to_postfix(tokens)
