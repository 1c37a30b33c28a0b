from functools import wraps


class CalcError(Exception):
    '''
    Base of every error raised by the calculator.
    '''


class LexError(CalcError):
    pass


class ParseError(CalcError):
    '''
    Structural error in a token sequence.

    :param token: Offending token, if any.
    '''
    def __init__(self, message, token=None):
        super().__init__(message)
        self.token = token


class MismatchedParentheses(ParseError):
    pass


class MisplacedSeparator(ParseError):
    pass


class UnknownOperator(CalcError, KeyError):
    def __init__(self, symbol):
        super().__init__('Unknown operator or function {!r}'.format(symbol))
        self.symbol = symbol

    # KeyError.__str__ would repr() the message.
    __str__ = CalcError.__str__


class UnexpectedToken(CalcError):
    def __init__(self, token):
        super().__init__('Unexpected token {!r}'.format(token.text))
        self.token = token


class InvalidExpression(CalcError):
    '''
    Operand stack didn't hold exactly what was needed.
    '''
    def __init__(self, stack_size, message=None):
        if message is None:
            message = ('Invalid expression: expected a single result, '
                       'but found {}'.format(stack_size))
        super().__init__(message)
        self.stack_size = stack_size


class DomainError(CalcError, ArithmeticError):
    pass


class UndefinedVariable(CalcError, KeyError):
    def __init__(self, name):
        super().__init__('Undefined variable {!r}'.format(name))
        self.name = name

    __str__ = CalcError.__str__


class CyclicVariableReference(CalcError):
    def __init__(self, chain):
        super().__init__('Cyclic variable reference: {}'.format(
            ' -> '.join(chain)))
        self.chain = tuple(chain)


class RegistryFrozen(CalcError):
    pass


def wrap_user_errors(fmt):
    '''
    Report decimal, mpmath and math failures as DomainErrors.

    CalcErrors go through untouched. The message is ``fmt`` formatted with
    the arguments of the failed call, and the original is chained.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise DomainError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
