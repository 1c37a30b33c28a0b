'''
Arbitrary precision arithmetic over ``decimal.Decimal``.

Every operation takes an EvalContext last, and rounds its result to the
context's precision. Algebraic operations are done in ``decimal`` directly;
transcendental ones go through a private ``mpmath`` context running a few
guard digits above the requested precision, then get rounded back.

Domain violations raise DomainError. Nothing here ever returns NaN or an
infinity.
'''

from decimal import Context, Decimal
import math
import random
from threading import local

from mpmath.ctx_mp import MPContext

from .util import DomainError, wrap_user_errors
from .values import Coordinate, CoordinateKind


GUARD_DIGITS = 10

ZERO = Decimal(0)
ONE = Decimal(1)
FULL_TURN = Decimal(360)
HALF_TURN = Decimal(180)
QUARTER_TURN = Decimal(90)


_contexts = local()


def _mpcontext(dps):
    # Never mpmath.mp: that one is global, and callers may change it. Not
    # shared between threads either, since mpmath functions raise ctx.prec
    # while they run.
    cache = getattr(_contexts, 'by_dps', None)
    if cache is None:
        cache = _contexts.by_dps = {}
    if dps not in cache:
        ctx = cache[dps] = MPContext()
        ctx.dps = dps
    return cache[dps]


def _mp(context):
    return _mpcontext(context.precision + GUARD_DIGITS)


def _to_mp(ctx, number):
    return ctx.mpf(str(number))


def _from_mp(ctx, value, context, places=None):
    '''
    Round an mpmath result back to a Decimal.

    :param places: Also round to this many fractional digits, so that
                   residue like sin(π) ≈ 1e-61 comes out as exactly 0.
    '''
    if not ctx.isfinite(value) or ctx.im(value):
        raise DomainError('Result is not a finite real number')
    number = Decimal(ctx.nstr(ctx.re(value), ctx.dps))
    if places is not None:
        exact = Context(prec=max(number.adjusted(), 0) + places + 2)
        number = number.quantize(ONE.scaleb(-places),
                                 rounding=context.rounding,
                                 context=exact)
    return context.decimal().plus(number)


def _integer(number, what):
    if number != number.to_integral_value():
        raise DomainError('{} requires integer values, not {}'.format(
            what, number))
    return int(number)


def is_integer(number):
    return number == number.to_integral_value()


def signum(number):
    if number > 0:
        return 1
    elif number < 0:
        return -1
    return 0


@wrap_user_errors('Cannot convert {0!r}')
def parse(text, context):
    '''
    Convert a canonical number literal to a Decimal, rounded to precision.
    '''
    return context.decimal().plus(Decimal(text.replace('_', '')))


# Constants

def pi(context):
    ctx = _mp(context)
    return _from_mp(ctx, +ctx.pi, context)


def euler(context):
    ctx = _mp(context)
    return _from_mp(ctx, +ctx.e, context)


CONSTANTS = {
    'pi': pi,
    '\N{GREEK SMALL LETTER PI}': pi,
    'e': euler,
}


# Arithmetic

@wrap_user_errors('Cannot add {0} and {1}')
def add(augend, addend, context):
    return context.decimal().add(augend, addend)


@wrap_user_errors('Cannot subtract {1} from {0}')
def subtract(minuend, subtrahend, context):
    return context.decimal().subtract(minuend, subtrahend)


@wrap_user_errors('Cannot multiply {0} by {1}')
def multiply(multiplicand, multiplier, context):
    return context.decimal().multiply(multiplicand, multiplier)


@wrap_user_errors('Cannot divide {0} by {1}')
def divide(dividend, divisor, context):
    if not divisor:
        raise DomainError('Division by zero')
    return context.decimal().divide(dividend, divisor)


@wrap_user_errors('Cannot take {0} modulo {1}')
def modulo(dividend, divisor, context):
    '''
    Remainder in [0, |divisor|), whatever the signs.
    '''
    if not divisor:
        raise DomainError('Cannot perform modulo operation with divisor '
                          'zero')
    divisor = divisor.copy_abs()
    # Enough digits that the integral quotient always fits.
    exact = Context(prec=max(dividend.adjusted() - divisor.adjusted(), 0) +
                    context.precision + 2,
                    rounding=context.rounding)
    remainder = exact.remainder(dividend, divisor)
    if remainder < 0:
        remainder = exact.add(remainder, divisor)
    return context.decimal().plus(remainder)


@wrap_user_errors('Cannot raise {0} to the power {1}')
def power(base, exponent, context):
    if not exponent:
        return ONE
    if not base and exponent < 0:
        raise DomainError('Cannot raise zero to a negative power')
    return context.decimal().power(base, exponent)


def absolute(number, context):
    return context.decimal().abs(number)


def negate(number, context):
    return context.decimal().minus(number)


# Combinatorics and number theory

@wrap_user_errors('Cannot take the factorial of {0}')
def factorial(number, context):
    n = _integer(number, 'Factorial')
    if n < 0:
        raise DomainError('Factorial is undefined for negative numbers')
    return context.decimal().plus(Decimal(math.factorial(n)))


def _n_k(n, k, what):
    n = _integer(n, what)
    k = _integer(k, what)
    if n < 0 or k < 0:
        raise DomainError('{} requires non-negative values'.format(what))
    if k > n:
        raise DomainError('Cannot calculate {}: k cannot be greater than '
                          'n'.format(what.lower()))
    return n, k


def permutation(n, k, context):
    n, k = _n_k(n, k, 'Permutations')
    return context.decimal().plus(Decimal(math.perm(n, k)))


def combination(n, k, context):
    n, k = _n_k(n, k, 'Combinations')
    return context.decimal().plus(Decimal(math.comb(n, k)))


def gcd(a, b, context):
    return context.decimal().plus(Decimal(math.gcd(_integer(a, 'GCD'),
                                                   _integer(b, 'GCD'))))


def lcm(a, b, context):
    return context.decimal().plus(Decimal(math.lcm(_integer(a, 'LCM'),
                                                   _integer(b, 'LCM'))))


def random_integer(low, high, context):
    '''
    Uniformly random integer in [low, high].
    '''
    low = _integer(low, 'RandInt')
    high = _integer(high, 'RandInt')
    if low > high:
        raise DomainError('RandInt needs min <= max, got {} and {}'.format(
            low, high))
    return context.decimal().plus(Decimal(random.randint(low, high)))


# Roots

@wrap_user_errors('Cannot take the square root of {0}')
def sqrt(number, context):
    if number < 0:
        raise DomainError('Cannot take the square root of a negative number')
    return context.decimal().sqrt(number)


@wrap_user_errors('Cannot take the cube root of {0}')
def cbrt(number, context):
    ctx = _mp(context)
    root = _from_mp(ctx, ctx.cbrt(_to_mp(ctx, number.copy_abs())), context)
    return root.copy_negate() if number < 0 else root


@wrap_user_errors('Cannot take root {1} of {0}')
def nth_root(radicand, n, context):
    if n <= 0:
        raise DomainError('Cannot calculate nth root with n <= 0')
    sign = signum(radicand)
    if sign < 0:
        if not is_integer(n) or int(n) % 2 == 0:
            raise DomainError('Even or fractional root of a negative number')
    elif sign == 0:
        return ZERO
    ctx = _mp(context)
    root = ctx.power(_to_mp(ctx, radicand.copy_abs()), 1 / _to_mp(ctx, n))
    root = _from_mp(ctx, root, context)
    return root.copy_negate() if sign < 0 else root


# Logarithms

def _positive(number, what):
    if number <= 0:
        raise DomainError('{} is only defined for positive numbers, '
                          'not {}'.format(what, number))


@wrap_user_errors('Cannot take the natural logarithm of {0}')
def ln(number, context):
    _positive(number, 'Logarithm')
    return context.decimal().ln(number)


@wrap_user_errors('Cannot take the common logarithm of {0}')
def log10(number, context):
    _positive(number, 'Logarithm')
    return context.decimal().log10(number)


def log2(number, context):
    return log_base(number, Decimal(2), context)


@wrap_user_errors('Cannot take the logarithm of {0} to base {1}')
def log_base(number, base, context):
    _positive(number, 'Logarithm')
    _positive(base, 'Logarithm base')
    if base == ONE:
        raise DomainError('Logarithm base cannot be 1')
    ctx = _mp(context)
    return _from_mp(ctx, ctx.log(_to_mp(ctx, number), _to_mp(ctx, base)),
                    context)


# Trigonometry

def _radians(ctx, angle, context):
    if context.degrees:
        # Reduce exactly first, so sin(180) is computed on π, not 180.
        angle = modulo(angle, FULL_TURN, context.replace(
            precision=context.precision + GUARD_DIGITS))
        return ctx.radians(_to_mp(ctx, angle))
    return _to_mp(ctx, angle)


def _angle(ctx, radians, context):
    if context.degrees:
        radians = ctx.degrees(radians)
    return _from_mp(ctx, radians, context)


def _on_multiple(angle, step, offset, context):
    '''
    Whether a degree angle is offset + k * step.
    '''
    if not context.degrees:
        return False
    # Every digit from the highest place down to the lowest, so no rounding.
    exact = Context(prec=max(angle.adjusted(), offset.adjusted(), 0) + 2 -
                    min(angle.as_tuple().exponent,
                        offset.as_tuple().exponent, 0))
    return not modulo(exact.subtract(angle, offset), step, context)


@wrap_user_errors('Cannot take the sine of {0}')
def sin(angle, context):
    ctx = _mp(context)
    return _from_mp(ctx, ctx.sin(_radians(ctx, angle, context)), context,
                    places=context.precision)


@wrap_user_errors('Cannot take the cosine of {0}')
def cos(angle, context):
    ctx = _mp(context)
    return _from_mp(ctx, ctx.cos(_radians(ctx, angle, context)), context,
                    places=context.precision)


@wrap_user_errors('Cannot take the tangent of {0}')
def tan(angle, context):
    if _on_multiple(angle, HALF_TURN, QUARTER_TURN, context):
        raise DomainError('Tangent is undefined at {}'.format(angle))
    ctx = _mp(context)
    return _from_mp(ctx, ctx.tan(_radians(ctx, angle, context)), context,
                    places=context.precision)


@wrap_user_errors('Cannot take the cotangent of {0}')
def cot(angle, context):
    if _on_multiple(angle, HALF_TURN, ZERO, context) or not angle:
        raise DomainError('Cotangent is undefined at {}'.format(angle))
    ctx = _mp(context)
    return _from_mp(ctx, ctx.cot(_radians(ctx, angle, context)), context,
                    places=context.precision)


def _unit_interval(number, what):
    if not -1 <= number <= 1:
        raise DomainError('{} is only defined on [-1, 1], not {}'.format(
            what, number))


@wrap_user_errors('Cannot take the arcsine of {0}')
def asin(number, context):
    _unit_interval(number, 'Arcsine')
    ctx = _mp(context)
    return _angle(ctx, ctx.asin(_to_mp(ctx, number)), context)


@wrap_user_errors('Cannot take the arccosine of {0}')
def acos(number, context):
    _unit_interval(number, 'Arccosine')
    ctx = _mp(context)
    return _angle(ctx, ctx.acos(_to_mp(ctx, number)), context)


@wrap_user_errors('Cannot take the arctangent of {0}')
def atan(number, context):
    ctx = _mp(context)
    return _angle(ctx, ctx.atan(_to_mp(ctx, number)), context)


@wrap_user_errors('Cannot take the arccotangent of {0}')
def acot(number, context):
    ctx = _mp(context)
    if not number:
        return _angle(ctx, ctx.pi / 2, context)
    return _angle(ctx, ctx.acot(_to_mp(ctx, number)), context)


@wrap_user_errors('Cannot take atan2 of {0} and {1}')
def atan2(y, x, context):
    '''
    Angle of the point (x, y); note y comes first.
    '''
    if not x and not y:
        raise DomainError('atan2 is undefined at the origin')
    ctx = _mp(context)
    return _angle(ctx, ctx.atan2(_to_mp(ctx, y), _to_mp(ctx, x)), context)


# Hyperbolic functions. These ignore the angle unit.

def _hyperbolic(name, check=None):
    def function(number, context):
        if check is not None:
            check(number)
        ctx = _mp(context)
        return _from_mp(ctx, getattr(ctx, name)(_to_mp(ctx, number)),
                        context)
    function.__name__ = name
    function.__doc__ = 'Hyperbolic {} of a number.'.format(name)
    return wrap_user_errors('Cannot take ' + name + ' of {0}')(function)


def _nonzero(number):
    if not number:
        raise DomainError('Hyperbolic cotangent is undefined at 0')


def _at_least_one(number):
    if number < 1:
        raise DomainError('acosh is only defined for numbers >= 1')


def _inside_unit(number):
    if not -1 < number < 1:
        raise DomainError('atanh is only defined on (-1, 1)')


def _outside_unit(number):
    if -1 <= number <= 1:
        raise DomainError('acoth is only defined outside [-1, 1]')


sinh = _hyperbolic('sinh')
cosh = _hyperbolic('cosh')
tanh = _hyperbolic('tanh')
coth = _hyperbolic('coth', _nonzero)
asinh = _hyperbolic('asinh')
acosh = _hyperbolic('acosh', _at_least_one)
atanh = _hyperbolic('atanh', _inside_unit)
acoth = _hyperbolic('acoth', _outside_unit)


# Special functions

def _not_pole(number, what):
    if number <= 0 and is_integer(number):
        raise DomainError('{} has a pole at {}'.format(what, number))


@wrap_user_errors('Cannot take the gamma function of {0}')
def gamma(number, context):
    _not_pole(number, 'Gamma')
    ctx = _mp(context)
    return _from_mp(ctx, ctx.gamma(_to_mp(ctx, number)), context)


@wrap_user_errors('Cannot take the beta function of {0} and {1}')
def beta(a, b, context):
    _not_pole(a, 'Beta')
    _not_pole(b, 'Beta')
    ctx = _mp(context)
    return _from_mp(ctx, ctx.beta(_to_mp(ctx, a), _to_mp(ctx, b)), context)


# Coordinates

def polar_to_cartesian(r, theta, context):
    '''
    (r, θ) -> (x, y). θ is in the context's angle unit.
    '''
    if r < 0:
        raise DomainError('r cannot be less than zero')
    x = multiply(r, cos(theta, context), context)
    y = multiply(r, sin(theta, context), context)
    return Coordinate(x, y, CoordinateKind.CARTESIAN)


def cartesian_to_polar(x, y, context):
    '''
    (x, y) -> (r, θ). θ is in the context's angle unit.
    '''
    if not x and not y:
        raise DomainError('The origin has no polar angle')
    wide = context.decimal(GUARD_DIGITS)
    r = context.decimal().plus(
        wide.sqrt(wide.add(wide.multiply(x, x), wide.multiply(y, y))))
    return Coordinate(r, atan2(y, x, context), CoordinateKind.POLAR)
