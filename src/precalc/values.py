'''
Values moved through the operand stack, and how they are displayed.
'''

from collections import namedtuple
from decimal import Context, Decimal
from enum import Enum


class CoordinateKind(Enum):
    CARTESIAN = 'cartesian'
    POLAR = 'polar'


# Decimal separator and digit group separator, by language or full locale.
SEPARATORS = {
    'en': ('.', ','),
    'de': (',', '.'),
    'de_CH': ('.', '\N{RIGHT SINGLE QUOTATION MARK}'),
    'fr': (',', '\N{NARROW NO-BREAK SPACE}'),
    'it': (',', '.'),
    'es': (',', '.'),
    'nl': (',', '.'),
    'pt': (',', '.'),
    'ru': (',', '\N{NO-BREAK SPACE}'),
    'ja': ('.', ','),
    'zh': ('.', ','),
}


def separators(locale):
    '''
    Return (decimal point, group separator) for a locale name.

    Unknown locales fall back to English.
    '''
    locale = (locale or 'en').replace('-', '_')
    for key in locale, locale.split('_')[0]:
        if key in SEPARATORS:
            return SEPARATORS[key]
    return SEPARATORS['en']


def trim(number):
    '''
    Drop trailing fractional zeros, without going to exponent notation.
    '''
    # Wide enough that neither call rounds.
    context = Context(prec=max(len(number.as_tuple().digits),
                               number.adjusted() + 1,
                               1))
    if number == number.to_integral_value():
        return number.quantize(Decimal(1), context=context)
    return number.normalize(context)


def format_number(number, locale=None, grouping=False):
    '''
    Render a Decimal in plain (never scientific) notation for a locale.
    '''
    text = '{:f}'.format(trim(number))
    sign = ''
    if text.startswith('-'):
        sign, text = '-', text[1:]
    integral, _, fractional = text.partition('.')
    point, group = separators(locale)
    if grouping:
        digits = []
        while len(integral) > 3:
            digits.insert(0, integral[-3:])
            integral = integral[:-3]
        digits.insert(0, integral)
        integral = group.join(digits)
    if fractional:
        return sign + integral + point + fractional
    return sign + integral


class Scalar(namedtuple('Scalar', 'number text')):
    '''
    A plain number. ``text`` overrides how it displays, which is how
    coordinate results are handed back as scalars.
    '''
    __slots__ = ()

    def __new__(cls, number, text=None):
        return super().__new__(cls, number, text)

    def format(self, locale=None, grouping=False):
        if self.text is not None:
            return self.text
        return format_number(self.number, locale, grouping)

    def __str__(self):
        return self.format()


class Coordinate(namedtuple('Coordinate', 'first second kind')):
    '''
    Pair produced by the coordinate conversion functions.

    (x, y) when cartesian, (r, θ) when polar.
    '''
    __slots__ = ()

    LABELS = {
        CoordinateKind.CARTESIAN: ('x', 'y'),
        CoordinateKind.POLAR: ('r', '\N{GREEK SMALL LETTER THETA}'),
    }

    def format(self, locale=None, grouping=False):
        first, second = type(self).LABELS[self.kind]
        return '{}={}; {}={}'.format(
            first, format_number(self.first, locale, grouping),
            second, format_number(self.second, locale, grouping))

    def __str__(self):
        return self.format()

    def to_scalar(self, locale=None):
        '''
        Wrap as a scalar: first component as the number, display as text.
        '''
        return Scalar(self.first, self.format(locale))


def scalar_of(value):
    '''
    The number an operand stands for; coordinates give their first part.
    '''
    if isinstance(value, Coordinate):
        return value.first
    return value.number
