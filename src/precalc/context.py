'''
Evaluation settings threaded through every numeric operation.
'''

from collections import namedtuple
from decimal import Context, ROUND_HALF_UP
from enum import Enum


class AngleUnit(Enum):
    DEGREES = 'deg'
    RADIANS = 'rad'


class EvalContext(namedtuple('EvalContext',
                             'precision rounding angle_unit locale')):
    '''
    Immutable evaluation settings.

    :param precision: Significant decimal digits kept by every operation.
    :param rounding: One of the ``decimal`` rounding modes.
    :param angle_unit: Unit trigonometric functions take and return.
    :param locale: Locale name used when rendering numbers, e.g. de_DE.
    '''
    __slots__ = ()

    DEFAULT_PRECISION = 50
    DEFAULT_ROUNDING = ROUND_HALF_UP
    DEFAULT_ANGLE_UNIT = AngleUnit.DEGREES
    DEFAULT_LOCALE = 'en_US'

    def __new__(cls, precision=None, rounding=None, angle_unit=None,
                locale=None):
        if precision is None:
            precision = cls.DEFAULT_PRECISION
        if rounding is None:
            rounding = cls.DEFAULT_ROUNDING
        if angle_unit is None:
            angle_unit = cls.DEFAULT_ANGLE_UNIT
        if locale is None:
            locale = cls.DEFAULT_LOCALE
        precision = int(precision)
        if precision < 1:
            raise ValueError('Precision must be positive, not {}'.format(
                precision))
        return super().__new__(cls, precision, rounding,
                               AngleUnit(angle_unit), locale)

    def replace(self, **changes):
        '''
        Return a copy with some settings changed.
        '''
        return type(self)(**dict(self._asdict(), **changes))

    def decimal(self, extra=0):
        '''
        Fresh ``decimal`` context for this precision, plus extra digits.

        Fresh each time so concurrent evaluations never share flags.
        '''
        return Context(prec=self.precision + extra, rounding=self.rounding)

    @property
    def degrees(self):
        return self.angle_unit is AngleUnit.DEGREES


DEFAULT_CONTEXT = EvalContext()
