from decimal import Decimal

from precalc.context import AngleUnit, EvalContext
from precalc.values import (Coordinate, CoordinateKind, Scalar,
                            format_number, scalar_of, separators, trim)

from pytest import raises


def test_trim():
    assert str(trim(Decimal('1.500'))) == '1.5'
    assert str(trim(Decimal('100'))) == '100'
    assert str(trim(Decimal('1E+2'))) == '100'
    assert str(trim(Decimal('0E-50'))) == '0'
    assert '{:f}'.format(trim(Decimal('1' + '0' * 60))) == '1' + '0' * 60


def test_format_number():
    assert format_number(Decimal('0.00001')) == '0.00001'
    assert format_number(Decimal('1234567.25'), grouping=True) == \
        '1,234,567.25'
    assert format_number(Decimal('-1234'), 'de_DE', True) == '-1.234'
    assert format_number(Decimal('999'), grouping=True) == '999'


def test_separators():
    assert separators('en_US') == ('.', ',')
    assert separators('de-AT') == (',', '.')
    assert separators('de_CH') == ('.', '\N{RIGHT SINGLE QUOTATION MARK}')
    assert separators('xx_YY') == ('.', ',')
    assert separators(None) == ('.', ',')


def test_scalar():
    assert str(Scalar(Decimal('2.50'))) == '2.5'
    assert Scalar(Decimal(1), 'one').format() == 'one'
    assert scalar_of(Scalar(Decimal(3))) == 3


def test_coordinate():
    point = Coordinate(Decimal('1.5'), Decimal(0), CoordinateKind.CARTESIAN)
    assert str(point) == 'x=1.5; y=0'
    assert point.format('fr_FR') == 'x=1,5; y=0'
    assert scalar_of(point) == Decimal('1.5')
    scalar = point.to_scalar()
    assert scalar.number == Decimal('1.5')
    assert str(scalar) == 'x=1.5; y=0'
    polar = Coordinate(Decimal(2), Decimal(45), CoordinateKind.POLAR)
    assert str(polar) == 'r=2; \N{GREEK SMALL LETTER THETA}=45'


def test_context():
    context = EvalContext()
    assert context.precision == 50
    assert context.degrees
    assert context.decimal().prec == 50
    assert context.decimal(10).prec == 60
    radians = context.replace(angle_unit='rad')
    assert radians.angle_unit is AngleUnit.RADIANS
    assert not radians.degrees
    assert context.degrees
    with raises(ValueError):
        EvalContext(precision=0)
