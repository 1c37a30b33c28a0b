from pytest import fixture

from precalc import AngleUnit, Calculator, EvalContext


@fixture
def calculator():
    '''
    Calculator with default settings: 50 digits, degrees, en_US.
    '''
    return Calculator()


@fixture
def radians():
    return Calculator(EvalContext(angle_unit=AngleUnit.RADIANS))


@fixture
def value(calculator):
    '''
    Evaluate an expression to its Decimal, optionally rounded.
    '''
    def evaluate(expression, variables=None, places=None):
        number = calculator.evaluate(expression, variables).number
        if places is not None:
            return round(number, places)
        return number
    return evaluate