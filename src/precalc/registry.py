'''
Catalog of every operator and function symbol the calculator knows.
'''

from collections import namedtuple
from enum import Enum
from threading import Lock
import logging

from . import bignum
from .util import RegistryFrozen, UnknownOperator


logger = logging.getLogger(__name__)


class Associativity(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class Fixity(Enum):
    PREFIX_FUNCTION = 'prefix'
    INFIX_OPERATOR = 'infix'
    POSTFIX_OPERATOR = 'postfix'


class RegistryEntry(namedtuple('RegistryEntry',
                               'symbol arity precedence associativity '
                               'fixity operation')):
    '''
    How a symbol parses, and what it computes.

    ``operation(operands, context)`` takes a tuple of ``arity`` Decimals,
    leftmost operand first, and returns a Decimal or a Coordinate.
    '''
    __slots__ = ()

    @property
    def is_function(self):
        return self.fixity is Fixity.PREFIX_FUNCTION

    @property
    def is_postfix(self):
        return self.fixity is Fixity.POSTFIX_OPERATOR

    @property
    def right_associative(self):
        return self.associativity is Associativity.RIGHT


def infix(symbol, precedence, f, associativity=Associativity.LEFT):
    return RegistryEntry(symbol, 2, precedence, associativity,
                         Fixity.INFIX_OPERATOR,
                         lambda operands, context: f(*operands, context))


def postfix(symbol, precedence, f):
    return RegistryEntry(symbol, 1, precedence, Associativity.LEFT,
                         Fixity.POSTFIX_OPERATOR,
                         lambda operands, context: f(*operands, context))


def function(symbol, arity, f, precedence=6):
    return RegistryEntry(symbol, arity, precedence, Associativity.LEFT,
                         Fixity.PREFIX_FUNCTION,
                         lambda operands, context: f(*operands, context))


class Registry:
    '''
    Symbol to RegistryEntry mapping.

    Mutable until frozen; lookups on a frozen registry need no locking.
    '''

    def __init__(self, entries=()):
        self._entries = {}
        self._frozen = False
        for entry in entries:
            self.register(entry)

    def register(self, entry):
        '''
        Add an entry, replacing any previous one with the same symbol.
        '''
        if self._frozen:
            raise RegistryFrozen('Cannot register {!r} on a frozen '
                                 'registry'.format(entry.symbol))
        self._entries[entry.symbol] = entry

    def freeze(self):
        self._frozen = True
        return self

    @property
    def frozen(self):
        return self._frozen

    def lookup(self, symbol):
        '''
        Return the entry for symbol, raising UnknownOperator if none.
        '''
        try:
            return self._entries[symbol]
        except KeyError:
            raise UnknownOperator(symbol) from None

    def get(self, symbol, default=None):
        return self._entries.get(symbol, default)

    def __contains__(self, symbol):
        return symbol in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self):
        return len(self._entries)

    @property
    def symbols(self):
        return frozenset(self._entries)


NEGATE = 'neg'
FACTORIAL = '!'
ABS = 'abs'


def builtin_entries():
    '''
    Yield the built-in catalog.
    '''
    # Arithmetic
    yield infix('+', 2, bignum.add)
    yield infix('-', 2, bignum.subtract)
    yield infix('*', 3, bignum.multiply)
    yield infix('\N{MULTIPLICATION SIGN}', 3, bignum.multiply)
    yield infix('/', 3, bignum.divide)
    yield infix('\N{DIVISION SIGN}', 3, bignum.divide)
    yield infix('%', 3, bignum.modulo)
    yield infix('^', 4, bignum.power, Associativity.RIGHT)
    yield infix('nPr', 6, bignum.permutation)
    yield infix('nCr', 6, bignum.combination)
    yield postfix(FACTORIAL, 5, bignum.factorial)
    # Unary minus, emitted by the lexer for "-" before a non-literal.
    yield function(NEGATE, 1, bignum.negate)
    yield function(ABS, 1, bignum.absolute)

    # Roots
    for symbol in 'sqrt', '\N{SQUARE ROOT}':
        yield function(symbol, 1, bignum.sqrt, precedence=4)
    for symbol in 'cbrt', '\N{SUPERSCRIPT THREE}\N{SQUARE ROOT}':
        yield function(symbol, 1, bignum.cbrt, precedence=4)
    yield function('rootn', 2, bignum.nth_root, precedence=4)

    # Trigonometry, with the ⁻¹ spellings of the inverses
    inverse = '\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}'
    for name in 'sin', 'cos', 'tan', 'cot':
        yield function(name, 1, getattr(bignum, name))
        yield function('a' + name, 1, getattr(bignum, 'a' + name))
        yield function(name + inverse, 1, getattr(bignum, 'a' + name))
        yield function(name + 'h', 1, getattr(bignum, name + 'h'))
        yield function('a' + name + 'h', 1, getattr(bignum, 'a' + name + 'h'))
        yield function(name + 'h' + inverse, 1,
                       getattr(bignum, 'a' + name + 'h'))
    yield function('atan2', 2, bignum.atan2)
    yield function('tan2' + inverse, 2, bignum.atan2)

    # Logarithms
    yield function('log2', 1, bignum.log2)
    yield function('log10', 1, bignum.log10)
    yield function('ln', 1, bignum.ln)
    yield function('logbase', 2, bignum.log_base)

    # Combinatorics and number theory
    yield function('perm', 2, bignum.permutation)
    yield function('comb', 2, bignum.combination)
    for symbol in 'gcd', 'GCD':
        yield function(symbol, 2, bignum.gcd)
    for symbol in 'lcm', 'LCM':
        yield function(symbol, 2, bignum.lcm)
    yield function('RandInt', 2, bignum.random_integer)

    # Special functions
    for symbol in 'gamma', '\N{GREEK CAPITAL LETTER GAMMA}':
        yield function(symbol, 1, bignum.gamma)
    for symbol in 'beta', 'B':
        yield function(symbol, 2, bignum.beta)

    # Coordinates
    yield function('Rec', 2, bignum.polar_to_cartesian)
    yield function('Pol', 2, bignum.cartesian_to_polar)


_default = None
_default_lock = Lock()


def default_registry():
    '''
    Return the shared, frozen built-in registry, building it once.
    '''
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                registry = Registry(builtin_entries()).freeze()
                logger.debug('Built default registry with %d symbols',
                             len(registry))
                _default = registry
    return _default
