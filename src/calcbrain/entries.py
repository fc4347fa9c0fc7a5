'''
Stack entries, evaluation results and error kinds.

Entries are immutable so a stack snapshot can be shared freely between the
evaluator and the describer.
'''

from collections import namedtuple
from enum import Enum


class ErrorKind(Enum):
    '''
    Why a stack failed to evaluate. Value is the user-visible message.
    '''
    EMPTY_STACK = 'Empty stack'
    NOT_ENOUGH_OPERANDS = 'Not enough operands'
    DIVISION_BY_ZERO = 'Division by zero'
    SQUARE_ROOT_OF_NEGATIVE_NUMBER = 'Square root of negative number'
    VARIABLE_NOT_SET = 'Variable not set'

    @property
    def message(self):
        return self.value


class _Outcome:
    '''
    Equality that also compares the class, so a Result never equals an
    Error or a bare tuple.
    '''
    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    __hash__ = tuple.__hash__


class Result(_Outcome, namedtuple('Result', 'value')):
    '''
    Successful evaluation.
    '''
    __slots__ = ()
    ok = True


class Error(_Outcome, namedtuple('Error', 'kind')):
    '''
    Failed evaluation, carrying the first ErrorKind detected.
    '''
    __slots__ = ()
    ok = False


# A directly entered number.
Literal = namedtuple('Literal', 'value')
# Value fixed when the operator table is built, e.g. π.
NamedConstant = namedtuple('NamedConstant', 'symbol value')
# Looked up in the variable environment on every evaluation.
Variable = namedtuple('Variable', 'symbol')
# guard gets the same operands as fn and returns an ErrorKind to veto, or None.
UnaryOp = namedtuple('UnaryOp', 'symbol fn guard', defaults=(None,))
BinaryOp = namedtuple('BinaryOp', 'symbol fn guard', defaults=(None,))

OPERATIONS = UnaryOp, BinaryOp
