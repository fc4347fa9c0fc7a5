'''
Infix rendering of a stack.

Mirrors the evaluator's right-to-left walk, but never fails: missing
operands show up as "?" instead of an error.
'''

import math

from .entries import Literal, NamedConstant, Variable, UnaryOp, OPERATIONS
from .evaluator import ARITY
from .util import CalcError


MISSING = '?'
SEPARATOR = ','
# Integral values below this print without a fractional part or exponent.
INTEGRAL_LIMIT = 1e16


def format_number(value):
    '''
    Format a number for display: 3 rather than 3.0, shortest round-trip
    otherwise. Huge integral values keep their exponent.
    '''
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    elif math.isinf(value):
        return '∞' if value > 0 else '-∞'
    elif value.is_integer() and abs(value) < INTEGRAL_LIMIT:
        # Keeps the sign of -0.0.
        return '{:.0f}'.format(value)
    return repr(value)


def describe_entry(op):
    '''
    Short label of a single entry, as shown in a history listing.
    '''
    if isinstance(op, Literal):
        return format_number(op.value)
    return op.symbol


def describe_one(ops, precedences):
    '''
    Describe the topmost complete expression of ops.

    Walks the stack like the evaluator, with an explicit work stack of
    operators waiting for operand descriptions.

    :param precedences: Binary operator symbol to rank; lower binds tighter.
    :return: (text or None, entries left unconsumed, rank or None)
    '''
    pending = []
    end = len(ops)
    while True:
        if end == 0:
            described = None, None
        else:
            end -= 1
            op = ops[end]
            if isinstance(op, OPERATIONS):
                pending.append((op, []))
                continue
            described = _operand(op)

        while pending:
            op, operands = pending[-1]
            operands.append(described)
            if len(operands) < ARITY[type(op)]:
                break
            pending.pop()
            described = _render(op, operands, precedences)
        else:
            text, precedence = described
            return text, ops[:end], precedence


def _operand(op):
    if isinstance(op, Literal):
        return format_number(op.value), None
    elif isinstance(op, (NamedConstant, Variable)):
        return op.symbol, None
    raise CalcError('Unknown stack entry {!r}'.format(op))


def _render(op, operands, precedences):
    '''
    Render op applied to its (text, rank) operands, nearest-the-top first.
    '''
    if isinstance(op, UnaryOp):
        (operand, _), = operands
        if operand is None:
            operand = MISSING
        return '{}({})'.format(op.symbol, operand), None
    precedence = precedences[op.symbol]
    (operand1, precedence1), (operand2, precedence2) = operands
    operand1 = _parenthesize(operand1, precedence1, precedence)
    operand2 = _parenthesize(operand2, precedence2, precedence)
    return '{}{}{}'.format(operand2, op.symbol, operand1), precedence


def _parenthesize(text, inner, outer):
    if text is None:
        return MISSING
    if inner is not None and inner > outer:
        return '({})'.format(text)
    return text


def describe_all(ops, precedences):
    '''
    Describe every expression on the stack, oldest first, comma separated.

    Empty string for an empty stack.
    '''
    descriptions = []
    text, remaining, _ = describe_one(ops, precedences)
    while text is not None:
        descriptions.append(text)
        text, remaining, _ = describe_one(remaining, precedences)
    return SEPARATOR.join(reversed(descriptions))
