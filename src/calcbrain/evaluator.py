'''
Right-to-left reduction of a stack snapshot to a single Result or Error.
'''

from .entries import (ErrorKind, Result, Error,
                      Literal, NamedConstant, Variable, UnaryOp, BinaryOp,
                      OPERATIONS)
from .util import CalcError


ARITY = {
    UnaryOp: 1,
    BinaryOp: 2,
}


def evaluate(ops, variables):
    '''
    Evaluate the topmost complete expression of ops.

    Consumes entries from the end (top of the stack), collecting operands
    for pending operators on an explicit work stack, so deep stacks don't
    hit the recursion limit. Never mutates ops.

    :param ops: Sequence of stack entries, oldest first.
    :param variables: Mapping of variable symbol to value.
    :return: (Result or Error, entries left unconsumed)
    '''
    # Operators still waiting for operands, innermost last. Operands are
    # collected nearest-the-top first: for ÷ that is the divisor, for − the
    # subtrahend.
    pending = []
    end = len(ops)
    while True:
        if end == 0:
            result = Error(ErrorKind.EMPTY_STACK)
        else:
            end -= 1
            op = ops[end]
            if isinstance(op, OPERATIONS):
                pending.append((op, []))
                continue
            result = _value(op, variables)

        while pending:
            if not result.ok:
                # Running dry under an operator is an underflow. The first
                # error wins; outer operators never see their other operands.
                if result.kind is ErrorKind.EMPTY_STACK:
                    result = Error(ErrorKind.NOT_ENOUGH_OPERANDS)
                return result, ops[:end]
            op, operands = pending[-1]
            operands.append(result.value)
            if len(operands) < ARITY[type(op)]:
                break
            pending.pop()
            result = _apply(op, *operands)
        else:
            return result, ops[:end]


def _value(op, variables):
    if isinstance(op, (Literal, NamedConstant)):
        return Result(op.value)
    elif isinstance(op, Variable):
        if op.symbol not in variables:
            return Error(ErrorKind.VARIABLE_NOT_SET)
        return Result(variables[op.symbol])
    raise CalcError('Unknown stack entry {!r}'.format(op))


def _apply(op, *operands):
    if op.guard is not None:
        kind = op.guard(*operands)
        if kind is not None:
            return Error(kind)
    try:
        return Result(op.fn(*operands))
    except (ValueError, OverflowError):
        # IEEE semantics, e.g. sin(∞).
        return Result(float('nan'))


def did_finish_operation(ops):
    '''
    Return True if the topmost entry is an operator.
    '''
    return bool(ops) and isinstance(ops[-1], OPERATIONS)
