'''
Evaluator tests, on raw entry sequences.
'''

import math

from calcbrain.entries import (ErrorKind, Result, Error,
                               Literal, NamedConstant, Variable,
                               UnaryOp, BinaryOp)
from calcbrain.evaluator import evaluate, did_finish_operation
from calcbrain.machine import Machine


OPS = Machine.OPERATORS


def test_empty():
    assert evaluate((), {}) == (Error(ErrorKind.EMPTY_STACK), ())


def test_literal_leaves_rest():
    ops = (Literal(1.0), Literal(2.0))
    assert evaluate(ops, {}) == (Result(2.0), (Literal(1.0),))


def test_constant():
    result, remaining = evaluate((OPS['π'],), {})
    assert result == Result(math.pi)
    assert remaining == ()


def test_variable():
    ops = (Variable('x'),)
    assert evaluate(ops, {'x': 4.0})[0] == Result(4.0)
    assert evaluate(ops, {})[0] == Error(ErrorKind.VARIABLE_NOT_SET)


def test_operand_order():
    # 8 2 ÷ is 8 / 2, 8 2 − is 8 − 2
    assert evaluate((Literal(8.0), Literal(2.0), OPS['÷']), {})[0] == \
        Result(4.0)
    assert evaluate((Literal(8.0), Literal(2.0), OPS['−']), {})[0] == \
        Result(6.0)


def test_binary_leaves_rest():
    ops = (Literal(5.0), Literal(1.0), Literal(2.0), OPS['+'])
    assert evaluate(ops, {}) == (Result(3.0), (Literal(5.0),))


def test_underflow_is_not_empty_stack():
    assert evaluate((OPS['√'],), {})[0] == \
        Error(ErrorKind.NOT_ENOUGH_OPERANDS)
    assert evaluate((Literal(2.0), OPS['÷']), {})[0] == \
        Error(ErrorKind.NOT_ENOUGH_OPERANDS)


def test_guards():
    assert evaluate((Literal(7.0), Literal(0.0), OPS['÷']), {})[0] == \
        Error(ErrorKind.DIVISION_BY_ZERO)
    assert evaluate((Literal(-2.0), OPS['√']), {})[0] == \
        Error(ErrorKind.SQUARE_ROOT_OF_NEGATIVE_NUMBER)


def test_zero_dividend_is_fine():
    assert evaluate((Literal(0.0), Literal(7.0), OPS['÷']), {})[0] == \
        Result(0.0)


def test_first_error_wins():
    # Top operand fails first; the underflow below is never reached.
    ops = (OPS['+'], Literal(2.0), Variable('X'), OPS['+'])
    assert evaluate(ops, {})[0] == Error(ErrorKind.VARIABLE_NOT_SET)


def test_second_operand_skipped_on_error():
    calls = []

    def spy(operand):
        calls.append(operand)
        return operand

    ops = (Literal(1.0), UnaryOp('spy', spy), Literal(0.0), OPS['√'],
           Literal(-1.0), OPS['√'], OPS['+'])
    assert evaluate(ops, {})[0] == \
        Error(ErrorKind.SQUARE_ROOT_OF_NEGATIVE_NUMBER)
    assert calls == []


def test_guard_gets_operands_in_evaluation_order():
    seen = []

    def guard(operand1, operand2):
        seen.append((operand1, operand2))

    op = BinaryOp('pair', lambda a, b: a, guard)
    assert evaluate((Literal(1.0), Literal(2.0), op), {})[0] == Result(2.0)
    assert seen == [(2.0, 1.0)]


def test_domain_error_is_nan():
    result, _ = evaluate((Literal(math.inf), OPS['sin']), {})
    assert result.ok
    assert math.isnan(result.value)


def test_does_not_mutate():
    ops = [Literal(1.0), Literal(2.0), OPS['+']]
    evaluate(ops, {})
    assert ops == [Literal(1.0), Literal(2.0), OPS['+']]


def test_did_finish_operation():
    assert not did_finish_operation(())
    assert not did_finish_operation((Literal(1.0),))
    assert not did_finish_operation((NamedConstant('π', math.pi),))
    assert not did_finish_operation((Variable('M'),))
    assert did_finish_operation((Literal(1.0), OPS['cos']))
    assert did_finish_operation((OPS['×'],))


def test_deep_left_chain():
    ops = (Literal(1.0),) + (Literal(1.0), OPS['+']) * 5000
    assert evaluate(ops, {}) == (Result(5001.0), ())


def test_deep_right_chain():
    ops = (Literal(1.0),) * 3000 + (OPS['+'],) * 2999
    assert evaluate(ops, {}) == (Result(3000.0), ())


def test_deep_unary_chain():
    ops = (Literal(4.0),) + (OPS['±'],) * 5000
    assert evaluate(ops, {}) == (Result(4.0), ())


def test_deep_underflow():
    ops = (OPS['+'],) * 3000
    assert evaluate(ops, {})[0] == Error(ErrorKind.NOT_ENOUGH_OPERANDS)


def test_outcomes_compare_by_class():
    assert Result(ErrorKind.EMPTY_STACK) != Error(ErrorKind.EMPTY_STACK)
    assert Result(2.0) != (2.0,)
    assert (2.0,) != Result(2.0)
    assert Result(2.0) == Result(2.0)
    assert Error(ErrorKind.EMPTY_STACK) == Error(ErrorKind.EMPTY_STACK)
    assert len({Result(2.0), Result(2.0)}) == 1
