import logging
import math
import operator

from .entries import (ErrorKind, Literal, NamedConstant, Variable,
                      UnaryOp, BinaryOp)
from .evaluator import evaluate, did_finish_operation
from .describer import describe_all, describe_entry
from .util import CalcError


logger = logging.getLogger(__name__)


def _divide(divisor, dividend):
    return dividend / divisor


def _subtract(subtrahend, minuend):
    return minuend - subtrahend


def _nonzero_divisor(divisor, dividend):
    if divisor == 0:
        return ErrorKind.DIVISION_BY_ZERO


def _nonnegative(operand):
    if operand < 0:
        return ErrorKind.SQUARE_ROOT_OF_NEGATIVE_NUMBER


class Machine:
    '''
    RPN stack machine.

    Holds the stack of entries and the variable environment. Every call that
    changes the stack notifies listeners, then returns the re-evaluated
    result so callers never display a stale value.
    '''

    # Binary operators receive the operand nearest the top of the stack
    # first.
    OPERATORS = {
        entry.symbol: entry
        for entry
        in [
            BinaryOp('×', operator.__mul__),
            BinaryOp('÷', _divide, _nonzero_divisor),
            BinaryOp('+', operator.__add__),
            BinaryOp('−', _subtract),
            UnaryOp('√', math.sqrt, _nonnegative),
            UnaryOp('sin', math.sin),
            UnaryOp('cos', math.cos),
            UnaryOp('±', operator.__neg__),
            NamedConstant('π', math.pi),
        ]
    }

    # Lower binds tighter.
    PRECEDENCES = {
        '×': 1,
        '÷': 1,
        '+': 2,
        '−': 2,
    }

    # Keyboard friendly spellings.
    ALIASES = {
        '*': '×',
        '/': '÷',
        '-': '−',
        # 'v', like in UNIX dc.
        'v': '√',
        'sqrt': '√',
        '_': '±',
        'pi': 'π',
    }

    # Default variable for store().
    MEMORY = 'M'

    def __init__(self, variables=None):
        '''
        Create empty stack machine.

        :param variables: Variable environment to share, if any.
        '''
        self.stack = []
        self.variables = dict() if variables is None else variables
        self.listeners = []
        self.operators = dict(type(self).OPERATORS)
        self.precedences = dict(type(self).PRECEDENCES)

    def register(self, entry, precedence=None):
        '''
        Make an operator or constant available to apply_operator().

        Binary operators need a precedence rank, for describing.
        '''
        if precedence is not None:
            self.precedences[entry.symbol] = precedence
        elif (isinstance(entry, BinaryOp) and
              entry.symbol not in self.precedences):
            raise CalcError('No precedence for {}'.format(entry.symbol))
        self.operators[entry.symbol] = entry

    def lookup(self, symbol):
        '''
        Return the table entry for symbol or one of its aliases, else None.
        '''
        return self.operators.get(type(self).ALIASES.get(symbol, symbol))

    def add_listener(self, listener):
        '''
        Call listener(machine) after every change to the stack.
        '''
        self.listeners.append(listener)

    def remove_listener(self, listener):
        self.listeners.remove(listener)

    def _changed(self):
        for listener in list(self.listeners):
            listener(self)
        return self.evaluate()

    def push_literal(self, value):
        self.stack.append(Literal(float(value)))
        return self._changed()

    def push_variable(self, symbol):
        '''
        Push a variable; it need not be set until evaluation.
        '''
        self.stack.append(Variable(symbol))
        return self._changed()

    def apply_operator(self, symbol):
        '''
        Push the operator or constant known as symbol.

        Unknown symbols leave the stack alone.
        '''
        entry = self.lookup(symbol)
        if entry is None:
            logger.debug('Ignoring unknown operator %r', symbol)
            return self.evaluate()
        self.stack.append(entry)
        return self._changed()

    def pop_last(self):
        '''
        Undo the last push or operator, if any.
        '''
        if not self.stack:
            return self.evaluate()
        self.stack.pop()
        return self._changed()

    def reset(self):
        '''
        Clear everything from the stack. Variables are kept.
        '''
        self.stack.clear()
        return self._changed()

    def reset_variables(self):
        self.variables.clear()
        return self.evaluate()

    def clear(self):
        '''
        Clear both the stack and the variables.
        '''
        self.reset_variables()
        return self.reset()

    def store(self, symbol=None, value=None):
        '''
        Set variable symbol (memory by default) and re-evaluate.

        Without a value, store the current result. Nothing is stored if there
        is none.
        '''
        if symbol is None:
            symbol = type(self).MEMORY
        if value is None:
            result = self.evaluate()
            if not result.ok:
                return result
            value = result.value
        self.variables[symbol] = float(value)
        return self.evaluate()

    def evaluate(self):
        '''
        Evaluate the stack without changing it.
        '''
        ops = tuple(self.stack)
        result, remaining = evaluate(ops, self.variables)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('%s = %s with %s left over',
                         self.history(), result, [describe_entry(op)
                                                  for op
                                                  in remaining])
        return result

    def describe_all(self):
        return describe_all(tuple(self.stack), self.precedences)

    def did_finish_operation(self):
        '''
        Return True if the last entry on the stack is an operator.
        '''
        return did_finish_operation(self.stack)

    def expression(self):
        '''
        Infix description, with " =" when the last entry was an operator.
        '''
        description = self.describe_all()
        if description and self.did_finish_operation():
            description += ' ='
        return description

    def history(self):
        '''
        Labels of all entries, oldest first.
        '''
        return [describe_entry(op) for op in self.stack]
