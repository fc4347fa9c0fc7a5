'''
RPN calculator brain.

Keeps a stack of numbers, variables, constants and operators, evaluates it
to a result or a typed error, and describes it as infix expressions with
just enough parentheses:

    1 2 + 3 4 + ÷ cos   →   cos((1+2)÷(3+4))

Evaluation never raises on a malformed stack; missing operands, division by
zero and friends come back as Error values. Description never fails at all,
filling in missing operands with "?".

The CLI is a thin line-oriented caller on top, standing in for the button
grid of a pocket calculator.
'''

from .entries import ErrorKind, Result, Error
from .machine import Machine
from .lexer import Lexer
from .cli import CLI


__all__ = 'Machine', 'Lexer', 'CLI', 'ErrorKind', 'Result', 'Error'
