from functools import reduce
import operator

import regex

from .util import CalcError
from .machine import Machine


class Lexer:
    '''
    Lexer for the calculator's *regular* input grammar.

    Symbols known to the machine are matched as operators, so the machine
    class decides the vocabulary.
    '''
    # Integral part of a number: 1, 12, 1234 or 1_234.
    INTEGRAL = r'''
                (?:
                    \d{1,3}
                    (?:
                        \d
                        |
                        _\d{3}
                    )*
                )
                '''
    # Fractional part of a number: 5, 25, 250_5.
    FRACTIONAL = r'''
                  (?:
                      \d+
                      (?:
                          _\d{1,3}
                      )*
                  )
                  '''
    # Braces below are str.format fields, not regex repetitions.
    NUMBER = r'''
              (?:
                  # 1, 1_200, 1_200. (trailing dot), 1.5
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .5
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    # Variable push: 'name' or \x
    VARIABLE = r'''
                (?:
                    '
                    (?<__variable__>
                        [^']*
                    )
                    '
                )|(?:
                    \\
                    (?<__variable__>
                        \w
                    )
                )
                '''
    # Store result into a variable: >name, or > alone for memory.
    STORE = r'''
             >
             (?<__store__>
                 [^\W\d]\w*
             )?
             '''

    # Pop last, clear all, reset stack, reset variables. # is escaped
    # because of VERBOSE.
    COMMAND = r'[<@!\#]'
    SPACE = r'\s+'

    def __init__(self, machine_class=Machine):
        # Longest first, so sqrt isn't lexed as s, q, ...
        symbols = sorted(set(machine_class.OPERATORS) |
                         set(machine_class.ALIASES),
                         key=len,
                         reverse=True)
        self.OPERATOR = r'(?:' + r'|'.join(map(regex.escape, symbols)) + r')'
        # Immediate, as in immediately complete lexeme
        self.IMMEDIATE = r'(?<operator>' + self.OPERATOR + r')|' \
                         r'(?<command>' + self.COMMAND + r')|' \
                         r'(?<space>' + self.SPACE + r')'
        # All possible lexemes.
        self.LEXEME = r'(?<number>' + self.NUMBER + r')|' \
                      r'(?<variable>' + self.VARIABLE + r')|' \
                      r'(?<store>' + self.STORE + r')|' \
                      r'(?<immediate>' + self.IMMEDIATE + r')'
        self.pattern = regex.compile(self.LEXEME, flags=type(self).FLAGS)

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Raises CalcError on the first bit that doesn't lex, after yielding
        everything before it.
        '''
        while line:
            match = self.pattern.match(line)
            if match is None or not match.group(0):
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the named groups that matched, minus the grouping ones.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value and key != 'immediate'}
