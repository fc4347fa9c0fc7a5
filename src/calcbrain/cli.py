from os import path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError, wrap_user_errors
from .machine import Machine
from .lexer import Lexer
from .describer import format_number
from .entries import UnaryOp, BinaryOp


logger = logging.getLogger(__name__)


@wrap_user_errors('Cannot convert {0}')
def _tofloat(number):
    return float(number.replace('_', ''))


class InteractiveInput:
    '''
    Iterable of lines typed at a prompt_toolkit prompt.

    The bottom toolbar shows the machine's current expression.
    '''
    def __init__(self, prompt, machine, history=None):
        self.prompt = prompt
        self.machine = machine
        self.history = history

    def _toolbar(self):
        return self.machine.expression() or ' '

    def __iter__(self):
        try:
            history = None
            if self.history:
                history = FileHistory(path.expanduser(self.history))
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=history,
                                    bottom_toolbar=self._toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.calcbrain_history'

    # Immediate commands, bound to the machine when fed.
    COMMANDS = {
        '<': Machine.pop_last,
        '@': Machine.clear,
        '!': Machine.reset,
        '#': Machine.reset_variables,
    }

    def feed(self, machine, groups):
        '''
        Push or run one lexeme on machine.

        :param groups: Lexer.matchedgroups() of the lexeme.
        '''
        if 'number' in groups:
            return machine.push_literal(_tofloat(groups['number']))
        elif 'variable' in groups:
            if '__variable__' not in groups:
                raise CalcError('Bad variable name {}'.format(
                    groups['variable']))
            return machine.push_variable(groups['__variable__'])
        elif 'store' in groups:
            return machine.store(groups.get('__store__'))
        elif 'operator' in groups:
            return machine.apply_operator(groups['operator'])
        elif 'command' in groups:
            return type(self).COMMANDS[groups['command']](machine)
        raise CalcError('Nothing to do with {}'.format(groups))

    def show(self, machine):
        '''
        Print the expression and the result, like a calculator display.
        '''
        expression = machine.expression()
        if expression:
            print(expression)
        result = machine.evaluate()
        if result.ok:
            print(format_number(result.value))
        else:
            print(result.kind.message)

    def dumper(self):
        '''
        Dump all lexemes matches and arity.
        '''
        machine = Machine()
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<arity>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                groups = lexer.matchedgroups(match)
                entry = machine.lookup(groups.get('operator'))
                print(*groups.keys(),
                      repr(match.group(0)),
                      self._arity(entry),
                      sep='\t')

    def _arity(self, entry):
        if isinstance(entry, BinaryOp):
            return 2
        elif isinstance(entry, UnaryOp):
            return 1
        elif entry is not None:
            return 0
        return None

    def executor(self):
        '''
        Run machine over every line of input, showing its state after each.
        '''
        machine = Machine()
        lexer = Lexer()
        if self._interactive():
            self.args.expressions.machine = machine
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        self.feed(machine, lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                logger.debug('Rejected %r', line, exc_info=True)
                print(e.args[0], file=sys.stderr)
            self.show(machine)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def list_operators(self):
        '''
        Print all operators, their arity and precedence, then the aliases.
        '''
        machine = Machine()
        for symbol, entry in machine.operators.items():
            print(symbol,
                  self._arity(entry),
                  machine.precedences.get(symbol, '-'),
                  sep='\t')
        for alias, symbol in sorted(Machine.ALIASES.items()):
            print(alias, '=', symbol, sep='\t')

    def _prompting_input(self):
        '''
        Return prompting input, or plain stdin.

        Prompt if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    machine=None,
                                    history=self.args.history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-H', '--history',
                                          nargs=OPTIONAL,
                                          const=self.HISTORY_FILE)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-L', '--list-operators',
                                       self.list_operators)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(message)s',
            stream=sys.stderr)
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
