from argparse import ArgumentParser, REMAINDER, OPTIONAL
from os import isatty
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .config import Options
from .converter import render
from .errors import CalcError
from .lexer import Lexer
from .session import Session
from .util import format_number


logger = logging.getLogger(__name__)


HELP = '''\
Infix to RPN calculator
\t?|.h|.help  - this text
\t.v|.verbo - verbose mode toggle
\t.r|.rpn   - show the rpn string
\t.s|.solve - toggle the solver flag
\t.a|.vars  - show the vars table
\t.p|.print var - show the value of a variable
\tq|.q|.quit - quit

example:
var1 = 12
var2 = 2
var3 = 7
var4 = (var3 + var1) * var2
.p var4
var4 = 38
'''


class InteractiveInput:
    def __init__(self, prompt, vi_mode=False):
        self.prompt = prompt
        self.vi_mode = vi_mode

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=self.vi_mode,
                                    enable_suspend=True,
                                    # Per run only; nothing is kept on disk.
                                    history=InMemoryHistory(),
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

    DEFAULT_PROMPT = 'enter an expression: '

    def printhelp(self, argument=None):
        '''
        Show the help text.
        '''
        print(HELP, end='')

    def quit(self, argument=None):
        '''
        Stop reading input.
        '''
        self.finished = True
        print('quit')

    def _toggle(self, flag, label):
        value = self.options.toggle(flag)
        print('{} flag: {}'.format(label, 'true' if value else 'false'))

    def toggleverbose(self, argument=None):
        '''
        Toggle tracing of tokens and execution.
        '''
        self._toggle('verbose', 'verbose')

    def togglerpn(self, argument=None):
        '''
        Toggle showing the postfix form of expressions.
        '''
        self._toggle('rpn', 'rpn')

    def togglesolve(self, argument=None):
        '''
        Toggle evaluation of expressions.
        '''
        self._toggle('solve', 'solve')

    def printvars(self, argument=None):
        '''
        Show all variables.
        '''
        variables = self.session.variables
        print('All variables:')
        if not variables:
            print('\tlist is empty')
        for name, value in variables.items():
            print('\t{} = {}'.format(name,
                                     format_number(value,
                                                   self.options.precision)))

    def printvar(self, argument=None):
        '''
        Show value of one variable.
        '''
        if not argument:
            print('usage: .print var', file=sys.stderr)
            return
        try:
            value = self.session.lookup(argument)
        except CalcError as e:
            print(e.diagnostic(), file=sys.stderr)
            return
        print('{} = {}'.format(argument,
                               format_number(value, self.options.precision)))

    # Meta-commands, prefixed with . or /, by full name or alias.
    COMMANDS = {
        'help': printhelp,
        'verbo': toggleverbose,
        'rpn': togglerpn,
        'solve': togglesolve,
        'vars': printvars,
        'print': printvar,
        'quit': quit,
    }
    ALIASES = {
        'h': 'help',
        'v': 'verbo',
        'r': 'rpn',
        's': 'solve',
        'a': 'vars',
        'p': 'print',
        'q': 'quit',
    }

    def dispatch(self, line):
        '''
        Run line if it is a meta-command. Return False if it is not.
        '''
        if line == '?':
            self.printhelp()
            return True
        elif line == 'q':
            self.quit()
            return True
        elif line[0] not in './':
            return False
        name, _, argument = line[1:].partition(' ')
        name = type(self).ALIASES.get(name, name)
        command = type(self).COMMANDS.get(name)
        if command is None:
            print('unknown command: {}'.format(line))
            self.printhelp()
        else:
            command(self, argument.strip())
        return True

    def evaluate(self, line):
        '''
        Submit expression line, printing its result or diagnostic.
        '''
        try:
            result = self.session.submit(line)
        except CalcError as e:
            if self.options.verbose:
                logger.exception('Failed on %r', line)
            print(e.diagnostic(line), file=sys.stderr)
            return
        if self.options.rpn:
            print(render(result.postfix))
        if result.value is not None:
            print(format_number(result.value, self.options.precision))

    def executor(self):
        '''
        Run calculator over all input lines.
        '''
        self.session = Session(self.options)
        self.finished = False
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            if not self.dispatch(line):
                self.evaluate(line)
            if self.finished:
                break

    def dumper(self):
        '''
        Dump all tokens: kind, lexeme, and position.
        '''
        lexer = Lexer()
        print('[kind]\t<repr(lexeme)>\t<position>')
        for line in self.args.expressions:
            for token in lexer.lex(line.rstrip('\n')):
                print(token.kind,
                      repr(token.lexeme),
                      token.position,
                      sep='\t')

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    vi_mode=self.args.vi)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix to RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-r', '--rpn',
                                          action='store_true',
                                          help='show postfix form')
        self.argument_parser.add_argument('-n', '--no-solve',
                                          action='store_false',
                                          dest='solve',
                                          help='convert only')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          help='round results')
        self.argument_parser.add_argument('--vi',
                                          action='store_true',
                                          help='vi editing mode')
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
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self.options = Options.from_args(self.args)
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        logging.basicConfig(stream=sys.stderr,
                            level=logging.INFO,
                            format='%(name)s: %(message)s')
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
