from collections import namedtuple

from .config import Options
from .converter import Converter
from .lexer import Lexer
from .machine import Machine
from .variables import VariableTable


# value is None when solving is switched off.
Result = namedtuple('Result', 'value postfix')


class Session:
    '''
    One calculator: lexer, converter and machine over one variable table.

    Expressions are submitted one at a time; the variable table is the only
    thing carried over from one to the next.
    '''

    def __init__(self, options=None, variables=None):
        self.options = options if options is not None else Options()
        self.variables = variables if variables is not None \
            else VariableTable()
        self.lexer = Lexer()
        self.converter = Converter(self.options)
        self.machine = Machine(self.variables, self.options)

    def convert(self, line):
        '''
        Return postfix form of expression line.
        '''
        return self.converter.convert(self.lexer.lex(line))

    def submit(self, line):
        '''
        Convert and, unless solving is off, evaluate expression line.

        Raises CalcError subclasses on bad input; the variable table is
        then left as it was.
        '''
        postfix = self.convert(line)
        if not self.options.solve:
            return Result(None, postfix)
        return Result(self.machine.evaluate(postfix), postfix)

    def lookup(self, name):
        '''
        Return value of variable name, raising UndefinedVariableError.
        '''
        return self.variables.lookup(name)
