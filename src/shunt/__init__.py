'''
Infix to RPN calculator.

Reads infix expressions with arithmetic, comparison, logical and
assignment operators, converts them to postfix (RPN) with the shunting
yard algorithm, and runs that on a stack machine with variables.

    >>> session = Session()
    >>> session.submit('x = 3 + 4 * 2').value
    11.0
    >>> render(session.submit('x ^ 2 > 100').postfix)
    'x 2 ^ 100 >'
'''

from .cli import CLI
from .config import Options
from .converter import Converter, render
from .errors import CalcError
from .lexer import Lexer
from .machine import Machine, evaluate
from .session import Session
from .variables import VariableTable


__all__ = 'Session', 'Lexer', 'Converter', 'Machine', 'VariableTable', \
    'Options', 'CalcError', 'CLI', 'evaluate', 'render'
