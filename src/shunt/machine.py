from collections import ChainMap, deque, namedtuple
import logging
import math
import operator

from .config import Options
from .converter import Number, Op, Operator, SymbolRef
from .errors import (
    CalcError,
    DivisionByZeroError,
    DomainError,
    InvalidAssignmentTargetError,
    MalformedExpressionError,
    UndefinedVariableError,
)
from .util import wrap_user_errors
from .variables import VariableTable


logger = logging.getLogger(__name__)


class Operand(namedtuple('Operand', 'value name position')):
    '''
    Entry on the machine's stack.

    Either a resolved value, or a reference to a variable (name) that is
    only looked up once an operator other than assignment consumes it.
    '''
    __slots__ = ()

    @classmethod
    def resolved(cls, value):
        return cls(value, None, None)

    @classmethod
    def reference(cls, name, position=None):
        return cls(None, name, position)

    def isreference(self):
        return self.name is not None

    def __repr__(self):
        if self.isreference():
            return self.name
        return repr(self.value)


def _truth(f):
    '''
    Turn a predicate into a 1.0/0.0 valued operator.
    '''
    def wrapped(*args):
        return 1.0 if f(*args) else 0.0
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'wrapped')
    return wrapped


def _divide(left, right):
    if right == 0:
        raise DivisionByZeroError('Division by zero')
    return left / right


@wrap_user_errors(DomainError, 'Cannot take {0} modulo {1}')
def _modulo(left, right):
    '''
    Floating-point remainder, with the sign of the dividend.
    '''
    if right == 0:
        raise DivisionByZeroError('Modulo by zero')
    return math.fmod(left, right)


@wrap_user_errors(DomainError, 'Cannot raise {0} to the power of {1}')
def _power(left, right):
    return math.pow(left, right)


def _and(left, right):
    return bool(left) and bool(right)


def _or(left, right):
    return bool(left) or bool(right)


class Machine:
    '''
    Postfix stack machine.

    Runs postfix sequences from the converter against a variable table.
    '''

    BUILTINS = {
        # Arithmetic
        Op.ADD: operator.__add__,
        Op.SUB: operator.__sub__,
        Op.MUL: operator.__mul__,
        Op.DIV: _divide,
        Op.MOD: _modulo,
        Op.POW: _power,
        Op.NEG: operator.__neg__,
        Op.POS: operator.__pos__,

        # Comparison
        Op.LT: _truth(operator.__lt__),
        Op.GT: _truth(operator.__gt__),
        Op.LTE: _truth(operator.__le__),
        Op.GTE: _truth(operator.__ge__),
        Op.EQU: _truth(operator.__eq__),
        Op.NEQU: _truth(operator.__ne__),

        # Logical. Both sides are already evaluated; no short-circuiting.
        Op.AND: _truth(_and),
        Op.OR: _truth(_or),
        Op.NOT: _truth(operator.__not__),
    }

    def __init__(self, variables=None, options=None):
        '''
        Create empty stack machine.

        :param variables: VariableTable to read and assign; a new one if None.
        :param options: Options; verbose traces every step.
        '''
        self.variables = variables if variables is not None \
            else VariableTable()
        self.options = options if options is not None else Options()
        self.stack = deque()

    def evaluate(self, postfix):
        '''
        Run postfix sequence, returning the value it leaves on the stack.

        Assignments are staged while running, and only written to the
        variable table if the whole sequence succeeds.
        '''
        self.stack.clear()
        staged = ChainMap(dict(), self.variables)
        try:
            for item in postfix:
                if self.options.verbose:
                    logger.info('%s\t%s', item, list(self.stack))
                self._step(item, staged)
            if len(self.stack) != 1:
                raise MalformedExpressionError(
                    'Expression left {} value(s), expected 1'.format(
                        len(self.stack)))
            result = self._resolve(self.stack.pop(), staged)
        finally:
            self.stack.clear()
        if self.options.verbose:
            for name, value in staged.maps[0].items():
                logger.info('%s = %s', name, value)
        self.variables.update(staged.maps[0])
        return result

    def _step(self, item, scope):
        '''
        Run one postfix item.
        '''
        if isinstance(item, Number):
            self._pshstack(Operand.resolved(item.value))
        elif isinstance(item, SymbolRef):
            self._pshstack(Operand.reference(item.name, item.position))
        elif isinstance(item, Operator):
            if item.op is Op.ASSIGN:
                self._assign(item, scope)
            else:
                self._apply(item, scope)
        else:
            raise MalformedExpressionError(
                'Unexpected item {!r}'.format(item))

    def _apply(self, item, scope):
        '''
        Apply operator item to the stack, popping its arity of operands.
        '''
        # If you don't reverse, you'll do 3 - 10 when you say 10 3 -.
        args = [self._resolve(operand, scope)
                for operand
                in reversed(self._popstack(item.arity, item))]
        try:
            res = type(self).BUILTINS[item.op](*args)
        except CalcError as e:
            raise e.locate(str(item), item.position)
        self._pshstack(Operand.resolved(float(res)))

    def _assign(self, item, scope):
        right, left = self._popstack(2, item)
        value = self._resolve(right, scope)
        if not left.isreference():
            raise InvalidAssignmentTargetError(
                'Can only assign to a variable, not {!r}'.format(left),
                lexeme=str(item),
                position=item.position)
        scope[left.name] = value
        self._pshstack(Operand.resolved(value))

    def _resolve(self, operand, scope):
        '''
        Return value of operand, looking up variable references.
        '''
        if not operand.isreference():
            return operand.value
        try:
            return scope[operand.name]
        except KeyError:
            raise UndefinedVariableError(operand.name,
                                         operand.position) from None

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n, item=None):
        '''
        Pop specified number of operands from stack, topmost first.
        '''
        if len(self.stack) < n:
            error = MalformedExpressionError(
                'Less than {} operand(s) on stack'.format(n))
            if item is not None:
                error.locate(str(item), item.position)
            raise error
        return [self.stack.pop() for _ in range(n)]


def evaluate(postfix, variables):
    '''
    Run postfix sequence against variable table variables.
    '''
    return Machine(variables).evaluate(postfix)
