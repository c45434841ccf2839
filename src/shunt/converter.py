'''
Infix to postfix conversion, by the shunting yard algorithm.
'''

from collections import namedtuple
import enum
import logging

from .config import Options
from .errors import UnbalancedParenthesesError, UnexpectedTokenError
from .lexer import TokenKind
from .util import format_number


logger = logging.getLogger(__name__)


class Op(enum.Enum):
    '''
    Operators of the postfix form. Values are their display names.
    '''
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '^'
    LT = '<'
    GT = '>'
    LTE = '<='
    GTE = '>='
    EQU = '=='
    NEQU = '!='
    AND = 'and'
    OR = 'or'
    NOT = 'not'
    NEG = 'neg'
    POS = 'pos'
    ASSIGN = '='

    def __str__(self):
        return self.value


class Assoc(enum.Enum):
    LEFT = 'left'
    RIGHT = 'right'


class Number(namedtuple('Number', 'value')):
    __slots__ = ()

    def __str__(self):
        return format_number(self.value)


class SymbolRef(namedtuple('SymbolRef', 'name position', defaults=(None,))):
    __slots__ = ()

    def __str__(self):
        return self.name


class Operator(namedtuple('Operator', 'op arity associativity position',
                          defaults=(None,))):
    __slots__ = ()

    def __str__(self):
        return str(self.op)


def render(postfix):
    '''
    Postfix sequence as a space separated string, for display.
    '''
    return ' '.join(map(str, postfix))


class Converter:
    '''
    Converts a token stream into a postfix sequence of Number, SymbolRef
    and Operator items.

    Holds no state between calls; the operator stack and the output only
    live for the duration of convert().
    '''

    # Higher binds tighter.
    PRECEDENCE = {
        Op.ASSIGN: 0,
        Op.OR: 1,
        Op.AND: 2,
        Op.EQU: 3,
        Op.NEQU: 3,
        Op.LT: 4,
        Op.GT: 4,
        Op.LTE: 4,
        Op.GTE: 4,
        Op.ADD: 5,
        Op.SUB: 5,
        Op.MUL: 6,
        Op.DIV: 6,
        Op.MOD: 6,
        Op.NOT: 7,
        Op.NEG: 7,
        Op.POS: 7,
        Op.POW: 8,
    }
    RIGHT_ASSOCIATIVE = frozenset({Op.POW, Op.ASSIGN,
                                   Op.NOT, Op.NEG, Op.POS})

    # Tokens in operator position.
    INFIX = {
        TokenKind.PLUS: Op.ADD,
        TokenKind.MINUS: Op.SUB,
        TokenKind.STAR: Op.MUL,
        TokenKind.SLASH: Op.DIV,
        TokenKind.PERCENT: Op.MOD,
        TokenKind.CARET: Op.POW,
        TokenKind.LT: Op.LT,
        TokenKind.GT: Op.GT,
        TokenKind.LTE: Op.LTE,
        TokenKind.GTE: Op.GTE,
        TokenKind.EQU: Op.EQU,
        TokenKind.NEQU: Op.NEQU,
        TokenKind.AND: Op.AND,
        TokenKind.OR: Op.OR,
        TokenKind.EQUAL: Op.ASSIGN,
    }
    # Tokens in operand position, i.e. unary.
    PREFIX = {
        TokenKind.MINUS: Op.NEG,
        TokenKind.PLUS: Op.POS,
        TokenKind.NOT: Op.NOT,
    }

    def __init__(self, options=None):
        self.options = options if options is not None else Options()

    def _operator(self, op, arity, position):
        associativity = Assoc.RIGHT \
            if op in type(self).RIGHT_ASSOCIATIVE \
            else Assoc.LEFT
        return Operator(op, arity, associativity, position)

    def _binds_tighter(self, top, op):
        '''
        Return True if top, on the stack, must be output before op is pushed.
        '''
        precedence = type(self).PRECEDENCE
        if precedence[top.op] > precedence[op.op]:
            return True
        return precedence[top.op] == precedence[op.op] and \
            op.associativity is Assoc.LEFT

    def convert(self, tokens):
        '''
        Take tokens, END terminated, and return the postfix tuple.

        Aborts on the first ERROR token with a ParseError whose cause is
        the token's LexError.
        '''
        output = []
        # Operators, and OPAREN tokens as markers.
        stack = []
        # Operand and operator positions alternate. Unary operators and
        # parentheses leave the expectation as is.
        expect_operand = True
        token = None
        for token in tokens:
            if self.options.verbose:
                logger.info('%s\t%r', token.kind, token.lexeme)
            kind = token.kind
            if kind is TokenKind.ERROR:
                raise UnexpectedTokenError(token.error.message,
                                           lexeme=token.lexeme,
                                           position=token.position) \
                    from token.error
            elif kind is TokenKind.END:
                break
            elif expect_operand:
                if kind is TokenKind.NUMBER:
                    output.append(Number(float(token.lexeme)))
                    expect_operand = False
                elif kind is TokenKind.SYMBOL:
                    output.append(SymbolRef(token.lexeme, token.position))
                    expect_operand = False
                elif kind is TokenKind.OPAREN:
                    stack.append(token)
                elif kind in type(self).PREFIX:
                    # Its operand is yet to come, so nothing on the stack
                    # can be complete yet: push without popping.
                    stack.append(self._operator(type(self).PREFIX[kind],
                                                1,
                                                token.position))
                else:
                    raise UnexpectedTokenError(
                        'Expected a number, variable, unary operator or '
                        "'(', found {!r}".format(token.lexeme),
                        lexeme=token.lexeme,
                        position=token.position)
            elif kind in type(self).INFIX:
                op = self._operator(type(self).INFIX[kind], 2, token.position)
                while stack and isinstance(stack[-1], Operator) and \
                        self._binds_tighter(stack[-1], op):
                    output.append(stack.pop())
                stack.append(op)
                expect_operand = True
            elif kind is TokenKind.CPAREN:
                while stack and isinstance(stack[-1], Operator):
                    output.append(stack.pop())
                if not stack:
                    raise UnbalancedParenthesesError(
                        "Unmatched ')'",
                        lexeme=token.lexeme,
                        position=token.position)
                stack.pop()
            else:
                raise UnexpectedTokenError(
                    "Expected an operator or ')', found {!r}".format(
                        token.lexeme),
                    lexeme=token.lexeme,
                    position=token.position)

        for entry in stack:
            if not isinstance(entry, Operator):
                raise UnbalancedParenthesesError("Unmatched '('",
                                                 lexeme=entry.lexeme,
                                                 position=entry.position)
        if expect_operand and (output or stack):
            position = token.position if token is not None else None
            raise UnexpectedTokenError('Unexpected end of expression',
                                       lexeme='',
                                       position=position)
        while stack:
            top = stack.pop()
            if not isinstance(top, Operator):
                raise UnbalancedParenthesesError("Unmatched '('",
                                                 lexeme=top.lexeme,
                                                 position=top.position)
            output.append(top)
        return tuple(output)
