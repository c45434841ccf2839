from collections import namedtuple
from functools import reduce
import enum
import logging
import operator

import regex

from .errors import InvalidCharacterError, MalformedNumberError


logger = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    CARET = enum.auto()
    LT = enum.auto()
    GT = enum.auto()
    LTE = enum.auto()
    GTE = enum.auto()
    EQU = enum.auto()
    NEQU = enum.auto()
    NOT = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    EQUAL = enum.auto()
    OPAREN = enum.auto()
    CPAREN = enum.auto()
    NUMBER = enum.auto()
    SYMBOL = enum.auto()
    END = enum.auto()
    ERROR = enum.auto()

    def __str__(self):
        return self.name


class Token(namedtuple('Token', 'kind lexeme position error',
                       defaults=(None,))):
    '''
    One lexeme, classified.

    error is only set on ERROR tokens, and holds the LexError to raise.
    '''
    __slots__ = ()

    def __str__(self):
        return '<{}>{}'.format(self.kind, self.lexeme)


class Cursor:
    '''
    Read position in a line of input, advanced by Lexer.next_token.
    '''

    def __init__(self, line, pos=0):
        self.line = line
        self.pos = pos

    def exhausted(self):
        return self.pos >= len(self.line)

    def __repr__(self):
        return 'Cursor({!r}, {!r})'.format(self.line, self.pos)


class Lexer:
    '''
    Lexer for the infix expression *regular* grammar.

    Holds no state of its own; the position lives in the Cursor.
    '''
    OPERATORS = {
        '+': TokenKind.PLUS,
        '-': TokenKind.MINUS,
        '*': TokenKind.STAR,
        '/': TokenKind.SLASH,
        '%': TokenKind.PERCENT,
        '^': TokenKind.CARET,
        '(': TokenKind.OPAREN,
        ')': TokenKind.CPAREN,
        '<': TokenKind.LT,
        '>': TokenKind.GT,
        '<=': TokenKind.LTE,
        '>=': TokenKind.GTE,
        '==': TokenKind.EQU,
        '!=': TokenKind.NEQU,
        '=': TokenKind.EQUAL,
        # C-style shorthand for not
        '!': TokenKind.NOT,
    }
    KEYWORDS = {
        'not': TokenKind.NOT,
        'and': TokenKind.AND,
        'or': TokenKind.OR,
    }

    # Only space and tab separate lexemes; a line never holds a newline.
    SPACE = r'[\x20\t]+'
    NUMBER = r'''
              # 1, 12, 1.5, 12.25, but not 1. nor .5
              [0-9]+
              (?:
                  \.
                  [0-9]+
              )?
              # Anything glued to it makes it a malformed number instead.
              (?![0-9A-Za-z_.])
              '''
    # 1., 1.2.3, 12abc
    MALFORMED = r'[0-9][0-9A-Za-z_.]*'
    # Keywords too; told apart after matching.
    SYMBOL = r'[A-Za-z_]+'
    # Longest first, so that <= wins over <.
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      sorted(OPERATORS,
                                             key=len,
                                             reverse=True))) + r')'
    # Catch all. Always matches, so lexing never gets stuck.
    ERROR = r'.'

    # All possible lexemes.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<malformed>' + MALFORMED + r')|' \
             r'(?<symbol>' + SYMBOL + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<error>' + ERROR + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def next_token(self, cursor):
        '''
        Consume and return the next token at cursor.

        Returns an END token once the line is exhausted, however many times
        it is called. Never raises: bad input comes back as ERROR tokens.

        A malformed number is one ERROR token for the whole glued run
        (1.2.3, 12abc), not just its first offending character; lexing
        resumes after the run.
        '''
        while not cursor.exhausted():
            start = cursor.pos
            match = type(self).PATTERN.match(cursor.line, start)
            cursor.pos = match.end()
            group = match.lastgroup
            text = match.group(0)
            if group == 'space':
                continue
            elif group == 'number':
                return Token(TokenKind.NUMBER, text, start)
            elif group == 'symbol':
                kind = type(self).KEYWORDS.get(text, TokenKind.SYMBOL)
                return Token(kind, text, start)
            elif group == 'operator':
                return Token(type(self).OPERATORS[text], text, start)
            elif group == 'malformed':
                logger.debug('Malformed number %r at %d', text, start)
                return Token(TokenKind.ERROR, text, start,
                             MalformedNumberError(text, start))
            else:
                logger.debug('Unhandled character ignored: %r at %d',
                             text, start)
                return Token(TokenKind.ERROR, text, start,
                             InvalidCharacterError(text, start))
        return Token(TokenKind.END, '', len(cursor.line))

    def lex(self, line):
        '''
        Take a line and yield all its tokens, END token included.
        '''
        cursor = Cursor(line)
        while True:
            token = self.next_token(cursor)
            yield token
            if token.kind is TokenKind.END:
                return
