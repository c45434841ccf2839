'''
Errors raised on bad user input.

Everything here is recoverable: the CLI prints the diagnostic and reads
the next line. Nothing in the calculator raises these for internal bugs.
'''


class CalcError(Exception):
    '''
    Base class of every user input error.

    :param message: Human readable description.
    :param lexeme: Offending text, if known.
    :param position: Column of the offending text in the input line.
    '''

    def __init__(self, message, lexeme=None, position=None):
        super().__init__(message)
        self.message = message
        self.lexeme = lexeme
        self.position = position

    def __str__(self):
        if self.position is None:
            return self.message
        return '{} (column {})'.format(self.message, self.position + 1)

    def locate(self, lexeme, position):
        '''
        Fill in where the error happened, unless already known.
        '''
        if self.position is None:
            self.lexeme = lexeme
            self.position = position
        return self

    def diagnostic(self, line=None):
        '''
        Render error, with the line and a caret under the offending column.
        '''
        name = type(self).__name__
        if line is None or self.position is None:
            return '{}: {}'.format(name, self.message)
        # Keep long lines to a window around the error.
        start = max(0, self.position - 30)
        end = min(len(line), self.position + 30)
        prefix = '...' if start > 0 else ''
        suffix = '...' if end < len(line) else ''
        caret = ' ' * (len(prefix) + self.position - start) + '^'
        return '\n'.join(['{}: {}'.format(name, self.message),
                          '  ' + prefix + line[start:end] + suffix,
                          '  ' + caret])


class LexError(CalcError):
    pass


class InvalidCharacterError(LexError):
    def __init__(self, char, position=None):
        super().__init__('Unhandled character {!r}'.format(char),
                         lexeme=char,
                         position=position)


class MalformedNumberError(LexError):
    def __init__(self, text, position=None):
        super().__init__('Invalid floating point number {!r}'.format(text),
                         lexeme=text,
                         position=position)


class ParseError(CalcError):
    pass


class UnbalancedParenthesesError(ParseError):
    pass


class UnexpectedTokenError(ParseError):
    pass


class EvalError(CalcError):
    pass


class UndefinedVariableError(EvalError):
    def __init__(self, name, position=None):
        super().__init__('Undefined variable {!r}'.format(name),
                         lexeme=name,
                         position=position)
        self.name = name


class DivisionByZeroError(EvalError):
    pass


class InvalidAssignmentTargetError(EvalError):
    pass


class MalformedExpressionError(EvalError):
    pass


class DomainError(EvalError):
    '''
    Result outside of what a float can represent (e.g. (-8) ^ 0.5).
    '''
