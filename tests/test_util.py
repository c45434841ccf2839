import math

from pytest import mark, raises

from shunt.errors import (
    CalcError,
    DivisionByZeroError,
    DomainError,
    UnexpectedTokenError,
)
from shunt.util import format_number, wrap_user_errors


@mark.parametrize('n, precision, expected', [
    (3.0, None, '3'),
    (-0.0, None, '0'),
    (2.5, None, '2.5'),
    (1e20, None, '100000000000000000000'),
    (2 / 3, 2, '0.67'),
    (2.9999, 2, '3'),
    (math.inf, None, 'inf'),
    (-math.inf, 3, '-inf'),
])
def test_format_number(n, precision, expected):
    assert format_number(n, precision) == expected


def test_format_nan():
    assert format_number(math.nan) == 'nan'


def test_wrap_user_errors():
    @wrap_user_errors(DomainError, 'Cannot sqrt {0}')
    def sqrt(n):
        return math.sqrt(n)

    assert sqrt(4.0) == 2.0
    with raises(DomainError, match='Cannot sqrt -1'):
        sqrt(-1.0)


def test_wrap_user_errors_passes_calc_errors():
    @wrap_user_errors(DomainError, 'unused')
    def fail():
        raise DivisionByZeroError('Division by zero')

    with raises(DivisionByZeroError):
        fail()


def test_str_with_position():
    error = CalcError('Bad', lexeme='x', position=4)
    assert str(error) == 'Bad (column 5)'
    assert str(CalcError('Bad')) == 'Bad'


def test_diagnostic():
    error = UnexpectedTokenError('Unexpected', lexeme='*', position=4)
    assert error.diagnostic('1 + * 2').splitlines() == [
        'UnexpectedTokenError: Unexpected',
        '  1 + * 2',
        '      ^',
    ]
    assert error.diagnostic() == 'UnexpectedTokenError: Unexpected'


def test_diagnostic_long_line():
    line = 'a + ' * 20 + '*'
    error = UnexpectedTokenError('Unexpected', lexeme='*', position=80)
    _, shown, caret = error.diagnostic(line).splitlines()
    assert shown.startswith('  ...')
    assert shown[caret.index('^')] == '*'


def test_locate_keeps_first():
    error = CalcError('Bad')
    assert error.locate('+', 3) is error
    error.locate('-', 9)
    assert (error.lexeme, error.position) == ('+', 3)
