'''
Session (lexer, converter and machine together) tests
'''

import logging

from pytest import mark, raises

from shunt.config import Options
from shunt.converter import render
from shunt.errors import (
    CalcError,
    DivisionByZeroError,
    LexError,
    ParseError,
    UnbalancedParenthesesError,
    UndefinedVariableError,
    UnexpectedTokenError,
)
from shunt.session import Session


@mark.parametrize('n', ['0', '1', '7', '123456789', '0.5', '3.14159'])
def test_number_literal(session, n):
    assert session.submit(n).value == float(n)


def test_properties(session):
    result = session.submit('3 + 4 * 2')
    assert render(result.postfix) == '3 4 2 * +'
    assert result.value == 11.0
    assert session.submit('2 ^ 3 ^ 2').value == 512.0
    assert session.submit('10 - 2 - 3').value == 5.0
    assert session.submit('-3 + 5').value == 2.0


def test_state_persists(session):
    assert session.submit('x = 5').value == 5.0
    assert session.submit('x + 1').value == 6.0
    assert session.lookup('x') == 5.0


def test_example_from_help(session):
    for line in ['var1 = 12', 'var2 = 2', 'var3 = 7']:
        session.submit(line)
    assert session.submit('var4 = (var3 + var1) * var2').value == 38.0
    assert list(session.variables.items()) == [
        ('var1', 12.0),
        ('var2', 2.0),
        ('var3', 7.0),
        ('var4', 38.0),
    ]


def test_errors(session):
    session.submit('a = 1')
    with raises(DivisionByZeroError):
        session.submit('a = 5 / 0')
    with raises(UnbalancedParenthesesError):
        session.submit('(1 + 2')
    with raises(UndefinedVariableError):
        session.submit('y + 1')
    with raises(UnexpectedTokenError):
        session.submit('1 + * 2')
    with raises(ParseError):
        session.submit('1 + * 2')
    with raises(ParseError) as info:
        session.submit('a = 1 $ 2')
    assert isinstance(info.value.__cause__, LexError)
    with raises(ParseError):
        session.submit('1 $ 2')
    assert dict(session.variables) == {'a': 1.0}


def test_errors_are_calc_errors(session):
    for line in ['5 / 0', '(', '$', 'nope', '1.2.3', '']:
        with raises(CalcError):
            session.submit(line)


def test_idempotent(session):
    session.submit('r = 2')
    assert session.submit('r ^ 10 - r').value == \
        session.submit('r ^ 10 - r').value == 1022.0


def test_lookup_undefined(session):
    with raises(UndefinedVariableError):
        session.lookup('ghost')


def test_no_solve(variables):
    session = Session(Options(solve=False), variables)
    result = session.submit('x = 1 + 2')
    assert result.value is None
    assert render(result.postfix) == 'x 1 2 + ='
    assert not variables


def test_options_are_live(session, options):
    options.toggle('solve')
    assert session.submit('1 + 1').value is None
    options.toggle('solve')
    assert session.submit('1 + 1').value == 2.0


def test_shared_variables(variables):
    Session(variables=variables).submit('shared = 4')
    assert Session(variables=variables).submit('shared / 2').value == 2.0


def test_verbose_trace(caplog, variables):
    session = Session(Options(verbose=True), variables)
    with caplog.at_level(logging.INFO, logger='shunt'):
        session.submit('v = 1 + 2')
    messages = [record.getMessage() for record in caplog.records]
    assert "SYMBOL\t'v'" in messages
    assert "EQUAL\t'='" in messages
    assert 'v = 3.0' in messages


def test_quiet_by_default(caplog, session):
    with caplog.at_level(logging.INFO, logger='shunt'):
        session.submit('q = 1')
    assert not caplog.records
