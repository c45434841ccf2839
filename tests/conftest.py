from pytest import Item, fixture

from shunt.config import Options
from shunt.session import Session
from shunt.variables import VariableTable


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP and enable_assertion_pass_hook = true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def variables():
    return VariableTable()


@fixture
def options():
    return Options()


@fixture
def session(options, variables):
    return Session(options, variables)
