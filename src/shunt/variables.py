from collections.abc import Mapping

from .errors import UndefinedVariableError


class VariableTable(Mapping):
    '''
    Variables bound by assignment, by case-sensitive name.

    Read-only as a Mapping; only assign() and update() write to it, and
    only the machine calls those, once an expression has fully succeeded.
    '''

    def __init__(self):
        self._values = dict()

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._values)

    def lookup(self, name):
        '''
        Return value of variable, never creating it.
        '''
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def assign(self, name, value):
        '''
        Bind or rebind variable.
        '''
        self._values[name] = float(value)

    def update(self, bindings):
        '''
        Bind all of name to value mapping bindings.
        '''
        for name, value in bindings.items():
            self.assign(name, value)
