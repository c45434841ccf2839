from functools import wraps
import math

from .errors import CalcError


def wrap_user_errors(error, fmt):
    '''
    Ugly hack decorator that converts math exceptions to calculator errors.

    Passes through CalcErrors. Formats fmt with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise error(fmt.format(*map(format_number, args),
                                       **kwargs)) from e
        return wrapper
    return decorator


def format_number(n, precision=None):
    '''
    Format number for output, dropping the fractional part of integers.

    Rounds to precision decimal places first, if given.
    '''
    if precision is not None:
        n = round(n, precision)
    if math.isfinite(n) and float(n).is_integer():
        return str(int(n))
    return repr(float(n))
