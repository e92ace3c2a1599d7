'''
Stack primitives shared by the builtins.

A stack is a plain list of string tokens, top of the stack last. Nothing here
mutates the list it is given: every operation hands back a new one, along with
whatever it took off the top.
'''

import math

from .util import StackUnderflow, NotANumber, DomainError


# Beyond this, floats stop being exact integers and repr() reads better.
_EXACT = 1e16


def format_number(number):
    '''
    Render a computed number back into a token.

    Integral floats lose their fractional part (6.0 is 6), so results read
    the way they would have been typed.
    '''
    if isinstance(number, bool):
        number = int(number)
    if isinstance(number, int):
        return str(number)
    if math.isfinite(number) and number.is_integer() and abs(number) < _EXACT:
        return str(int(number))
    return repr(number)


def _require(stack, n):
    if n > len(stack):
        raise StackUnderflow('Less than {} element(s) on stack'.format(n))


def take(stack, n):
    '''
    Bottom n tokens.
    '''
    _require(stack, n)
    return stack[:n]


def drop(stack, n):
    '''
    Everything but the bottom n tokens.
    '''
    _require(stack, n)
    return stack[n:]


def take_last(stack, n):
    '''
    Top n tokens, in stack order.
    '''
    _require(stack, n)
    return stack[len(stack) - n:]


def drop_last(stack, n):
    '''
    Everything but the top n tokens.
    '''
    _require(stack, n)
    return stack[:len(stack) - n]


def pop_token(stack):
    '''
    Pop the top token as is. Returns (rest, token).
    '''
    _require(stack, 1)
    return stack[:-1], stack[-1]


def parse_number(token):
    try:
        return float(token)
    except ValueError:
        raise NotANumber('Not a number: {!r}'.format(token)) from None


def pop_number(stack):
    '''
    Pop the top token as a float. Returns (rest, number).
    '''
    rest, token = pop_token(stack)
    return rest, parse_number(token)


def pop_numbers(stack, k):
    '''
    Pop k numbers. Returns (rest, n1, ..., nk), leftmost pushed first.

    So 6 2 gives (rest, 6.0, 2.0).
    '''
    _require(stack, k)
    rest = drop_last(stack, k)
    return (rest, *map(parse_number, take_last(stack, k)))


def pop_count(stack):
    '''
    Pop a non-negative integer, as used by dropn, rolln, io, ...
    '''
    rest, number = pop_number(stack)
    if not number.is_integer() or number < 0:
        raise DomainError('Not a count: {}'.format(format_number(number)))
    return rest, int(number)
