'''
The fixed catalogue of pure builtins: name to stack -> stack transformer.

The commands that need the machine itself (defining functions, storing,
mapping) are on Machine, not here.
'''

from types import MappingProxyType
import math
import operator

from .stack import (format_number, pop_token, pop_number, pop_numbers,
                    pop_count, take, drop, take_last, drop_last, parse_number)
from .util import DomainError, NotANumber, wrap_user_errors


# Most tokens io and to may push at once
MAX_RANGE = 1_000_000


def _named(wrapped, f):
    '''
    Carry over f's name and doc, for whatever has them (not all builtins do).
    '''
    try:
        wrapped.__doc__ = f.__doc__
        wrapped.__name__ = f.__name__
    except AttributeError:
        pass
    return wrapped


def _nullary(value):
    '''
    Push a constant.
    '''
    token = format_number(value)

    def push(stack):
        return [*stack, token]
    return push


def _unary(f):
    '''
    Pop one number, push f(a).
    '''
    f = wrap_user_errors('Cannot apply to {0}')(f)

    def wrapped(stack):
        rest, a = pop_number(stack)
        return [*rest, format_number(f(a))]
    return _named(wrapped, f)


def _binary(f):
    '''
    Pop two numbers, push f(a, b), a being the one pushed first.

    If you don't keep that order, 6 2 - is -4.
    '''
    f = wrap_user_errors('Cannot apply to {0} and {1}')(f)

    def wrapped(stack):
        rest, a, b = pop_numbers(stack, 2)
        return [*rest, format_number(f(a, b))]
    return _named(wrapped, f)


def _ternary(f):
    '''
    Pop three numbers, push every number in f(a, b, c).
    '''
    f = wrap_user_errors('Cannot apply to {0}, {1} and {2}')(f)

    def wrapped(stack):
        rest, a, b, c = pop_numbers(stack, 3)
        return [*rest, *map(format_number, f(a, b, c))]
    return _named(wrapped, f)


def _js_round(a):
    # Halves go up, -2.5 included; not Python's round-half-even.
    return math.floor(a + 0.5)


def _sign(a):
    if math.isnan(a):
        return a
    return (a > 0) - (a < 0)


def _inverse(a):
    return 1 / a


def _factorial(a):
    if not a.is_integer():
        raise ValueError(a)
    # 171! no longer fits in a float
    if a > 170:
        return math.inf
    return math.factorial(int(a))


def _nroot(a, b):
    return math.pow(a, 1 / b)


def _gcd(a, b):
    # Euclid on floats, so non-integers don't need rejecting.
    while b:
        a, b = b, math.fmod(a, b)
    return abs(a)


def _min(a, b):
    # NaN wins whichever side it is on, unlike min()
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return min(a, b)


def _max(a, b):
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


def _logn(a, b):
    return math.log(a) / math.log(b)


def _to_radix(base):
    '''
    Pop an integer, push its digits in base.
    '''
    spec = {2: 'b', 8: 'o', 16: 'x'}[base]

    @wrap_user_errors('Cannot convert {0}')
    def convert(a):
        if not a.is_integer():
            raise ValueError(a)
        return format(int(a), spec)

    def wrapped(stack):
        rest, a = pop_number(stack)
        return [*rest, convert(a)]
    return wrapped


def _from_radix(base):
    '''
    Pop digits in base (as dec_hex and friends push them), push the integer.
    '''
    def wrapped(stack):
        rest, token = pop_token(stack)
        try:
            return [*rest, str(int(token, base))]
        except ValueError:
            raise NotANumber('Not a base {} number: {!r}'.format(base,
                                                                 token)) \
                from None
    return wrapped


def clear(stack):
    return []


def drop_top(stack):
    return drop_last(stack, 1)


def dropn(stack):
    rest, n = pop_count(stack)
    return drop_last(rest, n)


def dup(stack):
    return [*stack, *take_last(stack, 1)]


def roll(stack):
    '''
    Move the top of the stack to the bottom.
    '''
    return [*take_last(stack, 1), *drop_last(stack, 1)]


def rolln(stack):
    '''
    Move the top n tokens to the bottom, keeping their order.
    '''
    rest, n = pop_count(stack)
    return [*take_last(rest, n), *drop_last(rest, n)]


def rot(stack):
    '''
    Move the bottom of the stack to the top.
    '''
    return [*drop(stack, 1), *take(stack, 1)]


def rotn(stack):
    '''
    Move the bottom n tokens to the top, keeping their order.
    '''
    rest, n = pop_count(stack)
    return [*drop(rest, n), *take(rest, n)]


def swap(stack):
    top = take_last(stack, 2)
    return [*drop_last(stack, 2), top[1], top[0]]


def total(stack):
    '''
    Replace the whole stack by its sum.
    '''
    return [format_number(sum(map(parse_number, stack), 0.0))]


def product(stack):
    '''
    Replace the whole stack by its product.
    '''
    return [format_number(math.prod(map(parse_number, stack)))]


def iota(stack):
    '''
    n io pushes 1 to n.
    '''
    rest, n = pop_count(stack)
    if n > MAX_RANGE:
        raise DomainError('More than {} tokens'.format(MAX_RANGE))
    return [*rest, *map(str, range(1, n + 1))]


def _span(start, end, step):
    '''
    from to step to: push from, from ± step, ... up to and including to.

    Goes up when to > from, down otherwise, whatever step's sign.
    '''
    step = abs(step)
    if not step or not math.isfinite(start) or not math.isfinite(end):
        raise ValueError(step)
    if abs(end - start) / step + 1 > MAX_RANGE:
        raise ValueError(step)
    if start == end:
        return [start]
    numbers = []
    n = start
    if end > start:
        while n <= end:
            numbers.append(n)
            if n + step == n:
                raise ValueError(step)
            n += step
    else:
        while n >= end:
            numbers.append(n)
            if n - step == n:
                raise ValueError(step)
            n -= step
    return numbers


span = _ternary(_span)


BUILTINS = MappingProxyType({
    # Constants
    'pi': _nullary(math.pi),
    'e': _nullary(math.e),

    # Arithmetic
    'abs': _unary(abs),
    'chs': _unary(operator.__neg__),
    'floor': _unary(math.floor),
    'ceil': _unary(math.ceil),
    'inv': _unary(_inverse),
    'ln': _unary(math.log),
    'log': _unary(math.log10),
    'log2': _unary(math.log2),
    'log10': _unary(math.log10),
    'round': _unary(_js_round),
    'sgn': _unary(_sign),
    'sqrt': _unary(math.sqrt),
    '!': _unary(_factorial),

    '+': _binary(operator.__add__),
    '-': _binary(operator.__sub__),
    'x': _binary(operator.__mul__),
    '/': _binary(operator.__truediv__),
    '%': _binary(math.fmod),
    '^': _binary(math.pow),
    'min': _binary(_min),
    'max': _binary(_max),
    'nroot': _binary(_nroot),
    'gcd': _binary(_gcd),
    'logn': _binary(_logn),

    # Trigonometry
    'deg_rad': _unary(math.radians),
    'rad_deg': _unary(math.degrees),
    'sin': _unary(math.sin),
    'cos': _unary(math.cos),
    'tan': _unary(math.tan),
    'asin': _unary(math.asin),
    'acos': _unary(math.acos),
    'atan': _unary(math.atan),

    # Units
    'c_f': _unary(lambda a: a * 9 / 5 + 32),
    'f_c': _unary(lambda a: (a - 32) * 5 / 9),
    'mi_km': _unary(lambda a: a * 1.60934),
    'km_mi': _unary(lambda a: a / 1.60934),
    'm_ft': _unary(lambda a: a * 3.28084),
    'ft_m': _unary(lambda a: a / 3.28084),

    # Radix
    'dec_hex': _to_radix(16),
    'dec_bin': _to_radix(2),
    'dec_oct': _to_radix(8),
    'hex_dec': _from_radix(16),
    'bin_dec': _from_radix(2),
    'oct_dec': _from_radix(8),

    # Stack
    'cls': clear,
    'drop': drop_top,
    'dropn': dropn,
    'dup': dup,
    'roll': roll,
    'rolln': rolln,
    'rot': rot,
    'rotn': rotn,
    'swap': swap,
    'sum': total,
    'prod': product,
    'io': iota,
    'to': span,
})
