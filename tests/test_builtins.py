'''
Builtin operator tests, run through a machine
'''

import math

from rpneval.builtins import BUILTINS
from rpneval.util import StackUnderflow, NotANumber, DomainError

from pytest import approx, raises, mark


@mark.parametrize('line,expected', [
    ('6 2 -', ['4']),
    ('6 2 /', ['3']),
    ('7 2 /', ['3.5']),
    ('2 3 +', ['5']),
    ('2 3 x', ['6']),
    ('7 2 %', ['1']),
    ('-7 2 %', ['-1']),
    ('2 10 ^', ['1024']),
    ('3 5 min', ['3']),
    ('3 5 max', ['5']),
    ('12 18 gcd', ['6']),
    ('-3 abs', ['3']),
    ('3 chs', ['-3']),
    ('2.7 floor', ['2']),
    ('2.1 ceil', ['3']),
    ('4 inv', ['0.25']),
    ('100 log', ['2']),
    ('1000 log10', ['3']),
    ('8 log2', ['3']),
    ('1 ln', ['0']),
    ('2.5 round', ['3']),
    ('-2.5 round', ['-2']),
    ('2.4 round', ['2']),
    ('-3 sgn', ['-1']),
    ('0 sgn', ['0']),
    ('9 sqrt', ['3']),
    ('5 !', ['120']),
    ('0 !', ['1']),
    ('100 c_f', ['212']),
    ('212 f_c', ['100']),
    ('0 sin', ['0']),
    ('0 cos', ['1']),
    ('255 dec_hex', ['ff']),
    ('5 dec_bin', ['101']),
    ('8 dec_oct', ['10']),
    ('ff hex_dec', ['255']),
    ('101 bin_dec', ['5']),
    ('17 oct_dec', ['15']),
])
def test_arithmetic(run, line, expected):
    assert run(line) == expected


def test_operands_below_are_kept(run):
    assert run('1 6 2 -') == ['1', '4']


@mark.parametrize('line,expected', [
    ('pi', math.pi),
    ('e', math.e),
    ('180 deg_rad', math.pi),
    ('pi rad_deg', 180),
    ('2 sqrt', math.sqrt(2)),
    ('27 3 nroot', 3),
    ('8 2 logn', 3),
    ('1 mi_km', 1.60934),
    ('1.60934 km_mi', 1),
    ('1 m_ft', 3.28084),
    ('3.28084 ft_m', 1),
    ('1 atan', math.pi / 4),
])
def test_inexact(run, line, expected):
    result, = run(line)
    assert float(result) == approx(expected)


@mark.parametrize('line,expected', [
    ('1 2 3 cls', []),
    ('1 2 3 drop', ['1', '2']),
    ('1 2 3 2 dropn', ['1']),
    ('1 2 3 0 dropn', ['1', '2', '3']),
    ('1 2 dup', ['1', '2', '2']),
    ('1 2 3 roll', ['3', '1', '2']),
    ('1 2 3 rot', ['2', '3', '1']),
    ('1 2 3 4 2 rolln', ['3', '4', '1', '2']),
    ('1 2 3 4 1 rotn', ['2', '3', '4', '1']),
    ('1 2 swap', ['2', '1']),
    ('1 2 3 sum', ['6']),
    ('1 2 3 4 prod', ['24']),
    ('sum', ['0']),
    ('prod', ['1']),
    ('4 io', ['1', '2', '3', '4']),
    ('7 0 io', ['7']),
    ('1 2 0.5 to', ['1', '1.5', '2']),
    ('5 1 2 to', ['5', '3', '1']),
    ('1 10 -3 to', ['1', '4', '7', '10']),
    ('1 1 1 to', ['1']),
    ('1e17 1e17 1 to', ['1e+17']),
])
def test_stack_operators(run, line, expected):
    assert run(line) == expected


@mark.parametrize('line', [
    '+', '1 -', 'sqrt', 'drop', 'dup', 'swap', '1 swap', 'roll', 'rot',
    '1 2 3 dropn', '1 2 rolln', '1 2 rotn', '1 2 to', 'hex_dec',
])
def test_underflow(run, line):
    with raises(StackUnderflow):
        run(line)


@mark.parametrize('line', [
    'a 1 +', '1 a +', 'a sqrt', '1 a sum', 'zz hex_dec', '2 bin_dec',
])
def test_not_a_number(run, line):
    with raises(NotANumber):
        run(line)


@mark.parametrize('line', [
    '1 0 /', '1 0 %', '-1 sqrt', '0 ln', '0 inv', '2.5 !', '-1 !',
    '1.5 dec_hex', '1 2 0 to', '1 inf 1 to', '2 acos', '-1 io', '1 2.5 dropn',
    '1e12 io', '1e20 2e20 1 to', '1 2 1e-300 to',
    # 1 is below the spacing of floats this large
    '1e17 100000000000000016 1 to',
])
def test_domain_errors(run, line):
    with raises(DomainError):
        run(line)


def test_nan_is_a_number(run):
    assert run('nan 1 +') == ['nan']


@mark.parametrize('line', ['nan 1 min', '1 nan min', 'nan 1 max', '1 nan max'])
def test_nan_wins_min_max(run, line):
    assert run(line) == ['nan']


def test_registry_is_read_only():
    with raises(TypeError):
        BUILTINS['+'] = None
