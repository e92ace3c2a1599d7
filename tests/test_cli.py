'''
Command line interface tests
'''

from rpneval.cli import CLI
from rpneval.lexer import Lexer


def test_expression(capsys):
    CLI().run(args=['-e', '1 2 +'])
    assert capsys.readouterr().out == '3\n'


def test_stack_carries_across_lines(capsys):
    CLI().run(args=['-e', '( sq dup x )', '3 sq', '4'])
    assert capsys.readouterr().out.splitlines() == ['', '9', '9 4']


def test_bad_line_keeps_stack(capsys):
    CLI().run(args=['-e', '1', '+', '2 +'])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['1', '3']
    assert 'Less than 2' in captured.err


def test_max_depth(capsys):
    CLI().run(args=['-d', '3', '-e', '( f f ) f'])
    assert 'deeper than 3' in capsys.readouterr().err


def test_max_depth_past_python_limit(capsys):
    CLI().run(args=['-d', '1000000', '-e', '( f f ) f', '1'])
    captured = capsys.readouterr()
    assert 'too deep' in captured.err
    assert captured.out == '1\n'


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '1 sqrt (f'])
    lines = capsys.readouterr().out.splitlines()
    assert lines[1:] == ["number\t'1'\tLiteral",
                         "word\t'sqrt'\tBuiltin",
                         "marker\t'('\tBuiltin",
                         "word\t'f'\tLiteral"]


def test_raw_grammar(capsys):
    CLI().run(args=['-G', '-e'])
    assert capsys.readouterr().out == Lexer.LEXEME + '\n'
