'''
RPN calculator engine.

A stack machine over string tokens: numbers, the usual arithmetic,
trigonometric and unit-conversion operators, stack shuffling, and commands
you define yourself from within the token stream:

    ( sq dup x ) 3 sq        ->  9
    ( _ 2 x ) 1 2 3 map      ->  2 4 6
    5 rate store rate        ->  5

Numbers stay tokens on the stack; operators parse what they pop, and push
their results back as text.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .util import RPNError


__all__ = 'Machine', 'Lexer', 'CLI', 'RPNError'
