from functools import reduce
import operator

import regex

from .machine import Machine


class Lexer:
    '''
    Lexer for the RPN *regular* grammar: numbers, markers and words, separated
    by whitespace.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d+
                    (?:
                        # Python's float() takes digit separators too
                        _\d+
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = INTEGRAL
    # Exponent, as in 1e3, 2.5E-4
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    {INTEGRAL}
                )
                '''.format(INTEGRAL=INTEGRAL)
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              [+-]?
              (?:
                  (?:
                      # 1, 12, 1_200, 1. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2
                      \.
                      {FRACTIONAL}
                  )
              )
              {EXPONENT}?
              # Not the start of a word, like 2x or 1st
              (?=[\s()]|$)
              '''.format(INTEGRAL=INTEGRAL,
                         FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)
    # Definition delimiters, lexemes of their own even when glued on: (sq dup x)
    MARKER = r'(?:' + r'|'.join(map(regex.escape,
                                    [Machine.START_MARKER,
                                     Machine.END_MARKER])) + r')'
    # Anything else: operators, command names, symbols
    WORD = r'[^\s()]+'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<marker>' + MARKER + r')|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes. Not POSIX: every number is
    # also a word of the same length, and the first alternative must win.
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes, whitespace included.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            yield match
            line = line[len(match.group(0)):]

    def tokens(self, line):
        '''
        Take a line and return the tokens to feed to a Machine.
        '''
        return [match.group(0)
                for match
                in self.lex(line)
                if self.isfeedable(match)]

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the lexeme's matched groups, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
