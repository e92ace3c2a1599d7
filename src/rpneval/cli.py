from os import isatty
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter

from .builtins import BUILTINS
from .util import RPNError
from .machine import Machine
from .lexer import Lexer


class InteractiveInput:
    def __init__(self, prompt, machine):
        self.prompt = prompt
        self.machine = machine

    def _words(self):
        '''
        Everything worth completing: builtins, then user commands.
        '''
        return sorted([*BUILTINS, *Machine.FUNCTIONS]) + \
            sorted(self.machine.user_command_names())

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Recomputed on each keystroke, so new
                                    # definitions complete right away.
                                    completer=WordCompleter(self._words,
                                                            WORD=True),
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump every token with its lexeme group and what it resolves to.
        '''
        machine = self.machine
        lexer = Lexer()
        print('[group]\t<repr(token)>\t<kind>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                token = match.group(0)
                groups = lexer.matchedgroups(match)
                print(*groups.keys(),
                      repr(token),
                      type(machine.lookup(token)).__name__,
                      sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator), printing the stack after each line.
        '''
        machine = self.machine
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                self.stack = machine.evaluate(lexer.tokens(line), self.stack)
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                print(e, file=sys.stderr)
                continue
            self.printstack()

    def printstack(self):
        '''
        Print the stack on one line, bottom first.
        '''
        print(*self.stack)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    machine=self.machine)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='trace evaluation, and show '
                                               'stack traces on errors')
        self.argument_parser.add_argument('-d', '--max-depth',
                                          type=int,
                                          default=Machine.DEFAULT_MAX_DEPTH,
                                          help='how deep user commands may '
                                               'nest')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)
        self.stack = []

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        self.machine = Machine(max_depth=self.args.max_depth,
                               verbose=self.args.verbose)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
