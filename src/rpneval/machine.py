from functools import partial
from typing import Callable, NamedTuple, Tuple
import logging

from .builtins import BUILTINS
from .recorder import Recorder
from .stack import pop_token
from .util import RPNError, MalformedDefinition, RecursionLimitExceeded, \
    UnknownAnonymousFunction


logger = logging.getLogger(__name__)


class Builtin(NamedTuple):
    name: str
    function: Callable


class UserDefined(NamedTuple):
    name: str
    body: Tuple[str, ...]


class Literal(NamedTuple):
    token: str


class Machine:
    '''
    Stack machine (RPN calculator engine).

    Takes already split tokens and folds them over a stack of tokens. Each
    token is, in order of precedence, a builtin, a user-defined command, or a
    literal pushed as is. Numbers stay tokens until an operator needs them.

    User commands are recorded from the token stream itself, between the
    start and end markers, and persist for the life of the machine.
    '''

    START_MARKER = '('
    END_MARKER = ')'
    # Name of the anonymous function, as used by map
    LAMBDA = '_'
    DEFAULT_MAX_DEPTH = 100

    def __init__(self, max_depth=None, verbose=None):
        '''
        Create a machine with no user commands.

        :param max_depth: How deep user commands may nest (recursion guard).
        :param verbose: Log a debug trace of evaluation.
        '''
        self.commands = dict()
        self.recorder = Recorder(type(self).START_MARKER,
                                 type(self).END_MARKER)
        if max_depth is None:
            max_depth = type(self).DEFAULT_MAX_DEPTH
        self.max_depth = max_depth
        self.verbose = verbose

    @classmethod
    def isreserved(cls, name):
        '''
        Return true if name is internal, not a user command to list.
        '''
        return name == cls.LAMBDA

    def user_command_names(self):
        '''
        Return names of all user-defined commands, in no particular order.
        '''
        return [name
                for name
                in self.commands
                if not type(self).isreserved(name)]

    def lookup(self, token, depth=0):
        '''
        Resolve token to a Builtin, a UserDefined or a Literal.

        :param depth: Nesting depth machine functions (e.g., map) run at.
        '''
        f = type(self).FUNCTIONS.get(token)
        if f is not None:
            return Builtin(token, partial(f, self, depth=depth))
        f = BUILTINS.get(token)
        if f is not None:
            return Builtin(token, f)
        body = self.commands.get(token)
        if body is not None:
            return UserDefined(token, tuple(body))
        return Literal(token)

    def evaluate(self, ops, stack=()):
        '''
        Run tokens against stack, returning the new stack.

        All or nothing: on error, user commands and recording are as they were
        before the call, and the caller's stack is left alone.
        '''
        commands = {name: list(body) for name, body in self.commands.items()}
        recording = self.recorder.snapshot()
        try:
            return self._evaluate(ops, list(stack), 0)
        except RecursionError as e:
            # max_depth set past what the interpreter itself allows
            self.commands = commands
            self.recorder.restore(recording)
            if self.verbose:
                logger.exception('evaluation failed')
            raise RecursionLimitExceeded(
                'User commands nested too deep for Python') from e
        except RPNError as e:
            self.commands = commands
            self.recorder.restore(recording)
            if isinstance(e, MalformedDefinition):
                self.recorder.abandon(self.commands)
            if self.verbose:
                logger.exception('evaluation failed')
            raise

    def _evaluate(self, ops, stack, depth):
        '''
        Left fold of ops over stack. Does the real work.
        '''
        for op in ops:
            try:
                stack = self._step(op, stack, depth)
            except RPNError as e:
                # Innermost frame wins; outer frames pass it along untouched.
                if e.token is None:
                    e.token = op
                    e.depth = len(stack)
                raise
        return stack

    def _step(self, op, stack, depth):
        if self.recorder.armed:
            self.recorder.feed(op, self.commands)
            return stack
        command = self.lookup(op, depth)
        if isinstance(command, Builtin):
            logger.debug('%s %r', command.name, stack)
            return command.function(stack)
        elif isinstance(command, UserDefined):
            logger.debug('expanding %s to %r', command.name, command.body)
            return self._expand(command.body, stack, depth)
        else:
            return [*stack, command.token]

    def _expand(self, body, stack, depth):
        '''
        Evaluate body one level deeper, guarding against runaway recursion.
        '''
        if depth >= self.max_depth:
            raise RecursionLimitExceeded(
                'User commands nested deeper than {}'.format(self.max_depth))
        return self._evaluate(body, stack, depth + 1)

    def define(self, stack, depth):
        '''
        Start recording a user command: ( name body... ).
        '''
        self.recorder.arm()
        return stack

    def storecommand(self, stack, depth):
        '''
        value name store: make name push value.
        '''
        rest, name = pop_token(stack)
        rest, value = pop_token(rest)
        logger.debug('storing %r as %r', value, name)
        self.commands[name] = [value]
        return rest

    def mapstack(self, stack, depth):
        '''
        Replace each token by the result of running the anonymous function on
        it alone.
        '''
        body = self.commands.get(type(self).LAMBDA)
        if body is None:
            raise UnknownAnonymousFunction(
                'No anonymous function ( {} ... ) to map'.format(
                    type(self).LAMBDA))
        body = tuple(body)
        return [token
                for element in stack
                for token in self._expand(body, [element], depth)]

    # Builtins that need the machine. Bound to it, and to the current depth,
    # on lookup.
    FUNCTIONS = {
        START_MARKER: define,
        'store': storecommand,
        'map': mapstack,
    }
