'''
Recording of user-defined commands.

( sq dup x ) defines sq: once the start marker has armed the recorder, the
next token names the command and every token up to the end marker is stored,
unevaluated, as its body.
'''

from enum import Enum
import logging

from .util import MalformedDefinition


logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = 'idle'
    # Armed, waiting for the name
    UNNAMED = 'unnamed'
    # Armed, appending to the body of name
    RECORDING = 'recording'


class Recorder:
    '''
    Two-state (idle, armed) capture of tokens into a command store.

    The store is passed to feed() rather than kept, so that whoever owns it
    may swap it out (e.g., to roll back a failed evaluation).
    '''

    def __init__(self, start_marker, end_marker):
        self.start_marker = start_marker
        self.end_marker = end_marker
        self.state = State.IDLE
        self.name = None

    @property
    def armed(self):
        return self.state is not State.IDLE

    def arm(self):
        '''
        Start recording; the next token fed is the command's name.
        '''
        logger.debug('recorder armed')
        self.state = State.UNNAMED
        self.name = None

    def feed(self, token, commands):
        '''
        Record token into commands, as the name or body of the definition.
        '''
        if token == self.start_marker:
            self.abandon(commands)
            raise MalformedDefinition('Nested definitions are not supported')
        if self.state is State.UNNAMED:
            if token == self.end_marker:
                self.abandon(commands)
                raise MalformedDefinition('Definition has no name')
            logger.debug('defining %r', token)
            self.name = token
            commands[token] = []
            self.state = State.RECORDING
        elif token == self.end_marker:
            logger.debug('defined %r as %r', self.name, commands[self.name])
            self.reset()
        else:
            commands[self.name].append(token)

    def reset(self):
        self.state = State.IDLE
        self.name = None

    def abandon(self, commands):
        '''
        Give up on the definition in progress, dropping its partial body.
        '''
        if self.name is not None:
            logger.debug('abandoning definition of %r', self.name)
            commands.pop(self.name, None)
        self.reset()

    def snapshot(self):
        return self.state, self.name

    def restore(self, snapshot):
        self.state, self.name = snapshot
