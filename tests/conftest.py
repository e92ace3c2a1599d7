from pytest import fixture

from rpneval.machine import Machine


@fixture
def machine():
    '''
    Fresh machine, no user commands.
    '''
    return Machine()


@fixture
def run(machine):
    '''
    Evaluate a space-separated line on the machine fixture.

    Spares every test a lexer; tokens here never contain spaces anyway.
    '''
    def run(line, stack=()):
        return machine.evaluate(line.split(), stack)
    return run
