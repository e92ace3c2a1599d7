from functools import wraps


class RPNError(Exception):
    '''
    Base of every error the machine raises on bad user input.

    The evaluating frame that first sees the error records the offending
    token and the stack size at the time, so it can be reported.
    '''
    token = None
    depth = None

    def __str__(self):
        message = super().__str__()
        if self.token is None:
            return message
        return '{} (at {!r}, stack depth {})'.format(message,
                                                     self.token,
                                                     self.depth)


class StackUnderflow(RPNError):
    pass


class NotANumber(RPNError):
    pass


class DomainError(RPNError):
    '''
    Arithmetic that Python's math refuses: 1 0 /, -1 sqrt, 2.5 io, ...
    '''


class UnknownAnonymousFunction(RPNError):
    pass


class MalformedDefinition(RPNError):
    pass


class RecursionLimitExceeded(RPNError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts Python's arithmetic exceptions to DomainErrors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise DomainError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
