from functools import wraps


class CalcError(Exception):
    '''
    Bad user input or misuse of the machine.

    Evaluation problems are never raised; they come back as Error values.
    '''


def wrap_user_errors(fmt):
    '''
    Decorator that converts stray exceptions into CalcErrors.

    Passes through CalcErrors. fmt is formatted with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
