import operator


class InvalidArgument(ValueError):
    """
    Raised when a grid size or trial count is not a positive integer.
    """


class OutOfBounds(IndexError):
    """
    Raised when a (row, col) or forest index falls outside the grid.
    """


class DegenerateInput(ValueError):
    """
    Raised when a statistic needs more samples than were collected,
    e.g. the sample standard deviation of a single trial.
    """


def check_positive(name, value):
    """
    Returns 'value' as a plain int, or raises InvalidArgument if it is not
    a positive integer. numpy integers are accepted, bools are not.
    """
    if isinstance(value, bool) or not hasattr(value, "__index__"):
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    value = operator.index(value)
    if value <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value}")
    return value
