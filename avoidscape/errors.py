"""Exception types raised by obstacle queries and their collaborators."""


class AvoidscapeError(Exception):
    """Base class for all avoidscape errors."""


class DimensionMismatchError(AvoidscapeError, ValueError):
    """
    State dimensions disagree.

    Raised when an obstacle offset, its palette, its collision set or a
    queried state vector do not share the same length. This is a
    configuration error and is never recovered from internally.
    """

    def __init__(self, expected: int, actual: int, what: str = "state"):
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(f"Expected {what} of dimension {expected}, got {actual}")


class UnknownSetError(AvoidscapeError, LookupError):
    """A palette was asked for a value function it does not hold."""

    def __init__(self, set_id, available=()):
        self.set_id = set_id
        self.available = tuple(available)
        super().__init__(
            f"Unknown avoid set {set_id!r} (available: {list(self.available)})"
        )


class InvalidValueError(AvoidscapeError, ValueError):
    """A palette returned NaN, which cannot be ordered against other values."""

    def __init__(self, index: int, set_id):
        self.index = index
        self.set_id = set_id
        super().__init__(f"Obstacle {index} returned NaN for avoid set {set_id!r}")
