"""Errors raised by the scheduling domain."""


class SchedulingError(Exception):
    """Base class for scheduler failures."""


class UnknownCardStateError(SchedulingError):
    """
    Raised when a card carries a state tag outside the four known states.

    This means the persisted card is corrupt; the scheduler refuses to guess
    a transition for it.
    """

    def __init__(self, state: object):
        self.state = state
        super().__init__(f"Unknown card state: {state!r}")


class UnknownRatingError(SchedulingError, ValueError):
    """Raised when a rating is not one of again/hard/good/easy."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"Unknown rating: {rating!r}")
