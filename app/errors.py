# app/errors.py


class TypingGameError(Exception):
    """Base class for errors raised by the typing core."""


class InvalidConfig(TypingGameError, ValueError):
    """Session or settings values that cannot start a round."""


class DivisionGuard(TypingGameError, ValueError):
    """Speed requested for a non-positive elapsed time."""

    def __init__(self, minutes: float):
        self.minutes = minutes
        super().__init__(f"elapsed time must be positive, got {minutes!r} min")
