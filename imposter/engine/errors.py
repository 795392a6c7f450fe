"""Errors raised by the round engine."""


class InvalidAction(ValueError):
    """An action was invoked while its precondition does not hold.

    The presentation layer only offers actions that are currently legal, so
    this signals a caller bug. The engine raises it before mutating anything.
    """

    def __init__(self, action: str, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(f"{action}: {reason}")
