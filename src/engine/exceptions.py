"""
Audience Dice - Roll Rejection Errors

All errors a participant can cause by submitting a roll. They are
recoverable by the user and are reported back to the offending
connection only; none of them indicate a server fault.
"""


class RollRejected(Exception):
    """Base class for every rejected roll submission."""

    message = "Roll rejected."
    reason: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NoSession(RollRejected):
    """The connection has not registered a session."""

    message = "No session ID registered. Please register session first."


class RoundInactive(RollRejected):
    """Rolls are only accepted while a round is active."""

    message = "Round is not active."
    notice = "Round is not active. Wait for host to start the round."
    reason = "round-inactive"


class AlreadyRolled(RollRejected):
    """The session already has a roll recorded this round."""

    message = "You already rolled this round."
    notice = "You already rolled this round!"
    reason = "already-rolled"


class InvalidValue(RollRejected, ValueError):
    """The submitted result is not a finite number."""

    message = "Invalid roll value"
