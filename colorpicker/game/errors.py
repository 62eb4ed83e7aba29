"""
Errors raised by the Color Picker game core.

Every error ends the request that caused it; nothing is retried.
"""
from typing import Optional


class GameError(Exception):
    """Base class for errors reported back to the player."""
    status_code = 400


class MalformedInput(GameError):
    """A request parameter could not be parsed."""


class MissingSessionId(GameError):
    """A session ID is required but none was given."""


class UnknownSession(GameError):
    """The session ID is not in the store."""
    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(f"unknown session: {session_id}")
        self.session_id = session_id


class InvalidRound(GameError):
    """A guess targets a round other than the session's current one."""
    status_code = 409

    def __init__(self, expected_round: int, actual_round: int,
                 requested_round: Optional[int] = None):
        if requested_round is None:
            message = (f"invalid round: request targets session round {expected_round}, "
                       f"session is at round {actual_round}")
        else:
            message = (f"invalid round {requested_round}: request targets session round "
                       f"{expected_round}, session is at round {actual_round}")
        super().__init__(message)
        self.expected_round = expected_round
        self.actual_round = actual_round
        self.requested_round = requested_round


class InconsistentRoundOnPoll(GameError):
    """A poll claims a round that is neither current nor the next one."""
    status_code = 409

    def __init__(self, claimed_round: int, actual_round: int):
        super().__init__(
            f"invalid round: polled {claimed_round}, session is at {actual_round}"
        )
        self.claimed_round = claimed_round
        self.actual_round = actual_round
