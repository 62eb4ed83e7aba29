"""
Game manager for the web interface.

Turns raw request values into coordinator calls and packages the outcome
for the views. A guess for session round r is submitted with URL round
r + 1; a display request at URL round R shows session round R.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from colorpicker.game.coordinator import GuessStatus, PollStatus, SessionCoordinator
from colorpicker.game.errors import InvalidRound, MalformedInput, MissingSessionId
from colorpicker.game.sequencer import color_for
from colorpicker.utils.constants import FIRST_ROUND, NO_PENDING_COLOR

logger = logging.getLogger(__name__)


@dataclass
class GuessResult:
    """Outcome of a request to the game page."""
    status: GuessStatus
    session_id: str
    round: int
    next_round: Optional[int] = None
    display_color: Optional[str] = None
    share_link: str = ""


@dataclass
class PollResult:
    """Outcome of a request to the wait page."""
    status: PollStatus
    session_id: str
    round: int


def parse_round(value: Optional[str]) -> int:
    """
    Parse the round request parameter.

    Args:
        value: Raw parameter value; missing or empty means the first round

    Returns:
        Round number

    Raises:
        MalformedInput: If the value is not an integer
    """
    if value is None or value == "":
        return FIRST_ROUND
    try:
        return int(value)
    except ValueError:
        raise MalformedInput(f"invalid round: {value!r}") from None


class GameManager:
    """
    Serves game and wait page requests.

    Holds the SessionCoordinator shared by every request.
    """

    def __init__(self, coordinator: Optional[SessionCoordinator] = None):
        self.coordinator = coordinator or SessionCoordinator()

    def _resolve_session_id(self, session_id: Optional[str], round_number: int):
        """Get the session ID for a request, creating a game on first contact."""
        if session_id:
            return session_id, False
        if round_number == FIRST_ROUND:
            return self.coordinator.create_session().session_id, True
        raise MissingSessionId("id is required.")

    def submit_guess(
        self,
        session_id: Optional[str],
        round_value: Optional[str],
        color: Optional[str],
        base_url: str = ""
    ) -> GuessResult:
        """
        Handle a request to the game page.

        Args:
            session_id: Session ID from the request, if any
            round_value: Raw round parameter
            color: Guessed color, empty to just show the current color
            base_url: URL of the game page, used for the share link

        Returns:
            GuessResult describing what to show
        """
        round_number = parse_round(round_value)
        session_id, created = self._resolve_session_id(session_id, round_number)
        color = color or NO_PENDING_COLOR

        if color == NO_PENDING_COLOR:
            expected_round = round_number
        else:
            expected_round = round_number - 1
        try:
            status = self.coordinator.resolve_guess(session_id, color, expected_round)
        except InvalidRound as exc:
            raise InvalidRound(
                exc.expected_round, exc.actual_round, requested_round=round_number
            ) from None

        result = GuessResult(status=status, session_id=session_id, round=round_number)
        if status == GuessStatus.WIN:
            result.display_color = color_for(round_number)
            result.next_round = round_number + 1
            if created and round_number == FIRST_ROUND:
                result.share_link = f"{base_url}?id={session_id}"
        return result

    def poll_wait(self, session_id: Optional[str], round_value: Optional[str]) -> PollResult:
        """
        Handle a request to the wait page.

        Args:
            session_id: Session ID from the request
            round_value: Raw round parameter the guess was submitted with

        Returns:
            PollResult describing what to show
        """
        round_number = parse_round(round_value)
        if not session_id:
            raise MissingSessionId("id is required.")
        status = self.coordinator.poll(session_id, round_number)
        return PollResult(status=status, session_id=session_id, round=round_number)

    def get_session_info(self, session_id: str) -> Dict[str, Any]:
        """Get a summary of a session without revealing a pending guess."""
        session = self.coordinator.store.require(session_id)
        with session.lock:
            return {
                "session_id": session.session_id,
                "round": session.round,
                "state": session.state.value,
                "has_pending_guess": session.pending_color != NO_PENDING_COLOR,
            }
