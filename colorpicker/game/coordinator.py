"""
Guess protocol for Color Picker sessions.

Both players name the color shown for the session's current round. The first
guess is parked as pending; the second one either matches it (the session
advances) or not (the session is lost for good). A player whose guess is
pending polls until the other one has answered.
"""
import logging
from enum import Enum
from typing import Optional

from colorpicker.game.errors import InconsistentRoundOnPoll, InvalidRound
from colorpicker.game.session import Session, SessionState, SessionStore
from colorpicker.utils.constants import LOST_ROUND, NO_PENDING_COLOR

logger = logging.getLogger(__name__)


class GuessStatus(Enum):
    """Outcome of submitting a guess."""
    WIN = "win"    # Round confirmed, or nothing to confirm
    WAIT = "wait"  # Guess parked, waiting for the other player
    LOSE = "lose"  # Game lost


class PollStatus(Enum):
    """Outcome of polling a pending guess."""
    STILL_WAITING = "still_waiting"
    ADVANCED = "advanced"
    LOST = "lost"


class SessionCoordinator:
    """
    Applies guesses and polls to sessions held in a SessionStore.

    Every operation on a session runs under that session's lock.
    """

    def __init__(self, store: Optional[SessionStore] = None):
        """
        Initialize the coordinator.

        Args:
            store: Session store to use (a new empty one if not given)
        """
        self.store = store or SessionStore()

    def create_session(self) -> Session:
        """Start a new game at the first round."""
        session = self.store.create()
        logger.info(f"Created session {session.session_id}")
        return session

    def resolve_guess(self, session_id: str, color: str, expected_round: int) -> GuessStatus:
        """
        Submit a guess for a session.

        An empty color is a request to show the current round and never
        changes the session.

        Args:
            session_id: Session to update
            color: Guessed color name, or "" for a display request
            expected_round: Round the caller believes the session is at

        Returns:
            GuessStatus for the guess

        Raises:
            UnknownSession: If the session does not exist
            InvalidRound: If expected_round is not the session's round
        """
        session = self.store.require(session_id)
        with session.lock:
            if session.is_lost():
                return GuessStatus.LOSE

            if expected_round != session.round:
                raise InvalidRound(expected_round, session.round)

            if color == NO_PENDING_COLOR:
                return GuessStatus.WIN

            if session.state == SessionState.EMPTY:
                session.pending_color = color
                logger.info(f"Session {session_id} round {session.round}: guess pending")
                return GuessStatus.WAIT

            if color.lower() == session.pending_color.lower():
                session.pending_color = NO_PENDING_COLOR
                session.round += 1
                logger.info(f"Session {session_id} advanced to round {session.round}")
                return GuessStatus.WIN

            logger.info(f"Session {session_id} lost at round {session.round}")
            session.pending_color = NO_PENDING_COLOR
            session.round = LOST_ROUND
            return GuessStatus.LOSE

    def poll(self, session_id: str, claimed_round: int) -> PollStatus:
        """
        Check on a pending guess.

        Args:
            session_id: Session to check
            claimed_round: Round the waiting player submitted with, one past
                the round their guess was for

        Returns:
            PollStatus for the waiting player

        Raises:
            UnknownSession: If the session does not exist
            InconsistentRoundOnPoll: If claimed_round does not fit the session
        """
        session = self.store.require(session_id)
        with session.lock:
            current = session.round
        logger.debug(f"Poll on session {session_id}: claimed {claimed_round}, at {current}")

        if current == LOST_ROUND:
            return PollStatus.LOST
        if current == claimed_round:
            return PollStatus.ADVANCED
        if current == claimed_round - 1:
            return PollStatus.STILL_WAITING
        raise InconsistentRoundOnPoll(claimed_round, current)
