"""
In-memory session store for Color Picker games.

Sessions live for the lifetime of the process and are never removed.
"""
import threading
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from colorpicker.game.errors import UnknownSession
from colorpicker.utils.constants import FIRST_ROUND, LOST_ROUND, NO_PENDING_COLOR


class SessionState(Enum):
    """State of a game session."""
    EMPTY = "empty"      # No guess waiting this round
    PENDING = "pending"  # One guess waiting for a match
    LOST = "lost"        # Guesses did not match, terminal


@dataclass
class Session:
    """
    A single game shared by two players.

    ``round`` counts confirmed colors; LOST_ROUND marks a lost game.
    ``lock`` guards every read-modify-write of the other fields.
    """
    session_id: str
    round: int = FIRST_ROUND
    pending_color: str = NO_PENDING_COLOR
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def state(self) -> SessionState:
        if self.round == LOST_ROUND:
            return SessionState.LOST
        if self.pending_color != NO_PENDING_COLOR:
            return SessionState.PENDING
        return SessionState.EMPTY

    def is_lost(self) -> bool:
        """Check if the game has been lost."""
        return self.round == LOST_ROUND


class SessionStore:
    """
    Maps session IDs to sessions.

    The map itself is guarded by a store-wide lock; each session carries its
    own lock for game state changes.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self) -> Session:
        """Create and register a new session at the first round."""
        session = Session(session_id=uuid.uuid4().hex)
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session by ID, or None."""
        with self._lock:
            return self._sessions.get(session_id)

    def require(self, session_id: str) -> Session:
        """Get a session by ID, raising UnknownSession if absent."""
        session = self.get(session_id)
        if session is None:
            raise UnknownSession(session_id)
        return session

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
