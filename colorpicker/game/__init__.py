"""
Game core for Color Picker: the color sequence and the guess protocol.
"""
from colorpicker.game.sequencer import color_for, number_modifier, Modifier
from colorpicker.game.session import Session, SessionState, SessionStore
from colorpicker.game.coordinator import SessionCoordinator, GuessStatus, PollStatus
from colorpicker.game.errors import (
    GameError, MalformedInput, MissingSessionId, UnknownSession,
    InvalidRound, InconsistentRoundOnPoll
)

__all__ = [
    'color_for', 'number_modifier', 'Modifier',
    'Session', 'SessionState', 'SessionStore',
    'SessionCoordinator', 'GuessStatus', 'PollStatus',
    'GameError', 'MalformedInput', 'MissingSessionId', 'UnknownSession',
    'InvalidRound', 'InconsistentRoundOnPoll'
]
