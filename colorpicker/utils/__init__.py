"""
Utilities module for Color Picker.
"""
from colorpicker.utils.constants import (
    LOST_ROUND, FIRST_ROUND, NO_PENDING_COLOR,
    CHANNEL_MAX, DEFAULT_HOST, DEFAULT_PORT
)

__all__ = [
    'LOST_ROUND', 'FIRST_ROUND', 'NO_PENDING_COLOR',
    'CHANNEL_MAX', 'DEFAULT_HOST', 'DEFAULT_PORT'
]
