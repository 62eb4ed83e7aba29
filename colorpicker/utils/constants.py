"""
Constants for the Color Picker game.
"""

# Session rounds
FIRST_ROUND = 0
LOST_ROUND = -1  # Terminal marker, never left once reached

# No guess is waiting for a match
NO_PENDING_COLOR = ""

# Color channels
CHANNEL_MAX = 255

# Server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
DEFAULT_POLL_INTERVAL = 2  # Seconds between wait page refreshes
DEFAULT_LOG_LEVEL = "INFO"
