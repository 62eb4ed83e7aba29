"""
Runtime configuration for the Color Picker server.

Values come from environment variables; run_web.py flags override them.
"""
import os
from dataclasses import dataclass

from colorpicker.utils.constants import (
    DEFAULT_HOST, DEFAULT_PORT, DEFAULT_POLL_INTERVAL, DEFAULT_LOG_LEVEL
)


@dataclass
class Settings:
    """Server settings."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    poll_interval: int = DEFAULT_POLL_INTERVAL  # Seconds between wait page refreshes

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from COLORPICKER_* environment variables."""
        return cls(
            host=os.getenv("COLORPICKER_HOST", DEFAULT_HOST),
            port=int(os.getenv("COLORPICKER_PORT", DEFAULT_PORT)),
            log_level=os.getenv("COLORPICKER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            poll_interval=int(os.getenv("COLORPICKER_POLL_INTERVAL", DEFAULT_POLL_INTERVAL)),
        )
