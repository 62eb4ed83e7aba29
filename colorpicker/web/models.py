"""
Pydantic models for the Color Picker JSON API.
"""
from pydantic import BaseModel, Field
from typing import Optional


class GuessResponse(BaseModel):
    """Response to a guess or display request."""
    status: str = Field(description="win, wait, or lose")
    session_id: str
    round: int
    next_round: Optional[int] = None
    display_color: Optional[str] = Field(default=None, pattern=r"^#[0-9a-f]{6}$")
    share_link: str = ""


class PollResponse(BaseModel):
    """Response to a poll of a pending guess."""
    status: str = Field(description="still_waiting, advanced, or lost")
    session_id: str
    round: int


class ColorResponse(BaseModel):
    """A color of the sequence."""
    index: int = Field(ge=0)
    color: str = Field(pattern=r"^#[0-9a-f]{6}$")
    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)


class SessionInfo(BaseModel):
    """Public view of a session."""
    session_id: str
    round: int
    state: str
    has_pending_guess: bool


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str
