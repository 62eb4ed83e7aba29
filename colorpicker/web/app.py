"""
FastAPI application for the Color Picker web interface.
"""
import logging
import os
from typing import Optional

from fastapi import FastAPI, Path, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from colorpicker import __version__
from colorpicker.config import Settings
from colorpicker.game.coordinator import GuessStatus, PollStatus
from colorpicker.game.errors import GameError
from colorpicker.game.sequencer import color_for, modifier_rgb, number_modifier
from colorpicker.web.game_manager import GameManager
from colorpicker.web.models import (
    ColorResponse, ErrorResponse, GuessResponse, PollResponse, SessionInfo
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

# Errors the game core can raise on each JSON route
GUESS_ERRORS = {
    400: {"model": ErrorResponse, "description": "Malformed round or missing session ID"},
    404: {"model": ErrorResponse, "description": "Unknown session"},
    409: {"model": ErrorResponse, "description": "Round does not match the session"},
}
SESSION_ERRORS = {404: GUESS_ERRORS[404]}


def create_app(manager: Optional[GameManager] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        manager: Optional GameManager (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    manager = manager or GameManager()
    settings = settings or Settings.from_env()
    templates = Jinja2Templates(directory=TEMPLATE_DIR)

    app = FastAPI(
        title="Color Picker",
        description="Name the color together with a friend, round after round",
        version=__version__
    )
    app.state.manager = manager
    app.state.settings = settings

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError):
        logger.warning(f"Rejected {request.url.path}: {exc}")
        if request.url.path.startswith("/api/"):
            return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})
        return PlainTextResponse(str(exc), status_code=exc.status_code)

    def render_lose(request: Request):
        return templates.TemplateResponse(
            request, "lose.html", {"link": str(request.base_url)}
        )

    # =========================================================================
    # HTML pages
    # =========================================================================

    @app.get("/", name="game_page")
    def game_page(
        request: Request,
        session_id: Optional[str] = Query(default=None, alias="id"),
        round_value: Optional[str] = Query(default=None, alias="round"),
        color: Optional[str] = None
    ):
        """Show the current color, or submit a guess for it."""
        result = manager.submit_guess(
            session_id, round_value, color, base_url=str(request.base_url)
        )

        if result.status == GuessStatus.LOSE:
            return render_lose(request)
        if result.status == GuessStatus.WAIT:
            return RedirectResponse(
                f"/wait?id={result.session_id}&round={result.round}", status_code=307
            )
        return templates.TemplateResponse(request, "index.html", {
            "round": result.next_round,
            "color": result.display_color,
            "id": result.session_id,
            "link": result.share_link,
        })

    @app.get("/wait", name="wait_page")
    def wait_page(
        request: Request,
        session_id: Optional[str] = Query(default=None, alias="id"),
        round_value: Optional[str] = Query(default=None, alias="round")
    ):
        """Wait for the other player to answer."""
        result = manager.poll_wait(session_id, round_value)

        if result.status == PollStatus.LOST:
            return render_lose(request)
        if result.status == PollStatus.ADVANCED:
            return RedirectResponse(
                f"/?id={result.session_id}&round={result.round}", status_code=307
            )
        return templates.TemplateResponse(request, "wait.html", {
            "id": result.session_id,
            "round": result.round,
            "poll_interval": settings.poll_interval,
        })

    # =========================================================================
    # JSON API
    # =========================================================================

    @app.get("/api/guess", response_model=GuessResponse, responses=GUESS_ERRORS)
    def api_guess(
        request: Request,
        session_id: Optional[str] = Query(default=None, alias="id"),
        round_value: Optional[str] = Query(default=None, alias="round"),
        color: Optional[str] = None
    ):
        """Submit a guess, or fetch the current color with an empty one."""
        result = manager.submit_guess(
            session_id, round_value, color, base_url=str(request.base_url)
        )
        return GuessResponse(
            status=result.status.value,
            session_id=result.session_id,
            round=result.round,
            next_round=result.next_round,
            display_color=result.display_color,
            share_link=result.share_link
        )

    @app.get("/api/wait", response_model=PollResponse, responses=GUESS_ERRORS)
    def api_wait(
        session_id: Optional[str] = Query(default=None, alias="id"),
        round_value: Optional[str] = Query(default=None, alias="round")
    ):
        """Poll a pending guess."""
        result = manager.poll_wait(session_id, round_value)
        return PollResponse(
            status=result.status.value,
            session_id=result.session_id,
            round=result.round
        )

    @app.get("/api/colors/{n}", response_model=ColorResponse)
    def api_color(n: int = Path(ge=0)):
        """Get the color of round n."""
        red, green, blue = modifier_rgb(number_modifier(n))
        return ColorResponse(index=n, color=color_for(n), red=red, green=green, blue=blue)

    @app.get("/api/sessions/{session_id}", response_model=SessionInfo, responses=SESSION_ERRORS)
    def api_session(session_id: str):
        """Get the public state of a session."""
        return SessionInfo(**manager.get_session_info(session_id))

    return app


app = create_app()
