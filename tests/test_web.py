"""
Unit tests for the web application components.

Tests the GameManager, API models, settings, and HTTP routes.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from colorpicker.config import Settings
from colorpicker.game.coordinator import GuessStatus, PollStatus
from colorpicker.game.errors import (
    MalformedInput, MissingSessionId, UnknownSession, InvalidRound
)
from colorpicker.web.app import create_app
from colorpicker.web.game_manager import GameManager, parse_round
from colorpicker.web.models import ColorResponse, GuessResponse, SessionInfo


class TestParseRound:
    """Tests for round parameter parsing."""

    def test_missing(self):
        assert parse_round(None) == 0
        assert parse_round("") == 0

    def test_numeric(self):
        assert parse_round("3") == 3
        assert parse_round("-1") == -1

    def test_malformed(self):
        with pytest.raises(MalformedInput):
            parse_round("three")


class TestGameManager:
    """Tests for GameManager class."""

    @pytest.fixture
    def manager(self):
        return GameManager()

    @pytest.fixture
    def session_id(self, manager):
        return manager.submit_guess(None, None, None).session_id

    def test_first_contact_creates_session(self, manager):
        result = manager.submit_guess(None, None, None, base_url="http://host/")
        assert result.status == GuessStatus.WIN
        assert result.round == 0
        assert result.next_round == 1
        assert result.display_color == "#000000"
        assert result.share_link == f"http://host/?id={result.session_id}"
        assert result.session_id in manager.coordinator.store

    def test_share_link_only_for_creator(self, manager, session_id):
        result = manager.submit_guess(session_id, "0", "")
        assert result.status == GuessStatus.WIN
        assert result.share_link == ""

    def test_missing_id(self, manager):
        with pytest.raises(MissingSessionId):
            manager.submit_guess(None, "2", "red")

    def test_unknown_id(self, manager):
        with pytest.raises(UnknownSession):
            manager.submit_guess("missing", "1", "red")

    def test_guess_then_match(self, manager, session_id):
        first = manager.submit_guess(session_id, "1", "Black")
        assert first.status == GuessStatus.WAIT
        assert first.display_color is None

        second = manager.submit_guess(session_id, "1", "black")
        assert second.status == GuessStatus.WIN
        assert second.display_color == "#ff0000"
        assert second.next_round == 2
        assert second.share_link == ""

    def test_display_after_advance(self, manager, session_id):
        manager.submit_guess(session_id, "1", "black")
        manager.submit_guess(session_id, "1", "black")
        result = manager.submit_guess(session_id, "1", None)
        assert result.status == GuessStatus.WIN
        assert result.display_color == "#ff0000"

    def test_display_ahead_rejected(self, manager, session_id):
        with pytest.raises(InvalidRound):
            manager.submit_guess(session_id, "1", "")

    def test_guess_on_first_page_round_rejected(self, manager, session_id):
        """Guesses always carry the round after the one shown."""
        with pytest.raises(InvalidRound):
            manager.submit_guess(session_id, "0", "black")

    def test_invalid_round_reports_request_round(self, manager, session_id):
        """The error names the round the player sent as well as the session round."""
        with pytest.raises(InvalidRound) as exc_info:
            manager.submit_guess(session_id, "4", "red")
        error = exc_info.value
        assert error.requested_round == 4
        assert error.expected_round == 3
        assert error.actual_round == 0
        assert str(error).startswith("invalid round 4:")

    def test_mismatch(self, manager, session_id):
        manager.submit_guess(session_id, "1", "black")
        result = manager.submit_guess(session_id, "1", "white")
        assert result.status == GuessStatus.LOSE
        assert result.display_color is None
        assert manager.submit_guess(session_id, "5", "").status == GuessStatus.LOSE

    def test_poll_wait(self, manager, session_id):
        manager.submit_guess(session_id, "1", "black")
        assert manager.poll_wait(session_id, "1").status == PollStatus.STILL_WAITING

        manager.submit_guess(session_id, "1", "black")
        result = manager.poll_wait(session_id, "1")
        assert result.status == PollStatus.ADVANCED
        assert result.round == 1

    def test_poll_wait_requires_id(self, manager):
        with pytest.raises(MissingSessionId):
            manager.poll_wait(None, "1")

    def test_session_info_hides_guess(self, manager, session_id):
        manager.submit_guess(session_id, "1", "Black")
        info = manager.get_session_info(session_id)
        assert info == {
            "session_id": session_id,
            "round": 0,
            "state": "pending",
            "has_pending_guess": True,
        }


class TestPydanticModels:
    """Tests for API models."""

    def test_color_response(self):
        response = ColorResponse(index=1, color="#ff0000", red=255, green=0, blue=0)
        assert response.red == 255

    def test_color_response_invalid_color(self):
        with pytest.raises(ValidationError):
            ColorResponse(index=1, color="red", red=255, green=0, blue=0)

    def test_color_response_channel_range(self):
        with pytest.raises(ValidationError):
            ColorResponse(index=1, color="#ff0000", red=256, green=0, blue=0)

    def test_guess_response_defaults(self):
        response = GuessResponse(status="wait", session_id="abc", round=1)
        assert response.next_round is None
        assert response.display_color is None
        assert response.share_link == ""

    def test_session_info(self):
        info = SessionInfo(session_id="abc", round=-1, state="lost", has_pending_guess=False)
        assert info.state == "lost"


class TestSettings:
    """Tests for environment configuration."""

    def test_defaults(self, monkeypatch):
        for name in ["COLORPICKER_HOST", "COLORPICKER_PORT",
                     "COLORPICKER_LOG_LEVEL", "COLORPICKER_POLL_INTERVAL"]:
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.host == "127.0.0.1"
        assert settings.port == 1234
        assert settings.log_level == "INFO"
        assert settings.poll_interval == 2

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COLORPICKER_HOST", "0.0.0.0")
        monkeypatch.setenv("COLORPICKER_PORT", "8080")
        monkeypatch.setenv("COLORPICKER_LOG_LEVEL", "debug")
        monkeypatch.setenv("COLORPICKER_POLL_INTERVAL", "5")
        settings = Settings.from_env()
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
        assert settings.poll_interval == 5


class TestRoutes:
    """Tests for the HTML pages and the JSON API."""

    @pytest.fixture
    def manager(self):
        return GameManager()

    @pytest.fixture
    def client(self, manager):
        return TestClient(create_app(manager, Settings()))

    @pytest.fixture
    def session_id(self, client):
        return client.get("/api/guess").json()["session_id"]

    def test_new_game_page(self, client, manager):
        response = client.get("/")
        assert response.status_code == 200
        assert "#000000" in response.text
        assert "Round 1" in response.text
        assert "http://testserver/?id=" in response.text
        assert len(manager.coordinator.store) == 1

    def test_api_new_game(self, client):
        data = client.get("/api/guess").json()
        assert data["status"] == "win"
        assert data["round"] == 0
        assert data["next_round"] == 1
        assert data["display_color"] == "#000000"
        assert data["share_link"] == f"http://testserver/?id={data['session_id']}"

    def test_full_round(self, client, session_id):
        response = client.get(
            "/", params={"id": session_id, "round": "1", "color": "Black"},
            follow_redirects=False
        )
        assert response.status_code == 307
        assert response.headers["location"] == f"/wait?id={session_id}&round=1"

        response = client.get("/wait", params={"id": session_id, "round": "1"})
        assert response.status_code == 200
        assert "Waiting" in response.text

        response = client.get("/", params={"id": session_id, "round": "1", "color": "black"})
        assert response.status_code == 200
        assert "#ff0000" in response.text
        assert "Round 2" in response.text

        response = client.get(
            "/wait", params={"id": session_id, "round": "1"}, follow_redirects=False
        )
        assert response.status_code == 307
        assert response.headers["location"] == f"/?id={session_id}&round=1"

        response = client.get(response.headers["location"])
        assert response.status_code == 200
        assert "#ff0000" in response.text

    def test_lose_page(self, client, session_id):
        client.get("/api/guess", params={"id": session_id, "round": "1", "color": "black"})
        response = client.get("/", params={"id": session_id, "round": "1", "color": "white"})
        assert response.status_code == 200
        assert "Game over" in response.text

        response = client.get("/wait", params={"id": session_id, "round": "1"})
        assert "Game over" in response.text

    def test_api_guess_and_wait(self, client, session_id):
        data = client.get(
            "/api/guess", params={"id": session_id, "round": "1", "color": "Black"}
        ).json()
        assert data["status"] == "wait"

        data = client.get("/api/wait", params={"id": session_id, "round": "1"}).json()
        assert data["status"] == "still_waiting"

        data = client.get(
            "/api/guess", params={"id": session_id, "round": "1", "color": "BLACK"}
        ).json()
        assert data["status"] == "win"
        assert data["display_color"] == "#ff0000"

        data = client.get("/api/wait", params={"id": session_id, "round": "1"}).json()
        assert data["status"] == "advanced"

    def test_api_session(self, client, session_id):
        client.get("/api/guess", params={"id": session_id, "round": "1", "color": "Black"})
        response = client.get(f"/api/sessions/{session_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "pending"
        assert data["has_pending_guess"] is True
        assert "Black" not in response.text

    def test_api_color(self, client):
        data = client.get("/api/colors/7").json()
        assert data == {"index": 7, "color": "#ffffff", "red": 255, "green": 255, "blue": 255}

    def test_api_color_negative(self, client):
        assert client.get("/api/colors/-1").status_code == 422

    def test_malformed_round(self, client):
        response = client.get("/api/guess", params={"round": "abc"})
        assert response.status_code == 400
        assert "invalid round" in response.json()["detail"]

        response = client.get("/", params={"round": "abc"})
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")

    def test_missing_id(self, client):
        response = client.get("/api/guess", params={"round": "3", "color": "red"})
        assert response.status_code == 400
        assert response.json()["detail"] == "id is required."

    def test_unknown_session(self, client):
        response = client.get("/api/guess", params={"id": "nope", "round": "1", "color": "red"})
        assert response.status_code == 404
        assert client.get("/api/sessions/nope").status_code == 404

    def test_invalid_round(self, client, session_id):
        response = client.get(
            "/api/guess", params={"id": session_id, "round": "4", "color": "red"}
        )
        assert response.status_code == 409

    def test_inconsistent_poll(self, client, session_id):
        response = client.get("/wait", params={"id": session_id, "round": "7"})
        assert response.status_code == 409
        assert "invalid round" in response.text

    def test_api_color_large_index(self, client):
        """Far rounds are computed without stepping through every coordinate."""
        n = 10 ** 30
        response = client.get(f"/api/colors/{n}")
        assert response.status_code == 200
        data = response.json()
        assert data["index"] == n
        assert data["color"] == "#2a0000"

    def test_api_errors_documented(self, client):
        schema = client.get("/openapi.json").json()
        error_ref = "#/components/schemas/ErrorResponse"
        guess_responses = schema["paths"]["/api/guess"]["get"]["responses"]
        for code in ["400", "404", "409"]:
            content = guess_responses[code]["content"]["application/json"]
            assert content["schema"]["$ref"] == error_ref
        session_responses = schema["paths"]["/api/sessions/{session_id}"]["get"]["responses"]
        assert "404" in session_responses
        assert "ErrorResponse" in schema["components"]["schemas"]
