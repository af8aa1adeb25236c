"""Integration tests for the FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from skirmish import __version__
from skirmish.api.app import create_app
from skirmish.api.runtime import ApiState


@pytest.fixture
def client(fast_settings):
    """Create a test client backed by an unconfigured advisor."""

    def factory() -> ApiState:
        return ApiState(settings=fast_settings)

    with TestClient(create_app(state_factory=factory)) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__


def test_api_docs_available(client):
    assert client.get("/docs").status_code == 200

    response = client.get("/openapi.json")
    assert response.status_code == 200
    assert response.json()["info"]["title"] == "Skirmish API"


def test_rounds_without_advisor(client):
    """Several full rounds play out on the fallback hint."""

    game_id = client.post("/games", json={"seed": 42}).json()["id"]

    for expected_turn in (2, 3, 4):
        response = client.post(f"/games/{game_id}/end-turn")
        if response.status_code == 409:
            break
        assert response.status_code == 200
        state = response.json()["state"]
        if state["game_over"]:
            break
        assert state["turn_number"] == expected_turn
        assert state["player_units"] + state["ai_units"] > 0

    messages = [
        event["payload"]["text"]
        for event in client.get(f"/games/{game_id}/events").json()
        if event["type"] == "message"
    ]
    assert "AI is making decisions based on basic strategy (advisor unavailable)" in messages
