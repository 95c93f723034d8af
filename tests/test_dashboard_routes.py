"""Tests for dashboard API routes."""

import httpx
import pytest

from dota_insights.main import app
from dota_insights.services.dashboard_service import DashboardService
from dota_insights.services.opendota_client import MockOpenDotaClient, OpenDotaError
from dota_insights.services.summary_logger import reset_summary_logger

pytestmark = pytest.mark.anyio


class FailingOpenDotaClient(MockOpenDotaClient):
    async def get_player_heroes(self, account_id: int) -> list[dict]:
        raise OpenDotaError("OpenDota API returned HTTP 503", status_code=503)

    async def get_recent_matches(self, account_id: int, limit=None) -> list[dict]:
        raise OpenDotaError("OpenDota API returned HTTP 503", status_code=503)


@pytest.fixture
async def client(monkeypatch):
    """Create test client with the mock OpenDota client on app.state."""
    monkeypatch.setenv("SUMMARY_DIAGNOSTICS", "false")
    reset_summary_logger()

    # Set services directly on app.state (mimics lifespan startup)
    app.state.dashboard_service = DashboardService(min_hero_games=1)
    app.state.opendota_client = MockOpenDotaClient()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    reset_summary_logger()


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "dota-insights"}


class TestAnalyze:
    """Tests for POST /api/dashboard/analyze."""

    async def test_analyze(self, client):
        response = await client.post("/api/dashboard/analyze", json={
            "hero_stats": [
                {"hero_id": 8, "games": 10, "win": 7, "sum_kills": 70, "sum_deaths": 30, "sum_assists": 50},
            ],
            "matches": [
                {"match_id": 1, "hero_id": 8, "start_time": 1_700_000_000,
                 "player_slot": 0, "radiant_win": True, "kills": 5, "deaths": 1, "assists": 5},
            ],
            "heroes": {"8": "Juggernaut"},
        })

        assert response.status_code == 200
        data = response.json()
        assert data["heroes"][0]["name"] == "Juggernaut"
        assert data["heroes"][0]["mastery"]["tier"] == "gold"
        assert data["heroes"][0]["streak"]["streak_type"] == "win"

    async def test_analyze_empty(self, client):
        response = await client.post("/api/dashboard/analyze", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["heroes"] == []
        assert data["session"]["games_played"] == 0

    async def test_analyze_rejects_bad_shape(self, client):
        response = await client.post("/api/dashboard/analyze", json={"hero_stats": "nope"})
        assert response.status_code == 422


class TestPlayerDashboard:
    """Tests for GET /api/players/{account_id}/dashboard."""

    async def test_dashboard(self, client):
        response = await client.get("/api/players/1234/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert {h["name"] for h in data["heroes"]} == {"Juggernaut", "Pudge", "Invoker", "Anti-Mage"}
        assert data["session"]["games_played"] >= 1
        assert data["momentum"]["hot_streak"]["hero_name"] == "Juggernaut"

        juggernaut = next(h for h in data["heroes"] if h["name"] == "Juggernaut")
        earned = {a["id"] for a in juggernaut["achievements"]}
        assert {"farmer", "economist"} <= earned
        assert "trend" in juggernaut
        assert "next_achievements" in juggernaut

    async def test_dashboard_upstream_failure(self, client):
        app.state.opendota_client = FailingOpenDotaClient()
        response = await client.get("/api/players/1234/dashboard")
        assert response.status_code == 502
        assert "503" in response.json()["detail"]

    async def test_invalid_limit(self, client):
        response = await client.get("/api/players/1234/dashboard", params={"limit": 0})
        assert response.status_code == 422


class TestPlayerSession:
    """Tests for GET /api/players/{account_id}/session."""

    async def test_session(self, client):
        response = await client.get("/api/players/1234/session")
        assert response.status_code == 200
        data = response.json()
        assert data["games_played"] >= 1
        assert data["wins"] + data["losses"] <= data["games_played"]

    async def test_session_upstream_failure(self, client):
        app.state.opendota_client = FailingOpenDotaClient()
        response = await client.get("/api/players/1234/session")
        assert response.status_code == 502
