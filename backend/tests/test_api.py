"""
Tests for the HTTP API.
"""

import pytest
import httpx
from unittest.mock import patch

from app.main import app
from app.simulator import SimulationIncompleteError


@pytest.fixture
def client():
    """Async client bound to the ASGI app."""
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


def team_payload(name, actual, expected, variance):
    return {
        "team_name": name,
        "rounds": [
            {"name": "wildcard", "actual_scores": actual},
            {"name": "divisional", "expected_points": expected, "variance": variance},
        ],
    }


def scenario_payload(**extra):
    payload = {
        "teams": [
            team_payload("Team A", [10, 5], [5, 5], [0, 0]),
            team_payload("Team B", [8, 4], [5, 5], [0, 0]),
        ],
        "n_simulations": 500,
        "seed": 7,
    }
    payload.update(extra)
    return payload


def pool_record(name, wildcard, expected):
    return {
        "teamName": name,
        "scores": {"wildcard": wildcard},
        "expectedPoints": {
            "divisional": expected,
            "championship": expected,
            "superbowl": expected,
        },
        "variance": {
            "divisional": [0.0] * len(expected),
            "championship": [0.0] * len(expected),
            "superbowl": [0.0] * len(expected),
        },
    }


class TestInfoEndpoints:
    """Tests for health and root endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        async with client:
            response = await client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, client):
        async with client:
            response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/api/docs"


class TestWinProbabilityEndpoint:
    """Tests for POST /api/win-probabilities."""

    @pytest.mark.asyncio
    async def test_scenario(self, client):
        async with client:
            response = await client.post("/api/win-probabilities", json=scenario_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["n_simulations"] == 500
        assert "generated_at" in data
        assert [t["team_name"] for t in data["teams"]] == ["Team A", "Team B"]
        assert data["teams"][0]["win_probability"] == 100.0
        assert data["teams"][0]["expected_total"] == 25.0
        assert data["teams"][1]["finish_probabilities"] == [0.0, 100.0]

    @pytest.mark.asyncio
    async def test_missing_variance_is_bad_request(self, client):
        payload = scenario_payload()
        del payload["teams"][1]["rounds"][1]["variance"]

        async with client:
            response = await client.post("/api/win-probabilities", json=payload)

        assert response.status_code == 400
        assert "Team B" in response.json()["detail"]
        assert "divisional" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_single_team_is_bad_request(self, client):
        payload = scenario_payload()
        payload["teams"] = payload["teams"][:1]

        async with client:
            response = await client.post("/api/win-probabilities", json=payload)

        assert response.status_code == 400
        assert "At least 2 teams" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_invalid_simulation_count_rejected(self, client):
        async with client:
            response = await client.post("/api/win-probabilities", json=scenario_payload(n_simulations=0))
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_incomplete_simulation_is_unavailable(self, client):
        """Test that a timed-out run surfaces as 503."""
        error = SimulationIncompleteError("Simulation timed out", completed=10, requested=500)
        with patch("app.api.routes.simulations_routes.simulate_pool", side_effect=error):
            async with client:
                response = await client.post("/api/win-probabilities", json=scenario_payload())

        assert response.status_code == 503
        assert "timed out" in response.json()["detail"]


class TestPoolWinProbabilityEndpoint:
    """Tests for POST /api/win-probabilities/pool."""

    @pytest.mark.asyncio
    async def test_pool_records(self, client):
        payload = {
            "teams": [
                pool_record("Ryan", [10, None], [2, 2]),
                pool_record("Alex", [15, 3], [1, 1]),
            ],
            "last_completed_round": "wildcard",
            "n_simulations": 200,
        }
        async with client:
            response = await client.post("/api/win-probabilities/pool", json=payload)

        assert response.status_code == 200
        teams = response.json()["teams"]
        # Ryan 10 + 12 = 22, Alex 18 + 6 = 24
        assert [t["team_name"] for t in teams] == ["Alex", "Ryan"]
        assert teams[0]["expected_total"] == 24.0
        assert teams[0]["win_probability"] == 100.0

    @pytest.mark.asyncio
    async def test_pool_record_without_name(self, client):
        payload = {"teams": [{"scores": {}}, pool_record("Alex", [1], [1])], "n_simulations": 10}
        async with client:
            response = await client.post("/api/win-probabilities/pool", json=payload)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_mapping_scores_is_bad_request(self, client):
        record = pool_record("Ryan", [10, 2], [2, 2])
        record["scores"] = [1, 2]
        payload = {"teams": [record, pool_record("Alex", [15, 3], [1, 1])], "last_completed_round": "wildcard"}

        async with client:
            response = await client.post("/api/win-probabilities/pool", json=payload)

        assert response.status_code == 400
        assert "'scores' must map round names" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_non_numeric_slot_is_bad_request(self, client):
        """Test that a string projection is rejected instead of failing mid-simulation."""
        record = pool_record("Ryan", [10, 2], [2, 2])
        record["expectedPoints"]["divisional"] = ["x", 2]
        payload = {
            "teams": [record, pool_record("Alex", [15, 3], [1, 1])],
            "last_completed_round": "wildcard",
            "n_simulations": 10,
        }

        async with client:
            response = await client.post("/api/win-probabilities/pool", json=payload)

        assert response.status_code == 400
        assert "round 'divisional'" in response.json()["detail"]
        assert "not a number" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_round_rejected(self, client):
        payload = {"teams": [], "last_completed_round": "preseason"}
        async with client:
            response = await client.post("/api/win-probabilities/pool", json=payload)
        assert response.status_code == 422


class TestTeamSummariesEndpoint:
    """Tests for POST /api/team-summaries."""

    @pytest.mark.asyncio
    async def test_summaries(self, client):
        payload = {"teams": [
            team_payload("Ryan", [20, 10], [30, 20], [64, 36]),
            team_payload("Alex", [5, 5], [5, 5], [1, 1]),
        ]}
        async with client:
            response = await client.post("/api/team-summaries", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data[0]["team_name"] == "Ryan"
        assert data[0]["std_dev"] == 10.0
        assert data[0]["p75"] == 86.7

    @pytest.mark.asyncio
    async def test_invalid_snapshot(self, client):
        payload = {"teams": [team_payload("Ryan", [20, 10], [30], [64])]}
        async with client:
            response = await client.post("/api/team-summaries", json=payload)
        assert response.status_code == 400


class TestFantasyPointsEndpoint:
    """Tests for POST /api/fantasy-points."""

    @pytest.mark.asyncio
    async def test_score_line(self, client):
        payload = {"stats": {"Receptions": 5, "ReceivingYards": 60, "ReceivingTouchdowns": 1}}
        async with client:
            response = await client.post("/api/fantasy-points", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["points"] == 17.0
        assert data["breakdown"]["receptions"]["calculation"] == "5 × 1"
