"""Tests for API endpoints."""

import time
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app
from core.errors import InvalidBetError, InvalidShoeError


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session_id(client):
    """Open a table and return its session token."""
    response = await client.post("/api/table/new")
    return response.json()["session_id"]


async def _deal(client, session_id, rank, target="player"):
    return await client.post(
        "/api/table/cards",
        json={"rank": rank, "target": target},
        headers={"X-Session-ID": session_id},
    )


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_only_engine_errors_become_client_errors():
    """Bare ValueErrors are bugs and must not be reported as bad input."""
    assert ValueError not in app.exception_handlers
    assert InvalidShoeError in app.exception_handlers
    assert InvalidBetError in app.exception_handlers


class TestAnalysisEndpoint:
    """Tests for the stateless analysis endpoint."""

    @pytest.mark.asyncio
    async def test_full_analysis(self, client):
        response = await client.post(
            "/api/analysis",
            json={"player_cards": ["5", "6"], "dealer_up_card": "6", "bankroll": 1000},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["cards_remaining"] == 312
        assert data["player_hand"]["total"] == 11
        analysis = data["analysis"]
        assert analysis["strategy"]["recommended_action"] == "DOUBLE"
        assert set(analysis["strategy"]["expected_values"]) == {"STAND", "HIT", "DOUBLE"}
        assert 0.10 <= analysis["probabilities"]["dealer_bust_prob"] <= 0.60
        assert 1 <= analysis["next_bet"]["recommended_bet"] <= 500

    @pytest.mark.asyncio
    async def test_incomplete_hand(self, client):
        response = await client.post("/api/analysis", json={"player_cards": ["10"]})
        assert response.status_code == 200
        assert response.json()["analysis"] is None

    @pytest.mark.asyncio
    async def test_custom_shoe(self, client):
        response = await client.post(
            "/api/analysis",
            json={
                "player_cards": ["10", "6"],
                "dealer_up_card": "7",
                "shoe": {"10": 5, "K": 5},
            },
        )
        data = response.json()
        assert data["cards_remaining"] == 10
        assert data["analysis"]["strategy"]["hit_ev"] == pytest.approx(-1)

    @pytest.mark.asyncio
    async def test_empty_shoe(self, client):
        response = await client.post(
            "/api/analysis",
            json={"player_cards": ["10", "6"], "dealer_up_card": "7", "shoe": {}},
        )
        probs = response.json()["analysis"]["probabilities"]
        assert probs == {
            "win_prob": 0.0,
            "loss_prob": 1.0,
            "push_prob": 0.0,
            "dealer_bust_prob": 0.0,
        }

    @pytest.mark.asyncio
    async def test_overfull_shoe(self, client):
        response = await client.post(
            "/api/analysis",
            json={
                "player_cards": ["10", "6"],
                "dealer_up_card": "7",
                "shoe": {"A": 1000, "2": 5000},
            },
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_malformed_rank(self, client):
        response = await client.post(
            "/api/analysis",
            json={"player_cards": ["10", "Z"], "dealer_up_card": "7"},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_bankroll(self, client):
        response = await client.post(
            "/api/analysis",
            json={"player_cards": ["10", "7"], "dealer_up_card": "7", "bankroll": 0},
        )
        assert response.status_code == 422


class TestTableEndpoints:
    """Tests for the session-backed table."""

    @pytest.mark.asyncio
    async def test_new_table(self, client):
        response = await client.post("/api/table/new")
        assert response.status_code == 200
        assert "session_id" in response.json()

    @pytest.mark.asyncio
    async def test_initial_state(self, client, session_id):
        response = await client.get(
            "/api/table/state", headers={"X-Session-ID": session_id}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "BETTING"
        assert data["cards_remaining"] == 312
        assert data["shoe_size"] == 312
        assert data["bankroll"] == 1000
        assert data["analysis"] is None

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        response = await client.get(
            "/api/table/state", headers={"X-Session-ID": "not-a-session"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_active_session_outlives_token_age(self, client, session_id):
        """A table in use stays reachable however long ago it was opened."""
        original_time = time.time

        def two_hours_later():
            return original_time() + 7200

        # The store's sliding expiry reads datetime, which this leaves alone
        with patch("time.time", two_hours_later):
            response = await client.get(
                "/api/table/state", headers={"X-Session-ID": session_id}
            )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_deal_and_analyze(self, client, session_id):
        await _deal(client, session_id, "10")
        await _deal(client, session_id, "K")
        response = await _deal(client, session_id, "6", target="dealer-up")
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "PLAYING"
        assert data["player_cards"] == ["10", "K"]
        assert data["dealer_up_card"] == "6"
        assert data["cards_remaining"] == 309
        assert data["analysis"]["strategy"]["recommended_action"] == "STAND"

    @pytest.mark.asyncio
    async def test_dealer_slot_taken(self, client, session_id):
        await _deal(client, session_id, "6", target="dealer-up")
        response = await _deal(client, session_id, "7", target="dealer-up")
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_undo_card(self, client, session_id):
        await _deal(client, session_id, "9")
        response = await client.request(
            "DELETE",
            "/api/table/cards",
            json={"rank": "9", "target": "player"},
            headers={"X-Session-ID": session_id},
        )
        assert response.status_code == 200
        assert response.json()["player_cards"] == []
        assert response.json()["cards_remaining"] == 312

    @pytest.mark.asyncio
    async def test_bet_limits(self, client, session_id):
        headers = {"X-Session-ID": session_id}
        response = await client.post("/api/table/bet", json={"amount": 50}, headers=headers)
        assert response.json()["current_bet"] == 50

        response = await client.post("/api/table/bet", json={"amount": 501}, headers=headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_settle_and_next_hand(self, client, session_id):
        headers = {"X-Session-ID": session_id}
        await _deal(client, session_id, "A")
        await _deal(client, session_id, "K")
        await _deal(client, session_id, "9", target="dealer-up")

        response = await client.post(
            "/api/table/settle", json={"result": "blackjack"}, headers=headers
        )
        data = response.json()
        assert data["phase"] == "FINISHED"
        assert data["bankroll"] == 1015
        assert data["history"][-1]["result"] == "blackjack"
        assert data["history"][-1]["payout"] == 15

        response = await client.post("/api/table/next-hand", headers=headers)
        data = response.json()
        assert data["phase"] == "BETTING"
        assert data["player_cards"] == []
        assert data["cards_remaining"] == 309

    @pytest.mark.asyncio
    async def test_settle_without_cards(self, client, session_id):
        response = await client.post(
            "/api/table/settle",
            json={"result": "win"},
            headers={"X-Session-ID": session_id},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_reset_shoe(self, client, session_id):
        headers = {"X-Session-ID": session_id}
        await _deal(client, session_id, "2")
        response = await client.post("/api/table/reset", headers=headers)
        assert response.json()["cards_remaining"] == 312
        assert response.json()["phase"] == "BETTING"

    @pytest.mark.asyncio
    async def test_new_on_existing_session_resets(self, client, session_id):
        headers = {"X-Session-ID": session_id}
        await _deal(client, session_id, "2")
        response = await client.post("/api/table/new", headers=headers)
        assert response.json()["session_id"] == session_id

        state = await client.get("/api/table/state", headers=headers)
        assert state.json()["cards_remaining"] == 312
