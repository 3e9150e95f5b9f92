"""
Integration tests for Admin API endpoints
"""

import pytest

from blockguess.core.config import get_settings


class TestAdminAuth:
    """Test suite for the X-Admin-Token check."""

    @pytest.mark.asyncio
    async def test_missing_token(self, client, sample_round_data):
        response = await client.post("/admin/rounds", json=sample_round_data)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_token(self, client, sample_round_data):
        response = await client.post(
            "/admin/rounds",
            json=sample_round_data,
            headers={"X-Admin-Token": "nope"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_disabled_without_configured_token(
        self, client, monkeypatch, admin_headers, sample_round_data
    ):
        monkeypatch.delenv("ADMIN_TOKEN")
        get_settings.cache_clear()

        response = await client.post("/admin/rounds", json=sample_round_data, headers=admin_headers)

        assert response.status_code == 403


class TestAdminRounds:
    """Test suite for /admin/rounds endpoints."""

    @pytest.mark.asyncio
    async def test_create_round(self, client, clock, admin_headers, sample_round_data):
        response = await client.post("/admin/rounds", json=sample_round_data, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["round_id"] == 1
        assert data["status"] == "open"
        assert data["start_time"] == clock()
        assert data["end_time"] == clock() + 600

    @pytest.mark.asyncio
    async def test_create_round_invalid_duration(self, client, admin_headers, sample_round_data):
        sample_round_data["duration_minutes"] = 0

        response = await client.post("/admin/rounds", json=sample_round_data, headers=admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_close_twice_conflict(self, client, admin_headers, open_round):
        url = f"/admin/rounds/{open_round['round_id']}/close"

        first = await client.post(url, headers=admin_headers)
        second = await client.post(url, headers=admin_headers)

        assert first.status_code == 200
        assert first.json()["status"] == "closed"
        assert second.status_code == 409

    @pytest.mark.asyncio
    async def test_close_unknown_round(self, client, admin_headers):
        response = await client.post("/admin/rounds/77/close", headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_finalize_open_round_conflict(self, client, admin_headers, open_round):
        response = await client.post(
            f"/admin/rounds/{open_round['round_id']}/finalize",
            json={"actual_value": 3000, "reference_hash": "00ff"},
            headers=admin_headers
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_finalize_negative_value_rejected(self, client, admin_headers, open_round):
        response = await client.post(
            f"/admin/rounds/{open_round['round_id']}/finalize",
            json={"actual_value": -1, "reference_hash": "00ff"},
            headers=admin_headers
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_full_round_lifecycle(self, client, clock, admin_headers, open_round, sample_guess_data):
        round_id = open_round["round_id"]
        await client.post(f"/rounds/{round_id}/guesses", json=sample_guess_data)

        clock.now = open_round["end_time"]
        auto_close = await client.post("/admin/rounds/auto-close", headers=admin_headers)
        assert auto_close.json() == {"closed": 1}

        finalized = await client.post(
            f"/admin/rounds/{round_id}/finalize",
            json={"actual_value": 3200, "reference_hash": "00000000000000000001"},
            headers=admin_headers
        )
        assert finalized.status_code == 200
        data = finalized.json()
        assert data["status"] == "finished"
        assert data["winning_user"] == sample_guess_data["user_id"]
        assert data["runner_up_user"] is None
        assert data["is_jackpot"] is True

        again = await client.post(
            f"/admin/rounds/{round_id}/finalize",
            json={"actual_value": 1, "reference_hash": "x"},
            headers=admin_headers
        )
        assert again.status_code == 409

        active = await client.get("/rounds/active")
        assert active.json() is None

    @pytest.mark.asyncio
    async def test_auto_close_nothing_due(self, client, admin_headers, open_round):
        response = await client.post("/admin/rounds/auto-close", headers=admin_headers)

        assert response.json() == {"closed": 0}


class TestAdminPrizeAndLogs:
    """Test suite for prize config and audit log endpoints."""

    @pytest.mark.asyncio
    async def test_prize_config_roundtrip(self, client, admin_headers):
        empty = await client.get("/prize-config")
        assert empty.json() is None

        payload = {
            "jackpot_amount": 1000,
            "first_place_amount": 100,
            "second_place_amount": 50,
            "currency_type": "ETH",
        }
        saved = await client.put("/admin/prize-config", json=payload, headers=admin_headers)
        assert saved.status_code == 200

        current = await client.get("/prize-config")
        assert current.json()["jackpot_amount"] == 1000
        assert current.json()["currency_type"] == "ETH"

    @pytest.mark.asyncio
    async def test_prize_config_rejects_zero(self, client, admin_headers):
        payload = {
            "jackpot_amount": 0,
            "first_place_amount": 100,
            "second_place_amount": 50,
            "currency_type": "ETH",
        }

        response = await client.put("/admin/prize-config", json=payload, headers=admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_logs(self, client, admin_headers, open_round):
        response = await client.get(
            "/admin/logs",
            params={"event_type": "round_created"},
            headers=admin_headers
        )

        assert response.status_code == 200
        logs = response.json()
        assert len(logs) == 1
        assert logs[0]["event_type"] == "round_created"

    @pytest.mark.asyncio
    async def test_logs_require_admin(self, client):
        response = await client.get("/admin/logs")

        assert response.status_code == 401
