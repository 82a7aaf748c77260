"""
End-to-end tests for the payment link endpoints.

Requests go through the FastAPI app with the database session and
settings overridden in conftest.
"""

from datetime import datetime, timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest

from crosspay.core.config import get_settings
from crosspay.main import app

CREATOR = "0x" + "A" * 39 + "1"
RECIPIENT = "0x" + "B" * 39 + "2"
STRANGER = "0x" + "C" * 39 + "3"

NOW = datetime(2025, 3, 1, 12, 0, 0)


def at(moment: datetime):
    return patch("crosspay.core.clock.utcnow", return_value=moment)


async def create(client, payload) -> str:
    response = await client.post("/api/payment/create", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["data"]["paymentId"]


class TestCreateEndpoint:
    """Test POST /api/payment/create."""

    @pytest.mark.asyncio
    async def test_create_returns_link(self, client, sample_payment_link_data):
        with at(NOW):
            response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["status"] == "pending"
        assert data["paymentLink"] == f"https://crosspay.test/payment/{data['paymentId']}"
        assert data["expiresAt"].startswith("2025-03-02T12:00:00")

    @pytest.mark.asyncio
    async def test_expiry_defaults_to_a_day(self, client, sample_payment_link_data):
        del sample_payment_link_data["expiresInHours"]

        with at(NOW):
            response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 200
        assert response.json()["data"]["expiresAt"].startswith("2025-03-02T12:00:00")

    @pytest.mark.asyncio
    async def test_fractional_expiry(self, client, sample_payment_link_data):
        sample_payment_link_data["expiresInHours"] = 1.5

        with at(NOW):
            response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 200
        assert response.json()["data"]["expiresAt"].startswith("2025-03-01T13:30:00")

    @pytest.mark.asyncio
    async def test_expiry_default_from_settings(self, client, sample_payment_link_data, test_settings):
        app.dependency_overrides[get_settings] = lambda: test_settings.model_copy(
            update={"default_expires_in_hours": 48}
        )
        del sample_payment_link_data["expiresInHours"]

        with at(NOW):
            response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 200
        assert response.json()["data"]["expiresAt"].startswith("2025-03-03T12:00:00")

    @pytest.mark.asyncio
    async def test_missing_field_is_rejected(self, client, sample_payment_link_data):
        del sample_payment_link_data["amount"]

        response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation error"
        assert "amount" in body["details"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, value", [
        ("recipientAddress", "0x1234"),
        ("amount", "1.5"),
        ("sourceChainId", 1),
        ("expiresInHours", 169),
    ])
    async def test_invalid_values_are_rejected(
        self, client, sample_payment_link_data, field, value
    ):
        sample_payment_link_data[field] = value

        response = await client.post("/api/payment/create", json=sample_payment_link_data)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation error"
        assert field in body["details"]


class TestValidateEndpoint:
    """Test POST /api/payment/validate."""

    @pytest.mark.asyncio
    async def test_recipient_address_is_case_insensitive(self, client, sample_payment_link_data):
        payment_id = await create(client, sample_payment_link_data)

        response = await client.post(
            "/api/payment/validate",
            json={"paymentId": payment_id, "recipientAddress": RECIPIENT.lower()},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["paymentId"] == payment_id
        assert data["creatorAddress"] == CREATOR
        assert data["amount"] == sample_payment_link_data["amount"]
        assert data["solverFee"] == sample_payment_link_data["solverFee"]
        assert "recipientAddress" not in data

    @pytest.mark.asyncio
    async def test_stranger_is_forbidden(self, client, sample_payment_link_data):
        payment_id = await create(client, sample_payment_link_data)

        response = await client.post(
            "/api/payment/validate",
            json={"paymentId": payment_id, "recipientAddress": STRANGER},
        )

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "You are not the authorized recipient for this payment"
        assert body["details"] == f"Expected: {RECIPIENT}, Got: {STRANGER}"
        assert body["message"] == "Only the intended recipient can process this payment"

    @pytest.mark.asyncio
    async def test_unknown_link(self, client):
        response = await client.post(
            "/api/payment/validate",
            json={"paymentId": str(uuid4()), "recipientAddress": RECIPIENT},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Payment link not found"

    @pytest.mark.asyncio
    async def test_malformed_payment_id(self, client):
        response = await client.post(
            "/api/payment/validate",
            json={"paymentId": "not-a-uuid", "recipientAddress": RECIPIENT},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    @pytest.mark.asyncio
    async def test_paid_link_is_no_longer_active(self, client, sample_payment_link_data):
        payment_id = await create(client, sample_payment_link_data)
        await client.post(
            "/api/payment/attempt",
            json={
                "paymentId": payment_id,
                "attemptAddress": RECIPIENT,
                "attemptChainId": 84532,
                "success": True,
                "transactionHash": "0xdead",
            },
        )

        response = await client.post(
            "/api/payment/validate",
            json={"paymentId": payment_id, "recipientAddress": RECIPIENT},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Payment link is no longer active"

    @pytest.mark.asyncio
    async def test_expired_link(self, client, sample_payment_link_data):
        sample_payment_link_data["expiresInHours"] = 1
        with at(NOW):
            payment_id = await create(client, sample_payment_link_data)

        with at(NOW + timedelta(hours=1, seconds=1)):
            response = await client.post(
                "/api/payment/validate",
                json={"paymentId": payment_id, "recipientAddress": RECIPIENT},
            )

        assert response.status_code == 400
        assert response.json()["error"] == "Payment link has expired"


class TestPublicDetails:
    """Test GET /api/payment/{paymentId}."""

    @pytest.mark.asyncio
    async def test_hides_addresses(self, client, sample_payment_link_data):
        payment_id = await create(client, sample_payment_link_data)

        response = await client.get(f"/api/payment/{payment_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["paymentId"] == payment_id
        assert data["status"] == "pending"
        assert "creatorAddress" not in data
        assert "recipientAddress" not in data

    @pytest.mark.asyncio
    async def test_unknown_link(self, client):
        response = await client.get(f"/api/payment/{uuid4()}")

        assert response.status_code == 404


class TestAttemptAndCreatorListing:
    """Test POST /api/payment/attempt and GET /api/payment/creator/{address}."""

    @pytest.mark.asyncio
    async def test_successful_attempt_completes_link(self, client, sample_payment_link_data):
        payment_id = await create(client, sample_payment_link_data)

        failed = await client.post(
            "/api/payment/attempt",
            json={
                "paymentId": payment_id,
                "attemptAddress": RECIPIENT,
                "attemptChainId": 84532,
                "success": False,
                "errorMessage": "user rejected",
            },
        )
        succeeded = await client.post(
            "/api/payment/attempt",
            json={
                "paymentId": payment_id,
                "attemptAddress": RECIPIENT,
                "attemptChainId": 84532,
                "success": True,
                "transactionHash": "0xdead",
            },
        )

        assert failed.status_code == 200
        assert failed.json()["data"]["errorMessage"] == "user rejected"
        assert succeeded.status_code == 200
        assert succeeded.json()["data"]["success"] is True

        response = await client.get(f"/api/payment/creator/{CREATOR}")

        assert response.status_code == 200
        [item] = response.json()["data"]["paymentLinks"]
        assert item["status"] == "completed"
        assert item["originalStatus"] == "paid"
        assert item["attemptCount"] == 2
        assert item["successfulAttempts"] == 1
        assert item["failedAttempts"] == 1
        assert item["completionDetails"]["transactionHash"] == "0xdead"
        assert item["completionDetails"]["attemptAddress"] == RECIPIENT
        assert item["paymentUrl"].endswith(payment_id)
        assert len(item["allAttempts"]) == 2

    @pytest.mark.asyncio
    async def test_attempt_for_unknown_link(self, client):
        response = await client.post(
            "/api/payment/attempt",
            json={
                "paymentId": str(uuid4()),
                "attemptAddress": RECIPIENT,
                "attemptChainId": 84532,
                "success": False,
            },
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pagination(self, client, sample_payment_link_data):
        for _ in range(3):
            await create(client, sample_payment_link_data)

        response = await client.get(
            f"/api/payment/creator/{CREATOR}", params={"limit": 2, "offset": 0}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["paymentLinks"]) == 2
        assert data["pagination"] == {"total": 3, "limit": 2, "offset": 0, "hasMore": True}

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, client):
        response = await client.get(f"/api/payment/creator/{CREATOR}", params={"limit": 500})

        assert response.status_code == 400
        assert "limit" in response.json()["details"]

    @pytest.mark.asyncio
    async def test_limit_maximum_from_settings(self, client, test_settings):
        app.dependency_overrides[get_settings] = lambda: test_settings.model_copy(
            update={"max_page_limit": 500}
        )

        response = await client.get(f"/api/payment/creator/{CREATOR}", params={"limit": 300})

        assert response.status_code == 200
        assert response.json()["data"]["pagination"]["limit"] == 300

    @pytest.mark.asyncio
    async def test_creator_without_links(self, client):
        response = await client.get(f"/api/payment/creator/{STRANGER}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["paymentLinks"] == []
        assert data["pagination"]["total"] == 0
        assert data["pagination"]["hasMore"] is False
