"""
Integration tests for the Transactions API.

These tests verify:
1. POST /v1/transactions/split with the default risk configuration
2. Advance status lookup when the flag is omitted
3. Error mapping (unknown store, invalid body, inconsistent config)
"""

import pytest
from httpx import AsyncClient
from structlog.testing import capture_logs


# =============================================================================
# POST /v1/transactions/split Tests
# =============================================================================

class TestSplitTransaction:
    """Tests for POST /v1/transactions/split endpoint."""

    @pytest.mark.asyncio
    async def test_active_advance_capped_by_sector(
        self,
        client: AsyncClient,
        low_risk_split_request: dict,
    ):
        """
        merch-001 is HIGH_SENSITIVITY (cap 2.2%) with an active advance.

        Default rates are 1.4% MDR + 0.7% margin + 0.8% repayment = 2.9%,
        so repayment is reduced to the remaining 0.1%.
        """
        response = await client.post("/v1/transactions/split", json=low_risk_split_request)

        assert response.status_code == 200

        data = response.json()
        assert data["cap_exceeded"] is True
        assert data["gross_amount"] == 100.00
        assert data["mdr_amount"] == 1.40
        assert data["qabum_margin_amount"] == 0.70
        assert data["repayment_amount"] == 0.10
        assert data["merchant_net_amount"] == 97.80
        assert data["effective_take_rate"] == pytest.approx(0.022)
        assert data["final_repayment_rate"] == pytest.approx(0.001)
        assert data["ethical_cap"] == 0.022
        assert data["sector"] == "HIGH_SENSITIVITY"

    @pytest.mark.asyncio
    async def test_capped_repayment_rounds_half_cent_up(
        self,
        client: AsyncClient,
        low_risk_split_request: dict,
    ):
        """0.1% of 5.00 is exactly half a cent and rounds up."""
        response = await client.post(
            "/v1/transactions/split",
            json={**low_risk_split_request, "transaction_amount": 5.00},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["repayment_amount"] == 0.01
        assert data["merchant_net_amount"] == 4.88

    @pytest.mark.asyncio
    async def test_no_active_advance_looked_up(self, client: AsyncClient):
        """merch-002 has no advance on record, so nothing goes to repayment."""
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-002",
                "transaction_amount": 100.00,
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["cap_exceeded"] is False
        assert data["repayment_amount"] == 0.0
        assert data["merchant_net_amount"] == 97.90
        assert data["sector"] == "STANDARD_PYME"

    @pytest.mark.asyncio
    async def test_explicit_flag_overrides_lookup(self, client: AsyncClient):
        """STANDARD_PYME (cap 2.7%) leaves 0.6% for repayment."""
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-002",
                "transaction_amount": 100.00,
                "has_active_advance": True,
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["cap_exceeded"] is True
        assert data["repayment_amount"] == 0.60
        assert data["merchant_net_amount"] == 97.30

    @pytest.mark.asyncio
    async def test_unknown_merchant_uses_fallback_cap(self, client: AsyncClient):
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-unknown",
                "transaction_amount": 50.00,
                "has_active_advance": True,
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["sector"] is None
        assert data["ethical_cap"] == 0.027

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client: AsyncClient, low_risk_split_request: dict):
        response = await client.post(
            "/v1/transactions/split",
            json=low_risk_split_request,
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"


class TestSplitErrors:
    """Error responses for the split endpoint."""

    @pytest.mark.asyncio
    async def test_unknown_store(self, client: AsyncClient):
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "xx-missing",
                "merchant_id": "merch-001",
                "transaction_amount": 100.00,
            },
        )

        assert response.status_code == 404
        assert response.json()["error"] == "STORE_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -5.0])
    async def test_non_positive_amount(self, client: AsyncClient, amount):
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-001",
                "transaction_amount": amount,
            },
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_blank_merchant_id(self, client: AsyncClient):
        response = await client.post(
            "/v1/transactions/split",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "   ",
                "transaction_amount": 100.00,
            },
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_inconsistent_config_rejected(
        self,
        client: AsyncClient,
        admin_headers: dict,
        low_risk_split_request: dict,
    ):
        """MDR 2.5% alone exceeds the 2.2% HIGH_SENSITIVITY cap."""
        current = (await client.get("/v1/risk-config", headers=admin_headers)).json()
        current["global"]["defaultMdr"] = 0.025
        update = await client.put("/v1/risk-config", json=current, headers=admin_headers)
        assert update.status_code == 200

        response = await client.post("/v1/transactions/split", json=low_risk_split_request)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "INCONSISTENT_RATE_CONFIGURATION"
        assert "HIGH_SENSITIVITY" in data["message"]

    @pytest.mark.asyncio
    async def test_inconsistent_config_logged_once(
        self,
        client: AsyncClient,
        admin_headers: dict,
        low_risk_split_request: dict,
    ):
        current = (await client.get("/v1/risk-config", headers=admin_headers)).json()
        current["global"]["defaultMdr"] = 0.025
        await client.put("/v1/risk-config", json=current, headers=admin_headers)

        with capture_logs() as logs:
            response = await client.post("/v1/transactions/split", json=low_risk_split_request)

        assert response.status_code == 422
        events = [entry for entry in logs if entry["event"] == "inconsistent_rate_configuration"]
        assert len(events) == 1
        assert events[0]["log_level"] == "error"
        assert events[0]["sector"] == "HIGH_SENSITIVITY"
