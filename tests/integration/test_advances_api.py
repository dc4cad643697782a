"""
Integration tests for the Advances and Merchants APIs.

These tests verify:
1. POST /v1/advances/eligibility for each risk band
2. POST /v1/merchants/snapshot
3. GET /v1/merchants/{merchant_id}/risk-profile
"""

import pytest
from httpx import AsyncClient


# =============================================================================
# POST /v1/advances/eligibility Tests
# =============================================================================

class TestAdvanceEligibility:
    """Tests for POST /v1/advances/eligibility endpoint."""

    @pytest.mark.asyncio
    async def test_low_risk_approved(
        self,
        client: AsyncClient,
        low_risk_advance_request: dict,
    ):
        """
        merch-001 averages 30,000/month with a long, clean history.

        LOW band, limit 30,000: a 25,000 request is approved in full.
        """
        response = await client.post("/v1/advances/eligibility", json=low_risk_advance_request)

        assert response.status_code == 200

        data = response.json()
        assert data["is_eligible"] is True
        assert data["approved_amount"] == 25000
        assert data["risk_profile"]["risk_band"] == "LOW"
        assert data["risk_profile"]["max_advance_limit"] == 30000
        assert data["risk_profile"]["reason_codes"] == ["LOW_RISK_PROFILE"]
        assert data["decision_reason"] == (
            "Requested: USD 25,000.00. Limit: USD 30,000.00. "
            "Approved: full requested amount."
        )
        assert data["estimated_payback_months"] > 0

    @pytest.mark.asyncio
    async def test_audit_fields(
        self,
        client: AsyncClient,
        low_risk_advance_request: dict,
    ):
        response = await client.post("/v1/advances/eligibility", json=low_risk_advance_request)

        data = response.json()
        assert data["merchant_sector_used"] == "HIGH_SENSITIVITY"
        assert data["ethical_cap_used"] == 0.022
        assert data["risk_config_version_used"] == 1
        assert data["risk_config_updated_at_used"] is not None

    @pytest.mark.asyncio
    async def test_medium_risk_within_limit(self, client: AsyncClient):
        response = await client.post(
            "/v1/advances/eligibility",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-002",
                "requested_amount": 3000,
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["is_eligible"] is True
        assert data["approved_amount"] == 3000
        assert data["risk_profile"]["risk_band"] == "MEDIUM"
        assert data["risk_profile"]["max_advance_limit"] == 3500

    @pytest.mark.asyncio
    async def test_high_risk_over_cap_rejected(
        self,
        client: AsyncClient,
        high_risk_advance_request: dict,
    ):
        """merch-003: HIGH band, limit 600, strict cap 300; 700 is rejected."""
        response = await client.post("/v1/advances/eligibility", json=high_risk_advance_request)

        assert response.status_code == 200

        data = response.json()
        assert data["is_eligible"] is False
        assert data["approved_amount"] == 0
        assert data["risk_profile"]["risk_band"] == "HIGH"
        assert data["risk_profile"]["max_advance_limit"] == 600
        assert "exceeds strict cap" in data["decision_reason"]

    @pytest.mark.asyncio
    async def test_unknown_merchant_not_eligible(self, client: AsyncClient):
        """A merchant with no history fails the activity gate."""
        response = await client.post(
            "/v1/advances/eligibility",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-new",
                "requested_amount": 100,
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["is_eligible"] is False
        assert data["risk_profile"]["max_advance_limit"] == 0
        assert data["decision_reason"].startswith("NOT ELIGIBLE")
        assert data["merchant_sector_used"] is None
        assert data["ethical_cap_used"] is None

    @pytest.mark.asyncio
    async def test_unknown_store(self, client: AsyncClient):
        response = await client.post(
            "/v1/advances/eligibility",
            json={
                "store_id": "xx-missing",
                "merchant_id": "merch-001",
                "requested_amount": 100,
            },
        )

        assert response.status_code == 404
        assert response.json()["error"] == "STORE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_non_positive_request(self, client: AsyncClient):
        response = await client.post(
            "/v1/advances/eligibility",
            json={
                "store_id": "ec-qabum-001",
                "merchant_id": "merch-001",
                "requested_amount": 0,
            },
        )

        assert response.status_code == 422


# =============================================================================
# Merchant Endpoints
# =============================================================================

class TestMerchantSnapshot:
    """Tests for POST /v1/merchants/snapshot endpoint."""

    @pytest.mark.asyncio
    async def test_known_merchant(self, client: AsyncClient):
        response = await client.post(
            "/v1/merchants/snapshot",
            json={"store_id": "ec-qabum-001", "merchant_id": "merch-002"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["average_monthly_volume"] == 5000
        assert data["months_active"] == 8
        assert data["sector"] == "STANDARD_PYME"

    @pytest.mark.asyncio
    async def test_unknown_merchant_gets_high_risk_default(self, client: AsyncClient):
        response = await client.post(
            "/v1/merchants/snapshot",
            json={"store_id": "ec-qabum-001", "merchant_id": "merch-new"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["average_monthly_volume"] == 0
        assert data["monthly_volatility_index"] == 1.0
        assert data["has_recent_drop"] is True
        assert data["failed_split_count"] == 10
        assert data["sector"] is None

    @pytest.mark.asyncio
    async def test_unknown_store(self, client: AsyncClient):
        response = await client.post(
            "/v1/merchants/snapshot",
            json={"store_id": "xx-missing", "merchant_id": "merch-001"},
        )

        assert response.status_code == 404


class TestRiskProfile:
    """Tests for GET /v1/merchants/{merchant_id}/risk-profile endpoint."""

    @pytest.mark.asyncio
    async def test_medium_profile(self, client: AsyncClient):
        response = await client.get(
            "/v1/merchants/merch-002/risk-profile",
            params={"store_id": "ec-qabum-001"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["risk_band"] == "MEDIUM"
        assert data["max_advance_limit"] == 3500
        assert data["reason_codes"] == [
            "HIGH_VOLATILITY",
            "INTERMEDIATE_HISTORY",
            "FAILED_SPLITS_LITE",
        ]
        # 0.008 band rate clamped to the 0.006 STANDARD_PYME headroom
        assert data["recommended_repayment_rate"] == pytest.approx(0.006)

    @pytest.mark.asyncio
    async def test_store_id_required(self, client: AsyncClient):
        response = await client.get("/v1/merchants/merch-002/risk-profile")

        assert response.status_code == 422
