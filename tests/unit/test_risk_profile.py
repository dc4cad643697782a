"""
Unit Tests for the Risk Profiler.

These tests verify:
1. Band classification order (LOW, MEDIUM, HIGH)
2. Diagnostic reason codes per band
3. Advance limit calculation and flooring
4. Repayment rate clamping to the sector's ethical cap
"""

import pytest

from src.domain.entities import (
    GlobalParams,
    MerchantSalesSnapshot,
    MerchantSector,
    RiskBand,
    RiskConfig,
    SectorCapConfig,
)
from src.service.engine import (
    EngineSettings,
    calculate_advance_limit,
    classify_band,
    default_risk_config,
    derive_risk_profile,
    effective_advance_multiple,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_snapshot(
    volume: float = 30000,
    volatility: float = 0.15,
    months_active: int = 24,
    recent_active_months: int = 3,
    has_recent_drop: bool = False,
    failed_splits: int = 0,
    sector: MerchantSector = MerchantSector.HIGH_SENSITIVITY,
) -> MerchantSalesSnapshot:
    return MerchantSalesSnapshot(
        merchant_id="merch-test",
        store_id="ec-qabum-001",
        average_monthly_volume=volume,
        monthly_volatility_index=volatility,
        months_active=months_active,
        recent_active_months=recent_active_months,
        has_recent_drop=has_recent_drop,
        failed_split_count=failed_splits,
        sector=sector,
    )


def config_with(max_multiple: float = 1.0, sector_multiples: dict = None) -> RiskConfig:
    base = default_risk_config()
    sector_multiples = sector_multiples or {}
    return RiskConfig(
        version=1,
        global_params=GlobalParams(
            **{
                **base.global_params.__dict__,
                "max_advance_multiple_of_avg_monthly_sales": max_multiple,
            }
        ),
        sector_caps={
            sector: SectorCapConfig(
                ethical_cap=cap.ethical_cap,
                max_advance_multiple_of_avg_monthly_sales=sector_multiples.get(sector),
            )
            for sector, cap in base.sector_caps.items()
        },
    )


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def config() -> RiskConfig:
    return default_risk_config()


# =============================================================================
# Band Classification
# =============================================================================

class TestClassifyBand:
    """Tests for first-match band classification."""

    def test_low_risk(self, config, settings):
        assessment = classify_band(make_snapshot(), config, settings)

        assert assessment.risk_band == RiskBand.LOW
        assert assessment.reason_codes == ["LOW_RISK_PROFILE"]
        assert assessment.limit_multiplier == 1.0
        assert assessment.loss_provision_rate == 0.01

    @pytest.mark.parametrize(
        "overrides",
        [
            {"volume": 7999},
            {"volatility": 0.31},
            {"months_active": 11},
            {"has_recent_drop": True},
            {"failed_splits": 1},
        ],
    )
    def test_any_low_condition_missing_falls_to_medium(self, overrides, config, settings):
        assessment = classify_band(make_snapshot(**overrides), config, settings)

        assert assessment.risk_band == RiskBand.MEDIUM

    def test_medium_reason_codes(self, config, settings):
        """Volatility, intermediate history and failed splits are all flagged."""
        snapshot = make_snapshot(volume=5000, volatility=0.45, months_active=8, failed_splits=1)

        assessment = classify_band(snapshot, config, settings)

        assert assessment.risk_band == RiskBand.MEDIUM
        assert assessment.reason_codes == [
            "HIGH_VOLATILITY",
            "INTERMEDIATE_HISTORY",
            "FAILED_SPLITS_LITE",
        ]
        assert assessment.limit_multiplier == 0.7
        assert assessment.repayment_rate == 0.008

    def test_medium_without_flags(self, config, settings):
        snapshot = make_snapshot(volume=5000, volatility=0.2, months_active=18)

        assessment = classify_band(snapshot, config, settings)

        assert assessment.risk_band == RiskBand.MEDIUM
        assert assessment.reason_codes == []

    def test_high_risk_reason_codes(self, config, settings):
        snapshot = make_snapshot(
            volume=1500,
            volatility=0.70,
            months_active=3,
            has_recent_drop=True,
            failed_splits=3,
        )

        assessment = classify_band(snapshot, config, settings)

        assert assessment.risk_band == RiskBand.HIGH
        assert assessment.reason_codes == [
            "LOW_VOLUME",
            "SHORT_HISTORY",
            "RECENT_DROP",
            "FAILED_SPLITS_HIGH",
            "CRITICAL_VOLATILITY",
        ]
        assert assessment.limit_multiplier == 0.4
        assert assessment.loss_provision_rate == 0.06

    def test_high_risk_uses_configured_repayment_rate(self, config, settings):
        assessment = classify_band(make_snapshot(volume=1000), config, settings)

        assert assessment.risk_band == RiskBand.HIGH
        assert assessment.repayment_rate == config.global_params.default_repayment_rate

    def test_reason_codes_never_change_band(self, config, settings):
        """Two failed splits do not raise FAILED_SPLITS_HIGH; the band is still HIGH."""
        assessment = classify_band(
            make_snapshot(volume=2000, failed_splits=2),
            config,
            settings,
        )

        assert assessment.risk_band == RiskBand.HIGH
        assert "FAILED_SPLITS_HIGH" not in assessment.reason_codes
        assert assessment.reason_codes == ["LOW_VOLUME"]


# =============================================================================
# Advance Limit
# =============================================================================

class TestAdvanceLimit:
    """Tests for the floored advance limit."""

    def test_low_limit_is_one_month_of_volume(self, config):
        assert calculate_advance_limit(make_snapshot(volume=30000), 1.0, config) == 30000

    def test_medium_limit_floors_exactly(self, config):
        """5000 x 0.7 is 3500, not 3499."""
        assert calculate_advance_limit(make_snapshot(volume=5000), 0.7, config) == 3500

    def test_high_limit(self, config):
        assert calculate_advance_limit(make_snapshot(volume=1500), 0.4, config) == 600

    def test_fractional_limit_floors(self, config):
        assert calculate_advance_limit(make_snapshot(volume=1234.99), 0.4, config) == 493

    def test_zero_volume_gives_zero_limit(self, config):
        assert calculate_advance_limit(make_snapshot(volume=0), 1.0, config) == 0

    def test_global_multiple_caps_band_multiplier(self):
        config = config_with(max_multiple=0.5)

        assert calculate_advance_limit(make_snapshot(volume=10000), 1.0, config) == 5000

    def test_sector_multiple_can_only_lower(self):
        config = config_with(
            max_multiple=0.8,
            sector_multiples={
                MerchantSector.HIGH_SENSITIVITY: 0.3,
                MerchantSector.STANDARD_PYME: 5.0,
            },
        )

        assert effective_advance_multiple(config, MerchantSector.HIGH_SENSITIVITY) == 0.3
        assert effective_advance_multiple(config, MerchantSector.STANDARD_PYME) == 0.8
        assert effective_advance_multiple(config, MerchantSector.HIGH_MARGIN_SERVICE) == 0.8
        assert effective_advance_multiple(config, None) == 0.8


# =============================================================================
# Risk Profile
# =============================================================================

class TestDeriveRiskProfile:
    """Tests for the complete profile, including the ethical clamp."""

    def test_low_profile_rate_clamped_to_headroom(self, config, settings):
        """HIGH_SENSITIVITY leaves 0.022 - 0.021 = 0.001 for repayment."""
        profile = derive_risk_profile(make_snapshot(), config, settings)

        assert profile.risk_band == RiskBand.LOW
        assert profile.max_advance_limit == 30000
        assert profile.recommended_repayment_rate == pytest.approx(0.001)
        assert profile.reason_codes == ["LOW_RISK_PROFILE"]

    def test_rate_below_headroom_is_kept(self, config, settings):
        snapshot = make_snapshot(volume=1500, sector=MerchantSector.HIGH_MARGIN_SERVICE)

        profile = derive_risk_profile(snapshot, config, settings)

        # HIGH band uses the configured 0.008; headroom is 0.030 - 0.021 = 0.009
        assert profile.risk_band == RiskBand.HIGH
        assert profile.recommended_repayment_rate == 0.008

    def test_unknown_sector_is_not_clamped(self, config, settings):
        profile = derive_risk_profile(make_snapshot(sector=None), config, settings)

        assert profile.recommended_repayment_rate == settings.low_repayment_rate

    @pytest.mark.parametrize("sector", list(MerchantSector))
    def test_profile_rate_respects_cap(self, sector, config, settings):
        profile = derive_risk_profile(make_snapshot(sector=sector), config, settings)

        cap = config.sector_caps[sector].ethical_cap
        fixed = config.global_params.default_mdr + config.global_params.default_qabum_margin_cap
        assert fixed + profile.recommended_repayment_rate <= cap + 1e-9

    def test_inconsistent_config_floors_rate_without_raising(self, settings):
        """The profiler only ever lowers the rate; it never raises."""
        base = default_risk_config()
        config = RiskConfig(
            version=1,
            global_params=GlobalParams(**{**base.global_params.__dict__, "default_mdr": 0.030}),
            sector_caps=base.sector_caps,
        )

        profile = derive_risk_profile(make_snapshot(), config, settings)

        assert profile.recommended_repayment_rate == 0.0

    def test_unknown_merchant_snapshot_is_high_risk(self, config, settings):
        snapshot = MerchantSalesSnapshot.unknown("ec-qabum-001", "nobody")

        profile = derive_risk_profile(snapshot, config, settings)

        assert profile.risk_band == RiskBand.HIGH
        assert profile.max_advance_limit == 0
        assert "LOW_VOLUME" in profile.reason_codes
        assert "FAILED_SPLITS_HIGH" in profile.reason_codes
