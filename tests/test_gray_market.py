"""Tests for gray-market pricing, availability and risk."""

from dataclasses import replace

import pytest

from lamington_mcp.catalog import build_catalog
from lamington_mcp.gray_market import (
    DELIVERY_MULTIPLIER,
    GENERAL_MITIGATIONS,
    QUALITY_RISK,
    STOCK_LEVEL,
    UNKNOWN_AUTHENTICITY,
    WARRANTY_RISK,
    PricePoint,
    analyze_pricing,
    assess_risks,
    predict_availability,
    predict_price_trend,
)
from lamington_mcp.models import AuthenticityLevel, AvailabilityStatus


@pytest.fixture
def catalog():
    return build_catalog()


def _history(*prices: float) -> list[PricePoint]:
    return [PricePoint(f"2024-{i + 1:02d}-01", 0, p) for i, p in enumerate(prices)]


class TestPricing:
    """Tests for analyze_pricing and trend prediction."""

    def test_processor_discount(self, catalog):
        analysis = analyze_pricing(catalog.get("cpu-001"))
        assert analysis.discount == pytest.approx(0.15)
        assert analysis.gray_market_price == pytest.approx(21250)
        assert analysis.price_difference == pytest.approx(3750)
        assert len(analysis.price_history) == 4

    def test_scarcity_reduces_discount(self, catalog):
        analysis = analyze_pricing(catalog.get("cpu-004"))
        assert analysis.discount == pytest.approx(0.10)

    def test_discount_bounds(self, catalog):
        for component in catalog:
            assert 0.10 <= analyze_pricing(component).discount <= 0.40

    def test_recorded_trend(self, catalog):
        assert analyze_pricing(catalog.get("gpu-001")).trend_prediction == "rising"
        assert analyze_pricing(catalog.get("mb-001")).trend_prediction == "stable"

    @pytest.mark.parametrize("prices,expected", [
        ((100,), "stable"),
        ((100, 106), "rising"),
        ((100, 94), "falling"),
        ((100, 104), "stable"),
        ((50, 100, 95, 98), "stable"),
    ])
    def test_trend(self, prices, expected):
        assert predict_price_trend(_history(*prices)) == expected


class TestAvailability:
    """Tests for predict_availability."""

    def test_processor_in_stock(self, catalog):
        prediction = predict_availability(catalog.get("cpu-001"))
        # 7 days * 0.8 in stock * 1.2 supply chain
        assert prediction.expected_delivery_days == 7
        assert prediction.stock_level == "high"
        assert not prediction.alternative_availability

    def test_discontinued_storage(self, catalog):
        prediction = predict_availability(catalog.get("hdd-001"))
        assert prediction.expected_delivery_days == 21
        assert prediction.stock_level == "critical"
        assert prediction.alternative_availability

    def test_unknown_authenticity_raises_supply_risk(self, catalog):
        known = catalog.get("mem-001")
        unknown = replace(known, authenticity=AuthenticityLevel.UNKNOWN)
        assert predict_availability(unknown).supply_chain_risk == pytest.approx(
            predict_availability(known).supply_chain_risk + 0.2
        )

    def test_tables_cover_every_status(self):
        assert set(DELIVERY_MULTIPLIER) == set(AvailabilityStatus)
        assert set(STOCK_LEVEL) == set(AvailabilityStatus)


class TestRisks:
    """Tests for assess_risks."""

    def test_graphics_risks_clamped(self, catalog):
        risks = assess_risks(catalog.get("gpu-001"))
        assert risks.quality_risk == pytest.approx(0.75)
        assert risks.warranty_risk == pytest.approx(1.0)
        assert risks.compatibility_risk == pytest.approx(0.4)
        assert risks.overall_risk == pytest.approx((0.75 + 1.0 + 0.4) / 3)

    def test_memory_only_warranty_risk(self, catalog):
        risks = assess_risks(catalog.get("mem-001"))
        assert risks.risk_factors == [WARRANTY_RISK]
        assert risks.mitigation_suggestions[-len(GENERAL_MITIGATIONS):] == list(GENERAL_MITIGATIONS)

    def test_processor_factors(self, catalog):
        risks = assess_risks(catalog.get("cpu-001"))
        assert QUALITY_RISK in risks.risk_factors
        assert len(risks.risk_factors) == 3

    def test_unknown_authenticity_factor(self, catalog):
        component = replace(catalog.get("ssd-001"), authenticity=AuthenticityLevel.UNKNOWN)
        assert UNKNOWN_AUTHENTICITY in assess_risks(component).risk_factors

    def test_all_risks_bounded(self, catalog):
        for component in catalog:
            risks = assess_risks(component)
            for value in (risks.quality_risk, risks.warranty_risk, risks.compatibility_risk, risks.overall_risk):
                assert 0.0 <= value <= 1.0
