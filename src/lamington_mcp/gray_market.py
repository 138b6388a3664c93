"""Gray-market pricing, availability and risk estimates.

Gray-market stock is imported outside the manufacturer's official channel:
cheaper, but with longer and less predictable delivery and little or no
warranty. All numbers here come from static tables keyed by category and
availability; there is no live market feed.
"""

import logging
from dataclasses import dataclass, field

from .config import DEFAULT_DELIVERY_DAYS, GRAY_DISCOUNT_MAX, GRAY_DISCOUNT_MIN, PRICE_TREND_THRESHOLD
from .models import AuthenticityLevel, AvailabilityStatus, Component, ComponentCategory
from .scoring import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricePoint:
    date: str  # ISO date
    official_price: float
    gray_market_price: float


@dataclass(frozen=True)
class SupplyChainInfo:
    average_delivery_days: float
    delivery_multiplier: float
    stock_volatility: float


@dataclass(frozen=True)
class RiskFactor:
    factor: str
    quality_impact: float
    warranty_impact: float
    compatibility_impact: float


@dataclass
class PriceAnalysis:
    gray_market_price: float
    official_price: float
    price_difference: float
    discount: float  # fraction of the official price
    trend_prediction: str  # rising / falling / stable
    price_history: list[PricePoint] = field(default_factory=list)


@dataclass(frozen=True)
class AvailabilityPrediction:
    expected_delivery_days: int
    stock_level: str  # high / medium / low / critical
    supply_chain_risk: float
    alternative_availability: bool


@dataclass
class RiskAssessment:
    quality_risk: float
    warranty_risk: float
    compatibility_risk: float
    overall_risk: float
    risk_factors: list[str] = field(default_factory=list)
    mitigation_suggestions: list[str] = field(default_factory=list)


PRICE_HISTORY: dict[str, tuple[PricePoint, ...]] = {
    "cpu-001": (
        PricePoint("2024-01-01", 25000, 20000),
        PricePoint("2024-02-01", 25000, 19500),
        PricePoint("2024-03-01", 24500, 19000),
        PricePoint("2024-04-01", 24000, 18800),
    ),
    "gpu-001": (
        PricePoint("2024-01-01", 55000, 41000),
        PricePoint("2024-02-01", 55000, 42500),
        PricePoint("2024-03-01", 56000, 44500),
    ),
}

SUPPLY_CHAIN: dict[ComponentCategory, SupplyChainInfo] = {
    ComponentCategory.PROCESSOR: SupplyChainInfo(7, 1.2, 0.3),
    ComponentCategory.GRAPHICS: SupplyChainInfo(10, 1.5, 0.5),
    ComponentCategory.MEMORY: SupplyChainInfo(5, 1.1, 0.2),
}
DEFAULT_STOCK_VOLATILITY = 0.3

GRAY_DISCOUNT: dict[ComponentCategory, float] = {
    ComponentCategory.PROCESSOR: 0.15,
    ComponentCategory.GRAPHICS: 0.25,
    ComponentCategory.MEMORY: 0.18,
}
DEFAULT_GRAY_DISCOUNT = 0.20
SCARCITY_DISCOUNT_REDUCTION = 0.05

DELIVERY_MULTIPLIER: dict[AvailabilityStatus, float] = {
    AvailabilityStatus.IN_STOCK: 0.8,
    AvailabilityStatus.LIMITED_STOCK: 1.2,
    AvailabilityStatus.OUT_OF_STOCK: 2.0,
    AvailabilityStatus.DISCONTINUED: 3.0,
    AvailabilityStatus.PRE_ORDER: 1.5,
    AvailabilityStatus.UNKNOWN: 1.0,
}

STOCK_LEVEL: dict[AvailabilityStatus, str] = {
    AvailabilityStatus.IN_STOCK: "high",
    AvailabilityStatus.LIMITED_STOCK: "medium",
    AvailabilityStatus.OUT_OF_STOCK: "low",
    AvailabilityStatus.DISCONTINUED: "critical",
    AvailabilityStatus.PRE_ORDER: "medium",
    AvailabilityStatus.UNKNOWN: "medium",
}

RISK_FACTORS: dict[ComponentCategory, tuple[RiskFactor, ...]] = {
    ComponentCategory.PROCESSOR: (
        RiskFactor("Counterfeit risk", 0.2, 0.1, 0.05),
        RiskFactor("Overclocking limitations", 0.1, 0.05, 0.1),
    ),
    ComponentCategory.GRAPHICS: (
        RiskFactor("Mining card risk", 0.3, 0.2, 0.05),
        RiskFactor("BIOS modification", 0.15, 0.25, 0.15),
    ),
}

BASE_QUALITY_RISK = 0.3
BASE_WARRANTY_RISK = 0.8
BASE_COMPATIBILITY_RISK = 0.2

QUALITY_RISK_THRESHOLD = 0.5
WARRANTY_RISK_THRESHOLD = 0.7
COMPATIBILITY_RISK_THRESHOLD = 0.3

QUALITY_RISK = "High quality risk due to gray market sourcing"
WARRANTY_RISK = "Limited or no manufacturer warranty"
COMPATIBILITY_RISK = "Potential compatibility issues with system components"
UNKNOWN_AUTHENTICITY = "Unknown authenticity level"

MITIGATIONS: dict[str, tuple[str, ...]] = {
    QUALITY_RISK: (
        "Request detailed photos and specifications before purchase",
        "Consider purchasing from reputable gray market vendors",
    ),
    WARRANTY_RISK: (
        "Negotiate for vendor warranty or return policy",
        "Consider extended warranty from third-party providers",
    ),
    COMPATIBILITY_RISK: (
        "Verify compatibility with existing system components",
        "Test component thoroughly upon receipt",
    ),
    UNKNOWN_AUTHENTICITY: (
        "Ask for the original invoice or import documents",
    ),
}
GENERAL_MITIGATIONS = (
    "Compare prices with multiple gray market sources",
    "Factor in potential replacement costs when budgeting",
)


# =============================================================================
# PRICING
# =============================================================================

def gray_market_discount(component: Component) -> float:
    discount = GRAY_DISCOUNT.get(component.category, DEFAULT_GRAY_DISCOUNT)
    if component.availability == AvailabilityStatus.OUT_OF_STOCK:
        discount -= SCARCITY_DISCOUNT_REDUCTION
    return clamp(discount, GRAY_DISCOUNT_MIN, GRAY_DISCOUNT_MAX)


def predict_price_trend(history: tuple[PricePoint, ...] | list[PricePoint]) -> str:
    """Compare the last three gray-market prices against a 5% band."""
    if len(history) < 2:
        return "stable"
    prices = [p.gray_market_price for p in history[-3:]]
    change = prices[-1] - prices[0]
    threshold = prices[0] * PRICE_TREND_THRESHOLD
    if change > threshold:
        return "rising"
    if change < -threshold:
        return "falling"
    return "stable"


def analyze_pricing(component: Component) -> PriceAnalysis:
    history = PRICE_HISTORY.get(component.id, ())
    official = component.pricing.retail_price
    discount = gray_market_discount(component)
    gray_price = official * (1 - discount)
    return PriceAnalysis(
        gray_market_price=gray_price,
        official_price=official,
        price_difference=official - gray_price,
        discount=discount,
        trend_prediction=predict_price_trend(history),
        price_history=list(history),
    )


# =============================================================================
# AVAILABILITY
# =============================================================================

def supply_chain_risk(component: Component) -> float:
    info = SUPPLY_CHAIN.get(component.category)
    risk = info.stock_volatility if info else DEFAULT_STOCK_VOLATILITY
    if component.authenticity == AuthenticityLevel.UNKNOWN:
        risk += 0.2
    return clamp(risk)


def predict_availability(component: Component) -> AvailabilityPrediction:
    """Estimate delivery time and stock outlook for a gray-market purchase."""
    info = SUPPLY_CHAIN.get(component.category)
    days = info.average_delivery_days if info else DEFAULT_DELIVERY_DAYS
    days *= DELIVERY_MULTIPLIER[component.availability]
    if info:
        days *= info.delivery_multiplier

    return AvailabilityPrediction(
        expected_delivery_days=round(days),
        stock_level=STOCK_LEVEL[component.availability],
        supply_chain_risk=supply_chain_risk(component),
        # Processors rarely have drop-in substitutes
        alternative_availability=component.category != ComponentCategory.PROCESSOR,
    )


# =============================================================================
# RISK
# =============================================================================

def identify_risk_factors(component: Component, quality: float, warranty: float, compatibility: float) -> list[str]:
    factors = []
    if quality > QUALITY_RISK_THRESHOLD:
        factors.append(QUALITY_RISK)
    if warranty > WARRANTY_RISK_THRESHOLD:
        factors.append(WARRANTY_RISK)
    if compatibility > COMPATIBILITY_RISK_THRESHOLD:
        factors.append(COMPATIBILITY_RISK)
    if component.authenticity == AuthenticityLevel.UNKNOWN:
        factors.append(UNKNOWN_AUTHENTICITY)
    return factors


def mitigation_suggestions(risk_factors: list[str]) -> list[str]:
    suggestions = []
    for factor in risk_factors:
        suggestions.extend(MITIGATIONS.get(factor, ()))
    suggestions.extend(GENERAL_MITIGATIONS)
    return suggestions


def assess_risks(component: Component) -> RiskAssessment:
    """Quality, warranty and compatibility risk of buying gray-market.

    Each risk starts from a base value, adds the category's risk factors and
    is clamped to [0, 1]; the overall risk is their mean.
    """
    quality = BASE_QUALITY_RISK
    warranty = BASE_WARRANTY_RISK
    compatibility = BASE_COMPATIBILITY_RISK
    for factor in RISK_FACTORS.get(component.category, ()):
        quality += factor.quality_impact
        warranty += factor.warranty_impact
        compatibility += factor.compatibility_impact

    quality, warranty, compatibility = clamp(quality), clamp(warranty), clamp(compatibility)
    factors = identify_risk_factors(component, quality, warranty, compatibility)
    logger.debug(f"Gray market risk {component.id}: q={quality:.2f} w={warranty:.2f} c={compatibility:.2f}")
    return RiskAssessment(
        quality_risk=quality,
        warranty_risk=warranty,
        compatibility_risk=compatibility,
        overall_risk=(quality + warranty + compatibility) / 3,
        risk_factors=factors,
        mitigation_suggestions=mitigation_suggestions(factors),
    )
