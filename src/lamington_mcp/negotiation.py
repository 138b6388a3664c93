"""Bulk-price negotiation.

The recommended discount is the sum of four independent adjustments,
clamped to [MIN_DISCOUNT_PERCENTAGE, MAX_DISCOUNT_PERCENTAGE]:

- quantity tier (highest tier whose minimum quantity is reached)
- market adjustment for the category (tight supply costs a few percent)
- vendor relationship bonus
- seasonal adjustment for the month (year-end clearance, festival demand)
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from .config import MAX_DISCOUNT_PERCENTAGE, MAX_THRESHOLDS_SHOWN, MIN_DISCOUNT_PERCENTAGE
from .models import Component, ComponentCategory
from .scoring import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuantityTier:
    minimum_quantity: int
    discount_percentage: float
    tier_name: str


@dataclass(frozen=True)
class MarketCondition:
    supply_level: str
    demand_level: str
    competition_level: str
    volatility: str
    discount_adjustment: float


@dataclass(frozen=True)
class VendorProfile:
    name: str
    discount_bonus: float
    relationship_level: str = "New"


@dataclass(frozen=True)
class PriceBreakdown:
    quantity_discount: float
    market_adjustment: float
    vendor_bonus: float
    seasonal_adjustment: float

    @property
    def total(self) -> float:
        return self.quantity_discount + self.market_adjustment + self.vendor_bonus + self.seasonal_adjustment


@dataclass
class NegotiationResult:
    component_id: str
    quantity: int
    base_price: float
    recommended_price: float
    discount_percentage: float
    savings: float
    tier_name: str
    price_breakdown: PriceBreakdown
    quantity_thresholds: list[QuantityTier] = field(default_factory=list)
    market_conditions: dict[str, str] = field(default_factory=dict)
    negotiation_strategy: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NextThreshold:
    quantity: int
    unit_price: float
    additional_savings: float


@dataclass(frozen=True)
class QuantityOptimization:
    optimal_quantity: int
    total_cost: float
    unit_price: float
    savings_percentage: float
    next_threshold: NextThreshold | None = None


@dataclass(frozen=True)
class NegotiationStrategy:
    opening_offer: float
    fallback_positions: tuple[float, ...]
    leverage_points: tuple[str, ...]
    timing_advice: str
    negotiation_tactics: tuple[str, ...]


QUANTITY_TIERS: dict[ComponentCategory, tuple[QuantityTier, ...]] = {
    ComponentCategory.PROCESSOR: (
        QuantityTier(1, 0, "Retail"),
        QuantityTier(5, 8, "Small Bulk"),
        QuantityTier(10, 15, "Medium Bulk"),
        QuantityTier(25, 22, "Large Bulk"),
        QuantityTier(50, 30, "Wholesale"),
    ),
    ComponentCategory.MEMORY: (
        QuantityTier(1, 0, "Retail"),
        QuantityTier(4, 10, "Kit Discount"),
        QuantityTier(10, 18, "Small Bulk"),
        QuantityTier(20, 25, "Medium Bulk"),
        QuantityTier(50, 35, "Wholesale"),
    ),
}
RETAIL_TIER = QuantityTier(1, 0, "Retail")

MARKET_CONDITIONS: dict[ComponentCategory, MarketCondition] = {
    ComponentCategory.PROCESSOR: MarketCondition("Normal", "High", "Medium", "Low", -2),
    ComponentCategory.MEMORY: MarketCondition("High", "Medium", "High", "Medium", 3),
}
DEFAULT_MARKET = MarketCondition("Normal", "Medium", "Medium", "Low", 0)

VENDOR_PROFILES: dict[str, VendorProfile] = {
    "vendor_001": VendorProfile("Tech Bazaar", 2, "Good"),
}
DEFAULT_VENDOR = VendorProfile("Unknown", 0)

# Percentage points by calendar month (1 = January)
SEASONAL_FACTORS: dict[int, float] = {
    1: 2, 2: 1, 3: 0, 4: -1, 5: 0, 6: 1,
    7: -2, 8: -1, 9: 0, 10: -2, 11: -3, 12: -2,
}
YEAR_END_MONTHS = (11, 12)


def _current_month(month: int | None) -> int:
    return month if month is not None else date.today().month


def get_tiers(category: ComponentCategory) -> tuple[QuantityTier, ...]:
    return QUANTITY_TIERS.get(category, ())


def quantity_tier(category: ComponentCategory, quantity: int) -> QuantityTier:
    """Highest tier whose minimum quantity is reached (retail if none)."""
    applicable = RETAIL_TIER
    for tier in get_tiers(category):
        if quantity >= tier.minimum_quantity:
            applicable = tier
    return applicable


def market_condition(category: ComponentCategory) -> MarketCondition:
    return MARKET_CONDITIONS.get(category, DEFAULT_MARKET)


def vendor_profile(vendor_id: str | None) -> VendorProfile:
    if not vendor_id:
        return DEFAULT_VENDOR
    return VENDOR_PROFILES.get(vendor_id, DEFAULT_VENDOR)


def seasonal_adjustment(month: int | None = None) -> float:
    return SEASONAL_FACTORS.get(_current_month(month), 0)


def next_thresholds(category: ComponentCategory, quantity: int) -> list[QuantityTier]:
    return [t for t in get_tiers(category) if t.minimum_quantity > quantity][:MAX_THRESHOLDS_SHOWN]


def _strategy_notes(quantity: int, discount: float) -> list[str]:
    notes = []
    if quantity >= 10:
        notes.append("Emphasize bulk purchase benefits")
    if discount < 15:
        notes.append("Negotiate for better pricing based on market conditions")
    notes.append("Consider payment terms as negotiation leverage")
    notes.append("Bundle with other components for better deals")
    return notes


def _seasonal_trend(adjustment: float) -> str:
    if adjustment > 0:
        return "Favorable"
    if adjustment < 0:
        return "Unfavorable"
    return "Neutral"


def calculate_discount(
    component: Component,
    quantity: int,
    vendor_id: str | None = None,
    month: int | None = None,
) -> NegotiationResult:
    """Recommended price for buying `quantity` units of a component.

    Args:
        component: Component being bought
        quantity: Number of units
        vendor_id: Known vendor profile id (unknown vendors get no bonus)
        month: Calendar month 1-12 for the seasonal factor (default: today)

    Returns:
        NegotiationResult where recommended_price == base_price * (1 - discount/100)
    """
    base_price = component.pricing.retail_price
    tier = quantity_tier(component.category, quantity)
    market = market_condition(component.category)
    vendor = vendor_profile(vendor_id)
    seasonal = seasonal_adjustment(month)

    breakdown = PriceBreakdown(
        quantity_discount=tier.discount_percentage,
        market_adjustment=market.discount_adjustment,
        vendor_bonus=vendor.discount_bonus,
        seasonal_adjustment=seasonal,
    )
    discount = clamp(breakdown.total, MIN_DISCOUNT_PERCENTAGE, MAX_DISCOUNT_PERCENTAGE)
    recommended = base_price * (1 - discount / 100)

    logger.debug(
        f"Negotiation {component.id} x{quantity}: tier {tier.tier_name} {tier.discount_percentage}%, "
        f"market {market.discount_adjustment:+}, vendor {vendor.discount_bonus:+}, "
        f"season {seasonal:+} -> {discount}%"
    )
    return NegotiationResult(
        component_id=component.id,
        quantity=quantity,
        base_price=base_price,
        recommended_price=recommended,
        discount_percentage=discount,
        savings=base_price - recommended,
        tier_name=tier.tier_name,
        price_breakdown=breakdown,
        quantity_thresholds=next_thresholds(component.category, quantity),
        market_conditions={
            "supply_level": market.supply_level,
            "demand_level": market.demand_level,
            "competition_level": market.competition_level,
            "seasonal_trend": _seasonal_trend(seasonal),
            "market_volatility": market.volatility,
        },
        negotiation_strategy=_strategy_notes(quantity, discount),
    )


def optimize_quantity(component: Component, budget: float, month: int | None = None) -> QuantityOptimization:
    """Most units the budget buys, checking retail and every tier boundary.

    Ties on quantity go to the lower unit price. A zero retail price yields
    an all-zero result.
    """
    base_price = component.pricing.retail_price
    if base_price <= 0 or budget <= 0:
        return QuantityOptimization(0, 0.0, 0.0, 0.0)

    # Below the first tier the market and seasonal adjustments still apply
    retail = calculate_discount(component, 1, month=month)
    best_price = retail.recommended_price
    best_quantity = int(budget // best_price)
    best_discount = retail.discount_percentage

    for tier in get_tiers(component.category):
        result = calculate_discount(component, tier.minimum_quantity, month=month)
        price = result.recommended_price
        if price <= 0 or price * tier.minimum_quantity > budget:
            continue
        quantity = int(budget // price)
        if quantity > best_quantity or (quantity == best_quantity and price < best_price):
            best_quantity = quantity
            best_price = price
            best_discount = result.discount_percentage

    threshold = None
    for tier in get_tiers(component.category):
        if tier.minimum_quantity > best_quantity:
            tier_price = calculate_discount(component, tier.minimum_quantity, month=month)
            threshold = NextThreshold(
                quantity=tier.minimum_quantity,
                unit_price=tier_price.recommended_price,
                additional_savings=tier_price.discount_percentage - best_discount,
            )
            break

    return QuantityOptimization(
        optimal_quantity=best_quantity,
        total_cost=best_quantity * best_price,
        unit_price=best_price,
        savings_percentage=best_discount,
        next_threshold=threshold,
    )


def generate_strategy(
    component: Component,
    quantity: int,
    target_price: float | None = None,
    month: int | None = None,
) -> NegotiationStrategy:
    """Opening offer, fallback positions and talking points for a purchase."""
    result = calculate_discount(component, quantity, month=month)
    recommended = result.recommended_price
    market = market_condition(component.category)

    if target_price:
        opening = min(target_price, recommended * 0.85)
    else:
        opening = recommended * 0.8

    leverage = []
    if quantity >= 20:
        leverage.append("Large quantity order")
    if market.supply_level == "High":
        leverage.append("High supply market conditions")
    leverage.extend(["Cash payment terms", "Repeat customer potential"])

    if market.volatility == "High":
        timing = "Consider waiting for market stabilization"
    elif _current_month(month) in YEAR_END_MONTHS:
        timing = "Good time to negotiate due to year-end clearance"
    else:
        timing = "Current timing is neutral for negotiations"

    tactics = ["Start with bulk quantity emphasis", "Mention competitive quotes", "Offer quick payment terms"]
    if result.discount_percentage < 10:
        tactics.append("Request additional services or warranties")

    return NegotiationStrategy(
        opening_offer=opening,
        fallback_positions=tuple(recommended * f for f in (0.85, 0.9, 0.95, 1.0)),
        leverage_points=tuple(leverage),
        timing_advice=timing,
        negotiation_tactics=tuple(tactics),
    )
