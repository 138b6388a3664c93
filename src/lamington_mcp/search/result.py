"""Search result types and transformation helpers."""

from dataclasses import dataclass, field

from ..models import AvailabilityStatus, Component, ComponentSpecification, MarketLocation, DEFAULT_LOCATION
from .spec_filter import same_token


# Tertiary ranking key: higher sorts first
AVAILABILITY_RANK: dict[AvailabilityStatus, int] = {
    AvailabilityStatus.IN_STOCK: 3,
    AvailabilityStatus.LIMITED_STOCK: 2,
    AvailabilityStatus.OUT_OF_STOCK: 1,
    AvailabilityStatus.PRE_ORDER: 1,
    AvailabilityStatus.DISCONTINUED: 0,
    AvailabilityStatus.UNKNOWN: 0,
}


@dataclass
class AlternativeSuggestion:
    component: Component
    compatibility_score: float
    reason: str
    trade_offs: list[str] = field(default_factory=list)


@dataclass
class SearchResult:
    """One ranked search hit, a no-match placeholder, or a clarification request.

    Placeholders and clarification requests carry no component.
    """
    component: Component | None
    availability: AvailabilityStatus
    location: MarketLocation = DEFAULT_LOCATION
    compatibility_score: float = 0.0
    quality_score: float = 0.0
    requires_clarification: bool = False
    clarification_prompts: list[str] = field(default_factory=list)
    alternatives: list[AlternativeSuggestion] = field(default_factory=list)

    def sort_key(self) -> tuple[float, float, int]:
        return (-self.compatibility_score, -self.quality_score, -AVAILABILITY_RANK[self.availability])


def alternative_reason(component: Component, query: ComponentSpecification) -> str:
    reasons = []
    if component.category == query.category:
        reasons.append("Same component category")
    wanted = query.compatibility
    if wanted.socket_type and same_token(component.compatibility.socket_type, wanted.socket_type):
        reasons.append("Compatible socket type")
    if wanted.interface_type and same_token(component.compatibility.interface_type, wanted.interface_type):
        reasons.append("Compatible interface")
    return ", ".join(reasons) or "Similar specifications"


def identify_trade_offs(component: Component, query: ComponentSpecification) -> list[str]:
    trade_offs = []
    requested = query.electrical
    have = component.electrical
    if requested.frequency and have.frequency < requested.frequency:
        trade_offs.append("Lower frequency than requested")
    if requested.power and have.power > requested.power:
        trade_offs.append("Higher power consumption")
    if requested.voltage and have.voltage != requested.voltage:
        trade_offs.append("Different operating voltage")
    if component.availability not in (AvailabilityStatus.IN_STOCK, AvailabilityStatus.LIMITED_STOCK):
        trade_offs.append(f"Availability: {component.availability.value.replace('_', ' ')}")
    return trade_offs
