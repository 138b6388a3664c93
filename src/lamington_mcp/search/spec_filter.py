"""Matching predicates and compatibility scoring for inventory search."""

import re

from ..config import COMPATIBILITY_WEIGHTS, ELECTRICAL_WEIGHTS, INTERFACE_WEIGHTS, MATCH_TOLERANCE
from ..models import Component, ComponentSpecification
from ..scoring import Criterion, ScoringResult, relative_error, weighted_score


# Electrical fields compared by the filter. Current is filtered on but not
# scored, matching ELECTRICAL_WEIGHTS.
FILTERED_ELECTRICAL_FIELDS = ("voltage", "current", "frequency", "power")


def compact(text: str) -> str:
    """Lowercase and drop whitespace for loose identifier comparison."""
    return re.sub(r'\s+', '', text or '').lower()


def same_token(a: str, b: str) -> bool:
    """Case- and spacing-insensitive equality for socket/interface names."""
    return re.sub(r'\s+', ' ', a or '').strip().upper() == re.sub(r'\s+', ' ', b or '').strip().upper()


def part_number_matches(component: Component, query: ComponentSpecification) -> bool:
    if not query.has_part_number:
        return False
    return compact(query.part_number) in compact(component.part_number)


def within_tolerance(candidate: float, requested: float, tolerance: float = MATCH_TOLERANCE) -> bool:
    """True if requested is within tolerance of the candidate's own value."""
    return abs(candidate - requested) <= abs(candidate) * tolerance


def is_match(component: Component, query: ComponentSpecification) -> bool:
    """Decide whether an inventory component satisfies a parsed query.

    The category must match exactly. A part number hit accepts immediately;
    otherwise every electrical field the query set must be within tolerance
    and any socket/interface the query named must match.
    """
    if component.category != query.category:
        return False
    if part_number_matches(component, query):
        return True

    for name in FILTERED_ELECTRICAL_FIELDS:
        requested = getattr(query.electrical, name)
        if requested > 0 and not within_tolerance(getattr(component.electrical, name), requested):
            return False

    wanted = query.compatibility
    have = component.compatibility
    if wanted.socket_type and not same_token(have.socket_type, wanted.socket_type):
        return False
    if wanted.interface_type and not same_token(have.interface_type, wanted.interface_type):
        return False
    return True


def _electrical_fraction(candidate: float, requested: float, sub_weight: float) -> float:
    # Each percent of error costs one point of the sub-weight
    pct_error = relative_error(requested, candidate) * 100
    return max(0.0, 1 - pct_error / sub_weight)


def compatibility_score(component: Component, query: ComponentSpecification) -> ScoringResult:
    """Score how well a component fits the query, in [0, 1].

    Electrical and compatibility groups only count toward the total when the
    query actually specified something in them.
    """
    electrical_criteria = []
    for name, sub_weight in ELECTRICAL_WEIGHTS.items():
        requested = getattr(query.electrical, name)
        applicable = requested > 0
        fraction = _electrical_fraction(getattr(component.electrical, name), requested, sub_weight) if applicable else 0.0
        electrical_criteria.append(Criterion(name, sub_weight, fraction, applicable))

    wanted = query.compatibility
    have = component.compatibility
    interface_criteria = [
        Criterion("socket", INTERFACE_WEIGHTS["socket"],
                  1.0 if same_token(have.socket_type, wanted.socket_type) else 0.0,
                  bool(wanted.socket_type)),
        Criterion("interface", INTERFACE_WEIGHTS["interface"],
                  1.0 if same_token(have.interface_type, wanted.interface_type) else 0.0,
                  bool(wanted.interface_type)),
    ]

    electrical = weighted_score(electrical_criteria)
    interface = weighted_score(interface_criteria)
    return weighted_score([
        Criterion("category", COMPATIBILITY_WEIGHTS["category"],
                  1.0 if component.category == query.category else 0.0),
        Criterion("electrical", COMPATIBILITY_WEIGHTS["electrical"], electrical.score,
                  any(c.applicable for c in electrical_criteria)),
        Criterion("compatibility", COMPATIBILITY_WEIGHTS["compatibility"], interface.score,
                  any(c.applicable for c in interface_criteria)),
    ])
