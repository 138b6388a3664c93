"""Inventory search engine: parse, filter, score and rank."""

import logging

from ..authenticity import calculate_authenticity_score
from ..catalog import Catalog, get_catalog
from ..config import ALTERNATIVE_MIN_SCORE, MAX_ALTERNATIVES
from ..models import AvailabilityStatus, Component, ComponentSpecification
from ..smart_parser import parse_specification
from .result import AlternativeSuggestion, SearchResult, alternative_reason, identify_trade_offs
from .spec_filter import compatibility_score, is_match

logger = logging.getLogger(__name__)


def quality_score(component: Component) -> float:
    """Authenticity confidence rescaled to [0, 1]."""
    return calculate_authenticity_score(component).confidence_score / 100


def find_alternatives(
    query: ComponentSpecification,
    catalog: Catalog,
    exclude: Component | None = None,
    limit: int = MAX_ALTERNATIVES,
) -> list[AlternativeSuggestion]:
    """Same-category components scoring at least ALTERNATIVE_MIN_SCORE.

    Args:
        query: Parsed query specification
        catalog: Inventory to draw from
        exclude: Component to leave out (usually the match itself)
        limit: Maximum number of suggestions

    Returns:
        Suggestions sorted by compatibility score, best first
    """
    suggestions = []
    for component in catalog.by_category(query.category):
        if exclude is not None and component.id == exclude.id:
            continue
        score = compatibility_score(component, query).score
        if score < ALTERNATIVE_MIN_SCORE:
            continue
        suggestions.append(AlternativeSuggestion(
            component=component,
            compatibility_score=score,
            reason=alternative_reason(component, query),
            trade_offs=identify_trade_offs(component, query),
        ))
    suggestions.sort(key=lambda s: s.compatibility_score, reverse=True)
    return suggestions[:limit]


def rank_results(results: list[SearchResult]) -> list[SearchResult]:
    """Compatibility desc, then quality desc, then availability rank desc."""
    return sorted(results, key=SearchResult.sort_key)


def search_components(query: str, catalog: Catalog | None = None) -> list[SearchResult]:
    """Search the inventory for a free-text specification.

    Ambiguous queries return a single clarification request without touching
    the inventory. Queries that match nothing return a single placeholder
    carrying alternatives.

    Args:
        query: Free-text specification, e.g. "Intel i7-12700K 3.6GHz LGA1700"
        catalog: Inventory to search (defaults to the global catalog)

    Returns:
        Ranked list of SearchResult (never empty)
    """
    if catalog is None:
        catalog = get_catalog()
    parsed = parse_specification(query)

    if parsed.is_ambiguous:
        logger.debug(f"Clarification needed for {query!r}: {parsed.ambiguities}")
        return [SearchResult(
            component=None,
            availability=AvailabilityStatus.UNKNOWN,
            requires_clarification=True,
            clarification_prompts=list(parsed.ambiguities),
        )]

    spec = parsed.spec
    matches = [c for c in catalog if is_match(c, spec)]

    if not matches:
        alternatives = find_alternatives(spec, catalog)
        logger.debug(f"No match for {query!r}, {len(alternatives)} alternatives")
        return [SearchResult(
            component=None,
            availability=AvailabilityStatus.OUT_OF_STOCK,
            location=catalog.section_for(spec.category),
            alternatives=alternatives,
        )]

    results = [
        SearchResult(
            component=component,
            availability=component.availability,
            location=component.location,
            compatibility_score=compatibility_score(component, spec).score,
            quality_score=quality_score(component),
            alternatives=find_alternatives(spec, catalog, exclude=component),
        )
        for component in matches
    ]
    logger.debug(f"{len(results)} matches for {query!r}")
    return rank_results(results)
