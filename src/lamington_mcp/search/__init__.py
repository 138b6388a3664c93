"""Search package for matching free-text specifications against inventory.

This package provides the search engine plus the matching predicates and
compatibility scoring it ranks with.
"""

from .engine import find_alternatives, quality_score, rank_results, search_components
from .spec_filter import compatibility_score, is_match, part_number_matches, within_tolerance
from .result import AVAILABILITY_RANK, AlternativeSuggestion, SearchResult

__all__ = [
    "search_components",
    "find_alternatives",
    "rank_results",
    "quality_score",
    "compatibility_score",
    "is_match",
    "part_number_matches",
    "within_tolerance",
    "AVAILABILITY_RANK",
    "AlternativeSuggestion",
    "SearchResult",
]
