"""Component category detection for specification parsing."""

from ..models import ComponentCategory, DEFAULT_CATEGORY
from .patterns import CATEGORY_PATTERNS


def count_category_matches(text: str) -> dict[ComponentCategory, int]:
    """Count how many patterns of each category match the text.

    Only categories with at least one match are returned.
    """
    counts: dict[ComponentCategory, int] = {}
    for category, patterns in CATEGORY_PATTERNS.items():
        hits = sum(1 for pattern in patterns if pattern.search(text))
        if hits:
            counts[category] = hits
    return counts


def identify_category(text: str) -> ComponentCategory:
    """Pick the category with the most pattern matches.

    A tie for first place is treated the same as no match at all and falls
    back to DEFAULT_CATEGORY.

    Examples:
        "Intel i7-12700K 3.6GHz LGA1700" -> processor (2 votes vs motherboard 1)
        "DDR4 16GB 3200MHz DIMM" -> memory
        "blue box" -> peripherals
    """
    counts = count_category_matches(text)
    if not counts:
        return DEFAULT_CATEGORY

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return DEFAULT_CATEGORY
    return ranked[0][0]
