"""Part number detection for specification parsing."""

import re

from ..models import UNKNOWN_PART_NUMBER
from .patterns import NON_PART_TOKEN, PART_NUMBER_PATTERNS


def extract_part_number(text: str) -> str:
    """Extract the most likely part number from a specification string.

    Patterns are tried in order and the first acceptable match wins. Internal
    whitespace is removed but the caller's casing is kept, so "RTX 4070"
    becomes "RTX4070".

    Args:
        text: The specification text

    Returns:
        The part number, or UNKNOWN_PART_NUMBER when nothing matches.
    """
    for pattern in PART_NUMBER_PATTERNS:
        for match in pattern.finditer(text):
            candidate = re.sub(r'\s+', '', match.group(1))
            # Socket and bus names (LGA1700, DDR4, PCIe4, x16) are not part numbers
            if NON_PART_TOKEN.match(candidate):
                continue
            return candidate
    return UNKNOWN_PART_NUMBER
