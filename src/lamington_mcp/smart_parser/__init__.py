"""Smart parser package for free-text hardware specifications.

Turns strings like these into structured specifications:
- "Intel i7-12700K 3.6GHz LGA1700" -> processor, part i7-12700K, 3600 MHz, LGA1700
- "DDR4 16GB 3200MHz DIMM" -> memory, 3200 MHz, socket DDR4, form factor DIMM
- "RTX 4070 200W PCIe 4.0" -> graphics, part RTX4070, 200 W, PCIE 4.0

Key features:
1. Category voting over per-category pattern tables
2. Ordered part number patterns (specific before generic)
3. Unit normalization (GHz -> MHz, kg -> g, cm/inch -> mm)
4. Confidence, ambiguity prompts and validation errors per parse
"""

from .parser import (
    ParsedSpecification,
    extract_technical_data,
    parse_specification,
    validate_parameters,
    validation_errors,
)
from .patterns import CATEGORY_PATTERNS, PART_NUMBER_PATTERNS
from .models import extract_part_number
from .types import identify_category
from .values import extract_electrical, extract_physical
from .compatibility import extract_compatibility, normalize_interface, normalize_socket

__all__ = [
    # Main API
    "parse_specification",
    "extract_technical_data",
    "validate_parameters",
    "validation_errors",
    "ParsedSpecification",
    # Pattern constants
    "CATEGORY_PATTERNS",
    "PART_NUMBER_PATTERNS",
    # Extraction functions
    "identify_category",
    "extract_part_number",
    "extract_electrical",
    "extract_physical",
    "extract_compatibility",
    "normalize_interface",
    "normalize_socket",
]
