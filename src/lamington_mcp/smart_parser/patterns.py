"""Static pattern tables for specification parsing.

Pure data: every regex used by the parser lives here so the extraction
modules stay logic-only. All patterns are matched case-insensitively.
"""

import re

from ..models import ComponentCategory


# =============================================================================
# CATEGORY PATTERNS
# =============================================================================
# Each matching pattern counts as one vote for its category.

CATEGORY_PATTERNS: dict[ComponentCategory, tuple[re.Pattern, ...]] = {
    ComponentCategory.PROCESSOR: (
        re.compile(r'\b(cpu|processor|intel|amd|i[3579]|ryzen|core)\b', re.IGNORECASE),
        re.compile(r'\b(i[3579]-\d+[a-z]*|ryzen\s*[3579]|xeon|threadripper)\b', re.IGNORECASE),
    ),
    ComponentCategory.MEMORY: (
        re.compile(r'\b(ram|memory|ddr[345]|dimm|sodimm|so-dimm)\b', re.IGNORECASE),
        re.compile(r'\b(\d+\s*gb|\d+\s*mb)\b', re.IGNORECASE),
        re.compile(r'\b(pc\d+-\d+|ddr[345]-\d+)\b', re.IGNORECASE),
    ),
    ComponentCategory.GRAPHICS: (
        re.compile(r'\b(gpu|graphics|video|rtx|gtx|radeon|rx|vega)\b', re.IGNORECASE),
        re.compile(r'\b(rtx\s*\d+|gtx\s*\d+|rx\s*\d+|vega\s*\d+)\b', re.IGNORECASE),
    ),
    ComponentCategory.STORAGE: (
        re.compile(r'\b(ssd|hdd|nvme|sata|storage|drive)\b', re.IGNORECASE),
        re.compile(r'\b(\d+\s*tb|\d+\s*gb)\s*(ssd|hdd)\b', re.IGNORECASE),
    ),
    ComponentCategory.MOTHERBOARD: (
        re.compile(r'\b(motherboard|mobo|mainboard|mb)\b', re.IGNORECASE),
        re.compile(r'\b(lga\d+|am[45]|socket)\b', re.IGNORECASE),
    ),
    ComponentCategory.POWER_SUPPLY: (
        re.compile(r'\b(psu|power\s*supply|smps)\b', re.IGNORECASE),
        re.compile(r'\b(80\s*plus|modular|atx\s*12v)\b', re.IGNORECASE),
    ),
    ComponentCategory.COOLING: (
        re.compile(r'\b(cooler|cooling|fan|heatsink|radiator|aio|pump)\b', re.IGNORECASE),
        re.compile(r'\b(\d+\s*mm\s*fan|liquid\s*cool\w*|thermal\s*paste)\b', re.IGNORECASE),
    ),
}


# =============================================================================
# PART NUMBER PATTERNS
# =============================================================================
# Order matters! More specific patterns must come before the generic one.

PART_NUMBER_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r'\b(i[3579]-\d{4,5}[a-z]*)\b', re.IGNORECASE),
    re.compile(r'\b(ryzen\s*[3579]\s*\d{4}[a-z0-9]*)\b', re.IGNORECASE),
    re.compile(r'\b([rg]tx\s*\d{3,4}(?:\s*ti)?)\b', re.IGNORECASE),
    re.compile(r'\b(rx\s*\d{3,4}[a-z]*)\b', re.IGNORECASE),
    # Generic last resort: letters then digits (CMK16GX4M2D3200C16, WD10EZEX)
    re.compile(r'\b([a-z]+\d+[a-z0-9]*(?:-[a-z0-9]+)*)\b', re.IGNORECASE),
)

# Socket/interface tokens that look like part numbers but are not
NON_PART_TOKEN = re.compile(
    r'^(x\d+|ddr[345]|lga\d+|am[45]|fm[12]|pcie?\d*|sata\d*|usb\d*|nvme\d*|pc\d+)$',
    re.IGNORECASE,
)


# =============================================================================
# ELECTRICAL PATTERNS
# =============================================================================

VOLTAGE_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*v(?:olt)?s?\b', re.IGNORECASE)
FREQUENCY_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(mhz|ghz)\b', re.IGNORECASE)
POWER_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*w(?:att)?s?\b', re.IGNORECASE)
CURRENT_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*a(?:mp)?s?\b', re.IGNORECASE)


# =============================================================================
# PHYSICAL PATTERNS
# =============================================================================

_LENGTH_UNITS = r'(mm|cm|inch(?:es)?|in)'

WEIGHT_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(kilograms?|kg|grams?|g)\b', re.IGNORECASE)
LENGTH_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*' + _LENGTH_UNITS + r'\s*(?:long|length)\b', re.IGNORECASE)
WIDTH_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*' + _LENGTH_UNITS + r'\s*(?:wide|width)\b', re.IGNORECASE)
HEIGHT_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*' + _LENGTH_UNITS + r'\s*(?:high|height|tall)\b', re.IGNORECASE)

# Most specific first: "micro-atx" must not match plain "atx"
FORM_FACTOR_PATTERN = re.compile(
    r'\b(e-?atx|micro-?atx|mini-?itx|atx|so-?dimm|dimm|sfx|m\.2)(?![\w.])', re.IGNORECASE
)


# =============================================================================
# COMPATIBILITY PATTERNS
# =============================================================================

SOCKET_PATTERN = re.compile(r'\b(lga\s*\d+|am[45]|fm[12]|ddr[345]|socket\s*\w+)\b', re.IGNORECASE)
INTERFACE_PATTERN = re.compile(
    r'\b(pcie?\s*(?:x\d+|\d(?:\.\d)?)?|sata\s*[23]?|nvme|usb\s*[23](?:\.\d)?|usb|ddr[345])(?![\w.])',
    re.IGNORECASE,
)
PIN_PATTERN = re.compile(r'\b(\d+)\s*-?\s*pins?\b', re.IGNORECASE)
