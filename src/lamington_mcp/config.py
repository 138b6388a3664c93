"""Configuration for the Lamington Parts MCP server."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
MAX_QUERY_LENGTH = int(os.getenv("MAX_QUERY_LENGTH", "500"))
CURRENCY = "INR"

# Search / matching
MATCH_TOLERANCE = 0.10  # Relative tolerance for electrical fields (10%)
MAX_ALTERNATIVES = 5
ALTERNATIVE_MIN_SCORE = 0.5  # Minimum compatibility score for an alternative

# Compatibility score weights (must sum to 100)
COMPATIBILITY_WEIGHTS = {
    "category": 25,
    "electrical": 35,
    "compatibility": 40,
}
# Electrical sub-weights (must sum to COMPATIBILITY_WEIGHTS["electrical"])
ELECTRICAL_WEIGHTS = {
    "voltage": 10,
    "frequency": 15,
    "power": 10,
}
# Compatibility sub-weights (must sum to COMPATIBILITY_WEIGHTS["compatibility"])
INTERFACE_WEIGHTS = {
    "socket": 20,
    "interface": 20,
}

# Adapter compatibility weights (must sum to 100)
ADAPTER_WEIGHTS = {
    "category": 40,
    "voltage": 30,
    "power": 20,
    "interface": 10,
}
ADAPTER_VOLTAGE_PENALTY_PER_VOLT = 10  # Points lost per volt outside the window
ADAPTER_LOW_POWER_THRESHOLD = 10.0  # Watts below which adapter power is "uncertain"

# Workaround composer
WORKAROUND_DEGRADATION = 0.9
WORKAROUND_TOOLS_COST = 500
WORKAROUND_MATERIALS_COST = 200
WORKAROUND_EXTRA_MATCHES = 2  # Keep a few extra matches beyond the template minimum
SAFETY_MAX_VOLTAGE_RATIO = 2.0
SAFETY_MAX_TOTAL_CURRENT = 50.0  # Amps
SAFETY_COOLING_CAPACITY = 100.0  # Watts handled per cooling component
SAFETY_MAX_TOTAL_WEIGHT = 5000.0  # Grams
HIGH_POWER_WARNING_THRESHOLD = 500.0  # Watts

# Negotiation
MAX_DISCOUNT_PERCENTAGE = 50.0
MIN_DISCOUNT_PERCENTAGE = 0.0
MAX_THRESHOLDS_SHOWN = 3

# Gray market
GRAY_DISCOUNT_MIN = 0.10
GRAY_DISCOUNT_MAX = 0.40
PRICE_TREND_THRESHOLD = 0.05
DEFAULT_DELIVERY_DAYS = 7
