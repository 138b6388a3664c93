"""Electrical and physical value extraction for specification parsing.

Every value is normalized to the base unit used across the models:
volts, amps, MHz, watts, millimetres and grams. Fields that are not found
stay at 0.
"""

import re

from ..models import ElectricalParameters, PhysicalParameters
from .patterns import (
    CURRENT_PATTERN,
    FORM_FACTOR_PATTERN,
    FREQUENCY_PATTERN,
    HEIGHT_PATTERN,
    LENGTH_PATTERN,
    POWER_PATTERN,
    VOLTAGE_PATTERN,
    WEIGHT_PATTERN,
    WIDTH_PATTERN,
)


# Multipliers into the base unit
_FREQUENCY_UNITS = {"mhz": 1.0, "ghz": 1000.0}
_LENGTH_UNITS = {"mm": 1.0, "cm": 10.0, "in": 25.4, "inch": 25.4, "inches": 25.4}


def _weight_multiplier(unit: str) -> float:
    return 1000.0 if unit.lower().startswith("k") else 1.0


def _first_number(pattern: re.Pattern, text: str) -> float:
    match = pattern.search(text)
    return float(match.group(1)) if match else 0.0


def _scaled(pattern: re.Pattern, text: str, units: dict[str, float]) -> float:
    match = pattern.search(text)
    if not match:
        return 0.0
    return float(match.group(1)) * units.get(match.group(2).lower(), 1.0)


def extract_electrical(text: str) -> ElectricalParameters:
    """Extract voltage, current, frequency and power.

    Frequencies given in GHz are converted to MHz using the unit that was
    actually matched ("3.6GHz" -> 3600, "3200MHz" -> 3200).
    """
    return ElectricalParameters(
        voltage=_first_number(VOLTAGE_PATTERN, text),
        current=_first_number(CURRENT_PATTERN, text),
        frequency=_scaled(FREQUENCY_PATTERN, text, _FREQUENCY_UNITS),
        power=_first_number(POWER_PATTERN, text),
    )


def extract_physical(text: str) -> PhysicalParameters:
    """Extract dimensions, weight and form factor."""
    weight = 0.0
    match = WEIGHT_PATTERN.search(text)
    if match:
        weight = float(match.group(1)) * _weight_multiplier(match.group(2))

    form_factor = ""
    match = FORM_FACTOR_PATTERN.search(text)
    if match:
        form_factor = match.group(1).upper()

    return PhysicalParameters(
        length=_scaled(LENGTH_PATTERN, text, _LENGTH_UNITS),
        width=_scaled(WIDTH_PATTERN, text, _LENGTH_UNITS),
        height=_scaled(HEIGHT_PATTERN, text, _LENGTH_UNITS),
        weight=weight,
        form_factor=form_factor,
    )
