"""Main parser for free-text hardware specifications."""

import logging
import re
from dataclasses import dataclass, field

from ..models import (
    ComponentCategory,
    ComponentSpecification,
    DEFAULT_CATEGORY,
)
from ..scoring import clamp
from .compatibility import extract_compatibility
from .models import extract_part_number
from .types import identify_category
from .values import extract_electrical, extract_physical

logger = logging.getLogger(__name__)

# Confidence contributions
BASE_CONFIDENCE = 0.5
PART_NUMBER_BONUS = 0.3
CATEGORY_BONUS = 0.2
ELECTRICAL_BONUS = 0.2
COMPATIBILITY_BONUS = 0.1

AMBIGUOUS_CATEGORY = "Component category unclear - please specify processor, memory, graphics, etc."
MISSING_ELECTRICAL = "No electrical specifications found - please provide voltage, frequency, or power requirements"


@dataclass
class ParsedSpecification:
    """Result of parsing a specification string."""
    original_input: str
    spec: ComponentSpecification
    confidence: float = 0.0
    ambiguities: list[str] = field(default_factory=list)
    validation_errors: list[str] = field(default_factory=list)

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.ambiguities)


def _normalize(text: str) -> str:
    return re.sub(r'\s+', ' ', text or '').strip()


def _confidence(spec: ComponentSpecification) -> float:
    score = BASE_CONFIDENCE
    if spec.has_part_number:
        score += PART_NUMBER_BONUS
    if spec.category != DEFAULT_CATEGORY:
        score += CATEGORY_BONUS
    if spec.electrical.has_any():
        score += ELECTRICAL_BONUS
    if spec.compatibility.socket_type or spec.compatibility.interface_type:
        score += COMPATIBILITY_BONUS
    return clamp(score)


def _ambiguities(spec: ComponentSpecification) -> list[str]:
    found = []
    if spec.category == DEFAULT_CATEGORY and not spec.has_part_number:
        found.append(AMBIGUOUS_CATEGORY)
    if not spec.electrical.has_any():
        found.append(MISSING_ELECTRICAL)
    return found


def validation_errors(spec: ComponentSpecification) -> list[str]:
    """List every rule the specification breaks (empty when valid)."""
    errors = []
    numeric = {
        "voltage": spec.electrical.voltage,
        "current": spec.electrical.current,
        "frequency": spec.electrical.frequency,
        "power": spec.electrical.power,
        "length": spec.physical.length,
        "width": spec.physical.width,
        "height": spec.physical.height,
        "weight": spec.physical.weight,
    }
    for name, value in numeric.items():
        if value < 0:
            errors.append(f"Invalid {name}: {value} (must not be negative)")

    if spec.category == ComponentCategory.PROCESSOR and spec.electrical.frequency <= 0:
        errors.append("Processor frequency is required")
    elif spec.category == ComponentCategory.MEMORY and not spec.compatibility.socket_type:
        errors.append("Memory socket type (e.g. DDR4) is required")
    elif spec.category == ComponentCategory.GRAPHICS and spec.electrical.power <= 0:
        errors.append("Graphics card power requirement should be specified")
    return errors


def validate_parameters(spec: ComponentSpecification) -> bool:
    return not validation_errors(spec)


def extract_technical_data(text: str) -> ComponentSpecification:
    """Extract the structured specification without scoring it."""
    normalized = _normalize(text)
    electrical = extract_electrical(normalized)
    compatibility = extract_compatibility(normalized)
    return ComponentSpecification(
        category=identify_category(normalized),
        part_number=extract_part_number(normalized),
        electrical=electrical,
        physical=extract_physical(normalized),
        compatibility=compatibility,
    )


def parse_specification(text: str) -> ParsedSpecification:
    """Parse a free-text specification into structured fields.

    Never raises: fields that cannot be found are left at their zero/empty
    defaults and reported as ambiguities instead.

    Examples:
        "Intel i7-12700K 3.6GHz LGA1700" -> processor, part i7-12700K,
            3600 MHz, socket LGA1700, confidence 1.0
        "DDR4 16GB 3200MHz DIMM" -> memory, 3200 MHz, socket DDR4, form factor DIMM

    Args:
        text: The free-text specification

    Returns:
        ParsedSpecification with confidence, ambiguities and validation errors
    """
    spec = extract_technical_data(text)
    result = ParsedSpecification(
        original_input=text or "",
        spec=spec,
        confidence=_confidence(spec),
        ambiguities=_ambiguities(spec),
        validation_errors=validation_errors(spec),
    )
    logger.debug(
        f"Parsed {result.original_input!r}: category={spec.category.value}, "
        f"part={spec.part_number}, confidence={result.confidence:.2f}"
    )
    return result
