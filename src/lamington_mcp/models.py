"""Core data models for hardware components and specifications.

All models are frozen dataclasses: components and templates are built once at
startup and shared read-only between requests, specifications are created per
request by the parser. Unknown numeric fields are 0 and unknown text fields
are "" so callers never have to handle None.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any


class ComponentCategory(str, Enum):
    PROCESSOR = "processor"
    MEMORY = "memory"
    STORAGE = "storage"
    GRAPHICS = "graphics"
    MOTHERBOARD = "motherboard"
    POWER_SUPPLY = "power_supply"
    COOLING = "cooling"
    NETWORKING = "networking"
    AUDIO = "audio"
    PERIPHERALS = "peripherals"
    CABLES = "cables"
    ADAPTERS = "adapters"


class AuthenticityLevel(str, Enum):
    OEM = "oem"
    FIRST_COPY = "first_copy"
    GENERIC = "generic"
    UNKNOWN = "unknown"


class AvailabilityStatus(str, Enum):
    IN_STOCK = "in_stock"
    LIMITED_STOCK = "limited_stock"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"
    PRE_ORDER = "pre_order"
    UNKNOWN = "unknown"


class CompatibilityLevel(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    PARTIAL = "partial"
    POOR = "poor"
    INCOMPATIBLE = "incompatible"


# Category used when the parser cannot tell what the text describes
DEFAULT_CATEGORY = ComponentCategory.PERIPHERALS
UNKNOWN_PART_NUMBER = "UNKNOWN"


@dataclass(frozen=True)
class ElectricalParameters:
    voltage: float = 0.0  # V
    current: float = 0.0  # A
    frequency: float = 0.0  # MHz
    power: float = 0.0  # W

    def has_any(self) -> bool:
        """True if at least one electrical field is known."""
        return any(v != 0 for v in (self.voltage, self.current, self.frequency, self.power))


@dataclass(frozen=True)
class PhysicalParameters:
    length: float = 0.0  # mm
    width: float = 0.0  # mm
    height: float = 0.0  # mm
    weight: float = 0.0  # g
    form_factor: str = ""

    @property
    def footprint_area(self) -> float:
        """Board footprint in mm²."""
        return self.length * self.width

    @property
    def volume_cm3(self) -> float:
        return self.length * self.width * self.height / 1000


@dataclass(frozen=True)
class CompatibilityRequirements:
    socket_type: str = ""
    interface_type: str = ""
    pin_configuration: tuple[str, ...] = ()
    protocol_version: str = ""


@dataclass(frozen=True)
class ComponentSpecification:
    category: ComponentCategory = DEFAULT_CATEGORY
    part_number: str = UNKNOWN_PART_NUMBER
    electrical: ElectricalParameters = field(default_factory=ElectricalParameters)
    physical: PhysicalParameters = field(default_factory=PhysicalParameters)
    compatibility: CompatibilityRequirements = field(default_factory=CompatibilityRequirements)

    @property
    def has_part_number(self) -> bool:
        return bool(self.part_number) and self.part_number != UNKNOWN_PART_NUMBER


@dataclass(frozen=True)
class PricingInfo:
    retail_price: float = 0.0
    market_price: float = 0.0
    bulk_pricing: tuple[tuple[int, float], ...] = ()  # (quantity, price per unit)
    currency: str = "INR"


@dataclass(frozen=True)
class MarketLocation:
    section_id: str = "general"
    shop_number: str = "INFO-01"
    floor: int = 1
    x: float = 0.0
    y: float = 0.0


DEFAULT_LOCATION = MarketLocation()


@dataclass(frozen=True)
class Component:
    """A sellable component from the static inventory."""
    id: str
    spec: ComponentSpecification
    authenticity: AuthenticityLevel = AuthenticityLevel.UNKNOWN
    availability: AvailabilityStatus = AvailabilityStatus.UNKNOWN
    pricing: PricingInfo = field(default_factory=PricingInfo)
    location: MarketLocation = DEFAULT_LOCATION
    name: str = ""

    @property
    def category(self) -> ComponentCategory:
        return self.spec.category

    @property
    def part_number(self) -> str:
        return self.spec.part_number

    @property
    def electrical(self) -> ElectricalParameters:
        return self.spec.electrical

    @property
    def physical(self) -> PhysicalParameters:
        return self.spec.physical

    @property
    def compatibility(self) -> CompatibilityRequirements:
        return self.spec.compatibility


def as_dict(obj: Any) -> Any:
    """Convert dataclasses, enums and tuples into JSON-ready structures."""
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: as_dict(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {str(as_dict(k)): as_dict(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [as_dict(v) for v in obj]
    return obj
