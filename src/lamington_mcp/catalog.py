"""Static market inventory.

The inventory is built once per process and never mutated. Engines receive
components from here (or from tests) and treat them as read-only.
"""

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from .config import CURRENCY
from .models import (
    AuthenticityLevel,
    AvailabilityStatus,
    CompatibilityRequirements,
    Component,
    ComponentCategory,
    ComponentSpecification,
    DEFAULT_LOCATION,
    ElectricalParameters,
    MarketLocation,
    PhysicalParameters,
    PricingInfo,
)

logger = logging.getLogger(__name__)

_OEM = AuthenticityLevel.OEM
_FIRST_COPY = AuthenticityLevel.FIRST_COPY
_GENERIC = AuthenticityLevel.GENERIC

_IN_STOCK = AvailabilityStatus.IN_STOCK
_LIMITED = AvailabilityStatus.LIMITED_STOCK
_OUT = AvailabilityStatus.OUT_OF_STOCK


# Shops by market section: (section_id, shop_number, floor, x, y)
_SHOPS = {
    "A-101": ("proc-zone", 1, 10, 15),
    "A-102": ("proc-zone", 1, 20, 15),
    "A-103": ("proc-zone", 1, 30, 15),
    "B-201": ("mem-zone", 2, 5, 25),
    "B-202": ("mem-zone", 2, 15, 25),
    "C-301": ("gpu-zone", 3, 30, 10),
    "C-302": ("gpu-zone", 3, 40, 10),
    "D-401": ("psu-zone", 1, 50, 20),
    "D-402": ("psu-zone", 1, 60, 20),
    "E-501": ("cooling-zone", 2, 35, 30),
    "E-502": ("cooling-zone", 2, 45, 30),
    "F-601": ("storage-zone", 2, 55, 40),
    "F-602": ("storage-zone", 2, 65, 40),
    "G-701": ("board-zone", 3, 10, 45),
    "H-801": ("legacy-zone", 0, 5, 5),
}


def _location(shop_number: str) -> MarketLocation:
    section_id, floor, x, y = _SHOPS[shop_number]
    return MarketLocation(section_id=section_id, shop_number=shop_number, floor=floor, x=x, y=y)


# Inventory rows. Electrical: (V, A, MHz, W). Physical: (L mm, W mm, H mm, g, form factor).
# Compatibility: (socket, interface, pins). Pricing: (retail, market, bulk tiers).
_INVENTORY = [
    # Processors
    ("cpu-001", "Intel Core i7-12700K", ComponentCategory.PROCESSOR, "i7-12700K",
     (1.2, 125, 3600, 125), (37.5, 37.5, 7.5, 125, "LGA1700"),
     ("LGA1700", "PCIE 5.0", ("1700-pin",)),
     _OEM, _IN_STOCK, (25000, 22000, ((5, 24000), (10, 23000))), "A-101"),
    ("cpu-002", "AMD Ryzen 7 5800X", ComponentCategory.PROCESSOR, "R7-5800X",
     (1.35, 105, 3800, 105), (40, 40, 8, 126, "AM4"),
     ("AM4", "PCIE 4.0", ("1331-pin",)),
     _OEM, _IN_STOCK, (28000, 25000, ((5, 27000),)), "A-102"),
    ("cpu-003", "Core i7-12700K (tray, unboxed)", ComponentCategory.PROCESSOR, "i7-12700K",
     (1.2, 125, 3600, 125), (37.5, 37.5, 7.5, 98, "LGA1700"),
     ("LGA1700", "PCIE 5.0", ("1700-pin",)),
     _FIRST_COPY, _LIMITED, (18000, 16500, ()), "A-103"),
    ("cpu-004", "Intel Core i5-12400F", ComponentCategory.PROCESSOR, "i5-12400F",
     (1.2, 65, 2500, 65), (37.5, 37.5, 7.5, 114, "LGA1700"),
     ("LGA1700", "PCIE 5.0", ("1700-pin",)),
     _OEM, _OUT, (15000, 13800, ()), "A-101"),
    # Memory
    ("mem-001", "Corsair Vengeance LPX 16GB DDR4-3200", ComponentCategory.MEMORY, "CMK16GX4M2D3200C16",
     (1.35, 2, 3200, 5), (133.35, 7, 31, 70, "DIMM"),
     ("DDR4", "DDR4", ("288-pin",)),
     _OEM, _IN_STOCK, (6500, 5800, ((4, 6100),)), "B-201"),
    ("mem-002", "Unbranded 8GB DDR4-2666", ComponentCategory.MEMORY, "GEN8GD4-2666",
     (1.2, 1.5, 2666, 4), (133, 7, 30, 38, "DIMM"),
     ("DDR4", "DDR4", ("288-pin",)),
     _GENERIC, _LIMITED, (2200, 1900, ()), "B-202"),
    ("mem-003", "Kingston Fury Beast 16GB DDR5-5200", ComponentCategory.MEMORY, "KF552C40BB-16",
     (1.25, 2, 5200, 6), (133.35, 7, 34, 72, "DIMM"),
     ("DDR5", "DDR5", ("288-pin",)),
     _OEM, AvailabilityStatus.PRE_ORDER, (7800, 7200, ()), "B-202"),
    # Graphics
    ("gpu-001", "NVIDIA GeForce RTX 4070", ComponentCategory.GRAPHICS, "RTX4070",
     (12, 16.7, 1920, 200), (244, 112, 40, 1080, "PCIE"),
     ("PCIE X16", "PCIE 4.0", ()),
     _OEM, _IN_STOCK, (55000, 52000, ((3, 53500),)), "C-301"),
    ("gpu-002", "GeForce RTX 3060 (import)", ComponentCategory.GRAPHICS, "RTX3060",
     (12, 14.2, 1320, 170), (242, 112, 40, 860, "PCIE"),
     ("PCIE X16", "PCIE 4.0", ()),
     _FIRST_COPY, _LIMITED, (22000, 19500, ()), "C-302"),
    ("gpu-003", "GeForce GTX 750 Ti", ComponentCategory.GRAPHICS, "GTX750Ti",
     (12, 5, 1020, 60), (145, 111, 38, 640, "PCIE"),
     ("PCIE X16", "PCIE 3.0", ()),
     _GENERIC, AvailabilityStatus.DISCONTINUED, (4500, 3200, ()), "C-302"),
    # Power supplies
    ("psu-001", "Corsair CX650M 650W", ComponentCategory.POWER_SUPPLY, "CX650M",
     (12, 54, 0, 650), (150, 86, 140, 1900, "ATX"),
     ("ATX", "24-PIN", ("24-pin",)),
     _OEM, _IN_STOCK, (6500, 6000, ()), "D-401"),
    ("psu-002", "Generic 450W SMPS", ComponentCategory.POWER_SUPPLY, "SMPS450",
     (12, 30, 0, 450), (150, 86, 140, 1500, "ATX"),
     ("ATX", "24-PIN", ("24-pin",)),
     _GENERIC, _IN_STOCK, (1800, 1500, ()), "D-402"),
    # Cooling
    ("cool-001", "Noctua NF-A12x25 120mm fan", ComponentCategory.COOLING, "NF-A12x25",
     (12, 0.14, 0, 1.68), (120, 120, 25, 170, ""),
     ("", "PWM", ("4-pin",)),
     _OEM, _IN_STOCK, (2400, 2200, ()), "E-501"),
    ("cool-002", "Unbranded 120mm fan", ComponentCategory.COOLING, "FAN120",
     (12, 0.2, 0, 2.4), (120, 120, 25, 110, ""),
     ("", "PWM", ("3-pin",)),
     _GENERIC, _IN_STOCK, (350, 250, ()), "E-502"),
    ("cool-003", "D5 pump clone", ComponentCategory.COOLING, "D5PUMP",
     (12, 1.5, 0, 23), (62, 62, 94, 700, ""),
     ("", "MOLEX", ("4-pin",)),
     _FIRST_COPY, _LIMITED, (7000, 5500, ()), "E-501"),
    ("cool-004", "240mm copper radiator", ComponentCategory.COOLING, "RAD240",
     (0, 0, 0, 0), (275, 120, 30, 650, ""),
     ("", "G1/4", ()),
     _GENERIC, _IN_STOCK, (2800, 2300, ()), "E-502"),
    # Storage
    ("ssd-001", "WD Black SN770 1TB NVMe", ComponentCategory.STORAGE, "SN770",
     (3.3, 2.5, 0, 5), (80, 22, 2.38, 7, "M.2"),
     ("M.2", "NVME", ()),
     _OEM, _IN_STOCK, (4500, 4100, ()), "F-601"),
    ("hdd-001", "Seagate 40GB IDE hard disk", ComponentCategory.STORAGE, "ST340014A",
     (5, 0.7, 0, 7), (147, 102, 26, 600, ""),
     ("", "IDE", ("40-pin",)),
     _GENERIC, AvailabilityStatus.DISCONTINUED, (900, 600, ()), "F-602"),
    # Motherboards
    ("mb-001", "MSI PRO B660M-A", ComponentCategory.MOTHERBOARD, "B660M-A",
     (12, 4, 0, 50), (244, 244, 40, 900, "MICRO-ATX"),
     ("LGA1700", "PCIE 4.0", ("1700-pin",)),
     _OEM, _IN_STOCK, (11500, 10800, ()), "G-701"),
    # Peripherals
    ("per-001", "PS/2 104-key keyboard", ComponentCategory.PERIPHERALS, "KB104-PS2",
     (5, 0.1, 0, 0.5), (450, 150, 30, 650, ""),
     ("", "PS/2", ("6-pin",)),
     _GENERIC, _IN_STOCK, (450, 350, ()), "H-801"),
]


def _build_component(row: tuple) -> Component:
    (component_id, name, category, part_number, electrical, physical,
     compatibility, authenticity, availability, pricing, shop) = row
    voltage, current, frequency, power = electrical
    length, width, height, weight, form_factor = physical
    socket_type, interface_type, pins = compatibility
    retail, market, bulk = pricing
    spec = ComponentSpecification(
        category=category,
        part_number=part_number,
        electrical=ElectricalParameters(voltage=voltage, current=current, frequency=frequency, power=power),
        physical=PhysicalParameters(length=length, width=width, height=height, weight=weight, form_factor=form_factor),
        compatibility=CompatibilityRequirements(
            socket_type=socket_type,
            interface_type=interface_type,
            pin_configuration=pins,
        ),
    )
    return Component(
        id=component_id,
        spec=spec,
        authenticity=authenticity,
        availability=availability,
        pricing=PricingInfo(retail_price=retail, market_price=market, bulk_pricing=bulk, currency=CURRENCY),
        location=_location(shop),
        name=name,
    )


@dataclass(frozen=True)
class Catalog:
    """Read-only view over a fixed set of components."""
    components: tuple[Component, ...]

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def get(self, component_id: str) -> Component | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def by_category(self, category: ComponentCategory) -> list[Component]:
        return [c for c in self.components if c.category == category]

    def section_for(self, category: ComponentCategory) -> MarketLocation:
        """First shop stocking the category, or the market information desk."""
        for component in self.components:
            if component.category == category:
                return component.location
        return DEFAULT_LOCATION

    def market_sections(self) -> dict[str, list[str]]:
        """Map section id to the shop numbers found there."""
        sections: dict[str, list[str]] = {}
        for component in self.components:
            shops = sections.setdefault(component.location.section_id, [])
            if component.location.shop_number not in shops:
                shops.append(component.location.shop_number)
        return sections


def build_catalog(components: list[Component] | None = None) -> Catalog:
    if components is None:
        components = [_build_component(row) for row in _INVENTORY]
    return Catalog(components=tuple(components))


# Global instance with thread safety
_catalog: Catalog | None = None
_catalog_lock = threading.Lock()


def get_catalog() -> Catalog:
    """Get or create the global catalog instance (thread-safe)."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = build_catalog()
                logger.info(f"Catalog loaded: {len(_catalog)} components")
    return _catalog
