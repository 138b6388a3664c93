"""Adapter resolver: bridge legacy ports to modern components."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from .config import ADAPTER_LOW_POWER_THRESHOLD, ADAPTER_VOLTAGE_PENALTY_PER_VOLT, ADAPTER_WEIGHTS
from .models import (
    AuthenticityLevel,
    AvailabilityStatus,
    CompatibilityLevel,
    Component,
    ComponentCategory,
)
from .scoring import Criterion, clamp, weighted_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterTemplate:
    id: str
    name: str
    input_port: str
    output_port: str
    signal_type: str
    categories: frozenset[ComponentCategory]
    reliability_factor: float
    cost_range: tuple[float, float]
    requires_power: bool = False
    min_voltage: float = 0.0  # 0 means no voltage window
    max_voltage: float = 0.0
    difficulty: str = "medium"

    @property
    def has_voltage_window(self) -> bool:
        return self.min_voltage > 0


@dataclass(frozen=True)
class PinMapping:
    source: str
    target: str


@dataclass(frozen=True)
class WiringInstructions:
    diagram_url: str
    pin_mapping: tuple[PinMapping, ...]
    required_tools: tuple[str, ...]
    difficulty: str
    estimated_time: int = 0  # minutes
    safety_notes: tuple[str, ...] = ()


@dataclass
class AdapterSolution:
    adapter_id: str
    adapter_type: str
    input_port: str
    output_port: str
    compatibility: CompatibilityLevel
    compatibility_percentage: float
    wiring_diagram: WiringInstructions
    reliability_score: float
    cost: int
    availability: AvailabilityStatus
    breakdown: dict[str, float] = field(default_factory=dict)


_GPU_BOARD = frozenset({ComponentCategory.GRAPHICS, ComponentCategory.MOTHERBOARD})
_PERIPHERAL_BOARD = frozenset({ComponentCategory.PERIPHERALS, ComponentCategory.MOTHERBOARD})
_STORAGE_BOARD = frozenset({ComponentCategory.STORAGE, ComponentCategory.MOTHERBOARD})

# Adapters keyed by normalized legacy port
ADAPTER_TEMPLATES: dict[str, tuple[AdapterTemplate, ...]] = {
    "vga": (
        AdapterTemplate("vga_to_hdmi", "VGA to HDMI Adapter", "VGA", "HDMI", "analog_to_digital",
                        _GPU_BOARD, 0.85, (500, 1200), requires_power=True, min_voltage=5.0, max_voltage=12.0),
        AdapterTemplate("vga_to_dvi", "VGA to DVI-I Adapter", "VGA", "DVI-I", "analog_to_analog",
                        _GPU_BOARD, 0.95, (200, 500), difficulty="easy"),
    ),
    "dvi": (
        AdapterTemplate("dvi_to_hdmi", "DVI to HDMI Adapter", "DVI-D", "HDMI", "digital_to_digital",
                        frozenset({ComponentCategory.GRAPHICS}), 0.98, (300, 800), difficulty="easy"),
        AdapterTemplate("dvi_to_displayport", "DVI to DisplayPort Adapter", "DVI-D", "DisplayPort",
                        "digital_to_digital", frozenset({ComponentCategory.GRAPHICS}), 0.88, (1500, 3000),
                        requires_power=True, min_voltage=5.0, max_voltage=5.0),
    ),
    "ps2": (
        AdapterTemplate("ps2_to_usb", "PS/2 to USB Adapter", "PS/2", "USB-A", "serial_to_usb",
                        _PERIPHERAL_BOARD, 0.92, (150, 400), min_voltage=5.0, max_voltage=5.0, difficulty="easy"),
    ),
    "serial": (
        AdapterTemplate("serial_to_usb", "Serial to USB Adapter", "RS-232", "USB-A", "serial_to_usb",
                        _PERIPHERAL_BOARD, 0.90, (400, 1000), min_voltage=5.0, max_voltage=5.0),
    ),
    "parallel": (
        AdapterTemplate("parallel_to_usb", "Parallel to USB Adapter", "LPT", "USB-A", "parallel_to_usb",
                        frozenset({ComponentCategory.PERIPHERALS}), 0.85, (600, 1500),
                        min_voltage=5.0, max_voltage=5.0),
    ),
    "ide": (
        AdapterTemplate("ide_to_sata", "IDE to SATA Adapter", "IDE", "SATA", "parallel_to_serial",
                        _STORAGE_BOARD, 0.88, (800, 2000), requires_power=True,
                        min_voltage=5.0, max_voltage=12.0, difficulty="hard"),
        AdapterTemplate("ide_to_usb", "IDE to USB Adapter", "IDE", "USB-A", "parallel_to_usb",
                        frozenset({ComponentCategory.STORAGE}), 0.82, (1200, 2500), requires_power=True,
                        min_voltage=5.0, max_voltage=12.0),
    ),
}

# Alternate spellings after punctuation is stripped
PORT_ALIASES = {
    "rs232": "serial",
    "com": "serial",
    "db9": "serial",
    "lpt": "parallel",
    "db25": "parallel",
    "pata": "ide",
    "dvid": "dvi",
    "dvii": "dvi",
    "dsub": "vga",
}

WIRING_TEMPLATES: dict[str, WiringInstructions] = {
    "vga_to_hdmi": WiringInstructions(
        diagram_url="/diagrams/vga_to_hdmi.svg",
        pin_mapping=(
            PinMapping("VGA Pin 1 (Red)", "HDMI Red Channel"),
            PinMapping("VGA Pin 2 (Green)", "HDMI Green Channel"),
            PinMapping("VGA Pin 3 (Blue)", "HDMI Blue Channel"),
            PinMapping("VGA Pin 13 (H-Sync)", "HDMI H-Sync"),
            PinMapping("VGA Pin 14 (V-Sync)", "HDMI V-Sync"),
            PinMapping("Power Input", "USB 5V Power"),
        ),
        required_tools=("Screwdriver", "Cable tester"),
        difficulty="medium",
        estimated_time=15,
        safety_notes=(
            "Ensure all devices are powered off before connection",
            "Check power requirements before connecting",
        ),
    ),
    "ps2_to_usb": WiringInstructions(
        diagram_url="/diagrams/ps2_to_usb.svg",
        pin_mapping=(
            PinMapping("PS/2 Pin 1 (Data)", "USB Data+"),
            PinMapping("PS/2 Pin 3 (Ground)", "USB Ground"),
            PinMapping("PS/2 Pin 4 (VCC)", "USB 5V"),
            PinMapping("PS/2 Pin 5 (Clock)", "USB Data-"),
        ),
        required_tools=("None",),
        difficulty="easy",
        estimated_time=5,
        safety_notes=(
            "Hot-plugging may not be supported",
            "Some legacy devices may require driver installation",
        ),
    ),
}

GENERIC_WIRING = WiringInstructions(
    diagram_url="/diagrams/generic_adapter.svg",
    pin_mapping=(PinMapping("Input Port", "Output Port"),),
    required_tools=("Basic tools",),
    difficulty="medium",
)

# Lower bound (inclusive) of each band, best first
COMPATIBILITY_BANDS: tuple[tuple[float, CompatibilityLevel], ...] = (
    (90, CompatibilityLevel.PERFECT),
    (75, CompatibilityLevel.GOOD),
    (50, CompatibilityLevel.PARTIAL),
    (25, CompatibilityLevel.POOR),
)

COMPATIBILITY_RANK: dict[CompatibilityLevel, int] = {
    CompatibilityLevel.PERFECT: 5,
    CompatibilityLevel.GOOD: 4,
    CompatibilityLevel.PARTIAL: 3,
    CompatibilityLevel.POOR: 2,
    CompatibilityLevel.INCOMPATIBLE: 1,
}

RELIABILITY_MULTIPLIER: dict[AuthenticityLevel, float] = {
    AuthenticityLevel.OEM: 1.0,
    AuthenticityLevel.FIRST_COPY: 0.9,
    AuthenticityLevel.GENERIC: 0.8,
    AuthenticityLevel.UNKNOWN: 0.7,
}


def normalize_port(port: str) -> str:
    """Lowercase and strip punctuation: "RS-232" -> "serial", "PS/2" -> "ps2"."""
    key = re.sub(r'[\s/_\-.]+', '', (port or '').lower())
    return PORT_ALIASES.get(key, key)


def _normalize_id(value: str) -> str:
    return re.sub(r'[^a-z0-9]+', '_', (value or '').lower()).strip('_')


def all_templates() -> list[AdapterTemplate]:
    return [t for templates in ADAPTER_TEMPLATES.values() for t in templates]


def is_adapter_compatible(adapter: AdapterTemplate, component: Component) -> bool:
    if component.category not in adapter.categories:
        return False
    voltage = component.electrical.voltage
    if adapter.has_voltage_window and not adapter.min_voltage <= voltage <= adapter.max_voltage:
        return False
    return True


def compatibility_level(percentage: float) -> CompatibilityLevel:
    for threshold, level in COMPATIBILITY_BANDS:
        if percentage >= threshold:
            return level
    return CompatibilityLevel.INCOMPATIBLE


def assess_compatibility(adapter: AdapterTemplate, component: Component) -> tuple[float, dict[str, float]]:
    """Score adapter fit as a percentage.

    Returns:
        Tuple of (percentage 0-100, breakdown)
    """
    voltage = component.electrical.voltage
    voltage_weight = ADAPTER_WEIGHTS["voltage"]
    if not adapter.has_voltage_window or adapter.min_voltage <= voltage <= adapter.max_voltage:
        voltage_fraction = 1.0
    else:
        diff = min(abs(voltage - adapter.min_voltage), abs(voltage - adapter.max_voltage))
        voltage_fraction = max(0.0, voltage_weight - diff * ADAPTER_VOLTAGE_PENALTY_PER_VOLT) / voltage_weight

    power_ok = not adapter.requires_power or component.electrical.power > 0

    interface = component.compatibility.interface_type.upper()
    output = adapter.output_port.upper()
    interface_ok = bool(interface) and (output in interface or interface in output)

    result = weighted_score([
        Criterion("category", ADAPTER_WEIGHTS["category"], 1.0 if component.category in adapter.categories else 0.0),
        Criterion("voltage", voltage_weight, voltage_fraction),
        Criterion("power", ADAPTER_WEIGHTS["power"], 1.0 if power_ok else 0.0),
        Criterion("interface", ADAPTER_WEIGHTS["interface"], 1.0 if interface_ok else 0.0),
    ])
    return result.to_percent(), result.breakdown


def reliability_score(adapter: AdapterTemplate, component: Component) -> float:
    score = adapter.reliability_factor * RELIABILITY_MULTIPLIER[component.authenticity]
    # Power draw is uncertain for low-power components
    if adapter.requires_power and component.electrical.power < ADAPTER_LOW_POWER_THRESHOLD:
        score *= 0.9
    return clamp(score)


def estimate_cost(adapter: AdapterTemplate) -> int:
    low, high = adapter.cost_range
    markup = 1.0
    if adapter.requires_power:
        markup += 0.2
    if "analog_to_digital" in adapter.signal_type:
        markup += 0.3
    if adapter.difficulty in ("hard", "expert"):
        markup += 0.1
    return round((low + high) / 2 * markup)


def adapter_availability(adapter: AdapterTemplate) -> AvailabilityStatus:
    if adapter.reliability_factor > 0.9 and not adapter.requires_power:
        return AvailabilityStatus.IN_STOCK
    if adapter.reliability_factor > 0.8:
        return AvailabilityStatus.LIMITED_STOCK
    return AvailabilityStatus.OUT_OF_STOCK


def generate_wiring_diagram(adapter_id: str) -> WiringInstructions:
    """Wiring instructions by adapter id or name, with a generic fallback.

    Accepts "vga_to_hdmi" as well as "VGA to HDMI Adapter".
    """
    key = _normalize_id(adapter_id)
    if key in WIRING_TEMPLATES:
        return WIRING_TEMPLATES[key]
    for template in all_templates():
        if key == _normalize_id(template.name) and template.id in WIRING_TEMPLATES:
            return WIRING_TEMPLATES[template.id]
    return GENERIC_WIRING


def identify_adapters(legacy_port: str, component: Component) -> list[AdapterSolution]:
    """Find adapters that connect a legacy port to a modern component.

    Args:
        legacy_port: Port name, e.g. "VGA", "PS/2", "RS-232"
        component: The modern component to connect to

    Returns:
        Solutions sorted by compatibility band then reliability, best first.
        Unknown ports give an empty list.
    """
    port = normalize_port(legacy_port)
    solutions = []
    for adapter in ADAPTER_TEMPLATES.get(port, ()):
        if not is_adapter_compatible(adapter, component):
            continue
        percentage, breakdown = assess_compatibility(adapter, component)
        solutions.append(AdapterSolution(
            adapter_id=adapter.id,
            adapter_type=adapter.name,
            input_port=adapter.input_port,
            output_port=adapter.output_port,
            compatibility=compatibility_level(percentage),
            compatibility_percentage=percentage,
            wiring_diagram=generate_wiring_diagram(adapter.id),
            reliability_score=reliability_score(adapter, component),
            cost=estimate_cost(adapter),
            availability=adapter_availability(adapter),
            breakdown=breakdown,
        ))

    solutions.sort(key=lambda s: (COMPATIBILITY_RANK[s.compatibility], s.reliability_score), reverse=True)
    logger.debug(f"{len(solutions)} adapters for port {legacy_port!r} -> {component.id}")
    return solutions


# =============================================================================
# PAIRWISE COMPATIBILITY RULES
# =============================================================================

def _gpu_power_ok(gpu: Component, board: Component) -> bool:
    return gpu.electrical.power <= 300


def _gpu_interface_ok(gpu: Component, board: Component) -> bool:
    a = gpu.compatibility.interface_type.upper()
    b = board.compatibility.interface_type.upper()
    return a == b or ("PCI" in a and "PCI" in b)


def _memory_socket_ok(memory: Component, board: Component) -> bool:
    return memory.compatibility.socket_type.upper() == board.compatibility.socket_type.upper()


def _memory_voltage_ok(memory: Component, board: Component) -> bool:
    return abs(memory.electrical.voltage - board.electrical.voltage) <= 0.2


COMPATIBILITY_RULES: dict[tuple[ComponentCategory, ComponentCategory], tuple[tuple[str, Callable], ...]] = {
    (ComponentCategory.GRAPHICS, ComponentCategory.MOTHERBOARD): (
        ("Power Supply Check", _gpu_power_ok),
        ("Interface Compatibility", _gpu_interface_ok),
    ),
    (ComponentCategory.MEMORY, ComponentCategory.MOTHERBOARD): (
        ("Socket Type Match", _memory_socket_ok),
        ("Voltage Compatibility", _memory_voltage_ok),
    ),
}


def failed_rules(a: Component, b: Component) -> list[str]:
    """Names of the pairwise rules the two components break.

    Rules are looked up in either order; pairs without rules pass.
    """
    rules = COMPATIBILITY_RULES.get((a.category, b.category))
    if rules is None:
        rules = COMPATIBILITY_RULES.get((b.category, a.category), ())
        a, b = b, a
    return [name for name, check in rules if not check(a, b)]


def validate_compatibility(a: Component, b: Component) -> bool:
    return not failed_rules(a, b)
