"""Tests for legacy adapters and pairwise compatibility rules."""

from dataclasses import replace

import pytest

from lamington_mcp.adapters import (
    ADAPTER_TEMPLATES,
    COMPATIBILITY_RANK,
    GENERIC_WIRING,
    PORT_ALIASES,
    WIRING_TEMPLATES,
    adapter_availability,
    all_templates,
    assess_compatibility,
    compatibility_level,
    estimate_cost,
    failed_rules,
    generate_wiring_diagram,
    identify_adapters,
    normalize_port,
    validate_compatibility,
)
from lamington_mcp.catalog import build_catalog
from lamington_mcp.models import AvailabilityStatus, CompatibilityLevel, ElectricalParameters


@pytest.fixture
def catalog():
    return build_catalog()


def _template(adapter_id: str):
    return next(t for t in all_templates() if t.id == adapter_id)


class TestPorts:
    """Tests for port normalization."""

    @pytest.mark.parametrize("port,expected", [
        ("VGA", "vga"),
        ("D-Sub", "vga"),
        ("PS/2", "ps2"),
        ("RS-232", "serial"),
        ("COM", "serial"),
        ("LPT", "parallel"),
        ("PATA", "ide"),
        ("DVI-D", "dvi"),
        ("  ide ", "ide"),
    ])
    def test_normalize_port(self, port: str, expected: str):
        assert normalize_port(port) == expected

    def test_every_alias_target_has_templates(self):
        assert set(PORT_ALIASES.values()) <= set(ADAPTER_TEMPLATES)


class TestCompatibilityBands:
    """Tests for compatibility_level."""

    @pytest.mark.parametrize("percentage,expected", [
        (100, CompatibilityLevel.PERFECT),
        (90, CompatibilityLevel.PERFECT),
        (89.9, CompatibilityLevel.GOOD),
        (75, CompatibilityLevel.GOOD),
        (50, CompatibilityLevel.PARTIAL),
        (25, CompatibilityLevel.POOR),
        (24.9, CompatibilityLevel.INCOMPATIBLE),
        (0, CompatibilityLevel.INCOMPATIBLE),
    ])
    def test_band(self, percentage: float, expected: CompatibilityLevel):
        assert compatibility_level(percentage) == expected

    def test_band_is_monotonic(self):
        ranks = [COMPATIBILITY_RANK[compatibility_level(p / 2)] for p in range(0, 201)]
        assert ranks == sorted(ranks)


class TestIdentifyAdapters:
    """Tests for identify_adapters."""

    def test_vga_to_graphics_card(self, catalog):
        solutions = identify_adapters("VGA", catalog.get("gpu-001"))
        assert [s.adapter_id for s in solutions] == ["vga_to_dvi", "vga_to_hdmi"]
        for s in solutions:
            assert s.compatibility == CompatibilityLevel.PERFECT
            assert s.compatibility_percentage == pytest.approx(90)
            assert 0.0 <= s.reliability_score <= 1.0

    def test_ps2_keyboard(self, catalog):
        solutions = identify_adapters("PS/2", catalog.get("per-001"))
        assert len(solutions) == 1
        assert solutions[0].adapter_id == "ps2_to_usb"
        assert solutions[0].wiring_diagram == WIRING_TEMPLATES["ps2_to_usb"]

    def test_category_filter(self, catalog):
        assert identify_adapters("IDE", catalog.get("gpu-001")) == []

    def test_voltage_window_filter(self, catalog):
        # 12 V board is outside the 5 V window
        assert identify_adapters("PS/2", catalog.get("mb-001")) == []

    def test_unknown_port(self, catalog):
        assert identify_adapters("firewire", catalog.get("gpu-001")) == []

    def test_sorted_by_band_then_reliability(self, catalog):
        for port in ("VGA", "DVI", "IDE"):
            for component in catalog:
                solutions = identify_adapters(port, component)
                keys = [(COMPATIBILITY_RANK[s.compatibility], s.reliability_score) for s in solutions]
                assert keys == sorted(keys, reverse=True)


class TestAdapterDetails:
    """Tests for scoring, cost, availability and wiring."""

    def test_assess_compatibility_breakdown(self, catalog):
        percentage, breakdown = assess_compatibility(_template("vga_to_hdmi"), catalog.get("gpu-001"))
        assert percentage == pytest.approx(90)
        assert breakdown["interface"] == 0
        assert breakdown["category"] == 40

    def test_voltage_penalty(self, catalog):
        # 1 V below the 5-12 V window costs 10 of the 30 voltage points
        drive = replace(catalog.get("hdd-001"), spec=replace(
            catalog.get("hdd-001").spec, electrical=ElectricalParameters(voltage=4.0, power=7),
        ))
        _, breakdown = assess_compatibility(_template("ide_to_sata"), drive)
        assert breakdown["voltage"] == pytest.approx(20)

    def test_voltage_penalty_floors_at_zero(self, catalog):
        percentage, breakdown = assess_compatibility(_template("ide_to_sata"), catalog.get("cpu-001"))
        assert breakdown["voltage"] == 0
        assert 0.0 <= percentage <= 100.0

    def test_estimate_cost(self):
        # Midpoint 850, +20% powered, +30% analog to digital
        assert estimate_cost(_template("vga_to_hdmi")) == 1275
        assert estimate_cost(_template("vga_to_dvi")) == 350

    def test_availability(self):
        assert adapter_availability(_template("dvi_to_hdmi")) == AvailabilityStatus.IN_STOCK
        assert adapter_availability(_template("vga_to_hdmi")) == AvailabilityStatus.LIMITED_STOCK
        assert adapter_availability(_template("ide_to_usb")) == AvailabilityStatus.LIMITED_STOCK

    @pytest.mark.parametrize("name", ["vga_to_hdmi", "VGA to HDMI Adapter", "vga-to-hdmi"])
    def test_wiring_by_id_or_name(self, name: str):
        assert generate_wiring_diagram(name) == WIRING_TEMPLATES["vga_to_hdmi"]

    def test_wiring_fallback(self):
        assert generate_wiring_diagram("dvi_to_displayport") == GENERIC_WIRING
        assert generate_wiring_diagram("") == GENERIC_WIRING


class TestPairwiseRules:
    """Tests for validate_compatibility."""

    def test_gpu_and_board(self, catalog):
        gpu, board = catalog.get("gpu-001"), catalog.get("mb-001")
        assert validate_compatibility(gpu, board)
        assert validate_compatibility(board, gpu)

    def test_memory_and_board_failures_either_order(self, catalog):
        memory, board = catalog.get("mem-001"), catalog.get("mb-001")
        expected = ["Socket Type Match", "Voltage Compatibility"]
        assert failed_rules(memory, board) == expected
        assert failed_rules(board, memory) == expected
        assert not validate_compatibility(memory, board)

    def test_pairs_without_rules_pass(self, catalog):
        assert validate_compatibility(catalog.get("cpu-001"), catalog.get("psu-001"))
