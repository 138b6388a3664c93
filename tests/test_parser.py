"""Tests for the smart specification parser."""

import pytest

from lamington_mcp.models import (
    DEFAULT_CATEGORY,
    UNKNOWN_PART_NUMBER,
    ComponentCategory,
    ComponentSpecification,
    ElectricalParameters,
    PhysicalParameters,
)
from lamington_mcp.smart_parser import (
    extract_compatibility,
    extract_electrical,
    extract_part_number,
    extract_physical,
    identify_category,
    normalize_interface,
    normalize_socket,
    parse_specification,
    validate_parameters,
    validation_errors,
)
from lamington_mcp.smart_parser.parser import AMBIGUOUS_CATEGORY, MISSING_ELECTRICAL


class TestParseSpecificationExamples:
    """End-to-end parses of typical shop queries."""

    def test_intel_processor(self):
        result = parse_specification("Intel i7-12700K 3.6GHz LGA1700")
        spec = result.spec
        assert spec.category == ComponentCategory.PROCESSOR
        assert spec.part_number == "i7-12700K"
        assert spec.electrical.frequency == pytest.approx(3600)
        assert spec.compatibility.socket_type == "LGA1700"
        assert spec.compatibility.pin_configuration == ("1700-pin",)
        assert result.confidence == pytest.approx(1.0)
        assert result.ambiguities == []
        assert result.validation_errors == []

    def test_memory_module(self):
        result = parse_specification("DDR4 16GB 3200MHz DIMM")
        spec = result.spec
        assert spec.category == ComponentCategory.MEMORY
        assert spec.part_number == UNKNOWN_PART_NUMBER
        assert spec.electrical.frequency == pytest.approx(3200)
        assert spec.compatibility.socket_type == "DDR4"
        assert spec.physical.form_factor == "DIMM"
        assert not result.is_ambiguous

    def test_graphics_part_number_without_electrical(self):
        """A bare model name is recognized but still needs electrical detail."""
        result = parse_specification("RTX 4070")
        assert result.spec.category == ComponentCategory.GRAPHICS
        assert result.spec.part_number == "RTX4070"
        assert MISSING_ELECTRICAL in result.ambiguities

    def test_original_input_is_kept(self):
        text = "  Ryzen 7 5800X   3.8GHz AM4 "
        assert parse_specification(text).original_input == text


class TestConfidenceAndAmbiguity:
    """Confidence bounds and clarification prompts."""

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "blue box",
        "Intel i7-12700K 3.6GHz LGA1700",
        "DDR4 16GB 3200MHz DIMM",
        "RTX 4070 200W PCIe 4.0",
        "Corsair CX650M 650W 12V 54A power supply",
        "120mm fan 12V 0.2A",
        "x" * 500,
    ])
    def test_confidence_in_unit_range(self, text: str):
        result = parse_specification(text)
        assert 0.0 <= result.confidence <= 1.0

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_input_reports_problems(self, text: str):
        result = parse_specification(text)
        assert result.ambiguities + result.validation_errors
        assert AMBIGUOUS_CATEGORY in result.ambiguities
        assert result.spec.category == DEFAULT_CATEGORY

    def test_none_input_is_treated_as_blank(self):
        result = parse_specification(None)
        assert result.original_input == ""
        assert result.is_ambiguous

    def test_blank_input_confidence_is_base(self):
        assert parse_specification("").confidence == pytest.approx(0.5)


class TestIdentifyCategory:
    """Category voting."""

    @pytest.mark.parametrize("text,expected", [
        ("Intel i7-12700K 3.6GHz LGA1700", ComponentCategory.PROCESSOR),
        ("DDR4 16GB 3200MHz DIMM", ComponentCategory.MEMORY),
        ("RTX 4070 graphics card", ComponentCategory.GRAPHICS),
        ("1TB NVMe SSD", ComponentCategory.STORAGE),
        ("650W modular PSU", ComponentCategory.POWER_SUPPLY),
        ("120mm fan cooler", ComponentCategory.COOLING),
        ("blue box", DEFAULT_CATEGORY),
    ])
    def test_category(self, text: str, expected: ComponentCategory):
        assert identify_category(text) == expected

    def test_tie_falls_back_to_default(self):
        # One memory vote ("ram") against one cooling vote ("fan")
        assert identify_category("ram fan") == DEFAULT_CATEGORY


class TestExtractPartNumber:
    """Ordered part number patterns."""

    @pytest.mark.parametrize("text,expected", [
        ("Intel i7-12700K", "i7-12700K"),
        ("AMD Ryzen 7 5800X", "Ryzen75800X"),
        ("RTX 4070", "RTX4070"),
        ("GTX 750 Ti", "GTX750Ti"),
        ("Radeon RX 6600XT", "RX6600XT"),
        ("Corsair CMK16GX4M2D3200C16", "CMK16GX4M2D3200C16"),
    ])
    def test_part_number(self, text: str, expected: str):
        assert extract_part_number(text) == expected

    @pytest.mark.parametrize("text", ["LGA1700", "DDR4 memory", "PCIe4 x16", "blue box", ""])
    def test_bus_and_socket_names_are_not_part_numbers(self, text: str):
        assert extract_part_number(text) == UNKNOWN_PART_NUMBER


class TestValueExtraction:
    """Unit normalization into volts, amps, MHz, watts, mm and grams."""

    def test_electrical_units(self):
        e = extract_electrical("12V 54A 650W")
        assert e.voltage == pytest.approx(12)
        assert e.current == pytest.approx(54)
        assert e.power == pytest.approx(650)
        assert e.frequency == 0

    @pytest.mark.parametrize("text,expected", [
        ("3.6GHz", 3600),
        ("3200MHz", 3200),
        ("1.5 ghz", 1500),
    ])
    def test_frequency_uses_matched_unit(self, text: str, expected: float):
        assert extract_electrical(text).frequency == pytest.approx(expected)

    def test_physical_units(self):
        p = extract_physical("24cm long 11 cm wide 4cm high 1.2kg ATX")
        assert p.length == pytest.approx(240)
        assert p.width == pytest.approx(110)
        assert p.height == pytest.approx(40)
        assert p.weight == pytest.approx(1200)
        assert p.form_factor == "ATX"

    def test_inches(self):
        assert extract_physical("10 inch long").length == pytest.approx(254)

    @pytest.mark.parametrize("text,expected", [
        ("micro-atx board", "MICRO-ATX"),
        ("mini-itx", "MINI-ITX"),
        ("so-dimm", "SO-DIMM"),
        ("M.2 2280", "M.2"),
    ])
    def test_form_factor_most_specific(self, text: str, expected: str):
        assert extract_physical(text).form_factor == expected


class TestCompatibilityExtraction:
    """Socket, interface and pin configuration."""

    def test_socket_and_interface(self):
        c = extract_compatibility("B660 board lga 1700 PCIe 4.0")
        assert c.socket_type == "LGA1700"
        assert c.interface_type == "PCIE 4.0"

    def test_explicit_pin_count_wins(self):
        assert extract_compatibility("LGA1700 24-pin").pin_configuration == ("24-pin",)

    def test_no_pins_without_lga(self):
        assert extract_compatibility("AM4").pin_configuration == ()

    def test_normalizers(self):
        assert normalize_socket("lga 1700") == "LGA1700"
        assert normalize_interface("PCIe  4.0") == "PCIE 4.0"


class TestValidation:
    """Category-specific required fields."""

    def test_processor_needs_frequency(self):
        result = parse_specification("Intel i7-12700K LGA1700")
        assert "Processor frequency is required" in result.validation_errors
        assert not validate_parameters(result.spec)

    def test_memory_needs_socket(self):
        result = parse_specification("16GB RAM 3200MHz")
        assert any("socket" in e for e in result.validation_errors)

    def test_graphics_needs_power(self):
        result = parse_specification("RTX 4070 2.5GHz")
        assert any("power" in e for e in result.validation_errors)

    def test_complete_spec_is_valid(self):
        assert validate_parameters(parse_specification("RTX 4070 200W PCIe 4.0").spec)

    @pytest.mark.parametrize("field", ["voltage", "current", "frequency", "power"])
    def test_negative_electrical_value(self, field: str):
        spec = ComponentSpecification(electrical=ElectricalParameters(**{field: -5.0}))
        assert validation_errors(spec) == [f"Invalid {field}: -5.0 (must not be negative)"]
        assert validate_parameters(spec) is False

    @pytest.mark.parametrize("field", ["length", "width", "height", "weight"])
    def test_negative_physical_value(self, field: str):
        spec = ComponentSpecification(physical=PhysicalParameters(**{field: -5.0}))
        assert validation_errors(spec) == [f"Invalid {field}: -5.0 (must not be negative)"]
        assert validate_parameters(spec) is False

    def test_zero_values_are_not_negative(self):
        assert validation_errors(ComponentSpecification()) == []
