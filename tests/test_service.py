"""Tests for the request handlers and their response envelopes."""

import json

import pytest

from lamington_mcp import service
from lamington_mcp.catalog import build_catalog
from lamington_mcp.config import MAX_QUERY_LENGTH


@pytest.fixture
def catalog():
    return build_catalog()


class TestEnvelope:
    """Success and error envelopes shared by every handler."""

    @pytest.mark.parametrize("name", sorted(service.HANDLERS))
    def test_non_dict_payload(self, name: str, catalog):
        result = service.handle(name, None, catalog)
        assert result == {"success": False, "error": "Request body must be a JSON object"}

    @pytest.mark.parametrize("name", sorted(service.HANDLERS))
    def test_empty_payload_is_client_error(self, name: str, catalog):
        result = service.handle(name, {}, catalog)
        assert result["success"] is False
        assert "required" in result["error"]

    def test_unknown_operation(self):
        assert service.handle("teleport", {}) == {"success": False, "error": "Unknown operation: teleport"}

    def test_unexpected_error_is_generic(self, catalog, monkeypatch):
        def boom(query, catalog):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(service, "search_components", boom)
        result = service.search({"query": "RTX 4070 200W"}, catalog)
        assert result == {"success": False, "error": "Internal error during search"}

    def test_default_catalog(self):
        assert service.analyze_authenticity({"componentId": "cpu-001"})["success"] is True

    def test_responses_are_json_serializable(self, catalog):
        payloads = {
            "search": {"query": "RTX 4070 200W PCIe 4.0"},
            "parse": {"specification": "DDR4 16GB 3200MHz DIMM"},
            "analyze_authenticity": {"componentId": "gpu-002"},
            "negotiate": {"componentId": "mem-001", "quantity": 20, "vendorId": "vendor_001"},
            "optimize_quantity": {"componentId": "cpu-001", "budget": 150000},
            "find_adapters": {"legacyPort": "VGA"},
            "find_workarounds": {"targetComponentId": "cool-003"},
            "analyze_gray_market": {"componentId": "gpu-001"},
        }
        assert set(payloads) == set(service.HANDLERS)
        for name, payload in payloads.items():
            result = service.handle(name, payload, catalog)
            assert result["success"] is True, (name, result)
            json.dumps(result)


class TestSearchAndParse:
    """Tests for the search and parse handlers."""

    def test_search(self, catalog):
        result = service.search({"query": "Intel i7-12700K 3.6GHz LGA1700"}, catalog)
        assert result["success"] is True
        assert result["total_results"] == len(result["results"]) == 2
        first = result["results"][0]
        assert first["component"]["id"] == "cpu-001"
        assert first["availability"] == "in_stock"
        for entry in result["results"]:
            assert 0.0 <= entry["compatibility_score"] <= 1.0
            assert 0.0 <= entry["quality_score"] <= 1.0

    def test_query_too_long(self, catalog):
        result = service.search({"query": "x" * (MAX_QUERY_LENGTH + 1)}, catalog)
        assert result["success"] is False
        assert "too long" in result["error"]

    @pytest.mark.parametrize("query", ["", "   ", 42, None])
    def test_bad_query(self, catalog, query):
        assert service.search({"query": query}, catalog)["success"] is False

    def test_parse(self, catalog):
        result = service.parse({"specification": "Intel i7-12700K 3.6GHz LGA1700"}, catalog)
        parsed = result["parsed"]
        assert parsed["spec"]["category"] == "processor"
        assert parsed["spec"]["part_number"] == "i7-12700K"
        assert parsed["confidence"] == pytest.approx(1.0)
        assert parsed["is_ambiguous"] is False


class TestComponentHandlers:
    """Tests for handlers that take a component id."""

    @pytest.mark.parametrize("name,payload", [
        ("analyze_authenticity", {"componentId": "cpu-999"}),
        ("negotiate", {"componentId": "cpu-999", "quantity": 1}),
        ("optimize_quantity", {"componentId": "cpu-999", "budget": 100}),
        ("find_adapters", {"legacyPort": "VGA", "modernComponent": "cpu-999"}),
        ("find_workarounds", {"targetComponentId": "cpu-999"}),
        ("find_workarounds", {"targetComponentId": "gpu-003", "availableComponents": ["cpu-999"]}),
        ("analyze_gray_market", {"componentId": "cpu-999"}),
    ])
    def test_unknown_component(self, catalog, name, payload):
        result = service.handle(name, payload, catalog)
        assert result == {"success": False, "error": "Component not found: cpu-999"}

    def test_authenticity(self, catalog):
        analysis = service.analyze_authenticity({"componentId": "cpu-001"}, catalog)["analysis"]
        assert analysis["component_id"] == "cpu-001"
        assert 0 <= analysis["confidence_score"] <= 100

    @pytest.mark.parametrize("quantity", [0, -1, 2.5, True, "10"])
    def test_negotiate_bad_quantity(self, catalog, quantity):
        result = service.negotiate({"componentId": "cpu-001", "quantity": quantity}, catalog)
        assert result["success"] is False

    def test_negotiate(self, catalog):
        result = service.negotiate({"componentId": "cpu-001", "quantity": 50, "targetPrice": 10000}, catalog)
        negotiation = result["negotiation"]
        assert negotiation["price_breakdown"]["quantity_discount"] == 30
        assert negotiation["discount_percentage"] <= 50
        assert negotiation["strategy"]["opening_offer"] == pytest.approx(10000)

    def test_optimize_negative_budget(self, catalog):
        assert service.optimize({"componentId": "cpu-001", "budget": -5}, catalog)["success"] is False

    def test_adapters_default_component(self, catalog):
        result = service.find_adapters({"legacyPort": "VGA"}, catalog)
        assert [a["adapter_id"] for a in result["adapters"]] == ["vga_to_dvi", "vga_to_hdmi"]
        assert result["adapters"][0]["compatibility"] == "perfect"

    def test_adapters_unknown_port(self, catalog):
        result = service.find_adapters({"legacyPort": "firewire", "modernComponent": "per-001"}, catalog)
        assert result == {"success": True, "adapters": []}

    def test_workarounds_with_inventory(self, catalog):
        result = service.find_workarounds(
            {"targetComponentId": "gpu-003", "availableComponents": ["gpu-001", "psu-001"]}, catalog,
        )
        solution = result["solutions"][0]
        assert solution["template_id"] == "gpu_external_power"
        # 16.7 A + 54 A is over the limit
        assert solution["passes_safety"] is False
        assert solution["safety"]["electrical"] is False

    def test_workarounds_bad_inventory(self, catalog):
        result = service.find_workarounds({"targetComponentId": "gpu-003", "availableComponents": "gpu-001"}, catalog)
        assert result["success"] is False

    def test_gray_market(self, catalog):
        analysis = service.analyze_gray_market({"componentId": "gpu-001"}, catalog)["analysis"]
        assert set(analysis) == {"pricing", "availability", "risks"}
        assert analysis["pricing"]["trend_prediction"] == "rising"
