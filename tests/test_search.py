"""Tests for inventory search, matching and ranking."""

from dataclasses import replace

import pytest

from lamington_mcp.catalog import build_catalog
from lamington_mcp.models import (
    AvailabilityStatus,
    ComponentCategory,
    ComponentSpecification,
    CompatibilityRequirements,
    ElectricalParameters,
)
from lamington_mcp.search import (
    AVAILABILITY_RANK,
    SearchResult,
    compatibility_score,
    find_alternatives,
    is_match,
    part_number_matches,
    rank_results,
    search_components,
    within_tolerance,
)


@pytest.fixture
def catalog():
    return build_catalog()


class TestMatching:
    """Tests for is_match and its predicates."""

    @pytest.mark.parametrize("candidate,requested,expected", [
        (100, 100, True),
        (100, 110, True),
        (100, 90, True),
        (100, 111, False),
        (200, 180, True),
        (3800, 3600, True),
        (2500, 3600, False),
    ])
    def test_within_tolerance(self, candidate, requested, expected):
        assert within_tolerance(candidate, requested) is expected

    def test_part_number_is_substring_and_case_insensitive(self, catalog):
        query = ComponentSpecification(category=ComponentCategory.GRAPHICS, part_number="rtx 4070")
        assert part_number_matches(catalog.get("gpu-001"), query)
        assert not part_number_matches(catalog.get("gpu-002"), query)

    def test_unknown_part_number_never_matches(self, catalog):
        query = ComponentSpecification(category=ComponentCategory.GRAPHICS)
        assert not part_number_matches(catalog.get("gpu-001"), query)

    def test_category_must_match(self, catalog):
        query = ComponentSpecification(category=ComponentCategory.MEMORY, part_number="RTX4070")
        assert not is_match(catalog.get("gpu-001"), query)

    def test_socket_mismatch_rejects(self, catalog):
        query = ComponentSpecification(
            category=ComponentCategory.PROCESSOR,
            electrical=ElectricalParameters(frequency=3700),
            compatibility=CompatibilityRequirements(socket_type="LGA1700"),
        )
        assert is_match(catalog.get("cpu-001"), query)
        assert not is_match(catalog.get("cpu-002"), query)


class TestCompatibilityScore:
    """Tests for compatibility_score."""

    def test_perfect_fit(self, catalog):
        query = ComponentSpecification(
            category=ComponentCategory.GRAPHICS,
            electrical=ElectricalParameters(power=200),
            compatibility=CompatibilityRequirements(interface_type="PCIE 4.0"),
        )
        assert compatibility_score(catalog.get("gpu-001"), query).score == pytest.approx(1.0)

    def test_category_only_query_scores_full(self, catalog):
        query = ComponentSpecification(category=ComponentCategory.COOLING)
        assert compatibility_score(catalog.get("cool-001"), query).score == pytest.approx(1.0)

    def test_large_electrical_error_loses_electrical_share(self, catalog):
        query = ComponentSpecification(
            category=ComponentCategory.GRAPHICS,
            electrical=ElectricalParameters(power=200),
            compatibility=CompatibilityRequirements(interface_type="PCIE 4.0"),
        )
        # 15% power error wipes out the 10-point power sub-weight
        assert compatibility_score(catalog.get("gpu-002"), query).score == pytest.approx(0.65)

    def test_electrical_error_relative_to_requested_value(self, catalog):
        query = ComponentSpecification(
            category=ComponentCategory.GRAPHICS,
            electrical=ElectricalParameters(power=210),
        )
        # 10 W off a 210 W request: power fraction 1 - (10/210*100)/10 = 11/21
        assert compatibility_score(catalog.get("gpu-001"), query).score == pytest.approx(13 / 18)

    def test_score_bounded_for_whole_catalog(self, catalog):
        query = ComponentSpecification(
            category=ComponentCategory.PROCESSOR,
            electrical=ElectricalParameters(voltage=1.2, frequency=3600, power=125),
            compatibility=CompatibilityRequirements(socket_type="LGA1700", interface_type="PCIE 5.0"),
        )
        for component in catalog:
            assert 0.0 <= compatibility_score(component, query).score <= 1.0


class TestSearchComponents:
    """Tests for search_components."""

    def test_processor_query_ranks_oem_first(self, catalog):
        results = search_components("Intel i7-12700K 3.6GHz LGA1700", catalog)
        assert [r.component.id for r in results] == ["cpu-001", "cpu-003"]
        assert results[0].compatibility_score == pytest.approx(1.0)
        assert results[0].quality_score > results[1].quality_score

    def test_results_are_sorted(self, catalog):
        for query in ("Intel i7-12700K 3.6GHz LGA1700", "12V fan cooler 120mm fan", "DDR4 16GB 3200MHz DIMM"):
            keys = [r.sort_key() for r in search_components(query, catalog)]
            assert keys == sorted(keys)

    def test_match_carries_location_and_alternatives(self, catalog):
        results = search_components("RTX 4070 200W PCIe 4.0", catalog)
        assert len(results) == 1
        hit = results[0]
        assert hit.component.id == "gpu-001"
        assert hit.location == catalog.get("gpu-001").location
        assert [a.component.id for a in hit.alternatives] == ["gpu-002"]
        assert hit.alternatives[0].reason.startswith("Same component category")

    def test_ambiguous_query_asks_for_clarification(self, catalog):
        results = search_components("blue box", catalog)
        assert len(results) == 1
        assert results[0].requires_clarification
        assert results[0].component is None
        assert results[0].clarification_prompts

    def test_no_match_returns_placeholder(self, catalog):
        results = search_components("Intel i9-14900K 6.0GHz", catalog)
        assert len(results) == 1
        placeholder = results[0]
        assert placeholder.component is None
        assert not placeholder.requires_clarification
        assert placeholder.availability == AvailabilityStatus.OUT_OF_STOCK
        assert placeholder.location == catalog.section_for(ComponentCategory.PROCESSOR)

    def test_empty_catalog(self):
        results = search_components("RTX 4070 200W", build_catalog([]))
        assert len(results) == 1
        assert results[0].component is None
        assert results[0].alternatives == []


class TestRanking:
    """Tests for rank_results and alternatives."""

    def test_lexicographic_order(self, catalog):
        cpu = catalog.get("cpu-001")
        results = [
            SearchResult(cpu, AvailabilityStatus.DISCONTINUED, compatibility_score=0.9, quality_score=0.9),
            SearchResult(cpu, AvailabilityStatus.IN_STOCK, compatibility_score=0.9, quality_score=0.9),
            SearchResult(cpu, AvailabilityStatus.IN_STOCK, compatibility_score=0.9, quality_score=0.95),
            SearchResult(cpu, AvailabilityStatus.IN_STOCK, compatibility_score=1.0, quality_score=0.1),
        ]
        ranked = rank_results(results)
        assert ranked == [results[3], results[2], results[1], results[0]]

    def test_every_status_has_a_rank(self):
        assert set(AVAILABILITY_RANK) == set(AvailabilityStatus)

    def test_alternatives_exclude_target_and_respect_limit(self, catalog):
        query = ComponentSpecification(category=ComponentCategory.COOLING)
        target = catalog.get("cool-001")
        alternatives = find_alternatives(query, catalog, exclude=target, limit=2)
        assert len(alternatives) == 2
        assert all(a.component.id != "cool-001" for a in alternatives)

    def test_trade_offs_mention_availability(self, catalog):
        discontinued = replace(catalog.get("gpu-002"), id="gpu-900", availability=AvailabilityStatus.DISCONTINUED)
        query = ComponentSpecification(category=ComponentCategory.GRAPHICS)
        alternatives = find_alternatives(query, build_catalog([discontinued]))
        assert "Availability: discontinued" in alternatives[0].trade_offs
