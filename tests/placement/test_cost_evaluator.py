"""Tests for candidate cost scoring."""

from __future__ import annotations

import pytest

from domain.geography.services import haversine_distance_km
from domain.placement.errors import InvalidPlacementRequestError
from domain.placement.services import (
    CostEvaluator,
    candidate_cost,
    distance_cache_for_regions,
    enumerate_candidates,
)
from tests.conftest_utils import make_regions


def reference_cost(candidate, regions) -> float:
    """Direct scalar computation of the cost, no cache."""
    total = 0.0
    for region in regions:
        nearest = min(
            haversine_distance_km(location, region.coordinate) ** 2 * region.population
            for _, location in candidate
        )
        total += nearest * nearest
    return total


def test_single_location_cost_matches_hand_calculation(line_regions):
    cache = distance_cache_for_regions(line_regions)
    center = line_regions[1]
    half_span = haversine_distance_km(line_regions[0].coordinate, center.coordinate)

    cost = candidate_cost(((1, center.coordinate),), line_regions, cache)

    # Two neighbours at equal distance; the weighted squared term is squared again
    assert cost == pytest.approx(2 * (half_span**2 * 1000) ** 2, rel=1e-12)


def test_cost_matches_reference_for_all_candidates(two_cluster_regions):
    cache = distance_cache_for_regions(two_cluster_regions)
    evaluator = CostEvaluator(cache, two_cluster_regions)

    for candidate in enumerate_candidates(two_cluster_regions, 2):
        assert evaluator.cost(candidate) == pytest.approx(
            reference_cost(candidate, two_cluster_regions), rel=1e-9
        )


def test_cost_uses_nearest_location(two_cluster_regions):
    cache = distance_cache_for_regions(two_cluster_regions)
    evaluator = CostEvaluator(cache, two_cluster_regions)
    regions = two_cluster_regions
    centers = ((1, regions[1].coordinate), (4, regions[4].coordinate))
    far_pair = ((0, regions[0].coordinate), (1, regions[1].coordinate))

    assert evaluator.cost(centers) < evaluator.cost(far_pair)


def test_cost_zero_when_every_region_is_a_location(line_regions):
    cache = distance_cache_for_regions(line_regions)
    candidate = tuple((r.index, r.coordinate) for r in line_regions)

    assert candidate_cost(candidate, line_regions, cache) == 0.0


def test_zero_population_regions_contribute_nothing():
    regions = make_regions([(0.0, 0.0, 1000), (10.0, 0.0, 0), (20.0, 0.0, 0)])
    cache = distance_cache_for_regions(regions)

    assert candidate_cost(((0, regions[0].coordinate),), regions, cache) == 0.0


def test_identical_coordinates_contribute_nothing():
    regions = make_regions([(3.0, 4.0, 500), (3.0, 4.0, 700)])
    cache = distance_cache_for_regions(regions)

    assert candidate_cost(((0, regions[0].coordinate),), regions, cache) == 0.0
    assert candidate_cost(((1, regions[1].coordinate),), regions, cache) == 0.0


def test_cost_is_non_negative(two_cluster_regions):
    cache = distance_cache_for_regions(two_cluster_regions)
    evaluator = CostEvaluator(cache, two_cluster_regions)

    assert all(
        evaluator.cost(c) >= 0 for c in enumerate_candidates(two_cluster_regions, 3)
    )


def test_evaluator_on_region_subset(two_cluster_regions):
    """Scoring only the first cluster ignores the second cluster's regions."""
    cache = distance_cache_for_regions(two_cluster_regions)
    first_cluster = two_cluster_regions[:3]
    evaluator = CostEvaluator(cache, first_cluster)
    candidate = ((1, two_cluster_regions[1].coordinate),)

    assert evaluator.columns is not None
    assert evaluator.cost(candidate) == pytest.approx(
        reference_cost(candidate, first_cluster), rel=1e-9
    )


def test_evaluator_full_list_uses_all_columns(line_regions):
    evaluator = CostEvaluator(distance_cache_for_regions(line_regions), line_regions)
    assert evaluator.columns is None


def test_evaluator_rejects_regions_outside_cache(line_regions, two_cluster_regions):
    cache = distance_cache_for_regions(line_regions)

    with pytest.raises(InvalidPlacementRequestError):
        CostEvaluator(cache, two_cluster_regions)


def test_function_form_matches_evaluator(two_cluster_regions):
    cache = distance_cache_for_regions(two_cluster_regions)
    evaluator = CostEvaluator(cache, two_cluster_regions)

    for candidate in enumerate_candidates(two_cluster_regions, 2):
        assert candidate_cost(candidate, two_cluster_regions, cache) == evaluator.cost(
            candidate
        )
