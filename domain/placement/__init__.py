"""Placement Bounded Context.

Responsible for choosing facility locations among region centroids:
- Value Objects: DistanceCache, PlacementResult, SearchSettings
- Services: enumerate_candidates, CostEvaluator, find_optimal_placement,
  count_closest_population
"""
