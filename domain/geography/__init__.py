"""Geography Bounded Context.

Responsible for the physical description of regions:
- Value Objects: Coordinate, Region
- Services: haversine_distance_km, weighted_squared_distance_km2,
  filter_mainland_regions, reindex_regions
- Ports: RegionRepository
"""
