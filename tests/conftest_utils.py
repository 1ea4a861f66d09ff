"""Shared test builders for regions.

Used by:
- tests/geography/
- tests/placement/
- tests/infrastructure/
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from domain.geography.services import reindex_regions
from domain.geography.value_objects import Coordinate, Region


def make_region(
    longitude: float,
    latitude: float,
    population: int,
    geoid: str = "",
    state: int = 1,
) -> Region:
    """Build a region with index 0 (callers re-index)."""
    return Region(
        coordinate=Coordinate(longitude=longitude, latitude=latitude),
        population=population,
        state=state,
        geoid=geoid,
    )


def make_regions(
    specs: Iterable[tuple[float, float, int] | tuple[float, float, int, str]],
) -> list[Region]:
    """Build an aligned region list from (lon, lat, population[, geoid]) tuples."""
    return reindex_regions(make_region(*spec) for spec in specs)


def get_dataset_path() -> Path:
    """Return path to the real county_centroids.json (may not exist)."""
    return Path(__file__).parent.parent / "public" / "data" / "county_centroids.json"
