"""Placement Bounded Context - Nearest-location Population Tally.

Assigns every region to the nearest of a small, caller-chosen set of fixed
locations and sums population per location. The location count is small and
this runs once, so distances are computed directly without a DistanceCache.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from domain.geography.services import weighted_squared_distance_km2
from domain.geography.value_objects import Region
from domain.placement.errors import (
    InvalidPlacementRequestError,
    LocationResolutionError,
)

logger = logging.getLogger(__name__)


def resolve_location(regions: Sequence[Region], geoid: str) -> Region:
    """Return the single region whose geoid equals ``geoid``.

    Raises:
        LocationResolutionError: If zero or more than one region matches
    """
    matches = [region for region in regions if region.geoid == geoid]
    if len(matches) != 1:
        raise LocationResolutionError(geoid, len(matches))
    return matches[0]


def count_closest_population(
    regions: Sequence[Region], geoids: Sequence[str]
) -> list[int]:
    """Sum population of the regions nearest to each fixed location.

    Args:
        regions: Every region to assign (index alignment not required)
        geoids: Identifiers of the fixed locations

    Returns:
        Population sums in the same order as ``geoids``. Regions equidistant
        from several locations count toward the first of them.

    Raises:
        LocationResolutionError: If an identifier is missing or duplicated
        InvalidPlacementRequestError: If regions exist but no location is given
    """
    if not geoids:
        if regions:
            raise InvalidPlacementRequestError(
                "At least one location is required to assign regions"
            )
        return []

    locations = [resolve_location(regions, geoid).coordinate for geoid in geoids]
    totals = [0] * len(locations)

    for region in regions:
        distances = [
            weighted_squared_distance_km2(location, region.coordinate, 1)
            for location in locations
        ]
        # min() keeps the first of equal keys
        nearest = min(range(len(distances)), key=distances.__getitem__)
        totals[nearest] += region.population

    logger.info(
        "Assigned %d regions to %d locations", len(regions), len(locations)
    )
    return totals
