"""Geography Bounded Context - Domain Services.

Pure domain logic for distances and region filtering.
NO I/O operations - dataset loading is implemented by infrastructure adapters
under `src/infrastructure/geography/centroids_adapter.py` via domain ports.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from domain.geography.value_objects import Coordinate, Region

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM = 6371.0  # Mean Earth radius for the spherical model

# FIPS state codes outside the contiguous United States
# 02 Alaska, 15 Hawaii; codes above 56 (Wyoming) are territories (72 Puerto Rico)
EXCLUDED_STATE_CODES: tuple[int, ...] = (2, 15)
MAX_MAINLAND_STATE_CODE = 56


# ---------------------------------------------------------------------------
# Great-circle Distance
# ---------------------------------------------------------------------------
def haversine_distance_km(start: Coordinate, end: Coordinate) -> float:
    """Calculate great-circle distance between two points in kilometers.

    Haversine formula on a sphere of radius EARTH_RADIUS_KM.

    Args:
        start: First coordinate
        end: Second coordinate

    Returns:
        Distance in kilometers (always >= 0)
    """
    start_lat_rad = math.radians(start.latitude)
    end_lat_rad = math.radians(end.latitude)

    delta_lat = math.radians(start.latitude - end.latitude)
    delta_lon = math.radians(start.longitude - end.longitude)

    inner = (
        math.sin(delta_lat / 2.0) ** 2
        + math.cos(start_lat_rad)
        * math.cos(end_lat_rad)
        * math.sin(delta_lon / 2.0) ** 2
    )
    # Rounding can push near-antipodal pairs a hair above 1
    central_angle = 2.0 * math.asin(math.sqrt(min(inner, 1.0)))

    return EARTH_RADIUS_KM * central_angle


def haversine_distances_km(
    origin: Coordinate, longitudes: NDArray[np.float64], latitudes: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Vectorized haversine from one origin to many points.

    Same operation order as ``haversine_distance_km`` so both forms agree to
    within floating-point rounding.

    Args:
        origin: Coordinate all distances are measured from
        longitudes: 1D array of destination longitudes (degrees)
        latitudes: 1D array of destination latitudes (degrees)

    Returns:
        1D float64 array of distances in kilometers
    """
    origin_lat_rad = math.radians(origin.latitude)
    lat_rad = np.radians(latitudes)

    delta_lat = np.radians(origin.latitude - latitudes)
    delta_lon = np.radians(origin.longitude - longitudes)

    inner = (
        np.sin(delta_lat / 2.0) ** 2
        + math.cos(origin_lat_rad) * np.cos(lat_rad) * np.sin(delta_lon / 2.0) ** 2
    )
    central_angle = 2.0 * np.arcsin(np.sqrt(np.minimum(inner, 1.0)))

    return EARTH_RADIUS_KM * central_angle


def weighted_squared_distance_km2(
    start: Coordinate, end: Coordinate, weight: float
) -> float:
    """Return squared great-circle distance multiplied by ``weight``.

    With ``weight=1`` this is the plain squared distance.
    """
    distance = haversine_distance_km(start, end)
    return distance * distance * weight


# ---------------------------------------------------------------------------
# Mainland Filtering
# ---------------------------------------------------------------------------
def is_mainland_state(state: int) -> bool:
    """True for the contiguous states plus DC."""
    return state not in EXCLUDED_STATE_CODES and state <= MAX_MAINLAND_STATE_CODE


def reindex_regions(regions: Iterable[Region]) -> list[Region]:
    """Return copies of ``regions`` whose ``index`` equals their position.

    Regions are frozen, so re-indexing produces new instances; regions that
    already carry the right index are reused as-is.
    """
    reindexed: list[Region] = []
    for position, region in enumerate(regions):
        if region.index != position:
            region = region.model_copy(update={"index": position})
        reindexed.append(region)
    return reindexed


def filter_mainland_regions(regions: Sequence[Region]) -> list[Region]:
    """Drop non-mainland regions, keep input order, and re-index the rest."""
    return reindex_regions(r for r in regions if is_mainland_state(r.state))
