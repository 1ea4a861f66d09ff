"""Geography Bounded Context - Error Hierarchy.

Custom exceptions for loading and validating region data.
"""

from __future__ import annotations


class GeographyError(Exception):
    """Base error for geography operations."""


class InvalidRegionDataError(GeographyError):
    """Region dataset is malformed, truncated, or has unparsable fields."""


class InvalidCentroidError(InvalidRegionDataError):
    """Centroid string is not a "longitude,latitude" pair.

    Attributes:
        geoid: Identifier of the offending record
        centroid: The raw centroid text
    """

    def __init__(self, geoid: str, centroid: str) -> None:
        self.geoid = geoid
        self.centroid = centroid
        super().__init__(
            f"Region {geoid!r} has invalid centroid {centroid!r}; "
            "expected 'longitude,latitude'"
        )
