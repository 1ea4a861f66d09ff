"""Placement Bounded Context - Error Hierarchy.

Custom exceptions for placement search and population tally. All of these
signal caller bugs (violated preconditions); an infeasible search is NOT an
error and is reported as an empty PlacementResult instead.
"""

from __future__ import annotations


class PlacementError(Exception):
    """Base error for placement operations."""


class RegionIndexMismatchError(PlacementError):
    """Region index does not match its position in the region sequence.

    Attributes:
        position: Position of the region in the sequence
        index: The index the region carries
    """

    def __init__(self, position: int, index: int) -> None:
        self.position = position
        self.index = index
        super().__init__(f"Region at position {position} has wrong index ({index})")


class LocationResolutionError(PlacementError):
    """A fixed-location identifier matched zero or several regions.

    Attributes:
        geoid: The identifier being resolved
        match_count: Number of regions carrying that identifier
    """

    def __init__(self, geoid: str, match_count: int) -> None:
        self.geoid = geoid
        self.match_count = match_count
        if match_count == 0:
            detail = "no region matches"
        else:
            detail = f"{match_count} regions match"
        super().__init__(f"Cannot resolve location {geoid!r}: {detail}")


class InvalidPlacementRequestError(PlacementError):
    """Placement request parameters are invalid."""

    pass


class CacheIndexError(PlacementError, IndexError):
    """Distance cache lookup outside the cached region range."""

    def __init__(self, row: int, column: int, size: int) -> None:
        self.row = row
        self.column = column
        self.size = size
        super().__init__(
            f"Cache index ({row}, {column}) out of range for {size} regions"
        )
