"""Geography Bounded Context - Value Objects.

Immutable data structures representing regions and their centroids.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

import struct

from pydantic import BaseModel, ConfigDict, Field


def _float_bits(value: float) -> bytes:
    """Return the IEEE-754 binary64 encoding of ``value``."""
    return struct.pack("<d", value)


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------
class Coordinate(BaseModel):
    """Geographic coordinate in decimal degrees (Value Object).

    Invariants:
        CO-1: longitude in [-180, 180]
        CO-2: latitude in [-90, 90]
        CO-3: both finite (no NaN)

    Equality is exact: two coordinates are equal only when both floats have
    identical bit patterns. Coordinates are used as lookup keys (matching a
    placement back to its region), so no tolerance is applied. Note that this
    makes ``0.0`` and ``-0.0`` distinct.
    """

    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return _float_bits(self.longitude) == _float_bits(
            other.longitude
        ) and _float_bits(self.latitude) == _float_bits(other.latitude)

    def __hash__(self) -> int:
        return hash((_float_bits(self.longitude), _float_bits(self.latitude)))

    def __str__(self) -> str:
        return f"({self.longitude}, {self.latitude})"


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------
class Region(BaseModel):
    """A geographic unit (county) served by the placement (Value Object).

    Invariants:
        RE-1: population >= 0
        RE-2: state >= 0 (FIPS state code)
        RE-3: index >= 0

    ``index`` must equal the region's position in the sequence handed to the
    placement search. Loaders assign it after filtering via
    ``domain.geography.services.reindex_regions``.
    """

    coordinate: Coordinate
    population: int = Field(ge=0)
    state: int = Field(ge=0)
    geoid: str
    index: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (
            f"{self.coordinate}, index: {self.index}, geoid: {self.geoid}, "
            f"state: {self.state}, population: {self.population}"
        )
