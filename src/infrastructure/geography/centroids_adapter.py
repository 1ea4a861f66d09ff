"""County-centroid JSON adapter for RegionRepository.

Implements loading of region centroids from the `county_centroids.json`
dataset and returns the mainland regions as domain Region Value Objects.

Record format (one JSON object per county, in a top-level array):
    {"geoid": "01001", "state": "01", "centroid": "-86.64,32.53", "population": 55869}

Lifecycle:
1) Check the file exists and is non-empty
2) Read and validate the JSON array with a pydantic TypeAdapter
3) Parse centroid "longitude,latitude" text and the state code
4) Drop non-mainland regions (Alaska, Hawaii, territories)
5) Re-index so index == position
6) Return the region list
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from domain.geography.errors import InvalidCentroidError, InvalidRegionDataError
from domain.geography.services import is_mainland_state, reindex_regions
from domain.geography.value_objects import Coordinate, Region

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)


class CentroidRecord(BaseModel):
    """Raw dataset record before conversion to a Region."""

    geoid: str
    state: str
    centroid: str
    population: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


_RECORDS_ADAPTER = TypeAdapter(list[CentroidRecord])


def parse_centroid(geoid: str, centroid: str) -> Coordinate:
    """Parse "longitude,latitude" text into a Coordinate.

    The text is parsed with float() so the resulting coordinate is bit-exact
    with the dataset; published placements are matched back by equality.
    """
    parts = centroid.split(",")
    if len(parts) != 2:
        raise InvalidCentroidError(geoid, centroid)
    try:
        longitude = float(parts[0])
        latitude = float(parts[1])
        return Coordinate(longitude=longitude, latitude=latitude)
    except ValueError as e:
        # Also covers pydantic.ValidationError for out-of-range degrees
        raise InvalidCentroidError(geoid, centroid) from e


def parse_state(geoid: str, state: str) -> int:
    """Parse a FIPS state code such as "06" into an int."""
    try:
        code = int(state, 10)
    except ValueError as e:
        raise InvalidRegionDataError(
            f"Region {geoid!r} has invalid state code {state!r}"
        ) from e
    if code < 0:
        raise InvalidRegionDataError(f"Region {geoid!r} has negative state code")
    return code


def record_to_region(record: CentroidRecord) -> Region:
    """Convert a validated record into a Region (index assigned later)."""
    return Region(
        coordinate=parse_centroid(record.geoid, record.centroid),
        population=record.population,
        state=parse_state(record.geoid, record.state),
        geoid=record.geoid,
    )


class JsonCentroidRegionAdapter:
    """Infrastructure adapter for loading regions from centroid JSON files.

    Parameters
    ----------
    mainland_only: bool
        When True (default) regions outside the contiguous states are dropped
        before re-indexing.
    """

    def __init__(self, mainland_only: bool = True) -> None:
        self.mainland_only = mainland_only

    def load_regions(self, file_path: Path | str) -> list[Region]:
        """Load regions from a centroid JSON file.

        Returns:
            Regions in file order, filtered, with index == position

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidRegionDataError: If the file is empty or malformed
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        try:
            raw = path.read_bytes()
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        if not raw.strip():
            raise InvalidRegionDataError("Empty file")

        try:
            records = _RECORDS_ADAPTER.validate_json(raw)
        except ValidationError as e:
            raise InvalidRegionDataError(
                f"Malformed centroid data in {path.name}: {e.error_count()} error(s)"
            ) from e

        regions = [record_to_region(record) for record in records]
        total = len(regions)

        if self.mainland_only:
            regions = [r for r in regions if is_mainland_state(r.state)]
        regions = reindex_regions(regions)

        unpopulated = sum(1 for r in regions if r.population == 0)
        if unpopulated:
            logger.warning(
                "Regions %s: %d regions have zero population", path.name, unpopulated
            )
        logger.info(
            "Regions %s: kept %d of %d regions", path.name, len(regions), total
        )
        return regions
