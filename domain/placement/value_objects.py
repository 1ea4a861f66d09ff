"""Placement Bounded Context - Value Objects.

Immutable data structures for the placement search: the precomputed distance
cache, the search configuration, and the search result.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.geography.value_objects import Coordinate
from domain.placement.errors import CacheIndexError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
# Candidates pulled from the enumerator per parallel round. Each candidate is
# k (index, Coordinate) pairs, so this caps peak memory for k >= 3.
DEFAULT_CHUNK_SIZE = 100_000


# ---------------------------------------------------------------------------
# DistanceCache
# ---------------------------------------------------------------------------
class DistanceCache(BaseModel):
    """Pairwise population-weighted squared distances (Value Object).

    Cell (i, j) holds distance(i, j)^2 * population_j, in km^2 * people.
    The matrix is not symmetric: the weight is the destination's population.

    The data array is made read-only at construction time so it can be shared
    with worker processes without synchronization.
    """

    data: NDArray[np.float64]  # 2D float64 (n x n), read-only

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_matrix(self) -> "DistanceCache":
        if self.data.ndim != 2:
            raise ValueError(f"Cache must be 2D, got {self.data.ndim}D")
        if self.data.shape[0] != self.data.shape[1]:
            raise ValueError(f"Cache must be square, got {self.data.shape}")
        if self.data.dtype != np.float64:
            raise ValueError(f"Cache must be float64, got {self.data.dtype}")

        # Own a contiguous copy and freeze it; never flip flags on caller arrays
        immutable = np.array(self.data, dtype=np.float64, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)

        return self

    @property
    def size(self) -> int:
        """Number of regions covered by the cache."""
        return int(self.data.shape[0])

    def weighted_squared_distance(self, row: int, column: int) -> float:
        """Return the cached value for origin ``row`` and destination ``column``.

        Raises:
            CacheIndexError: If either index is outside [0, size). Negative
                indices are rejected rather than wrapped.
        """
        size = self.size
        if not (0 <= row < size and 0 <= column < size):
            raise CacheIndexError(row, column, size)
        return float(self.data[row, column])


# ---------------------------------------------------------------------------
# SearchSettings
# ---------------------------------------------------------------------------
class SearchStrategy(str, Enum):
    """How candidates are evaluated."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


class SearchSettings(BaseModel):
    """Configuration for ``find_optimal_placement`` (Value Object).

    Fields:
        strategy: Sequential fold or chunked parallel reduction
        chunk_size: Candidates pulled from the enumerator per parallel round
        n_jobs: joblib worker count (-1 = all cores, -2 = all but one, ...)
        backend: joblib backend used for the parallel strategy

    Neither chunk_size, n_jobs nor backend changes the result; they only trade
    memory and start-up cost against throughput.
    """

    strategy: SearchStrategy = SearchStrategy.PARALLEL
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    n_jobs: int = -1
    backend: Literal["loky", "threading", "multiprocessing"] = "loky"

    model_config = ConfigDict(frozen=True)

    @field_validator("n_jobs")
    @classmethod
    def validate_n_jobs(cls, value: int) -> int:
        if value == 0:
            raise ValueError("n_jobs must be non-zero (use 1 for a single worker)")
        return value


# ---------------------------------------------------------------------------
# PlacementResult
# ---------------------------------------------------------------------------
class PlacementResult(BaseModel):
    """Outcome of an optimal placement search (Value Object).

    Invariants:
        PR-1: cost >= 0
        PR-2: coordinates empty <=> cost is +inf (no solution)

    Coordinates follow enumeration order (ascending region index), not any
    geographic ordering.
    """

    coordinates: tuple[Coordinate, ...]
    cost: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_feasibility(self) -> "PlacementResult":
        if not self.coordinates and not math.isinf(self.cost):
            raise ValueError("Empty placement must carry an infinite cost")
        if self.coordinates and math.isinf(self.cost):
            raise ValueError("Non-empty placement must carry a finite cost")
        return self

    @property
    def is_feasible(self) -> bool:
        """False when no placement exists (k larger than the region count)."""
        return bool(self.coordinates)

    @classmethod
    def infeasible(cls) -> "PlacementResult":
        """The no-solution result."""
        return cls(coordinates=(), cost=math.inf)
