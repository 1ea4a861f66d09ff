"""Placement Bounded Context - Domain Services.

Exact brute-force search for the k region centroids that minimize the
population-weighted cost of serving every region from its nearest location.

Pipeline:
1) Validate that every region's index equals its position
2) Build the DistanceCache once (O(n^2) haversine evaluations)
3) Lazily enumerate all C(n, k) candidate subsets
4) Score each candidate against all regions using cache lookups
5) Reduce to the first candidate with the minimum cost (strict less-than)

The parallel strategy pulls the enumerator in bounded chunks, splits each chunk
into contiguous slices (one per joblib worker), folds every slice locally, and
combines the slice minima in slice order. That makes it bit-identical to the
sequential fold for any chunk size or worker count.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Sequence
from itertools import combinations, islice

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs
from numpy.typing import NDArray

from domain.geography.services import haversine_distances_km
from domain.geography.value_objects import Coordinate, Region
from domain.placement.errors import (
    InvalidPlacementRequestError,
    RegionIndexMismatchError,
)
from domain.placement.value_objects import (
    DEFAULT_CHUNK_SIZE,
    DistanceCache,
    PlacementResult,
    SearchSettings,
    SearchStrategy,
)

logger = logging.getLogger(__name__)

# One candidate: k (region index, coordinate) pairs in ascending index order
Candidate = tuple[tuple[int, Coordinate], ...]


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------
def validate_region_indices(regions: Sequence[Region]) -> None:
    """Raise RegionIndexMismatchError unless regions[i].index == i for all i."""
    for position, region in enumerate(regions):
        if region.index != position:
            raise RegionIndexMismatchError(position, region.index)


def _validate_location_count(k: int) -> None:
    # bool is an int subclass; True would silently mean k=1
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidPlacementRequestError(
            f"Location count must be an int, got {type(k).__name__}"
        )
    if k <= 0:
        raise InvalidPlacementRequestError(f"Location count must be positive: {k}")


# ---------------------------------------------------------------------------
# Distance Cache
# ---------------------------------------------------------------------------
def build_distance_cache(
    coordinates_with_population: Iterable[tuple[Coordinate, int]],
) -> DistanceCache:
    """Precompute distance(i, j)^2 * population_j for every ordered pair.

    Args:
        coordinates_with_population: Ordered (coordinate, population) pairs;
            position in this sequence becomes the cache row/column index.

    Returns:
        DistanceCache of shape (n, n)
    """
    pairs = list(coordinates_with_population)
    n = len(pairs)

    longitudes = np.fromiter((c.longitude for c, _ in pairs), dtype=np.float64, count=n)
    latitudes = np.fromiter((c.latitude for c, _ in pairs), dtype=np.float64, count=n)
    populations = np.fromiter((p for _, p in pairs), dtype=np.float64, count=n)

    # Row by row keeps temporaries at O(n) instead of O(n^2)
    data = np.empty((n, n), dtype=np.float64)
    for row, (origin, _) in enumerate(pairs):
        distances = haversine_distances_km(origin, longitudes, latitudes)
        data[row] = distances * distances * populations

    logger.info("Distance cache built for %d regions", n)
    return DistanceCache(data=data)


def distance_cache_for_regions(regions: Sequence[Region]) -> DistanceCache:
    """Build the cache for an aligned region list."""
    return build_distance_cache((r.coordinate, r.population) for r in regions)


# ---------------------------------------------------------------------------
# Candidate Enumeration
# ---------------------------------------------------------------------------
def count_candidates(region_count: int, k: int) -> int:
    """Number of candidates the enumerator yields: C(n, k)."""
    return math.comb(region_count, k)


def enumerate_candidates(regions: Sequence[Region], k: int) -> Iterator[Candidate]:
    """Lazily yield every k-element subset of (index, coordinate) pairs.

    Combinations, not permutations: indices inside a candidate are strictly
    increasing and no subset is produced twice. The iterator is single-pass.
    """
    return combinations(((r.index, r.coordinate) for r in regions), k)


def iter_candidate_chunks(
    candidates: Iterator[Candidate], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[list[Candidate]]:
    """Pull bounded chunks from ``candidates`` until it is exhausted.

    Only one chunk is materialized at a time. The final chunk may be shorter;
    no empty chunk is ever yielded.
    """
    if chunk_size <= 0:
        raise InvalidPlacementRequestError(f"chunk_size must be positive: {chunk_size}")
    while True:
        chunk = list(islice(candidates, chunk_size))
        if not chunk:
            return
        yield chunk


# ---------------------------------------------------------------------------
# Cost Evaluation
# ---------------------------------------------------------------------------
def _indexed_cost(
    weights: NDArray[np.float64],
    location_indices: Sequence[int] | NDArray[np.intp],
    columns: NDArray[np.intp] | None,
) -> float:
    """Cost kernel shared by the sequential and parallel paths.

    For each region column, takes the minimum cached value over the candidate's
    location rows, squares it, and sums. The squared weighted-squared distance
    is kept as-is; see DESIGN.md.
    """
    block = weights[np.asarray(location_indices, dtype=np.intp)]
    if columns is not None:
        block = block[:, columns]
    nearest = block.min(axis=0)
    return float(np.square(nearest).sum())


class CostEvaluator:
    """Scores candidates against a fixed region list using a DistanceCache.

    Parameters
    ----------
    cache: DistanceCache
        Cache built over the full aligned region list.
    regions: Sequence[Region]
        Regions to serve. Their ``index`` values select cache columns; the
        full aligned list uses every column.
    """

    def __init__(self, cache: DistanceCache, regions: Sequence[Region]) -> None:
        self.cache = cache
        columns = np.fromiter(
            (r.index for r in regions), dtype=np.intp, count=len(regions)
        )
        if columns.size and (columns.min() < 0 or columns.max() >= cache.size):
            raise InvalidPlacementRequestError(
                f"Region indices exceed cache size {cache.size}"
            )
        if np.array_equal(columns, np.arange(cache.size)):
            self._columns: NDArray[np.intp] | None = None
        else:
            self._columns = columns

    @property
    def columns(self) -> NDArray[np.intp] | None:
        """Cache columns scored, or None when all columns are used in order."""
        return self._columns

    def cost(self, candidate: Candidate) -> float:
        """Total cost of serving every region from its nearest location."""
        return _indexed_cost(
            self.cache.data, [index for index, _ in candidate], self._columns
        )


def candidate_cost(
    candidate: Candidate, regions: Sequence[Region], cache: DistanceCache
) -> float:
    """Functional form of ``CostEvaluator(cache, regions).cost(candidate)``."""
    return CostEvaluator(cache, regions).cost(candidate)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------
def _fold_slice(
    weights: NDArray[np.float64],
    index_rows: NDArray[np.intp],
    columns: NDArray[np.intp] | None,
) -> tuple[float, int]:
    """Worker task: (min cost, position of first minimum) over index_rows.

    Returns (inf, -1) for an empty slice.
    """
    best_cost = math.inf
    best_position = -1
    for position, row in enumerate(index_rows):
        cost = _indexed_cost(weights, row, columns)
        if cost < best_cost:
            best_cost = cost
            best_position = position
    return best_cost, best_position


def _slice_bounds(length: int, parts: int) -> list[tuple[int, int]]:
    """Split range(length) into at most ``parts`` contiguous, ordered slices."""
    parts = max(1, min(parts, length))
    base, extra = divmod(length, parts)
    bounds: list[tuple[int, int]] = []
    start = 0
    for part in range(parts):
        stop = start + base + (1 if part < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


def _search_sequential(
    candidates: Iterator[Candidate], evaluator: CostEvaluator
) -> tuple[float, Candidate]:
    best_cost = math.inf
    best: Candidate = ()
    for candidate in candidates:
        cost = evaluator.cost(candidate)
        if cost < best_cost:
            best_cost = cost
            best = candidate
    return best_cost, best


def _search_parallel(
    candidates: Iterator[Candidate],
    evaluator: CostEvaluator,
    settings: SearchSettings,
) -> tuple[float, Candidate]:
    weights = evaluator.cache.data
    columns = evaluator.columns
    workers = effective_n_jobs(settings.n_jobs)

    best_cost = math.inf
    best: Candidate = ()

    with Parallel(n_jobs=settings.n_jobs, backend=settings.backend) as parallel:
        for chunk_number, chunk in enumerate(
            iter_candidate_chunks(candidates, settings.chunk_size), start=1
        ):
            index_rows = np.array(
                [[index for index, _ in candidate] for candidate in chunk],
                dtype=np.intp,
            )
            bounds = _slice_bounds(len(chunk), workers)
            slice_minima = parallel(
                delayed(_fold_slice)(weights, index_rows[start:stop], columns)
                for start, stop in bounds
            )

            # Combine in slice order so the earliest minimum wins ties
            chunk_cost = math.inf
            chunk_position = -1
            for (start, _), (cost, position) in zip(bounds, slice_minima):
                if cost < chunk_cost:
                    chunk_cost = cost
                    chunk_position = start + position

            if chunk_cost < best_cost:
                best_cost = chunk_cost
                best = chunk[chunk_position]

            logger.debug(
                "Chunk %d: %d candidates, chunk best %.6g, running best %.6g",
                chunk_number,
                len(chunk),
                chunk_cost,
                best_cost,
            )

    return best_cost, best


# ---------------------------------------------------------------------------
# Main Service: find_optimal_placement
# ---------------------------------------------------------------------------
def find_optimal_placement(
    regions: Sequence[Region],
    k: int,
    settings: SearchSettings | None = None,
) -> PlacementResult:
    """Find the k region centroids that minimize total weighted cost.

    Args:
        regions: Filtered regions with ``index`` equal to position
        k: Number of locations to place
        settings: Strategy, chunking and worker configuration. Defaults to
            the parallel strategy with all cores.

    Returns:
        PlacementResult with the winning coordinates in enumeration order.
        If k exceeds the region count (including an empty region list) the
        result is infeasible: no coordinates and infinite cost.

    Raises:
        RegionIndexMismatchError: If any region's index differs from its position
        InvalidPlacementRequestError: If k is not a positive int

    Example:
        >>> regions = JsonCentroidRegionAdapter().load_regions("county_centroids.json")
        >>> result = find_optimal_placement(regions, 2)
        >>> print([str(c) for c in result.coordinates])
    """
    if settings is None:
        settings = SearchSettings()

    # PRE-1: index alignment
    validate_region_indices(regions)

    # PRE-2: positive location count
    _validate_location_count(k)

    n = len(regions)
    if k > n:
        logger.warning(
            "No placement: %d locations requested for %d regions", k, n
        )
        return PlacementResult.infeasible()

    cache = distance_cache_for_regions(regions)
    evaluator = CostEvaluator(cache, regions)
    candidates = enumerate_candidates(regions, k)

    logger.info(
        "Searching %d candidates (n=%d, k=%d, strategy=%s)",
        count_candidates(n, k),
        n,
        k,
        settings.strategy.value,
    )

    if settings.strategy is SearchStrategy.SEQUENTIAL:
        best_cost, best = _search_sequential(candidates, evaluator)
    else:
        best_cost, best = _search_parallel(candidates, evaluator, settings)

    if not best:
        return PlacementResult.infeasible()

    logger.info("Best placement for k=%d has cost %.6g", k, best_cost)
    return PlacementResult(
        coordinates=tuple(coordinate for _, coordinate in best), cost=best_cost
    )


def find_closest_locations(
    regions: Sequence[Region],
    k: int,
    settings: SearchSettings | None = None,
) -> list[Coordinate]:
    """Coordinate-only form of ``find_optimal_placement``.

    Returns an empty list when no placement exists.
    """
    return list(find_optimal_placement(regions, k, settings).coordinates)
