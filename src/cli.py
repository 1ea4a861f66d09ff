"""Command-line front end.

Two modes over the county centroid dataset:

    county-placement find-closest -k 1 2
    county-placement count-closest-population --geoids 47185 32023

Loads regions through the JSON adapter, runs the domain services, and prints
one line per result followed by the elapsed time.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from pydantic import ValidationError

from domain.geography.repositories import RegionRepository
from domain.geography.value_objects import Coordinate, Region
from domain.placement.services import find_optimal_placement
from domain.placement.tally import count_closest_population
from domain.placement.value_objects import (
    DEFAULT_CHUNK_SIZE,
    SearchSettings,
    SearchStrategy,
)
from shared.reference_locations import DEFAULT_DATASET_PATH, REFERENCE_TALLY_GEOID_SETS
from src.infrastructure.geography import JsonCentroidRegionAdapter

DEFAULT_LOCATION_COUNTS = (1, 2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="county-placement",
        description="Choose population-weighted facility locations among county centroids.",
    )
    parser.add_argument(
        "--data",
        default=DEFAULT_DATASET_PATH,
        help=f"Path to county_centroids.json (default: {DEFAULT_DATASET_PATH})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="mode")

    find = subparsers.add_parser(
        "find-closest", help="Search for the optimal k locations"
    )
    find.add_argument(
        "-k",
        "--locations",
        type=int,
        nargs="+",
        default=list(DEFAULT_LOCATION_COUNTS),
        help="Location counts to search (default: 1 2)",
    )
    find.add_argument(
        "--strategy",
        choices=[s.value for s in SearchStrategy],
        default=SearchStrategy.PARALLEL.value,
    )
    find.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE)
    find.add_argument(
        "--jobs", type=int, default=-1, help="joblib worker count (-1 = all cores)"
    )

    count = subparsers.add_parser(
        "count-closest-population",
        help="Sum population nearest to each of a fixed set of counties",
    )
    count.add_argument(
        "--geoids",
        nargs="+",
        help="County identifiers; defaults to the reference sets",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _describe(coordinates: Sequence[Coordinate], regions: Sequence[Region]) -> str:
    geoid_by_coordinate = {r.coordinate: r.geoid for r in regions}
    return ", ".join(
        f"{c} [{geoid_by_coordinate.get(c, '?')}]" for c in coordinates
    )


def run_find_closest(
    regions: Sequence[Region], location_counts: Sequence[int], settings: SearchSettings
) -> None:
    for k in location_counts:
        result = find_optimal_placement(regions, k, settings)
        if result.is_feasible:
            print(f"{k} locations: {_describe(result.coordinates, regions)}")
        else:
            print(f"{k} locations: no solution")


def run_count_closest_population(
    regions: Sequence[Region], args: argparse.Namespace
) -> None:
    if args.geoids:
        geoid_sets = {f"{len(args.geoids)} locations": tuple(args.geoids)}
    else:
        geoid_sets = REFERENCE_TALLY_GEOID_SETS
    print("Counting population")
    for label, geoids in geoid_sets.items():
        totals = count_closest_population(regions, geoids)
        print(f"{label}: {totals}")


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.mode is None:
        args = parser.parse_args([*argv, "find-closest"])

    _configure_logging(args.verbose)

    settings = None
    if args.mode == "find-closest":
        try:
            settings = SearchSettings(
                strategy=SearchStrategy(args.strategy),
                chunk_size=args.chunk_size,
                n_jobs=args.jobs,
            )
        except ValidationError as e:
            parser.error(f"invalid search settings: {e.errors()[0]['msg']}")

    start = time.perf_counter()
    repository: RegionRepository = JsonCentroidRegionAdapter()
    regions = repository.load_regions(args.data)
    print(f"Got {len(regions)} counties")

    if settings is None:
        run_count_closest_population(regions, args)
    else:
        run_find_closest(regions, args.locations, settings)

    print(f"took {time.perf_counter() - start:.3f} secs")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
