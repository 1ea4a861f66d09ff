"""Published results for the full mainland county dataset.

Single source of truth for reference placements used by:
- src/cli.py (default geoid sets for the population tally)
- tests/infrastructure/test_reference_dataset.py (real-data sanity check)

Coordinates are (longitude, latitude) exactly as they appear in the
`county_centroids.json` centroid strings, so they compare bit-exact with
loaded Region coordinates.
"""

from __future__ import annotations

# Default location of the dataset, relative to the working directory
DEFAULT_DATASET_PATH = "public/data/county_centroids.json"

# Optimal placements for k = 1, 2, 3 under the squared cost
PUBLISHED_PLACEMENTS: dict[int, tuple[tuple[float, float], ...]] = {
    1: ((-99.89793552425651, 38.08749756724239),),
    2: (
        (-85.45515018740984, 35.926337261802644),
        (-116.47005800749761, 38.03590529863756),
    ),
    3: (
        (-80.76115754448554, 41.317087095771384),
        (-116.47005800749761, 38.03590529863756),
        (-89.30411404608736, 29.90486022173568),
    ),
}

# Geoid sets whose population split is reported by the tally mode.
# "squared" sets are the counties at the published placements above (k = 2, 3);
# "linear" sets come from the earlier single-squared cost variant.
REFERENCE_TALLY_GEOID_SETS: dict[str, tuple[str, ...]] = {
    "2 locations": ("47185", "32023"),
    "3 locations": ("39155", "32023", "22087"),
    "2 linear locations": ("06071", "21207"),
    "3 linear locations": ("42073", "06071", "22063"),
}
