"""County Placement Domain Layer.

This package contains the core business logic organized by bounded contexts:
- geography: Coordinates, regions, great-circle distance, mainland filtering
- placement: Distance cache, candidate enumeration, cost scoring, optimal
  placement search, nearest-location population tally
"""

# Imports alphabetized per project style (isort)
from domain import geography, placement

__all__ = ["geography", "placement"]
