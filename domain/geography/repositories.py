"""Domain Port(s) for Region I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import Region


class RegionRepository(Protocol):
    """Port for obtaining region lists from external sources.

    Implementations live in infrastructure (e.g., JSON centroid adapter).
    """

    def load_regions(self, file_path: Path | str) -> list[Region]:
        """Load regions, filtered to the mainland and indexed by position."""
        ...
