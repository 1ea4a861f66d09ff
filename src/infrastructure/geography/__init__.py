"""Infrastructure adapters for the geography bounded context.

This module provides the infrastructure layer implementations for geography
operations, including loading county centroids from JSON files.
"""

from .centroids_adapter import JsonCentroidRegionAdapter

__all__ = ["JsonCentroidRegionAdapter"]
