"""Root pytest configuration for all tests.

Provides region fixtures shared by the geography and placement tests. Test
modules build ad-hoc regions with the helpers in tests/conftest_utils.py.
"""

import pytest

from domain.geography.value_objects import Region
from domain.placement.value_objects import SearchSettings, SearchStrategy
from tests.conftest_utils import make_regions


@pytest.fixture
def line_regions() -> list[Region]:
    """Three equally populated regions on the equator at lon -5, 0, 5."""
    return make_regions([(-5.0, 0.0, 1000), (0.0, 0.0, 1000), (5.0, 0.0, 1000)])


@pytest.fixture
def two_cluster_regions() -> list[Region]:
    """Two well-separated clusters of three equally populated regions."""
    return make_regions(
        [
            (-5.0, 0.0, 1000),
            (0.0, 0.0, 1000),
            (5.0, 0.0, 1000),
            (25.0, 0.0, 1000),
            (30.0, 0.0, 1000),
            (35.0, 0.0, 1000),
        ]
    )


@pytest.fixture
def sequential_settings() -> SearchSettings:
    return SearchSettings(strategy=SearchStrategy.SEQUENTIAL)


@pytest.fixture
def threaded_settings() -> SearchSettings:
    """Parallel strategy on threads: exercises chunking without process start-up."""
    return SearchSettings(
        strategy=SearchStrategy.PARALLEL, chunk_size=4, n_jobs=3, backend="threading"
    )
