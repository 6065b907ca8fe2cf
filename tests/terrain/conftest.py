"""Pytest configuration for terrain domain tests.

Domain tests build value objects directly; no files, no rasterio.
"""

from __future__ import annotations

import pytest

# Valid grid sizes small enough to enumerate exhaustively
SMALL_GRID_SIZES = (3, 5, 9, 17, 33)


@pytest.fixture(params=SMALL_GRID_SIZES)
def grid_size(request) -> int:
    """Each small valid grid size in turn."""
    return request.param
