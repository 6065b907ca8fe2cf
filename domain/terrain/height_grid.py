"""Terrain Bounded Context - Mutable Working Grid.

HeightGrid is the only mutable structure in the domain. One generation
call owns it exclusively, writes it in traversal order and then freezes it
into a Heightfield Value Object for export.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from domain.terrain.coordinates import wrap_index
from domain.terrain.errors import HeightOverflowError, InternalIndexError
from domain.terrain.value_objects import GridSize, Heightfield


class HeightGrid:
    """Zero-seeded (grid_size - 1)^2 float64 grid addressed by logical coordinates."""

    def __init__(self, grid_size: GridSize) -> None:
        self.grid_size = grid_size.value
        self._data: NDArray[np.float64] = np.zeros(
            (grid_size.interior, grid_size.interior), dtype=np.float64
        )

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape  # type: ignore[return-value]

    def physical_index(self, x: int, y: int) -> tuple[int, int]:
        """Return 0-based array indices for a logical coordinate.

        Raises:
            InternalIndexError: If wrapping produced an index outside the grid
        """
        px = wrap_index(x, self.grid_size)
        py = wrap_index(y, self.grid_size)
        size = self.grid_size - 1
        if not (1 <= px <= size and 1 <= py <= size):
            raise InternalIndexError(
                f"Coordinate ({x}, {y}) wrapped to ({px}, {py}), outside [1, {size}]"
            )
        return (px - 1, py - 1)

    def height_at(self, x: int, y: int) -> float:
        return float(self._data[self.physical_index(x, y)])

    def set_height(self, x: int, y: int, value: float) -> None:
        self._data[self.physical_index(x, y)] = value

    def freeze(self) -> Heightfield:
        """Hand the grid off read-only (the Heightfield owns a copy).

        Raises:
            HeightOverflowError: If any cell overflowed to a non-finite value
        """
        if not np.isfinite(self._data).all():
            raise HeightOverflowError(
                f"{self.grid_size}x{self.grid_size} grid holds non-finite heights"
            )
        try:
            return Heightfield(data=self._data, grid_size=self.grid_size)
        except ValueError as e:
            raise InternalIndexError(f"Grid cannot be frozen: {e}") from e
